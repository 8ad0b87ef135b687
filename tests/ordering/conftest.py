import pytest


@pytest.fixture(autouse=True)
def _ctx(ordering_bed, clean_domains):
    """Push the ordering domain context before each test."""
    with ordering_bed.domain_context():
        yield
