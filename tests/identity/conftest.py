import pytest


@pytest.fixture(autouse=True)
def _ctx(identity_bed, clean_domains):
    """Push the identity domain context before each test."""
    with identity_bed.domain_context():
        yield
