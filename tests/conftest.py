import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before any domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


# ---------------------------------------------------------------------------
# Domains
# ---------------------------------------------------------------------------
@pytest.fixture(scope="session")
def identity_bed():
    from identity.domain import identity

    bed = DomainFixture(identity)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


def _reset(domain):
    with domain.domain_context():
        for _, provider in domain.providers.items():
            provider._data_reset()

        for _, broker in domain.brokers.items():
            broker._data_reset()

        domain.event_store.store._data_reset()


@pytest.fixture()
def clean_domains(identity_bed, ordering_bed):
    """Empty every store of both domains after the test."""
    yield

    from identity.domain import identity
    from ordering.domain import ordering

    _reset(identity)
    _reset(ordering)


# ---------------------------------------------------------------------------
# HTTP surface
# ---------------------------------------------------------------------------
@pytest.fixture()
def api_app(identity_bed, ordering_bed):
    """The API wired the same way as ``app.py``, over the test domains."""
    from fastapi import FastAPI
    from identity.api import auth_router, users_router
    from identity.domain import identity
    from ordering.api import order_router, tracking_router
    from ordering.domain import ordering

    from shared.errors import register_exception_handlers
    from shared.web import install_domain_context

    app = FastAPI()
    install_domain_context(
        app,
        {"/auth": identity, "/users": identity, "/orders": ordering, "/track": ordering},
    )
    register_exception_handlers(app)
    for router in (auth_router, users_router, order_router, tracking_router):
        app.include_router(router)
    return app


@pytest.fixture()
def api(api_app):
    from fastapi.testclient import TestClient

    return TestClient(api_app)


@pytest.fixture()
def make_account(identity_bed, clean_domains):
    """Register an account directly in the identity domain and sign it in.

    Returns ``{"user_id", "email", "token", "headers"}``.
    """
    from identity.domain import identity
    from identity.user.registration import RegisterUser
    from identity.user.roles import ChangeRole
    from identity.user.sessions import StartSession
    from werkzeug.security import generate_password_hash

    counter = iter(range(1, 1000))

    def _make(email=None, role="user", password="secret123"):
        email = email or f"shopper{next(counter)}@example.com"
        with identity.domain_context():
            user_id = identity.process(
                RegisterUser(email=email, password_hash=generate_password_hash(password), display_name="Shopper"),
                asynchronous=False,
            )
            if role != "user":
                identity.process(ChangeRole(user_id=user_id, role=role), asynchronous=False)
            token = identity.process(StartSession(user_id=user_id), asynchronous=False)
        return {
            "user_id": user_id,
            "email": email,
            "token": token,
            "headers": {"Authorization": f"Bearer {token}"},
        }

    return _make
