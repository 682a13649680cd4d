"""
Shared test fixtures.

Environment overrides are applied before the application is imported
so the module-level settings pick them up.
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from eventspotter.interfaces.accounts.dependencies import (  # noqa: E402
    get_identity_provider,
    get_password_hasher,
    get_user_repository,
)
from eventspotter.interfaces.dependencies import (  # noqa: E402
    get_event_repository,
    get_saved_event_repository,
)
from eventspotter.main import create_app  # noqa: E402
from tests.fakes import (  # noqa: E402
    FakeEventRepository,
    FakeIdentityProvider,
    FakePasswordHasher,
    FakeSavedEventRepository,
    FakeUserRepository,
)


@pytest.fixture
def event_repo() -> FakeEventRepository:
    return FakeEventRepository()


@pytest.fixture
def saved_repo(event_repo: FakeEventRepository) -> FakeSavedEventRepository:
    return FakeSavedEventRepository(event_repo)


@pytest.fixture
def user_repo() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def identity() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def app(event_repo, saved_repo, user_repo, identity):
    """Application with every data store dependency replaced by a fake."""
    application = create_app()
    application.dependency_overrides[get_event_repository] = lambda: event_repo
    application.dependency_overrides[get_saved_event_repository] = lambda: saved_repo
    application.dependency_overrides[get_user_repository] = lambda: user_repo
    application.dependency_overrides[get_identity_provider] = lambda: identity
    application.dependency_overrides[get_password_hasher] = FakePasswordHasher
    return application


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def alice(user_repo: FakeUserRepository):
    return user_repo.add("alice", "alice@example.com", "hashed:Password123!")


@pytest.fixture
def bob(user_repo: FakeUserRepository):
    return user_repo.add("bob", "bob@example.com", "hashed:Password123!")


@pytest.fixture
def alice_headers(alice, identity: FakeIdentityProvider) -> dict[str, str]:
    return {"Authorization": f"Bearer {identity.grant(alice)}"}


@pytest.fixture
def bob_headers(bob, identity: FakeIdentityProvider) -> dict[str, str]:
    return {"Authorization": f"Bearer {identity.grant(bob)}"}
