from typing import Any, Iterator
from unittest.mock import MagicMock
from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from knowledge.app import oauth
from knowledge.app.app import app
from knowledge.app.dependencies import storage_client, optional_storage_client
from knowledge.integrations.s3 import S3Client
from knowledge.models import User
from tests._factories import UserFactory

TEST_BUCKET = "docs-bucket"
SIGNED_URL = "https://docs-bucket.s3.amazonaws.com/signed?X-Amz-Signature=abc"

_factory = UserFactory()
ADMIN = _factory.admin()
EDITOR = _factory.editor()
VIEWER = _factory.viewer()
OTHER_EDITOR = _factory.make(
    {
        "id": UUID("00000000-0000-0000-0000-0000000000e2"),
        "email": "other.editor@example.com",
        "full_name": "Otto Editor",
        "role": "editor",
    }
)

_USERS_BY_TOKEN: dict[str, User] = {
    "admin_token": ADMIN,
    "editor_token": EDITOR,
    "viewer_token": VIEWER,
    "other_editor_token": OTHER_EDITOR,
}


@pytest.fixture(autouse=True)
def _mock_oauth(monkeypatch) -> None:
    """Accept the fixed test tokens without touching the identity provider or DB."""
    users_by_id = {user.id: user for user in _USERS_BY_TOKEN.values()}

    def mock_validate(token: str) -> dict[str, Any] | None:
        user = _USERS_BY_TOKEN.get(token)
        if user is None:
            return None
        return {"sub": str(user.id), "email": user.email, "name": user.full_name}

    def mock_get_or_create_user(
        user_id: UUID, email: str | None, full_name: str | None
    ) -> User:
        return users_by_id[user_id]

    monkeypatch.setattr(oauth, "validate_jwt_token", mock_validate)
    monkeypatch.setattr(oauth, "get_or_create_user", mock_get_or_create_user)


def _client_with_token(token: str) -> TestClient:
    client = TestClient(app)
    client.headers.update({"Authorization": f"Bearer {token}"})
    return client


@pytest.fixture
def client() -> TestClient:
    """Unauthenticated test client (for testing auth requirements)."""
    return TestClient(app)


@pytest.fixture
def viewer_client() -> TestClient:
    return _client_with_token("viewer_token")


@pytest.fixture
def editor_client() -> TestClient:
    return _client_with_token("editor_token")


@pytest.fixture
def other_editor_client() -> TestClient:
    return _client_with_token("other_editor_token")


@pytest.fixture
def admin_client() -> TestClient:
    return _client_with_token("admin_token")


@pytest.fixture
def boto_client() -> MagicMock:
    boto_client = MagicMock()
    boto_client.generate_presigned_url.return_value = SIGNED_URL
    return boto_client


@pytest.fixture
def storage(boto_client: MagicMock) -> Iterator[S3Client]:
    """Route storage dependencies to a client backed by a mocked boto3 client."""
    storage = S3Client(bucket=TEST_BUCKET, _client=boto_client)
    app.dependency_overrides[storage_client] = lambda: storage
    app.dependency_overrides[optional_storage_client] = lambda: storage
    yield storage
    app.dependency_overrides.pop(storage_client, None)
    app.dependency_overrides.pop(optional_storage_client, None)


@pytest.fixture
def no_storage() -> Iterator[None]:
    """Behave as if no bucket is configured."""
    app.dependency_overrides[optional_storage_client] = lambda: None
    yield
    app.dependency_overrides.pop(optional_storage_client, None)
