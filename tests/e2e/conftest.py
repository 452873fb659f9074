import os
from pathlib import Path
from uuid import UUID
from typing import Iterator

import pytest
from testcontainers.postgres import PostgresContainer
from alembic.config import Config
from alembic import command
from fastapi.testclient import TestClient

from knowledge.models.user import Role

# Ensure allowed environment for env_loader
os.environ.setdefault("ENV", "dev")

ADMIN_ID = UUID("00000000-0000-0000-0000-0000000000a0")
EDITOR_ID = UUID("00000000-0000-0000-0000-0000000000e0")
VIEWER_ID = UUID("00000000-0000-0000-0000-0000000000f0")

_TOKENS: dict[str, tuple[UUID, str, Role]] = {
    "admin_token": (ADMIN_ID, "admin@example.com", "admin"),
    "editor_token": (EDITOR_ID, "editor@example.com", "editor"),
    "viewer_token": (VIEWER_ID, "viewer@example.com", "viewer"),
}


@pytest.fixture(scope="session")
def db_url() -> Iterator[str]:
    """Start a Postgres container, run migrations, and return the DB URL."""
    with PostgresContainer("postgres:16") as pg:
        raw_url = pg.get_connection_url()
        # Normalize to psycopg3-compatible URL if needed
        url = raw_url.replace("postgresql+psycopg2://", "postgresql://")
        os.environ["DATABASE_URL"] = url

        api_dir = Path(__file__).resolve().parents[2]
        alembic_cfg = Config(str(api_dir / "alembic.ini"))
        command.upgrade(alembic_cfg, "head")

        yield url


@pytest.fixture(scope="session")
def _seed_users(db_url: str) -> None:
    """Create one user per role. New logins would otherwise all be viewers."""
    from knowledge.db.users import create_user

    for user_id, email, role in _TOKENS.values():
        create_user(user_id, email, email.split("@")[0].title(), role=role)


@pytest.fixture(scope="session")
def _mock_oauth(_seed_users: None) -> Iterator[None]:
    """Accept the fixed test tokens; user lookup still goes to the database."""
    from knowledge.app import oauth

    original_validate = oauth.validate_jwt_token

    def mock_validate(token: str) -> dict[str, str] | None:
        if token not in _TOKENS:
            return None
        user_id, email, _role = _TOKENS[token]
        return {"sub": str(user_id), "email": email}

    oauth.validate_jwt_token = mock_validate  # type: ignore[assignment]

    yield

    oauth.validate_jwt_token = original_validate


def _client(token: str | None) -> TestClient:
    from knowledge.app.app import app

    client = TestClient(app)
    if token:
        client.headers.update({"Authorization": f"Bearer {token}"})
    return client


@pytest.fixture(scope="session")
def client(_mock_oauth: None) -> TestClient:
    """Unauthenticated test client (for testing auth requirements)."""
    return _client(None)


@pytest.fixture(scope="session")
def viewer_client(_mock_oauth: None) -> TestClient:
    return _client("viewer_token")


@pytest.fixture(scope="session")
def editor_client(_mock_oauth: None) -> TestClient:
    return _client("editor_token")


@pytest.fixture(scope="session")
def admin_client(_mock_oauth: None) -> TestClient:
    return _client("admin_token")
