"""Tests for authentication and the 403 mapping of permission denials."""

from unittest.mock import patch, MagicMock

import pytest
from fastapi.testclient import TestClient


class TestAuthentication:
    def test_missing_token_is_rejected(self, client: TestClient):
        response = client.get("/documents")
        assert response.status_code == 401
        assert "Bearer" in response.headers["WWW-Authenticate"]

    def test_invalid_token_is_rejected(self, client: TestClient):
        response = client.get(
            "/documents", headers={"Authorization": "Bearer invalid_token"}
        )
        assert response.status_code == 401

    def test_health_endpoint_no_auth(self, client: TestClient):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_verify_returns_identity(self, editor_client: TestClient):
        response = editor_client.get("/auth/verify")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "authenticated"
        assert data["role"] == "editor"
        assert data["email"] == "editor@example.com"

    def test_environment(self, viewer_client: TestClient):
        response = viewer_client.get("/environment")
        assert response.status_code == 200
        assert response.json() == {"environment": "dev"}


class TestPermissionDenials:
    @pytest.mark.parametrize(
        "method,path,body",
        [
            ("POST", "/documents", {"title": "T", "s3_key": "k"}),
            ("POST", "/files/upload-url", {"filename": "a.pdf", "mime_type": "application/pdf"}),
            ("POST", "/tools", {"name": "X", "url": "https://x.com"}),
            ("POST", "/email-templates", {"name": "N", "subject": "S", "body": "B"}),
            ("GET", "/users", None),
        ],
    )
    def test_viewer_is_forbidden(self, method, path, body, viewer_client: TestClient):
        kwargs = {"json": body} if body else {}
        response = viewer_client.request(method, path, **kwargs)  # type: ignore[arg-type]
        assert response.status_code == 403
        assert "capability" in response.json()

    @patch("knowledge.app.routers.documents.get_document_by_id")
    def test_editor_cannot_delete(self, mock_get: MagicMock, editor_client: TestClient):
        response = editor_client.delete("/documents/11111111-1111-1111-1111-111111111111")
        assert response.status_code == 403
        assert response.json() == {
            "detail": "Permission denied: can_delete required",
            "capability": "can_delete",
        }
        mock_get.assert_not_called()
