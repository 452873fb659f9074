"""Tests for the /files presigned URL endpoints."""

from unittest.mock import patch, MagicMock

from fastapi.testclient import TestClient

from knowledge.integrations.s3 import StorageNotConfiguredError
from tests.app.conftest import EDITOR, SIGNED_URL, TEST_BUCKET

DOC_ID = "11111111-1111-1111-1111-111111111111"


class TestUploadUrl:
    def test_issues_url_under_users_prefix(
        self, editor_client: TestClient, storage, boto_client: MagicMock
    ):
        response = editor_client.post(
            "/files/upload-url",
            json={"filename": "Q3 report.pdf", "mime_type": "application/pdf", "file_size": 1024},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["signed_url"] == SIGNED_URL
        assert data["bucket"] == TEST_BUCKET
        assert data["key"].startswith(f"uploads/{EDITOR.id}/")
        assert data["key"].endswith("-Q3_report.pdf")
        params = boto_client.generate_presigned_url.call_args.kwargs["Params"]
        assert params["Key"] == data["key"]
        assert params["ContentType"] == "application/pdf"

    def test_rejects_disallowed_type(self, editor_client: TestClient, storage):
        response = editor_client.post(
            "/files/upload-url",
            json={"filename": "setup.exe", "mime_type": "application/x-msdownload"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "File type not allowed"

    def test_rejects_oversized_file(self, editor_client: TestClient, storage):
        response = editor_client.post(
            "/files/upload-url",
            json={"filename": "a.pdf", "mime_type": "application/pdf", "file_size": 60 * 1024 * 1024},
        )
        assert response.status_code == 400

    @patch("knowledge.app.dependencies._get_storage")
    def test_missing_bucket_is_server_error(
        self, mock_get_storage: MagicMock, editor_client: TestClient
    ):
        mock_get_storage.side_effect = StorageNotConfiguredError("S3 bucket not configured")
        response = editor_client.post(
            "/files/upload-url",
            json={"filename": "a.pdf", "mime_type": "application/pdf"},
        )
        assert response.status_code == 500
        assert response.json()["detail"] == "S3 bucket not configured"


class TestDownloadUrl:
    @patch("knowledge.app.routers.files.get_document_by_id")
    def test_issues_url_with_original_filename(
        self,
        mock_get: MagicMock,
        viewer_client: TestClient,
        document_factory,
        storage,
        boto_client: MagicMock,
    ):
        mock_get.return_value = document_factory.make(
            {"s3_key": f"{TEST_BUCKET}/uploads/u/1700000000000-handbook.pdf"}
        )

        response = viewer_client.get("/files/download-url", params={"id": DOC_ID})

        assert response.status_code == 200
        assert response.json() == {"url": SIGNED_URL, "filename": "handbook.pdf"}
        params = boto_client.generate_presigned_url.call_args.kwargs["Params"]
        assert params["Key"] == "uploads/u/1700000000000-handbook.pdf"

    @patch("knowledge.app.routers.files.get_document_by_id")
    def test_hidden_document_is_not_found(
        self, mock_get: MagicMock, viewer_client: TestClient, document_factory, storage
    ):
        mock_get.return_value = document_factory.make({"visibility": "private"})

        response = viewer_client.get("/files/download-url", params={"id": DOC_ID})

        assert response.status_code == 404
        assert response.json()["detail"] == "Document not found"
