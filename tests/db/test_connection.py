"""Tests for connection settings and the transactional cursor."""

from unittest.mock import patch, MagicMock

import pytest

from knowledge.db.connection import get_db_cursor, get_sqlalchemy_database_url


class TestSqlalchemyUrl:
    @pytest.mark.parametrize(
        "url,expected",
        [
            ("postgresql://u:p@db:5432/kb", "postgresql+psycopg://u:p@db:5432/kb"),
            ("postgres://u:p@db/kb", "postgresql+psycopg://u:p@db/kb"),
            ("postgresql+psycopg://u@db/kb", "postgresql+psycopg://u@db/kb"),
        ],
    )
    def test_uses_psycopg_dialect(self, monkeypatch, url, expected):
        monkeypatch.setenv("DATABASE_URL", url)
        assert get_sqlalchemy_database_url() == expected


class TestGetDbCursor:
    @patch("knowledge.db.connection.psycopg.connect")
    def test_commits_and_closes(self, mock_connect: MagicMock, monkeypatch):
        monkeypatch.setenv("DB_CONNECT_TIMEOUT", "3")
        conn = mock_connect.return_value

        with get_db_cursor():
            pass

        kwargs = mock_connect.call_args.kwargs
        assert kwargs["connect_timeout"] == 3
        assert kwargs["application_name"] == "knowledge-api"
        conn.commit.assert_called_once()
        conn.rollback.assert_not_called()
        conn.close.assert_called_once()

    @patch("knowledge.db.connection.psycopg.connect")
    def test_rolls_back_on_error(self, mock_connect: MagicMock):
        conn = mock_connect.return_value

        with pytest.raises(RuntimeError):
            with get_db_cursor():
                raise RuntimeError("boom")

        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()
        conn.close.assert_called_once()
