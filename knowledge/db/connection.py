"""Postgres access for the knowledge API.

Every database function opens its own short-lived connection through
`get_db_cursor`; there is no pool. DATABASE_URL is required. DB_CONNECT_TIMEOUT
(seconds, default 10) bounds how long a request waits for the server.
Connections identify themselves as `knowledge-api` in pg_stat_activity.
"""

import os
from contextlib import contextmanager
from typing import Iterator

import psycopg

APPLICATION_NAME = "knowledge-api"
DEFAULT_CONNECT_TIMEOUT_SECONDS = 10


def get_database_url() -> str:
    return os.environ["DATABASE_URL"]


def get_connect_timeout() -> int:
    return int(os.getenv("DB_CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT_SECONDS))


def get_sqlalchemy_database_url() -> str:
    """The database URL with the psycopg 3 dialect, for Alembic's engine."""
    url = get_database_url()
    for scheme in ("postgresql://", "postgres://"):
        if url.startswith(scheme):
            return "postgresql+psycopg://" + url[len(scheme) :]
    return url


@contextmanager
def get_db_connection() -> Iterator[psycopg.Connection]:
    """Open a connection for one unit of work. The caller manages the transaction."""
    conn = psycopg.connect(
        get_database_url(),
        connect_timeout=get_connect_timeout(),
        application_name=APPLICATION_NAME,
    )
    try:
        yield conn
    finally:
        conn.close()


@contextmanager
def get_db_cursor() -> Iterator[psycopg.Cursor]:
    """A cursor in its own transaction: committed if the block succeeds, rolled back if it raises."""
    with get_db_connection() as conn:
        with conn.cursor() as cursor:
            try:
                yield cursor
                conn.commit()
            except Exception:
                conn.rollback()
                raise
