"""Create documents and document_versions tables

Revision ID: 0002
Revises: 0001
Create Date: 2026-09-28 14:20:43.000000+00:00

"""

from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = "0002"
down_revision: Union[str, Sequence[str], None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # is_public is JSONB because older rows hold booleans, the strings
    # 'true'/'false', or JSON null. The application normalizes all of them.
    op.execute("""
        CREATE TABLE documents (
            id UUID PRIMARY KEY,
            title TEXT NOT NULL,
            description TEXT,
            s3_key TEXT NOT NULL,
            content_text TEXT,
            created_by UUID NOT NULL REFERENCES users(id),
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ,
            is_public JSONB DEFAULT 'true'::jsonb,
            version_number INTEGER NOT NULL DEFAULT 1,
            filename TEXT,
            mime_type TEXT,
            file_size BIGINT,
            uploaded_by UUID REFERENCES users(id)
        )
    """)
    op.execute("CREATE INDEX idx_documents_created_by ON documents (created_by)")
    op.execute("CREATE INDEX idx_documents_created_at ON documents (created_at)")

    op.execute("""
        CREATE TABLE document_versions (
            id UUID PRIMARY KEY,
            document_id UUID NOT NULL REFERENCES documents(id) ON DELETE CASCADE,
            version_number INTEGER NOT NULL,
            s3_key TEXT NOT NULL,
            filename TEXT,
            mime_type TEXT,
            file_size BIGINT,
            uploaded_by UUID REFERENCES users(id),
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            UNIQUE (document_id, version_number)
        )
    """)
    op.execute(
        "CREATE INDEX idx_document_versions_document_id ON document_versions (document_id)"
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP TABLE IF EXISTS document_versions")
    op.execute("DROP TABLE IF EXISTS documents")
