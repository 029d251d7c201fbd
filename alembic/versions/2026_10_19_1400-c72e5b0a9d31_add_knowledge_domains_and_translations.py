"""add knowledge domains, topics and english answer text

Revision ID: c72e5b0a9d31
Revises: a1f3c9d2e7b4
Create Date: 2026-10-19 14:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "c72e5b0a9d31"
down_revision: Union[str, None] = "a1f3c9d2e7b4"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column(
            "created_at", sa.DateTime(), nullable=False, server_default=sa.text("now()")
        ),
        sa.Column(
            "updated_at", sa.DateTime(), nullable=False, server_default=sa.text("now()")
        ),
    ]


def upgrade() -> None:
    """Upgrade schema: domain/topic tables and their links from knowledge_answers."""
    op.create_table(
        "knowledge_domains",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("name_ar", sa.String(length=256), nullable=False),
        sa.Column("name_en", sa.String(length=256), nullable=True),
        sa.Column("description_ar", sa.Text(), nullable=True),
        sa.Column("description_en", sa.Text(), nullable=True),
        sa.Column("icon", sa.String(length=64), nullable=True),
        sa.Column("color", sa.String(length=32), nullable=False, server_default="green"),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )

    op.create_table(
        "knowledge_topics",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column(
            "domain_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("knowledge_domains.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title_ar", sa.String(length=256), nullable=False),
        sa.Column("title_en", sa.String(length=256), nullable=True),
        sa.Column("summary_ar", sa.Text(), nullable=True),
        sa.Column("summary_en", sa.Text(), nullable=True),
        sa.Column(
            "keywords",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column(
            "target_audience",
            sa.String(length=32),
            nullable=False,
            server_default="all",
        ),
        sa.Column("related_page_url", sa.String(length=512), nullable=True),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index(
        "ix_knowledge_topics_domain_id", "knowledge_topics", ["domain_id"]
    )

    op.add_column(
        "knowledge_answers",
        sa.Column(
            "domain_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("knowledge_domains.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )
    op.add_column(
        "knowledge_answers",
        sa.Column(
            "topic_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("knowledge_topics.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )
    op.add_column("knowledge_answers", sa.Column("question_en", sa.Text(), nullable=True))
    op.add_column("knowledge_answers", sa.Column("answer_en", sa.Text(), nullable=True))
    op.create_index(
        "ix_knowledge_answers_domain_id", "knowledge_answers", ["domain_id"]
    )
    op.create_index("ix_knowledge_answers_topic_id", "knowledge_answers", ["topic_id"])


def downgrade() -> None:
    """Drop domain/topic tables and the answer columns that reference them."""
    op.drop_index("ix_knowledge_answers_topic_id", table_name="knowledge_answers")
    op.drop_index("ix_knowledge_answers_domain_id", table_name="knowledge_answers")
    op.drop_column("knowledge_answers", "answer_en")
    op.drop_column("knowledge_answers", "question_en")
    op.drop_column("knowledge_answers", "topic_id")
    op.drop_column("knowledge_answers", "domain_id")
    op.drop_index("ix_knowledge_topics_domain_id", table_name="knowledge_topics")
    op.drop_table("knowledge_topics")
    op.drop_table("knowledge_domains")
