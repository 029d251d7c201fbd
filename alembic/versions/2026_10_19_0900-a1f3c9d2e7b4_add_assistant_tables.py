"""add assistant tables

Revision ID: a1f3c9d2e7b4
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "a1f3c9d2e7b4"
down_revision: Union[str, None] = None
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
    """Upgrade schema: sessions, messages, knowledge base, backlog and metrics."""
    op.create_table(
        "conversation_sessions",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("user_id", sa.String(length=256), nullable=True),
        sa.Column("session_fingerprint", sa.String(length=64), nullable=True),
        sa.Column("audience", sa.String(length=32), nullable=False),
        sa.Column("current_page", sa.String(length=512), nullable=True),
        sa.Column("language", sa.String(length=8), nullable=False),
        sa.Column("caller_context", postgresql.JSONB(), nullable=True),
        sa.Column(
            "is_active", sa.Boolean(), nullable=False, server_default=sa.true()
        ),
        sa.Column(
            "started_at", sa.DateTime(), nullable=False, server_default=sa.text("now()")
        ),
        sa.Column(
            "last_activity_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "user_id IS NULL OR session_fingerprint IS NULL",
            name="ck_conversation_sessions_single_identity",
        ),
    )
    op.create_index(
        "ix_conversation_sessions_user_id", "conversation_sessions", ["user_id"]
    )
    op.create_index(
        "ix_conversation_sessions_session_fingerprint",
        "conversation_sessions",
        ["session_fingerprint"],
    )
    op.create_index(
        "ix_conversation_sessions_last_activity_at",
        "conversation_sessions",
        ["last_activity_at"],
    )

    op.create_table(
        "conversation_messages",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("session_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("sequence", sa.Integer(), nullable=False),
        sa.Column("message_type", sa.String(length=16), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("intent_detected", sa.String(length=128), nullable=True),
        sa.Column("confidence_score", sa.Float(), nullable=True),
        sa.Column("matched_answer_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("response_time_ms", sa.Integer(), nullable=True),
        sa.Column("was_helpful", sa.Boolean(), nullable=True),
        sa.Column("feedback_comment", sa.Text(), nullable=True),
        sa.Column("metadata", postgresql.JSONB(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(), nullable=False, server_default=sa.text("now()")
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["session_id"], ["conversation_sessions.id"], ondelete="CASCADE"
        ),
    )
    op.create_index(
        "ix_conversation_messages_session_sequence",
        "conversation_messages",
        ["session_id", "sequence"],
        unique=True,
    )
    op.create_index(
        "ix_conversation_messages_created_at", "conversation_messages", ["created_at"]
    )

    op.create_table(
        "knowledge_answers",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("question", sa.Text(), nullable=False),
        sa.Column("answer", sa.Text(), nullable=False),
        sa.Column(
            "intent_tags",
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
        sa.Column(
            "page_contexts",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column(
            "is_approved", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("usage_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("helpful_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_knowledge_answers_target_audience", "knowledge_answers", ["target_audience"]
    )

    op.create_table(
        "sensitive_scenarios",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column(
            "trigger_keywords",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("response_template", sa.Text(), nullable=False),
        sa.Column(
            "requires_escalation",
            sa.Boolean(),
            nullable=False,
            server_default=sa.true(),
        ),
        sa.Column(
            "notify_operators", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column(
            "redirect_to_support",
            sa.Boolean(),
            nullable=False,
            server_default=sa.true(),
        ),
        sa.Column("priority", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_sensitive_scenarios_name"),
    )

    op.create_table(
        "unanswered_questions",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("question", sa.Text(), nullable=False),
        sa.Column("audience", sa.String(length=32), nullable=False),
        sa.Column("current_page", sa.String(length=512), nullable=True),
        sa.Column("caller_context", postgresql.JSONB(), nullable=True),
        sa.Column("session_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="new"),
        sa.Column("frequency", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("reviewed_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_unanswered_questions_status_frequency",
        "unanswered_questions",
        ["status", "frequency"],
    )

    op.create_table(
        "intelligence_metrics",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("metric_date", sa.Date(), nullable=False),
        sa.Column("total_conversations", sa.Integer(), nullable=False),
        sa.Column("total_questions", sa.Integer(), nullable=False),
        sa.Column("answered_successfully", sa.Integer(), nullable=False),
        sa.Column("unanswered_questions", sa.Integer(), nullable=False),
        sa.Column("escalated_questions", sa.Integer(), nullable=False),
        sa.Column("avg_confidence_score", sa.Float(), nullable=False),
        sa.Column("avg_response_time_ms", sa.Float(), nullable=False),
        sa.Column("helpful_count", sa.Integer(), nullable=False),
        sa.Column("unhelpful_count", sa.Integer(), nullable=False),
        sa.Column("satisfaction_rate", sa.Float(), nullable=False),
        sa.Column("new_answers_count", sa.Integer(), nullable=False),
        sa.Column("new_topics_count", sa.Integer(), nullable=False),
        sa.Column("unique_users", sa.Integer(), nullable=False),
        sa.Column("returning_users", sa.Integer(), nullable=False),
        sa.Column(
            "computed_at", sa.DateTime(), nullable=False, server_default=sa.text("now()")
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_intelligence_metrics_metric_date",
        "intelligence_metrics",
        ["metric_date"],
        unique=True,
    )


def downgrade() -> None:
    """Drop all assistant tables."""
    op.drop_index(
        "ix_intelligence_metrics_metric_date", table_name="intelligence_metrics"
    )
    op.drop_table("intelligence_metrics")
    op.drop_index(
        "ix_unanswered_questions_status_frequency", table_name="unanswered_questions"
    )
    op.drop_table("unanswered_questions")
    op.drop_table("sensitive_scenarios")
    op.drop_index(
        "ix_knowledge_answers_target_audience", table_name="knowledge_answers"
    )
    op.drop_table("knowledge_answers")
    op.drop_index(
        "ix_conversation_messages_created_at", table_name="conversation_messages"
    )
    op.drop_index(
        "ix_conversation_messages_session_sequence",
        table_name="conversation_messages",
    )
    op.drop_table("conversation_messages")
    op.drop_index(
        "ix_conversation_sessions_last_activity_at",
        table_name="conversation_sessions",
    )
    op.drop_index(
        "ix_conversation_sessions_session_fingerprint",
        table_name="conversation_sessions",
    )
    op.drop_index(
        "ix_conversation_sessions_user_id", table_name="conversation_sessions"
    )
    op.drop_table("conversation_sessions")
