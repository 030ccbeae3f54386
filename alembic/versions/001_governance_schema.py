"""Governance schema: organizations, admin messages, audit logs, incidents

Revision ID: 001
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import ARRAY, JSONB

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "organizations",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("country", sa.String(100)),
        sa.Column("region", sa.String(100)),
        sa.Column("status", sa.String(50), nullable=False, server_default="pending"),
        sa.Column("compliance_status", sa.String(50), nullable=False, server_default="not_submitted"),
        *_timestamps(),
    )
    op.create_index("ix_organizations_country", "organizations", ["country"])
    op.create_index("ix_organizations_region", "organizations", ["region"])

    op.create_table(
        "admin_messages",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("audience", sa.String(50), nullable=False),
        sa.Column("target_countries", ARRAY(sa.String), nullable=False, server_default="{}"),
        sa.Column("target_regions", ARRAY(sa.String), nullable=False, server_default="{}"),
        sa.Column("target_organizations", ARRAY(sa.String), nullable=False, server_default="{}"),
        sa.Column("target_roles", ARRAY(sa.String), nullable=False, server_default="{}"),
        sa.Column("delivery_channels", ARRAY(sa.String), nullable=False, server_default="{}"),
        sa.Column("sender_id", sa.String(64), nullable=False),
        sa.Column("sender_name", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("scheduled_for", sa.DateTime(timezone=True)),
        sa.Column("sent_at", sa.DateTime(timezone=True)),
        sa.Column("read_by", ARRAY(sa.String), nullable=False, server_default="{}"),
    )
    op.create_index("ix_admin_messages_sent_at", "admin_messages", ["sent_at"])
    op.create_index("ix_admin_messages_scheduled_for", "admin_messages", ["scheduled_for"])

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("user_name", sa.String(255), nullable=False),
        sa.Column("user_role", sa.String(50), nullable=False),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("target_id", sa.String(64)),
        sa.Column("target_type", sa.String(50)),
        sa.Column("target_name", sa.String(255)),
        sa.Column("metadata", JSONB),
        sa.Column("ip_address", sa.String(45)),
        sa.Column("user_agent", sa.String(500)),
        sa.Column("timestamp", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_audit_logs_timestamp", "audit_logs", ["timestamp"])
    op.create_index("ix_audit_logs_user_id", "audit_logs", ["user_id"])
    op.create_index("ix_audit_logs_target", "audit_logs", ["target_type", "target_id"])
    op.create_index("ix_audit_logs_action", "audit_logs", ["action"])

    # Audit entries are append-only at the database level too
    op.execute("""
        CREATE FUNCTION audit_logs_immutable() RETURNS trigger AS $$
        BEGIN
            RAISE EXCEPTION 'audit_logs rows are immutable';
        END;
        $$ LANGUAGE plpgsql;
    """)
    op.execute("""
        CREATE TRIGGER audit_logs_no_update_delete
        BEFORE UPDATE OR DELETE ON audit_logs
        FOR EACH ROW EXECUTE FUNCTION audit_logs_immutable();
    """)

    op.create_table(
        "incidents",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("organization_id", sa.String(64)),
        sa.Column("organization_country", sa.String(100)),
        sa.Column("organization_region", sa.String(100)),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("priority", sa.String(50), nullable=False, server_default="medium"),
        sa.Column("status", sa.String(50), nullable=False, server_default="open"),
        sa.Column("minors_involved", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("reported_by", sa.String(64), nullable=False),
        sa.Column("assigned_to", sa.String(64)),
        sa.Column("assigned_to_name", sa.String(255)),
        sa.Column("notes", JSONB, nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("resolved_at", sa.DateTime(timezone=True)),
        *_timestamps(),
    )
    op.create_index("ix_incidents_organization_id", "incidents", ["organization_id"])
    op.create_index("ix_incidents_status", "incidents", ["status"])


def downgrade() -> None:
    op.drop_table("incidents")
    op.execute("DROP TRIGGER IF EXISTS audit_logs_no_update_delete ON audit_logs;")
    op.execute("DROP FUNCTION IF EXISTS audit_logs_immutable();")
    op.drop_table("audit_logs")
    op.drop_table("admin_messages")
    op.drop_table("organizations")
