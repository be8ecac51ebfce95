"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


registration_status = sa.Enum(
    "PENDING", "CONFIRMED", "WAITLISTED", "CANCELLED",
    name="registration_status_enum", create_constraint=True,
)
payment_method = sa.Enum(
    "CARD", "BANK", "CASH", "CHECK", "OTHER",
    name="payment_method_enum", create_constraint=True,
)
payment_status = sa.Enum(
    "PENDING", "COMPLETED",
    name="payment_status_enum", create_constraint=True,
)


def upgrade() -> None:
    op.create_table(
        "programs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("season", sa.String(100), nullable=True),
        sa.Column("fee", sa.Numeric(10, 2), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=True),
        sa.Column("registration_open_at", sa.DateTime(), nullable=False),
        sa.Column("registration_close_at", sa.DateTime(), nullable=False),
        sa.Column("starts_at", sa.DateTime(), nullable=False),
        sa.Column("ends_at", sa.DateTime(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "players",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("organization", sa.String(200), nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("medical_alerts", sa.Text(), nullable=True),
        sa.Column("emergency_contact_name", sa.String(200), nullable=True),
        sa.Column("emergency_contact_phone", sa.String(50), nullable=True),
        sa.Column("emergency_contact_relation", sa.String(100), nullable=True),
        sa.Column("parent_guardian_name", sa.String(200), nullable=True),
        sa.Column("parent_guardian_email", sa.String(255), nullable=True),
        sa.Column("parent_guardian_phone", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "teams",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("organization", sa.String(200), nullable=False),
        sa.Column("division", sa.String(100), nullable=True),
        sa.Column("age_group", sa.String(100), nullable=True),
        sa.Column("skill_level", sa.String(100), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "roster_entries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("team_id", sa.Integer(), sa.ForeignKey("teams.id"), nullable=False),
        sa.Column("player_id", sa.Integer(), sa.ForeignKey("players.id"), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("jersey_number", sa.Integer(), nullable=True),
        sa.Column("position", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint(
            "team_id", "player_id", "start_date",
            name="uq_roster_team_player_start",
        ),
    )
    op.create_index("ix_roster_entries_team_id", "roster_entries", ["team_id"])
    op.create_index("ix_roster_entries_player_id", "roster_entries", ["player_id"])

    op.create_table(
        "registrations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("player_id", sa.Integer(), sa.ForeignKey("players.id"), nullable=False),
        sa.Column("program_id", sa.Integer(), sa.ForeignKey("programs.id"), nullable=False),
        sa.Column("status", registration_status, nullable=False),
        sa.Column("amount_paid", sa.Numeric(10, 2), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint(
            "player_id", "program_id",
            name="uq_registration_player_program",
        ),
    )
    op.create_index("ix_registrations_player_id", "registrations", ["player_id"])
    op.create_index("ix_registrations_program_id", "registrations", ["program_id"])

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "registration_id", sa.Integer(),
            sa.ForeignKey("registrations.id"), nullable=False,
        ),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("method", payment_method, nullable=False),
        sa.Column("status", payment_status, nullable=False),
        sa.Column("gateway_transaction_id", sa.String(255), nullable=True),
        sa.Column("processed_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_payments_registration_id", "payments", ["registration_id"])
    op.create_index(
        "ix_payments_gateway_transaction_id", "payments",
        ["gateway_transaction_id"], unique=True,
    )

    op.create_table(
        "audit_log",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("event_type", sa.String(100), nullable=False),
        sa.Column("entity_id", sa.Integer(), nullable=True),
        sa.Column("details", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_audit_log_entity_id", "audit_log", ["entity_id"])


def downgrade() -> None:
    op.drop_index("ix_audit_log_entity_id", table_name="audit_log")
    op.drop_table("audit_log")
    op.drop_index("ix_payments_gateway_transaction_id", table_name="payments")
    op.drop_index("ix_payments_registration_id", table_name="payments")
    op.drop_table("payments")
    op.drop_index("ix_registrations_program_id", table_name="registrations")
    op.drop_index("ix_registrations_player_id", table_name="registrations")
    op.drop_table("registrations")
    op.drop_index("ix_roster_entries_player_id", table_name="roster_entries")
    op.drop_index("ix_roster_entries_team_id", table_name="roster_entries")
    op.drop_table("roster_entries")
    op.drop_table("teams")
    op.drop_table("players")
    op.drop_table("programs")
    payment_status.drop(op.get_bind(), checkfirst=True)
    payment_method.drop(op.get_bind(), checkfirst=True)
    registration_status.drop(op.get_bind(), checkfirst=True)
