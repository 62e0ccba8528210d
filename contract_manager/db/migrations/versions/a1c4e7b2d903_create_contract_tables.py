"""Create blueprint and contract tables

Revision ID: a1c4e7b2d903
Revises:
Create Date: 2026-10-19

Creates blueprints, blueprint_fields, contracts, contract_values and the
append-only contract_audit_logs table.
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "a1c4e7b2d903"
down_revision = None
branch_labels = None
depends_on = None

FIELD_TYPES = ("TEXT", "DATE", "SIGNATURE", "CHECKBOX")
CONTRACT_STATUSES = ("CREATED", "APPROVED", "SENT", "SIGNED", "LOCKED", "REVOKED")


def _status_enum() -> sa.Enum:
    return sa.Enum(
        *CONTRACT_STATUSES,
        native_enum=False,
        create_constraint=True,
    )


def upgrade() -> None:
    op.create_table(
        "blueprints",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_blueprints_created_at", "blueprints", ["created_at"])

    op.create_table(
        "blueprint_fields",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "blueprint_id",
            sa.String(length=36),
            sa.ForeignKey("blueprints.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "type",
            sa.Enum(
                *FIELD_TYPES,
                native_enum=False,
                create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column("label", sa.String(length=255), nullable=False),
        sa.Column("position_x", sa.Float, nullable=False, server_default="0"),
        sa.Column("position_y", sa.Float, nullable=False, server_default="0"),
        sa.Column("required", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("order_index", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_blueprint_fields_blueprint_id", "blueprint_fields", ["blueprint_id"]
    )

    op.create_table(
        "contracts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "blueprint_id",
            sa.String(length=36),
            sa.ForeignKey("blueprints.id"),
            nullable=False,
        ),
        sa.Column("status", _status_enum(), nullable=False, server_default="CREATED"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_contracts_blueprint_id", "contracts", ["blueprint_id"])
    op.create_index("ix_contracts_status", "contracts", ["status"])
    op.create_index("ix_contracts_created_at", "contracts", ["created_at"])
    op.create_index(
        "ix_contracts_blueprint_status", "contracts", ["blueprint_id", "status"]
    )

    op.create_table(
        "contract_values",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "contract_id",
            sa.String(length=36),
            sa.ForeignKey("contracts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "field_id",
            sa.String(length=36),
            sa.ForeignKey("blueprint_fields.id"),
            nullable=False,
        ),
        sa.Column("value", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint(
            "contract_id", "field_id", name="uq_contract_values_contract_field"
        ),
    )
    op.create_index(
        "ix_contract_values_contract_id", "contract_values", ["contract_id"]
    )
    op.create_index("ix_contract_values_field_id", "contract_values", ["field_id"])

    # contract_id has no FK: the trail outlives deleted contracts
    op.create_table(
        "contract_audit_logs",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("contract_id", sa.String(length=36), nullable=False),
        sa.Column("from_status", _status_enum(), nullable=False),
        sa.Column("to_status", _status_enum(), nullable=False),
        sa.Column("reason", sa.Text, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index(
        "ix_contract_audit_logs_contract_id", "contract_audit_logs", ["contract_id"]
    )
    op.create_index(
        "ix_contract_audit_logs_created_at", "contract_audit_logs", ["created_at"]
    )
    op.create_index(
        "ix_contract_audit_logs_contract_ts",
        "contract_audit_logs",
        ["contract_id", "created_at"],
    )


def downgrade() -> None:
    op.drop_table("contract_audit_logs")
    op.drop_table("contract_values")
    op.drop_table("contracts")
    op.drop_table("blueprint_fields")
    op.drop_table("blueprints")
