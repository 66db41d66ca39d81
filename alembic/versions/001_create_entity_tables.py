"""Create dental and financial entity tables

Revision ID: 001
Revises: None
Create Date: 2026-10-16 00:00:00.000000+00:00

What:  One table per entity, each keyed by a string `id`.
How:   No foreign keys and no secondary indexes; references between
       entities are plain strings and lookups are full scans.

Rollback: downgrade() drops every table (destructive, all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _item_columns():
    return [
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("created_at", sa.String(40), nullable=False, server_default=""),
        sa.Column("updated_at", sa.String(40), nullable=False, server_default=""),
    ]


def _text(name: str, length: int = 255) -> sa.Column:
    return sa.Column(name, sa.String(length), nullable=False, server_default="")


def upgrade() -> None:
    # ── Dental module ─────────────────────────────────────────────────────
    op.create_table(
        "dentists",
        *_item_columns(),
        _text("name"),
        _text("email"),
        _text("phone", 64),
        _text("cro", 64),
        _text("country", 128),
        _text("specialty"),
    )
    op.create_table(
        "patients",
        *_item_columns(),
        _text("name"),
        _text("email"),
        _text("phone", 64),
        _text("date_of_birth", 32),
        sa.Column("medical_notes", sa.Text(), nullable=False, server_default=""),
    )
    op.create_table(
        "procedures",
        *_item_columns(),
        _text("name"),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        _text("price", 32),
        _text("duration", 32),
    )
    op.create_table(
        "appointments",
        *_item_columns(),
        _text("dentist_id", 64),
        _text("patient_id", 64),
        _text("procedure_id", 64),
        _text("date_time", 40),
        _text("duration", 32),
        _text("status", 50),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
    )

    # ── Financial module ──────────────────────────────────────────────────
    op.create_table(
        "expenses",
        *_item_columns(),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("amount", sa.Float(), nullable=False, server_default="0"),
        _text("category", 32),
        sa.Column("date", sa.Date(), nullable=True),
        _text("supplier"),
        _text("invoice_id", 64),
    )
    op.create_table(
        "revenues",
        *_item_columns(),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("amount", sa.Float(), nullable=False, server_default="0"),
        _text("patient_id", 64),
        _text("procedure_id", 64),
        _text("appointment_id", 64),
        _text("payment_method", 32),
        _text("payment_status", 32),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("paid_date", sa.Date(), nullable=True),
        _text("invoice_id", 64),
    )
    op.create_table(
        "invoices",
        *_item_columns(),
        _text("number", 64),
        _text("type", 32),
        _text("status", 32),
        _text("patient_id", 64),
        _text("patient_name"),
        _text("patient_email"),
        sa.Column("items", sa.JSON(), nullable=False),
        sa.Column("subtotal", sa.Float(), nullable=False, server_default="0"),
        sa.Column("tax_amount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("total_amount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("issue_date", sa.Date(), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
    )


def downgrade() -> None:
    for table in (
        "invoices",
        "revenues",
        "expenses",
        "appointments",
        "procedures",
        "patients",
        "dentists",
    ):
        op.drop_table(table)
