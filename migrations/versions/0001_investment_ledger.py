"""Investment assets and monthly ledger entries.

Revision ID: 0001_investment_ledger
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_investment_ledger"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "investment_assets",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("starting_balance", sa.Numeric(19, 4), nullable=False),
        sa.Column("starting_month", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "ledger_entries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "investment_id",
            sa.Integer(),
            sa.ForeignKey("investment_assets.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("month", sa.Date(), nullable=False),
        sa.Column("actual_return_rate", sa.Numeric(9, 4), nullable=False),
        sa.Column("inflation_rate", sa.Numeric(9, 4), nullable=False),
        sa.Column("contribution", sa.Numeric(19, 4), nullable=False),
        sa.Column("closing_balance", sa.Numeric(19, 4), nullable=False),
        sa.Column("notes", sa.String(length=500), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint(
            "investment_id", "month",
            name="uq_ledger_entries_investment_month",
        ),
    )
    op.create_index(
        "ix_ledger_entries_investment_id",
        "ledger_entries",
        ["investment_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_ledger_entries_investment_id", table_name="ledger_entries")
    op.drop_table("ledger_entries")
    op.drop_table("investment_assets")
