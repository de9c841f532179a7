"""create admin_password_reset_tokens table

Revision ID: 003
Revises: 002
Create Date: 2025-06-09 14:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "admin_password_reset_tokens",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("token_hash", sa.String(64), nullable=False),
        sa.Column("user_type", sa.String(50), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("used", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "user_type IN ('super_admin', 'admin')", name="ck_admin_password_reset_tokens_user_type"
        ),
    )
    op.create_index(
        "ix_admin_password_reset_tokens_id", "admin_password_reset_tokens", ["id"], unique=False
    )
    op.create_index(
        "ix_admin_password_reset_tokens_email", "admin_password_reset_tokens", ["email"], unique=False
    )
    op.create_index(
        "ix_admin_password_reset_tokens_token_hash",
        "admin_password_reset_tokens",
        ["token_hash"],
        unique=True,
    )


def downgrade() -> None:
    op.drop_index("ix_admin_password_reset_tokens_token_hash", table_name="admin_password_reset_tokens")
    op.drop_index("ix_admin_password_reset_tokens_email", table_name="admin_password_reset_tokens")
    op.drop_index("ix_admin_password_reset_tokens_id", table_name="admin_password_reset_tokens")
    op.drop_table("admin_password_reset_tokens")
