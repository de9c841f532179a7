"""create super_admins table and seed the first super admin

Revision ID: 001
Revises:
Create Date: 2025-06-02 10:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from passlib.context import CryptContext

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def upgrade() -> None:
    op.create_table(
        "super_admins",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("status", sa.String(50), nullable=False, server_default="active"),
        sa.Column("failed_login_attempts", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("account_locked_until", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        sa.Column("password_reset_token", sa.String(255), nullable=True),
        sa.Column("password_reset_expires", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_super_admins_id", "super_admins", ["id"], unique=False)
    op.create_index("ix_super_admins_email", "super_admins", ["email"], unique=True)
    op.create_index("ix_super_admins_status", "super_admins", ["status"], unique=False)
    op.create_index(
        "ix_super_admins_password_reset_token", "super_admins", ["password_reset_token"], unique=False
    )

    # Get settings from environment (loaded by Alembic env.py)
    from directory_admin.core.config import load_settings

    settings = load_settings()
    connection = op.get_bind()

    # Bootstrap exactly once, keyed on the well-known email
    existing = connection.execute(
        sa.text("SELECT id FROM super_admins WHERE email = :email"),
        {"email": settings.first_super_admin_email},
    ).fetchone()
    if existing:
        return

    op.execute(
        sa.text(
            """
            INSERT INTO super_admins (email, password_hash, full_name, status, failed_login_attempts)
            VALUES (:email, :password_hash, :full_name, 'active', 0)
            """
        ).bindparams(
            email=settings.first_super_admin_email,
            password_hash=pwd_context.hash(settings.first_super_admin_password),
            full_name=settings.first_super_admin_name,
        )
    )


def downgrade() -> None:
    op.drop_index("ix_super_admins_password_reset_token", table_name="super_admins")
    op.drop_index("ix_super_admins_status", table_name="super_admins")
    op.drop_index("ix_super_admins_email", table_name="super_admins")
    op.drop_index("ix_super_admins_id", table_name="super_admins")
    op.drop_table("super_admins")
