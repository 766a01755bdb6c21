"""contact messages, feedback and admin users

Revision ID: 0002_messages_and_admins
Revises: 0001_initial
Create Date: 2025-11-09 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0002_messages_and_admins"
down_revision = "0001_initial"
branch_labels = None
depends_on = None


def upgrade() -> None:
    message_status = sa.Enum("new", "replied", name="contactmessagestatus")
    op.create_table(
        "contact_messages",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("status", message_status, server_default="new"),
        sa.Column("admin_reply", sa.Text()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("replied_at", sa.DateTime(timezone=True)),
    )

    op.create_table(
        "feedback",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_feedback_rating_range"),
    )

    admin_role = sa.Enum("admin", "manager", "viewer", name="adminrole")
    op.create_table(
        "admin_users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("login", sa.String(length=64), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", admin_role, server_default="viewer"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("last_login_at", sa.DateTime(timezone=True)),
        sa.UniqueConstraint("login", name="uq_admin_users_login"),
    )


def downgrade() -> None:
    op.drop_table("admin_users")
    op.drop_table("feedback")
    op.drop_table("contact_messages")
    bind = op.get_bind()
    sa.Enum(name="adminrole").drop(bind, checkfirst=True)
    sa.Enum(name="contactmessagestatus").drop(bind, checkfirst=True)
