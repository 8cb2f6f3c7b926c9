"""initial studymate schema (users, tasks, history, subscription logs)

Revision ID: 1a7c3e9d2b10
Revises:
Create Date: 2026-02-14 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "1a7c3e9d2b10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    tables = inspector.get_table_names()

    if "users" not in tables:
        op.create_table(
            "users",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("email", sa.String(length=255), nullable=False),
            sa.Column("password_hash", sa.String(length=255), nullable=False),
            sa.Column("name", sa.String(length=255)),
            sa.Column("subscription", sa.String(length=16), nullable=False, server_default="free"),
            sa.Column("request_count", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("last_request_date", sa.String(length=10)),
            sa.Column(
                "created_at",
                sa.DateTime(timezone=True),
                nullable=False,
                server_default=sa.text("CURRENT_TIMESTAMP"),
            ),
        )
        op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    else:
        # databases created before the usage counter existed
        columns = {col["name"] for col in inspector.get_columns("users")}
        with op.batch_alter_table("users") as batch_op:
            if "request_count" not in columns:
                batch_op.add_column(
                    sa.Column("request_count", sa.Integer(), nullable=False, server_default="0")
                )
            if "last_request_date" not in columns:
                batch_op.add_column(sa.Column("last_request_date", sa.String(length=10)))

    if "tasks" not in tables:
        op.create_table(
            "tasks",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("subject", sa.String(length=128), nullable=False),
            sa.Column("deadline", sa.Date(), nullable=False),
            sa.Column("priority", sa.String(length=16), nullable=False, server_default="medium"),
            sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column(
                "created_at",
                sa.DateTime(timezone=True),
                nullable=False,
                server_default=sa.text("CURRENT_TIMESTAMP"),
            ),
        )
        op.create_index(op.f("ix_tasks_user_id"), "tasks", ["user_id"])
        op.create_index(op.f("ix_tasks_deadline"), "tasks", ["deadline"])

    if "history" not in tables:
        op.create_table(
            "history",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
            sa.Column("type", sa.String(length=32), nullable=False),
            sa.Column("query", sa.Text(), nullable=False),
            sa.Column("response", sa.Text()),
            sa.Column(
                "timestamp",
                sa.DateTime(timezone=True),
                nullable=False,
                server_default=sa.text("CURRENT_TIMESTAMP"),
            ),
        )
        op.create_index(op.f("ix_history_user_id"), "history", ["user_id"])
        op.create_index(op.f("ix_history_timestamp"), "history", ["timestamp"])

    if "subscription_logs" not in tables:
        op.create_table(
            "subscription_logs",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
            sa.Column("action", sa.String(length=32), nullable=False),
            sa.Column("plan", sa.String(length=32)),
            sa.Column(
                "created_at",
                sa.DateTime(timezone=True),
                nullable=False,
                server_default=sa.text("CURRENT_TIMESTAMP"),
            ),
        )
        op.create_index(
            op.f("ix_subscription_logs_user_id"), "subscription_logs", ["user_id"]
        )


def downgrade():
    op.drop_index(op.f("ix_subscription_logs_user_id"), table_name="subscription_logs")
    op.drop_table("subscription_logs")
    op.drop_index(op.f("ix_history_timestamp"), table_name="history")
    op.drop_index(op.f("ix_history_user_id"), table_name="history")
    op.drop_table("history")
    op.drop_index(op.f("ix_tasks_deadline"), table_name="tasks")
    op.drop_index(op.f("ix_tasks_user_id"), table_name="tasks")
    op.drop_table("tasks")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
