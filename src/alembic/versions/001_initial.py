"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _str(length: int) -> sqlmodel.sql.sqltypes.AutoString:
    return sqlmodel.sql.sqltypes.AutoString(length=length)


def _tenant_scoped(table: str, *columns: sa.Column, constraints: Sequence = ()) -> None:
    """Create a tenant-owned table with the shared id/tenant_id/timestamps columns."""
    op.create_table(
        table,
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("tenant_id", sa.Uuid(), nullable=False),
        *columns,
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        *constraints,
    )
    op.create_index(f"ix_{table}_tenant_id", table, ["tenant_id"], unique=False)


def _user_fk(column: str, ondelete: str = "SET NULL") -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint([column], ["users.id"], ondelete=ondelete)


def upgrade() -> None:
    # 1. Users
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", _str(255), nullable=False),
        sa.Column("hashed_password", _str(255), nullable=False),
        sa.Column("full_name", _str(100), nullable=False),
        sa.Column("phone", _str(40), nullable=True),
        sa.Column("avatar_url", _str(500), nullable=True),
        sa.Column("global_role", _str(20), nullable=False),
        sa.Column("status", _str(20), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_status", "users", ["status"], unique=False)

    # 2. Tenants
    op.create_table(
        "tenants",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", _str(100), nullable=False),
        sa.Column("slug", _str(80), nullable=False),
        sa.Column("description", _str(2000), nullable=True),
        sa.Column("logo_url", _str(500), nullable=True),
        sa.Column("logo_file_id", sa.Uuid(), nullable=True),
        sa.Column("category", _str(100), nullable=True),
        sa.Column("location", _str(200), nullable=True),
        sa.Column("status", _str(20), nullable=False),
        sa.Column("created_by_user_id", sa.Uuid(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        _user_fk("created_by_user_id"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_tenants_name", "tenants", ["name"], unique=False)
    op.create_index("ix_tenants_slug", "tenants", ["slug"], unique=True)
    op.create_index("ix_tenants_status", "tenants", ["status"], unique=False)

    op.create_table(
        "tenant_settings",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("tenant_id", sa.Uuid(), nullable=False),
        sa.Column("public_signup", sa.Boolean(), nullable=False),
        sa.Column("approval_required", sa.Boolean(), nullable=False),
        sa.Column("registration_fields_enabled", sa.Boolean(), nullable=False),
        sa.Column("enabled_sections", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tenant_id"),
    )

    # 3. Memberships and profiles
    op.create_table(
        "memberships",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("tenant_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("role", _str(20), nullable=False),
        sa.Column("status", _str(20), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        _user_fk("user_id", ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tenant_id", "user_id", name="uq_memberships_tenant_user"),
    )
    op.create_index("ix_memberships_tenant_id", "memberships", ["tenant_id"], unique=False)
    op.create_index("ix_memberships_user_id", "memberships", ["user_id"], unique=False)

    op.create_table(
        "member_profiles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("tenant_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("full_name", _str(100), nullable=True),
        sa.Column("phone", _str(40), nullable=True),
        sa.Column("custom_fields", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        _user_fk("user_id", ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tenant_id", "user_id", name="uq_member_profiles_tenant_user"),
    )
    op.create_index("ix_member_profiles_tenant_id", "member_profiles", ["tenant_id"], unique=False)

    # 4. Invitations
    op.create_table(
        "invitations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("tenant_id", sa.Uuid(), nullable=False),
        sa.Column("email", _str(255), nullable=False),
        sa.Column("phone", _str(40), nullable=True),
        sa.Column("role", _str(20), nullable=False),
        sa.Column("status", _str(20), nullable=False),
        sa.Column("token_hash", _str(64), nullable=False),
        sa.Column("invited_by_user_id", sa.Uuid(), nullable=True),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("revoked_at", sa.DateTime(), nullable=True),
        sa.Column("revoked_by_user_id", sa.Uuid(), nullable=True),
        sa.Column("accepted_at", sa.DateTime(), nullable=True),
        sa.Column("accepted_by_user_id", sa.Uuid(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        _user_fk("invited_by_user_id"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_invitations_tenant_id", "invitations", ["tenant_id"], unique=False)
    op.create_index("ix_invitations_token_hash", "invitations", ["token_hash"], unique=True)
    op.create_index(
        "ix_invitations_tenant_email", "invitations", ["tenant_id", "email"], unique=False
    )

    # 5. Files
    op.create_table(
        "stored_files",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("tenant_id", sa.Uuid(), nullable=False),
        sa.Column("purpose", _str(40), nullable=False),
        sa.Column("filename", _str(300), nullable=False),
        sa.Column("original_filename", _str(255), nullable=False),
        sa.Column("content_type", _str(120), nullable=False),
        sa.Column("size", sa.Integer(), nullable=False),
        sa.Column("chunk_size", sa.Integer(), nullable=False),
        sa.Column("uploaded_by_user_id", sa.Uuid(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        _user_fk("uploaded_by_user_id"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_stored_files_tenant_id", "stored_files", ["tenant_id"], unique=False)

    op.create_table(
        "stored_file_chunks",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("file_id", sa.Uuid(), nullable=False),
        sa.Column("n", sa.Integer(), nullable=False),
        sa.Column("data", sa.LargeBinary(), nullable=False),
        sa.ForeignKeyConstraint(["file_id"], ["stored_files.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("file_id", "n", name="uq_stored_file_chunks_file_n"),
    )
    op.create_index(
        "ix_stored_file_chunks_file_id", "stored_file_chunks", ["file_id"], unique=False
    )

    # 6. Audit logs (tenant_id is deliberately not a foreign key)
    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("tenant_id", sa.Uuid(), nullable=True),
        sa.Column("actor_user_id", sa.Uuid(), nullable=True),
        sa.Column("action", _str(60), nullable=False),
        sa.Column("entity_type", _str(50), nullable=False),
        sa.Column("entity_id", sa.Uuid(), nullable=True),
        sa.Column("details", sa.JSON(), nullable=True),
        sa.Column("ip_address", _str(45), nullable=True),
        sa.Column("user_agent", _str(500), nullable=True),
        sa.Column("request_id", _str(64), nullable=True),
        sa.Column("status", _str(20), nullable=False),
        sa.Column("error_message", _str(1000), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_audit_logs_tenant_created", "audit_logs", ["tenant_id", "created_at"])
    op.create_index("ix_audit_logs_actor_created", "audit_logs", ["actor_user_id", "created_at"])
    op.create_index("ix_audit_logs_action_created", "audit_logs", ["action", "created_at"])
    op.create_index("ix_audit_logs_entity", "audit_logs", ["entity_type", "entity_id"])

    # 7. Notifications and registration fields
    _tenant_scoped(
        "notifications",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("kind", _str(60), nullable=False),
        sa.Column("title", _str(200), nullable=False),
        sa.Column("body", _str(2000), nullable=True),
        sa.Column("read_at", sa.DateTime(), nullable=True),
        constraints=[_user_fk("user_id", ondelete="CASCADE")],
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"], unique=False)

    _tenant_scoped(
        "registration_fields",
        sa.Column("key", _str(60), nullable=False),
        sa.Column("label", _str(200), nullable=False),
        sa.Column("field_type", _str(20), nullable=False),
        sa.Column("required", sa.Boolean(), nullable=False),
        sa.Column("options", sa.JSON(), nullable=False),
        sa.Column("field_order", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
    )

    # 8. Groups, programs and modules (resources reference them)
    _tenant_scoped(
        "groups",
        sa.Column("name", _str(120), nullable=False),
        sa.Column("description", _str(2000), nullable=True),
        sa.Column("is_private", sa.Boolean(), nullable=False),
        sa.Column("created_by_user_id", sa.Uuid(), nullable=True),
        constraints=[_user_fk("created_by_user_id")],
    )
    _tenant_scoped(
        "group_memberships",
        sa.Column("group_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("role", _str(20), nullable=False),
        constraints=[
            sa.ForeignKeyConstraint(["group_id"], ["groups.id"], ondelete="CASCADE"),
            _user_fk("user_id", ondelete="CASCADE"),
            sa.UniqueConstraint("group_id", "user_id", name="uq_group_memberships"),
        ],
    )
    op.create_index(
        "ix_group_memberships_group_id", "group_memberships", ["group_id"], unique=False
    )

    _tenant_scoped(
        "programs",
        sa.Column("title", _str(200), nullable=False),
        sa.Column("description", _str(4000), nullable=True),
        sa.Column("status", _str(20), nullable=False),
        sa.Column("created_by_user_id", sa.Uuid(), nullable=True),
        constraints=[_user_fk("created_by_user_id")],
    )
    _tenant_scoped(
        "program_modules",
        sa.Column("program_id", sa.Uuid(), nullable=False),
        sa.Column("title", _str(200), nullable=False),
        sa.Column("description", _str(4000), nullable=True),
        sa.Column("order", sa.Integer(), nullable=False),
        constraints=[
            sa.ForeignKeyConstraint(["program_id"], ["programs.id"], ondelete="CASCADE"),
        ],
    )
    op.create_index(
        "ix_program_modules_program_id", "program_modules", ["program_id"], unique=False
    )
    _tenant_scoped(
        "program_assignments",
        sa.Column("program_id", sa.Uuid(), nullable=False),
        sa.Column("group_id", sa.Uuid(), nullable=False),
        constraints=[
            sa.ForeignKeyConstraint(["program_id"], ["programs.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["group_id"], ["groups.id"], ondelete="CASCADE"),
            sa.UniqueConstraint(
                "tenant_id", "program_id", "group_id", name="uq_program_assignments"
            ),
        ],
    )
    _tenant_scoped(
        "program_enrollments",
        sa.Column("program_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("progress_pct", sa.Integer(), nullable=False),
        constraints=[
            sa.ForeignKeyConstraint(["program_id"], ["programs.id"], ondelete="CASCADE"),
            _user_fk("user_id", ondelete="CASCADE"),
            sa.UniqueConstraint(
                "tenant_id", "program_id", "user_id", name="uq_program_enrollments"
            ),
        ],
    )
    op.create_index(
        "ix_program_enrollments_program_id", "program_enrollments", ["program_id"], unique=False
    )

    # 9. Events
    _tenant_scoped(
        "events",
        sa.Column("title", _str(200), nullable=False),
        sa.Column("description", _str(4000), nullable=True),
        sa.Column("starts_at", sa.DateTime(), nullable=False),
        sa.Column("ends_at", sa.DateTime(), nullable=True),
        sa.Column("location", _str(200), nullable=True),
        sa.Column("is_online", sa.Boolean(), nullable=False),
        sa.Column("meeting_link", _str(1000), nullable=True),
        sa.Column("thumbnail_url", _str(1000), nullable=True),
        sa.Column("thumbnail_file_id", sa.Uuid(), nullable=True),
        sa.Column("host_user_id", sa.Uuid(), nullable=True),
        constraints=[_user_fk("host_user_id")],
    )
    _tenant_scoped(
        "event_rsvps",
        sa.Column("event_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("status", _str(20), nullable=False),
        constraints=[
            sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
            _user_fk("user_id", ondelete="CASCADE"),
            sa.UniqueConstraint("tenant_id", "event_id", "user_id", name="uq_event_rsvps"),
        ],
    )
    op.create_index("ix_event_rsvps_event_id", "event_rsvps", ["event_id"], unique=False)

    # 10. Content
    _tenant_scoped(
        "announcements",
        sa.Column("title", _str(200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_pinned", sa.Boolean(), nullable=False),
        sa.Column("visibility", _str(20), nullable=False),
        sa.Column("author_user_id", sa.Uuid(), nullable=True),
        sa.Column("attachments", sa.JSON(), nullable=False),
        constraints=[_user_fk("author_user_id")],
    )
    _tenant_scoped(
        "posts",
        sa.Column("title", _str(200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("visibility", _str(20), nullable=False),
        sa.Column("is_published", sa.Boolean(), nullable=False),
        sa.Column("published_at", sa.DateTime(), nullable=True),
        sa.Column("author_user_id", sa.Uuid(), nullable=True),
        constraints=[_user_fk("author_user_id")],
    )
    _tenant_scoped(
        "resources",
        sa.Column("title", _str(200), nullable=False),
        sa.Column("description", _str(2000), nullable=True),
        sa.Column("type", _str(20), nullable=False),
        sa.Column("url", _str(1000), nullable=True),
        sa.Column("file_id", sa.Uuid(), nullable=True),
        sa.Column("file_name", _str(255), nullable=True),
        sa.Column("mime_type", _str(120), nullable=True),
        sa.Column("size", sa.Integer(), nullable=True),
        sa.Column("thumbnail_url", _str(1000), nullable=True),
        sa.Column("thumbnail_file_id", sa.Uuid(), nullable=True),
        sa.Column("folder", _str(120), nullable=True),
        sa.Column("group_id", sa.Uuid(), nullable=True),
        sa.Column("program_id", sa.Uuid(), nullable=True),
        sa.Column("module_id", sa.Uuid(), nullable=True),
        sa.Column("created_by_user_id", sa.Uuid(), nullable=True),
        constraints=[
            sa.ForeignKeyConstraint(["group_id"], ["groups.id"], ondelete="SET NULL"),
            sa.ForeignKeyConstraint(["program_id"], ["programs.id"], ondelete="SET NULL"),
            sa.ForeignKeyConstraint(["module_id"], ["program_modules.id"], ondelete="SET NULL"),
            _user_fk("created_by_user_id"),
        ],
    )


def downgrade() -> None:
    for table in (
        "resources",
        "posts",
        "announcements",
        "event_rsvps",
        "events",
        "program_enrollments",
        "program_assignments",
        "program_modules",
        "programs",
        "group_memberships",
        "groups",
        "registration_fields",
        "notifications",
        "audit_logs",
        "stored_file_chunks",
        "stored_files",
        "invitations",
        "member_profiles",
        "memberships",
        "tenant_settings",
        "tenants",
        "users",
    ):
        op.drop_table(table)
