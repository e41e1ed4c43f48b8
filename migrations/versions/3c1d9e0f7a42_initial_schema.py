"""initial_schema

Create the identity and invitation schema:
- Team profiles (team identity store)
- Client companies
- Client contacts (client identity store)
- Invitations (one pending invitation per email)

Revision ID: 3c1d9e0f7a42
Revises:
Create Date: 2025-11-03 10:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1d9e0f7a42"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENUMS = {
    "team_role": ("admin", "team_member", "moderator"),
    "team_status": ("active", "inactive"),
    "company_status": ("prospect", "active", "inactive"),
    "client_role": ("owner", "tech", "media", "finance", "member"),
    "invitation_role": ("admin", "team_member", "moderator", "client"),
    "invitation_status": ("pending", "accepted", "expired", "cancelled"),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # Create ENUM types (idempotent)
    for name, values in ENUMS.items():
        labels = ", ".join(f"'{value}'" for value in values)
        op.execute(f"""
            DO $$ BEGIN
                CREATE TYPE {name} AS ENUM ({labels});
            EXCEPTION
                WHEN duplicate_object THEN null;
            END $$;
        """)

    # ========================================================================
    # TEAM_PROFILES table
    # ========================================================================
    op.create_table(
        "team_profiles",
        sa.Column("id", sa.UUID(), nullable=False),  # Auth Provider principal id
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("role", _enum("team_role"), nullable=False),
        sa.Column(
            "status",
            _enum("team_status"),
            nullable=False,
            server_default="active",
        ),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_team_profiles_email"),
    )

    # ========================================================================
    # CLIENT_COMPANIES table
    # ========================================================================
    op.create_table(
        "client_companies",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "status",
            _enum("company_status"),
            nullable=False,
            server_default="prospect",
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_client_companies_name"),
    )

    # ========================================================================
    # CLIENT_CONTACTS table
    # ========================================================================
    op.create_table(
        "client_contacts",
        sa.Column("id", sa.UUID(), nullable=False),  # Auth Provider principal id
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column(
            "role", _enum("client_role"), nullable=False, server_default="member"
        ),
        sa.Column("client_company_id", sa.UUID(), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("department", sa.String(255), nullable=True),
        sa.Column(
            "is_primary_contact", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column(
            "is_billing_contact", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column(
            "can_manage_team", sa.Boolean(), nullable=False, server_default="false"
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["client_company_id"], ["client_companies.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_client_contacts_email"),
    )
    op.create_index(
        "idx_client_contacts_company_id", "client_contacts", ["client_company_id"]
    )

    # ========================================================================
    # INVITATIONS table
    # ========================================================================
    op.create_table(
        "invitations",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("role", _enum("invitation_role"), nullable=False),
        sa.Column("company_name", sa.String(255), nullable=True),
        sa.Column("client_company_id", sa.UUID(), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("invited_by", sa.UUID(), nullable=False),
        sa.Column("invitation_token", sa.String(255), nullable=False),
        sa.Column(
            "status",
            _enum("invitation_status"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        *_timestamps(),
        sa.Column("accepted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["client_company_id"], ["client_companies.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("invitation_token", name="uq_invitations_token"),
    )
    op.create_index(
        "idx_invitations_status_created_at", "invitations", ["status", "created_at"]
    )
    # At most one pending invitation per email
    op.create_index(
        "idx_invitations_unique_pending_email",
        "invitations",
        ["email"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("invitations")
    op.drop_table("client_contacts")
    op.drop_table("client_companies")
    op.drop_table("team_profiles")

    for name in reversed(list(ENUMS)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
