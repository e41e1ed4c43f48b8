"""SQLAlchemy table definitions for the portal.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Enum,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

# ============================================================================
# TEAM PROFILES (team identity store)
# ============================================================================
team_profiles_table = Table(
    "team_profiles",
    metadata,
    Column("id", UUID, primary_key=True),  # Principal id from the Auth Provider
    Column("email", String(255), nullable=False, unique=True),
    Column("full_name", String(255), nullable=False),
    Column(
        "role",
        Enum("admin", "team_member", "moderator", name="team_role", create_type=False),
        nullable=False,
    ),
    Column(
        "status",
        Enum("active", "inactive", name="team_status", create_type=False),
        nullable=False,
        server_default="active",
    ),
    Column("avatar_url", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# CLIENT COMPANIES
# ============================================================================
client_companies_table = Table(
    "client_companies",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("name", String(255), nullable=False, unique=True),
    Column(
        "status",
        Enum(
            "prospect", "active", "inactive", name="company_status", create_type=False
        ),
        nullable=False,
        server_default="prospect",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# CLIENT CONTACTS (client identity store)
# ============================================================================
client_contacts_table = Table(
    "client_contacts",
    metadata,
    Column("id", UUID, primary_key=True),  # Principal id from the Auth Provider
    Column("email", String(255), nullable=False, unique=True),
    Column("full_name", String(255), nullable=False),
    Column(
        "role",
        Enum(
            "owner",
            "tech",
            "media",
            "finance",
            "member",
            name="client_role",
            create_type=False,
        ),
        nullable=False,
        server_default="member",
    ),
    Column(
        "client_company_id",
        UUID,
        ForeignKey("client_companies.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("phone", String(50), nullable=True),
    Column("title", String(255), nullable=True),
    Column("department", String(255), nullable=True),
    Column("is_primary_contact", Boolean, nullable=False, server_default="false"),
    Column("is_billing_contact", Boolean, nullable=False, server_default="false"),
    Column("can_manage_team", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_client_contacts_company_id", client_contacts_table.c.client_company_id)

# ============================================================================
# INVITATIONS
# ============================================================================
invitations_table = Table(
    "invitations",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("email", String(255), nullable=False),
    Column("full_name", String(255), nullable=False),
    Column(
        "role",
        Enum(
            "admin",
            "team_member",
            "moderator",
            "client",
            name="invitation_role",
            create_type=False,
        ),
        nullable=False,
    ),
    Column("company_name", String(255), nullable=True),
    Column(
        "client_company_id",
        UUID,
        ForeignKey("client_companies.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("phone", String(50), nullable=True),
    Column("invited_by", UUID, nullable=False),
    Column("invitation_token", String(255), nullable=False, unique=True),
    Column(
        "status",
        Enum(
            "pending",
            "accepted",
            "expired",
            "cancelled",
            name="invitation_status",
            create_type=False,
        ),
        nullable=False,
        server_default="pending",
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
)

Index(
    "idx_invitations_status_created_at",
    invitations_table.c.status,
    invitations_table.c.created_at,
)

# Only one pending invitation per email
Index(
    "idx_invitations_unique_pending_email",
    invitations_table.c.email,
    unique=True,
    postgresql_where=invitations_table.c.status == "pending",
)
