"""SQLAlchemy table definitions for identity registration."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

# ============================================================================
# IDENTITY RECORDS TABLE
# ============================================================================
identity_records_table = Table(
    "identity_records",
    metadata,
    Column("user_id", UUID(as_uuid=True), primary_key=True),
    Column("email", String(255), nullable=False),
    Column("email_normalized", String(255), nullable=False),
    Column("password_hash", String(255), nullable=True),
    Column("first_name", String(100), nullable=False),
    Column("last_name", String(100), nullable=False),
    Column("registration_method", String(20), nullable=False),  # 'email', 'oauth'
    Column("oauth_provider", String(20), nullable=True),  # 'google', 'amazon'
    Column("oauth_provider_id", String(255), nullable=True),
    Column("oauth_token_encrypted", Text, nullable=True),
    Column("email_verified", Boolean, nullable=False, server_default="false"),
    Column("verification_token_hash", String(64), nullable=True),
    Column("consumed_token_hash", String(64), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("email", name="uq_identity_email"),
    UniqueConstraint("email_normalized", name="uq_identity_email_normalized"),
    UniqueConstraint(
        "oauth_provider", "oauth_provider_id", name="uq_identity_oauth_identity"
    ),
    CheckConstraint(
        "registration_method IN ('email', 'oauth')",
        name="ck_identity_registration_method",
    ),
    CheckConstraint(
        "(registration_method = 'oauth' AND oauth_provider IS NOT NULL "
        "AND oauth_provider_id IS NOT NULL AND password_hash IS NULL) OR "
        "(registration_method = 'email' AND oauth_provider IS NULL "
        "AND password_hash IS NOT NULL)",
        name="ck_identity_credentials",
    ),
)

Index(
    "idx_identity_verification_token",
    identity_records_table.c.verification_token_hash,
    postgresql_where=identity_records_table.c.email_verified.is_(False),
)

Index(
    "idx_identity_consumed_token",
    identity_records_table.c.consumed_token_hash,
    postgresql_where=identity_records_table.c.consumed_token_hash.isnot(None),
)
