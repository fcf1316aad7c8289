"""create_identity_records

Create the identity registration schema:
- identity_records (email/password and OAuth enrollments)
- updated_at trigger

Revision ID: 3c41d2a9e7f0
Revises:
Create Date: 2026-10-12 09:14:52.318204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c41d2a9e7f0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # IDENTITY_RECORDS table
    # ========================================================================
    op.create_table(
        "identity_records",
        sa.Column(
            "user_id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("email_normalized", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("registration_method", sa.String(20), nullable=False),
        sa.Column("oauth_provider", sa.String(20), nullable=True),  # 'google', 'amazon'
        sa.Column("oauth_provider_id", sa.String(255), nullable=True),
        sa.Column("oauth_token_encrypted", sa.Text(), nullable=True),
        sa.Column(
            "email_verified", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column("verification_token_hash", sa.String(64), nullable=True),
        sa.Column("consumed_token_hash", sa.String(64), nullable=True),
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
        sa.PrimaryKeyConstraint("user_id"),
        sa.UniqueConstraint("email", name="uq_identity_email"),
        sa.UniqueConstraint("email_normalized", name="uq_identity_email_normalized"),
        sa.UniqueConstraint(
            "oauth_provider", "oauth_provider_id", name="uq_identity_oauth_identity"
        ),
        sa.CheckConstraint(
            "registration_method IN ('email', 'oauth')",
            name="ck_identity_registration_method",
        ),
        sa.CheckConstraint(
            "(registration_method = 'oauth' AND oauth_provider IS NOT NULL "
            "AND oauth_provider_id IS NOT NULL AND password_hash IS NULL) OR "
            "(registration_method = 'email' AND oauth_provider IS NULL "
            "AND password_hash IS NOT NULL)",
            name="ck_identity_credentials",
        ),
    )
    op.create_index(
        "idx_identity_verification_token",
        "identity_records",
        ["verification_token_hash"],
        postgresql_where=sa.text("email_verified = false"),
    )
    op.create_index(
        "idx_identity_consumed_token",
        "identity_records",
        ["consumed_token_hash"],
        postgresql_where=sa.text("consumed_token_hash IS NOT NULL"),
    )

    # ========================================================================
    # updated_at trigger
    # ========================================================================
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)

    op.execute("""
        CREATE TRIGGER update_identity_records_updated_at
        BEFORE UPDATE ON identity_records
        FOR EACH ROW EXECUTE FUNCTION update_updated_at_column();
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute(
        "DROP TRIGGER IF EXISTS update_identity_records_updated_at ON identity_records"
    )
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")
    op.drop_index("idx_identity_consumed_token", table_name="identity_records")
    op.drop_index("idx_identity_verification_token", table_name="identity_records")
    op.drop_table("identity_records")
