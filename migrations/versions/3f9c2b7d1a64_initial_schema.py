"""initial_schema

Create the foundational schema for Scribe:
- Users (usernames unique ignoring case, cached provider data)
- Identities (one per provider per user, raw auth payload in JSONB)
- Organizations (slugs share the username namespace)
- Tags
- Follows (polymorphic: user, tag, organization)

Revision ID: 3f9c2b7d1a64
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f9c2b7d1a64"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


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
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("username", sa.String(30), nullable=False),
        sa.Column("name", sa.String(100), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("website_url", sa.Text(), nullable=True),
        sa.Column("employer_url", sa.Text(), nullable=True),
        sa.Column("profile_image_url", sa.Text(), nullable=True),
        sa.Column("old_username", sa.String(30), nullable=True),
        sa.Column("old_old_username", sa.String(30), nullable=True),
        sa.Column("twitter_username", sa.String(255), nullable=True),
        sa.Column("twitter_followers_count", sa.Integer(), nullable=True),
        sa.Column("twitter_following_count", sa.Integer(), nullable=True),
        sa.Column("twitter_created_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("github_username", sa.String(255), nullable=True),
        sa.Column("github_created_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("signup_cta_variant", sa.String(100), nullable=True),
        sa.Column(
            "saw_onboarding", sa.Boolean(), nullable=False, server_default="true"
        ),
        sa.Column("estimated_default_language", sa.String(10), nullable=True),
        sa.Column(
            "following_users_count", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column(
            "following_tags_count", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column(
            "following_orgs_count", sa.Integer(), nullable=False, server_default="0"
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "following_users_count >= 0 AND following_tags_count >= 0 "
            "AND following_orgs_count >= 0",
            name="ck_users_follow_counts",
        ),
    )
    op.create_index(
        "uq_users_username_lower",
        "users",
        [sa.text("lower(username)")],
        unique=True,
    )
    op.create_index("idx_users_email", "users", ["email"])
    op.create_index(
        "uq_users_twitter_username", "users", ["twitter_username"], unique=True
    )
    op.create_index(
        "uq_users_github_username", "users", ["github_username"], unique=True
    )

    # ========================================================================
    # IDENTITIES table (one per provider per user)
    # ========================================================================
    op.create_table(
        "identities",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("provider", sa.String(50), nullable=False),  # 'twitter', 'github'
        sa.Column("uid", sa.String(255), nullable=False),
        sa.Column(
            "auth_data_dump",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("provider_username", sa.String(255), nullable=True),
        sa.Column("provider_email", sa.String(255), nullable=True),
        sa.Column("followers_count", sa.Integer(), nullable=True),
        sa.Column("following_count", sa.Integer(), nullable=True),
        sa.Column("provider_created_at", sa.TIMESTAMP(timezone=True), nullable=True),
        *_timestamps(),
        sa.Column("last_login_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("provider", "uid", name="uq_identities_provider_uid"),
        sa.UniqueConstraint(
            "user_id", "provider", name="uq_identities_user_provider"
        ),
    )
    op.create_index("idx_identities_user_id", "identities", ["user_id"])

    # ========================================================================
    # ORGANIZATIONS table
    # ========================================================================
    op.create_table(
        "organizations",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("slug", sa.String(30), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "uq_organizations_slug_lower",
        "organizations",
        [sa.text("lower(slug)")],
        unique=True,
    )

    # ========================================================================
    # TAGS table
    # ========================================================================
    op.create_table(
        "tags",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("name", sa.String(30), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_tag_name"),
    )

    # ========================================================================
    # FOLLOWS table
    # ========================================================================
    op.create_table(
        "follows",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("follower_id", sa.UUID(), nullable=False),
        sa.Column("followable_type", sa.String(20), nullable=False),
        sa.Column("followable_id", sa.UUID(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["follower_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "follower_id",
            "followable_type",
            "followable_id",
            name="uq_follows_target",
        ),
    )
    op.create_index(
        "idx_follows_followable", "follows", ["followable_type", "followable_id"]
    )

    # Trigger function to update updated_at timestamp
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
    """)

    op.execute("""
        CREATE TRIGGER update_users_updated_at
        BEFORE UPDATE ON users
        FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()
    """)

    op.execute("""
        CREATE TRIGGER update_identities_updated_at
        BEFORE UPDATE ON identities
        FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP TRIGGER IF EXISTS update_identities_updated_at ON identities")
    op.execute("DROP TRIGGER IF EXISTS update_users_updated_at ON users")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    # Drop tables (in reverse order of dependencies)
    op.drop_table("follows")
    op.drop_table("tags")
    op.drop_table("organizations")
    op.drop_table("identities")
    op.drop_table("users")
