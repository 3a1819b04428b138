"""SQLAlchemy table definitions for Scribe.

These table definitions are used with SQLAlchemy Core; rows are mapped to
the immutable domain models in ``mappers``. They match the schema defined
in the Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("username", String(30), nullable=False),
    Column("name", String(100), nullable=True),
    Column("email", String(255), nullable=True),
    Column("summary", Text, nullable=True),
    Column("website_url", Text, nullable=True),
    Column("employer_url", Text, nullable=True),
    Column("profile_image_url", Text, nullable=True),
    Column("old_username", String(30), nullable=True),
    Column("old_old_username", String(30), nullable=True),
    Column("twitter_username", String(255), nullable=True),
    Column("twitter_followers_count", Integer, nullable=True),
    Column("twitter_following_count", Integer, nullable=True),
    Column("twitter_created_at", TIMESTAMP(timezone=True), nullable=True),
    Column("github_username", String(255), nullable=True),
    Column("github_created_at", TIMESTAMP(timezone=True), nullable=True),
    Column("signup_cta_variant", String(100), nullable=True),
    Column("saw_onboarding", Boolean, nullable=False, server_default="true"),
    Column("estimated_default_language", String(10), nullable=True),
    Column("following_users_count", Integer, nullable=False, server_default="0"),
    Column("following_tags_count", Integer, nullable=False, server_default="0"),
    Column("following_orgs_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# Case-insensitive uniqueness backs the username collision retry
Index("uq_users_username_lower", func.lower(users_table.c.username), unique=True)
Index("idx_users_email", users_table.c.email)
Index("uq_users_twitter_username", users_table.c.twitter_username, unique=True)
Index("uq_users_github_username", users_table.c.github_username, unique=True)

# ============================================================================
# IDENTITIES TABLE (one per provider per user)
# ============================================================================
identities_table = Table(
    "identities",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("provider", String(50), nullable=False),  # 'twitter', 'github'
    Column("uid", String(255), nullable=False),
    Column("auth_data_dump", JSONB, nullable=False, server_default="{}"),
    Column("provider_username", String(255), nullable=True),
    Column("provider_email", String(255), nullable=True),
    Column("followers_count", Integer, nullable=True),
    Column("following_count", Integer, nullable=True),
    Column("provider_created_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("last_login_at", TIMESTAMP(timezone=True), nullable=True),
    UniqueConstraint("provider", "uid", name="uq_identities_provider_uid"),
    UniqueConstraint("user_id", "provider", name="uq_identities_user_provider"),
)

Index("idx_identities_user_id", identities_table.c.user_id)

# ============================================================================
# ORGANIZATIONS TABLE
# ============================================================================
organizations_table = Table(
    "organizations",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(100), nullable=False),
    Column("slug", String(30), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("uq_organizations_slug_lower", func.lower(organizations_table.c.slug), unique=True)

# ============================================================================
# TAGS TABLE
# ============================================================================
tags_table = Table(
    "tags",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(30), nullable=False, unique=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# FOLLOWS TABLE (polymorphic: user, tag, organization)
# ============================================================================
follows_table = Table(
    "follows",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "follower_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("followable_type", String(20), nullable=False),
    Column("followable_id", UUID, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint(
        "follower_id", "followable_type", "followable_id", name="uq_follows_target"
    ),
)

Index(
    "idx_follows_followable",
    follows_table.c.followable_type,
    follows_table.c.followable_id,
)
