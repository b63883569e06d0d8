"""SQLAlchemy Core table definitions for the Talk database.

``metadata`` always describes the schema at the newest migration head.
"""

from __future__ import annotations

from sqlalchemy import CheckConstraint, Column, Index, Integer, MetaData, Table, Text

metadata = MetaData()

# Single global settings record.  The primary key is pinned to 1 so a
# second installer racing the first fails on commit instead of writing
# a competing row.
SETTINGS_SINGLETON_ID = 1

settings = Table(
    "settings",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("organization_name", Text, nullable=False),
    Column("moderation", Text, nullable=False),
    Column("require_email_confirmation", Integer, nullable=False, server_default="0"),
    Column("domains", Text, nullable=False),  # JSON object
    Column("created_at", Text),
    Column("updated_at", Text),
    CheckConstraint(f"id = {SETTINGS_SINGLETON_ID}", name="ck_settings_singleton"),
)

users = Table(
    "users",
    metadata,
    Column("id", Text, primary_key=True),
    Column("username", Text, nullable=False, unique=True),
    Column("email", Text, nullable=False),
    Column("password_hash", Text, nullable=False),
    Column("role", Text, nullable=False),
    Column("created_at", Text, nullable=False),
)

Index("ix_users_role", users.c.role)
