"""
Database Models for the URL Shortener Service

This module defines the SQLModel schema for UrlMapping, the single
persisted entity: the association between a short code and the URL it
resolves to.

Design Decisions:
- code is the primary key, so the database itself rejects a duplicate code
  and concurrent inserts of the same code cannot both succeed
- target_url is unconstrained text stored verbatim; the same URL may be
  shortened more than once and receive distinct codes
- created_at is kept for observability only
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlmodel import Column, Field, SQLModel

from tinyurl.core.setting import CODE_COLUMN_LENGTH


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UrlMapping(SQLModel, table=True):
    """
    Table storing short code to URL mappings.

    Fields:
    - code: Short code, primary key (unique across all mappings)
    - target_url: The URL that was shortened, exactly as submitted
    - created_at: Timestamp when the mapping was created
    """
    __tablename__ = "urls"

    code: str = Field(
        sa_column=Column(String(CODE_COLUMN_LENGTH), primary_key=True),
        max_length=CODE_COLUMN_LENGTH
    )
    target_url: str = Field(sa_column=Column(Text, nullable=False))
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
