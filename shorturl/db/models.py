"""
Database Models for URL Shortener Service

This module defines:
- URLEntry: the unit of persistence handed around by stores and the registry
- ShortURL: the SQLModel table backing the SQL store

Design Decisions:
- Unique indexes on both original_url and short_url, so the database itself
  refuses a second code for a URL or a second URL for a code
- Auto-incrementing id keeps the insertion order of entries
- The column is called short_url to match the persisted JSON layout and the
  HTTP response, while the Python attribute on URLEntry is short_code
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, PositiveInt
from sqlalchemy import BigInteger, DateTime, Text
from sqlmodel import Column, Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class URLEntry(BaseModel):
    """
    A registered URL and its short code.

    Entries are append-only: created once by the registry, never modified.
    """
    model_config = ConfigDict(frozen=True)

    original_url: str
    short_code: PositiveInt

    def to_record(self) -> dict:
        """Serialize to the persisted/HTTP layout."""
        return {"original_url": self.original_url, "short_url": self.short_code}

    @classmethod
    def from_record(cls, record: dict) -> "URLEntry":
        """Build an entry from the persisted layout."""
        return cls(original_url=record["original_url"], short_code=record["short_url"])


class ShortURL(SQLModel, table=True):
    """
    Table storing URL shortening mappings.

    Fields:
    - id: Auto-incrementing primary key (insertion order)
    - original_url: The normalized URL that was shortened
    - short_url: The numeric short code
    - created_at: Timestamp when the URL was registered

    Indexes:
    - short_url: Unique index for fast lookups (most critical path)
    - original_url: Unique, used by duplicate suppression
    """
    __tablename__ = "short_urls"

    id: Optional[int] = Field(default=None, primary_key=True)
    original_url: str = Field(sa_column=Column(Text, nullable=False, unique=True))
    short_url: int = Field(
        sa_column=Column(BigInteger, nullable=False, unique=True, index=True)
    )
    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )

    def to_entry(self) -> URLEntry:
        return URLEntry(original_url=self.original_url, short_code=self.short_url)
