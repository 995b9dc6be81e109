from sqlalchemy import Column, Integer, String, DateTime, Index
from sqlalchemy.sql import func
from shortener_app.database.connection import Base


class URL(Base):
    """
    One shortened link.

    This table is the source of truth for every field; the cache only
    ever holds a copy of original_url.
    expires_at is stored metadata, nothing reads it on the redirect path.
    """
    __tablename__ = "urls"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # unique=True + index=True creates a unique index on code
    code = Column(String(32), unique=True, nullable=False, index=True)
    original_url = Column(String, nullable=False)
    clicks = Column(Integer, nullable=False, default=0, server_default="0")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    # Reserved for a future cleanup job
    expires_at = Column(DateTime(timezone=True), nullable=True, index=True)


# Newest-first listing
Index("idx_urls_created_at", URL.created_at.desc())
