from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime
from slug_shortener.database.connection import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UrlMapping(Base):
    """
    Slug -> URL mapping.

    Rows are inserted once and never updated or deleted.
    The unique index on ``slug`` is what decides between two concurrent
    creates of the same slug; application-level lookups only give a nicer
    error message earlier.
    """
    __tablename__ = "urls"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    # unique=True creates the index that enforces one mapping per slug
    slug = Column(String(20), unique=True, nullable=False, index=True)
    url = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<UrlMapping slug={self.slug!r} url={self.url!r}>"
