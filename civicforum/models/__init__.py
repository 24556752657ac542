"""SQLAlchemy ORM models."""

from civicforum.models.watchlist import WatchlistEntry

__all__ = [
    "WatchlistEntry",
]
