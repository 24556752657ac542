"""Per-user watchlist persistence."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from civicforum.models import WatchlistEntry
from civicforum.schemas.watchlist import WatchlistCreate

logger = logging.getLogger(__name__)


class DuplicateWatchlistEntryError(Exception):
    """The politician is already on this user's watchlist."""


class WatchlistEntryNotFoundError(Exception):
    """The politician is not on this user's watchlist."""


class WatchlistStore:
    """Watchlist operations scoped to one database session."""

    def __init__(self, db: Session):
        self.db = db

    def _get(self, user_id: str, politician_id: str) -> WatchlistEntry | None:
        return self.db.execute(
            select(WatchlistEntry)
            .where(WatchlistEntry.user_id == user_id)
            .where(WatchlistEntry.politician_id == politician_id)
        ).scalar_one_or_none()

    def list(self, user_id: str) -> list[WatchlistEntry]:
        """Entries for a user, newest first."""
        return list(
            self.db.execute(
                select(WatchlistEntry)
                .where(WatchlistEntry.user_id == user_id)
                .order_by(WatchlistEntry.created_at.desc())
            ).scalars().all()
        )

    def contains(self, user_id: str, politician_id: str) -> bool:
        return self._get(user_id, politician_id) is not None

    def add(self, user_id: str, item: WatchlistCreate) -> WatchlistEntry:
        """
        Add a politician to a user's watchlist.

        Raises:
            DuplicateWatchlistEntryError: if the pair already exists, including
                when a concurrent insert wins the race
        """
        if self.contains(user_id, item.politician_id):
            raise DuplicateWatchlistEntryError(item.politician_id)

        entry = WatchlistEntry(
            user_id=user_id,
            politician_id=item.politician_id,
            politician_name=item.politician_name,
            politician_party=item.politician_party,
            politician_state=item.politician_state,
            politician_chamber=item.politician_chamber,
        )
        self.db.add(entry)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateWatchlistEntryError(item.politician_id) from exc
        self.db.refresh(entry)

        logger.info("User %s added %s to watchlist", user_id, item.politician_id)
        return entry

    def remove(self, user_id: str, politician_id: str) -> None:
        """
        Raises:
            WatchlistEntryNotFoundError: if the pair does not exist
        """
        entry = self._get(user_id, politician_id)
        if entry is None:
            raise WatchlistEntryNotFoundError(politician_id)
        self.db.delete(entry)
        self.db.commit()

    def set_alerts(self, user_id: str, politician_id: str, enabled: bool) -> WatchlistEntry:
        """
        Raises:
            WatchlistEntryNotFoundError: if the pair does not exist
        """
        entry = self._get(user_id, politician_id)
        if entry is None:
            raise WatchlistEntryNotFoundError(politician_id)
        entry.alerts_enabled = enabled
        self.db.commit()
        self.db.refresh(entry)
        return entry
