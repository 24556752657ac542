"""Watchlist model for politicians a user follows."""

import uuid
from datetime import datetime
from sqlalchemy import String, Boolean, DateTime, Index, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from civicforum.database import Base


class WatchlistEntry(Base):
    """A politician on a user's watchlist.

    ``user_id`` is the opaque identity handed to us by the auth layer, so it
    is stored as a string rather than a foreign key.
    """

    __tablename__ = "watchlists"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    politician_id: Mapped[str] = mapped_column(String(64), nullable=False)
    politician_name: Mapped[str] = mapped_column(String(100), nullable=False)
    politician_party: Mapped[str] = mapped_column(String(1), nullable=False)  # 'R', 'D', 'I'
    politician_state: Mapped[str] = mapped_column(String(2), nullable=False)
    politician_chamber: Mapped[str] = mapped_column(String(10), nullable=False)  # 'senate' or 'house'
    alerts_enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", "politician_id", name="uq_watchlists_user_politician"),
        Index("idx_watchlists_user", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<WatchlistEntry {self.user_id} -> {self.politician_id}>"
