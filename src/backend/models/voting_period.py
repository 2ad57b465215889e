"""
Voting period and candidate models.

A voting period is one election session with a start and end time.
Candidates belong to exactly one period and carry its running tally.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base


class PeriodScope(str, Enum):
    """Who may take part in a voting period."""

    NATIONAL = "national"
    STATE = "state"
    LOCAL = "local"


class VotingPeriod(Base):
    """
    A time-bounded voting session.

    Lifecycle flags:
    - forced_ended: an administrator stopped voting before end_time
    - results_published: tallies are visible to participants
    """

    __tablename__ = "voting_periods"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)

    # Restrictions
    min_age: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    scope: Mapped[str] = mapped_column(String(20), default=PeriodScope.NATIONAL.value)
    scope_state: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    scope_lga: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    require_whitelist: Mapped[bool] = mapped_column(Boolean, default=False)

    forced_ended: Mapped[bool] = mapped_column(Boolean, default=False)
    results_published: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    candidates = relationship("Candidate", back_populates="period", cascade="all, delete-orphan")


class Candidate(Base):
    """A candidate standing in one voting period."""

    __tablename__ = "candidates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    period_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("voting_periods.id", ondelete="CASCADE"),
        index=True,
    )

    name: Mapped[str] = mapped_column(String(200))
    state: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    lga: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    photo_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Aggregated vote count, incremented with each Vote row
    votes: Mapped[int] = mapped_column(Integer, default=0)

    period = relationship("VotingPeriod", back_populates="candidates")
