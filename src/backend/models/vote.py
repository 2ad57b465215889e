"""
Vote and voter whitelist models.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base


class Vote(Base):
    """
    One ballot cast by a user in a voting period.

    The unique constraint on (user_id, period_id) is the final guard
    against double voting when two requests race.
    """

    __tablename__ = "votes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )
    candidate_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("candidates.id", ondelete="CASCADE"),
    )
    period_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("voting_periods.id", ondelete="CASCADE"),
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    __table_args__ = (UniqueConstraint("user_id", "period_id", name="uq_votes_user_period"),)


class EligibleVoter(Base):
    """Whitelist entry matched by e-mail or national voter id."""

    __tablename__ = "eligible_voters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    voter_id: Mapped[Optional[str]] = mapped_column(String(30), nullable=True, index=True)
