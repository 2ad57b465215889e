"""
User model.

Holds the profile fields used for eligibility checks and result access.
Authentication happens upstream; tokens carry the user id.
"""

from datetime import date, datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy import JSON, Date, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base


class User(Base):
    """Registered voter or administrator."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    email: Mapped[Optional[str]] = mapped_column(String(255), unique=True, index=True, nullable=True)
    name: Mapped[str] = mapped_column(String(200))
    profile_picture: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # "admin" or "user"
    role: Mapped[str] = mapped_column(String(20), default="user", index=True)

    # Residence, compared case-insensitively against period scopes
    state: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    local_government: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)

    # Identity used for age and whitelist checks
    national_id: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    date_of_birth: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    registered_elections: Mapped[list] = mapped_column(JSON, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
