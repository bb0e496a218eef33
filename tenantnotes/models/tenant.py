from __future__ import annotations

from typing import Literal

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from tenantnotes.models.base import TimestampedBase

Plan = Literal["free", "pro"]

UNLIMITED_NOTES = -1


class Tenant(TimestampedBase):
    __tablename__ = "tenants"
    __table_args__ = (
        CheckConstraint("plan IN ('free', 'pro')", name="ck_tenants_plan"),
        CheckConstraint(
            "(plan = 'pro' AND note_limit = -1) OR (plan = 'free' AND note_limit > 0)",
            name="ck_tenants_plan_note_limit",
        ),
    )

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    slug: Mapped[str] = mapped_column(String(63), unique=True, nullable=False, index=True)
    plan: Mapped[str] = mapped_column(String(20), nullable=False, default="free")
    note_limit: Mapped[int] = mapped_column(nullable=False, default=3)
