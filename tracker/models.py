from __future__ import annotations

from typing import Optional

from sqlmodel import Field, SQLModel

from tracker.timefmt import now_iso


class SleepRecord(SQLModel, table=True):
    """A sleep session; ``sleep_end`` is None while the session is open."""

    __tablename__ = "sleep_records"

    id: Optional[int] = Field(default=None, primary_key=True)
    sleep_start: str = Field(index=True)
    sleep_end: Optional[str] = Field(default=None, index=True)
    created_at: str = Field(default_factory=now_iso)
    updated_at: str = Field(default_factory=now_iso)

    @property
    def is_open(self) -> bool:
        return self.sleep_end is None


class MealRecord(SQLModel, table=True):
    __tablename__ = "meal_records"

    id: Optional[int] = Field(default=None, primary_key=True)
    meal_time: str = Field(index=True)
    meal_type: str
    created_at: str = Field(default_factory=now_iso)
