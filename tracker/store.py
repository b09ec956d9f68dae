"""
RecordStore: every read and write of sleep_records and meal_records.

Timestamps are canonical strings (see ``tracker.timefmt``), so range
filters are plain string comparisons.
"""
import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from tracker.errors import NotFoundError, StorageError
from tracker.models import MealRecord, SleepRecord
from tracker.timefmt import now_iso

logger = logging.getLogger(__name__)


class RecordStore:
    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def _guard(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("Storage failure while trying to %s", action)
            raise StorageError(f"Failed to {action}") from e

    def _save(self, record, action: str):
        with self._guard(action):
            self.session.add(record)
            self.session.commit()
            self.session.refresh(record)
        return record

    def _delete(self, model, record_id: int, action: str) -> None:
        with self._guard(action):
            record = self.session.get(model, record_id)
            if record is None:
                raise NotFoundError("Record not found")
            self.session.delete(record)
            self.session.commit()

    # --- sleep ---

    def insert_sleep(self, start: str, end: str | None = None, stamp: str | None = None) -> SleepRecord:
        """Insert a session; ``stamp`` fills created_at/updated_at (default: now)."""
        stamp = stamp or now_iso()
        record = SleepRecord(sleep_start=start, sleep_end=end, created_at=stamp, updated_at=stamp)
        return self._save(record, "insert sleep record")

    def update_sleep(self, record: SleepRecord, **changes) -> SleepRecord:
        changes.setdefault("updated_at", now_iso())
        for field, value in changes.items():
            setattr(record, field, value)
        return self._save(record, "update sleep record")

    def latest_open_sleep(self) -> SleepRecord | None:
        statement = (
            select(SleepRecord)
            .where(col(SleepRecord.sleep_end).is_(None))
            .order_by(col(SleepRecord.id).desc())
            .limit(1)
        )
        with self._guard("query sleep status"):
            return self.session.exec(statement).first()

    def recent_closed_sleep(self, limit: int) -> list[SleepRecord]:
        statement = (
            select(SleepRecord)
            .where(col(SleepRecord.sleep_end).is_not(None))
            .order_by(col(SleepRecord.id).desc())
            .limit(limit)
        )
        with self._guard("query sleep records"):
            return list(self.session.exec(statement).all())

    def closed_sleep_between(self, lower: str, upper: str | None = None) -> list[SleepRecord]:
        """Closed sessions starting within [lower, upper], latest start first."""
        statement = select(SleepRecord).where(
            col(SleepRecord.sleep_end).is_not(None),
            col(SleepRecord.sleep_start) >= lower,
        )
        if upper is not None:
            statement = statement.where(col(SleepRecord.sleep_start) <= upper)
        statement = statement.order_by(col(SleepRecord.sleep_start).desc())
        with self._guard("query sleep records"):
            return list(self.session.exec(statement).all())

    def delete_sleep(self, record_id: int) -> None:
        self._delete(SleepRecord, record_id, "delete sleep record")

    # --- meals ---

    def insert_meal(self, time: str, category: str, stamp: str | None = None) -> MealRecord:
        record = MealRecord(meal_time=time, meal_type=category, created_at=stamp or now_iso())
        return self._save(record, "insert meal record")

    def recent_meals(self, limit: int) -> list[MealRecord]:
        statement = select(MealRecord).order_by(col(MealRecord.id).desc()).limit(limit)
        with self._guard("query meal records"):
            return list(self.session.exec(statement).all())

    def meals_between(self, lower: str, upper: str | None = None) -> list[MealRecord]:
        """Meals within [lower, upper], latest first."""
        statement = select(MealRecord).where(col(MealRecord.meal_time) >= lower)
        if upper is not None:
            statement = statement.where(col(MealRecord.meal_time) <= upper)
        statement = statement.order_by(col(MealRecord.meal_time).desc())
        with self._guard("query meal records"):
            return list(self.session.exec(statement).all())

    def delete_meal(self, record_id: int) -> None:
        self._delete(MealRecord, record_id, "delete meal record")
