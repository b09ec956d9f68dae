"""
Sleep sessions: start/end timers, status, manual entries and listings.

The session state is never kept in memory. Every call asks the store for
the latest row without an end time: if there is one the tracker is Open,
otherwise it is Closed.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Union

from tracker import config, timefmt
from tracker.errors import ValidationError
from tracker.models import SleepRecord
from tracker.store import RecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Open:
    record: SleepRecord


@dataclass(frozen=True)
class Closed:
    pass


SessionState = Union[Open, Closed]


class SleepSessionController:
    def __init__(
        self,
        store: RecordStore,
        clock: Callable[[], datetime] = timefmt.now,
        list_limit: int = config.SLEEP_LIST_LIMIT,
    ):
        self.store = store
        self.clock = clock
        self.list_limit = list_limit

    def _now(self) -> str:
        return timefmt.canonical(self.clock())

    def state(self) -> SessionState:
        record = self.store.latest_open_sleep()
        return Open(record) if record is not None else Closed()

    def start(self) -> dict:
        """Open a session, or move the start of the already open one to now."""
        stamp = self._now()
        state = self.state()
        if isinstance(state, Open):
            # repeated "going to sleep" taps restart the open session
            record = self.store.update_sleep(state.record, sleep_start=stamp, updated_at=stamp)
            logger.info("Sleep session %s restarted at %s", record.id, stamp)
            return {"message": "Sleep session updated", "id": record.id}
        record = self.store.insert_sleep(stamp, stamp=stamp)
        logger.info("Sleep session %s started at %s", record.id, stamp)
        return {"message": "Sleep started", "id": record.id}

    def end(self) -> dict:
        """Close the open session; without one, record a zero-length session."""
        stamp = self._now()
        state = self.state()
        if isinstance(state, Closed):
            record = self.store.insert_sleep(stamp, stamp, stamp)
            logger.info("No open sleep session, recorded wake-up %s as session %s", stamp, record.id)
            return {"message": "No open sleep session, wake-up time recorded", "id": record.id}
        record = self.store.update_sleep(state.record, sleep_end=stamp, updated_at=stamp)
        logger.info("Sleep session %s ended at %s", record.id, stamp)
        return {
            "message": "Sleep session completed",
            "display": timefmt.display_session(record.sleep_start, stamp),
            "id": record.id,
        }

    def status(self) -> dict:
        state = self.state()
        if isinstance(state, Open):
            return {"isSleeping": True, "startTime": state.record.sleep_start, "id": state.record.id}
        return {"isSleeping": False}

    def insert_custom(self, start: str | None, end: str | None) -> dict:
        """Add a finished session; overlaps and inverted ranges are accepted."""
        if not start or not end:
            raise ValidationError("Missing required parameters: sleep_start, sleep_end")
        record = self.store.insert_sleep(
            timefmt.canonical(start), timefmt.canonical(end), self._now()
        )
        logger.info("Sleep session %s added manually", record.id)
        return {
            "message": "Sleep record added",
            "display": timefmt.display_session(record.sleep_start, record.sleep_end),
            "id": record.id,
        }

    def remove(self, record_id: int) -> dict:
        self.store.delete_sleep(record_id)
        logger.info("Sleep record %s deleted", record_id)
        return {"message": "Deleted", "id": record_id}

    def list(self, limit: int | None = None) -> list[dict]:
        """Finished sessions, newest first."""
        records = self.store.recent_closed_sleep(limit or self.list_limit)
        return [
            {"id": r.id, "display": timefmt.display_session(r.sleep_start, r.sleep_end)}
            for r in records
        ]

    def list_in_range(self, lower: str, upper: str) -> list[dict]:
        """Finished sessions starting within canonical bounds [lower, upper]."""
        return [
            {
                "id": r.id,
                "display": timefmt.display_session(r.sleep_start, r.sleep_end),
                "start": r.sleep_start,
                "end": r.sleep_end,
            }
            for r in self.store.closed_sleep_between(lower, upper)
        ]
