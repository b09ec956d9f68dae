"""
Date-range filtering and trailing-window statistics.
"""
from collections import Counter, defaultdict
from datetime import datetime
from typing import Callable

from tracker import config, timefmt
from tracker.errors import ValidationError
from tracker.services.meals import MealController
from tracker.services.sleep import SleepSessionController
from tracker.store import RecordStore


class QueryService:
    def __init__(
        self,
        store: RecordStore,
        sleep: SleepSessionController,
        meals: MealController,
        clock: Callable[[], datetime] = timefmt.now,
    ):
        self.store = store
        self.sleep = sleep
        self.meals = meals
        self.clock = clock

    def filter(self, kind: str | None, start: str | None, end: str | None) -> list[dict]:
        if not kind or not start or not end:
            raise ValidationError("Missing required parameters: type, start, end")
        listings = {"sleep": self.sleep.list_in_range, "meal": self.meals.list_in_range}
        if kind not in listings:
            raise ValidationError(f"Invalid record type: {kind}")
        return listings[kind](timefmt.canonical(start), timefmt.canonical(end))

    def statistics(self, days: int = config.STATISTICS_DAYS) -> dict:
        """
        Sleep and meal totals for the last ``days`` days.

        Sleep minutes are bucketed by the local date the session started on;
        meals are counted per type.
        """
        if days < 0:
            raise ValidationError("days must not be negative")
        window_start = timefmt.days_before(self.clock(), days)

        sleep_rows = self.store.closed_sleep_between(window_start)
        total_minutes = 0
        by_date: dict[str, int] = defaultdict(int)
        for row in sleep_rows:
            minutes = timefmt.duration(row.sleep_start, row.sleep_end).total_minutes
            total_minutes += minutes
            by_date[timefmt.local_date(row.sleep_start)] += minutes
        avg_minutes = timefmt.round_half_up(total_minutes / len(sleep_rows)) if sleep_rows else 0

        meal_rows = self.store.meals_between(window_start)
        by_type = Counter(row.meal_type for row in meal_rows)

        return {
            "days": days,
            "sleep": {
                "totalRecords": len(sleep_rows),
                "totalMinutes": total_minutes,
                "totalHours": timefmt.round_half_up(total_minutes / 60 * 10) / 10,
                "avgMinutes": avg_minutes,
                "avgHours": timefmt.round_half_up(avg_minutes / 60 * 10) / 10,
                "byDate": dict(by_date),
            },
            "meals": {
                "totalRecords": len(meal_rows),
                "byType": dict(by_type),
            },
        }
