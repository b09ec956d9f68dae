from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from tracker import config, timefmt
from tracker.errors import ValidationError
from tracker.store import RecordStore

logger = logging.getLogger(__name__)


class MealController:
    def __init__(
        self,
        store: RecordStore,
        clock: Callable[[], datetime] = timefmt.now,
        list_limit: int = config.MEAL_LIST_LIMIT,
        default_category: str = config.DEFAULT_MEAL_TYPE,
    ):
        self.store = store
        self.clock = clock
        self.list_limit = list_limit
        self.default_category = default_category

    def log(self, category: str | None = None) -> dict:
        """Record a meal eaten now."""
        stamp = timefmt.canonical(self.clock())
        record = self.store.insert_meal(stamp, category or self.default_category, stamp)
        logger.info("Meal %s logged (%s)", record.id, record.meal_type)
        return {"message": "Meal time recorded", "id": record.id}

    def insert_custom(self, time: str | None, category: str | None = None) -> dict:
        if not time:
            raise ValidationError("Missing required parameter: meal_time")
        record = self.store.insert_meal(
            timefmt.canonical(time), category or self.default_category, timefmt.canonical(self.clock())
        )
        logger.info("Meal %s added manually", record.id)
        return {
            "message": "Meal record added",
            "display": timefmt.display_meal(record.meal_time, record.meal_type),
            "id": record.id,
        }

    def remove(self, record_id: int) -> dict:
        self.store.delete_meal(record_id)
        logger.info("Meal record %s deleted", record_id)
        return {"message": "Deleted", "id": record_id}

    def list(self, limit: int | None = None) -> list[dict]:
        return [
            {"id": r.id, "display": timefmt.display_meal(r.meal_time, r.meal_type)}
            for r in self.store.recent_meals(limit or self.list_limit)
        ]

    def list_in_range(self, lower: str, upper: str) -> list[dict]:
        return [
            {
                "id": r.id,
                "display": timefmt.display_meal(r.meal_time, r.meal_type),
                "time": r.meal_time,
                "type": r.meal_type,
            }
            for r in self.store.meals_between(lower, upper)
        ]
