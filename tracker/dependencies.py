"""
FastAPI dependencies. Each request gets its own database session, wrapped
in a RecordStore and shared by the controllers it builds.
"""
from datetime import datetime
from typing import Callable

from fastapi import Depends
from sqlmodel import Session

from tracker import timefmt
from tracker.db import get_session
from tracker.errors import NotFoundError
from tracker.services import MealController, QueryService, SleepSessionController
from tracker.store import RecordStore


def get_clock() -> Callable[[], datetime]:
    return timefmt.now


def get_record_id(record_id: str) -> int:
    """Path id of a record; an id that is not a number matches no record."""
    try:
        return int(record_id)
    except ValueError:
        raise NotFoundError("Record not found")


def get_store(db: Session = Depends(get_session)) -> RecordStore:
    return RecordStore(db)


def get_sleep_controller(
    store: RecordStore = Depends(get_store),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> SleepSessionController:
    return SleepSessionController(store, clock)


def get_meal_controller(
    store: RecordStore = Depends(get_store),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> MealController:
    return MealController(store, clock)


def get_query_service(
    store: RecordStore = Depends(get_store),
    sleep: SleepSessionController = Depends(get_sleep_controller),
    meals: MealController = Depends(get_meal_controller),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> QueryService:
    return QueryService(store, sleep, meals, clock)
