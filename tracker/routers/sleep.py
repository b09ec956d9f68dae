"""
Sleep sessions: start/end timers, current status, listing,
manual entries and deletion.
"""
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from tracker.dependencies import get_record_id, get_sleep_controller
from tracker.services import SleepSessionController

router = APIRouter(prefix="/api", tags=["sleep"])


class CustomSleepRequest(BaseModel):
    sleep_start: Optional[str] = None
    sleep_end: Optional[str] = None


@router.post("/sleep-start")
def start_sleep(controller: SleepSessionController = Depends(get_sleep_controller)):
    """Start sleeping now. A second tap while asleep moves the start time instead."""
    return controller.start()


@router.post("/sleep-end")
def end_sleep(controller: SleepSessionController = Depends(get_sleep_controller)):
    """Wake up now. Closes the open session and returns its display string."""
    return controller.end()


@router.get("/sleep-status")
def sleep_status(controller: SleepSessionController = Depends(get_sleep_controller)):
    return controller.status()


@router.get("/sleep-records")
def list_sleep_records(controller: SleepSessionController = Depends(get_sleep_controller)):
    """Finished sessions, newest first."""
    return controller.list()


@router.post("/sleep-records/custom")
def add_sleep_record(
    req: Optional[CustomSleepRequest] = None,
    controller: SleepSessionController = Depends(get_sleep_controller),
):
    """Add a session with both ends given, e.g. one forgotten at the time."""
    req = req or CustomSleepRequest()
    return controller.insert_custom(req.sleep_start, req.sleep_end)


@router.delete("/sleep-records/{record_id}")
def delete_sleep_record(
    target_id: int = Depends(get_record_id),
    controller: SleepSessionController = Depends(get_sleep_controller),
):
    return controller.remove(target_id)
