"""
Cross-record queries: date-range filter and statistics.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from tracker import config
from tracker.dependencies import get_query_service
from tracker.services import QueryService

router = APIRouter(prefix="/api", tags=["records"])


@router.get("/records/filter")
def filter_records(
    kind: Optional[str] = Query(default=None, alias="type"),
    start: Optional[str] = None,
    end: Optional[str] = None,
    service: QueryService = Depends(get_query_service),
):
    """Sleep or meal records between start and end (inclusive), latest first."""
    return service.filter(kind, start, end)


@router.get("/statistics")
def get_statistics(
    days: int = config.STATISTICS_DAYS,
    service: QueryService = Depends(get_query_service),
):
    """Sleep totals and meal counts over the last `days` days."""
    return service.statistics(days)
