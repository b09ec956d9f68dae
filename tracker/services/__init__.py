from tracker.services.meals import MealController
from tracker.services.query import QueryService
from tracker.services.sleep import Closed, Open, SessionState, SleepSessionController

__all__ = [
    "Closed",
    "MealController",
    "Open",
    "QueryService",
    "SessionState",
    "SleepSessionController",
]
