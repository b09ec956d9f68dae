from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from tracker.dependencies import get_meal_controller, get_record_id
from tracker.services import MealController

router = APIRouter(prefix="/api", tags=["meals"])


class MealRequest(BaseModel):
    mealType: Optional[str] = None


class CustomMealRequest(BaseModel):
    meal_time: Optional[str] = None
    meal_type: Optional[str] = None


@router.post("/meal-record")
def record_meal(
    req: Optional[MealRequest] = None,
    controller: MealController = Depends(get_meal_controller),
):
    """Log a meal eaten now. The body is optional."""
    return controller.log(req.mealType if req else None)


@router.get("/meal-records")
def list_meal_records(controller: MealController = Depends(get_meal_controller)):
    return controller.list()


@router.post("/meal-records/custom")
def add_meal_record(
    req: Optional[CustomMealRequest] = None,
    controller: MealController = Depends(get_meal_controller),
):
    req = req or CustomMealRequest()
    return controller.insert_custom(req.meal_time, req.meal_type)


@router.delete("/meal-records/{record_id}")
def delete_meal_record(
    target_id: int = Depends(get_record_id),
    controller: MealController = Depends(get_meal_controller),
):
    return controller.remove(target_id)
