# foodchef/api/endpoints/menu.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from foodchef.api.deps import get_catalog_manager, get_feedback_manager, success, unwrap
from foodchef.models.schemas import FoodReviewCreate
from foodchef.services.catalog import CatalogManager
from foodchef.services.feedback_manager import FeedbackManager

router = APIRouter()


@router.get("")
def list_menu(category_id: Optional[int] = None, catalog: CatalogManager = Depends(get_catalog_manager)):
    return success(catalog.list_menu(category_id))


@router.get("/{food_id}")
def get_food(food_id: int, catalog: CatalogManager = Depends(get_catalog_manager)):
    food = catalog.get_food(food_id)
    if not food:
        raise HTTPException(status_code=404, detail="Food item not found")
    return success(food)


@router.get("/{food_id}/reviews")
def list_reviews(
    food_id: int,
    limit: int = Query(10, ge=1, le=100),
    feedback: FeedbackManager = Depends(get_feedback_manager),
):
    return success(feedback.get_food_reviews(food_id, limit))


@router.post("/{food_id}/reviews")
def submit_review(food_id: int, review: FoodReviewCreate, feedback: FeedbackManager = Depends(get_feedback_manager)):
    return unwrap(feedback.submit_food_review({**review.model_dump(), "food_id": food_id}))
