# backend/app/routers/feedback_router.py
import logging
from functools import lru_cache
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from backend.app.schemas.feedback_schemas import FeedbackCreate, FeedbackRead
from backend.app.services.feedback_service import FeedbackService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/feedback", tags=["feedback"])


@lru_cache(maxsize=1)
def get_feedback_service() -> FeedbackService:
    return FeedbackService()


@router.post("", status_code=201, response_model=FeedbackRead)
async def store_feedback(request: FeedbackCreate, service: FeedbackService = Depends(get_feedback_service)):
    try:
        row = service.store_feedback(
            plan_id=request.plan_id,
            step_id=request.step_id,
            rating=request.rating,
            comment=request.comment,
            user_id=request.user_id,
        )
    except SQLAlchemyError as e:
        logger.error(f"Failed to store feedback for '{request.plan_id}': {e}")
        raise HTTPException(status_code=500, detail="Failed to store feedback")
    return FeedbackRead.model_validate(row, from_attributes=True)


# plan ids are free-text titles and may contain "/"
@router.get("/{plan_id:path}", response_model=List[FeedbackRead])
async def get_feedback(plan_id: str, service: FeedbackService = Depends(get_feedback_service)):
    try:
        rows = service.get_feedback(plan_id)
    except SQLAlchemyError as e:
        logger.error(f"Failed to read feedback for '{plan_id}': {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve feedback")
    return [FeedbackRead.model_validate(row, from_attributes=True) for row in rows]
