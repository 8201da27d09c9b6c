# backend/app/schemas/feedback_schemas.py
from pydantic import BaseModel, Field
from typing import Literal, Optional


class FeedbackCreate(BaseModel):
    plan_id: str = Field(min_length=1)
    step_id: Optional[int] = None
    rating: Literal["thumbs_up", "thumbs_down"]
    comment: Optional[str] = None
    user_id: str = "anonymous"


class FeedbackRead(BaseModel):
    id: int
    timestamp: str
    plan_id: str
    step_id: Optional[int] = None
    rating: str
    comment: Optional[str] = None
    user_id: str
