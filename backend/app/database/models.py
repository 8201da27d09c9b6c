# backend/app/database/models.py
from datetime import datetime, timezone
from typing import Optional

from sqlmodel import SQLModel, Field


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ----------------------------------------------------------------------
# Models
# ----------------------------------------------------------------------
class FeedbackRating(SQLModel, table=True):
    """One thumbs-up/down rating of a learning plan (or one of its steps). Append-only."""
    __tablename__ = "feedback"

    id: Optional[int] = Field(default=None, primary_key=True)
    # ISO-8601 UTC, stored as text so it sorts lexically
    timestamp: str = Field(default_factory=utc_now_iso, index=True)
    plan_id: str = Field(index=True)
    step_id: Optional[int] = None
    rating: str
    comment: Optional[str] = None
    user_id: str = Field(default="anonymous")
