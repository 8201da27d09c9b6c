# backend/app/services/feedback_service.py
import logging
from typing import List, Optional

from sqlalchemy.engine import Engine
from sqlmodel import select

from backend.app.database.models import FeedbackRating
from backend.app.database.session import engine as default_engine, get_session, init_db

logger = logging.getLogger(__name__)


class FeedbackService:
    """Append-only store for plan / step ratings."""

    def __init__(self, engine: Optional[Engine] = None):
        self.engine = engine or default_engine
        init_db(self.engine)

    def store_feedback(
        self,
        plan_id: str,
        rating: str,
        step_id: Optional[int] = None,
        comment: Optional[str] = None,
        user_id: str = "anonymous",
    ) -> FeedbackRating:
        row = FeedbackRating(
            plan_id=plan_id,
            step_id=step_id,
            rating=rating,
            comment=comment,
            user_id=user_id or "anonymous",
        )
        with get_session(self.engine) as session:
            session.add(row)
            session.commit()
            session.refresh(row)
        logger.info(f"Stored {rating} for plan '{plan_id}' (step {step_id}) as id {row.id}")
        return row

    def get_feedback(self, plan_id: str) -> List[FeedbackRating]:
        """Ratings for one plan, newest first."""
        with get_session(self.engine) as session:
            statement = (
                select(FeedbackRating)
                .where(FeedbackRating.plan_id == plan_id)
                .order_by(FeedbackRating.timestamp.desc(), FeedbackRating.id.desc())
            )
            return list(session.exec(statement).all())

    def list_all(self) -> List[FeedbackRating]:
        with get_session(self.engine) as session:
            statement = select(FeedbackRating).order_by(
                FeedbackRating.timestamp.desc(), FeedbackRating.id.desc()
            )
            return list(session.exec(statement).all())
