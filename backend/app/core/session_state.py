# backend/app/core/session_state.py
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from backend.app.schemas.tutor_schemas import (
    ExplainConceptOutput,
    LearningMode,
    LearningPlan,
    LearningStep,
)


class OperationKind(str, Enum):
    PLAN = "plan"
    EXERCISE = "exercise"
    IMPROVE = "improve"
    SUBMIT = "submit"
    EXPLANATION = "explanation"


class NoticeLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ExpandedPanel(str, Enum):
    EXERCISE = "exercise"
    CODE = "code"


class Notice(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    level: NoticeLevel = NoticeLevel.INFO


class Exercise(BaseModel):
    """
    A generated exercise plus the step context it was generated from.
    exercise_id is the token of the request that produced it, so two loads of
    an identical question still differ.
    """
    model_config = ConfigDict(frozen=True)

    exercise_id: int
    question: str
    code_snippet: Optional[str] = None
    solution: str
    topic: str
    documentation: str
    example_code: str


class Feedback(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: Optional[str] = None
    suggestions: Optional[str] = None
    is_correct: Optional[bool] = None


Explanation = ExplainConceptOutput


class PendingRequests(BaseModel):
    """Latest issued request token per operation kind; None when idle."""
    model_config = ConfigDict(frozen=True)

    plan: Optional[int] = None
    exercise: Optional[int] = None
    improve: Optional[int] = None
    submit: Optional[int] = None
    explanation: Optional[int] = None

    def get(self, kind: OperationKind) -> Optional[int]:
        return getattr(self, kind.value)

    def issue(self, kind: OperationKind, token: int) -> "PendingRequests":
        return self.model_copy(update={kind.value: token})

    def clear(self, *kinds: OperationKind) -> "PendingRequests":
        return self.model_copy(update={kind.value: None for kind in kinds})


class SessionState(BaseModel):
    """
    Immutable snapshot of one tutoring session.
    Transitions never mutate a snapshot; they return a new one.
    """
    model_config = ConfigDict(frozen=True)

    plan: Optional[LearningPlan] = None
    step_index: Optional[int] = None
    pending_step_index: Optional[int] = None
    exercise: Optional[Exercise] = None
    code: str = ""
    feedback: Optional[Feedback] = None
    explanation: Optional[Explanation] = None
    mode: LearningMode = LearningMode.HAND_HOLDING
    expanded_panel: Optional[ExpandedPanel] = None
    pending: PendingRequests = PendingRequests()
    next_token: int = 1
    notices: Tuple[Notice, ...] = ()

    def is_loading(self, kind: OperationKind) -> bool:
        return self.pending.get(kind) is not None

    @property
    def loading(self) -> Dict[str, bool]:
        return {kind.value: self.is_loading(kind) for kind in OperationKind}

    @property
    def active_step(self) -> Optional[LearningStep]:
        if self.plan is None or self.step_index is None:
            return None
        return self.plan.learning_steps[self.step_index]

    def with_notice(self, title: str, description: str, level: NoticeLevel = NoticeLevel.INFO) -> "SessionState":
        notice = Notice(title=title, description=description, level=level)
        return self.model_copy(update={"notices": self.notices + (notice,)})

    def public_view(self) -> Dict[str, Any]:
        """JSON-ready snapshot for the API; request bookkeeping stays private."""
        view = self.model_dump(mode="json", exclude={"pending", "next_token", "notices"})
        view["loading"] = self.loading
        return view
