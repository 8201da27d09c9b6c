# backend/app/schemas/session_schemas.py
from pydantic import BaseModel, HttpUrl, field_validator
from typing import Any, Dict, List, Optional

from backend.app.core.session_state import ExpandedPanel, Notice
from backend.app.schemas.tutor_schemas import LearningMode


class StartSessionRequest(BaseModel):
    mode: LearningMode = LearningMode.HAND_HOLDING


class GeneratePlanRequest(BaseModel):
    content: str = ""
    documentation_url: Optional[HttpUrl] = None
    code_url: Optional[HttpUrl] = None

    @field_validator("documentation_url", "code_url", mode="before")
    @classmethod
    def blank_url_is_absent(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class SelectStepRequest(BaseModel):
    index: int


class ChangeModeRequest(BaseModel):
    mode: LearningMode


class CodeRequest(BaseModel):
    code: str


class ExpandRequest(BaseModel):
    panel: ExpandedPanel


class SessionResponse(BaseModel):
    thread_id: str
    state: Dict[str, Any]
    notices: List[Notice] = []
