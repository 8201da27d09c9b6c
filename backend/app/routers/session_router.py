# backend/app/routers/session_router.py
import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from backend.app.core.gateway import LLMGateway
from backend.app.core.orchestrator import SessionOrchestrator, SessionRegistry
from backend.app.schemas.tutor_schemas import LearningMode
from backend.app.schemas.session_schemas import (
    ChangeModeRequest,
    CodeRequest,
    ExpandRequest,
    GeneratePlanRequest,
    SelectStepRequest,
    SessionResponse,
    StartSessionRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/session", tags=["session"])


@lru_cache(maxsize=1)
def get_registry() -> SessionRegistry:
    """Process-wide session registry, built on first use."""
    return SessionRegistry(LLMGateway())


def get_orchestrator(thread_id: str, registry: SessionRegistry = Depends(get_registry)) -> SessionOrchestrator:
    session = registry.get(thread_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found or expired")
    return session


def session_response(session: SessionOrchestrator) -> SessionResponse:
    return SessionResponse(
        thread_id=session.thread_id,
        state=session.state.public_view(),
        notices=session.drain_notices(),
    )


@router.post("/start")
async def start_session(request: Optional[StartSessionRequest] = None, registry: SessionRegistry = Depends(get_registry)):
    mode = request.mode if request else LearningMode.HAND_HOLDING
    session = await registry.create(mode)
    return session_response(session)


@router.get("/{thread_id}")
async def get_session_state(session: SessionOrchestrator = Depends(get_orchestrator)):
    return session_response(session)


@router.delete("/{thread_id}")
async def delete_session(thread_id: str, registry: SessionRegistry = Depends(get_registry)):
    if not registry.remove(thread_id):
        raise HTTPException(status_code=404, detail="Session not found or expired")
    return {"thread_id": thread_id, "status": "deleted"}


@router.post("/{thread_id}/plan")
async def generate_plan(request: GeneratePlanRequest, session: SessionOrchestrator = Depends(get_orchestrator)):
    await session.generate_plan(
        content=request.content,
        documentation_url=str(request.documentation_url) if request.documentation_url else None,
        code_url=str(request.code_url) if request.code_url else None,
    )
    return session_response(session)


@router.post("/{thread_id}/step")
async def select_step(request: SelectStepRequest, session: SessionOrchestrator = Depends(get_orchestrator)):
    await session.select_step(request.index)
    return session_response(session)


@router.post("/{thread_id}/step/close")
async def close_step(session: SessionOrchestrator = Depends(get_orchestrator)):
    await session.deselect_step()
    return session_response(session)


@router.post("/{thread_id}/next")
async def next_step(session: SessionOrchestrator = Depends(get_orchestrator)):
    await session.next_step()
    return session_response(session)


@router.post("/{thread_id}/prev")
async def prev_step(session: SessionOrchestrator = Depends(get_orchestrator)):
    await session.prev_step()
    return session_response(session)


@router.post("/{thread_id}/mode")
async def change_mode(request: ChangeModeRequest, session: SessionOrchestrator = Depends(get_orchestrator)):
    await session.change_mode(request.mode)
    return session_response(session)


@router.post("/{thread_id}/code")
async def edit_code(request: CodeRequest, session: SessionOrchestrator = Depends(get_orchestrator)):
    await session.edit_code(request.code)
    return session_response(session)


@router.post("/{thread_id}/run")
async def run_code(request: CodeRequest, session: SessionOrchestrator = Depends(get_orchestrator)):
    await session.run_code(request.code)
    return session_response(session)


@router.post("/{thread_id}/improve")
async def improve_code(request: CodeRequest, session: SessionOrchestrator = Depends(get_orchestrator)):
    await session.improve_code(request.code)
    return session_response(session)


@router.post("/{thread_id}/submit")
async def submit_code(request: CodeRequest, session: SessionOrchestrator = Depends(get_orchestrator)):
    await session.submit_code(request.code)
    return session_response(session)


@router.post("/{thread_id}/explain")
async def explain_concept(session: SessionOrchestrator = Depends(get_orchestrator)):
    await session.explain_concept()
    return session_response(session)


@router.post("/{thread_id}/expand")
async def toggle_expand(request: ExpandRequest, session: SessionOrchestrator = Depends(get_orchestrator)):
    await session.toggle_expand(request.panel)
    return session_response(session)
