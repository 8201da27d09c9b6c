# backend/app/core/orchestrator.py
import asyncio
import logging
import time
import uuid
from typing import Dict, List, Optional

from backend.app.core import settings
from backend.app.core import transitions as t
from backend.app.core.errors import GatewayError, GatewayTimeoutError
from backend.app.core.gateway import AIGateway
from backend.app.core.session_state import ExpandedPanel, Notice, OperationKind, SessionState
from backend.app.schemas.tutor_schemas import GenerateLearningPlanInput, LearningMode

logger = logging.getLogger(__name__)

# kind -> (gateway method, resolve transition, fail transition)
HANDLERS = {
    OperationKind.PLAN: ("generate_learning_plan", t.resolve_plan, t.fail_plan),
    OperationKind.EXERCISE: ("generate_exercise", t.resolve_exercise, t.fail_exercise),
    OperationKind.IMPROVE: ("improve_code", t.resolve_improve, t.fail_improve),
    OperationKind.SUBMIT: ("improve_code", t.resolve_submit, t.fail_submit),
    OperationKind.EXPLANATION: ("explain_concept", t.resolve_explanation, t.fail_explanation),
}


class SessionOrchestrator:
    """
    Async driver for one tutoring session.

    Intent methods apply a pure transition, await whatever gateway call it
    issued and fold the result back in. Several intents may be in flight at
    once; stale results are dropped by the transitions themselves.
    """

    def __init__(
        self,
        gateway: AIGateway,
        mode: LearningMode = LearningMode.HAND_HOLDING,
        timeout: float = settings.GATEWAY_TIMEOUT_SECONDS,
        thread_id: Optional[str] = None,
    ):
        self.thread_id = thread_id or uuid.uuid4().hex
        self.gateway = gateway
        self.timeout = timeout
        self.state: SessionState = t.initial_state(mode)
        self.last_active = time.monotonic()

    def touch(self):
        self.last_active = time.monotonic()

    # ---------------------------------------------------------------
    # Gateway plumbing
    # ---------------------------------------------------------------
    async def _call_gateway(self, call: t.PendingCall):
        method_name = HANDLERS[call.kind][0]
        method = getattr(self.gateway, method_name)
        try:
            return await asyncio.wait_for(method(call.request), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise GatewayTimeoutError(
                f"The AI service did not respond within {self.timeout:g} seconds."
            ) from e
        except GatewayError:
            raise
        except Exception as e:
            logger.exception(f"[{self.thread_id}] Unexpected failure in {method_name}")
            raise GatewayError(str(e) or type(e).__name__) from e

    async def _run(self, outcome: t.Outcome) -> SessionState:
        self.state, call = outcome
        while call is not None:
            _, resolve, fail = HANDLERS[call.kind]
            logger.info(f"[{self.thread_id}] {call.kind.value} request issued (token {call.token})")
            try:
                result = await self._call_gateway(call)
            except GatewayError as e:
                self.state, call = fail(self.state, call, e)
            else:
                self.state, call = resolve(self.state, call, result)
        return self.state

    # ---------------------------------------------------------------
    # Intents
    # ---------------------------------------------------------------
    async def start(self) -> SessionState:
        """Load the default exercise for a fresh session."""
        return await self._run(t.request_default_exercise(self.state))

    async def generate_plan(
        self,
        content: str = "",
        documentation_url: Optional[str] = None,
        code_url: Optional[str] = None,
    ) -> SessionState:
        source = GenerateLearningPlanInput(
            content=content or "",
            documentation_url=documentation_url,
            code_url=code_url,
        )
        return await self._run(t.request_plan(self.state, source))

    async def select_step(self, index: int) -> SessionState:
        return await self._run(t.request_step(self.state, index))

    async def deselect_step(self) -> SessionState:
        self.state = t.deselect_step(self.state)
        return self.state

    async def next_step(self) -> SessionState:
        return await self._run(t.next_step(self.state))

    async def prev_step(self) -> SessionState:
        return await self._run(t.prev_step(self.state))

    async def change_mode(self, mode: LearningMode) -> SessionState:
        return await self._run(t.change_mode(self.state, mode))

    async def edit_code(self, code: str) -> SessionState:
        self.state = t.edit_code(self.state, code)
        return self.state

    async def run_code(self, code: str) -> SessionState:
        logger.info(f"[{self.thread_id}] Code submitted for simulation:\n{code}")
        self.state = t.run_code(self.state, code)
        return self.state

    async def improve_code(self, code: str) -> SessionState:
        return await self._run(t.request_improve(self.state, code))

    async def submit_code(self, code: str) -> SessionState:
        return await self._run(t.request_submit(self.state, code))

    async def explain_concept(self) -> SessionState:
        return await self._run(t.request_explanation(self.state))

    async def toggle_expand(self, panel: ExpandedPanel) -> SessionState:
        self.state = t.toggle_expand(self.state, panel)
        return self.state

    def drain_notices(self) -> List[Notice]:
        notices = list(self.state.notices)
        self.state = self.state.model_copy(update={"notices": ()})
        return notices


class SessionRegistry:
    """
    In-memory session storage keyed by thread_id.
    Sessions idle for longer than ttl seconds are dropped on the next access.
    """

    def __init__(
        self,
        gateway: AIGateway,
        timeout: float = settings.GATEWAY_TIMEOUT_SECONDS,
        ttl: float = settings.SESSION_IDLE_TTL_SECONDS,
    ):
        self.gateway = gateway
        self.timeout = timeout
        self.ttl = ttl
        self.sessions: Dict[str, SessionOrchestrator] = {}

    def prune_idle(self) -> int:
        if not self.ttl:
            return 0
        cutoff = time.monotonic() - self.ttl
        expired = [tid for tid, s in self.sessions.items() if s.last_active < cutoff]
        for thread_id in expired:
            del self.sessions[thread_id]
            logger.info(f"Session {thread_id} expired after {self.ttl:g}s idle")
        return len(expired)

    async def create(self, mode: LearningMode = LearningMode.HAND_HOLDING) -> SessionOrchestrator:
        self.prune_idle()
        session = SessionOrchestrator(self.gateway, mode=mode, timeout=self.timeout)
        self.sessions[session.thread_id] = session
        logger.info(f"Session {session.thread_id} started in {mode.value} mode")
        await session.start()
        return session

    def get(self, thread_id: str) -> Optional[SessionOrchestrator]:
        self.prune_idle()
        session = self.sessions.get(thread_id)
        if session is not None:
            session.touch()
        return session

    def remove(self, thread_id: str) -> bool:
        removed = self.sessions.pop(thread_id, None)
        if removed is not None:
            logger.info(f"Session {thread_id} discarded")
        return removed is not None

    def __len__(self) -> int:
        self.prune_idle()
        return len(self.sessions)
