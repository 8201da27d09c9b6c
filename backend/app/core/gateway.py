# backend/app/core/gateway.py
import logging
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from backend.app.agents.base_agent import BaseAgent
from backend.app.core.agent_registry import AgentRegistry, build_default_registry
from backend.app.core.errors import RateLimitedError
from backend.app.schemas.tutor_schemas import (
    ExplainConceptInput,
    ExplainConceptOutput,
    GenerateExerciseInput,
    GenerateExerciseOutput,
    GenerateLearningPlanInput,
    ImproveCodeInput,
    ImproveCodeOutput,
    LearningPlan,
)
from backend.app.utils.rate_limiter import RateLimiter, limiter as default_limiter

logger = logging.getLogger(__name__)


class AIGateway(ABC):
    """
    The AI generation boundary seen by a tutoring session.
    Each operation either returns its validated output or raises GatewayError.
    """

    @abstractmethod
    async def generate_learning_plan(self, request: GenerateLearningPlanInput) -> LearningPlan:
        pass

    @abstractmethod
    async def generate_exercise(self, request: GenerateExerciseInput) -> GenerateExerciseOutput:
        pass

    @abstractmethod
    async def improve_code(self, request: ImproveCodeInput) -> ImproveCodeOutput:
        pass

    @abstractmethod
    async def explain_concept(self, request: ExplainConceptInput) -> ExplainConceptOutput:
        pass


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type(RateLimitedError),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
async def call_agent_with_retry(agent: BaseAgent, request: BaseModel, limiter: RateLimiter):
    """Run one agent call, backing off only on provider rate limits."""
    await limiter.wait()
    return await agent.run(request)


class LLMGateway(AIGateway):
    """Gateway backed by the LLM agents in the registry."""

    def __init__(self, registry: Optional[AgentRegistry] = None, limiter: Optional[RateLimiter] = None):
        self._registry = registry
        self.limiter = limiter or default_limiter

    @property
    def registry(self) -> AgentRegistry:
        # Built on first dispatch so a missing API key only fails AI calls
        if self._registry is None:
            self._registry = build_default_registry()
        return self._registry

    async def _dispatch(self, agent_name: str, request: BaseModel):
        agent = self.registry.get(agent_name)
        logger.info(f"Dispatching {type(request).__name__} to {agent}")
        return await call_agent_with_retry(agent, request, self.limiter)

    async def generate_learning_plan(self, request: GenerateLearningPlanInput) -> LearningPlan:
        return await self._dispatch("tutor", request)

    async def generate_exercise(self, request: GenerateExerciseInput) -> GenerateExerciseOutput:
        return await self._dispatch("exercise", request)

    async def improve_code(self, request: ImproveCodeInput) -> ImproveCodeOutput:
        return await self._dispatch("evaluator", request)

    async def explain_concept(self, request: ExplainConceptInput) -> ExplainConceptOutput:
        return await self._dispatch("explainer", request)
