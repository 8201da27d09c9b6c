# backend/app/agents/tutor_agent.py
import logging
from typing import Optional

import httpx

from backend.app.agents.base_agent import BaseAgent
from backend.app.agents.agent_prompts.tutor_prompt import tutor_prompt
from backend.app.core.errors import GatewayError
from backend.app.core.llm_client import LLMClient
from backend.app.core.tools.url_fetcher import assemble_content
from backend.app.schemas.tutor_schemas import GenerateLearningPlanInput, LearningPlan

logger = logging.getLogger(__name__)


class TutorAgent(BaseAgent):
    """
    Tutor Agent that uses an LLM to turn the learner's material into a learning plan.
    Text behind the documentation / code URLs is fetched and appended to the
    pasted content before the model sees it.
    """

    template = tutor_prompt

    def __init__(
        self,
        name: str = "tutor",
        llm: Optional[LLMClient] = None,
        model: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(name, llm=llm, model=model)
        self.http_client = http_client

    async def run(self, request: GenerateLearningPlanInput) -> LearningPlan:
        if not request.has_source():
            raise GatewayError("Either content, documentation URL, or code URL must be provided.")

        content = await assemble_content(
            request.content,
            documentation_url=request.documentation_url,
            code_url=request.code_url,
            client=self.http_client,
        )
        if not content.strip():
            raise GatewayError("No content provided. Please paste content or provide valid URLs that return text.")

        data = await self._call_llm_json({"content": content})
        plan = self._validate(LearningPlan, data)
        logger.info(f"Learning plan '{plan.title}' generated with {len(plan.learning_steps)} step(s)")
        return plan
