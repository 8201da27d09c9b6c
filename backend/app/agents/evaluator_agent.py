# backend/app/agents/evaluator_agent.py
from typing import Optional

from backend.app.agents.base_agent import BaseAgent
from backend.app.agents.agent_prompts.evaluator_prompt import evaluator_prompt
from backend.app.core.llm_client import LLMClient
from backend.app.schemas.tutor_schemas import ImproveCodeInput, ImproveCodeOutput


class EvaluatorAgent(BaseAgent):
    """Reviews learner code against the exercise question and suggests improvements."""

    template = evaluator_prompt

    def __init__(self, name: str = "evaluator", llm: Optional[LLMClient] = None, model: Optional[str] = None):
        super().__init__(name, llm=llm, model=model)

    async def run(self, request: ImproveCodeInput) -> ImproveCodeOutput:
        data = await self._call_llm_json({
            "code": request.code,
            "language": request.language,
            "question": request.question,
        })
        return self._validate(ImproveCodeOutput, data)
