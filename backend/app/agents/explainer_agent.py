# backend/app/agents/explainer_agent.py
from typing import Optional

from backend.app.agents.base_agent import BaseAgent
from backend.app.agents.agent_prompts.explainer_prompt import explainer_prompt
from backend.app.core.llm_client import LLMClient
from backend.app.schemas.tutor_schemas import ExplainConceptInput, ExplainConceptOutput


class ExplainerAgent(BaseAgent):
    template = explainer_prompt

    def __init__(self, name: str = "explainer", llm: Optional[LLMClient] = None, model: Optional[str] = None):
        super().__init__(name, llm=llm, model=model)

    async def run(self, request: ExplainConceptInput) -> ExplainConceptOutput:
        data = await self._call_llm_json({
            "concept": request.concept,
            "documentation": request.documentation,
            "example_code": request.example_code,
        })
        return self._validate(ExplainConceptOutput, data)
