# backend/app/agents/base_agent.py
import json
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from backend.app.core.errors import GatewayResponseError
from backend.app.core.llm_client import LLMClient

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseAgent(ABC):
    """
    Base class for the gateway agents (Tutor, Exercise, Evaluator, Explainer).
    Every agent owns one prompt template and implements .run() for a single
    request schema, returning a validated response schema.
    """

    template: str = ""

    def __init__(self, name: str, llm: Optional[LLMClient] = None, model: Optional[str] = None):
        self.name = name
        self.llm = llm or LLMClient(model=model)

    @abstractmethod
    async def run(self, request: BaseModel) -> BaseModel:
        """Execute the agent's single operation."""
        pass

    async def _call_llm_json(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        user_prompt = json.dumps(payload, ensure_ascii=False)
        raw = await self.llm.chat(system_prompt=self.template, user_prompt=user_prompt)
        return parse_json_object(raw)

    def _validate(self, schema: Type[ModelT], data: Dict[str, Any]) -> ModelT:
        try:
            return schema.model_validate(data)
        except ValidationError as e:
            raise GatewayResponseError(
                f"{self.name} returned data that does not match {schema.__name__}: {e.error_count()} error(s)"
            ) from e

    def __repr__(self):
        return f"<Agent name={self.name}>"


def parse_json_object(raw: str) -> Dict[str, Any]:
    """
    Parse the model's reply as a JSON object. Models sometimes wrap it in
    backticks or prose, so fall back to the outermost {...} span.
    """
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        match = re.search(r"\{[\s\S]*\}", raw)
        if not match:
            raise GatewayResponseError(f"No JSON found in model output: {raw[:200]}")
        try:
            parsed = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise GatewayResponseError(f"Failed JSON parse after extraction: {e}") from e

    if not isinstance(parsed, dict):
        raise GatewayResponseError(f"Model returned {type(parsed).__name__} instead of a JSON object")
    return parsed
