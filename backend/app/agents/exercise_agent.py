# backend/app/agents/exercise_agent.py
from typing import Optional

from backend.app.agents.base_agent import BaseAgent
from backend.app.agents.agent_prompts.exercise_prompt import exercise_prompt
from backend.app.core.llm_client import LLMClient
from backend.app.schemas.tutor_schemas import (
    GenerateExerciseInput,
    GenerateExerciseOutput,
    LearningMode,
)

DEFAULT_SNIPPET = "# TODO: Write your code here, following the question."


class ExerciseAgent(BaseAgent):
    """Generates one exercise per request; the snippet always honours the learning mode."""

    template = exercise_prompt

    def __init__(self, name: str = "exercise", llm: Optional[LLMClient] = None, model: Optional[str] = None):
        super().__init__(name, llm=llm, model=model)

    async def run(self, request: GenerateExerciseInput) -> GenerateExerciseOutput:
        data = await self._call_llm_json({
            "topic": request.topic,
            "documentation": request.documentation,
            "example_code": request.example_code,
            "learning_mode": request.learning_mode.value,
        })
        exercise = self._validate(GenerateExerciseOutput, data)
        return enforce_learning_mode(exercise, request.learning_mode)


def enforce_learning_mode(exercise: GenerateExerciseOutput, mode: LearningMode) -> GenerateExerciseOutput:
    # the snippet rule holds whatever the model returned
    if mode == LearningMode.CHALLENGE and exercise.code_snippet != "":
        return exercise.model_copy(update={"code_snippet": ""})
    if mode == LearningMode.HAND_HOLDING and not (exercise.code_snippet or "").strip():
        return exercise.model_copy(update={"code_snippet": DEFAULT_SNIPPET})
    return exercise
