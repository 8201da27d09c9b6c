# tests/fakes.py
import asyncio
from typing import Dict, List, Tuple

from backend.app.core.gateway import AIGateway
from backend.app.schemas.tutor_schemas import (
    ExplainConceptOutput,
    GenerateExerciseOutput,
    ImproveCodeOutput,
    LearningMode,
    LearningPlan,
    LearningStep,
)

SOLUTION = 'name = "Ada"\nprint(name)'


def make_plan(title: str = "Intro", topics=("Vars", "Loops")) -> LearningPlan:
    return LearningPlan(
        title=title,
        learning_steps=[
            LearningStep(topic=topic, description=f"Learn {topic}", extracted_documentation=f"{topic} docs")
            for topic in topics
        ],
    )


class FakeGateway(AIGateway):
    """Scripted in-memory gateway. Records every call."""

    def __init__(self, plan: LearningPlan = None):
        self.plan = plan or make_plan()
        self.calls: List[Tuple[str, object]] = []
        self.failures: Dict[str, Exception] = {}
        self.delays: Dict[str, float] = {}
        # exercise calls for these topics block until the event is set
        self.exercise_gates: Dict[str, asyncio.Event] = {}

    async def _record(self, method: str, request):
        self.calls.append((method, request))
        if method in self.delays:
            await asyncio.sleep(self.delays[method])
        if method in self.failures:
            raise self.failures[method]

    def count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)

    async def generate_learning_plan(self, request):
        await self._record("generate_learning_plan", request)
        return self.plan

    async def generate_exercise(self, request):
        gate = self.exercise_gates.get(request.topic)
        if gate is not None:
            await gate.wait()
        await self._record("generate_exercise", request)
        snippet = "" if request.learning_mode == LearningMode.CHALLENGE else f"# starter for {request.topic}"
        return GenerateExerciseOutput(
            question=f"Write a program about {request.topic}.",
            code_snippet=snippet,
            solution=SOLUTION,
        )

    async def improve_code(self, request):
        await self._record("improve_code", request)
        return ImproveCodeOutput(improvements="Use descriptive names.")

    async def explain_concept(self, request):
        await self._record("explain_concept", request)
        return ExplainConceptOutput(
            explanation=f"{request.concept} explained",
            breakdown="Line by line",
            application="Use it daily",
        )


