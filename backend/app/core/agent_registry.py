# backend/app/core/agent_registry.py
from typing import Dict, Optional
from backend.app.agents.base_agent import BaseAgent
from backend.app.core.llm_client import LLMClient

class AgentRegistry:
    """
    Simple registry for agent instances.
    The LLM gateway queries this to get agents by role/name.
    """

    def __init__(self):
        self._agents: Dict[str, BaseAgent] = {}

    def register(self, name: str, agent: BaseAgent):
        self._agents[name] = agent

    def get(self, name: str) -> BaseAgent:
        agent = self._agents.get(name)
        if agent is None:
            raise KeyError(f"Agent '{name}' not registered.")
        return agent


def build_default_registry(llm: Optional[LLMClient] = None) -> AgentRegistry:
    """Register the four tutor agents around one shared LLM client."""
    from backend.app.agents.tutor_agent import TutorAgent
    from backend.app.agents.exercise_agent import ExerciseAgent
    from backend.app.agents.evaluator_agent import EvaluatorAgent
    from backend.app.agents.explainer_agent import ExplainerAgent

    llm = llm or LLMClient()
    registry = AgentRegistry()
    registry.register("tutor", TutorAgent(llm=llm))
    registry.register("exercise", ExerciseAgent(llm=llm))
    registry.register("evaluator", EvaluatorAgent(llm=llm))
    registry.register("explainer", ExplainerAgent(llm=llm))
    return registry
