# tests/test_orchestrator.py
"""
Async session scenarios driven through SessionOrchestrator with a fake gateway.
"""
import asyncio

import pytest

from backend.app.core.errors import GatewayResponseError
from backend.app.core.orchestrator import SessionOrchestrator, SessionRegistry
from backend.app.core.session_state import ExpandedPanel, NoticeLevel
from backend.app.core.transitions import DEFAULT_TOPIC
from backend.app.schemas.tutor_schemas import LearningMode
from tests.fakes import SOLUTION, FakeGateway, make_plan


def titles(session):
    return [notice.title for notice in session.drain_notices()]


class TestSessionLifecycle:

    @pytest.mark.asyncio
    async def test_start_loads_default_exercise(self, session, gateway):
        state = await session.start()

        assert state.plan is None
        assert state.exercise.topic == DEFAULT_TOPIC
        assert state.code == f"# starter for {DEFAULT_TOPIC}"
        assert not any(state.loading.values())
        assert gateway.count("generate_exercise") == 1

    @pytest.mark.asyncio
    async def test_plan_then_navigate_to_end(self, session):
        await session.start()
        state = await session.generate_plan(content="Python intro notes")
        assert state.plan.title == "Intro"
        assert state.step_index == 0
        assert state.exercise.topic == "Vars"

        state = await session.next_step()
        assert state.step_index == 1
        assert state.exercise.topic == "Loops"
        session.drain_notices()

        state = await session.next_step()
        assert state.step_index == 1
        assert state.exercise.topic == "Loops"
        assert titles(session) == ["End of Plan"]

    @pytest.mark.asyncio
    async def test_empty_request_makes_no_gateway_call(self, session, gateway):
        await session.start()
        calls_before = len(gateway.calls)

        state = await session.generate_plan(content="", documentation_url=None, code_url=None)

        assert len(gateway.calls) == calls_before
        assert state.plan is None
        assert titles(session) == ["Empty Content"]

    @pytest.mark.asyncio
    async def test_failed_plan_reloads_default_exercise(self, session, gateway):
        await session.start()
        gateway.failures["generate_learning_plan"] = GatewayResponseError("learning_steps must be a list")

        state = await session.generate_plan(content="notes")

        assert state.plan is None
        assert state.exercise.topic == DEFAULT_TOPIC
        assert gateway.count("generate_exercise") == 2
        notices = session.drain_notices()
        assert notices[0].title == "Error Generating Learning Plan"
        assert notices[0].level == NoticeLevel.ERROR

    @pytest.mark.asyncio
    async def test_zero_step_plan(self):
        gateway = FakeGateway(plan=make_plan(topics=()))
        session = SessionOrchestrator(gateway, timeout=1.0)
        await session.start()

        state = await session.generate_plan(content="notes")

        assert state.plan is not None
        assert state.step_index is None
        assert state.exercise is None
        assert titles(session) == ["Empty Plan"]

    @pytest.mark.asyncio
    async def test_reselecting_step_gives_same_shape(self, session):
        await session.start()
        await session.generate_plan(content="notes")
        first = session.state.exercise

        state = await session.select_step(0)

        assert state.exercise.topic == first.topic
        assert set(state.exercise.model_dump()) == set(first.model_dump())

    @pytest.mark.asyncio
    async def test_deselect_then_reselect(self, session):
        await session.start()
        await session.generate_plan(content="notes")

        state = await session.deselect_step()
        assert state.step_index is None
        assert state.exercise is None

        state = await session.select_step(1)
        assert state.step_index == 1


class TestLearningMode:

    @pytest.mark.asyncio
    async def test_challenge_mode_empties_snippet(self, session):
        await session.start()
        await session.generate_plan(content="notes")

        state = await session.change_mode(LearningMode.CHALLENGE)
        assert state.exercise.code_snippet == ""
        assert state.code.startswith("# Start coding for: Vars")

        state = await session.change_mode(LearningMode.HAND_HOLDING)
        assert state.exercise.code_snippet
        assert state.step_index == 0

    @pytest.mark.asyncio
    async def test_mode_change_without_plan_reloads_default(self, session, gateway):
        await session.start()
        state = await session.change_mode(LearningMode.CHALLENGE)

        assert state.exercise.topic == DEFAULT_TOPIC
        assert state.code == f"# Start coding for: {DEFAULT_TOPIC}\n"
        assert gateway.count("generate_exercise") == 2


class TestCodeActions:

    @pytest.mark.asyncio
    async def test_submit_correct_solution(self, session):
        await session.start()
        code = " " + SOLUTION.replace("\n", "\n\n") + "\n"
        state = await session.submit_code(code)

        assert state.feedback.is_correct is True
        assert state.feedback.suggestions == "Use descriptive names."
        assert state.code == code
        assert titles(session) == ["Submission Correct!"]

    @pytest.mark.asyncio
    async def test_submit_wrong_solution(self, session):
        await session.start()
        state = await session.submit_code("print('nope')")

        assert state.feedback.is_correct is False
        assert titles(session) == ["Submission Feedback"]

    @pytest.mark.asyncio
    async def test_improve_and_explain(self, session, gateway):
        await session.start()
        state = await session.improve_code("x=1")
        assert state.feedback.suggestions == "Use descriptive names."
        assert gateway.calls[-1][1].question == state.exercise.question

        state = await session.explain_concept()
        assert state.explanation.explanation == f"{DEFAULT_TOPIC} explained"
        assert titles(session) == ["Suggestions Ready", "Explanation Ready"]

    @pytest.mark.asyncio
    async def test_run_code_never_touches_exercise(self, session, gateway):
        await session.start()
        exercise = session.state.exercise
        calls = len(gateway.calls)

        state = await session.run_code("print(1)")

        assert state.code == "print(1)"
        assert state.exercise == exercise
        assert len(gateway.calls) == calls

    @pytest.mark.asyncio
    async def test_toggle_expand(self, session):
        state = await session.toggle_expand(ExpandedPanel.CODE)
        assert state.expanded_panel == ExpandedPanel.CODE
        state = await session.toggle_expand(ExpandedPanel.CODE)
        assert state.expanded_panel is None


class TestFailuresAndRaces:

    @pytest.mark.asyncio
    async def test_stale_exercise_is_discarded(self, session, gateway):
        await session.start()
        await session.generate_plan(content="notes")

        gate = asyncio.Event()
        gateway.exercise_gates["Vars"] = gate
        slow = asyncio.create_task(session.select_step(0))
        await asyncio.sleep(0)

        state = await session.select_step(1)
        assert state.step_index == 1

        gate.set()
        await slow

        assert session.state.step_index == 1
        assert session.state.exercise.topic == "Loops"
        assert not session.state.loading["exercise"]

    @pytest.mark.asyncio
    async def test_deadline_fails_operation(self, gateway):
        session = SessionOrchestrator(gateway, timeout=0.05)
        await session.start()
        gateway.delays["explain_concept"] = 1.0

        state = await session.explain_concept()

        assert state.explanation is None
        assert not state.loading["explanation"]
        notices = session.drain_notices()
        assert notices[-1].title == "Error Explaining Concept"
        assert "0.05" in notices[-1].description

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_notice(self, session, gateway):
        await session.start()
        gateway.failures["improve_code"] = RuntimeError("boom")

        state = await session.submit_code("x")

        assert state.feedback is None
        assert not state.loading["submit"]
        notices = session.drain_notices()
        assert notices[-1].title == "Error Submitting Code"
        assert notices[-1].description == "boom"

    @pytest.mark.asyncio
    async def test_failed_exercise_resets_step(self, session, gateway):
        await session.start()
        await session.generate_plan(content="notes")
        gateway.failures["generate_exercise"] = GatewayResponseError("bad exercise")

        state = await session.next_step()

        assert state.step_index is None
        assert state.exercise is None
        assert titles(session)[-1] == "Error Generating Exercise"

    @pytest.mark.asyncio
    async def test_drain_notices_empties_queue(self, session):
        await session.next_step()
        assert titles(session) == ["End of Plan"]
        assert session.drain_notices() == []


class TestSessionRegistry:

    @pytest.mark.asyncio
    async def test_create_get_remove(self, gateway):
        registry = SessionRegistry(gateway, timeout=1.0)
        session = await registry.create(LearningMode.CHALLENGE)

        assert len(registry) == 1
        assert registry.get(session.thread_id) is session
        assert session.state.mode == LearningMode.CHALLENGE
        assert session.state.exercise.code_snippet == ""

        assert registry.remove(session.thread_id) is True
        assert registry.remove(session.thread_id) is False
        assert registry.get(session.thread_id) is None
        assert len(registry) == 0

    @pytest.mark.asyncio
    async def test_idle_sessions_expire(self, gateway):
        registry = SessionRegistry(gateway, timeout=1.0, ttl=60)
        idle = await registry.create()
        active = await registry.create()
        idle.last_active -= 61
        active.last_active -= 30

        assert registry.get(idle.thread_id) is None
        assert registry.get(active.thread_id) is active
        assert len(registry) == 1

    @pytest.mark.asyncio
    async def test_access_keeps_session_alive(self, gateway):
        registry = SessionRegistry(gateway, timeout=1.0, ttl=60)
        session = await registry.create()
        session.last_active -= 50
        registry.get(session.thread_id)
        session.last_active -= 50

        assert registry.get(session.thread_id) is session

    @pytest.mark.asyncio
    async def test_zero_ttl_never_expires(self, gateway):
        registry = SessionRegistry(gateway, timeout=1.0, ttl=0)
        session = await registry.create()
        session.last_active -= 10 ** 6

        assert registry.get(session.thread_id) is session
