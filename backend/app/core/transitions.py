# backend/app/core/transitions.py
"""
Pure state transitions for a tutoring session.

Every user intent maps to a function ``state -> (state', call)``. ``call`` is
a PendingCall when the intent needs the AI gateway, otherwise None. When the
call finishes the driver applies the matching ``resolve_*`` / ``fail_*``
function, which may itself issue a follow-up call (plan -> first exercise,
failed plan -> default exercise).

A result is applied only while its token is still the latest issued for its
kind. Anything older is dropped.
"""
import logging
import re
from typing import NamedTuple, Optional, Tuple

from pydantic import BaseModel

from backend.app.core.session_state import (
    Exercise,
    ExpandedPanel,
    Feedback,
    NoticeLevel,
    OperationKind,
    SessionState,
)
from backend.app.schemas.tutor_schemas import (
    ExplainConceptInput,
    ExplainConceptOutput,
    GenerateExerciseInput,
    GenerateExerciseOutput,
    GenerateLearningPlanInput,
    ImproveCodeInput,
    ImproveCodeOutput,
    LearningMode,
    LearningPlan,
)

logger = logging.getLogger(__name__)

DEFAULT_TOPIC = "Basic Python Output and Variables"
DEFAULT_DOCUMENTATION = (
    'Python basics include variables for storing data (e.g., name = "Alice"), '
    'the print() function for displaying output (e.g., print("Hello")), and '
    'f-strings for formatted output (e.g., print(f"Hello, {name}")). Arithmetic '
    "operations like addition (+), subtraction (-), multiplication (*), and "
    "division (/) are also fundamental."
)
DEFAULT_EXAMPLE_CODE = """name = "World"
print(f"Hello, {name}!")
x = 10
y = 5
sum_result = x + y
print(f"The sum of {x} and {y} is {sum_result}")

# Try to make a variable for your favorite food and print it.
# Then, try to calculate 100 divided by 4 and print the result.
"""

CORRECT_MESSAGE = "Your solution seems correct!"
INCORRECT_MESSAGE = "Your solution might have some issues or could be improved. See suggestions."
UNKNOWN_ERROR = "An unknown error occurred."

STEP_SCOPED = (
    OperationKind.EXERCISE,
    OperationKind.IMPROVE,
    OperationKind.SUBMIT,
    OperationKind.EXPLANATION,
)
EXERCISE_SCOPED = (OperationKind.IMPROVE, OperationKind.SUBMIT, OperationKind.EXPLANATION)


class PendingCall(NamedTuple):
    kind: OperationKind
    token: int
    request: BaseModel


Outcome = Tuple[SessionState, Optional[PendingCall]]


# ---------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------
def initial_state(mode: LearningMode = LearningMode.HAND_HOLDING) -> SessionState:
    return SessionState(mode=mode)


def normalize(code: str) -> str:
    return re.sub(r"\s+", "", code)


def challenge_scaffold(topic: str, documentation: Optional[str] = None, example_code: Optional[str] = None) -> str:
    if documentation is None and example_code is None:
        return f"# Start coding for: {topic}\n"
    return (
        f"# Start coding for: {topic}\n"
        f"# Documentation: {(documentation or '')[:100]}...\n"
        f"# Example: {(example_code or '')[:100]}...\n"
    )


def _issue(state: SessionState, kind: OperationKind, request: BaseModel, **updates) -> Outcome:
    token = state.next_token
    updates["pending"] = updates.get("pending", state.pending).issue(kind, token)
    updates["next_token"] = token + 1
    return state.model_copy(update=updates), PendingCall(kind, token, request)


def _is_current(state: SessionState, call: PendingCall) -> bool:
    if state.pending.get(call.kind) == call.token:
        return True
    logger.info(f"Discarding stale {call.kind.value} result (token {call.token})")
    return False


def _cleared_step_scope() -> dict:
    return {"exercise": None, "code": "", "feedback": None, "explanation": None}


def _error_text(error: Exception) -> str:
    return str(error) or UNKNOWN_ERROR


def _fail(state: SessionState, call: PendingCall, title: str, error: Exception, **updates) -> SessionState:
    logger.error(f"{title}: {error}")
    updates["pending"] = state.pending.clear(call.kind)
    return state.model_copy(update=updates).with_notice(title, _error_text(error), NoticeLevel.ERROR)


# ---------------------------------------------------------------
# Learning plan
# ---------------------------------------------------------------
def request_plan(state: SessionState, source: GenerateLearningPlanInput) -> Outcome:
    if not source.has_source():
        logger.warning("Plan generation rejected: no content or URL")
        return state.with_notice(
            "Empty Content",
            "Please paste some content or provide a documentation or code URL to generate a plan.",
            NoticeLevel.ERROR,
        ), None

    return _issue(
        state,
        OperationKind.PLAN,
        source,
        plan=None,
        step_index=None,
        pending_step_index=None,
        pending=state.pending.clear(*STEP_SCOPED),
        **_cleared_step_scope(),
    )


def resolve_plan(state: SessionState, call: PendingCall, plan: LearningPlan) -> Outcome:
    if not _is_current(state, call):
        return state, None
    state = state.model_copy(update={"plan": plan, "pending": state.pending.clear(OperationKind.PLAN)})
    if plan.learning_steps:
        return request_step(state, 0)
    return state.with_notice(
        "Empty Plan",
        "The AI could not generate learning steps from the content.",
        NoticeLevel.WARNING,
    ), None


def fail_plan(state: SessionState, call: PendingCall, error: Exception) -> Outcome:
    if not _is_current(state, call):
        return state, None
    state = _fail(state, call, "Error Generating Learning Plan", error, plan=None, step_index=None)
    return request_default_exercise(state)


# ---------------------------------------------------------------
# Exercises
# ---------------------------------------------------------------
def request_default_exercise(state: SessionState) -> Outcome:
    request = GenerateExerciseInput(
        topic=DEFAULT_TOPIC,
        documentation=DEFAULT_DOCUMENTATION,
        example_code=DEFAULT_EXAMPLE_CODE,
        learning_mode=state.mode,
    )
    return _issue(
        state,
        OperationKind.EXERCISE,
        request,
        pending_step_index=None,
        pending=state.pending.clear(*EXERCISE_SCOPED),
        **_cleared_step_scope(),
    )


def request_step(state: SessionState, index: int) -> Outcome:
    if state.plan is None or not 0 <= index < len(state.plan.learning_steps):
        logger.warning(f"Rejected step selection {index}")
        return state.with_notice(
            "Invalid Plan Step", "Cannot fetch exercise for this step.", NoticeLevel.WARNING
        ), None

    step = state.plan.learning_steps[index]
    request = GenerateExerciseInput(
        topic=step.topic,
        documentation=step.extracted_documentation or DEFAULT_DOCUMENTATION,
        example_code=step.extracted_example_code or DEFAULT_EXAMPLE_CODE,
        learning_mode=state.mode,
    )
    return _issue(
        state,
        OperationKind.EXERCISE,
        request,
        pending_step_index=index,
        pending=state.pending.clear(*EXERCISE_SCOPED),
        **_cleared_step_scope(),
    )


def resolve_exercise(state: SessionState, call: PendingCall, output: GenerateExerciseOutput) -> Outcome:
    if not _is_current(state, call):
        return state, None

    request: GenerateExerciseInput = call.request
    exercise = Exercise(
        exercise_id=call.token,
        question=output.question,
        code_snippet=output.code_snippet,
        solution=output.solution,
        topic=request.topic,
        documentation=request.documentation,
        example_code=request.example_code,
    )

    code = output.code_snippet or ""
    if not code and request.learning_mode == LearningMode.CHALLENGE:
        if state.pending_step_index is None:
            code = challenge_scaffold(request.topic)
        else:
            code = challenge_scaffold(request.topic, request.documentation, request.example_code)

    # the step index is committed only once its exercise is in place
    return state.model_copy(update={
        "exercise": exercise,
        "code": code,
        "step_index": state.pending_step_index,
        "pending_step_index": None,
        "pending": state.pending.clear(OperationKind.EXERCISE),
    }), None


def fail_exercise(state: SessionState, call: PendingCall, error: Exception) -> Outcome:
    if not _is_current(state, call):
        return state, None
    return _fail(
        state, call, "Error Generating Exercise", error, step_index=None, pending_step_index=None
    ), None


# ---------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------
def deselect_step(state: SessionState) -> SessionState:
    if state.plan is None:
        return state.with_notice("No Plan", "Generate a learning plan first.", NoticeLevel.WARNING)
    return state.model_copy(update={
        "step_index": None,
        "pending_step_index": None,
        "pending": state.pending.clear(*STEP_SCOPED),
        **_cleared_step_scope(),
    })


def next_step(state: SessionState) -> Outcome:
    if state.plan is not None and state.step_index is not None \
            and state.step_index < len(state.plan.learning_steps) - 1:
        return request_step(state, state.step_index + 1)
    return state.with_notice("End of Plan", "You've reached the last step of this learning plan."), None


def prev_step(state: SessionState) -> Outcome:
    if state.plan is not None and state.step_index is not None and state.step_index > 0:
        return request_step(state, state.step_index - 1)
    return state.with_notice("Start of Plan", "You are at the first step."), None


def change_mode(state: SessionState, mode: LearningMode) -> Outcome:
    if mode == state.mode:
        return state, None
    state = state.model_copy(update={"mode": mode})

    target = state.step_index
    if state.is_loading(OperationKind.EXERCISE) and state.pending_step_index is not None:
        target = state.pending_step_index

    if state.plan is not None and target is not None:
        return request_step(state, target)
    if state.plan is None and not state.is_loading(OperationKind.PLAN):
        return request_default_exercise(state)
    return state, None


def toggle_expand(state: SessionState, panel: ExpandedPanel) -> SessionState:
    expanded = None if state.expanded_panel == panel else panel
    return state.model_copy(update={"expanded_panel": expanded})


# ---------------------------------------------------------------
# Code buffer
# ---------------------------------------------------------------
def edit_code(state: SessionState, code: str) -> SessionState:
    return state.model_copy(update={"code": code})


def run_code(state: SessionState, code: str) -> SessionState:
    return edit_code(state, code).with_notice(
        'Code "Run" Requested',
        "Simulated output will appear in the console area below the editor.",
    )


def _require_exercise(state: SessionState) -> Optional[SessionState]:
    if state.exercise is None:
        logger.warning("Rejected code action: no exercise loaded")
        return state.with_notice("No Exercise", "Load an exercise first.", NoticeLevel.WARNING)
    return None


def request_improve(state: SessionState, code: str) -> Outcome:
    rejected = _require_exercise(state)
    if rejected is not None:
        return rejected, None
    request = ImproveCodeInput(code=code, language="python", question=state.exercise.question)
    return _issue(
        state,
        OperationKind.IMPROVE,
        request,
        code=code,
        feedback=None,
        pending=state.pending.clear(OperationKind.SUBMIT),
    )


def resolve_improve(state: SessionState, call: PendingCall, output: ImproveCodeOutput) -> Outcome:
    if not _is_current(state, call):
        return state, None
    state = state.model_copy(update={
        "feedback": Feedback(suggestions=output.improvements),
        "pending": state.pending.clear(OperationKind.IMPROVE),
    })
    return state.with_notice("Suggestions Ready", "Check the feedback panel for improvement tips."), None


def fail_improve(state: SessionState, call: PendingCall, error: Exception) -> Outcome:
    if not _is_current(state, call):
        return state, None
    return _fail(state, call, "Error Getting Suggestions", error, feedback=None), None


def request_submit(state: SessionState, code: str) -> Outcome:
    rejected = _require_exercise(state)
    if rejected is not None:
        return rejected, None
    request = ImproveCodeInput(code=code, language="python", question=state.exercise.question)
    return _issue(
        state,
        OperationKind.SUBMIT,
        request,
        code=code,
        feedback=None,
        pending=state.pending.clear(OperationKind.IMPROVE),
    )


def resolve_submit(state: SessionState, call: PendingCall, output: ImproveCodeOutput) -> Outcome:
    if not _is_current(state, call):
        return state, None
    is_correct = normalize(call.request.code) == normalize(state.exercise.solution)
    feedback = Feedback(
        message=CORRECT_MESSAGE if is_correct else INCORRECT_MESSAGE,
        suggestions=output.improvements,
        is_correct=is_correct,
    )
    state = state.model_copy(update={
        "feedback": feedback,
        "pending": state.pending.clear(OperationKind.SUBMIT),
    })
    title = "Submission Correct!" if is_correct else "Submission Feedback"
    return state.with_notice(title, "Check the feedback panel."), None


def fail_submit(state: SessionState, call: PendingCall, error: Exception) -> Outcome:
    if not _is_current(state, call):
        return state, None
    return _fail(state, call, "Error Submitting Code", error, feedback=None), None


# ---------------------------------------------------------------
# Explanations
# ---------------------------------------------------------------
def request_explanation(state: SessionState) -> Outcome:
    if state.exercise is None:
        logger.warning("Rejected explanation: no exercise loaded")
        return state.with_notice(
            "No Exercise Context", "Load an exercise to explain its concepts.", NoticeLevel.WARNING
        ), None
    request = ExplainConceptInput(
        concept=state.exercise.topic,
        documentation=state.exercise.documentation,
        example_code=state.exercise.example_code,
    )
    return _issue(state, OperationKind.EXPLANATION, request, explanation=None)


def resolve_explanation(state: SessionState, call: PendingCall, output: ExplainConceptOutput) -> Outcome:
    if not _is_current(state, call):
        return state, None
    state = state.model_copy(update={
        "explanation": output,
        "pending": state.pending.clear(OperationKind.EXPLANATION),
    })
    return state.with_notice("Explanation Ready", "Check the explanation panel."), None


def fail_explanation(state: SessionState, call: PendingCall, error: Exception) -> Outcome:
    if not _is_current(state, call):
        return state, None
    return _fail(state, call, "Error Explaining Concept", error, explanation=None), None
