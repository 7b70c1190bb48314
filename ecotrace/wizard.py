"""
Wizard Controller - step progression for the questionnaire.

The wizard state is a plain immutable value. Every operation takes the current
state and returns the next one; the caller (the Streamlit session) owns where
it is stored.

States:
  - Intro      current_step == -1
  - Step(i)    0 <= current_step < step_count()
  - Results    current_step == step_count()
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Dict, List
import logging

from ecotrace.errors import WizardTransitionError
from ecotrace.questions import (
    get_question,
    questions_for_step,
    step_count,
    validate_answer,
)

_log = logging.getLogger(__name__)

INTRO_STEP = -1

__all__ = [
    "INTRO_STEP",
    "WizardState",
    "start",
    "advance",
    "go_back",
    "record_answer",
    "restart",
    "missing_choices",
    "effective_value",
]


@dataclass(frozen=True)
class WizardState:
    """Current step, collected answers and the pending validation flag."""
    current_step: int = INTRO_STEP
    answers: Dict[str, float] = field(default_factory=dict)
    validation_failed: bool = False

    @property
    def is_intro(self) -> bool:
        return self.current_step == INTRO_STEP

    @property
    def is_results(self) -> bool:
        return self.current_step == step_count()

    @property
    def is_live_step(self) -> bool:
        return 0 <= self.current_step < step_count()

    @property
    def is_last_step(self) -> bool:
        return self.current_step == step_count() - 1

    @property
    def can_go_back(self) -> bool:
        return self.is_live_step and self.current_step > 0


def _require_live_step(state: WizardState, operation: str) -> None:
    if not state.is_live_step:
        raise WizardTransitionError(
            f"{operation}() needs a question step, wizard is at {state.current_step}"
        )


def start(state: WizardState) -> WizardState:
    """Intro -> first question step."""
    if not state.is_intro:
        raise WizardTransitionError(f"start() only allowed from intro, wizard is at {state.current_step}")
    _log.debug("wizard started")
    return replace(state, current_step=0, validation_failed=False)


def missing_choices(state: WizardState) -> List[str]:
    """Choice question ids of the current step that have no recorded answer.

    Range questions never count as missing; they always have an effective value.
    """
    if not state.is_live_step:
        return []
    return [
        q.question_id
        for q in questions_for_step(state.current_step)
        if q.is_choice and q.question_id not in state.answers
    ]


def advance(state: WizardState) -> WizardState:
    """
    Move to the next step if every choice question of the current step is answered.

    On success the validation flag is cleared and the wizard moves to the next
    step, or to the results screen after the last one. Otherwise the step is
    unchanged and ``validation_failed`` is set.
    """
    _require_live_step(state, "advance")
    missing = missing_choices(state)
    if missing:
        _log.info("step %d blocked, unanswered: %s", state.current_step, ", ".join(missing))
        return replace(state, validation_failed=True)
    nxt = state.current_step + 1
    _log.debug("step %d -> %d", state.current_step, nxt)
    return replace(state, current_step=nxt, validation_failed=False)


def go_back(state: WizardState) -> WizardState:
    """Previous step; no-op on the first step."""
    _require_live_step(state, "go_back")
    if state.current_step == 0:
        return state
    _log.debug("step %d -> %d (back)", state.current_step, state.current_step - 1)
    return replace(state, current_step=state.current_step - 1, validation_failed=False)


def record_answer(state: WizardState, question_id: str, value: float) -> WizardState:
    """Insert or overwrite one answer. Step and validation flag are left as they are."""
    _require_live_step(state, "record_answer")
    validate_answer(question_id, value)
    if question_id in state.answers and state.answers[question_id] == value:
        return state
    answers = dict(state.answers)
    answers[question_id] = value
    return replace(state, answers=answers)


def restart(state: WizardState | None = None) -> WizardState:
    """Back to the intro screen with no answers."""
    if state is not None and not state.is_intro:
        _log.debug("wizard restarted from step %d", state.current_step)
    return WizardState()


def effective_value(state: WizardState, question_id: str) -> float | None:
    """Recorded answer, else the range default; None for an unanswered choice."""
    if question_id in state.answers:
        return state.answers[question_id]
    question = get_question(question_id)
    if question.is_range:
        return question.kind.default
    return None
