from __future__ import annotations
from typing import Dict, List

import streamlit as st

from ecotrace import wizard
from ecotrace.questions import questions_for_step
from ecotrace.utils.env_tools import env_flag
from ecotrace.wizard import WizardState


# Centralized session keys used across the app
KEY_WIZARD = "_wizard_state"
KEY_DEBUG = "debug_mode"

# Widget keys are derived from question ids so they never collide with the keys above
WIDGET_PREFIX = "q_"


def widget_key(question_id: str) -> str:
    return f"{WIDGET_PREFIX}{question_id}"


def ensure_session() -> None:
    """Initialize expected session keys with safe defaults."""
    ss = st.session_state
    ss.setdefault(KEY_WIZARD, WizardState())
    if KEY_DEBUG not in ss:
        ss[KEY_DEBUG] = env_flag("ECOTRACE_DEBUG", False)


def get_wizard_state() -> WizardState:
    ensure_session()
    return st.session_state[KEY_WIZARD]


def set_wizard_state(state: WizardState) -> None:
    ensure_session()
    st.session_state[KEY_WIZARD] = state


def _clear_widgets(question_ids: List[str]) -> None:
    for qid in question_ids:
        st.session_state.pop(widget_key(qid), None)


def record_widget_answer(question_id: str) -> None:
    """on_change callback: copy a widget's value into the wizard answers."""
    value = st.session_state.get(widget_key(question_id))
    if value is None:
        return
    set_wizard_state(wizard.record_answer(get_wizard_state(), question_id, value))


def start_wizard() -> None:
    set_wizard_state(wizard.start(get_wizard_state()))


def next_step() -> None:
    set_wizard_state(wizard.advance(get_wizard_state()))


def previous_step() -> None:
    set_wizard_state(wizard.go_back(get_wizard_state()))


def reset_session() -> None:
    """Back to the landing screen with no answers and no leftover widget values."""
    state = get_wizard_state()
    stale = [qid for qid in state.answers]
    if state.is_live_step:
        stale += [q.question_id for q in questions_for_step(state.current_step)]
    _clear_widgets(stale)
    set_wizard_state(wizard.restart(state))


def answers_snapshot() -> Dict[str, float]:
    return dict(get_wizard_state().answers)
