"""
Question input components.

Renders one wizard step: a slider per range question and a radio group per
choice question. Widget changes are pushed into the wizard state through
``ui.state.record_widget_answer``.
"""

from typing import Iterable, List

import streamlit as st

from ecotrace.questions import Question
from ecotrace.wizard import WizardState, effective_value
from ui.state import record_widget_answer, widget_key

MISSING_CHOICE_MESSAGE = "Please select an option"


def _render_range(question: Question, state: WizardState) -> None:
    spec = question.kind
    value = effective_value(state, question.question_id)
    st.slider(
        question.prompt,
        min_value=spec.minimum,
        max_value=spec.maximum,
        value=value,
        step=spec.step,
        key=widget_key(question.question_id),
        on_change=record_widget_answer,
        args=(question.question_id,),
        label_visibility="collapsed",
    )
    st.caption(f"Value: {value} {spec.unit}")


def _render_choice(question: Question, state: WizardState, show_error: bool) -> None:
    spec = question.kind
    values = list(spec.values)
    current = state.answers.get(question.question_id)
    st.radio(
        question.prompt,
        options=values,
        index=values.index(current) if current in values else None,
        format_func=lambda v: spec.label_for(v) or str(v),
        label_visibility="collapsed",
        key=widget_key(question.question_id),
        on_change=record_widget_answer,
        args=(question.question_id,),
    )
    if show_error:
        st.error(MISSING_CHOICE_MESSAGE)


def render_step(questions: Iterable[Question], state: WizardState, missing: List[str]) -> None:
    """Render every question of a step; unanswered choices get an inline error once the gate failed."""
    for q in questions:
        st.markdown(f"#### {q.prompt}")
        if q.is_choice:
            _render_choice(q, state, state.validation_failed and q.question_id in missing)
        else:
            _render_range(q, state)
