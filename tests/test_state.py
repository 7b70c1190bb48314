from __future__ import annotations
import types

import pytest

from ecotrace.wizard import WizardState
from ui import state


@pytest.fixture
def fake_st(monkeypatch):
    # plain dict stands in for st.session_state outside a Streamlit run
    fake = types.SimpleNamespace(session_state={})
    monkeypatch.setenv("_ENV_LOADED", "1")
    monkeypatch.setenv("ECOTRACE_DEBUG", "")
    monkeypatch.delenv("ECOTRACE_DEBUG")
    monkeypatch.setattr(state, "st", fake)
    return fake


def test_ensure_session_sets_defaults(fake_st):
    state.ensure_session()
    assert fake_st.session_state[state.KEY_WIZARD] == WizardState()
    assert fake_st.session_state[state.KEY_DEBUG] is False


def test_debug_mode_seeded_from_env(fake_st, monkeypatch):
    monkeypatch.setenv("ECOTRACE_DEBUG", "true")
    state.ensure_session()
    assert fake_st.session_state[state.KEY_DEBUG] is True


def test_debug_toggle_not_overwritten_by_env(fake_st, monkeypatch):
    monkeypatch.setenv("ECOTRACE_DEBUG", "1")
    fake_st.session_state[state.KEY_DEBUG] = False
    state.ensure_session()
    assert fake_st.session_state[state.KEY_DEBUG] is False


def test_ensure_session_keeps_existing_state(fake_st):
    existing = WizardState(current_step=2)
    fake_st.session_state[state.KEY_WIZARD] = existing
    state.ensure_session()
    assert state.get_wizard_state() is existing


def test_widget_answer_flows_into_wizard(fake_st):
    state.start_wizard()
    state.next_step()
    fake_st.session_state[state.widget_key("public_transport")] = 3
    state.record_widget_answer("public_transport")
    assert state.answers_snapshot() == {"public_transport": 3}


def test_widget_without_value_is_ignored(fake_st):
    state.start_wizard()
    state.record_widget_answer("car_km")
    assert state.answers_snapshot() == {}


def test_navigation_helpers(fake_st):
    state.start_wizard()
    assert state.get_wizard_state().current_step == 0
    state.next_step()
    assert state.get_wizard_state().current_step == 1
    # unanswered choice blocks the step
    state.next_step()
    assert state.get_wizard_state().current_step == 1
    assert state.get_wizard_state().validation_failed
    state.previous_step()
    assert state.get_wizard_state().current_step == 0


def test_reset_session_clears_widgets_and_answers(fake_st):
    state.start_wizard()
    state.next_step()
    fake_st.session_state[state.widget_key("car_km")] = 20000
    state.record_widget_answer("car_km")
    fake_st.session_state[state.widget_key("public_transport")] = 1
    state.reset_session()
    assert state.get_wizard_state() == WizardState()
    assert state.widget_key("car_km") not in fake_st.session_state
    assert state.widget_key("public_transport") not in fake_st.session_state
