import sys
from pathlib import Path

# Add repo root to path before importing project modules
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import streamlit as st

from ecotrace.utils import get_logger
from ecotrace.utils.env_tools import load_config, load_env_once, is_production_env

load_env_once(str(ROOT / ".env"))

# Load config
try:
    CFG = load_config(ROOT / "config" / "config.yaml")
except Exception as e:
    st.error(f"Failed to load configuration: {e}")
    st.stop()

log = get_logger("ecotrace", CFG["logging"]["level"])

st.set_page_config(
    page_title=CFG["app"]["title"],
    page_icon=CFG["app"]["page_icon"],
    layout=CFG["app"]["layout"],
)

from ecotrace.questions import STEP_TITLES, questions_for_step, step_count
from ecotrace.scoring import score
from ecotrace.wizard import missing_choices
from ui import state as session
from ui.components.question_inputs import render_step
from ui.components.results_display import display_result

IS_PROD = is_production_env()
PRIMARY = CFG["theme"]["primary"]
SECONDARY = CFG["theme"]["secondary"]

st.markdown(
    f"""
    <style>
    .stButton>button {{
        background-color:{PRIMARY};
        color:#ffffff;
        border-radius:8px;
        border:1px solid {PRIMARY};
    }}
    .stButton>button:disabled {{
        background-color:{SECONDARY};
        border-color:{SECONDARY};
    }}
    .stProgress > div > div > div > div {{background-color:{PRIMARY};}}
    </style>
    """,
    unsafe_allow_html=True,
)

session.ensure_session()

# Sidebar debug expander (dev only)
if not IS_PROD:
    with st.sidebar.expander("⚙️ Session", expanded=False):
        st.toggle("debug_mode", key=session.KEY_DEBUG, help="Show raw answers and score details")
        if st.session_state.get(session.KEY_DEBUG):
            wiz = session.get_wizard_state()
            st.write(f"current_step: {wiz.current_step}")
            st.write(f"validation_failed: {wiz.validation_failed}")
            st.json(session.answers_snapshot())

st.markdown(
    f"<h1 style='text-align:center;color:{PRIMARY}'>EcoTrace</h1>"
    "<h4 style='text-align:center;color:#6b7280'>Carbon Footprint Simulator</h4>",
    unsafe_allow_html=True,
)

wiz = session.get_wizard_state()

# ====================== LANDING ======================
if wiz.is_intro:
    st.markdown("""
    ### How big is your carbon footprint?

    Answer a few questions about your household, travel, home, food and shopping
    habits. EcoTrace estimates your yearly emissions in tonnes of CO₂ equivalent
    and suggests where you can cut them.

    It takes about two minutes. Nothing you enter is stored.
    """)
    if st.button("Start →", key="landing_start"):
        session.start_wizard()
        st.rerun()
    st.stop()

# ====================== STEPPER ======================
total = step_count()
done = min(wiz.current_step, total)
st.progress(done / total)
cols = st.columns(total)
for i, title in enumerate(STEP_TITLES):
    if i == wiz.current_step:
        cols[i].markdown(f"**{i + 1}. {title}**")
    else:
        cols[i].caption(f"{'✓' if i < done else i + 1}. {title}")

# ====================== RESULTS ======================
if wiz.is_results:
    result = score(wiz.answers)
    log.info("results shown: %d t (%s)", result.footprint_tonnes, result.category.value)
    display_result(result, show_breakdown=bool(CFG["ui"]["show_breakdown"]))
    if st.session_state.get(session.KEY_DEBUG):
        st.json(result.to_dict())
    if st.button("↺ Start again", key="results_restart"):
        session.reset_session()
        st.rerun()
    st.stop()

# ====================== QUESTION STEP ======================
st.subheader(STEP_TITLES[wiz.current_step])
render_step(questions_for_step(wiz.current_step), wiz, missing_choices(wiz))

col_back, col_next = st.columns(2)
with col_back:
    if st.button("Previous", key="step_back", disabled=not wiz.can_go_back):
        session.previous_step()
        st.rerun()
with col_next:
    if st.button("Finish" if wiz.is_last_step else "Next", key="step_next"):
        session.next_step()
        st.rerun()
