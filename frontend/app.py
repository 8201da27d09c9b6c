# frontend/app.py
import streamlit as st
from pathlib import Path
import sys

# Add project root to path
CURRENT_DIR = Path(__file__).parent
PROJECT_ROOT = CURRENT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from frontend.utils.api_client import APIClient
from frontend.utils.notices import apply_response, show_notices
from frontend.components.plan_panel import render_plan_input, render_plan
from frontend.components.exercise_panel import render_exercise
from frontend.components.code_panel import render_code
from frontend.components.feedback_panel import render_feedback, render_rating

st.set_page_config(page_title="CodeLeap", layout="wide", initial_sidebar_state="expanded")
st.title("CodeLeap")
st.markdown("**Learn to code with an AI tutor: plan, practice, get feedback.**")

API = APIClient()

MODES = {"Hand-holding Mode": "hand-holding", "Challenge Mode": "challenge"}

# ========================
# Session State Init
# ========================
if "thread_id" not in st.session_state:
    st.session_state.thread_id = None
if "snapshot" not in st.session_state:
    st.session_state.snapshot = {}
if "notices" not in st.session_state:
    st.session_state.notices = []

# ========================
# Sidebar
# ========================
with st.sidebar:
    st.header("Session")
    mode_label = st.radio("Learning mode", list(MODES.keys()))
    mode = MODES[mode_label]

    if st.button("Start New Session", type="primary", use_container_width=True):
        if st.session_state.thread_id:
            API.delete_session(st.session_state.thread_id)
        with st.spinner("Loading your first exercise..."):
            apply_response(API.start_session(mode))
        if not st.session_state.thread_id:
            st.error("Failed to start session. Is backend running?")
        st.rerun()

    if st.session_state.thread_id:
        st.info(f"**Active Session**\n`{st.session_state.thread_id[:12]}...`")
        if mode != st.session_state.snapshot.get("mode"):
            with st.spinner("Switching mode..."):
                apply_response(API.change_mode(st.session_state.thread_id, mode))
            st.rerun()

# ========================
# Main App Logic
# ========================
if not st.session_state.thread_id:
    st.info("← Start a session from the sidebar to begin learning.")
    st.stop()

thread_id = st.session_state.thread_id
show_notices()
state = st.session_state.snapshot

render_plan_input(API, thread_id, state)
render_plan(API, thread_id, state)

st.divider()
expanded = state.get("expanded_panel")
if expanded == "exercise":
    render_exercise(API, thread_id, state)
elif expanded == "code":
    render_code(API, thread_id, state)
else:
    col1, col2 = st.columns(2)
    with col1:
        render_exercise(API, thread_id, state)
    with col2:
        render_code(API, thread_id, state)

render_feedback(state)

plan = state.get("plan")
if plan:
    st.divider()
    render_rating(API, plan["title"], state.get("step_index"))

# ========================
# Debug
# ========================
with st.expander("Debug State", expanded=False):
    st.json(state, expanded=False)
