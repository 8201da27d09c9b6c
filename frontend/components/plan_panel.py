# frontend/components/plan_panel.py
import streamlit as st

from frontend.utils.api_client import APIClient
from frontend.utils.notices import apply_response


def render_plan_input(api: APIClient, thread_id: str, state: dict):
    st.subheader("What do you want to learn today?")
    content = st.text_area(
        "Learning content",
        placeholder="Paste your lecture notes, documentation, or any text content here...",
        height=180,
        label_visibility="collapsed",
    )
    col1, col2 = st.columns(2)
    documentation_url = col1.text_input("Documentation URL (optional)")
    code_url = col2.text_input("Code URL (optional, raw text)")

    has_source = any(v.strip() for v in (content, documentation_url, code_url))
    loading = state.get("loading", {}).get("plan", False)
    if st.button("Generate Learning Plan", type="primary", disabled=loading or not has_source):
        with st.spinner("Building your learning plan..."):
            apply_response(api.generate_plan(thread_id, content, documentation_url, code_url))
        st.rerun()


def render_plan(api: APIClient, thread_id: str, state: dict):
    plan = state.get("plan")
    if not plan:
        return

    st.subheader(f"Your Learning Plan: {plan['title']}")
    steps = plan.get("learning_steps", [])
    if not steps:
        st.warning("This plan has no steps. Try different content.")
        return

    active = state.get("step_index")
    pending = state.get("pending_step_index")
    for i, step in enumerate(steps):
        label = f"Step {i + 1}: {step['topic']}"
        if i == pending:
            label += " (loading...)"
        with st.expander(label, expanded=(i == active)):
            st.markdown(step["description"])
            col1, col2 = st.columns(2)
            if i == active:
                if col1.button("Close step", key=f"close_{i}"):
                    apply_response(api.close_step(thread_id))
                    st.rerun()
            elif col1.button("Practice this step", key=f"select_{i}", disabled=pending is not None):
                with st.spinner("Generating exercise..."):
                    apply_response(api.select_step(thread_id, i))
                st.rerun()

    col_prev, col_next = st.columns(2)
    busy = state.get("loading", {}).get("exercise", False)
    if col_prev.button("Previous Step", disabled=active is None or active == 0 or busy, use_container_width=True):
        with st.spinner("Generating exercise..."):
            apply_response(api.prev_step(thread_id))
        st.rerun()
    if col_next.button("Next Step", disabled=active is None or active == len(steps) - 1 or busy, use_container_width=True):
        with st.spinner("Generating exercise..."):
            apply_response(api.next_step(thread_id))
        st.rerun()
