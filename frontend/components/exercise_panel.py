# frontend/components/exercise_panel.py
import streamlit as st

from frontend.utils.api_client import APIClient
from frontend.utils.notices import apply_response


def render_exercise(api: APIClient, thread_id: str, state: dict):
    header, toggle = st.columns([4, 1])
    header.subheader("Exercise")
    expanded = state.get("expanded_panel") == "exercise"
    if toggle.button("Collapse" if expanded else "Expand", key="expand_exercise"):
        apply_response(api.toggle_expand(thread_id, "exercise"))
        st.rerun()

    loading = state.get("loading", {})
    exercise = state.get("exercise")
    if loading.get("exercise"):
        st.info("Generating exercise...")
        return
    if not exercise:
        st.info("Select a step from your learning plan to get an exercise.")
        return

    st.caption(f"Topic: {exercise['topic']}")
    st.markdown(exercise["question"])

    with st.expander("Reference documentation"):
        st.markdown(exercise["documentation"])
    with st.expander("Example code"):
        st.code(exercise["example_code"], language="python")

    if st.button("Explain Concept", disabled=loading.get("explanation", False)):
        with st.spinner("Explaining..."):
            apply_response(api.explain_concept(thread_id))
        st.rerun()

    explanation = state.get("explanation")
    if explanation:
        st.markdown("#### Explanation")
        st.markdown(explanation["explanation"])
        st.markdown("#### Breakdown")
        st.markdown(explanation["breakdown"])
        st.markdown("#### Application")
        st.markdown(explanation["application"])
