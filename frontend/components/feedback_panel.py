# frontend/components/feedback_panel.py
from typing import Optional

import streamlit as st

from frontend.utils.api_client import APIClient


def render_feedback(state: dict):
    feedback = state.get("feedback")
    if not feedback:
        return

    st.subheader("Feedback")
    if feedback.get("is_correct") is True:
        st.success(feedback.get("message") or "Correct!")
    elif feedback.get("is_correct") is False:
        st.warning(feedback.get("message") or "Not quite.")
    if feedback.get("suggestions"):
        st.markdown(feedback["suggestions"])


def render_rating(api: APIClient, plan_id: str, step_id: Optional[int] = None):
    """Thumbs up/down for the current plan, with an optional comment."""
    ratings = api.get_feedback(plan_id)
    if ratings:
        ups = sum(1 for r in ratings if r.get("rating") == "thumbs_up")
        st.caption(f"👍 {ups}  👎 {len(ratings) - ups}")

    key = f"rated_{plan_id}_{step_id}"
    if st.session_state.get(key):
        st.caption("Thanks for your feedback!")
        return

    st.markdown("**Was this learning plan helpful?**")
    with st.form(f"rating_form_{plan_id}_{step_id}"):
        rating = st.radio("Rating", ["👍", "👎"], horizontal=True, label_visibility="collapsed")
        comment = st.text_area("Comment", placeholder="Optional: Tell us more about your experience...")
        if st.form_submit_button("Submit Feedback"):
            resp = api.store_feedback(
                plan_id=plan_id,
                rating="thumbs_up" if rating == "👍" else "thumbs_down",
                step_id=step_id,
                comment=comment.strip() or None,
            )
            if resp:
                st.session_state[key] = True
                st.toast("Feedback submitted. Thank you for your feedback!")
                st.rerun()
