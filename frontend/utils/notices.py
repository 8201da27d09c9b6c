# frontend/utils/notices.py
import streamlit as st

ICONS = {"info": "ℹ️", "warning": "⚠️", "error": "🚨"}


def apply_response(resp: dict):
    """Store the latest session snapshot and queue its notices for the next render."""
    if not resp or "state" not in resp:
        return
    st.session_state.thread_id = resp["thread_id"]
    st.session_state.snapshot = resp["state"]
    st.session_state.notices = st.session_state.get("notices", []) + resp.get("notices", [])


def show_notices():
    for notice in st.session_state.get("notices", []):
        text = f"**{notice['title']}**: {notice['description']}"
        if notice.get("level") == "error":
            st.error(text, icon=ICONS["error"])
        else:
            st.toast(text, icon=ICONS.get(notice.get("level"), ICONS["info"]))
    st.session_state.notices = []
