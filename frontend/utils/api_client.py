# frontend/utils/api_client.py
import os
from typing import Optional

import requests
import streamlit as st

BASE_URL = os.getenv("CODELEAP_API_URL", "http://127.0.0.1:5010")  # Make sure backend runs on this port

# Gateway calls may take up to a minute each, and a plan chains two of them
LONG_TIMEOUT = 180
SHORT_TIMEOUT = 30


class APIClient:
    def __init__(self, base_url: str = BASE_URL):
        self.base_url = base_url.rstrip("/")

    def _request(self, method: str, path: str, json: Optional[dict] = None, timeout: int = SHORT_TIMEOUT):
        try:
            resp = requests.request(method, f"{self.base_url}{path}", json=json, timeout=timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                st.session_state.thread_id = None
                st.warning("Session expired. Start a new one.")
            else:
                st.error(f"Request failed: {e}")
            return {}
        except requests.RequestException as e:
            st.error(f"Backend unreachable: {e}")
            return {}

    def _session_post(self, thread_id: str, action: str, json: Optional[dict] = None, timeout: int = SHORT_TIMEOUT):
        return self._request("POST", f"/api/session/{thread_id}/{action}", json=json, timeout=timeout)

    # ---------------- Session ----------------
    def start_session(self, mode: str = "hand-holding"):
        return self._request("POST", "/api/session/start", json={"mode": mode}, timeout=LONG_TIMEOUT)

    def get_session_state(self, thread_id: str):
        return self._request("GET", f"/api/session/{thread_id}")

    def delete_session(self, thread_id: str):
        return self._request("DELETE", f"/api/session/{thread_id}")

    def generate_plan(self, thread_id: str, content: str, documentation_url: str = "", code_url: str = ""):
        payload = {"content": content, "documentation_url": documentation_url, "code_url": code_url}
        return self._session_post(thread_id, "plan", payload, timeout=LONG_TIMEOUT)

    def select_step(self, thread_id: str, index: int):
        return self._session_post(thread_id, "step", {"index": index}, timeout=LONG_TIMEOUT)

    def close_step(self, thread_id: str):
        return self._session_post(thread_id, "step/close")

    def next_step(self, thread_id: str):
        return self._session_post(thread_id, "next", timeout=LONG_TIMEOUT)

    def prev_step(self, thread_id: str):
        return self._session_post(thread_id, "prev", timeout=LONG_TIMEOUT)

    def change_mode(self, thread_id: str, mode: str):
        return self._session_post(thread_id, "mode", {"mode": mode}, timeout=LONG_TIMEOUT)

    def edit_code(self, thread_id: str, code: str):
        return self._session_post(thread_id, "code", {"code": code})

    def run_code(self, thread_id: str, code: str):
        return self._session_post(thread_id, "run", {"code": code})

    def improve_code(self, thread_id: str, code: str):
        return self._session_post(thread_id, "improve", {"code": code}, timeout=LONG_TIMEOUT)

    def submit_code(self, thread_id: str, code: str):
        return self._session_post(thread_id, "submit", {"code": code}, timeout=LONG_TIMEOUT)

    def explain_concept(self, thread_id: str):
        return self._session_post(thread_id, "explain", timeout=LONG_TIMEOUT)

    def toggle_expand(self, thread_id: str, panel: str):
        return self._session_post(thread_id, "expand", {"panel": panel})

    # ---------------- Ratings ----------------
    def store_feedback(self, plan_id: str, rating: str, step_id: Optional[int] = None, comment: Optional[str] = None):
        payload = {"plan_id": plan_id, "step_id": step_id, "rating": rating, "comment": comment}
        return self._request("POST", "/api/feedback", json=payload)

    def get_feedback(self, plan_id: str):
        return self._request("GET", f"/api/feedback/{requests.utils.quote(plan_id, safe='')}") or []
