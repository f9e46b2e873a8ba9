# ui/streamlit_app.py
import os
from typing import Any, Dict, List

import requests
import streamlit as st


# ----------------- helpers: safe secrets/env -----------------
def safe_secret(key: str, default=None):
    """
    Read from Streamlit secrets first (if present), else from env, else default.
    """
    try:
        return st.secrets.get(key, os.environ.get(key, default))  # type: ignore[attr-defined]
    except Exception:
        return os.environ.get(key, default)


# ----------------- configuration -----------------
st.set_page_config(page_title="Line Matcher chat", layout="centered")
st.title("💬 Line Matcher")

DEBUG = (safe_secret("DEBUG", "0") == "1")
API_BASE = safe_secret("API_BASE", "http://127.0.0.1:8000")

if DEBUG:
    st.sidebar.caption("API base (debug)")
    api_base = st.sidebar.text_input("Base URL", value=API_BASE).rstrip("/")
else:
    api_base = (API_BASE or "").rstrip("/")


def _headers() -> Dict[str, str]:
    return {"Content-Type": "application/json", "Accept": "application/json"}


# ----------------- sidebar -----------------
if st.sidebar.button("Check API health"):
    try:
        r = requests.get(f"{api_base}/stats", headers=_headers(), timeout=10)
        r.raise_for_status()
        st.sidebar.success(r.json())
    except Exception as e:
        st.sidebar.error(f"Health failed: {e}")

alternating = st.sidebar.toggle("Reply with the next line", value=True)
show_top = st.sidebar.slider("Show best matches", min_value=0, max_value=10, value=0)
st.sidebar.caption(f"API: {api_base}")

if "history" not in st.session_state:
    st.session_state.history = []  # list of {"role", "content", "meta"}
history: List[Dict[str, Any]] = st.session_state.history


# ----------------- HTTP -----------------
def post_match(query: str) -> Dict[str, Any]:
    body: Dict[str, Any] = {"query": query, "alternating": alternating}
    if show_top:
        body["top_k"] = show_top
    r = requests.post(f"{api_base}/match", json=body, headers=_headers(), timeout=30)
    if r.status_code in (400, 404, 503):
        # engine errors come back as {"detail": "..."}
        return {"error": r.json().get("detail", r.text)}
    r.raise_for_status()
    return r.json()


# ----------------- render -----------------
for turn in history:
    with st.chat_message(turn["role"]):
        st.markdown(turn["content"])
        meta = turn.get("meta")
        if meta:
            st.caption(f"line {meta['document_id']} · score {meta['score']:.3f} · ties {len(meta['ties'])}")
            for item in meta.get("top") or []:
                st.code(f"[{item['document_id']}] {item['score']:.3f}  {item['text']}")

prompt = st.chat_input("Tell or ask me something…")
if prompt:
    history.append({"role": "user", "content": prompt})
    try:
        data = post_match(prompt)
    except Exception as e:
        data = {"error": f"Request failed: {e}"}
    if "error" in data:
        history.append({"role": "assistant", "content": f"⚠️ {data['error']}"})
    else:
        history.append({"role": "assistant", "content": data["text"], "meta": data})
    st.rerun()
