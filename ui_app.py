"""
Streamlit web UI for CourtVision.

Run with:
    streamlit run ui_app.py
"""

import time
from datetime import datetime
from typing import List, Optional

import pandas as pd
import plotly.express as px
import requests
import streamlit as st

from courtvision.config import settings


API_BASE = settings.api_base_url

DEFAULT_QUERY = (
    "Retrieve top 10 PER leaders for the 2024-25 season from NBA.com "
    "and calculate adjusted True Shooting."
)

STEP_MARKERS = {
    "reasoning": "[THINK]",
    "action": "[ACT]  ",
    "healing": "[HEAL] ",
    "output": "[OUT]  ",
}


def start_task(query: str) -> str:
    resp = requests.post(f"{API_BASE}/agent/start", json={"query": query}, timeout=30)
    resp.raise_for_status()
    return resp.json()["task_id"]


def get_status(task_id: str) -> dict:
    resp = requests.get(f"{API_BASE}/agent/status/{task_id}", timeout=30)
    resp.raise_for_status()
    return resp.json()


def get_suggestions() -> List[str]:
    try:
        resp = requests.get(f"{API_BASE}/suggestions", timeout=10)
        resp.raise_for_status()
    except requests.RequestException:
        return []
    return resp.json().get("suggestions", [])


def local_time(timestamp: str) -> str:
    """HH:MM:SS in the viewer's local timezone for an ISO-8601 UTC timestamp."""
    return datetime.fromisoformat(timestamp.replace("Z", "+00:00")).astimezone().strftime("%H:%M:%S")


def format_steps(steps: List[dict]) -> str:
    lines = []
    for step in steps:
        stamp = local_time(step["timestamp"])
        marker = STEP_MARKERS.get(step["kind"], "[?]    ")
        lines.append(f"{stamp} {marker} {step['message']}")
    return "\n".join(lines) or "Waiting for agent initialization..."


def query_to_run(picked: Optional[str], typed: str, submitted: bool) -> Optional[str]:
    """A clicked suggestion runs straight away; otherwise the submitted, non-blank text."""
    if picked is not None:
        return picked
    if submitted and typed.strip():
        return typed
    return None


def entries_frame(entries: List[dict]) -> pd.DataFrame:
    rows = []
    for e in entries:
        advanced = e.get("advanced") or {}
        rows.append(
            {
                "name": e["name"],
                "team": e.get("team", ""),
                "date": e.get("date"),
                "pts": e["pts"],
                "reb": e["reb"],
                "ast": e["ast"],
                "PER": advanced.get("per"),
                "TS%": (advanced.get("ts_pct") or 0) * 100,
                "eFG%": (advanced.get("efg_pct") or 0) * 100,
            }
        )
    return pd.DataFrame(rows)


def render_chart(mode: str, df: pd.DataFrame) -> None:
    if mode == "TREND" and df["date"].notna().any():
        fig = px.line(df.sort_values("date"), x="date", y="pts", color="name", markers=True)
        st.subheader("Scoring trend")
    elif mode == "COMPARISON":
        long_df = df.melt(id_vars="name", value_vars=["pts", "reb", "ast"], var_name="stat")
        fig = px.bar(long_df, x="stat", y="value", color="name", barmode="group")
        st.subheader("Head-to-head")
    else:
        top = df.head(8).copy()
        top["player"] = top["name"].str.split().str[-1]
        long_df = top.melt(id_vars="player", value_vars=["PER", "TS%"], var_name="metric")
        fig = px.bar(long_df, x="player", y="value", color="metric", barmode="group")
        st.subheader("Efficiency metrics (PER vs TS%)")
    st.plotly_chart(fig, use_container_width=True)


def main() -> None:
    st.set_page_config(page_title="CourtVision", layout="wide")

    st.title("CourtVision – NBA Analytics Agent")
    st.caption(
        "Statistics are generated by a language model and are not real measurements. "
        "The terminal log is a scripted narration."
    )

    if "query" not in st.session_state:
        st.session_state["query"] = DEFAULT_QUERY

    picked: Optional[str] = None
    suggestions = get_suggestions()
    if suggestions:
        cols = st.columns(len(suggestions))
        for col, text in zip(cols, suggestions):
            if col.button(text):
                picked = text
                st.session_state["query"] = text

    with st.form("query_form"):
        query = st.text_area("Task definition", key="query", height=100)
        submitted = st.form_submit_button("Execute pipeline")

    terminal_col, results_col = st.columns([5, 7])

    to_run = query_to_run(picked, query, submitted)
    if to_run is None:
        if submitted:
            st.warning("Enter a question first.")
        return

    try:
        task_id = start_task(to_run)
    except requests.RequestException as exc:
        st.error(f"Failed to start agent task: {exc}")
        return

    with terminal_col:
        st.subheader("Agent terminal")
        progress_bar = st.progress(0, text="Agent is running...")
        log_box = st.empty()

    final_status: Optional[dict] = None
    for i in range(120):
        time.sleep(0.5)
        try:
            status = get_status(task_id)
        except requests.RequestException as exc:
            st.error(f"Error while fetching status: {exc}")
            break

        final_status = status
        progress_bar.progress(min(99, (i + 1) * 2), text=f"Status: {status['status']}")
        log_box.code(format_steps(status.get("steps", [])), language="text")

        if status["status"] in {"completed", "error"}:
            break

    progress_bar.progress(100, text=f"Final status: {final_status['status'] if final_status else 'unknown'}")

    with results_col:
        if not final_status:
            st.warning("No final status available.")
            return

        if final_status["status"] == "error":
            steps = final_status.get("steps") or []
            last = steps[-1]["message"] if steps else final_status.get("error_message")
            st.error(last)
            return

        result = final_status.get("result") or {}
        st.markdown(f"**Mode:** {result.get('mode', '?')}")
        st.write(result.get("summary", ""))

        entries = result.get("entries", [])
        if not entries:
            st.info("Harvested data will appear here.")
            return

        df = entries_frame(entries)
        render_chart(result.get("mode", "RANKING"), df)
        st.subheader("Harvested entity registry")
        st.dataframe(df, use_container_width=True)


if __name__ == "__main__":
    main()
