# app.py
import logging

import pandas as pd
import streamlit as st

from maintenance_client.client import PredictionClient, build_payload
from maintenance_client.config import load_settings, setup_logging
from maintenance_client.errors import SubmissionInFlight
from maintenance_client.presets import PRESETS
from maintenance_client.schemas import MACHINE_TYPES, TIMEFRAME_LABELS, FormData
from maintenance_client.state import (
    begin_submit,
    edit,
    finish_submission,
    initial_state,
    load_preset,
)

# ----- Settings -----
SETTINGS = load_settings()
setup_logging(SETTINGS.log_level)
log = logging.getLogger("maintenance-client.ui")

st.set_page_config(page_title="Predictive Maintenance System", page_icon="🛠️", layout="centered")

# (widget key, form field, label, placeholder)
NUMERIC_FIELDS = [
    ("f_air_temp", "air_temp", "🌡️ Air Temperature [K]", "e.g., 300"),
    ("f_process_temp", "process_temp", "🌡️ Process Temperature [K]", "e.g., 310"),
    ("f_rot_speed", "rot_speed", "🔄 Rotational Speed [rpm]", "e.g., 1500"),
    ("f_torque", "torque", "⚙️ Torque [Nm]", "e.g., 40"),
    ("f_tool_wear", "tool_wear", "⏱️ Tool Wear [min]", "e.g., 100"),
]


@st.cache_resource
def get_client() -> PredictionClient:
    return PredictionClient(SETTINGS.api_url, timeout=SETTINGS.timeout)


@st.cache_data(ttl=60, show_spinner=False)
def service_is_up(url: str) -> bool:
    return get_client().health()


# ----- Session state -----
if "ui" not in st.session_state:
    st.session_state.ui = initial_state()


def _sync_widgets(form: FormData) -> None:
    st.session_state["f_type"] = form.type or None
    st.session_state["f_timeframe"] = form.timeframe
    for key, field, _, _ in NUMERIC_FIELDS:
        st.session_state[key] = getattr(form, field)


if "f_timeframe" not in st.session_state:
    _sync_widgets(st.session_state.ui.form)


# ----- Callbacks -----
def on_edit(key: str, field: str) -> None:
    value = st.session_state[key]
    st.session_state.ui = edit(st.session_state.ui, field, "" if value is None else value)


def on_preset(preset: FormData) -> None:
    st.session_state.ui = load_preset(st.session_state.ui, preset)
    _sync_widgets(preset)


def on_predict() -> None:
    try:
        st.session_state.ui = begin_submit(st.session_state.ui)
    except SubmissionInFlight as e:
        log.info("Ignoring predict click: %s", e)


# ----- Sidebar -----
with st.sidebar:
    st.subheader("🔗 Prediction service")
    st.caption(SETTINGS.api_url)
    if service_is_up(SETTINGS.api_url):
        st.success("Connected")
    else:
        st.error("Service not reachable")

# ----- Header -----
st.title("🛠️ Predictive Maintenance System")
st.caption("AI-powered machine failure prediction from live sensor readings")

ui = st.session_state.ui

if ui.error:
    st.error(ui.error, icon="🚨")

# ----- Form -----
with st.container(border=True):
    st.subheader("📈 Sensor Data Input")
    st.caption("Enter machine parameters for health analysis")

    st.selectbox(
        "⚙️ Machine Type",
        options=list(MACHINE_TYPES),
        format_func=MACHINE_TYPES.get,
        index=None,
        placeholder="Select machine type",
        key="f_type",
        on_change=on_edit,
        args=("f_type", "type"),
    )

    for row in (NUMERIC_FIELDS[0:2], NUMERIC_FIELDS[2:4], NUMERIC_FIELDS[4:]):
        cols = st.columns(len(row)) if len(row) > 1 else [st.container()]
        for col, (key, field, label, placeholder) in zip(cols, row):
            with col:
                st.text_input(
                    label,
                    placeholder=placeholder,
                    key=key,
                    on_change=on_edit,
                    args=(key, field),
                )

    st.selectbox(
        "🕒 Prediction Timeframe",
        options=list(TIMEFRAME_LABELS),
        format_func=TIMEFRAME_LABELS.get,
        key="f_timeframe",
        on_change=on_edit,
        args=("f_timeframe", "timeframe"),
    )

    predict_col, *preset_cols = st.columns(1 + len(PRESETS))
    with predict_col:
        st.button(
            "Predicting..." if ui.busy else "Predict",
            key="predict",
            type="primary",
            use_container_width=True,
            disabled=ui.busy,
            on_click=on_predict,
        )
    # presets stay clickable while a request runs
    for i, (col, (label, preset)) in enumerate(zip(preset_cols, PRESETS.items())):
        with col:
            st.button(
                label,
                key=f"preset_{i}",
                use_container_width=True,
                on_click=on_preset,
                args=(preset,),
            )

# ----- Call -----
if ui.busy:
    with st.spinner("Analyzing sensor data..."):
        st.session_state.ui = finish_submission(ui, get_client())
    st.rerun()

# ----- Result -----
display = ui.display
if display is not None:
    banner = st.error if display.severity == "danger" else st.success
    banner(f"**{display.headline}**\n\n{display.summary}")

    m1, m2 = st.columns(2)
    m1.metric("Failure Probability", display.probability_text)
    m2.metric("Timeframe", display.timeframe_label)
    if display.risk_window is not None:
        st.markdown(f"**Risk window:** {display.risk_window}")
    st.info(f"🔧 **Recommendation:** {display.recommendation}")

    if ui.submitted is not None:
        with st.expander("Submitted readings"):
            st.dataframe(pd.DataFrame([build_payload(ui.submitted)]), hide_index=True)

st.divider()
st.caption("Predictive Maintenance System • Industrial IoT Analytics")
