# maintenance_client/state.py
"""
UI state for one session of the form.

`UiState` is immutable; every transition returns a new instance and the
Streamlit page swaps it into `st.session_state`. Phases:

    idle -> submitting -> success | failed -> idle (next edit)

`request_seq` grows by one per accepted submission. A completion carrying
an older sequence number is dropped, so the newest request always wins.
"""
import logging
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .client import PredictionClient
from .errors import (
    ConnectivityError,
    MissingFieldsError,
    PredictionError,
    ServiceError,
    SubmissionInFlight,
)
from .presenter import DisplayModel, present
from .presets import EMPTY_FORM
from .schemas import FormData, PredictionResponse, ValidInput, validate

log = logging.getLogger("maintenance-client.state")


class Phase(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class UiState(BaseModel):
    model_config = ConfigDict(frozen=True)

    phase: Phase = Phase.IDLE
    form: FormData = EMPTY_FORM
    # input of the request in flight, or of the one that produced `response`
    submitted: Optional[ValidInput] = None
    response: Optional[PredictionResponse] = None
    display: Optional[DisplayModel] = None
    error: Optional[str] = None
    request_seq: int = 0

    @property
    def busy(self) -> bool:
        return self.phase is Phase.SUBMITTING


def initial_state() -> UiState:
    return UiState()


# --------------------
# Form edits
# --------------------
def _with_form(state: UiState, form: FormData) -> UiState:
    # edits are allowed mid-request; they only touch the form
    phase = state.phase if state.busy else Phase.IDLE
    return state.model_copy(update={"form": form, "error": None, "phase": phase})


def edit(state: UiState, field: str, value: str) -> UiState:
    if field not in FormData.model_fields:
        raise ValueError(f"Unknown form field: {field}")
    return _with_form(state, state.form.model_copy(update={field: value}))


def load_preset(state: UiState, preset: FormData) -> UiState:
    """Replace the whole form with `preset`; nothing is merged."""
    return _with_form(state, preset)


# --------------------
# Submission
# --------------------
def begin_submit(state: UiState) -> UiState:
    if state.busy:
        raise SubmissionInFlight(f"request #{state.request_seq} still running")

    try:
        valid = validate(state.form)
    except MissingFieldsError as e:
        log.info("Submission rejected: %s", e)
        return state.model_copy(update={"error": e.user_message})

    seq = state.request_seq + 1
    log.info("Submitting request #%d", seq)
    return state.model_copy(
        update={
            "phase": Phase.SUBMITTING,
            "submitted": valid,
            "response": None,
            "display": None,
            "error": None,
            "request_seq": seq,
        }
    )


def _is_stale(state: UiState, seq: int) -> bool:
    if not state.busy or seq != state.request_seq:
        log.warning("Dropping stale completion #%d (current #%d)", seq, state.request_seq)
        return True
    return False


def complete(state: UiState, seq: int, response: PredictionResponse) -> UiState:
    if _is_stale(state, seq):
        return state
    return state.model_copy(
        update={
            "phase": Phase.SUCCESS,
            "response": response,
            "display": present(response),
            "error": None,
        }
    )


def fail(state: UiState, seq: int, error: PredictionError) -> UiState:
    if _is_stale(state, seq):
        return state
    return state.model_copy(
        update={
            "phase": Phase.FAILED,
            "response": None,
            "display": None,
            "error": error.user_message,
        }
    )


def finish_submission(state: UiState, client: PredictionClient) -> UiState:
    """Run the call for a state returned by `begin_submit`."""
    if not state.busy or state.submitted is None:
        raise ValueError("finish_submission needs a submitting state")

    seq = state.request_seq
    try:
        response = client.predict(state.submitted)
    except ConnectivityError as e:
        log.warning("Request #%d failed, service unreachable: %s", seq, e)
        return fail(state, seq, e)
    except ServiceError as e:
        log.warning("Request #%d failed, status=%s: %s", seq, e.status_code, e)
        return fail(state, seq, e)
    return complete(state, seq, response)


def run_submission(state: UiState, client: PredictionClient) -> UiState:
    state = begin_submit(state)
    if not state.busy:
        return state
    return finish_submission(state, client)
