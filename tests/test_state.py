import pytest

from maintenance_client.errors import (
    FILL_ALL_FIELDS,
    SERVICE_UNAVAILABLE,
    ConnectivityError,
    SubmissionInFlight,
)
from maintenance_client.presets import FAILURE_RISK_EXAMPLE, HEALTHY_EXAMPLE
from maintenance_client.schemas import PredictionResponse
from maintenance_client.state import (
    Phase,
    begin_submit,
    complete,
    edit,
    fail,
    finish_submission,
    initial_state,
    load_preset,
    run_submission,
)


def test_initial_state_is_idle_and_empty():
    s = initial_state()
    assert s.phase is Phase.IDLE
    assert s.form.timeframe == "24h"
    assert s.display is None and s.error is None and s.request_seq == 0


def test_state_is_immutable():
    s = initial_state()
    with pytest.raises(Exception):
        s.phase = Phase.SUCCESS


def test_missing_fields_never_reach_network(make_client):
    client, http = make_client()
    s = edit(initial_state(), "type", "M")

    s = run_submission(s, client)

    assert http.calls == []
    assert s.error == FILL_ALL_FIELDS
    assert s.phase is Phase.IDLE
    assert s.request_seq == 0


def test_missing_fields_keep_previous_result(make_client, fake_response, failure_body):
    client, _ = make_client(response=fake_response(200, failure_body))
    s = run_submission(load_preset(initial_state(), FAILURE_RISK_EXAMPLE), client)
    previous = s.display

    s = run_submission(edit(s, "torque", ""), client)

    assert s.error == FILL_ALL_FIELDS
    assert s.display == previous


def test_successful_submission(make_client, fake_response, failure_body):
    client, http = make_client(response=fake_response(200, failure_body))

    s = run_submission(load_preset(initial_state(), FAILURE_RISK_EXAMPLE), client)

    assert len(http.calls) == 1
    assert s.phase is Phase.SUCCESS
    assert s.error is None
    assert s.display.probability_text == "72.3%"
    assert s.submitted.torque == "70"
    assert s.request_seq == 1


@pytest.mark.parametrize("status", [500, None])
def test_failure_clears_previous_result(make_client, fake_response, failure_body, connection_error, status):
    ok_client, _ = make_client(response=fake_response(200, failure_body))
    s = run_submission(load_preset(initial_state(), FAILURE_RISK_EXAMPLE), ok_client)
    assert s.display is not None

    if status is None:
        bad_client, _ = make_client(exc=connection_error)
    else:
        bad_client, _ = make_client(response=fake_response(status, {"detail": "x"}))
    s = run_submission(s, bad_client)

    assert s.phase is Phase.FAILED
    assert s.display is None
    assert s.response is None
    assert s.error == SERVICE_UNAVAILABLE


def test_second_click_blocked_while_submitting():
    s = begin_submit(load_preset(initial_state(), HEALTHY_EXAMPLE))
    assert s.phase is Phase.SUBMITTING

    with pytest.raises(SubmissionInFlight):
        begin_submit(s)


def test_begin_submit_discards_previous_response(make_client, fake_response, healthy_body):
    client, _ = make_client(response=fake_response(200, healthy_body))
    s = run_submission(load_preset(initial_state(), HEALTHY_EXAMPLE), client)

    s = begin_submit(s)

    assert s.display is None and s.response is None
    assert s.request_seq == 2


def test_presets_overwrite_every_field():
    s = edit(initial_state(), "air_temp", "999")
    s = edit(s, "timeframe", "30d")

    s = load_preset(s, HEALTHY_EXAMPLE)
    s = load_preset(s, FAILURE_RISK_EXAMPLE)

    assert s.form == FAILURE_RISK_EXAMPLE


def test_presets_allowed_while_submitting():
    s = begin_submit(load_preset(initial_state(), HEALTHY_EXAMPLE))

    s = load_preset(s, FAILURE_RISK_EXAMPLE)

    assert s.phase is Phase.SUBMITTING
    assert s.form == FAILURE_RISK_EXAMPLE
    # request in flight keeps the input it was started with
    assert s.submitted.type == "M"


def test_edit_clears_error_and_leaves_failed():
    s = initial_state().model_copy(update={"phase": Phase.FAILED, "error": SERVICE_UNAVAILABLE})

    s = edit(s, "type", "H")

    assert s.error is None
    assert s.phase is Phase.IDLE


def test_edit_rejects_unknown_field():
    with pytest.raises(ValueError):
        edit(initial_state(), "pressure", "1")


def test_stale_completion_is_dropped(healthy_body, failure_body):
    s = begin_submit(load_preset(initial_state(), HEALTHY_EXAMPLE))
    first_seq = s.request_seq
    # a second request forced past the guard
    s = begin_submit(s.model_copy(update={"phase": Phase.IDLE}))

    s = complete(s, s.request_seq, PredictionResponse.from_json(failure_body))
    after = complete(s, first_seq, PredictionResponse.from_json(healthy_body))

    assert after is s
    assert after.display.is_failure is True


def test_stale_failure_is_dropped():
    s = begin_submit(load_preset(initial_state(), HEALTHY_EXAMPLE))

    after = fail(s, s.request_seq - 1, ConnectivityError("late"))

    assert after is s
    assert after.phase is Phase.SUBMITTING


def test_finish_submission_requires_submitting_state(make_client):
    client, _ = make_client()
    with pytest.raises(ValueError):
        finish_submission(initial_state(), client)


def test_preset_clears_error_and_leaves_failed():
    s = initial_state().model_copy(update={"phase": Phase.FAILED, "error": SERVICE_UNAVAILABLE})

    s = load_preset(s, HEALTHY_EXAMPLE)

    assert s.error is None
    assert s.phase is Phase.IDLE
    assert s.form == HEALTHY_EXAMPLE


def test_preset_clears_missing_fields_banner(make_client):
    client, http = make_client()
    s = run_submission(initial_state(), client)
    assert s.error == FILL_ALL_FIELDS

    s = load_preset(s, FAILURE_RISK_EXAMPLE)

    assert s.error is None
    assert http.calls == []
