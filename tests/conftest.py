import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
import requests

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from maintenance_client.client import PredictionClient  # noqa: E402

API_URL = "https://predictor.test/predict"


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: Optional[str] = None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else str(body)

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


class FakeHttp:
    """Stands in for the `requests` module; records every call."""

    def __init__(
        self,
        response=None,
        exc: Optional[Exception] = None,
        post_exc: Optional[Exception] = None,
    ):
        self.response = response or FakeResponse()
        self.exc = exc
        # raised by POST only, so GET /health still answers
        self.post_exc = post_exc
        self.calls: List[Dict[str, Any]] = []

    def _send(self, method: str, url: str, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.exc is not None:
            raise self.exc
        if method == "POST" and self.post_exc is not None:
            raise self.post_exc
        return self.response

    def post(self, url, **kwargs):
        return self._send("POST", url, **kwargs)

    def get(self, url, **kwargs):
        return self._send("GET", url, **kwargs)


@pytest.fixture
def failure_body() -> Dict[str, Any]:
    return {
        "prediction": 1,
        "failure_probability": 72.34,
        "result": "R",
        "risk_window": "48h",
        "selected_timeframe": "7d",
    }


@pytest.fixture
def healthy_body() -> Dict[str, Any]:
    return {"prediction": 0, "failure_probability": 3.0, "result": "R"}


@pytest.fixture
def make_client():
    def _make(response=None, exc: Optional[Exception] = None):
        http = FakeHttp(response=response, exc=exc)
        return PredictionClient(API_URL, http=http), http

    return _make


@pytest.fixture(scope="session")
def base_url() -> str:
    return os.getenv("PREDICTION_API_URL", "https://machine-failure-backend.onrender.com/predict")


@pytest.fixture
def connection_error() -> Exception:
    return requests.ConnectionError("Name or service not known")


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def fake_http():
    return FakeHttp
