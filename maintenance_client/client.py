# maintenance_client/client.py
import logging
import math
import re
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

import requests

from .errors import ConnectivityError, ServiceError
from .schemas import PredictionRequest, PredictionResponse, ValidInput

log = logging.getLogger("maintenance-client.client")

# Longest leading number: optional sign, then Infinity or a decimal with
# optional exponent. Anything after it is ignored. ASCII digits only.
_LEADING_NUMBER = re.compile(
    r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII
)


def parse_number(text: str) -> float:
    """
    Permissive text -> float conversion.
    "12.5" -> 12.5, " 40 " -> 40.0, "70abc" -> 70.0, "abc" -> nan.
    """
    m = _LEADING_NUMBER.match(text.strip())
    if m is None:
        return math.nan
    token = m.group(0)
    if token.lstrip("+-") == "Infinity":
        return -math.inf if token.startswith("-") else math.inf
    return float(token)


def _wire_number(text: str) -> Optional[float]:
    # JSON has no NaN/Infinity; they go out as null
    value = parse_number(text)
    return value if math.isfinite(value) else None


def build_payload(valid: ValidInput) -> Dict[str, Any]:
    req = PredictionRequest(
        type=valid.type,
        air_temp=_wire_number(valid.air_temp),
        process_temp=_wire_number(valid.process_temp),
        rot_speed=_wire_number(valid.rot_speed),
        torque=_wire_number(valid.torque),
        tool_wear=_wire_number(valid.tool_wear),
        timeframe=valid.timeframe,
    )
    return req.model_dump()


def _health_url(predict_url: str) -> str:
    parts = urlsplit(predict_url)
    base = parts.path.rsplit("/", 1)[0]
    return urlunsplit((parts.scheme, parts.netloc, f"{base}/health", "", ""))


class PredictionClient:
    """
    Thin wrapper around the remote prediction endpoint.

    `http` is anything with requests-style `post`/`get` (the `requests`
    module itself by default, or a `requests.Session`).
    """

    def __init__(self, url: str, timeout: Optional[float] = None, http=None):
        self.url = url
        self.timeout = timeout
        self.http = http or requests

    @property
    def health_url(self) -> str:
        return _health_url(self.url)

    def predict(self, valid: ValidInput) -> PredictionResponse:
        payload = build_payload(valid)
        log.info("POST %s type=%s timeframe=%s", self.url, payload["type"], payload["timeframe"])

        try:
            r = self.http.post(
                self.url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ConnectivityError(f"Prediction service unreachable: {e}") from e

        if not 200 <= r.status_code < 300:
            raise ServiceError(
                f"Prediction service returned {r.status_code}: {r.text[:200]}",
                status_code=r.status_code,
            )

        try:
            body = r.json()
        except ValueError as e:
            raise ServiceError("Prediction service returned invalid JSON", r.status_code) from e
        if not isinstance(body, dict):
            raise ServiceError(
                f"Expected a JSON object, got {type(body).__name__}", r.status_code
            )

        log.info("Prediction received: %s", {k: body.get(k) for k in ("prediction", "failure_probability")})
        return PredictionResponse.from_json(body)

    def health(self) -> bool:
        """True if `<base>/health` answers 2xx; never raises."""
        try:
            r = self.http.get(self.health_url, timeout=self.timeout or 10)
        except requests.RequestException as e:
            log.warning("Health check failed: %s", e)
            return False
        return 200 <= r.status_code < 300
