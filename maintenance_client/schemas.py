# maintenance_client/schemas.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import MissingFieldsError

MACHINE_TYPES: Dict[str, str] = {
    "L": "L - Low Quality",
    "M": "M - Medium Quality",
    "H": "H - High Quality",
}

TIMEFRAME_LABELS: Dict[str, str] = {
    "24h": "Next 24 hours",
    "7d": "Next 7 days",
    "30d": "Next 30 days",
}
DEFAULT_TIMEFRAME = "24h"

# Order matters: it is the order fields are reported as missing
REQUIRED_FIELDS: List[str] = [
    "type",
    "air_temp",
    "process_temp",
    "rot_speed",
    "torque",
    "tool_wear",
]


# ---- Form ----
class FormData(BaseModel):
    """
    Raw form state, kept as text exactly as the widgets hand it over.
    Numeric fields are only converted at the network boundary.
    """
    model_config = ConfigDict(frozen=True)

    type: str = ""
    air_temp: str = ""
    process_temp: str = ""
    rot_speed: str = ""
    torque: str = ""
    tool_wear: str = ""
    timeframe: str = DEFAULT_TIMEFRAME

    def missing_fields(self) -> List[str]:
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]


class ValidInput(FormData):
    """A FormData that passed `validate`; numeric text is not checked."""


def validate(form: FormData) -> ValidInput:
    missing = form.missing_fields()
    if missing:
        raise MissingFieldsError(missing)
    return ValidInput(**form.model_dump())


# ---- Request ----
class PredictionRequest(BaseModel):
    type: str
    # None is what a non-finite reading turns into on the wire
    air_temp: Optional[float]
    process_temp: Optional[float]
    rot_speed: Optional[float]
    torque: Optional[float]
    tool_wear: Optional[float]
    timeframe: str = Field(default=DEFAULT_TIMEFRAME)


# ---- Response ----
class PredictionResponse(BaseModel):
    """
    Payload returned by the prediction service.

    Built with `from_json`, which does not validate: whatever the service
    sent is kept as-is, absent fields come back as None.
    """
    model_config = ConfigDict(extra="allow")

    prediction: Optional[int] = None
    # percentage, not clamped to [0, 100]
    failure_probability: Optional[float] = None
    result: Optional[str] = None
    risk_window: Optional[str] = None
    selected_timeframe: Optional[str] = None

    @classmethod
    def from_json(cls, body: Dict[str, Any]) -> "PredictionResponse":
        return cls.model_construct(**body)
