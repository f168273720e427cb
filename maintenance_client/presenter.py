# maintenance_client/presenter.py
import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

from .schemas import TIMEFRAME_LABELS, PredictionResponse

FAILURE_HEADLINE = "⚠️ Machine Failure Predicted"
HEALTHY_HEADLINE = "✅ No Failure Predicted"
MAINTENANCE_RECOMMENDATION = "Schedule maintenance immediately."
MONITORING_RECOMMENDATION = "Machine is healthy. Continue monitoring."
PLACEHOLDER = "—"


class DisplayModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_failure: bool
    severity: Literal["danger", "success"]
    headline: str
    summary: str
    probability_text: str
    recommendation: str
    timeframe_label: str
    # None means the risk-window line is not rendered at all
    risk_window: Optional[str] = None


def format_probability(value) -> str:
    """
    One decimal place plus "%". Ties round away from zero, values
    outside 0..100 are shown as they are.
    """
    if value is None:
        return PLACEHOLDER
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return f"{value}%"
    try:
        value = float(value)
    except OverflowError:
        # ints past the float range, as JSON may deliver them
        value = math.inf if value > 0 else -math.inf
    if math.isnan(value):
        return "NaN%"
    if math.isinf(value):
        return ("-" if value < 0 else "") + "Infinity%"
    if abs(value) >= 1e21:
        # toFixed gives up here and prints the shortest form, e.g. "1e+21"
        return f"{value!r}%"
    with localcontext() as ctx:
        # wide enough for any finite float
        ctx.prec = 400
        rounded = Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{rounded}%"


def timeframe_label(selected: Optional[str]) -> str:
    if not selected:
        return PLACEHOLDER
    if isinstance(selected, str):
        return TIMEFRAME_LABELS.get(selected, selected)
    return str(selected)


def present(response: PredictionResponse) -> DisplayModel:
    is_failure = response.prediction == 1
    risk_window = response.risk_window if response.risk_window else None

    return DisplayModel(
        is_failure=is_failure,
        severity="danger" if is_failure else "success",
        headline=FAILURE_HEADLINE if is_failure else HEALTHY_HEADLINE,
        summary="" if response.result is None else str(response.result),
        probability_text=format_probability(response.failure_probability),
        recommendation=MAINTENANCE_RECOMMENDATION if is_failure else MONITORING_RECOMMENDATION,
        timeframe_label=timeframe_label(response.selected_timeframe),
        risk_window=None if risk_window is None else str(risk_window),
    )
