# maintenance_client/presets.py
from typing import Dict

from .schemas import FormData

EMPTY_FORM = FormData()

HEALTHY_EXAMPLE = FormData(
    type="M",
    air_temp="300",
    process_temp="310",
    rot_speed="1500",
    torque="40",
    tool_wear="100",
    timeframe="24h",
)

FAILURE_RISK_EXAMPLE = FormData(
    type="L",
    air_temp="305",
    process_temp="315",
    rot_speed="1200",
    torque="70",
    tool_wear="220",
    timeframe="7d",
)

# button label -> preset, in display order
PRESETS: Dict[str, FormData] = {
    "✅ Healthy Example": HEALTHY_EXAMPLE,
    "⚠️ Failure Risk Example": FAILURE_RISK_EXAMPLE,
}
