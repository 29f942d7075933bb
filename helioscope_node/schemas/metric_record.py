import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr

# bool first so True/False are never coerced into 1/0
FieldValue = Union[StrictBool, StrictInt, StrictFloat, StrictStr]

_ONE_DECIMAL = Decimal("0.1")


class MetricRecord(BaseModel):
    """
    Unit of probe output.
    Created by a single probe invocation and handed straight to the sink;
    never stored or mutated afterwards.
    """
    model_config = ConfigDict(frozen=True)

    message: str = Field(min_length=1)
    fields: Dict[str, FieldValue] = Field(default_factory=dict)
    level: int = logging.INFO


def format_one_decimal(value: float) -> str:
    """
    Render a float with exactly one decimal digit, rounding half away from zero.

    Goes through the shortest repr of the float so 0.25 renders as "0.3"
    rather than following the binary expansion.
    """
    rounded = Decimal(repr(float(value))).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)
    if rounded == 0:
        rounded = abs(rounded)
    return f"{rounded:.1f}"


def usage_percent(used: int, total: int) -> float:
    """used / total * 100.0, or 0.0 when total is zero (e.g. swap disabled)."""
    if total <= 0:
        return 0.0
    return used / total * 100.0


def fraction_to_percent(fraction: float) -> str:
    """Usage fraction → one-decimal percent string, clamped to [0.0, 100.0]."""
    fraction = float(fraction)
    if math.isnan(fraction):
        fraction = 0.0
    clamped = min(max(fraction, 0.0), 1.0)
    return format_one_decimal(clamped * 100.0)
