from __future__ import annotations

import math
from typing import Any

from ..core.exceptions import ValidationError


def require_coordinate(value: Any, field_name: str, *, limit: float) -> float:
    """Coerce a latitude/longitude to float and check it lies in [-limit, limit]."""
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} is required")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if math.isnan(number) or not -limit <= number <= limit:
        raise ValidationError(f"{field_name} must be between -{limit:g} and {limit:g}")
    return number


def require_latitude(value: Any) -> float:
    return require_coordinate(value, "latitude", limit=90.0)


def require_longitude(value: Any) -> float:
    return require_coordinate(value, "longitude", limit=180.0)
