import math
from numbers import Real
from typing import Any


def is_valid_rating(value: Any) -> bool:
    """A rating counts only when it is a finite, non-negative number."""
    if value is None or isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value) and value >= 0


def normalize_rating(value: Any) -> float | None:
    return float(value) if is_valid_rating(value) else None


def validate_required_text(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"The '{field_name}' field is required.")
    return value
