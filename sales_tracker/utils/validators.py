# utils/validators.py
"""
Input checks shared by the dialogs (bool helpers) and the services
(require_* helpers that raise ValidationError with a user-facing message).
"""
import math

from ..errors import ValidationError


def non_empty(text: str) -> bool:
    """
    True if `text` is not None/empty after stripping whitespace.
    """
    return bool(text and str(text).strip())


# ---- Numeric parsing & validators ----

def try_parse_float(x):
    """
    Best-effort parse to float.

    Returns:
        (ok: bool, value: float|None)
    """
    try:
        val = float(x)
    except (TypeError, ValueError):
        return False, None
    # reject inf/nan
    if not math.isfinite(val):
        return False, None
    return True, val


# ---- Raising variants (services) ----

def require_text(value, label: str) -> str:
    if not non_empty(value):
        raise ValidationError(f"{label} is required.")
    return str(value).strip()


def require_non_negative(value, label: str) -> float:
    ok, val = try_parse_float(value)
    if not ok:
        raise ValidationError(f"{label} must be a number.")
    if val < 0:
        raise ValidationError(f"{label} cannot be negative.")
    return val


def optional_non_negative(value, label: str, default: float = 0.0) -> float:
    """Like require_non_negative, but None/blank means `default`."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    return require_non_negative(value, label)


def require_positive_int(value, label: str) -> int:
    ok, val = try_parse_float(value)
    if not ok or val != int(val):
        raise ValidationError(f"{label} must be a whole number.")
    if val <= 0:
        raise ValidationError(f"{label} must be greater than zero.")
    return int(val)
