# utils/helpers.py
from datetime import date
import logging
from typing import Union, Optional

NumberLike = Union[float, int, str]

_log = logging.getLogger(__name__)


def fmt_money(
    v: NumberLike,
    places: int = 2,
    *,
    sentinel: Optional[str] = None,
) -> str:
    """
    Format a number with thousands separators and a fixed number of decimals.

    If `v` does not parse as a number, returns `sentinel` when given,
    otherwise str(v).
    """
    try:
        x = float(v)
    except (TypeError, ValueError) as e:
        _log.debug("fmt_money: failed to parse %r as float: %s", v, e)
        return str(sentinel) if sentinel is not None else str(v)
    return f"{x:,.{places}f}"


def fmt_date(d: Optional[date]) -> str:
    return d.isoformat() if d else ""
