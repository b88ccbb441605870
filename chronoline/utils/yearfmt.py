"""Year formatting utilities.

Currently only provides `format_year`, which renders a signed year on the
BCE/CE axis. Year 0 is the boundary and is shown as 1 CE.
"""

from __future__ import annotations

__all__ = ["format_year"]


def format_year(year: float | None) -> str:
    """Return a label such as ``480 BCE``, ``1 CE`` or ``1940 CE``.

    Fractional years (e.g. from `x_to_year`) are rounded half away from zero
    first so that ``-479.5`` reads ``480 BCE``. ``None`` formats as ``""``.
    """
    if year is None:
        return ""
    if isinstance(year, float):
        year = int(year + 0.5) if year >= 0 else -int(-year + 0.5)
    if year == 0:
        return "1 CE"
    if year < 0:
        return f"{abs(year)} BCE"
    return f"{year} CE"
