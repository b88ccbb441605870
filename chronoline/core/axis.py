"""Year axis mapping.

Linear mapping between the signed-integer year axis (negative = BCE) and a
horizontal pixel range, plus the inverse used for hit-testing. No clamping is
done here; callers clamp for display.

The module also carries the static decorations drawn along the axis: labelled
year ticks and the four historical period bands.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, NamedTuple, Tuple

from .errors import InvalidDomain
from ..utils.yearfmt import format_year

DEFAULT_DOMAIN = (-12000, 2024)
TICK_YEARS = (-10000, -5000, 0, 1000, 2000)


class PeriodBand(NamedTuple):
    name: str
    start: int
    end: int
    rgba: Tuple[int, int, int, float]


PERIODS = (
    PeriodBand("Ancient", -12000, -3000, (251, 191, 36, 0.1)),
    PeriodBand("Classical", -3000, 500, (147, 197, 253, 0.1)),
    PeriodBand("Medieval", 500, 1500, (167, 243, 208, 0.1)),
    PeriodBand("Modern", 1500, 2024, (233, 213, 255, 0.1)),
)


def _check_domain(domain_min: float, domain_max: float) -> None:
    if domain_min == domain_max:
        raise InvalidDomain(domain_min, domain_max)


def year_to_x(
    year: float,
    domain_min: float,
    domain_max: float,
    pixel_min: float,
    pixel_max: float,
) -> float:
    """Map a year to a horizontal pixel offset.

    A zero-width pixel range maps every year to ``pixel_min``.

    Raises:
        InvalidDomain: if ``domain_min == domain_max``.
    """
    _check_domain(domain_min, domain_max)
    span = pixel_max - pixel_min
    if span == 0:
        return float(pixel_min)
    return pixel_min + (year - domain_min) / (domain_max - domain_min) * span


def x_to_year(
    x: float,
    domain_min: float,
    domain_max: float,
    pixel_min: float,
    pixel_max: float,
) -> float:
    """Inverse of `year_to_x`.

    With a zero-width pixel range there is no inverse; ``domain_min`` is
    returned so hit-testing during transient layouts still yields a year.
    """
    _check_domain(domain_min, domain_max)
    span = pixel_max - pixel_min
    if span == 0:
        return float(domain_min)
    return domain_min + (x - pixel_min) / span * (domain_max - domain_min)


@dataclass(frozen=True)
class AxisMapper:
    """A year domain bound to a pixel range."""

    domain_min: float = DEFAULT_DOMAIN[0]
    domain_max: float = DEFAULT_DOMAIN[1]
    pixel_min: float = 0.0
    pixel_max: float = 0.0

    def __post_init__(self):
        _check_domain(self.domain_min, self.domain_max)

    def to_x(self, year: float) -> float:
        return year_to_x(
            year, self.domain_min, self.domain_max, self.pixel_min, self.pixel_max
        )

    def to_year(self, x: float) -> float:
        return x_to_year(
            x, self.domain_min, self.domain_max, self.pixel_min, self.pixel_max
        )

    def ticks(self) -> List[Tuple[float, str]]:
        """Labelled year markers inside the domain as ``(x, label)`` pairs."""
        lo, hi = sorted((self.domain_min, self.domain_max))
        return [(self.to_x(y), format_year(y)) for y in TICK_YEARS if lo <= y <= hi]

    def period_bands(self) -> List[Tuple[PeriodBand, float, float]]:
        """Period bands clipped to the domain, with their pixel extents."""
        lo, hi = sorted((self.domain_min, self.domain_max))
        bands = []
        for band in PERIODS:
            start = max(band.start, lo)
            end = min(band.end, hi)
            if start >= end:
                continue
            bands.append((band, self.to_x(start), self.to_x(end)))
        return bands


__all__ = [
    "AxisMapper",
    "DEFAULT_DOMAIN",
    "PERIODS",
    "PeriodBand",
    "TICK_YEARS",
    "x_to_year",
    "year_to_x",
]
