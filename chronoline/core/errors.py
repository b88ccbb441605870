"""Error taxonomy for the timeline engine.

Domain and configuration errors are raised synchronously at the call site that
introduced them. Placement degeneracy is never raised: the collision resolver
attaches a `PlacementDegeneracy` to its report and the engine keeps going with
best-effort positions.
"""

from __future__ import annotations

from typing import Optional, Sequence

__all__ = [
    "ErrorSeverity",
    "TimelineError",
    "InvalidDomain",
    "ConfigError",
    "UnknownEntity",
    "PlacementDegeneracy",
]


class ErrorSeverity:
    """Error severity levels."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class TimelineError(Exception):
    """Base exception for timeline engine errors."""

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        severity: str = ErrorSeverity.ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or message
        self.severity = severity


class InvalidDomain(TimelineError, ValueError):
    """Axis mapping was asked to use a year domain of zero length."""

    def __init__(self, domain_min: float, domain_max: float):
        super().__init__(
            f"year domain must not be empty, got [{domain_min}, {domain_max}]",
            details=f"domain_min={domain_min!r} domain_max={domain_max!r}",
        )
        self.domain_min = domain_min
        self.domain_max = domain_max


class ConfigError(TimelineError, ValueError):
    """Engine configuration is invalid; detected at construction time."""

    def __init__(self, message: str, field_name: Optional[str] = None):
        details = f"{field_name}: {message}" if field_name else message
        super().__init__(message, details=details, severity=ErrorSeverity.CRITICAL)
        self.field_name = field_name


class UnknownEntity(TimelineError, KeyError):
    """An entity id was not found in the engine's table."""

    def __init__(self, entity_id):
        super().__init__(f"unknown entity id: {entity_id!r}")
        self.entity_id = entity_id

    def __str__(self):  # KeyError would otherwise repr() the message
        return self.message


class PlacementDegeneracy(TimelineError):
    """Some markers could not be separated within the attempt budget.

    Observable only: instances are stored on the placement report and logged,
    never raised by the engine.
    """

    def __init__(self, entity_ids: Sequence[str], min_spacing: float, max_attempts: int):
        ids = tuple(entity_ids)
        super().__init__(
            f"{len(ids)} marker(s) overlap after {max_attempts} attempts",
            details=(
                f"entities={', '.join(ids)} min_spacing={min_spacing} "
                f"max_attempts={max_attempts}"
            ),
            severity=ErrorSeverity.WARNING,
        )
        self.entity_ids = ids
        self.min_spacing = min_spacing
        self.max_attempts = max_attempts
