"""Engine configuration.

`EngineConfig` is the single configuration surface of the timeline engine. It
is validated once at construction; an invalid combination raises
`ConfigError` there rather than misbehaving mid-interaction.

Environment overrides (all optional), read by `EngineConfig.from_env`:
    CHRONOLINE_MIN_SPACING     float
    CHRONOLINE_MIN_SCALE       float
    CHRONOLINE_MAX_SCALE       float
    CHRONOLINE_MAX_ATTEMPTS    int
    CHRONOLINE_ROW_OFFSETS     comma separated ints, e.g. "0,-25,25"
    CHRONOLINE_TRANSITION_MS   int (0 disables the eased transition)
    CHRONOLINE_LAYOUT          "three_pane" | "tiles"
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional, Tuple

from .errors import ConfigError

LAYOUTS = ("three_pane", "tiles")

_ENV_PREFIX = "CHRONOLINE_"


@dataclass(frozen=True)
class EngineConfig:
    # collision resolver
    min_spacing: float = 25.0
    row_offsets: Tuple[int, ...] = (0, -25, 25)
    max_attempts: int = 10
    # viewport
    min_scale: float = 0.5
    max_scale: float = 3.0
    detail_scale: float = 2.0
    zoom_in_factor: float = 1.3
    zoom_out_factor: float = 0.7
    wheel_zoom_modifier: bool = True  # wheel zooms only with a modifier held
    transition_ms: int = 300
    center_epsilon: float = 0.5
    # axis / rendering
    domain: Tuple[int, int] = (-12000, 2024)
    padding: float = 60.0
    marker_radius: float = 8.0
    # presentation variant
    layout: str = "three_pane"

    def __post_init__(self):
        # Normalise sequences so the dataclass stays hashable.
        object.__setattr__(self, "row_offsets", tuple(int(r) for r in self.row_offsets))
        object.__setattr__(self, "domain", tuple(self.domain))
        self._validate()

    def _validate(self) -> None:
        if self.min_spacing < 0:
            raise ConfigError("must not be negative", "min_spacing")
        if not self.row_offsets:
            raise ConfigError("needs at least one row", "row_offsets")
        if self.max_attempts < 1:
            raise ConfigError("must be at least 1", "max_attempts")
        if self.min_scale <= 0:
            raise ConfigError("must be positive", "min_scale")
        if self.min_scale > self.max_scale:
            raise ConfigError(
                f"min_scale ({self.min_scale}) exceeds max_scale ({self.max_scale})",
                "min_scale",
            )
        if not self.min_scale <= 1.0 <= self.max_scale:
            # overview always shows the whole domain at scale 1
            raise ConfigError(
                "overview scale 1 must lie within [min_scale, max_scale]",
                "min_scale" if self.min_scale > 1.0 else "max_scale",
            )
        if not self.min_scale <= self.detail_scale <= self.max_scale:
            raise ConfigError("must lie within [min_scale, max_scale]", "detail_scale")
        if self.zoom_in_factor <= 1.0:
            raise ConfigError("must be greater than 1", "zoom_in_factor")
        if not 0.0 < self.zoom_out_factor < 1.0:
            raise ConfigError("must be between 0 and 1", "zoom_out_factor")
        if self.transition_ms < 0:
            raise ConfigError("must not be negative", "transition_ms")
        if len(self.domain) != 2 or self.domain[0] >= self.domain[1]:
            raise ConfigError(f"invalid year domain {self.domain!r}", "domain")
        if self.padding < 0:
            raise ConfigError("must not be negative", "padding")
        if self.layout not in LAYOUTS:
            raise ConfigError(f"expected one of {LAYOUTS}, got {self.layout!r}", "layout")

    def with_overrides(self, **changes) -> "EngineConfig":
        return replace(self, **changes)

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, **defaults
    ) -> "EngineConfig":
        """Build a config from ``CHRONOLINE_*`` variables layered on ``defaults``."""
        env = os.environ if environ is None else environ
        values = dict(defaults)
        for f in fields(cls):
            raw = env.get(_ENV_PREFIX + f.name.upper())
            if raw is None or raw.strip() == "":
                continue
            try:
                values[f.name] = _parse_field(f.name, raw, getattr(cls, f.name))
            except ValueError as e:
                raise ConfigError(f"cannot parse {raw!r}: {e}", f.name) from e
        return cls(**values)


def _parse_field(name: str, raw: str, default):
    raw = raw.strip()
    if isinstance(default, bool):
        return raw.lower() in ("1", "true", "yes", "on")
    if isinstance(default, tuple):
        return tuple(int(part) for part in raw.split(",") if part.strip())
    if isinstance(default, int):
        return int(raw)
    if isinstance(default, float):
        return float(raw)
    return raw


__all__ = ["EngineConfig", "LAYOUTS"]
