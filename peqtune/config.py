"""Runtime settings, overridable from the environment."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from peqtune.constants import DEFAULT_SAMPLE_RATE, DEVICE_TAG

ENV_PREFIX = "PEQTUNE_"


@dataclass
class Settings:
    sample_rate: float = DEFAULT_SAMPLE_RATE
    curve_points: int = 512
    device_tag: str = DEVICE_TAG
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``PEQTUNE_*`` variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        settings = cls()
        raw = env.get(ENV_PREFIX + "SAMPLE_RATE")
        if raw:
            settings.sample_rate = _parse_number(ENV_PREFIX + "SAMPLE_RATE", raw, float)
            if settings.sample_rate <= 0:
                raise ValueError(f"{ENV_PREFIX}SAMPLE_RATE must be positive, got {raw!r}")
        raw = env.get(ENV_PREFIX + "CURVE_POINTS")
        if raw:
            settings.curve_points = _parse_number(ENV_PREFIX + "CURVE_POINTS", raw, int)
            if settings.curve_points < 2:
                raise ValueError(f"{ENV_PREFIX}CURVE_POINTS must be at least 2, got {raw!r}")
        settings.device_tag = env.get(ENV_PREFIX + "DEVICE_TAG") or settings.device_tag
        settings.log_level = (env.get(ENV_PREFIX + "LOG_LEVEL") or settings.log_level).upper()
        return settings


def _parse_number(name: str, raw: str, kind):
    try:
        return kind(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
