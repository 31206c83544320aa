"""Log-frequency / linear-gain axis mapping for drawing the EQ curve.

Renderers use these so handles and curves land where the engine computed them.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from peqtune.constants import GAIN_RANGE_DB, MAX_FREQ_HZ, MIN_FREQ_HZ


@dataclass(frozen=True)
class AxisConfig:
    min_freq: float = MIN_FREQ_HZ
    max_freq: float = MAX_FREQ_HZ
    gain_range: float = GAIN_RANGE_DB  # dB shown above and below 0
    padding: float = 40.0


DEFAULT_AXIS = AxisConfig()


def freq_to_x(freq: float, width: float, axis: AxisConfig = DEFAULT_AXIS) -> float:
    log_min = math.log10(axis.min_freq)
    log_max = math.log10(axis.max_freq)
    log_freq = math.log10(max(freq, axis.min_freq))
    return axis.padding + (log_freq - log_min) / (log_max - log_min) * (width - 2 * axis.padding)


def x_to_freq(x: float, width: float, axis: AxisConfig = DEFAULT_AXIS) -> float:
    log_min = math.log10(axis.min_freq)
    log_max = math.log10(axis.max_freq)
    ratio = (x - axis.padding) / (width - 2 * axis.padding)
    return 10 ** (log_min + ratio * (log_max - log_min))


def gain_to_y(gain: float, height: float, axis: AxisConfig = DEFAULT_AXIS) -> float:
    return height / 2 - (gain / axis.gain_range) * (height / 2 - axis.padding)


def y_to_gain(y: float, height: float, axis: AxisConfig = DEFAULT_AXIS) -> float:
    return -(y - height / 2) * axis.gain_range / (height / 2 - axis.padding)
