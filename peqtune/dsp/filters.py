"""Biquad coefficient math for parametric EQ bands (RBJ cookbook)."""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import numpy as np

from peqtune.constants import (
    DEFAULT_FILTER_TYPE,
    DEFAULT_GAIN_DB,
    DEFAULT_Q,
    DEFAULT_SAMPLE_RATE,
    FREQ_FLOOR_HZ,
    NYQUIST_MARGIN,
    Q_FLOOR,
)

# Floor for |H|^2 so a zero in the numerator or denominator never yields inf.
_MAG_EPSILON = 1e-20

_TRUE_WORDS = {"true", "on", "yes", "1"}
_FALSE_WORDS = {"false", "off", "no", "0", ""}


class FilterType(str, Enum):
    """Filter shapes the coefficient designer knows about."""

    PEAK = "PK"
    LOW_SHELF = "LSQ"
    HIGH_SHELF = "HSQ"

    @classmethod
    def parse(cls, tag: Any) -> Optional["FilterType"]:
        """Return the shape for ``tag`` or ``None`` when it is not recognized."""
        return _FILTER_ALIASES.get(str(tag).strip().upper())


_FILTER_ALIASES: Dict[str, FilterType] = {
    "PK": FilterType.PEAK,
    "PEQ": FilterType.PEAK,
    "LSQ": FilterType.LOW_SHELF,
    "LSC": FilterType.LOW_SHELF,
    "LS": FilterType.LOW_SHELF,
    "HSQ": FilterType.HIGH_SHELF,
    "HSC": FilterType.HIGH_SHELF,
    "HS": FilterType.HIGH_SHELF,
}


def parse_bool(value: Any) -> bool:
    """Interpret checkbox-ish values (bools, 0/1, on/off, true/false, yes/no)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ValueError(f"Cannot interpret {value!r} as a boolean")
    if isinstance(value, (int, float)):
        return bool(value)
    raise ValueError(f"Cannot interpret {value!r} as a boolean")


@dataclass(frozen=True)
class Band:
    """One parametric filter stage; ``index`` is its position in the EQ."""

    index: int
    freq: float  # Hz
    gain: float  # dB boost/cut
    q: float  # quality factor
    filter_type: str = DEFAULT_FILTER_TYPE
    enabled: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "freq": self.freq,
            "gain": self.gain,
            "q": self.q,
            "type": self.filter_type,
            "enabled": self.enabled,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], index: int, fallback: Optional["Band"] = None) -> "Band":
        """Build a band at ``index``; keys missing from ``data`` come from ``fallback``.

        Raises ``ValueError`` or ``TypeError`` for values of the wrong kind.
        """
        base = fallback or Band(index, 1000.0, DEFAULT_GAIN_DB, DEFAULT_Q)
        return cls(
            index=index,
            freq=float(data.get("freq", base.freq)),
            gain=float(data.get("gain", base.gain)),
            q=float(data.get("q", base.q)),
            filter_type=str(data.get("type", base.filter_type)),
            enabled=parse_bool(data.get("enabled", base.enabled)),
        )


@dataclass(frozen=True)
class Biquad:
    """Second-order section with a0 normalized to 1.

    H(z) = (b0 + b1 z^-1 + b2 z^-2) / (1 + a1 z^-1 + a2 z^-2)
    """

    b0: float
    b1: float
    b2: float
    a1: float
    a2: float

    @classmethod
    def identity(cls) -> "Biquad":
        return cls(1.0, 0.0, 0.0, 0.0, 0.0)


def _normalize(b0: float, b1: float, b2: float, a0: float, a1: float, a2: float) -> Biquad:
    return Biquad(b0 / a0, b1 / a0, b2 / a0, a1 / a0, a2 / a0)


def design_peaking_eq(freq: float, gain_db: float, q: float, sample_rate: float) -> Biquad:
    """Return normalized RBJ coefficients for a peaking EQ."""
    a_gain = 10 ** (gain_db / 40.0)
    omega = 2 * math.pi * freq / sample_rate
    alpha = math.sin(omega) / (2 * q)
    cos_w = math.cos(omega)

    b0 = 1 + alpha * a_gain
    b1 = -2 * cos_w
    b2 = 1 - alpha * a_gain
    a0 = 1 + alpha / a_gain
    a1 = -2 * cos_w
    a2 = 1 - alpha / a_gain
    return _normalize(b0, b1, b2, a0, a1, a2)


def design_low_shelf(freq: float, gain_db: float, q: float, sample_rate: float) -> Biquad:
    """Return normalized RBJ coefficients for a low shelf."""
    a_gain = 10 ** (gain_db / 40.0)
    omega = 2 * math.pi * freq / sample_rate
    alpha = math.sin(omega) / (2 * q)
    cos_w = math.cos(omega)
    shelf = 2 * math.sqrt(a_gain) * alpha

    b0 = a_gain * ((a_gain + 1) - (a_gain - 1) * cos_w + shelf)
    b1 = 2 * a_gain * ((a_gain - 1) - (a_gain + 1) * cos_w)
    b2 = a_gain * ((a_gain + 1) - (a_gain - 1) * cos_w - shelf)
    a0 = (a_gain + 1) + (a_gain - 1) * cos_w + shelf
    a1 = -2 * ((a_gain - 1) + (a_gain + 1) * cos_w)
    a2 = (a_gain + 1) + (a_gain - 1) * cos_w - shelf
    return _normalize(b0, b1, b2, a0, a1, a2)


def design_high_shelf(freq: float, gain_db: float, q: float, sample_rate: float) -> Biquad:
    """Return normalized RBJ coefficients for a high shelf."""
    a_gain = 10 ** (gain_db / 40.0)
    omega = 2 * math.pi * freq / sample_rate
    alpha = math.sin(omega) / (2 * q)
    cos_w = math.cos(omega)
    shelf = 2 * math.sqrt(a_gain) * alpha

    b0 = a_gain * ((a_gain + 1) + (a_gain - 1) * cos_w + shelf)
    b1 = -2 * a_gain * ((a_gain - 1) + (a_gain + 1) * cos_w)
    b2 = a_gain * ((a_gain + 1) + (a_gain - 1) * cos_w - shelf)
    a0 = (a_gain + 1) - (a_gain - 1) * cos_w + shelf
    a1 = 2 * ((a_gain - 1) - (a_gain + 1) * cos_w)
    a2 = (a_gain + 1) - (a_gain - 1) * cos_w - shelf
    return _normalize(b0, b1, b2, a0, a1, a2)


_DESIGNERS = {
    FilterType.PEAK: design_peaking_eq,
    FilterType.LOW_SHELF: design_low_shelf,
    FilterType.HIGH_SHELF: design_high_shelf,
}


def coefficients_for(band: Band, sample_rate: float = DEFAULT_SAMPLE_RATE) -> Biquad:
    """Derive the biquad for ``band``.

    Disabled bands and unrecognized tags give the identity filter. Degenerate
    inputs are clamped so the result is always finite.
    """
    if not band.enabled:
        return Biquad.identity()
    shape = FilterType.parse(band.filter_type)
    if shape is None:
        return Biquad.identity()

    # Comparisons are written so NaN falls through to the floor.
    q = band.q if band.q > 0 else Q_FLOOR
    freq = band.freq if band.freq > 0 else FREQ_FLOOR_HZ
    freq = min(freq, sample_rate / NYQUIST_MARGIN)
    gain = band.gain if math.isfinite(band.gain) else 0.0
    return _DESIGNERS[shape](freq, gain, q, sample_rate)


def cascade_coefficients(bands: Iterable[Band], sample_rate: float = DEFAULT_SAMPLE_RATE) -> List[Biquad]:
    """Coefficients for every band, in cascade order."""
    return [coefficients_for(band, sample_rate) for band in bands]


def magnitude_db(
    freq_hz: Union[float, np.ndarray],
    coefficients: Iterable[Biquad],
    sample_rate: float = DEFAULT_SAMPLE_RATE,
) -> Union[float, np.ndarray]:
    """Summed magnitude of a biquad cascade in dB at ``freq_hz``.

    Accepts a scalar or an array of frequencies. Magnitude only; phase is not
    modelled.
    """
    w = 2 * np.pi * np.asarray(freq_hz, dtype=np.float64) / sample_rate
    cos_1, cos_2 = np.cos(w), np.cos(2 * w)
    sin_1, sin_2 = np.sin(w), np.sin(2 * w)

    total = np.zeros_like(w)
    for c in coefficients:
        num_re = c.b0 + c.b1 * cos_1 + c.b2 * cos_2
        num_im = -(c.b1 * sin_1 + c.b2 * sin_2)
        den_re = 1 + c.a1 * cos_1 + c.a2 * cos_2
        den_im = -(c.a1 * sin_1 + c.a2 * sin_2)
        num = np.maximum(num_re * num_re + num_im * num_im, _MAG_EPSILON)
        den = np.maximum(den_re * den_re + den_im * den_im, _MAG_EPSILON)
        total = total + 10 * np.log10(num / den)
    if total.ndim == 0:
        return float(total)
    return total
