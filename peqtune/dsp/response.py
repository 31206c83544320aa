"""Sampled frequency response of a band cascade."""
from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np

from peqtune.constants import DEFAULT_SAMPLE_RATE, MAX_FREQ_HZ, MIN_FREQ_HZ
from .filters import Band, cascade_coefficients, magnitude_db


def log_frequencies(points: int, min_freq: float = MIN_FREQ_HZ, max_freq: float = MAX_FREQ_HZ) -> np.ndarray:
    if points < 1:
        raise ValueError("points must be at least 1")
    return np.logspace(np.log10(min_freq), np.log10(max_freq), points)


def frequency_response(
    bands: Iterable[Band],
    sample_rate: float = DEFAULT_SAMPLE_RATE,
    points: int = 512,
) -> Tuple[np.ndarray, np.ndarray]:
    freqs = log_frequencies(points)
    coeffs = cascade_coefficients(bands, sample_rate)
    magnitude = magnitude_db(freqs, coeffs, sample_rate)
    return freqs, magnitude


def sample_curve(
    bands: Iterable[Band],
    sample_points: Union[int, Sequence[float]],
    sample_rate: float = DEFAULT_SAMPLE_RATE,
    global_gain: float = 0.0,
) -> List[Tuple[float, float]]:
    """Return ``(freq_hz, total_db)`` pairs for the cascade of ``bands``.

    ``sample_points`` is either a point count, spread logarithmically over
    20 Hz..20 kHz, or explicit frequencies in Hz. ``global_gain`` shifts the
    whole curve by the preamp.
    """
    if isinstance(sample_points, (int, np.integer)):
        if sample_points < 1:
            return []
        freqs = log_frequencies(int(sample_points))
    else:
        freqs = np.asarray(list(sample_points), dtype=np.float64)
    coeffs = cascade_coefficients(bands, sample_rate)
    magnitude = np.atleast_1d(magnitude_db(freqs, coeffs, sample_rate)) + global_gain
    return [(float(f), float(m)) for f, m in zip(freqs, magnitude)]


def suggest_preamp_db(
    bands: Iterable[Band],
    headroom_db: float = 1.0,
    sample_rate: float = DEFAULT_SAMPLE_RATE,
    points: int = 512,
) -> float:
    """Preamp that keeps the boosted peak of the curve below 0 dBFS.

    Policy:
      preamp_db = -(peak_positive_response + headroom_db)
    """
    _, magnitude = frequency_response(bands, sample_rate, points)
    peak = float(np.max(magnitude)) if magnitude.size else 0.0
    if peak <= 0:
        return 0.0
    return -(peak + headroom_db)
