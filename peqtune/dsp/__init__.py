"""DSP package exports for the EQ core."""
from .axes import AxisConfig, freq_to_x, gain_to_y, x_to_freq, y_to_gain
from .filters import (
    Band,
    Biquad,
    FilterType,
    cascade_coefficients,
    coefficients_for,
    magnitude_db,
)
from .response import frequency_response, log_frequencies, sample_curve, suggest_preamp_db

__all__ = [
    "AxisConfig",
    "Band",
    "Biquad",
    "FilterType",
    "cascade_coefficients",
    "coefficients_for",
    "freq_to_x",
    "frequency_response",
    "gain_to_y",
    "log_frequencies",
    "magnitude_db",
    "sample_curve",
    "suggest_preamp_db",
    "x_to_freq",
    "y_to_gain",
]
