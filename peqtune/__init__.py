"""Parametric EQ core: band math, response curves, state and profiles."""
from .dsp import Band, FilterType, coefficients_for, magnitude_db, sample_curve
from .profile import FormatError, ParseError, ProfileError
from .state import EqState, EqStateStore

__version__ = "0.1.0"

__all__ = [
    "Band",
    "EqState",
    "EqStateStore",
    "FilterType",
    "FormatError",
    "ParseError",
    "ProfileError",
    "coefficients_for",
    "magnitude_db",
    "sample_curve",
]
