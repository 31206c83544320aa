"""Shared constants for the EQ core."""
from __future__ import annotations

from typing import Tuple

DEFAULT_SAMPLE_RATE = 48000.0

# Band centre frequencies used to build the default (and fixed-length) EQ:
# octave centres as labelled on common 10-band graphic EQs. The 30/60 Hz values
# in the response grid are axis labels, not band defaults.
DEFAULT_FREQS: Tuple[float, ...] = (31.0, 62.0, 125.0, 250.0, 500.0, 1000.0, 2000.0, 4000.0, 8000.0, 16000.0)
DEFAULT_GAIN_DB = 0.0
DEFAULT_Q = 0.75
DEFAULT_FILTER_TYPE = "PK"

MIN_FREQ_HZ = 20.0
MAX_FREQ_HZ = 20000.0
GAIN_RANGE_DB = 20.0

# Stand-ins for q <= 0 and freq <= 0 (or NaN) during coefficient derivation.
Q_FLOOR = 0.05
FREQ_FLOOR_HZ = 1.0
NYQUIST_MARGIN = 2.1

DEVICE_TAG = "JM98MAX"
