"""EQ state ownership and typed band edits."""
from .edits import (
    BandEdit,
    BandField,
    SetEnabled,
    SetFilterType,
    SetFrequency,
    SetGain,
    SetQ,
    apply_edit,
    coerce_edit,
)
from .store import EqState, EqStateStore, default_bands, default_state

__all__ = [
    "BandEdit",
    "BandField",
    "EqState",
    "EqStateStore",
    "SetEnabled",
    "SetFilterType",
    "SetFrequency",
    "SetGain",
    "SetQ",
    "apply_edit",
    "coerce_edit",
    "default_bands",
    "default_state",
]
