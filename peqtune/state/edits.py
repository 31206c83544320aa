"""Typed single-field edits applied to a band."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Union

from peqtune.dsp.filters import Band, parse_bool


class BandField(str, Enum):
    FREQ = "freq"
    GAIN = "gain"
    Q = "q"
    TYPE = "type"
    ENABLED = "enabled"


@dataclass(frozen=True)
class SetFrequency:
    value: float


@dataclass(frozen=True)
class SetGain:
    value: float


@dataclass(frozen=True)
class SetQ:
    value: float


@dataclass(frozen=True)
class SetFilterType:
    value: str


@dataclass(frozen=True)
class SetEnabled:
    value: bool


BandEdit = Union[SetFrequency, SetGain, SetQ, SetFilterType, SetEnabled]


def coerce_edit(field: Union[BandField, str], raw_value: Any) -> BandEdit:
    """Turn a ``(field, raw value)`` pair from a UI control into a typed edit.

    Raises ``ValueError`` for an unknown field or a value that cannot be
    converted.
    """
    try:
        field = BandField(field)
    except ValueError:
        raise ValueError(f"Unknown band field: {field!r}") from None

    if field is BandField.TYPE:
        return SetFilterType(str(raw_value))
    if field is BandField.ENABLED:
        return SetEnabled(parse_bool(raw_value))

    try:
        value = float(raw_value)
    except (TypeError, ValueError):
        raise ValueError(f"Band field {field.value!r} needs a number, got {raw_value!r}") from None
    if field is BandField.FREQ:
        return SetFrequency(value)
    if field is BandField.GAIN:
        return SetGain(value)
    return SetQ(value)


def apply_edit(band: Band, edit: BandEdit) -> Band:
    """Return a copy of ``band`` with ``edit`` applied."""
    if isinstance(edit, SetFrequency):
        return replace(band, freq=edit.value)
    if isinstance(edit, SetGain):
        return replace(band, gain=edit.value)
    if isinstance(edit, SetQ):
        return replace(band, q=edit.value)
    if isinstance(edit, SetFilterType):
        return replace(band, filter_type=edit.value)
    if isinstance(edit, SetEnabled):
        return replace(band, enabled=edit.value)
    raise TypeError(f"Unsupported band edit: {edit!r}")
