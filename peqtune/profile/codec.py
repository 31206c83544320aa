"""Profile import/export: JSON and the ``Preamp:`` / ``Filter n:`` text format.

The text format follows the convention used by common parametric-EQ tools::

    Preamp: -8.0 dB
    Filter 1: ON PK Fc 34 Hz Gain -2.6 dB Q 0.800

Text imports start from the default bands and only overwrite the filters they
name, so a partial filter list is merged over defaults.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime, UTC
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from peqtune.constants import DEFAULT_FREQS, DEVICE_TAG
from peqtune.dsp.filters import Band
from peqtune.state.store import EqState, EqStateStore, default_bands
from .errors import FormatError, ParseError

logger = logging.getLogger(__name__)

JSON_FORMAT = "json"
TEXT_FORMAT = "text"

PREAMP_RE = re.compile(r"^Preamp:\s*([+-]?\d+(?:\.\d+)?)\s*(?:dB)?", re.IGNORECASE)
FILTER_RE = re.compile(
    r"^Filter\s+(\d+):\s+(ON|OFF)\s+([A-Z]+)"
    r"\s+Fc\s+(\d+(?:\.\d+)?)\s*(?:Hz)?"
    r"\s+Gain\s+([+-]?\d+(?:\.\d+)?)\s*(?:dB)?"
    r"\s+Q\s+(\d+(?:\.\d+)?)",
    re.IGNORECASE,
)

# Decimal places written by export_text.
FREQ_DECIMALS = 2
GAIN_DECIMALS = 2
Q_DECIMALS = 3

ProfileText = Union[str, bytes, bytearray]


@dataclass(frozen=True)
class ParsedProfile:
    bands: Tuple[Band, ...]
    global_gain: float
    source_format: str

    def to_state(self) -> EqState:
        return EqState(self.bands, self.global_gain)


def _as_text(content: ProfileText) -> str:
    if isinstance(content, (bytes, bytearray)):
        try:
            return bytes(content).decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ParseError(f"Profile is not UTF-8 text: {exc}") from exc
    return content[1:] if content.startswith("\ufeff") else content


# JSON -------------------------------------------------------------------
def export_json(state: EqState, device: str = DEVICE_TAG, now: Optional[datetime] = None) -> bytes:
    timestamp = (now or datetime.now(UTC)).isoformat()
    payload = {
        "device": device,
        "timestamp": timestamp,
        "globalGain": state.global_gain,
        "bands": [band.to_dict() for band in state.bands],
    }
    logger.info("Exporting JSON profile with %d bands", len(state.bands))
    return json.dumps(payload, indent=2).encode("utf-8")


def import_json(content: ProfileText, freqs: Sequence[float] = DEFAULT_FREQS) -> ParsedProfile:
    """Parse a JSON profile; bands are laid over the defaults by position."""
    try:
        data = json.loads(_as_text(content))
    except json.JSONDecodeError as exc:
        raise ParseError(f"Invalid JSON profile: {exc}") from exc

    if not isinstance(data, dict) or data.get("bands") is None:
        raise FormatError("Invalid JSON profile: missing 'bands' property")
    raw_bands = data["bands"]
    if not isinstance(raw_bands, list):
        raise FormatError("Invalid JSON profile: 'bands' must be a list")

    try:
        global_gain = float(data.get("globalGain") or 0.0)
    except (TypeError, ValueError):
        raise FormatError(f"Invalid JSON profile: bad globalGain {data.get('globalGain')!r}") from None

    bands = list(default_bands(freqs))
    for i, entry in enumerate(raw_bands[: len(bands)]):
        if not isinstance(entry, dict):
            raise FormatError(f"Invalid JSON profile: band {i} is not an object")
        try:
            bands[i] = Band.from_dict(entry, index=i, fallback=bands[i])
        except (TypeError, ValueError) as exc:
            raise FormatError(f"Invalid JSON profile: band {i}: {exc}") from None
    if len(raw_bands) > len(bands):
        logger.debug("Ignoring %d JSON bands beyond the EQ length", len(raw_bands) - len(bands))

    return ParsedProfile(tuple(bands), global_gain, JSON_FORMAT)


# Text -------------------------------------------------------------------
def import_text(content: ProfileText, freqs: Sequence[float] = DEFAULT_FREQS) -> ParsedProfile:
    """Parse a filter-list profile. Unrecognized lines are skipped."""
    bands: List[Band] = list(default_bands(freqs))
    global_gain = 0.0

    for line_no, line in enumerate(_as_text(content).splitlines(), start=1):
        trimmed = line.strip()
        if not trimmed:
            continue

        preamp = PREAMP_RE.match(trimmed)
        if preamp:
            # Repeated Preamp lines: the last one wins.
            global_gain = float(preamp.group(1))
            continue

        match = FILTER_RE.match(trimmed)
        if not match:
            logger.debug("Skipping line %d: %r", line_no, trimmed)
            continue

        index = int(match.group(1)) - 1
        if not 0 <= index < len(bands):
            logger.debug("Skipping line %d: filter %s is outside the EQ", line_no, match.group(1))
            continue
        bands[index] = Band(
            index=index,
            freq=float(match.group(4)),
            gain=float(match.group(5)),
            q=float(match.group(6)),
            filter_type=match.group(3),
            enabled=match.group(2).upper() == "ON",
        )

    return ParsedProfile(tuple(bands), global_gain, TEXT_FORMAT)


def export_text(state: EqState) -> str:
    lines = [f"Preamp: {state.global_gain:.{GAIN_DECIMALS}f} dB"]
    for band in state.bands:
        lines.append(
            f"Filter {band.index + 1}: {'ON' if band.enabled else 'OFF'} {band.filter_type}"
            f" Fc {band.freq:.{FREQ_DECIMALS}f} Hz"
            f" Gain {band.gain:.{GAIN_DECIMALS}f} dB"
            f" Q {band.q:.{Q_DECIMALS}f}"
        )
    logger.info("Exporting text profile with %d bands", len(state.bands))
    return "\n".join(lines) + "\n"


# Dispatch ---------------------------------------------------------------
def detect_format(content: ProfileText) -> str:
    text = _as_text(content)
    if text.strip().startswith("{"):
        return JSON_FORMAT
    for line in text.splitlines():
        trimmed = line.strip()
        if PREAMP_RE.match(trimmed) or FILTER_RE.match(trimmed):
            return TEXT_FORMAT
    raise ParseError("Unknown profile format")


def import_profile(content: ProfileText, freqs: Sequence[float] = DEFAULT_FREQS) -> ParsedProfile:
    """Parse JSON or text, whichever ``content`` looks like."""
    if detect_format(content) == JSON_FORMAT:
        return import_json(content, freqs)
    return import_text(content, freqs)


def load_profile(store: EqStateStore, content: ProfileText) -> ParsedProfile:
    """Parse ``content`` and, only if that succeeds, replace the store's state."""
    profile = import_profile(content, store.default_freqs)
    store.replace_state(profile.bands, profile.global_gain)
    logger.info("Imported %s profile (preamp %.1f dB)", profile.source_format, profile.global_gain)
    return profile


def read_profile(path: Union[str, Path], freqs: Sequence[float] = DEFAULT_FREQS) -> ParsedProfile:
    return import_profile(Path(path).read_bytes(), freqs)


def write_profile(
    path: Union[str, Path],
    state: EqState,
    fmt: Optional[str] = None,
    device: str = DEVICE_TAG,
) -> Path:
    """Write ``state`` to ``path``; ``fmt`` defaults from the suffix (``.json`` or text)."""
    path = Path(path)
    if fmt is None:
        fmt = JSON_FORMAT if path.suffix.lower() == ".json" else TEXT_FORMAT
    if fmt == JSON_FORMAT:
        path.write_bytes(export_json(state, device=device))
    elif fmt == TEXT_FORMAT:
        path.write_text(export_text(state), encoding="utf-8")
    else:
        raise ValueError(f"Unknown profile format: {fmt!r}")
    return path
