"""Owned EQ state: the band sequence plus global gain."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, List, Sequence, Tuple, Union

from peqtune.constants import DEFAULT_FILTER_TYPE, DEFAULT_FREQS, DEFAULT_GAIN_DB, DEFAULT_Q
from peqtune.dsp.filters import Band
from .edits import BandEdit, BandField, apply_edit, coerce_edit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EqState:
    """Immutable snapshot handed to readers (device sync, renderers, export)."""

    bands: Tuple[Band, ...]
    global_gain: float = 0.0


Listener = Callable[[EqState], None]


def default_bands(freqs: Sequence[float] = DEFAULT_FREQS) -> Tuple[Band, ...]:
    return tuple(
        Band(
            index=i,
            freq=float(freq),
            gain=DEFAULT_GAIN_DB,
            q=DEFAULT_Q,
            filter_type=DEFAULT_FILTER_TYPE,
            enabled=True,
        )
        for i, freq in enumerate(freqs)
    )


def default_state(freqs: Sequence[float] = DEFAULT_FREQS) -> EqState:
    return EqState(default_bands(freqs), 0.0)


class EqStateStore:
    """Single owner of the EQ bands and global gain.

    The band count is fixed at construction. Every mutation builds the new
    sequence first and swaps it in with one assignment, so readers only ever
    see complete states.
    """

    def __init__(self, freqs: Sequence[float] = DEFAULT_FREQS) -> None:
        self._default_freqs: Tuple[float, ...] = tuple(float(f) for f in freqs)
        self._state = default_state(self._default_freqs)
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []

    # Reads --------------------------------------------------------------
    def get_state(self) -> EqState:
        with self._lock:
            return self._state

    @property
    def bands(self) -> Tuple[Band, ...]:
        return self.get_state().bands

    @property
    def global_gain(self) -> float:
        return self.get_state().global_gain

    @property
    def default_freqs(self) -> Tuple[float, ...]:
        return self._default_freqs

    def __len__(self) -> int:
        return len(self._default_freqs)

    # Mutations ----------------------------------------------------------
    def replace_state(self, bands: Iterable[Band], global_gain: float) -> EqState:
        """Swap in a whole new state.

        Bands are re-indexed by position. Extra entries are dropped; when fewer
        are given, the remaining current bands stay as they are.
        """
        incoming = list(bands)
        with self._lock:
            current = self._state.bands
            merged = []
            for i, old in enumerate(current):
                source = incoming[i] if i < len(incoming) else old
                merged.append(source if source.index == i else replace(source, index=i))
            if len(incoming) > len(current):
                logger.debug("Dropped %d bands beyond the EQ length", len(incoming) - len(current))
            new_state = self._commit(EqState(tuple(merged), float(global_gain)))
        self._notify(new_state)
        return new_state

    def set_global_gain(self, gain_db: float) -> EqState:
        with self._lock:
            new_state = self._commit(replace(self._state, global_gain=float(gain_db)))
        self._notify(new_state)
        return new_state

    def update_band_field(self, index: int, field: Union[BandField, str], raw_value: Any) -> EqState:
        """Coerce ``raw_value`` for ``field`` and write it into band ``index``.

        An index outside the EQ is ignored before the value is looked at. For
        an existing band, bad field names or values raise ``ValueError`` before
        anything changes.
        """
        with self._lock:
            if not 0 <= index < len(self._state.bands):
                logger.debug("Ignoring %s edit for out-of-range band %s", field, index)
                return self._state
        return self.apply_edit(index, coerce_edit(field, raw_value))

    def apply_edit(self, index: int, edit: BandEdit) -> EqState:
        with self._lock:
            bands = self._state.bands
            if not 0 <= index < len(bands):
                logger.debug("Ignoring edit %r for out-of-range band %s", edit, index)
                return self._state
            updated = list(bands)
            updated[index] = apply_edit(bands[index], edit)
            new_state = self._commit(replace(self._state, bands=tuple(updated)))
        self._notify(new_state)
        return new_state

    def reset_to_defaults(self) -> EqState:
        with self._lock:
            new_state = self._commit(default_state(self._default_freqs))
        logger.info("EQ reset to defaults")
        self._notify(new_state)
        return new_state

    # Change notification ------------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with each committed state; returns an unsubscribe hook."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, state: EqState) -> EqState:
        self._state = state
        logger.debug("Committed EQ state (global gain %.2f dB)", state.global_gain)
        return state

    def _notify(self, state: EqState) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(state)
