"""Tests for JSON and filter-list profile import/export."""
import json
from datetime import datetime, UTC

import pytest
from hypothesis import given
from hypothesis import strategies as st

from peqtune.dsp.filters import Band
from peqtune.profile import (
    FormatError,
    ParseError,
    ProfileError,
    detect_format,
    export_json,
    export_text,
    import_json,
    import_profile,
    import_text,
    load_profile,
    read_profile,
    write_profile,
)
from peqtune.state import EqState, EqStateStore, default_bands, default_state

SAMPLE_TEXT = "Preamp: -8.0 dB\nFilter 1: ON PK Fc 34 Hz Gain -2.6 dB Q 0.800"


def tuned_state():
    bands = list(default_bands())
    bands[0] = Band(0, 34.0, -2.6, 0.8, "PK", True)
    bands[4] = Band(4, 512.5, 3.25, 1.7, "LSQ", False)
    bands[9] = Band(9, 12000.0, -0.1, 0.333, "HSQ", True)
    return EqState(tuple(bands), -4.5)


class TestJson:
    def test_export_payload(self):
        now = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)
        data = json.loads(export_json(tuned_state(), device="TESTDEV", now=now))
        assert set(data) == {"device", "timestamp", "globalGain", "bands"}
        assert data["device"] == "TESTDEV"
        assert data["timestamp"] == "2026-01-02T03:04:05+00:00"
        assert data["globalGain"] == -4.5
        assert data["bands"][4] == {
            "index": 4,
            "freq": 512.5,
            "gain": 3.25,
            "q": 1.7,
            "type": "LSQ",
            "enabled": False,
        }

    def test_export_returns_bytes_with_iso_timestamp(self):
        raw = export_json(default_state())
        assert isinstance(raw, bytes)
        datetime.fromisoformat(json.loads(raw)["timestamp"])

    def test_round_trip(self):
        state = tuned_state()
        profile = import_json(export_json(state))
        assert profile.bands == state.bands
        assert profile.global_gain == state.global_gain
        assert profile.to_state() == state
        assert profile.source_format == "json"

    @given(
        gains=st.lists(st.floats(min_value=-20, max_value=20), min_size=10, max_size=10),
        preamp=st.floats(min_value=-30, max_value=10),
    )
    def test_round_trip_property(self, gains, preamp):
        bands = tuple(Band(i, b.freq, g, b.q) for i, (b, g) in enumerate(zip(default_bands(), gains)))
        state = EqState(bands, preamp)
        assert import_json(export_json(state)).to_state() == state

    def test_missing_bands_is_format_error(self):
        with pytest.raises(FormatError):
            import_json('{"globalGain": 3}')

    @pytest.mark.parametrize("payload", ['{"bands": null}', '{"bands": 5}', '[1, 2]'])
    def test_unusable_bands_is_format_error(self, payload):
        with pytest.raises(FormatError):
            import_json(payload)

    def test_band_with_bad_value_is_format_error(self):
        with pytest.raises(FormatError, match="band 1"):
            import_json('{"bands": [{}, {"freq": "high"}]}')

    def test_malformed_json_is_parse_error(self):
        with pytest.raises(ParseError):
            import_json('{"bands": [')

    def test_global_gain_defaults_to_zero_and_extras_are_tolerated(self):
        profile = import_json('{"bands": [], "firmware": "1.2", "device": "X"}')
        assert profile.global_gain == 0.0
        assert profile.bands == default_bands()

    def test_partial_bands_merge_over_defaults(self):
        profile = import_json('{"bands": [{"gain": 2.0}], "globalGain": -1}')
        assert profile.bands[0] == Band(0, 31.0, 2.0, 0.75, "PK", True)
        assert profile.bands[1:] == default_bands()[1:]
        assert profile.global_gain == -1.0

    def test_extra_bands_are_dropped(self):
        payload = {"bands": [Band(i, 100.0, 1.0, 1.0).to_dict() for i in range(12)]}
        assert len(import_json(json.dumps(payload)).bands) == 10


class TestText:
    def test_reference_example(self):
        profile = import_text(SAMPLE_TEXT)
        assert profile.global_gain == -8.0
        assert profile.bands[0] == Band(0, 34.0, -2.6, 0.8, "PK", True)
        assert profile.bands[1:] == default_bands()[1:]
        assert profile.source_format == "text"

    def test_last_preamp_wins(self):
        profile = import_text("Preamp: -3 dB\nPreamp: -6.5 dB\n")
        assert profile.global_gain == -6.5

    def test_units_are_optional_and_case_is_ignored(self):
        profile = import_text("preamp: 2\nfilter 3: off lsq fc 120 gain 4.5 q 0.7\n")
        assert profile.global_gain == 2.0
        assert profile.bands[2] == Band(2, 120.0, 4.5, 0.7, "lsq", False)

    def test_out_of_range_filters_are_dropped(self):
        profile = import_text("Filter 0: ON PK Fc 50 Hz Gain 1 dB Q 1\nFilter 11: ON PK Fc 50 Hz Gain 1 dB Q 1\n")
        assert profile.bands == default_bands()

    def test_unrecognized_lines_are_ignored(self):
        text = "# exported by a tool\n\nGraphicEQ: 20 0; 40 1\n  Filter 2: ON HSQ Fc 8000 Hz Gain 3 dB Q 0.71  \nrandom"
        profile = import_text(text)
        assert profile.bands[1] == Band(1, 8000.0, 3.0, 0.71, "HSQ", True)
        assert profile.global_gain == 0.0

    def test_windows_line_endings(self):
        profile = import_text(SAMPLE_TEXT.replace("\n", "\r\n"))
        assert profile.bands[0].freq == 34.0

    def test_text_round_trip(self):
        state = tuned_state()
        assert import_text(export_text(state)).to_state() == state

    def test_export_format(self):
        lines = export_text(tuned_state()).splitlines()
        assert lines[0] == "Preamp: -4.50 dB"
        assert lines[1] == "Filter 1: ON PK Fc 34.00 Hz Gain -2.60 dB Q 0.800"
        assert lines[5] == "Filter 5: OFF LSQ Fc 512.50 Hz Gain 3.25 dB Q 1.700"
        assert len(lines) == 11

    def test_text_then_json_keeps_merged_defaults(self):
        profile = import_text(SAMPLE_TEXT)
        data = json.loads(export_json(profile.to_state()))
        assert data["globalGain"] == -8.0
        assert data["bands"][0]["freq"] == 34.0
        assert data["bands"][3] == default_bands()[3].to_dict()


class TestDispatch:
    def test_detect_format(self):
        assert detect_format('  {"bands": []}') == "json"
        assert detect_format(SAMPLE_TEXT) == "text"
        assert detect_format("# header\nFilter 4: ON PK Fc 1000 Hz Gain 1 dB Q 1") == "text"

    def test_unknown_format_is_parse_error(self):
        with pytest.raises(ParseError):
            import_profile("hello world\n")
        assert issubclass(ParseError, ProfileError)
        assert issubclass(FormatError, ValueError)

    def test_bytes_input(self):
        assert import_profile(SAMPLE_TEXT.encode("utf-8")).global_gain == -8.0
        assert import_profile(b"\xef\xbb\xbf" + SAMPLE_TEXT.encode("utf-8")).global_gain == -8.0

    def test_str_with_byte_order_mark(self):
        assert import_profile("\ufeff" + SAMPLE_TEXT).global_gain == -8.0
        assert detect_format('\ufeff{"bands": []}') == "json"
        assert import_profile('\ufeff{"globalGain": -3, "bands": []}').global_gain == -3.0

    def test_load_profile_commits(self):
        store = EqStateStore()
        load_profile(store, SAMPLE_TEXT)
        assert store.global_gain == -8.0
        assert store.bands[0].freq == 34.0

    def test_load_profile_failure_leaves_store_untouched(self):
        store = EqStateStore()
        store.update_band_field(2, "gain", 4.0)
        before = store.get_state()
        with pytest.raises(FormatError):
            load_profile(store, '{"globalGain": -3}')
        with pytest.raises(ParseError):
            load_profile(store, "not a profile")
        assert store.get_state() == before


class TestFiles:
    def test_write_and_read_json(self, tmp_path):
        path = write_profile(tmp_path / "eq_profile.json", tuned_state())
        assert path.read_bytes().startswith(b"{")
        assert read_profile(path).to_state() == tuned_state()

    def test_write_and_read_text(self, tmp_path):
        path = write_profile(tmp_path / "eq.txt", tuned_state())
        assert path.read_text().startswith("Preamp:")
        assert read_profile(path).to_state() == tuned_state()

    def test_unknown_format_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            write_profile(tmp_path / "eq.bin", tuned_state(), fmt="yaml")
