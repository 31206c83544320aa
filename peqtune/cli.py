"""Command line front end: inspect, convert and plot-as-text EQ profiles."""
from __future__ import annotations

import argparse
import logging
import sys
from enum import IntEnum
from typing import List, Optional, TextIO

from peqtune.config import Settings
from peqtune.dsp import sample_curve, suggest_preamp_db
from peqtune.profile import JSON_FORMAT, TEXT_FORMAT, ProfileError, export_json, export_text, load_profile, write_profile
from peqtune.state import EqStateStore

logger = logging.getLogger(__name__)


class ExitCode(IntEnum):
    OK = 0
    USAGE = 2
    INVALID_PROFILE = 3
    IO_ERROR = 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="peqtune", description="Parametric EQ profile tools")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    p_show = sub.add_parser("show", help="Print the bands and preamp of a profile")
    p_show.add_argument("profile", help="JSON or text profile")

    p_convert = sub.add_parser("convert", help="Convert a profile between JSON and text")
    p_convert.add_argument("profile", help="JSON or text profile")
    p_convert.add_argument("--to", choices=[JSON_FORMAT, TEXT_FORMAT], default=JSON_FORMAT)
    p_convert.add_argument("-o", "--output", help="Write here instead of stdout")

    p_curve = sub.add_parser("curve", help="Print the sampled frequency response")
    p_curve.add_argument("profile", help="JSON or text profile")
    p_curve.add_argument("--points", type=int, help="Number of log-spaced sample points")
    p_curve.add_argument("--sample-rate", type=float, help="Sample rate in Hz")

    return parser


def _load(store: EqStateStore, path: str) -> None:
    with open(path, "rb") as f:
        load_profile(store, f.read())


def cmd_show(args: argparse.Namespace, settings: Settings, out: TextIO) -> None:
    store = EqStateStore()
    _load(store, args.profile)
    state = store.get_state()
    out.write(f"Preamp: {state.global_gain:+.1f} dB\n")
    out.write(f"{'#':>3}  {'On':<3} {'Type':<5} {'Freq (Hz)':>10} {'Gain (dB)':>10} {'Q':>7}\n")
    for band in state.bands:
        out.write(
            f"{band.index + 1:>3}  {'on' if band.enabled else 'off':<3} {band.filter_type:<5}"
            f" {band.freq:>10.1f} {band.gain:>10.2f} {band.q:>7.3f}\n"
        )
    suggested = suggest_preamp_db(state.bands, sample_rate=settings.sample_rate, points=settings.curve_points)
    out.write(f"Suggested preamp: {suggested:+.1f} dB\n")


def cmd_convert(args: argparse.Namespace, settings: Settings, out: TextIO) -> None:
    store = EqStateStore()
    _load(store, args.profile)
    state = store.get_state()
    if args.output:
        path = write_profile(args.output, state, fmt=args.to, device=settings.device_tag)
        logger.info("Wrote %s", path)
        return
    if args.to == JSON_FORMAT:
        out.write(export_json(state, device=settings.device_tag).decode("utf-8") + "\n")
    else:
        out.write(export_text(state))


def cmd_curve(args: argparse.Namespace, settings: Settings, out: TextIO) -> None:
    store = EqStateStore()
    _load(store, args.profile)
    state = store.get_state()
    points = args.points or settings.curve_points
    sample_rate = args.sample_rate or settings.sample_rate
    for freq, gain in sample_curve(state.bands, points, sample_rate, global_gain=state.global_gain):
        out.write(f"{freq:10.2f}\t{gain:+8.3f}\n")


COMMANDS = {
    "show": cmd_show,
    "convert": cmd_convert,
    "curve": cmd_curve,
}


def main(argv: Optional[List[str]] = None, out: Optional[TextIO] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    out = out or sys.stdout

    try:
        settings = Settings.from_env()
    except ValueError as exc:
        parser.error(str(exc))
    level = logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if not args.command:
        parser.print_help()
        return ExitCode.USAGE
    if getattr(args, "points", None) is not None and args.points < 2:
        parser.error("--points must be at least 2")

    try:
        COMMANDS[args.command](args, settings, out)
    except ProfileError as exc:
        logger.error("%s: %s", args.profile, exc)
        return ExitCode.INVALID_PROFILE
    except OSError as exc:
        logger.error("%s", exc)
        return ExitCode.IO_ERROR
    return ExitCode.OK
