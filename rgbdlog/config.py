"""Run settings taken from the command line and an optional calibration file."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Sequence

_INT_MAX = 2**31 - 1
_UINT16_MAX = 2**16 - 1


@dataclass(frozen=True)
class Intrinsics:
    """Pinhole camera intrinsics: focal lengths and principal point in pixels."""

    fx: float = 600.0
    fy: float = 600.0
    cx: float = 599.0
    cy: float = 339.0


def load_calibration(path) -> Intrinsics:
    """Read ``fx fy cx cy`` from the first line of a calibration file."""
    with open(os.fspath(path), encoding="utf-8") as fp:
        line = fp.readline()
    fields = line.split()
    if len(fields) < 4:
        raise ValueError(
            "calibration file should contain a single line with fx fy cx cy"
        )
    try:
        fx, fy, cx, cy = (float(value) for value in fields[:4])
    except ValueError as exc:
        raise ValueError(f"bad calibration value: {exc}") from exc
    return Intrinsics(fx, fy, cx, cy)


@dataclass
class Settings:
    """Everything a fusion run is configured with."""

    width: int = 1200
    height: int = 680
    intrinsics: Intrinsics = field(default_factory=Intrinsics)
    calibration_file: str = ""
    log_file: str = ""
    pose_file: str = ""
    iclnuim: bool = False
    confidence: float = 10.0
    depth: float = 3.0
    icp: float = 10.0
    icp_err_thresh: float = 4e-05
    cov_thresh: float = 1e-05
    photo_thresh: float = 115.0
    fern_thresh: float = 0.3095
    time_delta: int = 200
    icp_count_thresh: int = 40000
    start: int = 1
    end: int = _UINT16_MAX
    so3: bool = True
    flip_colors: bool = False
    open_loop: bool = False
    reloc: bool = False
    frameskip: bool = False
    quiet: bool = False
    fast_odom: bool = False
    rewind: bool = False
    frame_to_frame_rgb: bool = False
    showcase: bool = False

    def time_window(self) -> int:
        """Return the time window for model fusion; effectively unbounded in open loop."""
        return _INT_MAX // 2 if self.open_loop else self.time_delta


def _has(argv: Sequence[str], flag: str) -> bool:
    return flag in argv


def _value(argv: Sequence[str], flag: str) -> str | None:
    if flag not in argv:
        return None
    index = list(argv).index(flag)
    if index + 1 >= len(argv):
        raise ValueError(f"option {flag} needs a value")
    return argv[index + 1]


def _number(argv: Sequence[str], flag: str, kind, default):
    text = _value(argv, flag)
    if text is None:
        return default
    try:
        return kind(text)
    except ValueError as exc:
        raise ValueError(f"option {flag}: invalid value {text!r}") from exc


def parse_args(argv: Sequence[str] | None = None) -> Settings:
    """Build settings from command-line options (without the program name)."""
    args = list(argv) if argv is not None else []
    settings = Settings()

    settings.iclnuim = _has(args, "-icl")

    calibration = _value(args, "-cal") or ""
    settings.calibration_file = calibration
    if calibration:
        settings.intrinsics = load_calibration(calibration)

    settings.log_file = _value(args, "-l") or ""
    settings.pose_file = _value(args, "-p") or ""

    settings.so3 = not _has(args, "-nso")

    settings.confidence = _number(args, "-c", float, settings.confidence)
    settings.depth = _number(args, "-d", float, settings.depth)
    settings.icp = _number(args, "-i", float, settings.icp)
    settings.icp_err_thresh = _number(args, "-ie", float, settings.icp_err_thresh)
    settings.cov_thresh = _number(args, "-cv", float, settings.cov_thresh)
    settings.photo_thresh = _number(args, "-pt", float, settings.photo_thresh)
    settings.fern_thresh = _number(args, "-ft", float, settings.fern_thresh)
    settings.time_delta = _number(args, "-t", int, settings.time_delta)
    settings.icp_count_thresh = _number(args, "-ic", int, settings.icp_count_thresh)
    settings.start = _number(args, "-s", int, settings.start)
    settings.end = _number(args, "-e", int, settings.end)

    settings.flip_colors = _has(args, "-f")
    settings.open_loop = not settings.pose_file and _has(args, "-o")
    settings.reloc = _has(args, "-rl")
    settings.frameskip = _has(args, "-fs")
    settings.quiet = _has(args, "-q")
    settings.fast_odom = _has(args, "-fo")
    settings.rewind = _has(args, "-r")
    settings.frame_to_frame_rgb = _has(args, "-ftf")
    settings.showcase = _has(args, "-sc")
    return settings