"""Depth/colour camera frame buffering and video mode helpers."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from rgbdlog.sync import SharedValue

NUM_BUFFERS = 10


class PixelFormat(Enum):
    """Pixel formats a sensor may report, with their display labels."""

    DEPTH_1_MM = "1mm"
    DEPTH_100_UM = "100um"
    SHIFT_9_2 = "Shift 9 2"
    SHIFT_9_3 = "Shift 9 3"
    RGB888 = "RGB888"
    YUV422 = "YUV422"
    GRAY8 = "GRAY8"
    GRAY16 = "GRAY16"
    JPEG = "JPEG"


@dataclass
class FrameSlot:
    """One ring-buffer entry: a depth image, its colour image and a time in ms."""

    depth: bytes
    rgb: bytes
    timestamp: int = 0


@dataclass(frozen=True)
class VideoMode:
    """A sensor resolution, frame rate and pixel format."""

    width: int
    height: int
    fps: int
    pixel_format: PixelFormat | None = None

    def describe(self) -> str:
        """Return a line such as ``640x480 @ 30fps 1mm``."""
        label = self.pixel_format.value if self.pixel_format is not None else ""
        return f"{self.width}x{self.height} @ {self.fps}fps {label}"


def strip_tabs(text: str) -> str:
    """Remove tab characters from a driver error message."""
    return text.replace("\t", "")


def _mode_matches(modes: Iterable[VideoMode], width: int, height: int, fps: int) -> bool:
    return any(m.width == width and m.height == height and m.fps == fps for m in modes)


def find_mode(
    depth_modes: Iterable[VideoMode],
    rgb_modes: Iterable[VideoMode],
    width: int,
    height: int,
    fps: int,
) -> bool:
    """Return True if both the depth and colour sensors support the mode."""
    return _mode_matches(depth_modes, width, height, fps) and _mode_matches(
        rgb_modes, width, height, fps
    )


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class CameraInterface:
    """A camera that pairs incoming depth frames with the latest colour frame.

    Frames are fed through :meth:`on_rgb_frame` and :meth:`on_depth_frame`;
    readers watch ``latest_depth_index`` and read ``frame_buffers``.
    """

    NUM_BUFFERS = NUM_BUFFERS

    def __init__(self, width: int = 640, height: int = 480) -> None:
        self.width = width
        self.height = height
        self.depth_size = width * height * 2
        self.rgb_size = width * height * 3
        self.latest_depth_index: SharedValue[int] = SharedValue(-1)
        self.latest_rgb_index: SharedValue[int] = SharedValue(-1)
        self.frame_buffers = [
            FrameSlot(bytes(self.depth_size), bytes(self.rgb_size))
            for _ in range(self.NUM_BUFFERS)
        ]
        self._rgb_buffers: list[tuple[bytes, int]] = [
            (bytes(self.rgb_size), 0) for _ in range(self.NUM_BUFFERS)
        ]
        self.last_rgb_time = 0
        self.last_depth_time = 0
        self.auto_exposure = True
        self.auto_white_balance = True
        self._ok = True
        self._error_text = ""

    def ok(self) -> bool:
        """Return whether the camera started successfully."""
        return self._ok

    def error(self) -> str:
        """Return the accumulated error text without tabs."""
        return strip_tabs(self._error_text)

    def set_auto_exposure(self, value: bool) -> None:
        self.auto_exposure = bool(value)

    def set_auto_white_balance(self, value: bool) -> None:
        self.auto_white_balance = bool(value)

    def on_rgb_frame(self, data: bytes, timestamp: int | None = None) -> None:
        """Store a colour frame in the next colour buffer."""
        if len(data) != self.rgb_size:
            raise ValueError(f"colour frame must be {self.rgb_size} bytes, got {len(data)}")
        stamp = _now_ms() if timestamp is None else timestamp
        self.last_rgb_time = stamp
        index = (self.latest_rgb_index.get() + 1) % self.NUM_BUFFERS
        self._rgb_buffers[index] = (bytes(data), stamp)
        self.latest_rgb_index.increment()

    def on_depth_frame(self, data: bytes, timestamp: int | None = None) -> None:
        """Store a depth frame with the latest colour frame in the next slot.

        The depth index only advances once a colour frame has arrived.
        """
        if len(data) != self.depth_size:
            raise ValueError(f"depth frame must be {self.depth_size} bytes, got {len(data)}")
        stamp = _now_ms() if timestamp is None else timestamp
        self.last_depth_time = stamp
        index = (self.latest_depth_index.get() + 1) % self.NUM_BUFFERS
        slot = self.frame_buffers[index]
        slot.depth = bytes(data)
        slot.timestamp = stamp

        last_image = self.latest_rgb_index.get()
        if last_image == -1:
            return
        slot.rgb = self._rgb_buffers[last_image % self.NUM_BUFFERS][0]
        self.latest_depth_index.increment()


class UnavailableCamera(CameraInterface):
    """A camera that failed to start; it reports the reason through error()."""

    def __init__(self, width: int = 640, height: int = 480, message: str = "") -> None:
        super().__init__(width, height)
        self._ok = False
        self._error_text = message