"""Common interface for sources of paired depth and colour frames."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


def swap_red_blue(data) -> np.ndarray:
    """Return a copy of interleaved 3-channel pixel data with channels 0 and 2 swapped.

    Accepts bytes-like data or an array; the result keeps the input's shape.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        arr = np.frombuffer(data, dtype=np.uint8)
    else:
        arr = np.asarray(data, dtype=np.uint8)
    if arr.size % 3:
        raise ValueError(f"pixel data length {arr.size} is not a multiple of 3")
    swapped = np.ascontiguousarray(arr.reshape(-1, 3)[:, ::-1])
    return swapped.reshape(arr.shape)


class LogReader(ABC):
    """A source of frames: a recorded log or a live camera.

    After :meth:`get_next`, ``timestamp``, ``depth`` (uint16, height x width)
    and ``rgb`` (uint8, height x width x 3) hold the current frame.
    """

    def __init__(
        self, path: str = "", flip_colors: bool = False, width: int = 640, height: int = 480
    ) -> None:
        self.path = str(path)
        self.flip_colors = flip_colors
        self.width = width
        self.height = height
        self.num_pixels = width * height
        self.timestamp = 0
        self.depth: np.ndarray | None = None
        self.rgb: np.ndarray | None = None
        self.current_frame = 0

    @abstractmethod
    def get_next(self) -> None:
        """Advance to the next frame."""

    @abstractmethod
    def get_back(self) -> None:
        """Step back to the most recently read frame position."""

    @abstractmethod
    def num_frames(self) -> int:
        """Return the number of frames available."""

    @abstractmethod
    def has_more(self) -> bool:
        """Return whether another frame can be read."""

    @abstractmethod
    def rewound(self) -> bool:
        """Return whether the reader is back at its start."""

    @abstractmethod
    def rewind(self) -> None:
        """Return to the first frame."""

    @abstractmethod
    def fast_forward(self, frame: int) -> None:
        """Skip ahead until ``frame`` frames have been consumed."""

    @abstractmethod
    def file(self) -> str:
        """Return the name of the source."""

    @abstractmethod
    def set_auto(self, value: bool) -> None:
        """Turn automatic exposure and white balance on or off."""