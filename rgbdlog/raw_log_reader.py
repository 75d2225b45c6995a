"""Reader and writer for uncompressed binary RGB-D log files.

Layout, little-endian: an int32 frame count, then per frame an int64
timestamp, an int32 depth size, an int32 image size, the depth bytes and,
when the image size is positive, the image bytes.
"""

from __future__ import annotations

import os
import struct
from typing import BinaryIO, Iterable

import numpy as np

from rgbdlog.log_reader import LogReader, swap_red_blue

_COUNT = struct.Struct("<i")
_HEADER = struct.Struct("<qii")


class LogFormatError(ValueError):
    """Raised when a log file is truncated or malformed."""


def _read_exact(fp: BinaryIO, size: int, what: str) -> bytes:
    if size < 0:
        raise LogFormatError(f"negative {what} size {size}")
    data = fp.read(size)
    if len(data) != size:
        raise LogFormatError(f"unexpected end of file while reading {what}")
    return data


def _as_bytes(data) -> bytes:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    arr = np.asarray(data)
    if arr.dtype.itemsize > 1:
        arr = arr.astype(arr.dtype.newbyteorder("<"))
    return np.ascontiguousarray(arr).tobytes()


def write_raw_log(path, frames: Iterable) -> None:
    """Write ``(timestamp, depth, image)`` frames to a log file.

    ``depth`` and ``image`` may be bytes or arrays; an empty image is allowed.
    """
    items = [(int(ts), _as_bytes(depth), _as_bytes(image)) for ts, depth, image in frames]
    with open(path, "wb") as fp:
        fp.write(_COUNT.pack(len(items)))
        for timestamp, depth, image in items:
            fp.write(_HEADER.pack(timestamp, len(depth), len(image)))
            fp.write(depth)
            fp.write(image)


class RawLogReader(LogReader):
    """Reads frames from a binary log file, with stepping back and rewinding."""

    def __init__(
        self, path, flip_colors: bool = False, width: int = 640, height: int = 480
    ) -> None:
        super().__init__(os.fspath(path), flip_colors, width, height)
        self.file_pointers: list[int] = []
        self._fp: BinaryIO = open(self.path, "rb")
        self._num_frames = 0
        self.depth_size = 0
        self.image_size = 0
        try:
            self._read_count()
        except LogFormatError:
            self._fp.close()
            raise

    def _read_count(self) -> None:
        (self._num_frames,) = _COUNT.unpack(_read_exact(self._fp, _COUNT.size, "frame count"))
        self.current_frame = 0

    def _read_frame(self) -> tuple[bytes, bytes]:
        header = _read_exact(self._fp, _HEADER.size, "frame header")
        self.timestamp, self.depth_size, self.image_size = _HEADER.unpack(header)
        depth = _read_exact(self._fp, self.depth_size, "depth data")
        image = _read_exact(self._fp, self.image_size, "image data") if self.image_size > 0 else b""
        return depth, image

    def _get_core(self) -> None:
        depth, image = self._read_frame()
        depth_bytes = self.num_pixels * 2
        image_bytes = self.num_pixels * 3
        if len(depth) < depth_bytes:
            raise LogFormatError(f"depth frame holds {len(depth)} bytes, need {depth_bytes}")
        if not image:
            image = bytes(image_bytes)
        elif len(image) < image_bytes:
            raise LogFormatError(f"image frame holds {len(image)} bytes, need {image_bytes}")

        self.depth = (
            np.frombuffer(depth[:depth_bytes], dtype="<u2")
            .reshape(self.height, self.width)
            .astype(np.uint16)
        )
        rgb = np.frombuffer(image[:image_bytes], dtype=np.uint8).reshape(
            self.height, self.width, 3
        )
        self.rgb = swap_red_blue(rgb) if self.flip_colors else rgb.copy()
        self.current_frame += 1

    def get_next(self) -> None:
        """Read the next frame into ``timestamp``, ``depth`` and ``rgb``."""
        self.file_pointers.append(self._fp.tell())
        self._get_core()

    def get_back(self) -> None:
        """Re-read the frame at the most recently pushed position."""
        if not self.file_pointers:
            raise IndexError("no earlier frame to go back to")
        self._fp.seek(self.file_pointers.pop())
        self._get_core()

    def num_frames(self) -> int:
        return self._num_frames

    def has_more(self) -> bool:
        return self.current_frame + 1 < self._num_frames

    def rewound(self) -> bool:
        return not self.file_pointers

    def rewind(self) -> None:
        """Reopen the file and return to the first frame."""
        self.file_pointers.clear()
        self._fp.close()
        self._fp = open(self.path, "rb")
        self._read_count()

    def fast_forward(self, frame: int) -> None:
        """Skip frames without decoding them until ``frame`` have been consumed."""
        while self.current_frame < frame and self.has_more():
            self.file_pointers.append(self._fp.tell())
            self._read_frame()
            self.current_frame += 1

    def file(self) -> str:
        return self.path

    def set_auto(self, value: bool) -> None:
        """Recorded logs have no camera settings to change."""

    def close(self) -> None:
        self._fp.close()

    def __enter__(self) -> RawLogReader:
        return self

    def __exit__(self, *args) -> None:
        self.close()