"""Frame source that reads the newest paired frame from a running camera."""

from __future__ import annotations

import os
import sys
import time

import numpy as np

from rgbdlog.camera import CameraInterface
from rgbdlog.log_reader import LogReader, swap_red_blue

_INT_MAX = 2**31 - 1


class LiveLogReader(LogReader):
    """Reads the most recent depth/colour pair from a camera's ring buffer.

    A live source cannot be rewound or stepped back; those calls do nothing.
    """

    def __init__(
        self,
        camera: CameraInterface,
        flip_colors: bool = False,
        base_dir: str = "",
        poll_interval: float = 0.033333,
    ) -> None:
        super().__init__("", flip_colors, camera.width, camera.height)
        self.camera = camera
        self.base_dir = str(base_dir)
        self._last_frame_time = -1
        self._last_got = -1

        out = sys.stdout
        out.write("Creating live capture... ")
        out.flush()

        if not camera.ok():
            out.write("failed!\n")
            out.write(camera.error())
            out.flush()
            return

        out.write("success!\n")
        out.write("Waiting for first frame")
        out.flush()
        while True:
            time.sleep(poll_interval)
            out.write(".")
            out.flush()
            if camera.latest_depth_index.get() != -1:
                break
        out.write(" got it!\n")
        out.flush()

    def get_next(self) -> None:
        """Copy the newest paired frame, unless it has already been read."""
        last_depth = self.camera.latest_depth_index.get()
        if last_depth == -1:
            raise RuntimeError("the camera has not delivered a frame yet")

        buffer_index = last_depth % self.camera.NUM_BUFFERS
        if buffer_index == self._last_got:
            return

        slot = self.camera.frame_buffers[buffer_index]
        if self._last_frame_time == slot.timestamp:
            return

        depth_bytes = self.num_pixels * 2
        image_bytes = self.num_pixels * 3
        self.depth = (
            np.frombuffer(slot.depth[:depth_bytes], dtype="<u2")
            .reshape(self.height, self.width)
            .astype(np.uint16)
        )
        rgb = np.frombuffer(slot.rgb[:image_bytes], dtype=np.uint8).reshape(
            self.height, self.width, 3
        )
        self.rgb = swap_red_blue(rgb) if self.flip_colors else rgb.copy()

        self._last_frame_time = slot.timestamp
        self.timestamp = slot.timestamp

    def get_back(self) -> None:
        """A live source cannot step back."""

    def num_frames(self) -> int:
        return _INT_MAX

    def has_more(self) -> bool:
        return True

    def rewound(self) -> bool:
        return False

    def rewind(self) -> None:
        """A live source cannot be rewound."""

    def fast_forward(self, frame: int) -> None:
        """A live source cannot skip ahead."""

    def file(self) -> str:
        return os.path.join(self.base_dir, "live")

    def set_auto(self, value: bool) -> None:
        """Turn the camera's automatic exposure and white balance on or off."""
        self.camera.set_auto_exposure(value)
        self.camera.set_auto_white_balance(value)