"""Intel RealSense camera support for builds without the vendor library."""

from __future__ import annotations

from rgbdlog.camera import UnavailableCamera

NO_LIBRARY_MESSAGE = "Compiled without Intel RealSense library"


class RealSenseCamera(UnavailableCamera):
    """A RealSense camera that reports it cannot start without the vendor library.

    Exposure and white-balance settings are accepted and ignored, and always
    read back as disabled.
    """

    def __init__(self, width: int = 640, height: int = 480, fps: int = 30) -> None:
        super().__init__(width, height, NO_LIBRARY_MESSAGE)
        self.fps = fps
        self.auto_exposure = False
        self.auto_white_balance = False

    def set_auto_exposure(self, value: bool) -> None:
        """Ignored: there is no device to configure."""

    def set_auto_white_balance(self, value: bool) -> None:
        """Ignored: there is no device to configure."""

    def get_auto_exposure(self) -> bool:
        """Always False without the vendor library."""
        return False

    def get_auto_white_balance(self) -> bool:
        """Always False without the vendor library."""
        return False