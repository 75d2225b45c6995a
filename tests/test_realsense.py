import pytest

from rgbdlog.realsense import NO_LIBRARY_MESSAGE, RealSenseCamera


def test_camera_does_not_start():
    camera = RealSenseCamera()
    assert camera.ok() is False


def test_error_explains_missing_library():
    camera = RealSenseCamera()
    assert camera.error() == "Compiled without Intel RealSense library"
    assert camera.error() == NO_LIBRARY_MESSAGE


def test_defaults_match_source():
    camera = RealSenseCamera()
    assert (camera.width, camera.height, camera.fps) == (640, 480, 30)


def test_custom_resolution_sets_buffer_sizes():
    camera = RealSenseCamera(4, 2, 15)
    assert camera.fps == 15
    assert camera.depth_size == 4 * 2 * 2
    assert camera.rgb_size == 4 * 2 * 3


@pytest.mark.parametrize("value", [True, False])
def test_settings_always_read_back_disabled(value):
    camera = RealSenseCamera()
    camera.set_auto_exposure(value)
    camera.set_auto_white_balance(value)
    assert camera.get_auto_exposure() is False
    assert camera.get_auto_white_balance() is False


def test_no_frames_available():
    camera = RealSenseCamera()
    assert camera.latest_depth_index.get() == -1