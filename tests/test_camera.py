import pytest

from rgbdlog.camera import (
    NUM_BUFFERS,
    CameraInterface,
    PixelFormat,
    UnavailableCamera,
    VideoMode,
    find_mode,
    strip_tabs,
)


def _camera():
    return CameraInterface(4, 3)


def _depth(cam, fill):
    return bytes([fill]) * cam.depth_size


def _rgb(cam, fill):
    return bytes([fill]) * cam.rgb_size


def test_describe_uses_format_label():
    mode = VideoMode(640, 480, 30, PixelFormat.DEPTH_1_MM)
    assert mode.describe() == "640x480 @ 30fps 1mm"


def test_describe_without_format():
    assert VideoMode(320, 240, 60).describe().endswith("fps ")


def test_strip_tabs_removes_only_tabs():
    result = strip_tabs("\tdevice\tnot found")
    assert "\t" not in result
    assert result == "devicenot found"


def test_find_mode_requires_both_sensors():
    depth = [VideoMode(640, 480, 30), VideoMode(320, 240, 60)]
    rgb = [VideoMode(640, 480, 30)]
    assert find_mode(depth, rgb, 640, 480, 30)
    assert not find_mode(depth, rgb, 320, 240, 60)
    assert not find_mode(depth, rgb, 640, 480, 60)


def test_new_camera_is_ok_and_empty():
    cam = _camera()
    assert cam.ok()
    assert cam.error() == ""
    assert cam.latest_depth_index.get() == -1
    assert len(cam.frame_buffers) == NUM_BUFFERS


def test_depth_before_rgb_does_not_advance():
    cam = _camera()
    cam.on_depth_frame(_depth(cam, 5), timestamp=100)
    assert cam.latest_depth_index.get() == -1
    assert cam.frame_buffers[0].depth == _depth(cam, 5)
    assert cam.frame_buffers[0].timestamp == 100


def test_depth_paired_with_latest_rgb():
    cam = _camera()
    cam.on_rgb_frame(_rgb(cam, 1), timestamp=10)
    cam.on_rgb_frame(_rgb(cam, 2), timestamp=20)
    cam.on_depth_frame(_depth(cam, 9), timestamp=25)
    assert cam.latest_depth_index.get() == 0
    slot = cam.frame_buffers[0]
    assert slot.rgb == _rgb(cam, 2)
    assert slot.depth == _depth(cam, 9)
    assert cam.last_depth_time == 25
    assert cam.last_rgb_time == 20


def test_ring_buffer_wraps():
    cam = _camera()
    cam.on_rgb_frame(_rgb(cam, 1), timestamp=1)
    for i in range(NUM_BUFFERS + 2):
        cam.on_depth_frame(_depth(cam, i), timestamp=i)
    assert cam.latest_depth_index.get() == NUM_BUFFERS + 1
    assert cam.frame_buffers[1].depth == _depth(cam, NUM_BUFFERS + 1)


def test_wrong_frame_sizes_raise():
    cam = _camera()
    with pytest.raises(ValueError):
        cam.on_rgb_frame(b"\x00")
    with pytest.raises(ValueError):
        cam.on_depth_frame(b"\x00" * (cam.depth_size + 1))


def test_auto_settings_toggle():
    cam = _camera()
    cam.set_auto_exposure(False)
    cam.set_auto_white_balance(False)
    assert cam.auto_exposure is False
    assert cam.auto_white_balance is False


def test_unavailable_camera_reports_error():
    cam = UnavailableCamera(4, 3, "No device\tconnected.")
    assert not cam.ok()
    assert cam.error() == strip_tabs("No device\tconnected.")
    assert "\t" not in cam.error()