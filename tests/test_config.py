import pytest

from rgbdlog.config import Intrinsics, Settings, load_calibration, parse_args


def test_defaults_match_replica_setup():
    settings = parse_args([])
    assert (settings.width, settings.height) == (1200, 680)
    assert settings.intrinsics == Intrinsics(600, 600, 599, 339)
    assert settings.confidence == 10.0
    assert settings.depth == 3.0
    assert settings.icp_count_thresh == 40000
    assert settings.time_delta == 200
    assert settings.start == 1
    assert settings.end == 65535
    assert settings.so3 is True
    assert settings.open_loop is False


def test_none_argv_gives_defaults():
    assert parse_args(None) == Settings()


def test_numeric_options():
    settings = parse_args(
        ["-c", "5", "-d", "4.5", "-t", "150", "-ic", "1000", "-s", "3", "-e", "90"]
    )
    assert settings.confidence == 5.0
    assert settings.depth == 4.5
    assert settings.time_delta == 150
    assert settings.icp_count_thresh == 1000
    assert settings.start == 3
    assert settings.end == 90


def test_boolean_flags():
    settings = parse_args(["-f", "-rl", "-fs", "-q", "-fo", "-r", "-ftf", "-nso", "-icl", "-sc"])
    assert settings.flip_colors
    assert settings.reloc
    assert settings.frameskip
    assert settings.quiet
    assert settings.fast_odom
    assert settings.rewind
    assert settings.frame_to_frame_rgb
    assert settings.so3 is False
    assert settings.iclnuim
    assert settings.showcase


def test_similar_flags_do_not_collide():
    settings = parse_args(["-fs"])
    assert settings.frameskip
    assert not settings.flip_colors
    assert not settings.fast_odom


def test_log_and_pose_files():
    settings = parse_args(["-l", "run.klg", "-p", "poses.txt"])
    assert settings.log_file == "run.klg"
    assert settings.pose_file == "poses.txt"


def test_open_loop_time_window():
    settings = parse_args(["-o"])
    assert settings.open_loop
    assert settings.time_window() > 10**9


def test_closed_loop_time_window_is_time_delta():
    assert parse_args(["-t", "77"]).time_window() == 77


def test_pose_file_disables_open_loop():
    settings = parse_args(["-o", "-p", "poses.txt"])
    assert settings.open_loop is False
    assert settings.time_window() == settings.time_delta


def test_missing_value_raises():
    with pytest.raises(ValueError):
        parse_args(["-c"])


def test_invalid_number_raises():
    with pytest.raises(ValueError):
        parse_args(["-t", "soon"])


def test_load_calibration(tmp_path):
    path = tmp_path / "cal.txt"
    path.write_text("528 529 320 240\n")
    assert load_calibration(path) == Intrinsics(528, 529, 320, 240)


def test_calibration_option_sets_intrinsics(tmp_path):
    path = tmp_path / "cal.txt"
    path.write_text("480 481 320 240\nignored\n")
    settings = parse_args(["-cal", str(path)])
    assert settings.intrinsics == Intrinsics(480, 481, 320, 240)
    assert settings.calibration_file == str(path)


def test_short_calibration_raises(tmp_path):
    path = tmp_path / "cal.txt"
    path.write_text("528 528 320\n")
    with pytest.raises(ValueError):
        load_calibration(path)


def test_empty_calibration_raises(tmp_path):
    path = tmp_path / "cal.txt"
    path.write_text("")
    with pytest.raises(ValueError):
        load_calibration(path)