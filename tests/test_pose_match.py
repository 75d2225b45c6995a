import numpy as np

from rgbdlog.pose_match import PoseMatch, max_span


def test_span():
    assert PoseMatch(2, 9).span() == 7


def test_defaults():
    match = PoseMatch(0, 1)
    np.testing.assert_array_equal(match.t_wc_first, np.eye(4))
    np.testing.assert_array_equal(match.t_wc_second, np.eye(4))
    assert match.constraints == []
    assert match.fern is False


def test_defaults_not_shared():
    a = PoseMatch(0, 1)
    b = PoseMatch(0, 1)
    a.constraints.append("c")
    assert b.constraints == []


def test_max_span_matches_largest():
    matches = [PoseMatch(1, 4), PoseMatch(0, 10), PoseMatch(5, 6)]
    assert max_span(matches) == max(m.span() for m in matches)
    assert max_span(matches) == matches[1].span()


def test_max_span_empty_is_zero():
    assert max_span([]) == 0


def test_max_span_ignores_negative():
    assert max_span([PoseMatch(5, 1), PoseMatch(8, 3)]) == 0


def test_max_span_accepts_generator():
    matches = [PoseMatch(0, 3), PoseMatch(2, 4)]
    assert max_span(m for m in matches) == matches[0].span()