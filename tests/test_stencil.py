from itertools import product

import pytest

from mdview.extents import dextents
from mdview.fill import fill_random
from mdview.mapping import Layout, Mapping
from mdview.stencil import (
    DEFAULT_DELTA,
    first_touch_3d,
    stencil_3d,
    stencil_3d_raw_left,
    stencil_3d_raw_right,
    stencil_bytes,
)
from mdview.view import MDSpan


def _view(x, y, z, layout=Layout.RIGHT, seed=None):
    exts = dextents(3, x, y, z)
    mapping = Mapping(exts, layout)
    buffer = [0] * mapping.required_span_size()
    view = MDSpan(buffer, mapping)
    if seed is not None:
        fill_random(view, seed)
    return buffer, view


def test_default_delta_matches_source():
    assert DEFAULT_DELTA == 1
    _, s = _view(4, 5, 6, seed=13)
    default_buf, default_out = _view(4, 5, 6)
    explicit_buf, explicit_out = _view(4, 5, 6)
    stencil_3d(s, default_out)
    stencil_3d(s, explicit_out, 1)
    assert default_buf == explicit_buf


def test_first_touch_zeroes_everything():
    buffer, view = _view(3, 4, 5, seed=7)
    assert any(buffer)
    first_touch_3d(view)
    assert buffer == [0] * 60


def test_first_touch_rejects_wrong_rank():
    view = MDSpan([0] * 4, dextents(2, 2, 2))
    with pytest.raises(ValueError):
        first_touch_3d(view)


def test_constant_field_sums_to_window_size():
    buffer, s = _view(4, 4, 4)
    for index in product(range(4), repeat=3):
        s[index] = 1
    _, o = _view(4, 4, 4)
    stencil_3d(s, o)
    for i, j, k in product(range(1, 3), repeat=3):
        assert o[i, j, k] == 27


def test_border_left_unchanged():
    _, s = _view(4, 5, 6, seed=3)
    o_buf, o = _view(4, 5, 6)
    for index in product(range(4), range(5), range(6)):
        o[index] = -1
    stencil_3d(s, o)
    for i, j, k in product(range(4), range(5), range(6)):
        border = i in (0, 3) or j in (0, 4) or k in (0, 5)
        assert (o[i, j, k] == -1) == border


def test_zero_delta_copies_source():
    s_buf, s = _view(3, 3, 3, seed=11)
    o_buf, o = _view(3, 3, 3)
    stencil_3d(s, o, 0)
    assert o_buf == s_buf


@pytest.mark.parametrize("delta", [1, 2])
def test_view_matches_raw_right(delta):
    s_buf, s = _view(5, 6, 7, seed=5)
    o_buf, o = _view(5, 6, 7)
    stencil_3d(s, o, delta)
    raw_out = [0] * len(s_buf)
    stencil_3d_raw_right(s_buf, raw_out, 5, 6, 7, delta)
    assert raw_out == o_buf


@pytest.mark.parametrize("delta", [1, 2])
def test_view_matches_raw_left(delta):
    s_buf, s = _view(5, 6, 7, Layout.LEFT, seed=9)
    o_buf, o = _view(5, 6, 7, Layout.LEFT)
    stencil_3d(s, o, delta)
    raw_out = [0] * len(s_buf)
    stencil_3d_raw_left(s_buf, raw_out, 5, 6, 7, delta)
    assert raw_out == o_buf


def test_layouts_agree_logically():
    _, s_right = _view(4, 5, 6, seed=21)
    _, s_left = _view(4, 5, 6, Layout.LEFT, seed=21)
    _, o_right = _view(4, 5, 6)
    _, o_left = _view(4, 5, 6, Layout.LEFT)
    stencil_3d(s_right, o_right)
    stencil_3d(s_left, o_left)
    for index in product(range(4), range(5), range(6)):
        assert o_right[index] == o_left[index]


def test_small_extents_leave_output_untouched():
    s_buf, s = _view(2, 2, 2, seed=1)
    o_buf, o = _view(2, 2, 2)
    stencil_3d(s, o)
    assert o_buf == [0] * 8


def test_stencil_rejects_negative_delta():
    _, s = _view(3, 3, 3)
    _, o = _view(3, 3, 3)
    with pytest.raises(ValueError):
        stencil_3d(s, o, -1)


def test_stencil_rejects_wrong_rank():
    _, s = _view(3, 3, 3)
    o = MDSpan([0] * 9, dextents(2, 3, 3))
    with pytest.raises(ValueError):
        stencil_3d(s, o)


def test_raw_rejects_short_buffer():
    with pytest.raises(ValueError):
        stencil_3d_raw_right([0] * 26, [0] * 27, 3, 3, 3)
    with pytest.raises(ValueError):
        stencil_3d_raw_left([0] * 27, [0] * 10, 3, 3, 3)


def test_stencil_bytes_pinned():
    assert stencil_bytes(3, 3, 3, 1, 1, 1) == 216


def test_stencil_bytes_scales_linearly():
    one = stencil_bytes(80, 80, 80, 1, 4, 1)
    assert stencil_bytes(80, 80, 80, 1, 4, 10) == 10 * one
    assert stencil_bytes(80, 80, 80, 1, 8, 1) == 2 * one
    assert stencil_bytes(80, 80, 80, 1, 4, 0) == 0


def test_stencil_bytes_zero_delta_is_element_bytes():
    assert stencil_bytes(5, 6, 7, 0, 4, 3) == 5 * 6 * 7 * 4 * 3


def test_stencil_bytes_rejects_size_below_delta():
    with pytest.raises(ValueError):
        stencil_bytes(1, 5, 5, 2, 4, 1)