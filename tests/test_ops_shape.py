import numpy as np
import pytest

from tensorlite.ops_shape import (
    ResizeType,
    concat,
    create_slice,
    reshape,
    reshape_src,
    resize,
    slice_nocopy,
    slice_tensor,
    transpose,
    zeros_slice,
)
from tensorlite.tensor import arange, create, zeros


def _cube():
    t = arange(0, 24, 1, "float32")
    reshape_src(t, (2, 3, 4))
    return t


def test_slice_pinned_values():
    t = create(np.arange(6), (2, 3), "int32")
    out = slice_tensor(t, 1, 1, 1)
    assert out.dims == (2, 1)
    assert out.data.tolist() == [1, 4]


@pytest.mark.parametrize("axis", [0, 1, 2])
def test_slice_then_concat_round_trip(axis):
    t = _cube()
    n = t.dims[axis]
    first = slice_tensor(t, axis, 0, 1)
    rest = slice_tensor(t, axis, 1, n - 1)
    joined = concat(first, rest, axis)
    assert joined.dims == t.dims
    assert np.array_equal(joined.data, t.data)


def test_slice_into_given_dst():
    t = _cube()
    dst = zeros((2, 2, 4), "float32")
    out = slice_tensor(t, 1, 1, 2, dst)
    assert out is dst
    for i in range(dst.length):
        c = dst.coords(i)
        assert dst.data[i] == t.data[t.index((c[0], c[1] + 1, c[2]))]


@pytest.mark.parametrize(
    "axis,start,length", [(1, 2, 2), (3, 0, 1), (0, -1, 1), (0, 0, 0)]
)
def test_slice_bad_range(axis, start, length):
    with pytest.raises(ValueError):
        slice_tensor(_cube(), axis, start, length)


def test_slice_dst_wrong_dims():
    with pytest.raises(ValueError):
        slice_tensor(_cube(), 1, 0, 2, zeros((2, 3, 4), "float32"))


def test_slice_nocopy_is_view():
    t = _cube()
    view = slice_nocopy(t, 0, 1, 1)
    assert view.owner is t
    assert view.dims == (1, 3, 4)
    assert np.array_equal(view.data, t.data[12:])
    t.data[12] = -7.0
    assert view.data[0] == -7.0


def test_slice_nocopy_only_axis_zero():
    with pytest.raises(ValueError):
        slice_nocopy(_cube(), 1, 0, 1)


def test_concat_rejects_mismatch():
    a = zeros((2, 3), "float32")
    with pytest.raises(TypeError):
        concat(a, zeros((2, 3), "int32"), 0)
    with pytest.raises(ValueError):
        concat(a, zeros((3, 3), "float32"), 1)


def test_reshape_shares_data():
    t = _cube()
    r = reshape(t, (6, 4))
    assert r.dims == (6, 4)
    assert r.owner is t
    r.data[0] = 99.0
    assert t.data[0] == 99.0


def test_reshape_wrong_length():
    with pytest.raises(ValueError):
        reshape(_cube(), (5, 5))
    with pytest.raises(ValueError):
        reshape_src(_cube(), (25,))


def test_reshape_src_in_place():
    t = _cube()
    before = t.data.copy()
    reshape_src(t, (4, 6))
    assert t.dims == (4, 6)
    assert np.array_equal(t.data, before)


def test_transpose_2d_swaps_coordinates():
    t = create(np.arange(6), (2, 3), "int32")
    out = transpose(t, (1, 0))
    assert out.dims == (3, 2)
    for i in range(out.length):
        r, c = out.coords(i)
        assert out.data[i] == t.data[t.index((c, r))]


def test_transpose_inverse_round_trip():
    t = _cube()
    axes = (2, 0, 1)
    inverse = tuple(int(a) for a in np.argsort(axes))
    out = transpose(transpose(t, axes), inverse)
    assert out.dims == t.dims
    assert np.array_equal(out.data, t.data)


def test_transpose_bad_axes():
    with pytest.raises(ValueError):
        transpose(_cube(), (0, 0, 1))


def test_resize_identity():
    t = _cube()
    out = resize(t, t.dims, ResizeType.NEAREST)
    assert np.array_equal(out.data, t.data)


def test_resize_upscale_nearest():
    t = create(np.arange(6), (2, 3), "int32")
    out = resize(t, (4, 6), ResizeType.NEAREST)
    assert out.dims == (4, 6)
    for i in range(out.length):
        r, c = out.coords(i)
        assert out.data[i] == t.data[t.index((r // 2, c // 2))]


def test_resize_linear_unsupported():
    with pytest.raises(ValueError):
        resize(_cube(), (2, 3, 4), ResizeType.LINEAR)


def test_create_slice_without_data():
    t = _cube()
    s = create_slice(None, t, 2, 2, "int8")
    assert s.dims == (2, 3, 2)
    assert s.data is None
    assert s.dtype == np.dtype("int8")


def test_zeros_slice():
    z = zeros_slice(_cube(), 0, 1)
    assert z.dims == (1, 3, 4)
    assert not z.data.any()
    with pytest.raises(ValueError):
        zeros_slice(_cube(), 0, 3)