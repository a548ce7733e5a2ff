"""Shape operations: slicing, concatenation, reshaping, transposing, resizing."""

from __future__ import annotations

import enum
from typing import Any, Sequence

import numpy as np

from tensorlite.tensor import MAXDIM, Tensor, create, zeros


class ResizeType(enum.Enum):
    """Interpolation used by :func:`resize`."""

    NEAREST = "nearest"
    LINEAR = "linear"


def _data(t: Tensor) -> np.ndarray:
    if t.data is None:
        raise ValueError("tensor has no data")
    return t.data


def _check_axis(src: Tensor, axis: int) -> None:
    if not 0 <= axis < src.ndim:
        raise ValueError(f"axis {axis} out of range for {src.ndim} dimensions")


def _check_length(src: Tensor, axis: int, length: int) -> None:
    if not 0 < length <= src.dims[axis]:
        raise ValueError(f"slice length {length} out of range (0, {src.dims[axis]}]")


def _check_range(src: Tensor, axis: int, start: int, length: int) -> None:
    _check_axis(src, axis)
    _check_length(src, axis, length)
    if not 0 <= start < src.dims[axis]:
        raise ValueError(f"slice start {start} out of range [0, {src.dims[axis]})")
    if start + length > src.dims[axis]:
        raise ValueError(
            f"slice [{start}, {start + length}) exceeds dimension {src.dims[axis]}"
        )


def _sliced_dims(src: Tensor, axis: int, length: int) -> tuple[int, ...]:
    dims = list(src.dims)
    dims[axis] = length
    return tuple(dims)


def _check_dst(dst: Tensor, dims: Sequence[int], dtype: np.dtype) -> np.ndarray:
    data = _data(dst)
    if dst.dtype != dtype:
        raise TypeError(f"destination dtype {dst.dtype} does not match {dtype}")
    if tuple(dst.dims) != tuple(dims):
        raise ValueError(f"destination dims {dst.dims} do not match {tuple(dims)}")
    return data


def create_slice(data: Any, src: Tensor, axis: int, length: int, dtype: Any = None) -> Tensor:
    """Wrap data as a tensor shaped like src but with ``length`` along axis."""
    _check_axis(src, axis)
    _check_length(src, axis, length)
    return create(data, _sliced_dims(src, axis, length), src.dtype if dtype is None else dtype)


def zeros_slice(src: Tensor, axis: int, length: int, dtype: Any = None) -> Tensor:
    """Return zeros shaped like src but with ``length`` along axis."""
    _check_axis(src, axis)
    _check_length(src, axis, length)
    return zeros(_sliced_dims(src, axis, length), src.dtype if dtype is None else dtype)


def slice_tensor(
    src: Tensor, axis: int, start: int, length: int, dst: Tensor | None = None
) -> Tensor:
    """Copy ``length`` entries of src along axis, from ``start``, into dst."""
    src_data = _data(src)
    _check_range(src, axis, start, length)
    dims = _sliced_dims(src, axis, length)
    if dst is None:
        dst = zeros(dims, src.dtype)
    dst_data = _check_dst(dst, dims, src.dtype)
    index = [slice(None)] * src.ndim
    index[axis] = slice(start, start + length)
    dst_data[:] = src_data.reshape(src.dims)[tuple(index)].reshape(-1)
    return dst


def slice_nocopy(
    src: Tensor, axis: int, start: int, length: int, dst: Tensor | None = None
) -> Tensor:
    """Make dst a view of src's entries along the first axis, without copying."""
    src_data = _data(src)
    if axis != 0:
        raise ValueError("slicing without a copy only works along axis 0")
    _check_range(src, axis, start, length)
    dims = _sliced_dims(src, axis, length)
    if dst is None:
        dst = create_slice(None, src, axis, length, src.dtype)
    else:
        if dst.dtype != src.dtype:
            raise TypeError(f"destination dtype {dst.dtype} does not match {src.dtype}")
        if tuple(dst.dims) != dims:
            raise ValueError(f"destination dims {dst.dims} do not match {dims}")
    volume = int(np.prod(src.dims[1:], dtype=np.int64)) if src.ndim > 1 else 1
    offset = start * volume
    dst.data = src_data[offset : offset + length * volume]
    dst.owner = src
    return dst


def concat(src1: Tensor, src2: Tensor, axis: int, dst: Tensor | None = None) -> Tensor:
    """Join two tensors along axis; all other dimensions must agree."""
    data1, data2 = _data(src1), _data(src2)
    if src1.dtype != src2.dtype:
        raise TypeError(f"dtypes differ: {src1.dtype} and {src2.dtype}")
    if src1.ndim != src2.ndim:
        raise ValueError(f"ranks differ: {src1.ndim} and {src2.ndim}")
    _check_axis(src1, axis)
    for i, (d1, d2) in enumerate(zip(src1.dims, src2.dims)):
        if i != axis and d1 != d2:
            raise ValueError(f"dimension {i} differs: {d1} and {d2}")
    dims = list(src1.dims)
    dims[axis] = src1.dims[axis] + src2.dims[axis]
    if dst is None:
        dst = zeros(dims, src1.dtype)
    dst_data = _check_dst(dst, dims, src1.dtype)
    joined = np.concatenate((data1.reshape(src1.dims), data2.reshape(src2.dims)), axis=axis)
    dst_data[:] = joined.reshape(-1)
    return dst


def _check_reshape(src: Tensor, dims: Sequence[int]) -> tuple[int, ...]:
    dims = tuple(int(d) for d in dims)
    if not 0 < len(dims) <= MAXDIM or any(d <= 0 for d in dims):
        raise ValueError(f"invalid dims {dims}")
    if int(np.prod(dims, dtype=np.int64)) != src.length:
        raise ValueError(f"cannot reshape {src.length} elements into {dims}")
    return dims


def reshape(src: Tensor, dims: Sequence[int]) -> Tensor:
    """Return a new tensor over src's data with other dims; no copy is made."""
    dims = _check_reshape(src, dims)
    dst = Tensor(src.data, dims, src.dtype)
    dst.owner = src
    return dst


def reshape_src(src: Tensor, dims: Sequence[int]) -> None:
    """Change src's dims in place, keeping its data."""
    src.dims = _check_reshape(src, dims)


def transpose(src: Tensor, axes: Sequence[int], dst: Tensor | None = None) -> Tensor:
    """Permute src's axes: dimension i of the result is src's dimension axes[i]."""
    axes = tuple(int(a) for a in axes)
    if sorted(axes) != list(range(src.ndim)):
        raise ValueError(f"axes {axes} don't match the tensor's shape {src.dims}")
    src_data = _data(src)
    dims = tuple(src.dims[a] for a in axes)
    if dst is None:
        dst = zeros(dims, src.dtype)
    dst_data = _check_dst(dst, dims, src.dtype)
    dst_data[:] = np.transpose(src_data.reshape(src.dims), axes).reshape(-1)
    return dst


def _nearest_indices(src_dim: int, new_dim: int) -> np.ndarray:
    scale = np.float32(src_dim) / np.float32(new_dim)
    pos = ((np.arange(new_dim, dtype=np.float64) + 0.5) * np.float64(scale) - 0.5).astype(
        np.float32
    )
    rounded = np.sign(pos) * np.floor(np.abs(pos) + np.float32(0.5))
    return np.clip(rounded.astype(np.int64), 0, src_dim - 1)


def resize(
    src: Tensor,
    new_dims: Sequence[int],
    rtype: ResizeType = ResizeType.NEAREST,
    dst: Tensor | None = None,
) -> Tensor:
    """Resample src to new_dims; only nearest-neighbour sampling is supported."""
    src_data = _data(src)
    rtype = ResizeType(rtype)
    new_dims = tuple(int(d) for d in new_dims)
    if len(new_dims) != src.ndim:
        raise ValueError(f"expected {src.ndim} new dims, got {len(new_dims)}")
    if dst is None:
        dst = zeros(new_dims, src.dtype)
    dst_data = _check_dst(dst, new_dims, src.dtype)
    if rtype is not ResizeType.NEAREST:
        raise ValueError(f"unsupported resize type: {rtype.value}")
    grids = np.ix_(*(_nearest_indices(s, n) for s, n in zip(src.dims, new_dims)))
    dst_data[:] = src_data.reshape(src.dims)[grids].reshape(-1)
    return dst