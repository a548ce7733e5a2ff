"""Arithmetic operations: type conversion, element-wise ops, reductions, activations."""

from __future__ import annotations

import enum
from typing import Any, Sequence

import numpy as np

from tensorlite.tensor import Tensor, _cast, _check_dtype, zeros


class ElewOp(enum.Enum):
    """Binary operation applied element by element."""

    MUL = "mul"
    DIV = "div"
    SUM = "sum"
    SUB = "sub"
    MAX = "max"
    MIN = "min"
    POW = "pow"


def _data(t: Tensor) -> np.ndarray:
    if t.data is None:
        raise ValueError("tensor has no data")
    return t.data


def _check_dst(dst: Tensor, dims: Sequence[int], dtype: np.dtype) -> np.ndarray:
    data = _data(dst)
    if dst.dtype != dtype:
        raise TypeError(f"destination dtype {dst.dtype} does not match {dtype}")
    if tuple(dst.dims) != tuple(dims):
        raise ValueError(f"destination dims {dst.dims} do not match {tuple(dims)}")
    return data


def _apply(op: ElewOp, a: Any, b: Any, dtype: np.dtype) -> np.ndarray:
    """Apply op to a and b, keeping the result in dtype with integer wrap-around."""
    if dtype.kind == "b":
        wide = _apply(op, np.asarray(a).astype(np.int64), np.asarray(b).astype(np.int64),
                      np.dtype(np.int64))
        return wide != 0
    a = np.asarray(a)
    b = np.asarray(b)
    with np.errstate(all="ignore"):
        if op is ElewOp.SUM:
            result = a + b
        elif op is ElewOp.SUB:
            result = a - b
        elif op is ElewOp.MUL:
            result = a * b
        elif op is ElewOp.MAX:
            result = np.maximum(a, b)
        elif op is ElewOp.MIN:
            result = np.minimum(a, b)
        elif op is ElewOp.DIV:
            if dtype.kind == "f":
                result = a / b
            else:
                if np.any(b == 0):
                    raise ZeroDivisionError("integer division by zero")
                a64 = a.astype(np.int64)
                b64 = b.astype(np.int64)
                result = (np.abs(a64) // np.abs(b64)) * (np.sign(a64) * np.sign(b64))
        elif op is ElewOp.POW:
            if dtype.kind == "f":
                result = np.power(a, b)
            else:
                return _cast(np.power(a.astype(np.float64), b.astype(np.float64)), dtype)
        else:
            raise ValueError(f"unsupported element-wise operation: {op}")
        return np.asarray(result).astype(dtype, copy=False)


def convert(src: Tensor, dtype: Any, dst: Tensor | None = None) -> Tensor:
    """Copy src into a tensor of another element type, saturating integers."""
    src_data = _data(src)
    dt = _check_dtype(dtype)
    if dst is None:
        dst = zeros(src.dims, dt)
    out = _check_dst(dst, src.dims, dt)
    out[:] = _cast(src_data, dt)
    return dst


def elew(src1: Tensor, src2: Tensor, op: ElewOp, dst: Tensor | None = None) -> Tensor:
    """Combine two same-shaped tensors element by element."""
    a, b = _data(src1), _data(src2)
    if not src1.same_shape(src2):
        raise ValueError(f"shapes differ: {src1.dims} and {src2.dims}")
    if src1.dtype != src2.dtype:
        raise TypeError(f"dtypes differ: {src1.dtype} and {src2.dtype}")
    op = ElewOp(op)
    if dst is None:
        dst = zeros(src1.dims, src1.dtype)
    out = _check_dst(dst, src1.dims, src1.dtype)
    out[:] = _apply(op, a, b, src1.dtype)
    return dst


def elew_param(src: Tensor, param: float, op: ElewOp, dst: Tensor | None = None) -> Tensor:
    """Combine every element of src with a scalar converted to src's dtype."""
    data = _data(src)
    op = ElewOp(op)
    if dst is None:
        dst = zeros(src.dims, src.dtype)
    out = _check_dst(dst, src.dims, src.dtype)
    value = _cast(np.float64(param), src.dtype)
    out[:] = _apply(op, data, value, src.dtype)
    return dst


def dot_product(src1: Tensor, src2: Tensor, dst: Tensor | None = None) -> Tensor:
    """Sum of element-wise products, stored in a one-element tensor."""
    if not src1.same_shape(src2):
        raise ValueError(f"shapes differ: {src1.dims} and {src2.dims}")
    a, b = _data(src1), _data(src2)
    if src1.dtype != src2.dtype:
        raise TypeError(f"dtypes differ: {src1.dtype} and {src2.dtype}")
    dtype = src1.dtype
    if dst is None:
        dst = zeros((1,), dtype)
    out = _check_dst(dst, (1,), dtype)
    products = _apply(ElewOp.MUL, a, b, dtype)
    with np.errstate(all="ignore"):
        if dtype.kind == "b":
            out[0] = bool(np.any(products))
        else:
            out[0] = np.sum(products, dtype=dtype)
    return dst


def lrelu(src: Tensor, negslope: float, dst: Tensor | None = None) -> Tensor:
    """Leaky ReLU: keep non-negative values, scale negative ones by negslope."""
    data = _data(src)
    if dst is None:
        dst = zeros(src.dims, src.dtype)
    out = _check_dst(dst, src.dims, src.dtype)
    slope = np.float32(negslope)
    kind = src.dtype.kind
    with np.errstate(all="ignore"):
        if kind == "f":
            out[:] = np.where(data >= 0, data, data * slope)
        elif kind == "b" or kind == "u":
            out[:] = data
        else:
            scaled = np.where(data >= 0, data.astype(np.float64),
                              data.astype(np.float32) * slope)
            out[:] = _cast(scaled, src.dtype)
    return dst


def maxreduce(
    src: Tensor, axis: int, dst: Tensor | None = None, arg: Tensor | None = None
) -> Tensor:
    """Take the maximum along axis, keeping it as a dimension of size one.

    If ``arg`` is given (an int32 tensor of the result's shape) it receives the
    position of the first maximum along axis.
    """
    data = _data(src)
    if not 0 <= axis < src.ndim:
        raise ValueError(f"axis {axis} out of range for {src.ndim} dimensions")
    dims = list(src.dims)
    dims[axis] = 1
    dims = tuple(dims)
    if dst is None:
        dst = zeros(dims, src.dtype)
    out = _check_dst(dst, dims, src.dtype)
    arg_out = None
    if arg is not None:
        arg_out = _check_dst(arg, dims, np.dtype(np.int32))

    shaped = data.reshape(src.dims)
    maxv = np.take(shaped, [0], axis=axis)
    maxi = np.zeros(maxv.shape, dtype=np.int32)
    for i in range(1, src.dims[axis]):
        now = np.take(shaped, [i], axis=axis)
        better = now > maxv
        maxv = np.where(better, now, maxv)
        maxi[better] = i

    out[:] = maxv.reshape(-1)
    if arg_out is not None:
        arg_out[:] = maxi.reshape(-1)
    return dst


def submean(src: Tensor, mean: Sequence[float], dst: Tensor | None = None) -> Tensor:
    """Turn an H x W x 3 image into 3 x H x W, subtracting a mean per channel."""
    data = _data(src)
    if src.ndim != 3:
        raise ValueError(f"expected a 3-D tensor, got {src.ndim} dimensions")
    if src.dims[2] != 3:
        raise ValueError(f"expected 3 channels, got {src.dims[2]}")
    mean = np.asarray(mean, dtype=np.float64)
    if mean.shape != (3,):
        raise ValueError(f"expected 3 mean values, got {mean.size}")
    height, width, channels = src.dims
    dims = (channels, height, width)
    if dst is None:
        dst = zeros(dims, np.float32)
    if dst.ndim != 3 or dst.dims[0] != 3:
        raise ValueError(f"destination dims {dst.dims} do not match {dims}")
    out = _check_dst(dst, dims, dst.dtype)
    chw = np.transpose(data.reshape(dims[1], dims[2], channels).astype(np.float64), (2, 0, 1))
    centred = chw - mean[:, None, None]
    out[:] = _cast(centred.reshape(-1), dst.dtype)
    return dst