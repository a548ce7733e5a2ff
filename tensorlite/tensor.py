"""Dense n-dimensional tensors with a fixed element type."""

from __future__ import annotations

import math
import sys
from typing import IO, Any, Sequence

import numpy as np

MAXDIM = 8
INT32_MAX = 2**31 - 1

MAJOR_VERSION = 0
MINOR_VERSION = 1
MICRO_VERSION = 0

SUPPORTED_DTYPES = tuple(
    np.dtype(name)
    for name in (
        "float64",
        "float32",
        "int32",
        "int16",
        "int8",
        "uint32",
        "uint16",
        "uint8",
        "bool",
    )
)


def version_string() -> str:
    """Return the library version as "major.minor.micro"."""
    return f"{MAJOR_VERSION}.{MINOR_VERSION}.{MICRO_VERSION}"


def _check_dtype(dtype: Any) -> np.dtype:
    try:
        dt = np.dtype(dtype)
    except TypeError as exc:
        raise TypeError(f"unsupported dtype: {dtype!r}") from exc
    if dt not in SUPPORTED_DTYPES:
        raise TypeError(f"unsupported dtype: {dt}")
    return dt


def _cast(values: Any, dtype: Any) -> np.ndarray:
    """Convert values to dtype, truncating and saturating for integer targets."""
    dt = _check_dtype(dtype)
    arr = np.asarray(values)
    if dt.kind == "b":
        return arr != 0
    if dt.kind == "f":
        with np.errstate(over="ignore", invalid="ignore"):
            return arr.astype(dt)
    info = np.iinfo(dt)
    if arr.dtype.kind == "f":
        arr = np.nan_to_num(np.trunc(arr), nan=0.0)
        return np.clip(arr, info.min, info.max).astype(dt)
    return np.clip(arr.astype(np.int64), info.min, info.max).astype(dt)


def _check_dims(dims: Sequence[int]) -> tuple[int, ...]:
    dims = tuple(int(d) for d in dims)
    if not 0 < len(dims) <= MAXDIM:
        raise ValueError(f"number of dimensions must be in [1, {MAXDIM}], got {len(dims)}")
    if any(d <= 0 for d in dims):
        raise ValueError(f"dimensions must be positive, got {dims}")
    return dims


def _flat_index(coords: Sequence[int], dims: Sequence[int]) -> int:
    index = coords[0]
    for dim, coord in zip(dims[1:], coords[1:]):
        index = dim * index + coord
    return index


def _unravel(index: int, dims: Sequence[int]) -> tuple[int, ...]:
    coords = []
    for dim in reversed(dims):
        coords.append(index % dim)
        index //= dim
    return tuple(reversed(coords))


class Tensor:
    """A row-major tensor stored as a flat array of one element type.

    ``owner`` is the tensor that owns the data: the tensor itself when it
    allocated its data, another tensor when it is a view, ``None`` when the
    data came from outside.
    """

    def __init__(self, data: Any, dims: Sequence[int], dtype: Any) -> None:
        self.dtype = _check_dtype(dtype)
        self.dims = _check_dims(dims)
        self.owner: Tensor | None = None
        self.backend_data: Any = None
        if data is None:
            self.data: np.ndarray | None = None
            return
        arr = np.asarray(data)
        if arr.dtype == self.dtype:
            flat = arr.reshape(-1)
        else:
            flat = _cast(arr.reshape(-1), self.dtype)
        if flat.size != self.length:
            raise ValueError(
                f"data holds {flat.size} elements, dims {self.dims} need {self.length}"
            )
        self.data = flat

    @property
    def ndim(self) -> int:
        return len(self.dims)

    @property
    def length(self) -> int:
        return math.prod(self.dims)

    def __repr__(self) -> str:
        return f"Tensor(dims={self.dims}, dtype={self.dtype})"

    def _require_data(self) -> np.ndarray:
        if self.data is None:
            raise ValueError("tensor has no data")
        return self.data

    def index(self, coords: Sequence[int]) -> int:
        """Return the flat index of the element at coords."""
        coords = tuple(coords)
        if len(coords) != self.ndim:
            raise ValueError(f"expected {self.ndim} coordinates, got {len(coords)}")
        for coord, dim in zip(coords, self.dims):
            if not 0 <= coord < dim:
                raise IndexError(f"coordinates {coords} out of range for {self.dims}")
        return _flat_index(coords, self.dims)

    def coords(self, index: int) -> tuple[int, ...]:
        """Return the coordinates of the element at a flat index."""
        if not 0 <= index < self.length:
            raise IndexError(f"index {index} out of range [0, {self.length})")
        return _unravel(index, self.dims)

    def same_shape(self, other: Tensor) -> bool:
        return self.dims == other.dims

    def size(self) -> int:
        """Return the data size in bytes."""
        return self.length * self.dtype.itemsize

    def clone(self) -> Tensor:
        dst = Tensor(self._require_data().copy(), self.dims, self.dtype)
        dst.owner = dst
        return dst

    def repeat(self, times: int) -> Tensor:
        """Stack ``times`` copies of this tensor along a new leading axis."""
        dims = _check_dims((times, *self.dims))
        dst = Tensor(np.tile(self._require_data(), times), dims, self.dtype)
        dst.owner = dst
        return dst

    def rearange(self, start: float, stop: float, step: float) -> None:
        """Refill a 1-D tensor with start, start+step, ... below stop."""
        length = math.ceil((stop - start) / step)
        if length > INT32_MAX:
            raise ValueError("range is too long")
        if self.ndim != 1:
            raise ValueError("rearange needs a 1-D tensor")
        if self.length != length:
            raise ValueError(f"range has {length} elements, tensor has {self.length}")
        data = self._require_data()
        values = start + step * np.arange(length, dtype=np.float64)
        data[:] = _cast(values, self.dtype)

    def format(self, fmt: str | None = None) -> str:
        """Render the tensor with nested brackets, one innermost row per line."""
        data = self._require_data()
        if not fmt:
            fmt = "%g" if self.dtype.kind == "f" else "%d"
        ndim = self.ndim
        dim_sizes = [0] * ndim
        dim_sizes[-1] = self.dims[-1]
        for i in range(ndim - 2, -1, -1):
            dim_sizes[i] = self.dims[i] * dim_sizes[i + 1]
        levels = [0] * ndim
        parts: list[str] = []
        for i, value in enumerate(data.tolist()):
            left, right = [], []
            for j, dim_size in enumerate(dim_sizes):
                if i % dim_size == 0:
                    levels[j] += 1
                if levels[j] == 1:
                    left.append("[")
                    levels[j] += 1
                if levels[j] == 3:
                    right.append("]")
                    if j != 0 and levels[j] > levels[j - 1]:
                        left.append("[")
                        levels[j] = 2
                    else:
                        levels[j] = 0
            if right:
                parts.append("".join(right))
                parts.append("\n")
                parts.append(" " * max(ndim - len(right), 0))
            parts.append("".join(left) if left else " ")
            if isinstance(value, bool):
                value = int(value)
            parts.append(fmt % value)
        parts.append("]" * ndim)
        parts.append("\n")
        return "".join(parts)

    def fprint(self, stream: IO[str], fmt: str | None = None) -> None:
        stream.write(self.format(fmt))

    def print(self, fmt: str | None = None) -> None:
        self.fprint(sys.stdout, fmt)

    def save(self, path: str, fmt: str | None = None) -> None:
        """Write the formatted tensor to a file; raises OSError if it cannot."""
        with open(path, "w", encoding="utf-8") as fp:
            self.fprint(fp, fmt)


def create(data: Any, dims: Sequence[int], dtype: Any) -> Tensor:
    """Wrap data (or nothing) as a tensor; arrays of the same dtype are shared."""
    return Tensor(data, dims, dtype)


def zeros(dims: Sequence[int], dtype: Any) -> Tensor:
    dt = _check_dtype(dtype)
    dims = _check_dims(dims)
    t = Tensor(np.zeros(math.prod(dims), dtype=dt), dims, dt)
    t.owner = t
    return t


def arange(start: float, stop: float, step: float, dtype: Any) -> Tensor:
    """Return a 1-D tensor holding start, start+step, ... below stop."""
    length = math.ceil((stop - start) / step)
    if length > INT32_MAX:
        raise ValueError("range is too long")
    dst = zeros((length,), dtype)
    values = start + step * np.arange(length, dtype=np.float64)
    dst.data[:] = _cast(values, dst.dtype)
    return dst