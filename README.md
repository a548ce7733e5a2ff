# tensorlite

A small tensor library built on numpy. A tensor has a shape of one to eight
positive dimensions, an element type, and flat row-major storage. The package
also has the operators that a light neural network runtime needs. These are
slicing, concatenation, reshaping, transposition, nearest-neighbour resizing,
element-wise arithmetic, dtype conversion, dot products, leaky ReLU, max
reduction along an axis, and mean subtraction for HWC images.

Supported element types: `float64`, `float32`, `int32`, `int16`, `int8`,
`uint32`, `uint16`, `uint8` and `bool`. Any other type raises `TypeError`.
When values are converted to an integer type, they are truncated toward zero
and clamped to the range of that type.

## Installing

```
pip install .
```

To also install the test tools, run `pip install .[test]`.

## Creating tensors

```python
from tensorlite.tensor import create, zeros, arange, version_string

t = zeros([2, 3], "float32")
r = arange(0, 6, 1, "int32")          # [0 1 2 3 4 5]
w = create([1, 2, 3, 4], [2, 2], "int16")
print(version_string())               # "0.1.0"
```

`create` wraps existing data. A numpy array that already has the requested
dtype is shared, not copied. `create(None, dims, dtype)` makes a tensor that
has a shape but no data.

A `Tensor` has the members `dims`, `ndim`, `length`, `dtype`, `data` and
`owner`. It also has these methods:

- `index(coords)`: the flat index of a coordinate.
- `coords(index)`: the coordinates of a flat index.
- `same_shape(other)`: whether two tensors have the same shape.
- `size()`: the size of the data in bytes.
- `clone()`: a copy of the tensor.
- `repeat(times)`: copies of the tensor stacked along a new leading axis.
- `rearange(start, stop, step)`: fills a 1-D tensor again with a range.

Coordinates or indices that are out of range raise `IndexError`.

### Text output

`format(fmt)` renders the tensor with nested brackets, one innermost row per
line. The default format is `%g` for floating types and `%d` for the others.
`fprint(stream, fmt)` writes that text to a stream. `print(fmt)` writes it to
standard output. `save(path, fmt)` writes it to a file and raises `OSError` if
the file cannot be opened.

## Shape operations

`tensorlite.ops_shape` has the following functions:

- `create_slice` and `zeros_slice`: a tensor shaped like another one, but
  with a different length along one axis.
- `slice_tensor(src, axis, start, length, dst=None)`: copies a range along
  an axis.
- `slice_nocopy(src, axis, start, length, dst=None)`: a view along axis 0
  only.
- `concat(src1, src2, axis, dst=None)`: joins two tensors along an axis.
- `reshape(src, dims)`: a new tensor over the same data.
- `reshape_src(src, dims)`: changes the shape of `src` in place.
- `transpose(src, axes, dst=None)`: permutes the axes.
- `resize(src, new_dims, rtype=ResizeType.NEAREST, dst=None)`: resamples to
  new dimensions.

```python
from tensorlite.ops_shape import transpose, concat

tt = transpose(t, [1, 0])   # dims (3, 2)
c = concat(t, t, 0)         # dims (4, 3)
```

`ResizeType` has two members, `NEAREST` and `LINEAR`. Only nearest-neighbour
sampling is implemented, so `ResizeType.LINEAR` raises `ValueError`.

## Arithmetic

`tensorlite.ops_math` has the following functions:

- `convert(src, dtype, dst=None)`: converts to another element type.
- `elew(src1, src2, op, dst=None)`: applies an operation to two same-shaped
  tensors, element by element.
- `elew_param(src, param, op, dst=None)`: applies an operation to each
  element and a scalar.
- `dot_product(src1, src2, dst=None)`: the dot product, as a tensor with one
  element.
- `lrelu(src, negslope, dst=None)`: leaky ReLU.
- `maxreduce(src, axis, dst=None, arg=None)`: the maximum along an axis,
  with the position of the first maximum written into an `int32` tensor if
  `arg` is given.
- `submean(src, mean, dst=None)`: turns an H x W x 3 image into 3 x H x W and
  subtracts a mean per channel. The default result type is `float32`.

`ElewOp` has the members `MUL`, `DIV`, `SUM`, `SUB`, `MAX`, `MIN` and `POW`.
Integer results wrap around. Integer division truncates toward zero, and
division by zero raises `ZeroDivisionError`.

## Output tensors

Many operators take an optional `dst` tensor. If you pass one, it must have
the right shape and dtype, or the operator raises `ValueError` or `TypeError`.
The result is written into it and it is returned. If you leave it out, a new
tensor is created.

## What it does not do

- Everything runs on the CPU through numpy. There is no GPU backend.
- There is no command-line tool.
- There are no operators beyond the ones listed above. For example, there is
  no linear resizing and no top-k.