"""Small typed n-dimensional tensors with shape and arithmetic operators."""

__version__ = "0.1.0"
__all__ = ["tensor", "ops_shape", "ops_math"]