"""Core numerical primitives for tessera."""

from . import errors, types
from .matrix import Matrix
from .vector import Vector

__all__ = ["errors", "types", "Matrix", "Vector"]
