"""Deferred gradient computations threaded through the backward pass.

Every layer's ``back`` returns one of these objects instead of an evaluated
gradient. Each object holds a reference to the gradient of the layer above it
together with whatever per-pass state the layer captured, and only computes a
value once it is called. The outermost object therefore describes the whole
reverse pass and nothing runs until the caller decides to evaluate it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

from ..core.types import Array

Thunk = Callable[[], Array]


class Deferred:
    """A zero-argument computation producing a tensor."""

    def __call__(self) -> Array:
        return self.compute()

    def compute(self) -> Array:
        raise NotImplementedError


@dataclass(frozen=True, eq=False)
class Constant(Deferred):
    """Leaf of the chain, typically the derivative of the cost function."""

    value: Array

    def compute(self) -> Array:
        return self.value


@dataclass(frozen=True, eq=False)
class Masked(Deferred):
    """Gate the upstream gradient with a binary mask."""

    upstream: Thunk
    mask: Array

    def compute(self) -> Array:
        return np.multiply(self.upstream(), self.mask)


@dataclass(frozen=True, eq=False)
class Scaled(Deferred):
    """Multiply the upstream gradient by a captured local derivative."""

    upstream: Thunk
    derivative: Array

    def compute(self) -> Array:
        return np.multiply(self.upstream(), self.derivative)


@dataclass(frozen=True, eq=False)
class Linear(Deferred):
    """Carry the upstream gradient back through a weight matrix."""

    upstream: Thunk
    weights: Array

    def compute(self) -> Array:
        return self.upstream() @ self.weights.T


__all__ = ["Thunk", "Deferred", "Constant", "Masked", "Scaled", "Linear"]
