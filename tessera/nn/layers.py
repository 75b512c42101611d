"""Hidden layers of the feed-forward network."""

from __future__ import annotations

import itertools
from typing import Callable, Dict, Optional, Protocol, Tuple

import numpy as np

from ..core.errors import InvalidArgument, NoPendingForwardPass
from ..core.types import Array
from .gradients import Constant, Deferred, Linear, Masked, Scaled, Thunk
from .optimizers import Optimizer

_ids = itertools.count()


class Hidden(Protocol):
    """Layer protocol shared by every hidden layer."""

    def width(self) -> Optional[int]:
        ...

    def initialize(self, fan_in: int) -> int:
        """Initialise with the fan in of the previous layer and return the fan out."""

    def forward(self, inputs: Array) -> Array:
        ...

    def infer(self, inputs: Array) -> Array:
        ...

    def back(self, prev_gradient: Thunk, optimizer: Optimizer) -> Deferred:
        ...


class Dropout:
    """Temporarily disable neurons during each training pass.

    Dropout is a regularisation technique that reduces overfitting by
    preventing complex co-adaptations on the training data. A fresh binary mask
    is drawn on every forward pass and consumed by exactly one backward pass.
    Kept activations are not rescaled.

    References
    ----------
    N. Srivastava et al. (2014). Dropout: A Simple Way to Prevent Neural
    Networks from Overfitting.
    """

    def __init__(self, ratio: float = 0.5, rng: np.random.Generator | None = None) -> None:
        if not 0.0 < ratio < 1.0:
            raise InvalidArgument(f"Dropout ratio must be between 0 and 1, {ratio} given.")
        self.ratio = float(ratio)
        self.scale = 1.0 / (1.0 - self.ratio)
        self.rng = rng if rng is not None else np.random.default_rng()
        self._width: Optional[int] = None
        self._mask: Optional[Array] = None

    def width(self) -> Optional[int]:
        return self._width

    def initialize(self, fan_in: int) -> int:
        fan_out = fan_in
        self._width = fan_out
        return fan_out

    def forward(self, inputs: Array) -> Array:
        draw = self.rng.random(np.shape(inputs))
        self._mask = np.greater(draw, self.ratio).astype(np.float64)
        return self._mask * inputs

    def infer(self, inputs: Array) -> Array:
        return inputs

    def back(self, prev_gradient: Thunk, optimizer: Optimizer) -> Masked:
        if self._mask is None:
            raise NoPendingForwardPass("Must perform forward pass before backpropagating.")
        mask, self._mask = self._mask, None
        return Masked(prev_gradient, mask)

    def __repr__(self) -> str:
        return f"Dropout(ratio={self.ratio})"


def _relu(z: Array) -> Tuple[Array, Array]:
    return np.maximum(z, 0.0), (z > 0).astype(np.float64)


def _sigmoid(z: Array) -> Tuple[Array, Array]:
    s = 1.0 / (1.0 + np.exp(-z))
    return s, s * (1.0 - s)


def _tanh(z: Array) -> Tuple[Array, Array]:
    t = np.tanh(z)
    return t, 1.0 - t**2


def _identity(z: Array) -> Tuple[Array, Array]:
    return z, np.ones_like(z, dtype=np.float64)


ACTIVATIONS: Dict[str, Callable[[Array], Tuple[Array, Array]]] = {
    "relu": _relu,
    "sigmoid": _sigmoid,
    "tanh": _tanh,
    "identity": _identity,
}


class Activation:
    """Elementwise non-linearity."""

    def __init__(self, fn: str = "relu") -> None:
        if fn not in ACTIVATIONS:
            available = ", ".join(sorted(ACTIVATIONS))
            raise InvalidArgument(f"Unknown activation {fn!r}. Available: {available}")
        self.fn = fn
        self._width: Optional[int] = None
        self._derivative: Optional[Array] = None

    def width(self) -> Optional[int]:
        return self._width

    def initialize(self, fan_in: int) -> int:
        self._width = fan_in
        return fan_in

    def forward(self, inputs: Array) -> Array:
        activations, self._derivative = ACTIVATIONS[self.fn](inputs)
        return activations

    def infer(self, inputs: Array) -> Array:
        return ACTIVATIONS[self.fn](inputs)[0]

    def back(self, prev_gradient: Thunk, optimizer: Optimizer) -> Scaled:
        if self._derivative is None:
            raise NoPendingForwardPass("Must perform forward pass before backpropagating.")
        derivative, self._derivative = self._derivative, None
        return Scaled(prev_gradient, derivative)

    def __repr__(self) -> str:
        return f"Activation({self.fn!r})"


class Dense:
    """Fully connected layer with learnable weights and biases."""

    def __init__(self, neurons: int, seed: int | None = None) -> None:
        if neurons < 1:
            raise InvalidArgument(f"Dense layer needs at least 1 neuron, {neurons} given.")
        self.neurons = int(neurons)
        self.seed = seed
        self.weights: Optional[Array] = None
        self.biases: Optional[Array] = None
        self._key = f"dense{next(_ids)}"
        self._input: Optional[Array] = None

    def width(self) -> Optional[int]:
        return self.neurons if self.weights is not None else None

    def initialize(self, fan_in: int) -> int:
        rng = np.random.default_rng(self.seed)
        scale = np.sqrt(2.0 / max(1, fan_in))
        self.weights = rng.standard_normal((fan_in, self.neurons)) * scale
        self.biases = np.zeros(self.neurons)
        return self.neurons

    def forward(self, inputs: Array) -> Array:
        self._input = inputs
        return inputs @ self.weights + self.biases

    def infer(self, inputs: Array) -> Array:
        return inputs @ self.weights + self.biases

    def back(self, prev_gradient: Thunk, optimizer: Optimizer) -> Linear:
        if self._input is None:
            raise NoPendingForwardPass("Must perform forward pass before backpropagating.")
        inputs, self._input = self._input, None
        d_out = prev_gradient()
        weights = self.weights
        self.weights = optimizer.step(f"{self._key}.weights", weights, inputs.T @ d_out)
        self.biases = optimizer.step(f"{self._key}.biases", self.biases, d_out.sum(axis=0))
        return Linear(Constant(d_out), weights)

    def __repr__(self) -> str:
        return f"Dense(neurons={self.neurons})"


__all__ = ["Hidden", "Dropout", "Activation", "Dense", "ACTIVATIONS"]
