"""Feed-forward network assembling hidden layers, a cost and an optimizer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from ..core.errors import InvalidArgument
from ..core.types import Array
from .costs import CostFunction
from .gradients import Constant, Thunk
from .layers import Hidden
from .optimizers import Optimizer


def softmax(z: Array) -> Array:
    z = z - z.max(axis=1, keepdims=True)
    e = np.exp(z)
    return e / e.sum(axis=1, keepdims=True)


_OUTPUTS = {"identity": lambda z: z, "softmax": softmax}


@dataclass
class FeedForward:
    """A sequential stack of layers trained with deferred backpropagation."""

    layers: Sequence[Hidden]
    cost: CostFunction
    optimizer: Optimizer
    output: str = "identity"
    _fan_out: int | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.layers:
            raise InvalidArgument("Network requires at least one layer.")
        if self.output not in _OUTPUTS:
            raise InvalidArgument(f"Unknown output transform {self.output!r}.")
        self.layers = list(self.layers)

    def initialize(self, fan_in: int) -> int:
        for layer in self.layers:
            fan_in = layer.initialize(fan_in)
        self._fan_out = fan_in
        return fan_in

    def initialized(self) -> bool:
        return self._fan_out is not None

    def feed(self, inputs: Array) -> Array:
        """Forward pass in training mode."""

        x = inputs
        for layer in self.layers:
            x = layer.forward(x)
        return _OUTPUTS[self.output](x)

    def infer(self, inputs: Array) -> Array:
        x = inputs
        for layer in self.layers:
            x = layer.infer(x)
        return _OUTPUTS[self.output](x)

    def backpropagate(self, gradient: Thunk) -> Array:
        """Thread ``gradient`` down through every layer and evaluate it."""

        for layer in reversed(self.layers):
            gradient = layer.back(gradient, self.optimizer)
        return gradient()

    def roundtrip(self, inputs: Array, targets: Array) -> float:
        """Forward and backward pass over one mini-batch, returning the loss."""

        outputs = self.feed(inputs)
        computed = self.cost.compute(targets, outputs)
        delta = self.cost.differentiate(targets, outputs, computed) / max(1, len(inputs))
        self.backpropagate(Constant(delta))
        return float(np.mean(computed))


__all__ = ["FeedForward", "softmax"]
