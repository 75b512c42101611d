"""Cost functions for the feed-forward network."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable

import numpy as np

from ..core.errors import InvalidArgument
from ..core.types import Array

EPSILON = 1e-8


class CostFunction:
    """Base class: ``compute`` returns the elementwise cost, ``differentiate`` dC/dy."""

    name = "cost"

    def compute(self, expected: Array, activations: Array) -> Array:
        raise NotImplementedError

    def differentiate(self, expected: Array, activations: Array, computed: Array) -> Array:
        raise NotImplementedError

    def loss(self, expected: Array, activations: Array) -> float:
        return float(np.mean(self.compute(expected, activations)))


class LeastSquares(CostFunction):
    name = "least_squares"

    def compute(self, expected: Array, activations: Array) -> Array:
        return 0.5 * (activations - expected) ** 2

    def differentiate(self, expected: Array, activations: Array, computed: Array) -> Array:
        return activations - expected


class CrossEntropy(CostFunction):
    """Cross entropy over softmax probabilities with one-hot targets."""

    name = "cross_entropy"

    def compute(self, expected: Array, activations: Array) -> Array:
        return -expected * np.log(np.clip(activations, EPSILON, 1.0))

    def differentiate(self, expected: Array, activations: Array, computed: Array) -> Array:
        # Combined softmax + cross entropy derivative w.r.t. the logits.
        return activations - expected


@dataclass
class Exponential(CostFunction):
    """Exponential cost ``tau * exp((y - t)^2 / tau)``."""

    tau: float = 1.0
    name = "exponential"

    def __post_init__(self) -> None:
        if self.tau <= 0.0:
            raise InvalidArgument(f"Tau must be greater than 0, {self.tau} given.")

    def compute(self, expected: Array, activations: Array) -> Array:
        return self.tau * np.exp((activations - expected) ** 2 / self.tau)

    def differentiate(self, expected: Array, activations: Array, computed: Array) -> Array:
        return (2.0 / self.tau) * (activations - expected) * computed


_COSTS: Dict[str, Callable[[], CostFunction]] = {
    "least_squares": LeastSquares,
    "mse": LeastSquares,
    "cross_entropy": CrossEntropy,
    "ce": CrossEntropy,
    "exponential": Exponential,
}


def get_cost(name: str) -> CostFunction:
    try:
        return _COSTS[name]()
    except KeyError:
        available = ", ".join(sorted(_COSTS))
        raise InvalidArgument(f"Unknown cost function {name!r}. Available: {available}") from None


def available_costs() -> Iterable[str]:
    return sorted(_COSTS)


__all__ = [
    "CostFunction",
    "LeastSquares",
    "CrossEntropy",
    "Exponential",
    "get_cost",
    "available_costs",
]
