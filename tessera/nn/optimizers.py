"""Gradient descent optimizers used by parametric layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Protocol

import numpy as np

from ..core.errors import InvalidArgument
from ..core.types import Array


class Optimizer(Protocol):
    """Applies an update to a parameter given its gradient."""

    def step(self, name: str, param: Array, gradient: Array) -> Array:
        """Return the updated value of ``param``."""


@dataclass
class Stochastic:
    """Vanilla stochastic gradient descent."""

    rate: float = 0.01

    def __post_init__(self) -> None:
        if self.rate <= 0.0:
            raise InvalidArgument(f"Learning rate must be greater than 0, {self.rate} given.")

    def step(self, name: str, param: Array, gradient: Array) -> Array:
        return param - self.rate * gradient


@dataclass
class Momentum:
    """SGD with a decaying velocity per parameter."""

    rate: float = 0.001
    decay: float = 0.1
    _velocities: Dict[str, Array] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.rate <= 0.0:
            raise InvalidArgument(f"Learning rate must be greater than 0, {self.rate} given.")
        if not 0.0 < self.decay < 1.0:
            raise InvalidArgument(f"Decay must be between 0 and 1, {self.decay} given.")

    def step(self, name: str, param: Array, gradient: Array) -> Array:
        velocity = self._velocities.get(name)
        if velocity is None or velocity.shape != param.shape:
            velocity = np.zeros_like(param)
        velocity = (1.0 - self.decay) * velocity + self.rate * gradient
        self._velocities[name] = velocity
        return param - velocity


__all__ = ["Optimizer", "Stochastic", "Momentum"]
