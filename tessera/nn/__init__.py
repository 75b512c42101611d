"""Neural network layers, optimizers, costs and the feed-forward network."""

from . import costs, gradients, layers, optimizers
from .layers import Activation, Dense, Dropout, Hidden
from .network import FeedForward
from .optimizers import Momentum, Stochastic

__all__ = [
    "costs",
    "gradients",
    "layers",
    "optimizers",
    "Activation",
    "Dense",
    "Dropout",
    "Hidden",
    "FeedForward",
    "Momentum",
    "Stochastic",
]
