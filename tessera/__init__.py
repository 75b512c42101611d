"""tessera public API."""

from .core import errors, types  # noqa: F401
from .core.matrix import Matrix
from .core.vector import Vector
from .data import Labeled, Unlabeled
from .estimators import (
    DummyClassifier,
    DummyRegressor,
    MLPRegressor,
    MultilayerPerceptron,
    register_estimator,
)
from .experiments import build_search, run_search
from .nn import Dropout
from .search import GridSearch
from .validation import HoldOut, KFold

__all__ = [
    "errors",
    "types",
    "Matrix",
    "Vector",
    "Labeled",
    "Unlabeled",
    "DummyClassifier",
    "DummyRegressor",
    "MLPRegressor",
    "MultilayerPerceptron",
    "register_estimator",
    "build_search",
    "run_search",
    "Dropout",
    "GridSearch",
    "HoldOut",
    "KFold",
]
