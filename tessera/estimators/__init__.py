"""Estimators and the registry describing their constructor parameters."""

from .dummy import DummyClassifier, DummyRegressor
from .mlp import MLPRegressor, MultilayerPerceptron
from .registry import EstimatorSpec, available_estimators, get_estimator, register_estimator

__all__ = [
    "DummyClassifier",
    "DummyRegressor",
    "MLPRegressor",
    "MultilayerPerceptron",
    "EstimatorSpec",
    "available_estimators",
    "get_estimator",
    "register_estimator",
]
