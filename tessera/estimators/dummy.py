"""Baseline estimators that ignore the features."""

from __future__ import annotations

from collections import Counter
from typing import Any, List

import numpy as np

from ..core.errors import InvalidArgument, NotTrained, RequiresLabeledData
from ..core.types import DataType, EstimatorType
from ..data.datasets import Dataset, Labeled
from .registry import register_estimator

_CATEGORICAL = (DataType.CONTINUOUS, DataType.CATEGORICAL)


@register_estimator(
    "dummy_classifier", params=("strategy", "seed"), type=EstimatorType.CLASSIFIER,
    compatibility=_CATEGORICAL,
)
class DummyClassifier:
    """Guess the most frequent class, or sample from the class prior."""

    STRATEGIES = ("most_frequent", "prior")

    def __init__(self, strategy: str = "most_frequent", seed: int | None = None) -> None:
        if strategy not in self.STRATEGIES:
            raise InvalidArgument(
                f"Unknown strategy {strategy!r}, choose one of {', '.join(self.STRATEGIES)}."
            )
        self.strategy = strategy
        self.seed = seed
        self._counts: Counter | None = None

    def type(self) -> EstimatorType:
        return EstimatorType.CLASSIFIER

    def compatibility(self) -> set[DataType]:
        return set(_CATEGORICAL)

    def trained(self) -> bool:
        return self._counts is not None

    def train(self, dataset: Dataset) -> None:
        if not isinstance(dataset, Labeled):
            raise RequiresLabeledData("DummyClassifier requires a Labeled training set.")
        self._counts = Counter(dataset.labels)

    def predict(self, dataset: Dataset) -> List[Any]:
        if self._counts is None:
            raise NotTrained("DummyClassifier must be trained before making predictions.")
        n = dataset.num_rows()
        if self.strategy == "most_frequent":
            return [self._counts.most_common(1)[0][0]] * n
        rng = np.random.default_rng(self.seed)
        classes = list(self._counts)
        weights = np.array([self._counts[c] for c in classes], dtype=np.float64)
        picks = rng.choice(len(classes), size=n, p=weights / weights.sum())
        return [classes[i] for i in picks]


@register_estimator(
    "dummy_regressor", params=("strategy",), type=EstimatorType.REGRESSOR,
    compatibility=_CATEGORICAL,
)
class DummyRegressor:
    """Predict a constant statistic of the training labels."""

    STRATEGIES = ("mean", "median")

    def __init__(self, strategy: str = "mean") -> None:
        if strategy not in self.STRATEGIES:
            raise InvalidArgument(
                f"Unknown strategy {strategy!r}, choose one of {', '.join(self.STRATEGIES)}."
            )
        self.strategy = strategy
        self._value: float | None = None

    def type(self) -> EstimatorType:
        return EstimatorType.REGRESSOR

    def compatibility(self) -> set[DataType]:
        return set(_CATEGORICAL)

    def trained(self) -> bool:
        return self._value is not None

    def train(self, dataset: Dataset) -> None:
        if not isinstance(dataset, Labeled):
            raise RequiresLabeledData("DummyRegressor requires a Labeled training set.")
        labels = np.asarray(dataset.labels, dtype=np.float64)
        self._value = float(np.mean(labels) if self.strategy == "mean" else np.median(labels))

    def predict(self, dataset: Dataset) -> List[float]:
        if self._value is None:
            raise NotTrained("DummyRegressor must be trained before making predictions.")
        return [self._value] * dataset.num_rows()


__all__ = ["DummyClassifier", "DummyRegressor"]
