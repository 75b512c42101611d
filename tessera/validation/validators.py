"""Validators estimating generalisation performance on held-out data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable

import numpy as np

from ..core.errors import InvalidArgument, RequiresLabeledData
from ..core.types import Estimator, Metric, Validator
from ..data.datasets import Labeled


def _require_labeled(dataset: Any) -> Labeled:
    if not isinstance(dataset, Labeled):
        raise RequiresLabeledData(
            f"Validation requires a Labeled dataset, {type(dataset).__name__} given."
        )
    return dataset


def _score(estimator: Estimator, training: Labeled, testing: Labeled, metric: Metric) -> float:
    estimator.train(training)
    predictions = estimator.predict(testing.unlabeled())
    return float(metric.score(list(predictions), list(testing.labels)))


@dataclass
class HoldOut:
    """Train on one part of the dataset and score on the remaining ``ratio``."""

    ratio: float = 0.2
    seed: int | None = None

    def __post_init__(self) -> None:
        if not 0.0 < self.ratio < 1.0:
            raise InvalidArgument(f"Holdout ratio must be between 0 and 1, {self.ratio} given.")

    def test(self, estimator: Estimator, dataset: Any, metric: Metric) -> float:
        dataset = _require_labeled(dataset)
        if self.seed is not None:
            dataset = dataset.randomize(self.seed)
        training, testing = dataset.split(1.0 - self.ratio)
        return _score(estimator, training, testing, metric)


@dataclass
class KFold:
    """Average score over ``k`` train/test rotations of the folds."""

    k: int = 5
    stratify: bool = False
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.k < 2:
            raise InvalidArgument(f"K must be greater than 1, {self.k} given.")

    def test(self, estimator: Estimator, dataset: Any, metric: Metric) -> float:
        dataset = _require_labeled(dataset)
        if self.seed is not None:
            dataset = dataset.randomize(self.seed)
        folds = dataset.stratified_fold(self.k) if self.stratify else dataset.fold(self.k)
        scores = []
        for i, testing in enumerate(folds):
            training = Labeled.stack([fold for j, fold in enumerate(folds) if j != i])
            scores.append(_score(estimator, training, testing, metric))
        return float(np.mean(scores))


_VALIDATORS: Dict[str, Callable[..., Validator]] = {
    "holdout": HoldOut,
    "kfold": KFold,
}


def get_validator(name: str, **options: Any) -> Validator:
    if name not in _VALIDATORS:
        available = ", ".join(sorted(_VALIDATORS))
        raise InvalidArgument(f"Unknown validator {name!r}. Available validators: {available}")
    return _VALIDATORS[name](**options)


def available_validators() -> Iterable[str]:
    return sorted(_VALIDATORS)


__all__ = ["HoldOut", "KFold", "get_validator", "available_validators"]
