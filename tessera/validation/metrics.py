"""Validation metrics used to score estimators."""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Sequence, Tuple

import numpy as np

from ..core.errors import DimensionMismatch, InvalidArgument
from ..core.types import EstimatorType, Metric

EPSILON = 1e-10


def _check(predictions: Sequence[Any], labels: Sequence[Any]) -> None:
    if len(predictions) != len(labels):
        raise DimensionMismatch(
            "Number of predictions must equal the number of labels,"
            f" {len(predictions)} predictions for {len(labels)} labels given."
        )


def _confusion(
    predictions: Sequence[Any], labels: Sequence[Any]
) -> Tuple[List[Any], Dict[Any, Tuple[int, int, int, int]]]:
    """Return the classes and a ``(tp, fp, fn, tn)`` tuple per class."""

    classes = list(dict.fromkeys([*predictions, *labels]))
    counts: Dict[Any, Tuple[int, int, int, int]] = {}
    n = len(labels)
    for cls in classes:
        tp = sum(1 for p, t in zip(predictions, labels) if p == cls and t == cls)
        fp = sum(1 for p, t in zip(predictions, labels) if p == cls and t != cls)
        fn = sum(1 for p, t in zip(predictions, labels) if p != cls and t == cls)
        counts[cls] = (tp, fp, fn, n - tp - fp - fn)
    return classes, counts


class Accuracy:
    """Fraction of predictions that match their label."""

    def range(self) -> Tuple[float, float]:
        return 0.0, 1.0

    def compatibility(self) -> set[EstimatorType]:
        return {EstimatorType.CLASSIFIER, EstimatorType.ANOMALY_DETECTOR}

    def score(self, predictions: Sequence[Any], labels: Sequence[Any]) -> float:
        _check(predictions, labels)
        if len(labels) == 0:
            return 0.0
        return sum(1 for p, t in zip(predictions, labels) if p == t) / len(labels)


class F1Score:
    """Macro-averaged harmonic mean of precision and recall."""

    def range(self) -> Tuple[float, float]:
        return 0.0, 1.0

    def compatibility(self) -> set[EstimatorType]:
        return {EstimatorType.CLASSIFIER, EstimatorType.ANOMALY_DETECTOR}

    def score(self, predictions: Sequence[Any], labels: Sequence[Any]) -> float:
        _check(predictions, labels)
        if len(labels) == 0:
            return 0.0
        classes, counts = _confusion(predictions, labels)
        total = 0.0
        for cls in classes:
            tp, fp, fn, _ = counts[cls]
            precision = (tp + EPSILON) / (tp + fp + EPSILON)
            recall = (tp + EPSILON) / (tp + fn + EPSILON)
            total += 2.0 * precision * recall / (precision + recall)
        return total / len(classes)


class Informedness:
    """Youden's J statistic, sensitivity plus specificity minus one."""

    def range(self) -> Tuple[float, float]:
        return -1.0, 1.0

    def compatibility(self) -> set[EstimatorType]:
        return {EstimatorType.CLASSIFIER, EstimatorType.ANOMALY_DETECTOR}

    def score(self, predictions: Sequence[Any], labels: Sequence[Any]) -> float:
        _check(predictions, labels)
        if len(labels) == 0:
            return 0.0
        classes, counts = _confusion(predictions, labels)
        total = 0.0
        for cls in classes:
            tp, fp, fn, tn = counts[cls]
            total += (tp + EPSILON) / (tp + fn + EPSILON) + (tn + EPSILON) / (tn + fp + EPSILON) - 1.0
        return total / len(classes)


class RSquared:
    """Coefficient of determination."""

    def range(self) -> Tuple[float, float]:
        return float("-inf"), 1.0

    def compatibility(self) -> set[EstimatorType]:
        return {EstimatorType.REGRESSOR}

    def score(self, predictions: Sequence[Any], labels: Sequence[Any]) -> float:
        _check(predictions, labels)
        if len(labels) == 0:
            return 0.0
        preds = np.asarray(predictions, dtype=np.float64)
        targs = np.asarray(labels, dtype=np.float64)
        ss_res = float(np.sum((targs - preds) ** 2))
        ss_tot = float(np.sum((targs - targs.mean()) ** 2))
        return 1.0 - ss_res / (ss_tot + EPSILON)


def _entropy(counts: np.ndarray) -> float:
    total = counts.sum()
    if total == 0:
        return 0.0
    p = counts[counts > 0] / total
    return float(-np.sum(p * np.log(p)))


class VMeasure:
    """Harmonic mean of homogeneity and completeness of a clustering."""

    def range(self) -> Tuple[float, float]:
        return 0.0, 1.0

    def compatibility(self) -> set[EstimatorType]:
        return {EstimatorType.CLUSTERER}

    def score(self, predictions: Sequence[Any], labels: Sequence[Any]) -> float:
        _check(predictions, labels)
        if len(labels) == 0:
            return 0.0
        clusters = list(dict.fromkeys(predictions))
        classes = list(dict.fromkeys(labels))
        table = np.zeros((len(classes), len(clusters)))
        class_index = {c: i for i, c in enumerate(classes)}
        cluster_index = {k: j for j, k in enumerate(clusters)}
        for p, t in zip(predictions, labels):
            table[class_index[t], cluster_index[p]] += 1

        n = table.sum()
        h_c = _entropy(table.sum(axis=1))
        h_k = _entropy(table.sum(axis=0))
        nz = table > 0
        joint = table[nz] / n
        rows = np.broadcast_to(table.sum(axis=1, keepdims=True), table.shape)[nz]
        cols = np.broadcast_to(table.sum(axis=0, keepdims=True), table.shape)[nz]
        h_c_given_k = float(-np.sum(joint * np.log(table[nz] / cols)))
        h_k_given_c = float(-np.sum(joint * np.log(table[nz] / rows)))

        homogeneity = 1.0 if h_c == 0 else 1.0 - h_c_given_k / h_c
        completeness = 1.0 if h_k == 0 else 1.0 - h_k_given_c / h_k
        if homogeneity + completeness == 0:
            return 0.0
        return 2.0 * homogeneity * completeness / (homogeneity + completeness)


class MetricRegistry:
    """Central registry for validation metrics."""

    def __init__(self) -> None:
        self._registry: Dict[str, Callable[[], Metric]] = {}

    def register(self, name: str, factory: Callable[[], Metric]) -> None:
        self._registry[name] = factory

    def get(self, name: str) -> Metric:
        if name not in self._registry:
            available = ", ".join(sorted(self._registry))
            raise InvalidArgument(f"Unknown metric {name!r}. Available metrics: {available}")
        return self._registry[name]()

    def names(self) -> Iterable[str]:
        return sorted(self._registry)

    def resolve(self, name: str, *, estimator_type: EstimatorType) -> Metric:
        if name == "auto":
            return default_metric(estimator_type)
        return self.get(name)


def default_metric(estimator_type: EstimatorType) -> Metric:
    """Return the metric a search uses when none is given."""

    if estimator_type is EstimatorType.CLASSIFIER:
        return F1Score()
    if estimator_type is EstimatorType.REGRESSOR:
        return RSquared()
    if estimator_type is EstimatorType.CLUSTERER:
        return VMeasure()
    if estimator_type is EstimatorType.ANOMALY_DETECTOR:
        return F1Score()
    return Accuracy()


REGISTRY = MetricRegistry()
REGISTRY.register("accuracy", Accuracy)
REGISTRY.register("f1", F1Score)
REGISTRY.register("informedness", Informedness)
REGISTRY.register("r2", RSquared)
REGISTRY.register("v_measure", VMeasure)

__all__ = [
    "Accuracy",
    "F1Score",
    "Informedness",
    "RSquared",
    "VMeasure",
    "MetricRegistry",
    "REGISTRY",
    "default_metric",
]
