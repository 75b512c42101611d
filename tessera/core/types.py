"""Core typing contracts for tessera."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Protocol, Sequence, Tuple, runtime_checkable

import numpy as np

Array = np.ndarray


class EstimatorType(str, Enum):
    """The kind of task an estimator solves."""

    CLASSIFIER = "classifier"
    REGRESSOR = "regressor"
    CLUSTERER = "clusterer"
    ANOMALY_DETECTOR = "anomaly_detector"
    OTHER = "other"


class DataType(str, Enum):
    """Feature data types an estimator is able to consume."""

    CONTINUOUS = "continuous"
    CATEGORICAL = "categorical"


@runtime_checkable
class Estimator(Protocol):
    """Capability set shared by every trainable estimator."""

    def type(self) -> EstimatorType:
        ...

    def compatibility(self) -> set[DataType]:
        ...

    def trained(self) -> bool:
        ...

    def train(self, dataset: Any) -> None:
        ...

    def predict(self, dataset: Any) -> List[Any]:
        ...


@runtime_checkable
class Metric(Protocol):
    """Validation metric contract."""

    def range(self) -> Tuple[float, float]:
        ...

    def compatibility(self) -> set[EstimatorType]:
        ...

    def score(self, predictions: Sequence[Any], labels: Sequence[Any]) -> float:
        ...


@runtime_checkable
class Validator(Protocol):
    """Estimates the generalisation performance of an estimator."""

    def test(self, estimator: Estimator, dataset: Any, metric: Metric) -> float:
        ...


@dataclass(frozen=True)
class Best:
    """Winning combination of a hyper-parameter search."""

    score: float
    params: Tuple[Any, ...]

    def __getitem__(self, key: str) -> Any:
        return getattr(self, key)


@dataclass
class TrialRecord:
    """A single scored combination emitted to search callbacks."""

    index: int
    params: Dict[str, Any]
    score: float
    metadata: Dict[str, object] = field(default_factory=dict)
