"""Exhaustive hyper-parameter search over a grid of constructor arguments."""

from __future__ import annotations

import itertools
import logging
import math
import numbers
from typing import Any, Dict, List, Mapping, Sequence, Tuple

import numpy as np

from ..core.errors import (
    IncompatibleMetric,
    InvalidArgument,
    NotTrained,
    RequiresLabeledData,
    UnsupportedOperation,
)
from ..core.types import Best, DataType, Estimator, EstimatorType, Metric, TrialRecord, Validator
from ..data.datasets import Dataset, Labeled
from ..estimators.registry import EstimatorSpec, get_estimator
from ..validation.metrics import default_metric
from ..validation.validators import KFold

logger = logging.getLogger(__name__)


class _Untrained:
    """Stand-in estimator held by a search before its first ``train`` call."""

    def __init__(self, spec: EstimatorSpec) -> None:
        self.spec = spec

    def type(self) -> EstimatorType:
        return self.spec.estimator_type

    def compatibility(self) -> set[DataType]:
        return set(self.spec.compatibility)

    def trained(self) -> bool:
        return False

    def train(self, dataset: Dataset) -> None:
        raise NotTrained(f"{self.spec.name} has not been selected by a search yet.")

    def predict(self, dataset: Dataset) -> List[Any]:
        raise NotTrained("GridSearch must be trained before making predictions.")

    def __repr__(self) -> str:
        return f"<untrained {self.spec.name}>"


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple, range, np.ndarray))


def _unique(options: List[Any]) -> List[Any]:
    unique: List[Any] = []
    for option in options:
        if not any(option == seen for seen in unique):
            unique.append(option)
    return unique


def _normalise(name: str, options: Any) -> List[Any]:
    if not _is_sequence(options):
        return [options]
    options = options.tolist() if isinstance(options, np.ndarray) else list(options)
    if not options:
        raise InvalidArgument(f"Parameter {name!r} has no candidate values.")
    first = options[0]
    if isinstance(first, (str, numbers.Number)) and not isinstance(first, bool):
        options = _unique(options)
    return options


def stringify(params: Mapping[str, Any]) -> str:
    return "[" + ", ".join(f"{key}={value!r}" for key, value in params.items()) + "]"


class GridSearch:
    """Select the best hyper-parameters for an estimator by exhaustive search.

    One estimator is built per combination of candidate values, scored by the
    validator using the metric, and the best one becomes the estimator this
    search delegates to. From the outside the search trains and predicts like
    the estimator it wraps.

    Parameters
    ----------
    base:
        Registered estimator name, registered estimator class, or an explicit
        :class:`~tessera.estimators.registry.EstimatorSpec`.
    grid:
        Candidate values per constructor parameter. A sequence maps onto the
        leading constructor parameters by position; a mapping is keyed by
        parameter name (or position). A scalar is a single candidate.
    metric:
        Validation metric. Chosen from the estimator type when omitted.
    validator:
        Defaults to 5-fold cross validation.
    retrain:
        Train the winning estimator on the full dataset after the search.
    callbacks:
        Objects with ``on_trial(record)`` and/or ``on_complete(best)`` hooks.
    """

    def __init__(
        self,
        base: Any,
        grid: Sequence[Any] | Mapping[Any, Any],
        metric: Metric | None = None,
        validator: Validator | None = None,
        retrain: bool = True,
        callbacks: Sequence[object] | None = None,
    ) -> None:
        spec = get_estimator(base)
        args, options = self._resolve_grid(spec, grid)

        if metric is not None:
            if not {spec.estimator_type} & set(metric.compatibility()):
                raise IncompatibleMetric(
                    f"{type(metric).__name__} is not compatible with"
                    f" {spec.estimator_type.value} estimators such as {spec.name}."
                )
        else:
            metric = default_metric(spec.estimator_type)

        self._spec = spec
        self._args = args
        self._combinations: List[Tuple[Any, ...]] = list(itertools.product(*options))
        self._metric = metric
        self._validator = validator if validator is not None else KFold(5)
        self._retrain = bool(retrain)
        self._callbacks = list(callbacks or [])
        self._scores: List[float] = []
        self._best: Best | None = None
        self._estimator: Estimator = _Untrained(spec)

    @staticmethod
    def _resolve_grid(
        spec: EstimatorSpec, grid: Sequence[Any] | Mapping[Any, Any]
    ) -> Tuple[Tuple[str, ...], List[List[Any]]]:
        if len(grid) > len(spec.params):
            raise InvalidArgument(
                f"Too many arguments supplied for {spec.name}, {len(grid)} given"
                f" but only {len(spec.params)} accepted."
            )
        if isinstance(grid, Mapping):
            args: List[str] = []
            for key in grid:
                if isinstance(key, int) and not isinstance(key, bool):
                    if not 0 <= key < len(spec.params):
                        raise InvalidArgument(
                            f"Parameter position {key} out of range for {spec.name}."
                        )
                    args.append(spec.params[key])
                elif key in spec.params:
                    args.append(key)
                else:
                    raise InvalidArgument(
                        f"Unknown parameter {key!r} for {spec.name},"
                        f" expected one of {', '.join(spec.params)}."
                    )
            if len(set(args)) != len(args):
                raise InvalidArgument(f"Parameter given more than once in grid: {args}.")
            values = list(grid.values())
        else:
            args = list(spec.params[: len(grid)])
            values = list(grid)
        options = [_normalise(name, value) for name, value in zip(args, values)]
        return tuple(args), options

    # ------------------------------------------------------------------
    # Estimator capabilities

    def type(self) -> EstimatorType:
        return self._estimator.type()

    def compatibility(self) -> set[DataType]:
        return self._estimator.compatibility()

    def trained(self) -> bool:
        return self._estimator.trained()

    def predict(self, dataset: Dataset) -> List[Any]:
        return self._estimator.predict(dataset)

    def proba(self, dataset: Dataset) -> List[Dict[Any, float]]:
        proba = getattr(self._estimator, "proba", None)
        if proba is None:
            raise UnsupportedOperation(
                f"{type(self._estimator).__name__} does not estimate probabilities."
            )
        return proba(dataset)

    # ------------------------------------------------------------------
    # Search results

    def args(self) -> Tuple[str, ...]:
        """Constructor parameter names searched over, in grid order."""

        return self._args

    def combinations(self) -> List[Tuple[Any, ...]]:
        return list(self._combinations)

    def scores(self) -> List[float]:
        return list(self._scores)

    def best(self) -> Best | None:
        return self._best

    def results(self) -> List[Tuple[Dict[str, Any], float]]:
        return [
            (dict(zip(self._args, params)), score)
            for params, score in zip(self._combinations, self._scores)
        ]

    def estimator(self) -> Estimator:
        return self._estimator

    def metric(self) -> Metric:
        return self._metric

    def validator(self) -> Validator:
        return self._validator

    # ------------------------------------------------------------------
    # Training

    def train(self, dataset: Dataset) -> None:
        """Score every combination and keep the best estimator."""

        if not isinstance(dataset, Labeled):
            raise RequiresLabeledData(
                f"GridSearch requires a Labeled training set, {type(dataset).__name__} given."
            )

        logger.info("Searching %d combinations of hyper-parameters", len(self._combinations))

        self._scores = []
        self._best = None

        best_score = -math.inf
        best_params: Tuple[Any, ...] | None = None
        best_estimator: Estimator | None = None

        for index, params in enumerate(self._combinations):
            constructor = dict(zip(self._args, params))
            estimator = self._spec.build(**constructor)

            logger.info("Testing parameters %s", stringify(constructor))

            score = float(self._validator.test(estimator, dataset, self._metric))

            if best_estimator is None or score > best_score or (
                math.isnan(best_score) and not math.isnan(score)
            ):
                best_score = score
                best_params = params
                best_estimator = estimator

            self._scores.append(score)

            logger.info("Test complete, score=%s", score)
            self._emit("on_trial", TrialRecord(index=index, params=constructor, score=score))

        self._best = Best(score=best_score, params=best_params)

        logger.info("Best combination: %s", stringify(dict(zip(self._args, best_params))))
        logger.info("Best score=%s", best_score)

        if self._retrain:
            logger.info("Retraining base estimator on full dataset")
            best_estimator.train(dataset)

        self._estimator = best_estimator
        self._emit("on_complete", self._best)

        logger.info("Search complete")

    def _emit(self, hook: str, payload: Any) -> None:
        for callback in self._callbacks:
            if hasattr(callback, hook):
                getattr(callback, hook)(payload)
            elif hook == "on_trial" and callable(callback):
                callback(payload)

    # ------------------------------------------------------------------
    # Forwarding

    def __getattr__(self, name: str) -> Any:
        estimator = self.__dict__.get("_estimator")
        if estimator is None or name.startswith("_"):
            raise UnsupportedOperation(f"GridSearch has no attribute {name!r}.")
        try:
            return getattr(estimator, name)
        except AttributeError:
            raise UnsupportedOperation(
                f"Neither GridSearch nor {type(estimator).__name__} implements {name!r}."
            ) from None

    def __repr__(self) -> str:
        return (
            f"GridSearch(base={self._spec.name!r}, args={self._args!r},"
            f" combinations={len(self._combinations)}, retrain={self._retrain})"
        )


__all__ = ["GridSearch", "stringify"]
