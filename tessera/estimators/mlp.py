"""Multilayer perceptron estimators built on the feed-forward network."""

from __future__ import annotations

import numbers
from typing import Any, Dict, List, Sequence

import numpy as np
from sklearn.preprocessing import LabelEncoder

from ..core.errors import InvalidArgument, NotTrained, RequiresLabeledData
from ..core.types import Array, DataType, EstimatorType
from ..data.datasets import Dataset, Labeled
from ..nn.costs import CrossEntropy, LeastSquares
from ..nn.layers import Activation, Dense, Dropout, Hidden
from ..nn.network import FeedForward
from ..nn.optimizers import Stochastic
from .registry import register_estimator

_PARAMS = ("hidden", "ratio", "rate", "epochs", "batch_size", "seed")


class _Perceptron:
    """Shared training loop for the classifier and the regressor."""

    def __init__(
        self,
        hidden: Sequence[int] = (16,),
        ratio: float = 0.0,
        rate: float = 0.01,
        epochs: int = 100,
        batch_size: int = 32,
        seed: int | None = None,
    ) -> None:
        hidden = (hidden,) if isinstance(hidden, numbers.Integral) else tuple(hidden)
        if any(int(h) < 1 for h in hidden):
            raise InvalidArgument(f"Hidden layer widths must be positive, {hidden} given.")
        if not 0.0 <= ratio < 1.0:
            raise InvalidArgument(f"Dropout ratio must be in [0, 1), {ratio} given.")
        if epochs < 1:
            raise InvalidArgument(f"Number of epochs must be positive, {epochs} given.")
        if batch_size < 1:
            raise InvalidArgument(f"Batch size must be positive, {batch_size} given.")
        self.hidden = tuple(int(h) for h in hidden)
        self.ratio = float(ratio)
        self.rate = float(rate)
        self.epochs = int(epochs)
        self.batch_size = int(batch_size)
        self.seed = seed
        self.network: FeedForward | None = None
        self._losses: List[float] = []

    def compatibility(self) -> set[DataType]:
        return {DataType.CONTINUOUS}

    def trained(self) -> bool:
        return self.network is not None

    def losses(self) -> List[float]:
        """Mean training loss of every epoch of the last ``train`` call."""

        return list(self._losses)

    def params(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in _PARAMS}

    # ------------------------------------------------------------------
    # Internal helpers

    def _build(self, outputs: int, output: str, cost) -> FeedForward:
        rng = np.random.default_rng(self.seed)
        layers: List[Hidden] = []
        for width in self.hidden:
            layers.append(Dense(int(width), seed=int(rng.integers(2**31))))
            layers.append(Activation("relu"))
            if self.ratio > 0.0:
                layers.append(Dropout(self.ratio, rng=rng))
        layers.append(Dense(outputs, seed=int(rng.integers(2**31))))
        return FeedForward(layers, cost, Stochastic(self.rate), output=output)

    def _fit(self, network: FeedForward, samples: Array, targets: Array) -> None:
        network.initialize(samples.shape[1])
        rng = np.random.default_rng(self.seed)
        self._losses = []
        n = samples.shape[0]
        for _ in range(self.epochs):
            order = rng.permutation(n)
            losses = []
            for start in range(0, n, self.batch_size):
                idx = order[start : start + self.batch_size]
                losses.append(network.roundtrip(samples[idx], targets[idx]))
            self._losses.append(float(np.mean(losses)))
        self.network = network

    def _samples(self, dataset: Dataset) -> Array:
        return np.asarray(dataset.samples, dtype=np.float64)

    def _infer(self, dataset: Dataset) -> Array:
        if self.network is None:
            raise NotTrained(f"{type(self).__name__} must be trained before making predictions.")
        return self.network.infer(self._samples(dataset))

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in self.params().items())
        return f"{type(self).__name__}({args})"


@register_estimator(
    "mlp", params=_PARAMS, type=EstimatorType.CLASSIFIER, compatibility=(DataType.CONTINUOUS,)
)
class MultilayerPerceptron(_Perceptron):
    """Feed-forward neural network classifier with optional dropout."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._encoder: LabelEncoder | None = None

    def type(self) -> EstimatorType:
        return EstimatorType.CLASSIFIER

    def train(self, dataset: Dataset) -> None:
        if not isinstance(dataset, Labeled):
            raise RequiresLabeledData("MultilayerPerceptron requires a Labeled training set.")
        encoder = LabelEncoder()
        encoded = encoder.fit_transform(list(dataset.labels))
        classes = len(encoder.classes_)
        targets = np.eye(classes)[encoded]
        network = self._build(classes, "softmax", CrossEntropy())
        self._fit(network, self._samples(dataset), targets)
        self._encoder = encoder

    def proba(self, dataset: Dataset) -> List[Dict[Any, float]]:
        probabilities = self._infer(dataset)
        classes = self._encoder.classes_.tolist()
        return [dict(zip(classes, map(float, row))) for row in probabilities]

    def predict(self, dataset: Dataset) -> List[Any]:
        probabilities = self._infer(dataset)
        return self._encoder.inverse_transform(probabilities.argmax(axis=1)).tolist()


@register_estimator(
    "mlp_regressor", params=_PARAMS, type=EstimatorType.REGRESSOR, compatibility=(DataType.CONTINUOUS,)
)
class MLPRegressor(_Perceptron):
    """Feed-forward neural network regressor with optional dropout."""

    def type(self) -> EstimatorType:
        return EstimatorType.REGRESSOR

    def train(self, dataset: Dataset) -> None:
        if not isinstance(dataset, Labeled):
            raise RequiresLabeledData("MLPRegressor requires a Labeled training set.")
        targets = np.asarray(dataset.labels, dtype=np.float64).reshape(-1, 1)
        network = self._build(1, "identity", LeastSquares())
        self._fit(network, self._samples(dataset), targets)

    def predict(self, dataset: Dataset) -> List[float]:
        return self._infer(dataset)[:, 0].tolist()


__all__ = ["MultilayerPerceptron", "MLPRegressor"]
