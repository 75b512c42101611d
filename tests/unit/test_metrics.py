import pytest
from sklearn.metrics import accuracy_score, r2_score, v_measure_score

from tessera.core.errors import DimensionMismatch, InvalidArgument
from tessera.core.types import EstimatorType, Metric
from tessera.validation.metrics import (
    REGISTRY,
    Accuracy,
    F1Score,
    Informedness,
    RSquared,
    VMeasure,
    default_metric,
)

PREDICTIONS = ["wolf", "lamb", "wolf", "lamb", "wolf"]
LABELS = ["lamb", "lamb", "wolf", "wolf", "wolf"]


def test_informedness_score():
    score = Informedness().score(PREDICTIONS, LABELS)
    assert score == pytest.approx(0.16666666670277763, abs=1e-12)
    assert Informedness().range() == (-1.0, 1.0)


def test_informedness_perfect_and_inverted():
    assert Informedness().score(["a", "b"], ["a", "b"]) == pytest.approx(1.0)
    assert Informedness().score(["b", "a"], ["a", "b"]) == pytest.approx(-1.0)


def test_accuracy_matches_sklearn():
    assert Accuracy().score(PREDICTIONS, LABELS) == pytest.approx(
        accuracy_score(LABELS, PREDICTIONS)
    )


def test_f1_is_macro_averaged():
    # wolf: p=r=2/3, lamb: p=r=1/2
    assert F1Score().score(PREDICTIONS, LABELS) == pytest.approx((2 / 3 + 1 / 2) / 2)
    assert F1Score().score([1, 1, 0], [1, 1, 0]) == pytest.approx(1.0)


def test_r_squared():
    labels = [3.0, -0.5, 2.0, 7.0]
    predictions = [2.5, 0.0, 2.0, 8.0]
    assert RSquared().score(predictions, labels) == pytest.approx(
        r2_score(labels, predictions), rel=1e-6
    )
    mean = sum(labels) / len(labels)
    assert RSquared().score([mean] * 4, labels) == pytest.approx(0.0, abs=1e-6)


def test_v_measure_matches_sklearn():
    clusters = [0, 0, 1, 1, 2, 2, 2]
    classes = ["x", "x", "x", "y", "y", "z", "z"]
    assert VMeasure().score(clusters, classes) == pytest.approx(
        v_measure_score(classes, clusters)
    )
    assert VMeasure().score([5, 5, 9, 9], ["a", "a", "b", "b"]) == pytest.approx(1.0)
    assert VMeasure().score([0, 0, 0, 0], ["a", "a", "b", "b"]) == pytest.approx(0.0)


@pytest.mark.parametrize("metric", [Accuracy(), F1Score(), Informedness(), RSquared(), VMeasure()])
def test_length_mismatch_and_empty_input(metric):
    assert isinstance(metric, Metric)
    with pytest.raises(DimensionMismatch):
        metric.score([1, 2], [1])
    assert metric.score([], []) == 0.0


def test_compatibility_is_expressed_in_estimator_types():
    assert EstimatorType.CLASSIFIER in F1Score().compatibility()
    assert EstimatorType.REGRESSOR not in Accuracy().compatibility()
    assert RSquared().compatibility() == {EstimatorType.REGRESSOR}
    assert VMeasure().compatibility() == {EstimatorType.CLUSTERER}


def test_default_metric_by_estimator_type():
    assert isinstance(default_metric(EstimatorType.CLASSIFIER), F1Score)
    assert isinstance(default_metric(EstimatorType.REGRESSOR), RSquared)
    assert isinstance(default_metric(EstimatorType.CLUSTERER), VMeasure)
    assert isinstance(default_metric(EstimatorType.ANOMALY_DETECTOR), F1Score)
    assert isinstance(default_metric(EstimatorType.OTHER), Accuracy)


def test_metric_registry():
    assert list(REGISTRY.names()) == ["accuracy", "f1", "informedness", "r2", "v_measure"]
    assert isinstance(REGISTRY.get("informedness"), Informedness)
    assert isinstance(
        REGISTRY.resolve("auto", estimator_type=EstimatorType.REGRESSOR), RSquared
    )
    with pytest.raises(InvalidArgument, match="Unknown metric"):
        REGISTRY.get("auc")
