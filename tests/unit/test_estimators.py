import numpy as np
import pytest

from tessera.core.errors import InvalidArgument, NotTrained, RequiresLabeledData
from tessera.core.types import DataType, Estimator, EstimatorType
from tessera.data import Labeled, Unlabeled
from tessera.estimators import (
    DummyClassifier,
    DummyRegressor,
    MLPRegressor,
    MultilayerPerceptron,
)
from tessera.estimators.registry import (
    EstimatorSpec,
    available_estimators,
    get_estimator,
    register_estimator,
)
from tessera.search import GridSearch
from tessera.validation import HoldOut
from tessera.validation.metrics import Accuracy, RSquared


@pytest.fixture
def blobs():
    rng = np.random.default_rng(0)
    left = rng.normal(-2.0, 0.5, size=(40, 2))
    right = rng.normal(2.0, 0.5, size=(40, 2))
    return Labeled(np.vstack([left, right]), ["left"] * 40 + ["right"] * 40)


def test_builtin_estimators_are_registered():
    names = set(available_estimators())
    assert {"dummy_classifier", "dummy_regressor", "mlp", "mlp_regressor"} <= names
    spec = get_estimator("mlp")
    assert spec.factory is MultilayerPerceptron
    assert spec.params == ("hidden", "ratio", "rate", "epochs", "batch_size", "seed")
    assert spec.estimator_type is EstimatorType.CLASSIFIER
    assert get_estimator(MLPRegressor).name == "mlp_regressor"
    assert get_estimator(spec) is spec


def test_unknown_estimators_are_rejected():
    with pytest.raises(InvalidArgument, match="Unknown estimator"):
        get_estimator("svm")

    class Unregistered:
        pass

    with pytest.raises(InvalidArgument, match="register_estimator"):
        get_estimator(Unregistered)


def test_spec_requires_a_learner():
    class NotALearner:
        def train(self, dataset):
            pass

    with pytest.raises(InvalidArgument, match="must be a learner"):
        EstimatorSpec("broken", NotALearner, ("a",))
    with pytest.raises(InvalidArgument, match="Duplicate"):
        EstimatorSpec("dupes", DummyClassifier, ("seed", "seed"))


def test_register_estimator_decorator():
    @register_estimator("constant_test", params=("value",), type=EstimatorType.REGRESSOR)
    class Constant:
        def __init__(self, value=0.0):
            self.value = value

        def type(self):
            return EstimatorType.REGRESSOR

        def compatibility(self):
            return {DataType.CONTINUOUS}

        def trained(self):
            return True

        def train(self, dataset):
            pass

        def predict(self, dataset):
            return [self.value] * len(dataset)

    spec = get_estimator("constant_test")
    assert spec.build(value=3.0).predict(Unlabeled([[1.0], [2.0]])) == [3.0, 3.0]


def test_dummy_classifier_strategies():
    data = Labeled(np.zeros((6, 1)), ["a", "a", "a", "a", "b", "c"])
    most = DummyClassifier()
    assert isinstance(most, Estimator)
    assert not most.trained()
    with pytest.raises(NotTrained):
        most.predict(data.unlabeled())
    most.train(data)
    assert most.predict(data.unlabeled()) == ["a"] * 6

    first, second = DummyClassifier("prior", seed=3), DummyClassifier("prior", seed=3)
    first.train(data)
    second.train(data)
    guesses = first.predict(Unlabeled(np.zeros((50, 1))))
    assert guesses == second.predict(Unlabeled(np.zeros((50, 1))))
    assert set(guesses) <= {"a", "b", "c"}

    with pytest.raises(InvalidArgument):
        DummyClassifier("uniform")
    with pytest.raises(RequiresLabeledData):
        DummyClassifier().train(data.unlabeled())


def test_dummy_regressor_strategies():
    data = Labeled(np.zeros((4, 1)), [1.0, 2.0, 3.0, 10.0])
    mean, median = DummyRegressor("mean"), DummyRegressor("median")
    mean.train(data)
    median.train(data)
    assert mean.predict(data.unlabeled()) == [4.0] * 4
    assert median.predict(data.unlabeled()) == [2.5] * 4
    assert mean.type() is EstimatorType.REGRESSOR


def test_mlp_classifier_separates_blobs(blobs):
    mlp = MultilayerPerceptron(hidden=(8,), ratio=0.1, rate=0.1, epochs=40, batch_size=16, seed=0)
    assert not mlp.trained()
    with pytest.raises(NotTrained):
        mlp.predict(blobs.unlabeled())

    mlp.train(blobs)

    assert mlp.trained()
    predictions = mlp.predict(blobs.unlabeled())
    assert Accuracy().score(predictions, list(blobs.labels)) > 0.95
    losses = mlp.losses()
    assert len(losses) == 40 and losses[-1] < losses[0]
    for row in mlp.proba(blobs.take([0, 79]).unlabeled()):
        assert set(row) == {"left", "right"}
        assert sum(row.values()) == pytest.approx(1.0)


def test_mlp_training_is_reproducible(blobs):
    a = MultilayerPerceptron(hidden=4, ratio=0.2, epochs=5, seed=11)
    b = MultilayerPerceptron(hidden=4, ratio=0.2, epochs=5, seed=11)
    a.train(blobs)
    b.train(blobs)
    assert a.losses() == b.losses()
    assert a.params()["hidden"] == (4,)


def test_mlp_regressor_fits_a_linear_target():
    rng = np.random.default_rng(1)
    x = rng.standard_normal((120, 2))
    y = 2.0 * x[:, 0] - x[:, 1]
    data = Labeled(x, y)
    reg = MLPRegressor(hidden=(16,), rate=0.05, epochs=150, batch_size=16, seed=0)
    reg.train(data)
    assert reg.type() is EstimatorType.REGRESSOR
    assert RSquared().score(reg.predict(data.unlabeled()), list(data.labels)) > 0.8


@pytest.mark.parametrize(
    "kwargs",
    [{"hidden": (0,)}, {"ratio": 1.0}, {"epochs": 0}, {"batch_size": 0}],
)
def test_mlp_argument_validation(kwargs):
    with pytest.raises(InvalidArgument):
        MultilayerPerceptron(**kwargs)


def test_mlp_accepts_numpy_integer_widths():
    mlp = MultilayerPerceptron(hidden=np.int64(4), epochs=1)
    assert mlp.params()["hidden"] == (4,)
    assert MultilayerPerceptron(hidden=np.array([3, 2]), epochs=1).hidden == (3, 2)


def test_search_over_ndarray_widths_exposes_the_winner_losses(blobs):
    search = GridSearch(
        MultilayerPerceptron,
        [np.array([4, 8]), [0.0], [0.1], [3]],
        metric=Accuracy(),
        validator=HoldOut(ratio=0.25, seed=0),
    )
    search.train(blobs)

    assert [combination[0] for combination in search.combinations()] == [4, 8]
    assert len(search.losses()) == 3
    assert search.losses() == search.estimator().losses()
