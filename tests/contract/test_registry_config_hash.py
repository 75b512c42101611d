import json

import pytest

from tessera.core.errors import InvalidArgument
from tessera.experiments import registry
from tessera.search import GridSearch
from tessera.validation import HoldOut, KFold
from tessera.validation.metrics import Accuracy, RSquared


def test_config_hash_is_stable_under_key_order():
    base = {
        "estimator": "mlp",
        "grid": {"hidden": [[4]], "seed": [11]},
        "validator": {"name": "kfold", "k": 3},
        "retrain": True,
    }
    reordered = {
        "retrain": True,
        "validator": {"k": 3, "name": "kfold"},
        "grid": {"seed": [11], "hidden": [[4]]},
        "estimator": "mlp",
    }
    assert registry.config_hash(base) == registry.config_hash(reordered)
    assert len(registry.config_hash(base)) == 12


def test_config_hash_changes_on_seed():
    search = registry.get_search("mlp_dropout")
    config = search.to_search_config()
    baseline = registry.config_hash(config)

    mutated = search.to_search_config()
    mutated["grid"]["seed"] = [int(mutated["grid"]["seed"][0]) + 1]
    assert registry.config_hash(mutated) != baseline
    assert search.run_id == baseline


def test_defaults_are_merged_into_every_search():
    loaded = registry.load_registry()
    assert loaded["version"] == 1
    searches = loaded["searches"]
    assert set(searches) == {"dummy_baseline", "mlp_dropout", "mlp_regression"}

    regression = searches["mlp_regression"].config
    assert regression["metric"] == "auto"
    assert regression["retrain"] is True
    assert searches["dummy_baseline"].config["metric"] == "accuracy"


def test_unknown_search_raises_key_error():
    with pytest.raises(KeyError, match="not_there"):
        registry.get_search("not_there")


def test_registry_validation(tmp_path):
    schema = tmp_path / "schema.json"
    schema.write_text(json.dumps({"required_keys": ["version", "searches"], "search_required": ["estimator", "grid"]}))

    missing = tmp_path / "missing.json"
    missing.write_text(json.dumps({"version": 1}))
    with pytest.raises(InvalidArgument, match="searches"):
        registry.load_registry(missing, schema)

    no_grid = tmp_path / "no_grid.json"
    no_grid.write_text(json.dumps({"version": 1, "searches": {"x": {"estimator": "mlp"}}}))
    with pytest.raises(InvalidArgument, match="grid"):
        registry.load_registry(no_grid, schema)

    with_defaults = tmp_path / "ok.json"
    with_defaults.write_text(
        json.dumps({"version": 2, "defaults": {"grid": {"seed": [0]}}, "searches": {"x": {"estimator": "mlp"}}})
    )
    assert registry.load_registry(with_defaults, schema)["searches"]["x"].version == 2


def test_build_search_from_registry_entries():
    dummy = registry.build_search(registry.get_search("dummy_baseline").to_search_config())
    assert isinstance(dummy, GridSearch)
    assert dummy.args() == ("strategy", "seed")
    assert isinstance(dummy.metric(), Accuracy)
    assert dummy.validator() == HoldOut(ratio=0.25, seed=0)

    regression = registry.build_search(registry.get_search("mlp_regression").to_search_config())
    assert isinstance(regression.metric(), RSquared)
    assert len(regression.combinations()) == 4

    stratified = registry.build_search(registry.get_search("mlp_dropout").to_search_config())
    assert stratified.validator() == KFold(k=3, stratify=True)
