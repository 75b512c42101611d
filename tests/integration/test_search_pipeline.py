import csv
import json
from pathlib import Path

import numpy as np
import pytest

from tessera.data import Labeled
from tessera.experiments import get_search, run_search
from tessera.reporting import write_summary


@pytest.fixture
def classes():
    rng = np.random.default_rng(5)
    samples = np.vstack([rng.normal(-1.5, 0.4, (24, 2)), rng.normal(1.5, 0.4, (24, 2))])
    return Labeled(samples, ["neg"] * 24 + ["pos"] * 24).randomize(0)


def _read_jsonl(path):
    return [json.loads(line) for line in Path(path).read_text().splitlines() if line]


def test_search_pipeline_produces_artifacts(tmp_path, classes):
    config = get_search("dummy_baseline").to_search_config()
    result = run_search(config, classes, run_dir=tmp_path / "run")

    records = _read_jsonl(result.trials_path)
    trials = [r for r in records if r["event"] == "trial"]
    assert [t["index"] for t in trials] == [0, 1]
    assert trials[0]["params"] == {"strategy": "prior", "seed": 0}
    assert all(r["run"] == result.run_id for r in records)
    assert "sha" in records[0]
    assert records[-1]["event"] == "best"

    with open(result.csv_path, newline="") as handle:
        rows = list(csv.DictReader(handle))
    assert [row["index"] for row in rows] == ["0", "1"]
    assert json.loads(rows[1]["strategy"]) == "most_frequent"

    summary = json.loads(Path(result.summary_path).read_text())
    assert summary["trials"] == 2
    assert summary["best"]["score"] == result.search.best().score
    assert summary["score"]["max"] == max(result.search.scores())


def test_search_pipeline_is_deterministic(tmp_path, classes):
    config = get_search("dummy_baseline").to_search_config()
    first = run_search(config, classes, run_dir=tmp_path / "a")
    second = run_search(config, classes, run_dir=tmp_path / "b")

    assert first.run_id == second.run_id
    assert Path(first.trials_path).read_bytes() == Path(second.trials_path).read_bytes()
    assert Path(first.csv_path).read_bytes() == Path(second.csv_path).read_bytes()
    assert Path(first.summary_path).read_bytes() == Path(second.summary_path).read_bytes()


def test_rerunning_into_the_same_directory_replaces_artifacts(tmp_path, classes):
    config = get_search("dummy_baseline").to_search_config()
    run_search(config, classes, run_dir=tmp_path / "run")
    result = run_search(config, classes, run_dir=tmp_path / "run")

    assert len(_read_jsonl(result.trials_path)) == 3
    with open(result.csv_path, newline="") as handle:
        assert len(list(csv.DictReader(handle))) == 2


def test_default_run_dir_is_keyed_by_config_hash(tmp_path, monkeypatch, classes):
    monkeypatch.chdir(tmp_path)
    config = get_search("dummy_baseline").to_search_config()
    result = run_search(config, classes)
    assert Path(result.trials_path).parent == Path(".artifacts") / result.run_id


def test_mlp_search_selects_a_working_network(tmp_path, classes):
    config = get_search("mlp_dropout").to_search_config()
    config["grid"]["hidden"] = [[8]]
    config["grid"]["rate"] = [0.2]
    config["grid"]["epochs"] = [40]
    result = run_search(config, classes, run_dir=tmp_path / "mlp")

    search = result.search
    assert len(search.scores()) == 2
    assert search.trained()
    predictions = search.predict(classes.unlabeled())
    accuracy = np.mean([p == t for p, t in zip(predictions, classes.labels)])
    assert accuracy > 0.9
    assert search.proba(classes.take([0]).unlabeled())[0].keys() == {"neg", "pos"}


def test_summary_of_missing_log_is_empty(tmp_path):
    out = write_summary(tmp_path / "nothing.jsonl", tmp_path / "summary.json")
    assert json.loads(Path(out).read_text()) == {"trials": 0, "version": 1}
