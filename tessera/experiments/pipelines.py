"""Run a configured search end to end and write its artifacts."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from ..data.datasets import Labeled
from ..reporting.sinks import CsvSink, JsonlSink
from ..reporting.summary import write_summary
from ..search.grid_search import GridSearch
from .registry import build_search, config_hash


@dataclass(frozen=True)
class SearchResult:
    """Summary returned by :func:`run_search`."""

    search: GridSearch
    run_id: str
    trials_path: str
    csv_path: str
    summary_path: str


def run_search(
    config: Mapping[str, Any],
    dataset: Labeled,
    *,
    run_dir: str | Path | None = None,
) -> SearchResult:
    """Build, train and report a search described by ``config``."""

    run_id = config_hash(config)
    out_dir = Path(run_dir) if run_dir is not None else Path(".artifacts") / run_id
    out_dir.mkdir(parents=True, exist_ok=True)

    trials_path = out_dir / "trials.jsonl"
    csv_path = out_dir / "trials.csv"
    if csv_path.exists():
        csv_path.unlink()

    sinks = [JsonlSink(trials_path, run=run_id), CsvSink(csv_path)]
    search = build_search(config, callbacks=sinks)
    search.train(dataset)

    summary_path = write_summary(trials_path, out_dir / "summary.json")
    return SearchResult(
        search=search,
        run_id=run_id,
        trials_path=str(trials_path),
        csv_path=str(csv_path),
        summary_path=summary_path,
    )


__all__ = ["SearchResult", "run_search"]
