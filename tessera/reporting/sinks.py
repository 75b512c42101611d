"""Trial sinks recording hyper-parameter search progress."""

from __future__ import annotations

import csv
import json
import subprocess
from pathlib import Path
from typing import Any, Dict

from ..core.types import Best, TrialRecord


def _git_sha() -> str:
    try:
        out = subprocess.check_output(["git", "rev-parse", "HEAD"], stderr=subprocess.DEVNULL)
        return out.decode().strip()
    except Exception:  # pragma: no cover - git may be unavailable in tests
        return "unknown"


def _jsonable(value: Any) -> Any:
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    return repr(value)


class JsonlSink:
    """Append-only JSONL writer, one line per scored combination."""

    def __init__(
        self,
        path: str | Path,
        *,
        run: str | None = None,
        sha: str | None = None,
    ) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("")
        self.run = run
        self.sha = sha or _git_sha()

    def _write(self, record: Dict[str, Any]) -> None:
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, sort_keys=True) + "\n")

    def on_trial(self, trial: TrialRecord) -> None:
        self._write(
            {
                "event": "trial",
                "index": int(trial.index),
                "params": _jsonable(trial.params),
                "score": float(trial.score),
                "run": self.run,
                "sha": self.sha,
            }
        )

    def on_complete(self, best: Best) -> None:
        self._write(
            {
                "event": "best",
                "params": _jsonable(best.params),
                "score": float(best.score),
                "run": self.run,
                "sha": self.sha,
            }
        )

    __call__ = on_trial


class CsvSink:
    """Write one row per scored combination with a stable column order."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def on_trial(self, trial: TrialRecord) -> None:
        row: Dict[str, Any] = {"index": int(trial.index), "score": float(trial.score)}
        row.update({name: json.dumps(_jsonable(value)) for name, value in trial.params.items()})
        with self.path.open("a", encoding="utf-8", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=sorted(row.keys()))
            if handle.tell() == 0:
                writer.writeheader()
            writer.writerow(row)


__all__ = ["JsonlSink", "CsvSink"]
