"""Deterministic search summarisation helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

import numpy as np


def _build_summary(records: list[Mapping[str, object]]) -> Mapping[str, object]:
    trials = [r for r in records if r.get("event") == "trial"]
    best = next((r for r in reversed(records) if r.get("event") == "best"), None)
    scores = np.asarray([float(r["score"]) for r in trials], dtype=np.float64)

    summary: dict[str, object] = {"version": 1, "trials": len(trials)}
    if scores.size:
        summary["score"] = {
            "min": float(np.nanmin(scores)),
            "max": float(np.nanmax(scores)),
            "mean": float(np.nanmean(scores)),
            "last": float(scores[-1]),
        }
    if best is not None:
        summary["best"] = {"params": best.get("params"), "score": best.get("score")}
    return summary


def write_summary(trials_jsonl: str | Path, out_summary_json: str | Path) -> str:
    """Write a deterministic summary for the trial log at ``trials_jsonl``."""

    trials_path = Path(trials_jsonl)
    out_path = Path(out_summary_json)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    records: list[Mapping[str, object]] = []
    if trials_path.exists():
        for line in trials_path.read_text().splitlines():
            line = line.strip()
            if not line:
                continue
            records.append(json.loads(line))

    summary = _build_summary(records)
    out_path.write_text(json.dumps(summary, sort_keys=True, indent=2))
    return str(out_path)


__all__ = ["write_summary"]
