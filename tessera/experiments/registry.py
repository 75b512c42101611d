"""Search registry loader and helpers."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Sequence

from ..core.errors import InvalidArgument
from ..estimators.registry import get_estimator
from ..search.grid_search import GridSearch
from ..validation.metrics import REGISTRY as METRIC_REGISTRY
from ..validation.validators import get_validator

_DEFAULT_ROOT = Path(__file__).resolve().parent
_DEFAULT_REGISTRY = _DEFAULT_ROOT / "searches.json"
_DEFAULT_SCHEMA = _DEFAULT_ROOT / "schema.json"


def _load_json(path: Path) -> Mapping[str, object]:
    return json.loads(path.read_text())


def _normalise(value):  # type: ignore[override]
    if isinstance(value, Mapping):
        return {str(k): _normalise(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalise(v) for v in value]
    if isinstance(value, Path):
        return str(value)
    return value


def config_hash(config: Mapping[str, object]) -> str:
    """Return a stable 12-character hash for ``config``."""

    canonical = json.dumps(_normalise(config), sort_keys=True, separators=(",", ":"))
    digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    return digest[:12]


@dataclass(frozen=True)
class SearchConfig:
    """Resolved search configuration."""

    name: str
    config: Mapping[str, object]
    version: int

    def to_search_config(self) -> Dict[str, object]:
        return json.loads(json.dumps(self.config))

    @property
    def run_id(self) -> str:
        return config_hash(self.config)


def _validate(raw: Mapping[str, object], schema: Mapping[str, object]) -> None:
    for key in schema.get("required_keys", []):
        if key not in raw:
            raise InvalidArgument(f"Registry missing required key: {key}")

    searches = raw.get("searches")
    if not isinstance(searches, Mapping):
        raise InvalidArgument("Registry 'searches' must be a mapping")

    defaults = raw.get("defaults", {})
    if not isinstance(defaults, Mapping):
        raise InvalidArgument("Registry 'defaults' must be a mapping")

    search_required = schema.get("search_required", [])
    for name, entry in searches.items():
        if not isinstance(entry, Mapping):
            raise InvalidArgument(f"Search '{name}' must be a mapping")
        merged: MutableMapping[str, object] = dict(defaults)
        merged.update(entry)
        for field in search_required:
            if field not in merged:
                raise InvalidArgument(f"Search '{name}' missing field '{field}'")
        if not isinstance(merged["grid"], (Mapping, list)):
            raise InvalidArgument(f"Search '{name}' grid must be a mapping or a list")


def load_registry(
    path: str | Path | None = None, schema_path: str | Path | None = None
) -> Mapping[str, object]:
    """Load and validate the search registry."""

    registry_path = Path(path or _DEFAULT_REGISTRY)
    schema_path = Path(schema_path or _DEFAULT_SCHEMA)
    raw = _load_json(registry_path)
    schema = _load_json(schema_path)
    _validate(raw, schema)

    defaults = raw.get("defaults", {})
    version = int(raw.get("version", 1))
    searches = {}
    for name, entry in raw["searches"].items():  # type: ignore[union-attr]
        config: MutableMapping[str, object] = dict(defaults)  # type: ignore[arg-type]
        config.update(entry)
        searches[name] = SearchConfig(
            name=name, config=json.loads(json.dumps(config)), version=version
        )

    return {
        "version": version,
        "defaults": json.loads(json.dumps(defaults)),
        "searches": searches,
    }


def get_search(name: str, *, path: str | Path | None = None) -> SearchConfig:
    """Return the resolved configuration for ``name``."""

    registry = load_registry(path)
    searches = registry["searches"]
    if name not in searches:  # type: ignore[operator]
        raise KeyError(f"Search '{name}' not found in registry")
    return searches[name]  # type: ignore[index]


def build_search(
    config: Mapping[str, Any], *, callbacks: Sequence[object] | None = None
) -> GridSearch:
    """Construct a :class:`GridSearch` from a plain configuration mapping."""

    spec = get_estimator(str(config["estimator"]))

    metric_name = str(config.get("metric", "auto"))
    metric = None
    if metric_name != "auto":
        metric = METRIC_REGISTRY.resolve(metric_name, estimator_type=spec.estimator_type)

    validator = None
    validator_cfg = config.get("validator")
    if validator_cfg is not None:
        options = dict(validator_cfg)
        validator = get_validator(str(options.pop("name", "kfold")), **options)

    return GridSearch(
        spec,
        config["grid"],
        metric=metric,
        validator=validator,
        retrain=bool(config.get("retrain", True)),
        callbacks=callbacks,
    )


__all__ = ["SearchConfig", "build_search", "config_hash", "get_search", "load_registry"]
