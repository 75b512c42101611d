"""Search registry helpers for tessera."""

from .pipelines import SearchResult, run_search
from .registry import SearchConfig, build_search, config_hash, get_search, load_registry

__all__ = [
    "SearchConfig",
    "SearchResult",
    "build_search",
    "config_hash",
    "get_search",
    "load_registry",
    "run_search",
]
