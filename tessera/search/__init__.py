"""Meta-estimators performing hyper-parameter search."""

from .grid_search import GridSearch

__all__ = ["GridSearch"]
