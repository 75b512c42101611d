"""Dataset containers consumed by estimators and validators."""

from .datasets import Dataset, Labeled, Unlabeled

__all__ = ["Dataset", "Labeled", "Unlabeled"]
