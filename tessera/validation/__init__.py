"""Cross-validation metrics and validators."""

from .metrics import (
    REGISTRY,
    Accuracy,
    F1Score,
    Informedness,
    RSquared,
    VMeasure,
    default_metric,
)
from .validators import HoldOut, KFold, get_validator

__all__ = [
    "REGISTRY",
    "Accuracy",
    "F1Score",
    "Informedness",
    "RSquared",
    "VMeasure",
    "default_metric",
    "HoldOut",
    "KFold",
    "get_validator",
]
