"""Exception hierarchy raised across tessera."""

from __future__ import annotations


class TesseraError(Exception):
    """Base class for every error raised by the library."""


class InvalidArgument(TesseraError, ValueError):
    """Malformed constructor or parameter input."""


class InvalidElement(InvalidArgument):
    """A structure was built from a non-numeric element."""


class DimensionMismatch(TesseraError, ValueError):
    """Operand shapes are incompatible."""


class ImmutableStructure(TesseraError, TypeError):
    """A read-only structure was mutated."""


class IndexNotFound(TesseraError, IndexError):
    """Element access outside the bounds of a structure."""


class NoPendingForwardPass(TesseraError, RuntimeError):
    """Backpropagation was requested without a preceding forward pass."""


class RequiresLabeledData(InvalidArgument):
    """Training was called with an unlabeled dataset."""


class IncompatibleMetric(InvalidArgument):
    """The metric cannot score the estimator's kind of predictions."""


class UnsupportedOperation(TesseraError, AttributeError):
    """A delegated capability is not implemented anywhere in the chain."""


class NotTrained(TesseraError, RuntimeError):
    """Inference was requested from an estimator that has not been trained."""


__all__ = [
    "TesseraError",
    "InvalidArgument",
    "InvalidElement",
    "DimensionMismatch",
    "ImmutableStructure",
    "IndexNotFound",
    "NoPendingForwardPass",
    "RequiresLabeledData",
    "IncompatibleMetric",
    "UnsupportedOperation",
    "NotTrained",
]
