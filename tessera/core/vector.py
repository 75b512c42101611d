"""One dimensional tensor with integer and/or floating point elements."""

from __future__ import annotations

import numbers
from typing import Any, Iterator, Sequence

import numpy as np

from .errors import (
    DimensionMismatch,
    ImmutableStructure,
    IndexNotFound,
    InvalidArgument,
    InvalidElement,
)
from .types import Array


def is_numeric(value: Any) -> bool:
    """Return ``True`` for integer and real scalars (booleans excluded)."""

    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, numbers.Real)


def as_numeric_array(values: Any) -> Array:
    """Convert to an ndarray, widening to float64 when integers overflow int64."""

    a = np.array(values)
    if a.dtype == object:
        a = a.astype(np.float64)
    return a


def _frozen(values: Any) -> Array:
    a = as_numeric_array(values)
    if a.ndim != 1:
        a = a.reshape(-1)
    a.setflags(write=False)
    return a


class Vector:
    """Immutable dense vector.

    Every transformation returns a new instance. Binary operations between two
    vectors require both operands to have the same dimensionality.
    """

    __slots__ = ("_a", "_n")

    @classmethod
    def zeros(cls, n: int) -> "Vector":
        return cls([0] * n, validate=False)

    @classmethod
    def ones(cls, n: int) -> "Vector":
        return cls([1] * n, validate=False)

    @classmethod
    def quick(cls, values: Sequence[Any]) -> "Vector":
        """Build a vector without validating its elements."""

        return cls(values, validate=False)

    def __init__(self, values: Sequence[Any], validate: bool = True) -> None:
        values = list(values)
        if validate:
            for index, value in enumerate(values):
                if not is_numeric(value):
                    raise InvalidElement(
                        "Vector element must be an integer or float,"
                        f" {type(value).__name__} found at index {index}."
                    )
        self._a = _frozen(values) if values else _frozen(np.zeros(0))
        self._n = len(values)

    # ------------------------------------------------------------------
    # Introspection

    def n(self) -> int:
        """Return the number of elements i.e. the dimensionality."""

        return self._n

    def shape(self) -> tuple[int]:
        return (self._n,)

    def as_array(self) -> list:
        return self._a.tolist()

    def to_numpy(self) -> Array:
        return self._a.copy()

    # ------------------------------------------------------------------
    # Reductions

    def sum(self) -> float:
        return float(np.sum(self._a))

    def l1_norm(self) -> float:
        """Manhattan norm."""

        return float(np.sum(np.abs(self._a)))

    def l2_norm(self) -> float:
        """Euclidean norm."""

        return float(np.sqrt(np.sum(np.square(self._a, dtype=np.float64))))

    def dot(self, other: "Vector") -> float:
        self._check_dimensions(other, "dot")
        return float(np.dot(self._a, other._a))

    def outer(self, other: "Vector") -> "Matrix":
        """Outer product as an ``n x other.n`` matrix."""

        from .matrix import Matrix

        return Matrix(np.outer(self._a, _coerce(other)._a), validate=False)

    # ------------------------------------------------------------------
    # Elementwise operations

    def multiply(self, other: "Vector") -> "Vector":
        self._check_dimensions(other, "multiply")
        return Vector(self._a * other._a, validate=False)

    def divide(self, other: "Vector") -> "Vector":
        self._check_dimensions(other, "divide")
        with np.errstate(divide="ignore", invalid="ignore"):
            quotient = np.true_divide(self._a, other._a)
        return Vector(quotient, validate=False)

    def add(self, other: "Vector") -> "Vector":
        self._check_dimensions(other, "add")
        return Vector(self._a + other._a, validate=False)

    def subtract(self, other: "Vector") -> "Vector":
        self._check_dimensions(other, "subtract")
        return Vector(self._a - other._a, validate=False)

    def scalar_multiply(self, scalar: Any) -> "Vector":
        _check_scalar(scalar)
        return Vector(self._a * scalar, validate=False)

    def scalar_divide(self, scalar: Any) -> "Vector":
        _check_scalar(scalar)
        with np.errstate(divide="ignore", invalid="ignore"):
            quotient = np.true_divide(self._a, scalar)
        return Vector(quotient, validate=False)

    def scalar_add(self, scalar: Any) -> "Vector":
        _check_scalar(scalar)
        return Vector(self._a + scalar, validate=False)

    def scalar_subtract(self, scalar: Any) -> "Vector":
        _check_scalar(scalar)
        return Vector(self._a - scalar, validate=False)

    def exp(self) -> "Vector":
        with np.errstate(over="ignore"):
            return Vector(np.exp(self._a), validate=False)

    # ------------------------------------------------------------------
    # Container protocol

    def __len__(self) -> int:
        return self._n

    def __iter__(self) -> Iterator[Any]:
        return iter(self._a.tolist())

    def __contains__(self, index: object) -> bool:
        return isinstance(index, (int, np.integer)) and 0 <= index < self._n

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            raise IndexNotFound(f"Element not found at index {index!r}.")
        if not 0 <= index < self._n:
            raise IndexNotFound(
                f"Element not found at index {index}, vector has {self._n} elements."
            )
        return self._a[index].item()

    def __setitem__(self, index: Any, value: Any) -> None:
        raise ImmutableStructure("Vector cannot be mutated directly.")

    def __delitem__(self, index: Any) -> None:
        raise ImmutableStructure("Vector cannot be mutated directly.")

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, "_n"):
            raise ImmutableStructure("Vector cannot be mutated directly.")
        object.__setattr__(self, name, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self._n == other._n and bool(np.array_equal(self._a, other._a))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Vector({self.as_array()!r})"

    # ------------------------------------------------------------------
    # Helpers

    def _check_dimensions(self, other: "Vector", op: str) -> None:
        other = _coerce(other)
        if self._n != other._n:
            raise DimensionMismatch(
                f"Cannot {op} vectors of different dimensionality,"
                f" {self._n} and {other._n} given."
            )


def _coerce(other: Any) -> Vector:
    if not isinstance(other, Vector):
        raise InvalidArgument(
            f"Operand must be a Vector, {type(other).__name__} given."
        )
    return other


def _check_scalar(scalar: Any) -> None:
    if not is_numeric(scalar):
        raise InvalidArgument(
            f"Scalar must be an integer or float, {type(scalar).__name__} found."
        )


__all__ = ["Vector", "as_numeric_array", "is_numeric"]
