"""Two dimensional immutable numeric structure."""

from __future__ import annotations

from typing import Any, Iterator, Sequence

import numpy as np

from .errors import ImmutableStructure, IndexNotFound, InvalidArgument, InvalidElement
from .types import Array
from .vector import Vector, as_numeric_array, is_numeric


class Matrix:
    """Read-only ``m x n`` matrix backed by a numpy array."""

    __slots__ = ("_a",)

    def __init__(self, rows: Sequence[Sequence[Any]] | Array, validate: bool = True) -> None:
        if validate:
            rows = [list(row) for row in rows]
            widths = {len(row) for row in rows}
            if len(widths) > 1:
                raise InvalidArgument(
                    f"Matrix rows must have the same length, found lengths {sorted(widths)}."
                )
            for i, row in enumerate(rows):
                for j, value in enumerate(row):
                    if not is_numeric(value):
                        raise InvalidElement(
                            "Matrix element must be an integer or float,"
                            f" {type(value).__name__} found at ({i}, {j})."
                        )
        a = as_numeric_array(rows)
        if a.ndim != 2:
            a = a.reshape(len(a), -1) if a.size else a.reshape(len(a), 0)
        a.setflags(write=False)
        object.__setattr__(self, "_a", a)

    def shape(self) -> tuple[int, int]:
        m, n = self._a.shape
        return int(m), int(n)

    def m(self) -> int:
        return self.shape()[0]

    def n(self) -> int:
        return self.shape()[1]

    def as_array(self) -> list:
        return self._a.tolist()

    def to_numpy(self) -> Array:
        return self._a.copy()

    def row(self, index: int) -> Vector:
        return self[index]

    def column(self, index: int) -> Vector:
        if not 0 <= index < self.n():
            raise IndexNotFound(f"Column {index} not found in matrix of shape {self.shape()}.")
        return Vector(self._a[:, index], validate=False)

    def __len__(self) -> int:
        return self.m()

    def __iter__(self) -> Iterator[Vector]:
        for row in self._a:
            yield Vector(row, validate=False)

    def __getitem__(self, index: Any) -> Vector:
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            raise IndexNotFound(f"Row not found at index {index!r}.")
        if not 0 <= index < self.m():
            raise IndexNotFound(
                f"Row not found at index {index}, matrix has {self.m()} rows."
            )
        return Vector(self._a[index], validate=False)

    def __setitem__(self, index: Any, value: Any) -> None:
        raise ImmutableStructure("Matrix cannot be mutated directly.")

    def __delitem__(self, index: Any) -> None:
        raise ImmutableStructure("Matrix cannot be mutated directly.")

    def __setattr__(self, name: str, value: Any) -> None:
        raise ImmutableStructure("Matrix cannot be mutated directly.")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return bool(np.array_equal(self._a, other._a))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix({self.as_array()!r})"


__all__ = ["Matrix"]
