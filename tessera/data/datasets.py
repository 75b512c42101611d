"""In-memory dataset containers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

from ..core.errors import InvalidArgument
from ..core.types import Array


def _as_samples(samples: Any) -> Array:
    array = np.asarray(samples)
    if array.ndim == 1:
        array = array.reshape(-1, 1)
    if array.ndim != 2:
        raise InvalidArgument(f"Samples must be a 2-d table, got shape {array.shape}.")
    return array


@dataclass(frozen=True, init=False, eq=False)
class Dataset:
    """A table of samples."""

    samples: Array

    def __init__(self, samples: Any) -> None:
        object.__setattr__(self, "samples", _as_samples(samples))

    def num_rows(self) -> int:
        return int(self.samples.shape[0])

    def num_columns(self) -> int:
        return int(self.samples.shape[1])

    def __len__(self) -> int:
        return self.num_rows()


class Unlabeled(Dataset):
    """Samples without ground truth."""

    def take(self, indices: Sequence[int]) -> "Unlabeled":
        return Unlabeled(self.samples[np.asarray(indices, dtype=int)])


@dataclass(frozen=True, init=False, eq=False)
class Labeled(Dataset):
    """Samples paired with ground-truth labels."""

    labels: Tuple[Any, ...]

    def __init__(self, samples: Any, labels: Sequence[Any]) -> None:
        super().__init__(samples)
        labels = tuple(v.item() if isinstance(v, np.generic) else v for v in labels)
        if len(labels) != self.num_rows():
            raise InvalidArgument(
                f"Number of labels must equal the number of samples,"
                f" {len(labels)} labels for {self.num_rows()} samples given."
            )
        object.__setattr__(self, "labels", labels)

    def possible_outcomes(self) -> List[Any]:
        return list(dict.fromkeys(self.labels))

    def take(self, indices: Sequence[int]) -> "Labeled":
        idx = np.asarray(indices, dtype=int)
        return Labeled(self.samples[idx], [self.labels[i] for i in idx])

    def unlabeled(self) -> Unlabeled:
        return Unlabeled(self.samples)

    def randomize(self, seed: int | None = None) -> "Labeled":
        rng = np.random.default_rng(seed)
        return self.take(rng.permutation(self.num_rows()))

    def split(self, ratio: float = 0.5) -> Tuple["Labeled", "Labeled"]:
        """Split into a left and right dataset at ``ratio`` of the rows."""

        if not 0.0 < ratio < 1.0:
            raise InvalidArgument(f"Split ratio must be between 0 and 1, {ratio} given.")
        n = int(round(ratio * self.num_rows()))
        indices = np.arange(self.num_rows())
        return self.take(indices[:n]), self.take(indices[n:])

    def fold(self, k: int = 3) -> List["Labeled"]:
        """Partition the rows into ``k`` contiguous folds of near-equal size."""

        if k < 2:
            raise InvalidArgument(f"Cannot fold into less than 2 parts, {k} given.")
        if k > self.num_rows():
            raise InvalidArgument(
                f"Cannot fold {self.num_rows()} samples into {k} parts."
            )
        return [self.take(part) for part in np.array_split(np.arange(self.num_rows()), k)]

    def stratified_fold(self, k: int = 3) -> List["Labeled"]:
        """Folds that preserve the label distribution of the whole dataset."""

        if k < 2:
            raise InvalidArgument(f"Cannot fold into less than 2 parts, {k} given.")
        buckets: Dict[Any, List[int]] = {}
        for index, label in enumerate(self.labels):
            buckets.setdefault(label, []).append(index)
        folds: List[List[int]] = [[] for _ in range(k)]
        offset = 0
        for indices in buckets.values():
            # Remainders start where the previous class left off.
            for i, part in enumerate(np.array_split(np.asarray(indices), k)):
                folds[(i + offset) % k].extend(int(j) for j in part)
            offset = (offset + len(indices)) % k
        return [self.take(sorted(part)) for part in folds]

    @staticmethod
    def stack(datasets: Sequence["Labeled"]) -> "Labeled":
        if not datasets:
            raise InvalidArgument("Cannot stack an empty sequence of datasets.")
        samples = np.concatenate([d.samples for d in datasets], axis=0)
        labels = [label for d in datasets for label in d.labels]
        return Labeled(samples, labels)


__all__ = ["Dataset", "Unlabeled", "Labeled"]
