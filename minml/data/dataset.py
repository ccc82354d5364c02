# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
In-memory (feature, label) dataset.

A Dataset is built once and never changes afterwards. Both columns are held
as float64 tensors so the trainer can compute a whole epoch's residuals in
one vectorised expression. The tensors are cloned on the way in and handed
out as clones, so nothing a caller does to them can leak back into the
dataset. That is what makes it safe for several trainers to read the same
dataset while fitting different models.
"""

from typing import Iterator, Sequence

import torch

from minml.data.exceptions import DatasetError

DTYPE = torch.float64


class Dataset:
    """
    Ordered, immutable sequence of (x, y) records.

    Use `from_records` or `from_columns` rather than the constructor when
    starting from plain Python numbers.
    """

    __slots__ = ("_features", "_labels")

    def __init__(self, features: torch.Tensor, labels: torch.Tensor) -> None:
        if features.dim() != 1 or labels.dim() != 1:
            raise DatasetError(
                f"Features and labels must be 1-D, got shapes "
                f"{tuple(features.shape)} and {tuple(labels.shape)}"
            )
        if features.numel() != labels.numel():
            raise DatasetError(
                f"Column length mismatch: {features.numel()} features vs {labels.numel()} labels"
            )

        features = features.detach().to(DTYPE).clone()
        labels = labels.detach().to(DTYPE).clone()

        if not bool(torch.isfinite(features).all()) or not bool(torch.isfinite(labels).all()):
            raise DatasetError("Dataset values must be finite (no NaN or Inf)")

        self._features = features
        self._labels = labels

    @classmethod
    def from_records(cls, records: Sequence[tuple[float, float]]) -> "Dataset":
        """Build a dataset from a sequence of (x, y) pairs."""
        xs = [float(x) for x, _ in records]
        ys = [float(y) for _, y in records]
        return cls.from_columns(xs, ys)

    @classmethod
    def from_columns(cls, features: Sequence[float], labels: Sequence[float]) -> "Dataset":
        """Build a dataset from two equal-length sequences."""
        if len(features) != len(labels):
            raise DatasetError(
                f"Column length mismatch: {len(features)} features vs {len(labels)} labels"
            )
        return cls(
            torch.tensor([float(x) for x in features], dtype=DTYPE),
            torch.tensor([float(y) for y in labels], dtype=DTYPE),
        )

    @property
    def features(self) -> torch.Tensor:
        return self._features.clone()

    @property
    def labels(self) -> torch.Tensor:
        return self._labels.clone()

    @property
    def size(self) -> int:
        return self._features.numel()

    @property
    def records(self) -> tuple[tuple[float, float], ...]:
        return tuple(zip(self._features.tolist(), self._labels.tolist()))

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[tuple[float, float]]:
        return iter(self.records)

    def __repr__(self) -> str:
        return f"Dataset(size={self.size})"

    def is_empty(self) -> bool:
        return self.size == 0

