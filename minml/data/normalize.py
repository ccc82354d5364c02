# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Standardization preprocessing stage.

Standardization is its own step: it takes a Dataset and returns a new,
transformed Dataset. The trainer never knows whether its input was scaled.
The fitted Standardizer keeps the column means and standard deviations so
that inference inputs can be mapped into the training space and predictions
mapped back out.
"""

from dataclasses import dataclass
from typing import TypeVar

import torch

from minml.data.dataset import Dataset
from minml.data.exceptions import DatasetError
from minml.math.statistics import describe

# A scalar or a float64 tensor; the affine maps below work on both.
_Value = TypeVar("_Value", float, torch.Tensor)


@dataclass(frozen=True)
class Standardizer:
    """Per-column mean and population standard deviation."""

    feature_mean: float
    feature_std: float
    label_mean: float
    label_std: float

    def transform(self, dataset: Dataset) -> Dataset:
        features = (dataset.features - self.feature_mean) / self.feature_std
        labels = (dataset.labels - self.label_mean) / self.label_std
        return Dataset(features, labels)

    def transform_feature(self, x: _Value) -> _Value:
        return (x - self.feature_mean) / self.feature_std

    def inverse_label(self, y: _Value) -> _Value:
        """Map a prediction made in standardized space back to label units."""
        return y * self.label_std + self.label_mean

    def to_dict(self) -> dict[str, float]:
        return {
            "feature_mean": self.feature_mean,
            "feature_std": self.feature_std,
            "label_mean": self.label_mean,
            "label_std": self.label_std,
        }

    @classmethod
    def from_dict(cls, data: dict[str, float]) -> "Standardizer":
        try:
            return cls(
                feature_mean=float(data["feature_mean"]),
                feature_std=float(data["feature_std"]),
                label_mean=float(data["label_mean"]),
                label_std=float(data["label_std"]),
            )
        except (KeyError, TypeError, ValueError) as err:
            raise DatasetError(f"Invalid standardizer data: {err}") from err


def fit_standardizer(dataset: Dataset) -> Standardizer:
    """
    Compute standardization parameters from a dataset.

    Raises:
        DatasetError: If the dataset is empty or either column is constant.
    """
    if dataset.is_empty():
        raise DatasetError("Cannot standardize an empty dataset")

    feature_stats = describe(dataset.features.tolist())
    label_stats = describe(dataset.labels.tolist())

    for column, stats in (("feature", feature_stats), ("label", label_stats)):
        if stats.std_dev == 0.0:
            raise DatasetError(f"Cannot standardize constant {column} column")

    return Standardizer(
        feature_mean=feature_stats.mean,
        feature_std=feature_stats.std_dev,
        label_mean=label_stats.mean,
        label_std=label_stats.std_dev,
    )


def standardize(dataset: Dataset) -> tuple[Dataset, Standardizer]:
    """Fit a Standardizer on `dataset` and return the transformed copy alongside it."""
    standardizer = fit_standardizer(dataset)
    return standardizer.transform(dataset), standardizer
