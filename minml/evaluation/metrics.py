# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Regression quality metrics.

All functions take float64 tensors of equal length. `evaluate` runs a model
over a dataset and bundles the numbers into an EvaluationReport.
"""

import math
from dataclasses import asdict, dataclass
from typing import Optional

import torch

from minml.data.dataset import Dataset
from minml.data.normalize import Standardizer
from minml.model.interfaces import ModelBase
from minml.training.exceptions import EmptyDatasetError


@dataclass(frozen=True)
class EvaluationReport:
    """Fit quality of a model on one dataset."""

    mse: float
    rmse: float
    mae: float
    r2: float
    count: int

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


def _check_shapes(predictions: torch.Tensor, targets: torch.Tensor) -> None:
    if predictions.shape != targets.shape:
        raise ValueError(
            f"Shape mismatch: predictions {tuple(predictions.shape)} vs targets {tuple(targets.shape)}"
        )
    if predictions.numel() == 0:
        raise EmptyDatasetError("Cannot compute metrics over zero records")


def mean_squared_error(predictions: torch.Tensor, targets: torch.Tensor) -> float:
    _check_shapes(predictions, targets)
    residuals = predictions - targets
    return float(torch.mean(residuals * residuals))


def mean_absolute_error(predictions: torch.Tensor, targets: torch.Tensor) -> float:
    _check_shapes(predictions, targets)
    return float(torch.mean(torch.abs(predictions - targets)))


def r_squared(predictions: torch.Tensor, targets: torch.Tensor) -> float:
    """
    Coefficient of determination, 1 - SS_res / SS_tot.

    Constant targets have SS_tot = 0; that case returns 1.0 for a perfect fit
    and 0.0 otherwise.
    """
    _check_shapes(predictions, targets)
    ss_res = float(torch.sum((targets - predictions) ** 2))
    ss_tot = float(torch.sum((targets - torch.mean(targets)) ** 2))
    if ss_tot == 0.0:
        return 1.0 if ss_res == 0.0 else 0.0
    return 1.0 - ss_res / ss_tot


def evaluate(
    model: ModelBase,
    dataset: Dataset,
    standardizer: Optional[Standardizer] = None,
) -> EvaluationReport:
    """
    Score a model against a dataset.

    Args:
        model: The model to score.
        dataset: Records in raw units.
        standardizer: Set when the model was trained on standardized data.
            Inputs are standardized before the model sees them and its
            outputs are mapped back, so the report is in label units.

    Raises:
        EmptyDatasetError: If the dataset has no records.
    """
    if dataset.is_empty():
        raise EmptyDatasetError("Cannot evaluate on an empty dataset")

    features = dataset.features
    if standardizer is None:
        predictions = model.forward(features)
    else:
        scaled = model.forward(standardizer.transform_feature(features))
        predictions = standardizer.inverse_label(scaled)
    targets = dataset.labels
    mse = mean_squared_error(predictions, targets)

    return EvaluationReport(
        mse=mse,
        rmse=math.sqrt(mse),
        mae=mean_absolute_error(predictions, targets),
        r2=r_squared(predictions, targets),
        count=dataset.size,
    )
