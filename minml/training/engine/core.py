# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Batch gradient descent on mean-squared error.

One epoch is explicit:
  1. Forward pass over every record: predictions = model.forward(x)
  2. Residuals r = prediction - y, epoch loss = mean(r^2)
  3. Gradient per parameter: (2/n) * sum(r * d(prediction)/d(parameter))
     For the linear model that is dw = (2/n) * sum(r * x), db = (2/n) * sum(r).
     The factor 2 comes from differentiating r^2 and is kept as-is.
  4. One simultaneous update for all parameters: theta -= learning_rate * gradient
  5. Log metrics

All records contribute to the gradient before any parameter moves, so record
order only affects float summation rounding. Updating after every record
would be stochastic gradient descent, which is a different algorithm and is
not what this engine does.

Everything is float64. There is no learning-rate adaptation, clamping or
retry: if an update would make a parameter (or the loss) non-finite, training
stops with NumericInstabilityError and the model keeps the parameters from
the last completed epoch.

`train` takes exclusive ownership of the model for the duration of the call.
There is no locking; training the same model from two threads at once is
the caller's bug. The dataset is only read and may be shared.
"""

import logging
import math
from dataclasses import dataclass

import torch

from minml.data.dataset import DTYPE, Dataset
from minml.evaluation.metrics import mean_squared_error
from minml.logging.logger import get_logger
from minml.model.interfaces import ModelBase
from minml.training.exceptions import (
    EmptyDatasetError,
    InvalidConfigError,
    NumericInstabilityError,
)
from minml.training.metrics.core import MetricsTracker

logger: logging.Logger = get_logger(__name__)


@dataclass(frozen=True)
class TrainingConfig:
    """
    Hyperparameters for one training call.

    Construction does not validate; `train` does, so an invalid config is
    reported as InvalidConfigError before the model is touched.
    """

    epochs: int
    learning_rate: float
    log_interval: int = 1
    record_history: bool = True


@dataclass(frozen=True)
class TrainingResult:
    """Final state of a completed training run."""

    epochs_completed: int
    parameters: dict[str, float]
    final_loss: float
    loss_history: tuple[float, ...]


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _validate_config(config: TrainingConfig) -> None:
    if not _is_int(config.epochs) or config.epochs < 1:
        raise InvalidConfigError(f"epochs must be an integer >= 1, got {config.epochs!r}")

    lr = config.learning_rate
    if isinstance(lr, bool) or not isinstance(lr, (int, float)):
        raise InvalidConfigError(f"learning_rate must be a number, got {lr!r}")
    if not math.isfinite(lr) or lr <= 0:
        raise InvalidConfigError(f"learning_rate must be finite and > 0, got {lr!r}")

    if not _is_int(config.log_interval) or config.log_interval < 1:
        raise InvalidConfigError(
            f"log_interval must be an integer >= 1, got {config.log_interval!r}"
        )


def train(dataset: Dataset, model: ModelBase, config: TrainingConfig) -> TrainingResult:
    """
    Fit `model` to `dataset` in place with batch gradient descent.

    Args:
        dataset: Non-empty (x, y) records. Read only.
        model: Any ModelBase. Its parameters are replaced once per epoch.
        config: Epoch count and learning rate.

    Returns:
        TrainingResult with final parameters, the loss of those parameters and
        the per-epoch loss history (loss before each epoch's update).

    Raises:
        InvalidConfigError: Bad epochs / learning_rate / log_interval. Model untouched.
        EmptyDatasetError: Zero records. Model untouched.
        NumericInstabilityError: An update would go non-finite. The model holds
            the parameters from the last completed epoch.
    """
    _validate_config(config)

    if dataset.is_empty():
        raise EmptyDatasetError("Cannot train on an empty dataset")

    features = dataset.features
    labels = dataset.labels
    num_records = dataset.size
    gradient_scale = 2.0 / num_records

    logger.info(
        "Training setup",
        extra={
            "model": type(model).__name__,
            "records": num_records,
            "epochs": config.epochs,
            "learning_rate": config.learning_rate,
            "initial_parameters": model.parameters_dict(),
        },
    )

    tracker = MetricsTracker(log_interval=config.log_interval)
    history: list[float] = []

    for epoch in range(1, config.epochs + 1):
        tracker.begin_epoch()

        residuals = model.forward(features) - labels
        loss = float(torch.mean(residuals * residuals))

        # [n, p] jacobian weighted by residuals, summed over records
        partials = model.parameter_gradients(features)
        gradients = gradient_scale * (residuals.unsqueeze(1) * partials).sum(dim=0)

        current = torch.tensor(model.get_parameters(), dtype=DTYPE)
        candidate = current - config.learning_rate * gradients

        if not math.isfinite(loss):
            _raise_instability(model, epoch, "loss is not finite")
        if not bool(torch.isfinite(gradients).all()):
            _raise_instability(model, epoch, "gradient is not finite")
        if not bool(torch.isfinite(candidate).all()):
            _raise_instability(model, epoch, "updated parameters are not finite")

        model.set_parameters(candidate.tolist())

        if config.record_history:
            history.append(loss)

        tracker.end_epoch(
            epoch=epoch,
            loss=loss,
            grad_norm=float(torch.linalg.vector_norm(gradients)),
            learning_rate=config.learning_rate,
        )

    final_loss = mean_squared_error(model.forward(features), labels)
    if not math.isfinite(final_loss):
        _raise_instability(model, config.epochs, "final loss is not finite")

    parameters = model.parameters_dict()
    logger.info(
        "Training complete",
        extra={
            "epochs": config.epochs,
            "final_loss": final_loss,
            "parameters": parameters,
        },
    )

    return TrainingResult(
        epochs_completed=config.epochs,
        parameters=parameters,
        final_loss=final_loss,
        loss_history=tuple(history),
    )


def _raise_instability(model: ModelBase, epoch: int, reason: str) -> None:
    parameters = model.parameters_dict()
    logger.error(
        "Training diverged",
        extra={"epoch": epoch, "reason": reason, "parameters": parameters},
    )
    raise NumericInstabilityError(epoch=epoch, parameters=parameters, reason=reason)
