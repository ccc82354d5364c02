# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Training failures.

Each kind is distinct so callers can react differently: fix the input data,
fix the configuration, or retry with a smaller learning rate. None of them
is handled inside the engine.
"""


class TrainingError(Exception):
    """Base for all training failures."""


class EmptyDatasetError(TrainingError):
    """Raised when training (or evaluation) is asked to run on zero records."""


class InvalidConfigError(TrainingError):
    """Raised when epochs, learning rate or log interval are out of range."""


class NumericInstabilityError(TrainingError):
    """
    Raised when an update would produce non-finite parameters or loss.

    The offending update is not applied, so the model still holds the
    parameters from the last completed epoch. Those are reported in
    `parameters` for diagnostics.
    """

    def __init__(self, epoch: int, parameters: dict[str, float], reason: str) -> None:
        self.epoch = epoch
        self.parameters = parameters
        self.reason = reason
        super().__init__(f"Numeric instability at epoch {epoch}: {reason}")
