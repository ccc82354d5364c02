# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Abstract base class for trainable single-input models.

The trainer works against this contract only. A model supplies:

- predict(x) -> y for a single float, with no side effects
- forward(inputs) -> outputs, the same mapping over a float64 tensor
- parameter_gradients(inputs) -> [n, p] tensor of d(prediction)/d(parameter)
- an ordered parameter vector the trainer reads and replaces

With these four pieces the mean-squared-error gradient for any parameter is
(2/n) * sum(residual * d(prediction)/d(parameter)), so new model kinds can be
trained without touching the engine.
"""

from abc import ABC, abstractmethod
from typing import Sequence

import torch


class ModelBase(ABC):
    """
    Base class for all models the gradient-descent trainer can fit.

    Contract:
        predict(x) must be a pure function of the current parameters and x.
        set_parameters is reserved for the trainer and for deserialization.
    """

    #: Parameter names in the order used by get_parameters/set_parameters.
    parameter_names: tuple[str, ...] = ()

    @abstractmethod
    def predict(self, x: float) -> float:
        """Return the model output for a single input."""
        ...

    @abstractmethod
    def forward(self, inputs: torch.Tensor) -> torch.Tensor:
        """
        Batched predict.

        Args:
            inputs: 1-D float64 tensor of shape (n,).

        Returns:
            1-D float64 tensor of shape (n,).
        """
        ...

    @abstractmethod
    def parameter_gradients(self, inputs: torch.Tensor) -> torch.Tensor:
        """
        Partial derivatives of each prediction with respect to each parameter.

        Args:
            inputs: 1-D float64 tensor of shape (n,).

        Returns:
            float64 tensor of shape (n, len(parameter_names)).
        """
        ...

    @abstractmethod
    def get_parameters(self) -> tuple[float, ...]:
        """Current parameter values, ordered like parameter_names."""
        ...

    @abstractmethod
    def set_parameters(self, values: Sequence[float]) -> None:
        """Replace all parameter values at once."""
        ...

    def parameters_dict(self) -> dict[str, float]:
        return dict(zip(self.parameter_names, self.get_parameters()))
