# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Single-variable linear regression: y = weight * x + bias."""

from typing import Sequence

import torch

from minml.model.interfaces import ModelBase


class LinearRegression(ModelBase):
    """
    Affine model with two scalar parameters.

    Both parameters start at 0.0, so an untrained model predicts 0 for every
    input. `weight` and `bias` are read-only; only the trainer (through
    set_parameters) changes them.
    """

    parameter_names = ("weight", "bias")

    def __init__(self, weight: float = 0.0, bias: float = 0.0) -> None:
        self._weight = float(weight)
        self._bias = float(bias)

    @property
    def weight(self) -> float:
        return self._weight

    @property
    def bias(self) -> float:
        return self._bias

    def predict(self, x: float) -> float:
        return self._weight * float(x) + self._bias

    def forward(self, inputs: torch.Tensor) -> torch.Tensor:
        return self._weight * inputs + self._bias

    def parameter_gradients(self, inputs: torch.Tensor) -> torch.Tensor:
        # d(wx + b)/dw = x, d(wx + b)/db = 1
        return torch.stack((inputs, torch.ones_like(inputs)), dim=1)

    def get_parameters(self) -> tuple[float, ...]:
        return (self._weight, self._bias)

    def set_parameters(self, values: Sequence[float]) -> None:
        if len(values) != 2:
            raise ValueError(f"LinearRegression takes 2 parameters, got {len(values)}")
        self._weight = float(values[0])
        self._bias = float(values[1])

    def __repr__(self) -> str:
        return f"LinearRegression(weight={self._weight!r}, bias={self._bias!r})"
