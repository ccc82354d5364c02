# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for minml.

Each config section is a frozen pydantic model:
  - frozen=True: immutable after construction
  - extra="forbid": unknown fields cause immediate failure
  - validate_default=True: even defaults get type-checked

A single YAML file holds a `global:` section plus whichever of `data:`,
`model:` and `train:` the command needs. The trainer itself never sees these
models. `build_training_config` turns a validated `TrainConfig` into the
plain `TrainingConfig` value the engine consumes, so library callers can
train without touching YAML at all.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class GlobalConfig(BaseModel):
    """Cross-cutting settings: project identity and logging."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        description="Schema version for compatibility tracking, e.g. '1.0.0'"
    )
    project_name: str = Field(
        default="minml", description="Human-readable project identifier"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Minimum level written by the JSON logger",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for file-based log output",
    )


class DataConfig(BaseModel):
    """Where the training data lives and how to read it."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    path: str = Field(description="CSV file with two numeric columns: feature, label")
    has_header: bool = Field(
        default=False,
        description="Skip the first non-blank line as a header row",
    )
    delimiter: str = Field(
        default=",",
        min_length=1,
        max_length=1,
        description="Single-character column delimiter",
    )
    normalize: bool = Field(
        default=False,
        description="Standardize both columns (zero mean, unit variance) before training",
    )


class ModelConfig(BaseModel):
    """Which registered model to train."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    type: str = Field(
        default="linear_regression",
        description="Registry name of the model class",
    )


class TrainConfig(BaseModel):
    """Gradient descent hyperparameters."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    epochs: int = Field(
        default=100,
        ge=1,
        description="Number of full-batch passes over the dataset",
    )
    learning_rate: float = Field(
        default=0.01,
        gt=0.0,
        allow_inf_nan=False,
        description="Step size applied to the gradient on every update",
    )
    log_interval: int = Field(
        default=10,
        ge=1,
        description="Log epoch metrics every N epochs",
    )
    record_history: bool = Field(
        default=True,
        description="Keep the per-epoch loss history in the training result",
    )
    output_path: Optional[str] = Field(
        default=None,
        description="Where to save the trained model as JSON",
    )


class MinMLConfig(BaseModel):
    """
    Top-level config container.

    Only `global` is required. Commands check for the sections they need and
    fail with a config error when one is missing.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    global_config: GlobalConfig = Field(alias="global")
    data: Optional[DataConfig] = Field(default=None)
    model: ModelConfig = Field(default_factory=ModelConfig)
    train: Optional[TrainConfig] = Field(default=None)
