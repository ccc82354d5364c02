# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Turns a YAML file on disk into a validated, frozen MinMLConfig.

Reading, YAML parsing and schema validation each fail with their own
ConfigError subclass. A broken file is never patched up with defaults.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from minml.config.exceptions import ConfigLoadError, ConfigValidationError
from minml.config.schema import MinMLConfig, TrainConfig
from minml.training.engine.core import TrainingConfig


def _parse_yaml_mapping(path: Path) -> dict[str, Any]:
    """
    Return the top-level mapping of a YAML file.

    Raises:
        ConfigLoadError: Missing path, directory, unreadable file, invalid YAML,
            or a document whose root is not a mapping.
    """
    if not path.is_file():
        reason = "is not a file" if path.exists() else "does not exist"
        raise ConfigLoadError(f"Config path {path} {reason}")

    try:
        with path.open(encoding="utf-8") as handle:
            document = yaml.safe_load(handle)
    except OSError as err:
        raise ConfigLoadError(f"Could not read {path}: {err}") from err
    except yaml.YAMLError as err:
        raise ConfigLoadError(f"{path} is not valid YAML: {err}") from err

    if not isinstance(document, dict):
        kind = type(document).__name__
        raise ConfigLoadError(f"{path} must hold a YAML mapping at the top level, not {kind}")

    return document


def load_config(config_path: Path) -> MinMLConfig:
    """
    Load and validate a config file.

    Raises:
        ConfigLoadError: The file could not be read or parsed.
        ConfigValidationError: The mapping does not match the schema.
    """
    document = _parse_yaml_mapping(config_path)

    try:
        return MinMLConfig.model_validate(document)
    except ValidationError as err:
        raise ConfigValidationError(f"{config_path} failed validation:\n{err}") from err


def build_training_config(train_cfg: TrainConfig) -> TrainingConfig:
    """Convert the validated `train:` section into the engine's value object."""
    return TrainingConfig(
        epochs=train_cfg.epochs,
        learning_rate=train_cfg.learning_rate,
        log_interval=train_cfg.log_interval,
        record_history=train_cfg.record_history,
    )
