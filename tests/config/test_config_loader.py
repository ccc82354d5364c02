# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the config loader.

We test:
  1. Valid YAML loads into a frozen, correct config object
  2. Missing required fields and unknown fields raise ConfigValidationError
  3. Broken YAML and bad paths raise ConfigLoadError
  4. The train section converts into the engine's TrainingConfig
"""

import textwrap
from pathlib import Path

import pytest

from minml.config.exceptions import ConfigLoadError, ConfigValidationError
from minml.config.loader import build_training_config, load_config
from minml.config.schema import TrainConfig
from minml.training.engine.core import TrainingConfig


def _write(tmp_path: Path, content: str, name: str = "config.yaml") -> Path:
    path = tmp_path / name
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


class TestLoadValidConfig:
    def test_loads_minimal_valid_config(self, tmp_config_file: Path) -> None:
        config = load_config(tmp_config_file)
        assert config.global_config.project_name == "minml-test"
        assert config.global_config.config_version == "1.0.0"
        assert config.global_config.log_level == "DEBUG"

    def test_optional_sections_default(self, tmp_config_file: Path) -> None:
        config = load_config(tmp_config_file)
        assert config.data is None
        assert config.train is None
        assert config.model.type == "linear_regression"

    def test_loads_full_config(self, tmp_path: Path) -> None:
        path = _write(tmp_path, """\
            global:
              config_version: "1.0.0"
            data:
              path: "data.csv"
              has_header: true
              delimiter: ";"
              normalize: true
            model:
              type: "linear_regression"
            train:
              epochs: 250
              learning_rate: 0.005
              log_interval: 25
              record_history: false
              output_path: "out/model.json"
        """)

        config = load_config(path)
        assert config.data is not None
        assert config.data.path == "data.csv"
        assert config.data.has_header is True
        assert config.data.delimiter == ";"
        assert config.data.normalize is True
        assert config.train is not None
        assert config.train.epochs == 250
        assert config.train.learning_rate == 0.005
        assert config.train.output_path == "out/model.json"


class TestLoadInvalidConfig:
    def test_missing_required_field_raises_validation_error(
        self, invalid_config_file: Path
    ) -> None:
        with pytest.raises(ConfigValidationError):
            load_config(invalid_config_file)

    def test_unknown_field_raises_validation_error(self, tmp_path: Path) -> None:
        path = _write(tmp_path, """\
            global:
              config_version: "1.0.0"
            train:
              epochs: 10
              momentum: 0.9
        """)
        with pytest.raises(ConfigValidationError):
            load_config(path)

    def test_zero_epochs_raises_validation_error(self, tmp_path: Path) -> None:
        path = _write(tmp_path, """\
            global:
              config_version: "1.0.0"
            train:
              epochs: 0
        """)
        with pytest.raises(ConfigValidationError):
            load_config(path)

    def test_non_positive_learning_rate_raises_validation_error(self, tmp_path: Path) -> None:
        path = _write(tmp_path, """\
            global:
              config_version: "1.0.0"
            train:
              learning_rate: 0
        """)
        with pytest.raises(ConfigValidationError):
            load_config(path)

    def test_data_section_requires_path(self, tmp_path: Path) -> None:
        path = _write(tmp_path, """\
            global:
              config_version: "1.0.0"
            data:
              has_header: true
        """)
        with pytest.raises(ConfigValidationError):
            load_config(path)

    def test_broken_yaml_raises_load_error(self, broken_yaml_file: Path) -> None:
        with pytest.raises(ConfigLoadError):
            load_config(broken_yaml_file)

    def test_non_mapping_yaml_raises_load_error(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "- just\n- a list\n")
        with pytest.raises(ConfigLoadError, match="mapping"):
            load_config(path)

    def test_nonexistent_file_raises_load_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError):
            load_config(tmp_path / "does_not_exist.yaml")

    def test_directory_path_raises_load_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError):
            load_config(tmp_path)


class TestConfigImmutability:
    def test_cannot_mutate_frozen_config(self, tmp_config_file: Path) -> None:
        config = load_config(tmp_config_file)
        with pytest.raises(Exception):
            config.global_config.project_name = "other"  # type: ignore[misc]


class TestBuildTrainingConfig:
    def test_copies_hyperparameters(self) -> None:
        train_cfg = TrainConfig(epochs=42, learning_rate=0.25, log_interval=7, record_history=False)
        training_config = build_training_config(train_cfg)

        assert training_config == TrainingConfig(
            epochs=42, learning_rate=0.25, log_interval=7, record_history=False
        )

    def test_defaults(self) -> None:
        training_config = build_training_config(TrainConfig())
        assert training_config.epochs == 100
        assert training_config.learning_rate == 0.01
