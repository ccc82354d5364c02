# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for minml tests.

Kept minimal: config files, a CSV on disk, and the canonical y = 2x dataset
that several modules train on.
"""

import textwrap
from pathlib import Path

import pytest

from minml.data.dataset import Dataset


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """The smallest config that passes schema validation."""
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          project_name: "minml-test"
          log_level: "DEBUG"
    """)
    config_file = tmp_path / "test_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """Valid YAML that fails schema validation (missing config_version)."""
    config_content = textwrap.dedent("""\
        global:
          project_name: "minml-test"
    """)
    config_file = tmp_path / "invalid_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    """A file that isn't valid YAML at all."""
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file


@pytest.fixture()
def line_csv(tmp_path: Path) -> Path:
    """Headerless CSV of y = 2x for x in 0..3."""
    csv_file = tmp_path / "line.csv"
    csv_file.write_text("0,0\n1,2\n2,4\n3,6\n", encoding="utf-8")
    return csv_file


@pytest.fixture()
def perfect_line() -> Dataset:
    return Dataset.from_records([(0.0, 0.0), (1.0, 2.0), (2.0, 4.0), (3.0, 6.0)])
