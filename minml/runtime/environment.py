# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Interpreter and host checks for minml.

Checks the interpreter before any command runs so an unsupported Python
fails with a clear message instead of a syntax error deep in an import.
"""

import platform
import sys
from typing import NamedTuple

MINIMUM_PYTHON = (3, 10)


class SystemInfo(NamedTuple):
    """What `minml info` and the bootstrap record report about the host."""

    python_version: str
    platform: str
    architecture: str
    torch_version: str


def check_minimum_python(version_info: tuple[int, ...] | None = None) -> None:
    """
    Fail fast on interpreters older than MINIMUM_PYTHON.

    Args:
        version_info: Override for the running interpreter's version, for tests.

    Raises:
        RuntimeError: If the interpreter is too old.
    """
    current = tuple(version_info if version_info is not None else sys.version_info[:2])
    if current[:2] < MINIMUM_PYTHON:
        required = ".".join(str(part) for part in MINIMUM_PYTHON)
        found = ".".join(str(part) for part in current[:2])
        raise RuntimeError(f"minml needs Python {required} or newer, found {found}")


def get_system_info() -> SystemInfo:
    import torch

    return SystemInfo(
        python_version=platform.python_version(),
        platform=platform.system(),
        architecture=platform.machine(),
        torch_version=torch.__version__,
    )
