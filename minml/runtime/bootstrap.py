# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime bootstrap for minml.

Called once at the start of a CLI command that has a config:
  1. Validate the environment (Python version)
  2. Configure the `minml` parent logger with the configured level and file
  3. Log a startup record with system info
"""

import logging
from pathlib import Path

from minml.config.schema import GlobalConfig
from minml.logging.logger import configure_logging, get_logger
from minml.runtime.environment import check_minimum_python, get_system_info


def bootstrap(config: GlobalConfig) -> logging.Logger:
    """
    Run the bootstrap sequence and return the runtime logger.

    Args:
        config: The validated global configuration.
    """
    check_minimum_python()

    log_file = None
    if config.log_file is not None:
        log_file = Path(config.log_file)

    configure_logging(config.log_level, log_file)
    logger = get_logger("minml.runtime")

    system_info = get_system_info()
    logger.info(
        "minml bootstrap complete",
        extra={
            "project": config.project_name,
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
            "torch_version": system_info.torch_version,
        },
    )
    return logger
