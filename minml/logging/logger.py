# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Structured JSON logging for minml.

Every record is one JSON line with a timestamp, level, logger name and
message. Numbers such as epoch, loss and gradient norm travel as `extra`
fields rather than being formatted into the message, so a training log can
be filtered with jq instead of regexes.

  {"ts": "2026-...", "level": "INFO", "module": "minml.training.metrics.core", "msg": "Training epoch", "epoch": 100, "loss": 0.0012}

All handlers live on the `minml` parent logger. Module loggers come from
`get_logger(__name__)`, carry no handlers or level of their own, and
propagate to the parent. `configure_logging` swaps the parent's level and
handlers, so one call (from the CLI or the runtime bootstrap) governs every
module, including ones imported afterwards.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "minml"
LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """
    Render a LogRecord as a single JSON object.

    Keys: ts, level, module (the logger name), msg, then any `extra=` fields,
    then "exc" with the formatted traceback when one is attached.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
        }
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RESERVED and not key.startswith("_")
        )
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class _StdoutHandler(logging.StreamHandler):
    """
    Writes to whatever sys.stdout is at emit time.

    Same trick as the stdlib's last-resort stderr handler: a redirected
    stdout (pytest capture, contextlib.redirect_stdout) is honoured even when
    the handler was created earlier.
    """

    @property
    def stream(self):  # type: ignore[override]
        return sys.stdout

    @stream.setter
    def stream(self, _value) -> None:
        pass


def _level_from_name(level_name: str) -> int:
    normalized = level_name.upper()
    if normalized not in LEVEL_NAMES:
        raise ValueError(
            f"Invalid log level {level_name!r}, expected one of {', '.join(LEVEL_NAMES)}"
        )
    return logging.getLevelName(normalized)


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    (Re)configure the `minml` parent logger.

    Existing handlers are closed and replaced, so calling this again never
    duplicates output.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL (case-insensitive).
        log_file: Also append records to this file.

    Returns:
        The parent logger.

    Raises:
        ValueError: Unknown level name.
    """
    level = _level_from_name(log_level)
    root = logging.getLogger(ROOT_LOGGER_NAME)

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    root.setLevel(level)
    root.propagate = False

    _attach(root, _StdoutHandler(), level)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _attach(root, logging.FileHandler(log_file, encoding="utf-8"), level)

    return root


def get_logger(name: str) -> logging.Logger:
    """
    Return a module logger that writes through the `minml` parent.

    Names outside the `minml` namespace are nested under it. The first call
    installs the default INFO stdout configuration if nothing configured the
    parent yet.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    if not logging.getLogger(ROOT_LOGGER_NAME).handlers:
        configure_logging()

    return logging.getLogger(name)
