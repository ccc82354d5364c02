# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Atomic save/load of trained models.

A saved model is a small JSON document:

  {
    "format_version": 1,
    "model_type": "linear_regression",
    "parameters": {"weight": 2.0, "bias": 0.0},
    "metadata": {"epochs": 1000, "final_loss": 1.2e-05, "standardizer": null}
  }

Saves are atomic: the document is written to a temp file next to the target
and renamed over it, so a crash never leaves a half-written model behind.
"""

import json
import logging
import math
import os
import tempfile
from pathlib import Path
from typing import Any

from minml.logging.logger import get_logger
from minml.model.interfaces import ModelBase
from minml.model.registry import get_model, model_type_name

logger: logging.Logger = get_logger(__name__)

FORMAT_VERSION = 1


class ModelLoadError(Exception):
    """Raised when a saved model file is missing, unreadable, or malformed."""


def save_model(
    model: ModelBase,
    path: Path,
    metadata: dict[str, Any] | None = None,
) -> Path:
    """
    Write a model and its metadata to `path` atomically.

    Args:
        model: A registered model instance.
        path: Destination JSON file. Parent directories are created.
        metadata: Extra JSON-serialisable information (epochs, loss, ...).

    Returns:
        The path that was written.
    """
    document = {
        "format_version": FORMAT_VERSION,
        "model_type": model_type_name(model),
        "parameters": model.parameters_dict(),
        "metadata": metadata or {},
    }

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".model_tmp_", suffix=".json")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(document, handle, indent=2, default=str)
        os.replace(tmp_path, path)
    except BaseException:
        if tmp_path.exists():
            tmp_path.unlink()
        raise

    logger.info(
        "Model saved",
        extra={"path": str(path), "model_type": document["model_type"]},
    )
    return path


def load_model(path: Path) -> tuple[ModelBase, dict[str, Any]]:
    """
    Load a model saved by `save_model`.

    Returns:
        (model, metadata)

    Raises:
        ModelLoadError: If the file is missing, not JSON, or structurally wrong.
    """
    if not path.is_file():
        raise ModelLoadError(f"Model file not found: {path}")

    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as err:
        raise ModelLoadError(f"Cannot read model file {path}: {err}") from err

    if not isinstance(document, dict):
        raise ModelLoadError(f"Model file {path} must contain a JSON object")

    version = document.get("format_version")
    if version != FORMAT_VERSION:
        raise ModelLoadError(f"Unsupported model format version {version!r} in {path}")

    try:
        model_cls = get_model(document["model_type"])
        model = model_cls()
        parameters = document["parameters"]
        values = [float(parameters[name]) for name in model.parameter_names]
    except (KeyError, TypeError, ValueError) as err:
        raise ModelLoadError(f"Malformed model file {path}: {err}") from err

    if not all(math.isfinite(value) for value in values):
        raise ModelLoadError(
            f"Model file {path} holds non-finite parameters: "
            f"{dict(zip(model.parameter_names, values))}"
        )
    model.set_parameters(values)

    metadata = document.get("metadata") or {}
    logger.info(
        "Model loaded",
        extra={"path": str(path), "model_type": document["model_type"]},
    )
    return model, metadata
