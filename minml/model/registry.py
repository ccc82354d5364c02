# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Model type registry for minml.

Maps the `model.type` config string to a concrete ModelBase subclass. The
registry is filled once with the built-in models the first time it is
queried and stays deterministic after that.
"""

import logging

from minml.logging.logger import get_logger
from minml.model.interfaces import ModelBase

logger: logging.Logger = get_logger(__name__)

_MODEL_REGISTRY: dict[str, type[ModelBase]] = {}


def register_model(name: str, cls: type[ModelBase]) -> None:
    """
    Register a model class under a unique name.

    Args:
        name: Config-level identifier (e.g. ``"linear_regression"``).
        cls: The ``ModelBase`` subclass to register.

    Raises:
        TypeError: If ``cls`` is not a ModelBase subclass.
        ValueError: If ``name`` is already registered.
    """
    if not (isinstance(cls, type) and issubclass(cls, ModelBase)):
        raise TypeError(f"Model class for '{name}' must subclass ModelBase")
    if name in _MODEL_REGISTRY:
        raise ValueError(
            f"Model type '{name}' is already registered to {_MODEL_REGISTRY[name].__name__}"
        )
    _MODEL_REGISTRY[name] = cls
    logger.debug("registered_model", extra={"model_type": name, "cls": cls.__name__})


def get_model(name: str) -> type[ModelBase]:
    """
    Retrieve a registered model class by name.

    Raises:
        KeyError: If ``name`` is not registered.
    """
    _register_builtins()
    if name not in _MODEL_REGISTRY:
        available = sorted(_MODEL_REGISTRY.keys())
        raise KeyError(f"Unknown model type '{name}'. Available: {available}")
    return _MODEL_REGISTRY[name]


def list_model_types() -> list[str]:
    """Return sorted list of all registered model type names."""
    _register_builtins()
    return sorted(_MODEL_REGISTRY.keys())


def create_model(name: str) -> ModelBase:
    """Instantiate a registered model with its default (untrained) parameters."""
    return get_model(name)()


def model_type_name(model: ModelBase) -> str:
    """Reverse lookup: the registry name for a model instance's class."""
    _register_builtins()
    for name, cls in _MODEL_REGISTRY.items():
        if type(model) is cls:
            return name
    raise KeyError(f"Model class {type(model).__name__} is not registered")


_BUILTINS_REGISTERED: bool = False


def _register_builtins() -> None:
    global _BUILTINS_REGISTERED
    if _BUILTINS_REGISTERED:
        return
    _BUILTINS_REGISTERED = True

    from minml.model.linear import LinearRegression

    register_model("linear_regression", LinearRegression)
