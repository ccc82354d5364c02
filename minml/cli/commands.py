# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the minml CLI.

Each function here corresponds to one subcommand and returns an exit code.
Results are reported through the structured logger, never print().

Error mapping:
  ConfigError                                  -> CONFIG_ERROR
  DatasetError, EmptyDatasetError,
  InvalidConfigError, ModelLoadError           -> VALIDATION_ERROR
  NumericInstabilityError and anything else    -> RUNTIME_ERROR
"""

import argparse
import logging
from pathlib import Path

from minml.cli.exit_codes import (
    CONFIG_ERROR,
    RUNTIME_ERROR,
    SUCCESS,
    USER_ERROR,
    VALIDATION_ERROR,
)
from minml.config.exceptions import ConfigError
from minml.config.loader import build_training_config, load_config
from minml.config.schema import DataConfig, MinMLConfig, TrainConfig
from minml.data.exceptions import DatasetError
from minml.logging.logger import configure_logging, get_logger
from minml.runtime.bootstrap import bootstrap
from minml.training.exceptions import (
    EmptyDatasetError,
    InvalidConfigError,
    NumericInstabilityError,
)


def _setup(
    args: argparse.Namespace,
    command: str,
) -> tuple[int, MinMLConfig | None, logging.Logger]:
    """
    Configure logging and, when --config is given, load the file and bootstrap
    the runtime from its global section.

    --log-level wins over global.log_level; with neither, INFO is used.

    Returns (exit_code, config, logger). Anything but SUCCESS ends the command.
    """
    configure_logging(args.log_level or "INFO")
    logger = get_logger(f"minml.cli.{command}")

    if args.config is None:
        logger.debug("Using built-in defaults", extra={"command": command})
        return SUCCESS, None, logger

    try:
        config = load_config(Path(args.config))
    except ConfigError as err:
        logger.error(
            "Cannot use config file",
            extra={"command": command, "path": args.config, "error": str(err)},
        )
        return CONFIG_ERROR, None, logger

    global_cfg = config.global_config
    if args.log_level is not None:
        global_cfg = global_cfg.model_copy(update={"log_level": args.log_level})
    bootstrap(global_cfg)
    return SUCCESS, config, logger


def _resolve_data_config(
    args: argparse.Namespace,
    config: MinMLConfig | None,
) -> DataConfig | None:
    """--data overrides the path from the config but keeps its parsing options."""
    data_cfg = config.data if config is not None else None
    override = getattr(args, "data", None)
    if override is None:
        return data_cfg
    if data_cfg is None:
        return DataConfig(path=override)
    return data_cfg.model_copy(update={"path": override})


def handle_train(args: argparse.Namespace) -> int:
    """Load data, optionally standardize it, fit a model and save it."""
    exit_code, config, logger = _setup(args, "train")
    if exit_code != SUCCESS:
        return exit_code

    data_cfg = _resolve_data_config(args, config)
    if data_cfg is None:
        logger.error(
            "No data source: pass --data or add a data section to the config",
            extra={"command": "train"},
        )
        return USER_ERROR

    train_cfg = config.train if config is not None and config.train is not None else TrainConfig()
    model_type = config.model.type if config is not None else "linear_regression"
    output = args.output if args.output is not None else train_cfg.output_path

    from minml.data.csv_loader import load_csv
    from minml.data.normalize import standardize
    from minml.evaluation.metrics import evaluate
    from minml.model.registry import create_model
    from minml.model.serialization import save_model
    from minml.training.engine.core import train

    try:
        model = create_model(model_type)
    except KeyError as err:
        logger.error("Unknown model type", extra={"error": str(err)})
        return CONFIG_ERROR

    try:
        dataset = load_csv(
            Path(data_cfg.path),
            has_header=data_cfg.has_header,
            delimiter=data_cfg.delimiter,
        )

        raw_dataset = dataset
        standardizer = None
        if data_cfg.normalize:
            dataset, standardizer = standardize(raw_dataset)

        if args.dry_run:
            logger.info(
                "Dry run: would train",
                extra={
                    "records": dataset.size,
                    "model_type": model_type,
                    "epochs": train_cfg.epochs,
                    "learning_rate": train_cfg.learning_rate,
                },
            )
            return SUCCESS

        result = train(dataset, model, build_training_config(train_cfg))
        report = evaluate(model, raw_dataset, standardizer)

        logger.info(
            "Training finished",
            extra={
                "model_type": model_type,
                "epochs": result.epochs_completed,
                "final_loss": result.final_loss,
                "parameters": result.parameters,
                "evaluation": report.to_dict(),
            },
        )

        if output is not None:
            save_model(
                model,
                Path(output),
                metadata={
                    "epochs": result.epochs_completed,
                    "learning_rate": train_cfg.learning_rate,
                    "final_loss": result.final_loss,
                    "r2": report.r2,
                    "standardizer": standardizer.to_dict() if standardizer is not None else None,
                },
            )
        return SUCCESS

    except (DatasetError, EmptyDatasetError, InvalidConfigError) as err:
        logger.error("Invalid training input", extra={"error": str(err)})
        return VALIDATION_ERROR
    except NumericInstabilityError as err:
        logger.error(
            "Training diverged, try a smaller learning rate",
            extra={"error": str(err), "epoch": err.epoch},
        )
        return RUNTIME_ERROR
    except Exception as err:
        logger.error("Training failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR


def handle_predict(args: argparse.Namespace) -> int:
    """Run a saved model on one or more input values."""
    exit_code, _config, logger = _setup(args, "predict")
    if exit_code != SUCCESS:
        return exit_code

    from minml.data.normalize import Standardizer
    from minml.model.serialization import ModelLoadError, load_model

    try:
        model, metadata = load_model(Path(args.model))

        standardizer = None
        if metadata.get("standardizer"):
            standardizer = Standardizer.from_dict(metadata["standardizer"])

        for x in args.x:
            if standardizer is not None:
                y = standardizer.inverse_label(model.predict(standardizer.transform_feature(x)))
            else:
                y = model.predict(x)
            logger.info("Prediction", extra={"x": x, "y": y})
        return SUCCESS

    except (ModelLoadError, DatasetError) as err:
        logger.error("Cannot load model", extra={"error": str(err)})
        return VALIDATION_ERROR
    except Exception as err:
        logger.error("Prediction failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR


def handle_stats(args: argparse.Namespace) -> int:
    """Log descriptive statistics for both dataset columns."""
    exit_code, config, logger = _setup(args, "stats")
    if exit_code != SUCCESS:
        return exit_code

    data_cfg = _resolve_data_config(args, config)
    if data_cfg is None:
        logger.error(
            "No data source: pass --data or add a data section to the config",
            extra={"command": "stats"},
        )
        return USER_ERROR

    from minml.data.csv_loader import load_csv
    from minml.math.statistics import describe

    try:
        dataset = load_csv(
            Path(data_cfg.path),
            has_header=data_cfg.has_header,
            delimiter=data_cfg.delimiter,
        )
        if dataset.is_empty():
            logger.error("Dataset is empty", extra={"path": data_cfg.path})
            return VALIDATION_ERROR

        logger.info("Feature statistics", extra=describe(dataset.features.tolist()).to_dict())
        logger.info("Label statistics", extra=describe(dataset.labels.tolist()).to_dict())
        return SUCCESS

    except DatasetError as err:
        logger.error("Invalid dataset", extra={"error": str(err)})
        return VALIDATION_ERROR
    except Exception as err:
        logger.error("Stats failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR


def handle_info(args: argparse.Namespace) -> int:
    """Log environment information and the registered model types."""
    exit_code, _config, logger = _setup(args, "info")
    if exit_code != SUCCESS:
        return exit_code

    from minml.model.registry import list_model_types
    from minml.runtime.environment import get_system_info

    info = get_system_info()
    logger.info(
        "Environment",
        extra={
            "python_version": info.python_version,
            "platform": info.platform,
            "architecture": info.architecture,
            "torch_version": info.torch_version,
            "model_types": list_model_types(),
        },
    )
    return SUCCESS
