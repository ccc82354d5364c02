# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
`minml` command line.

Usage:
    minml train --config configs/train.yaml
    minml train --data assets/linear_dataset.csv --output model.json
    minml predict --model model.json --x 3.5 --x 4.0
    minml stats --data assets/linear_dataset.csv
    minml info

--config and --log-level live on a shared parent parser, so they are
accepted after any subcommand. --dry-run belongs to `train` alone.
"""

import argparse
import sys
from typing import Optional, Sequence

from minml.cli.commands import handle_info, handle_predict, handle_stats, handle_train
from minml.cli.exit_codes import USER_ERROR
from minml.logging.logger import LEVEL_NAMES


def _common_options() -> argparse.ArgumentParser:
    # add_help=False, otherwise every subcommand would get two -h flags.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", metavar="PATH", help="YAML config file.")
    common.add_argument(
        "--log-level",
        dest="log_level",
        choices=LEVEL_NAMES,
        help="Minimum level of the JSON log lines; overrides global.log_level (default INFO).",
    )
    return common


def _data_option(parser: argparse.ArgumentParser, purpose: str) -> None:
    parser.add_argument(
        "--data",
        metavar="CSV",
        help=f"CSV file to {purpose}; replaces data.path from the config.",
    )


def build_parser() -> argparse.ArgumentParser:
    common = _common_options()
    parser = argparse.ArgumentParser(
        prog="minml",
        description="Single-variable regression by batch gradient descent.",
        parents=[common],
    )
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    train = commands.add_parser("train", parents=[common], help="Fit a model to a CSV file.")
    _data_option(train, "train on")
    train.add_argument(
        "--output",
        metavar="PATH",
        help="Save the trained model here; replaces train.output_path.",
    )
    train.add_argument(
        "--dry-run",
        dest="dry_run",
        action="store_true",
        help="Load and check inputs, then stop before training or writing files.",
    )
    train.set_defaults(func=handle_train)

    predict = commands.add_parser("predict", parents=[common], help="Run a saved model.")
    predict.add_argument("--model", metavar="PATH", required=True, help="Model file from `minml train`.")
    predict.add_argument(
        "--x",
        type=float,
        action="append",
        required=True,
        help="Input value. Repeat for more predictions.",
    )
    predict.set_defaults(func=handle_predict)

    stats = commands.add_parser("stats", parents=[common], help="Describe both columns of a CSV file.")
    _data_option(stats, "describe")
    stats.set_defaults(func=handle_stats)

    info = commands.add_parser("info", parents=[common], help="Show the environment and model types.")
    info.set_defaults(func=handle_info)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entry point for the `minml` console script. Exits with the handler's code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    handler = getattr(args, "func", None)
    if handler is None:
        parser.print_help()
        sys.exit(USER_ERROR)

    sys.exit(handler(args))


if __name__ == "__main__":
    main()
