# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CSV ingestion for two-column (feature, label) data.

Each non-blank row must hold exactly two numeric, finite values. The first
column is the feature (x), the second is the label (y). Anything else is a
DatasetParseError naming the 1-based line number. Nothing is skipped
silently except blank lines and, when asked, a single header row.
"""

import csv
import logging
import math
from pathlib import Path

from minml.data.dataset import Dataset
from minml.data.exceptions import DatasetLoadError, DatasetParseError
from minml.logging.logger import get_logger

logger: logging.Logger = get_logger(__name__)

_EXPECTED_COLUMNS = 2


def _parse_value(raw: str, column: str, line_number: int, row_text: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise DatasetParseError(
            line_number, row_text, f"{column} value {raw!r} is not a number"
        ) from None
    if not math.isfinite(value):
        raise DatasetParseError(line_number, row_text, f"{column} value {raw!r} is not finite")
    return value


def load_csv(
    path: Path,
    *,
    has_header: bool = False,
    delimiter: str = ",",
) -> Dataset:
    """
    Read a two-column CSV file into a Dataset.

    Args:
        path: File to read.
        has_header: Treat the first non-blank row as column names.
        delimiter: Single-character column separator.

    Returns:
        A Dataset with one record per data row, in file order.

    Raises:
        DatasetLoadError: If the file is missing, is a directory, or cannot be read.
        DatasetParseError: On the first malformed row.
    """
    if not path.exists():
        raise DatasetLoadError(f"Data file not found: {path}")
    if not path.is_file():
        raise DatasetLoadError(f"Data path is not a file: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise DatasetLoadError(f"Cannot read data file {path}: {err}") from err

    features: list[float] = []
    labels: list[float] = []
    header_pending = has_header

    reader = csv.reader(text.splitlines(), delimiter=delimiter)
    for line_number, row in enumerate(reader, start=1):
        cells = [cell.strip() for cell in row]
        if not cells or all(cell == "" for cell in cells):
            continue

        if header_pending:
            header_pending = False
            continue

        row_text = delimiter.join(row)
        if len(cells) != _EXPECTED_COLUMNS:
            raise DatasetParseError(
                line_number,
                row_text,
                f"expected {_EXPECTED_COLUMNS} columns, got {len(cells)}",
            )

        features.append(_parse_value(cells[0], "feature", line_number, row_text))
        labels.append(_parse_value(cells[1], "label", line_number, row_text))

    dataset = Dataset.from_columns(features, labels)
    logger.info(
        "Dataset loaded",
        extra={"path": str(path), "records": dataset.size, "has_header": has_header},
    )
    return dataset
