# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Errors raised while building or reading datasets."""


class DatasetError(Exception):
    """Base for dataset construction and preprocessing failures."""


class DatasetLoadError(DatasetError):
    """Raised when a data file is missing or cannot be read."""


class DatasetParseError(DatasetError):
    """
    Raised when a row in a data file is malformed.

    Malformed rows are never skipped. The error names the offending line so
    the input can be fixed instead of silently training on partial data.
    """

    def __init__(self, line_number: int, row: str, reason: str) -> None:
        self.line_number = line_number
        self.row = row
        self.reason = reason
        super().__init__(f"Line {line_number}: {reason} (row: {row!r})")
