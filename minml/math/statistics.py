# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Descriptive statistics over a column of floats.

Variance is the population variance (divide by n), matching what the
standardizer uses. `std_err` is the standard error of the mean.
"""

import math
from collections import Counter
from dataclasses import asdict, dataclass
from typing import Sequence


@dataclass(frozen=True)
class Statistics:
    """Summary of one numeric column."""

    mean: float
    variance: float
    std_dev: float
    std_err: float
    median: float
    mode: float
    min: float
    max: float
    sum: float
    count: int

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


def median(values: Sequence[float]) -> float:
    """Middle value of the sorted data; mean of the two middle values for even counts."""
    if not values:
        raise ValueError("median() of empty data")
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2.0
    return ordered[mid]


def mode(values: Sequence[float]) -> float:
    """
    Most frequent value.

    When several values share the top count the smallest one wins, so the
    result does not depend on input order.
    """
    if not values:
        raise ValueError("mode() of empty data")
    counts = Counter(values)
    top = max(counts.values())
    return min(value for value, count in counts.items() if count == top)


def describe(values: Sequence[float]) -> Statistics:
    """
    Compute the full Statistics summary for a column.

    Raises:
        ValueError: If values is empty.
    """
    if not values:
        raise ValueError("describe() requires at least one value")

    data = [float(v) for v in values]
    count = len(data)
    total = math.fsum(data)
    mean = total / count
    variance = math.fsum((x - mean) ** 2 for x in data) / count
    std_dev = math.sqrt(variance)

    return Statistics(
        mean=mean,
        variance=variance,
        std_dev=std_dev,
        std_err=std_dev / math.sqrt(count),
        median=median(data),
        mode=mode(data),
        min=min(data),
        max=max(data),
        sum=total,
        count=count,
    )
