# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Structured per-epoch training metrics.

Every epoch produces an EpochMetrics record (loss, gradient norm, learning
rate, wall time). Records are logged as structured JSON every
`log_interval` epochs, and always for the first epoch.
"""

import logging
import time
from dataclasses import dataclass, field

from minml.logging.logger import get_logger

logger: logging.Logger = get_logger(__name__)


@dataclass(frozen=True)
class EpochMetrics:
    """Metrics collected for a single epoch."""

    epoch: int
    loss: float
    grad_norm: float
    learning_rate: float
    elapsed_ms: float


@dataclass
class MetricsTracker:
    """
    Times epochs and logs their metrics.

    Args:
        log_interval: Log metrics every N epochs.
    """

    log_interval: int = 10
    _epoch_start_time: float = field(default=0.0, init=False)

    def begin_epoch(self) -> None:
        """Mark the beginning of an epoch for timing."""
        self._epoch_start_time = time.monotonic()

    def end_epoch(
        self,
        epoch: int,
        loss: float,
        grad_norm: float,
        learning_rate: float,
    ) -> EpochMetrics:
        """
        Finalize epoch metrics and log them at the configured interval.

        Args:
            epoch: 1-based epoch number.
            loss: Mean-squared error the epoch's gradient was computed from.
            grad_norm: L2 norm of the parameter gradient.
            learning_rate: Step size used for the update.
        """
        elapsed_ms = (time.monotonic() - self._epoch_start_time) * 1000.0

        metrics = EpochMetrics(
            epoch=epoch,
            loss=loss,
            grad_norm=grad_norm,
            learning_rate=learning_rate,
            elapsed_ms=elapsed_ms,
        )

        if epoch == 1 or epoch % self.log_interval == 0:
            self._log_metrics(metrics)

        return metrics

    def _log_metrics(self, metrics: EpochMetrics) -> None:
        logger.info(
            "Training epoch",
            extra={
                "epoch": metrics.epoch,
                "loss": metrics.loss,
                "grad_norm": metrics.grad_norm,
                "lr": metrics.learning_rate,
                "elapsed_ms": round(metrics.elapsed_ms, 3),
            },
        )
