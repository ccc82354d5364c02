# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the batch gradient descent engine.

We check:
  - convergence on an exact line
  - exact epoch counts and history length
  - non-increasing loss for a small learning rate
  - fail-fast errors leave the model untouched
  - divergence is reported, not propagated
  - batch (not per-record) update semantics
"""

import math

import pytest

from minml.data.dataset import Dataset
from minml.model.linear import LinearRegression
from minml.training.engine.core import TrainingConfig, TrainingResult, train
from minml.training.exceptions import (
    EmptyDatasetError,
    InvalidConfigError,
    NumericInstabilityError,
    TrainingError,
)


class TestConvergence:
    def test_fits_exact_line(self, perfect_line: Dataset) -> None:
        model = LinearRegression()
        train(perfect_line, model, TrainingConfig(epochs=1000, learning_rate=0.01))

        assert model.weight == pytest.approx(2.0, abs=1e-2)
        assert model.bias == pytest.approx(0.0, abs=1e-2)

    def test_longer_training_gets_closer(self, perfect_line: Dataset) -> None:
        model = LinearRegression()
        result = train(perfect_line, model, TrainingConfig(epochs=3000, learning_rate=0.01))

        assert model.weight == pytest.approx(2.0, abs=1e-4)
        assert model.bias == pytest.approx(0.0, abs=1e-4)
        assert result.final_loss < 1e-8

    def test_fits_line_with_offset(self) -> None:
        dataset = Dataset.from_records([(x, 3.0 * x - 1.0) for x in (-2.0, -1.0, 0.0, 1.0, 2.0)])
        model = LinearRegression()
        train(dataset, model, TrainingConfig(epochs=2000, learning_rate=0.05))

        assert model.weight == pytest.approx(3.0, abs=1e-6)
        assert model.bias == pytest.approx(-1.0, abs=1e-6)

    def test_single_record_dataset(self) -> None:
        dataset = Dataset.from_records([(1.0, 5.0)])
        model = LinearRegression()
        result = train(dataset, model, TrainingConfig(epochs=500, learning_rate=0.1))

        assert model.predict(1.0) == pytest.approx(5.0, abs=1e-6)
        assert result.final_loss == pytest.approx(0.0, abs=1e-10)


class TestTrainingResult:
    def test_result_reports_final_parameters(self, perfect_line: Dataset) -> None:
        model = LinearRegression()
        result = train(perfect_line, model, TrainingConfig(epochs=50, learning_rate=0.01))

        assert isinstance(result, TrainingResult)
        assert result.epochs_completed == 50
        assert result.parameters == {"weight": model.weight, "bias": model.bias}

    def test_history_has_one_entry_per_epoch(self, perfect_line: Dataset) -> None:
        result = train(perfect_line, LinearRegression(), TrainingConfig(epochs=37, learning_rate=0.01))
        assert len(result.loss_history) == 37

    def test_first_history_entry_is_initial_loss(self, perfect_line: Dataset) -> None:
        result = train(perfect_line, LinearRegression(), TrainingConfig(epochs=1, learning_rate=0.01))
        # Untrained model predicts 0 everywhere: mean(0, 4, 16, 36) = 14
        assert result.loss_history == (pytest.approx(14.0),)

    def test_history_can_be_disabled(self, perfect_line: Dataset) -> None:
        config = TrainingConfig(epochs=10, learning_rate=0.01, record_history=False)
        result = train(perfect_line, LinearRegression(), config)
        assert result.loss_history == ()
        assert result.epochs_completed == 10

    def test_loss_is_non_increasing_for_small_learning_rate(self, perfect_line: Dataset) -> None:
        result = train(perfect_line, LinearRegression(), TrainingConfig(epochs=500, learning_rate=0.01))
        history = result.loss_history
        assert all(later <= earlier for earlier, later in zip(history, history[1:]))
        assert result.final_loss <= history[-1]


class TestUpdateRule:
    def test_single_epoch_matches_hand_computed_gradient(self, perfect_line: Dataset) -> None:
        # From w = b = 0: residuals are -y = (0, -2, -4, -6), n = 4
        # dw = (2/4) * sum(r * x) = 0.5 * -28 = -14
        # db = (2/4) * sum(r)     = 0.5 * -12 = -6
        model = LinearRegression()
        train(perfect_line, model, TrainingConfig(epochs=1, learning_rate=0.01))

        assert model.weight == pytest.approx(0.14)
        assert model.bias == pytest.approx(0.06)

    def test_update_is_batch_not_per_record(self) -> None:
        records = [(1.0, 1.0), (2.0, 5.0), (-1.0, 0.0)]
        forward = LinearRegression()
        backward = LinearRegression()

        train(Dataset.from_records(records), forward, TrainingConfig(epochs=5, learning_rate=0.05))
        train(
            Dataset.from_records(list(reversed(records))),
            backward,
            TrainingConfig(epochs=5, learning_rate=0.05),
        )

        assert forward.weight == pytest.approx(backward.weight, rel=1e-12, abs=1e-12)
        assert forward.bias == pytest.approx(backward.bias, rel=1e-12, abs=1e-12)

    def test_training_continues_from_current_parameters(self, perfect_line: Dataset) -> None:
        model = LinearRegression(weight=2.0, bias=0.0)
        result = train(perfect_line, model, TrainingConfig(epochs=5, learning_rate=0.01))

        assert result.loss_history == (0.0, 0.0, 0.0, 0.0, 0.0)
        assert model.weight == 2.0
        assert model.bias == 0.0

    def test_dataset_is_not_modified(self, perfect_line: Dataset) -> None:
        before = perfect_line.records
        train(perfect_line, LinearRegression(), TrainingConfig(epochs=20, learning_rate=0.01))
        assert perfect_line.records == before


class TestInvalidConfig:
    @pytest.mark.parametrize(
        "config",
        [
            TrainingConfig(epochs=0, learning_rate=0.1),
            TrainingConfig(epochs=-5, learning_rate=0.1),
            TrainingConfig(epochs=10, learning_rate=0.0),
            TrainingConfig(epochs=10, learning_rate=-0.01),
            TrainingConfig(epochs=10, learning_rate=float("nan")),
            TrainingConfig(epochs=10, learning_rate=float("inf")),
            TrainingConfig(epochs=10, learning_rate=0.1, log_interval=0),
            TrainingConfig(epochs=True, learning_rate=0.1),  # type: ignore[arg-type]
            TrainingConfig(epochs=2.5, learning_rate=0.1),  # type: ignore[arg-type]
        ],
    )
    def test_rejected_before_touching_model(
        self, perfect_line: Dataset, config: TrainingConfig
    ) -> None:
        model = LinearRegression(weight=0.5, bias=-0.25)
        with pytest.raises(InvalidConfigError):
            train(perfect_line, model, config)
        assert model.get_parameters() == (0.5, -0.25)

    def test_invalid_config_checked_before_empty_dataset(self) -> None:
        with pytest.raises(InvalidConfigError):
            train(Dataset.from_records([]), LinearRegression(), TrainingConfig(epochs=0, learning_rate=0.1))


class TestEmptyDataset:
    def test_empty_dataset_raises(self) -> None:
        model = LinearRegression(weight=1.5, bias=2.5)
        with pytest.raises(EmptyDatasetError):
            train(Dataset.from_records([]), model, TrainingConfig(epochs=10, learning_rate=0.01))
        assert model.get_parameters() == (1.5, 2.5)


class TestNumericInstability:
    def test_huge_learning_rate_diverges_within_bounded_epochs(self, perfect_line: Dataset) -> None:
        model = LinearRegression()
        with pytest.raises(NumericInstabilityError) as exc_info:
            train(perfect_line, model, TrainingConfig(epochs=1000, learning_rate=1e10))

        assert 1 <= exc_info.value.epoch <= 50

    def test_model_keeps_last_finite_parameters(self, perfect_line: Dataset) -> None:
        model = LinearRegression()
        with pytest.raises(NumericInstabilityError) as exc_info:
            train(perfect_line, model, TrainingConfig(epochs=1000, learning_rate=1e10))

        assert math.isfinite(model.weight)
        assert math.isfinite(model.bias)
        assert exc_info.value.parameters == {"weight": model.weight, "bias": model.bias}

    def test_errors_share_a_base_class(self) -> None:
        for error_cls in (EmptyDatasetError, InvalidConfigError, NumericInstabilityError):
            assert issubclass(error_cls, TrainingError)


class TestTrainingConfig:
    def test_config_is_frozen(self) -> None:
        config = TrainingConfig(epochs=10, learning_rate=0.1)
        with pytest.raises(Exception):
            config.epochs = 20  # type: ignore[misc]

    def test_defaults(self) -> None:
        config = TrainingConfig(epochs=10, learning_rate=0.1)
        assert config.log_interval == 1
        assert config.record_history is True
