"""Tests for perplexity and the stability rule."""

import numpy as np
import pytest

from pagerank.convergence import ConvergenceMonitor, MonitorState, entropy, perplexity


class TestPerplexity:
    def test_uniform_distribution(self) -> None:
        scores = np.full(8, 1 / 8)
        assert entropy(scores) == pytest.approx(3.0)
        assert perplexity(scores) == pytest.approx(8.0)

    def test_point_mass(self) -> None:
        assert perplexity(np.array([1.0])) == pytest.approx(1.0)

    def test_zero_scores_contribute_nothing(self) -> None:
        scores = np.array([0.5, 0.0, 0.5, 0.0])
        assert perplexity(scores) == pytest.approx(2.0)

    def test_skewed_distribution(self) -> None:
        scores = np.array([0.25, 0.75])
        expected = 2 ** -(0.25 * np.log2(0.25) + 0.75 * np.log2(0.75))
        assert perplexity(scores) == pytest.approx(expected)


class TestConvergenceMonitor:
    def feed(self, monitor, values):
        return [monitor.observe(v) for v in values]

    def test_four_rounds_with_same_floor_converge(self) -> None:
        monitor = ConvergenceMonitor()
        assert self.feed(monitor, [3.2, 3.9, 3.1, 3.5]) == [False, False, False, True]
        assert monitor.state is MonitorState.CONVERGED

    def test_first_round_only_starts_a_streak(self) -> None:
        monitor = ConvergenceMonitor()
        assert self.feed(monitor, [10.5, 4.1, 4.2, 4.3, 4.9]) == [
            False,
            False,
            False,
            False,
            True,
        ]

    def test_change_of_floor_resets_streak(self) -> None:
        monitor = ConvergenceMonitor()
        results = self.feed(monitor, [3.1, 3.2, 3.3, 5.0, 5.1, 5.2])
        assert not any(results)
        assert monitor.prev_unit == 5
        assert monitor.stable_count == 3
        assert monitor.observe(5.3)

    def test_drifting_within_one_unit_counts_as_stable(self) -> None:
        monitor = ConvergenceMonitor()
        assert self.feed(monitor, [7.0, 7.3, 7.6, 7.99])[-1]

    def test_trace_records_every_round_in_order(self) -> None:
        monitor = ConvergenceMonitor()
        values = [9.5, 8.25, 8.125, 8.0625, 8.03]
        self.feed(monitor, values)
        assert monitor.trace == values

    def test_converged_state_is_absorbing(self) -> None:
        monitor = ConvergenceMonitor(stable_rounds=2)
        self.feed(monitor, [2.5, 2.6])
        assert monitor.converged
        assert monitor.observe(100.0)
        assert monitor.converged
        assert monitor.trace == [2.5, 2.6]

    def test_configurable_streak_length(self) -> None:
        monitor = ConvergenceMonitor(stable_rounds=6)
        assert not any(self.feed(monitor, [4.0] * 5))
        assert monitor.observe(4.0)

    def test_single_round_streak(self) -> None:
        monitor = ConvergenceMonitor(stable_rounds=1)
        assert monitor.observe(12.0)

    def test_invalid_streak_length(self) -> None:
        with pytest.raises(ValueError):
            ConvergenceMonitor(stable_rounds=0)
