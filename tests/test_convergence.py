"""Tests for the convergence monitor."""

import numpy as np
import pytest

from cavityflow import ConvergenceMonitor


class TestConvergenceMonitor:
    def test_no_check_during_warmup(self):
        monitor = ConvergenceMonitor(tolerance=1.0, warmup=10)
        zeros = np.zeros((3, 3))

        for iteration in range(1, 11):
            assert monitor.update(iteration, zeros, zeros) is False
        assert monitor.errors == []
        assert monitor.last_error == float("inf")

        assert monitor.update(11, zeros, zeros)
        assert monitor.iterations == [11]

    def test_signed_criterion_ignores_decrease(self):
        monitor = ConvergenceMonitor(tolerance=1e-6, warmup=0, criterion="signed")
        prev = np.ones((3, 3))
        current = prev - 0.5

        # max(w - w_prev) = -0.5 passes although the field still changes
        assert monitor.update(1, current, prev)
        assert monitor.last_error == pytest.approx(-0.5)

    def test_absolute_criterion(self):
        monitor = ConvergenceMonitor(tolerance=1e-6, warmup=0, criterion="absolute")
        prev = np.ones((3, 3))
        current = prev - 0.5

        assert not monitor.update(1, current, prev)
        assert monitor.last_error == pytest.approx(0.5)

    def test_signed_uses_largest_increase(self):
        monitor = ConvergenceMonitor(tolerance=1e-3)
        prev = np.zeros((3, 3))
        current = np.array([[0.0, -2.0, 0.0], [0.0, 0.25, 0.0], [0.0, 0.0, 0.0]])

        assert monitor.measure(current, prev) == pytest.approx(0.25)

    def test_history_accumulates(self):
        monitor = ConvergenceMonitor(tolerance=1e-9, warmup=2, criterion="absolute")
        prev = np.zeros((2, 2))
        for iteration in range(1, 6):
            monitor.update(iteration, prev + 1.0 / iteration, prev)

        assert monitor.iterations == [3, 4, 5]
        np.testing.assert_allclose(monitor.errors, [1 / 3, 1 / 4, 1 / 5])

    def test_unknown_criterion(self):
        with pytest.raises(ValueError, match="Unknown criterion"):
            ConvergenceMonitor(tolerance=1e-6, criterion="l2")
