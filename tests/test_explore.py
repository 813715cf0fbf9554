"""Tests for the exploration traces."""

import math

import numpy as np
import pytest

from neurotick.explore import rise_and_decay_trace, softmax_temperature_sweep


class TestRiseAndDecayTrace:

    def test_single_spike_trace(self):
        trace = rise_and_decay_trace(spike_ticks=[0], n_ticks=50)
        assert list(trace.columns) == [
            "tick", "time", "source_spiked", "psr", "recovery", "target_input",
        ]
        assert trace.loc[0, "source_spiked"]
        assert trace.loc[0, "psr"] == 0.0
        assert trace.loc[1, "psr"] == pytest.approx(2.0 * math.e / 9.0, abs=1e-9)
        assert trace["psr"].idxmax() == 1
        assert trace["psr"].iloc[-1] < 1e-6

    def test_second_spike_resets_recovery(self):
        trace = rise_and_decay_trace(spike_ticks=[0, 10], n_ticks=20)
        assert trace.loc[11, "recovery"] == pytest.approx(2.0 / 3.0)
        assert trace.loc[11, "psr"] > trace.loc[10, "psr"]

    def test_strength_scales_trace(self):
        full = rise_and_decay_trace(n_ticks=3, strength=1.0)
        half = rise_and_decay_trace(n_ticks=3, strength=0.5)
        assert half.loc[1, "psr"] == pytest.approx(0.5 * full.loc[1, "psr"])


class TestSoftmaxSweep:

    def test_spread_shrinks_with_temperature(self):
        frame = softmax_temperature_sweep([1.0, 2.0, 3.0], [0.1, 1.0, 10.0, 100.0])
        assert list(frame.index) == [0.1, 1.0, 10.0, 100.0]
        assert frame["spread"].is_monotonic_decreasing
        rows = frame[["unit_0", "unit_1", "unit_2"]].to_numpy()
        np.testing.assert_allclose(rows.sum(axis=1), 1.0)
