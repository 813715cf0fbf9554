"""Tests for neuron and layer update rules."""

import numpy as np
import pytest

from neurotick.errors import UnsupportedOperationError
from neurotick.network import Neuron, NeuronArray
from neurotick.updaterules import (
    BiasedSoftmaxRule, LinearRule, SoftmaxRule, SpikingThresholdRule, softmax,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def softmax_layer():
    layer = NeuronArray(4, SoftmaxRule(), label="softmax")
    layer.set_inputs([1.0, 2.0, 3.0, 4.0])
    return layer


@pytest.fixture
def random_inputs():
    rng = np.random.RandomState(42)
    vectors = [rng.normal(0, 5, size=n) for n in (1, 2, 5, 20, 100)]
    vectors.append(np.array([1000.0, -1000.0, 999.0]))
    vectors.append(np.zeros(6))
    return vectors


# ---------------------------------------------------------------------------
# Softmax
# ---------------------------------------------------------------------------

class TestSoftmax:

    def test_sums_to_one_and_bounded(self, random_inputs):
        for temperature in (0.1, 1.0, 10.0):
            for x in random_inputs:
                a = softmax(x, temperature)
                assert abs(a.sum() - 1.0) < 1e-9
                assert np.all(a >= 0.0)
                assert np.all(a <= 1.0)

    def test_matches_direct_formula(self):
        x = np.array([0.5, -1.0, 2.0])
        expected = np.exp(x / 0.7) / np.exp(x / 0.7).sum()
        np.testing.assert_allclose(softmax(x, 0.7), expected, rtol=1e-12)

    def test_high_temperature_approaches_uniform(self):
        x = np.array([1.0, 2.0, 3.0, 4.0])
        spreads = [np.ptp(softmax(x, t)) for t in (1.0, 10.0, 100.0, 1e4)]
        assert spreads == sorted(spreads, reverse=True)
        assert spreads[-1] < 1e-3

    def test_low_temperature_approaches_one_hot(self):
        x = np.array([1.0, 2.0, 4.0, 3.0])
        a = softmax(x, 1e-3)
        assert a[2] == pytest.approx(1.0, abs=1e-9)
        assert a.argmax() == 2

    def test_zero_temperature_gives_nan_without_raising(self):
        a = softmax(np.array([1.0, 2.0]), 0.0)
        assert np.isnan(a).any()

    def test_apply_matrix_writes_activations(self, softmax_layer):
        rule = softmax_layer.update_rule
        activations = softmax_layer.activations
        rule.apply(softmax_layer, softmax_layer.data_holder)
        assert softmax_layer.activations is activations
        np.testing.assert_allclose(activations, softmax([1.0, 2.0, 3.0, 4.0]))

    def test_inputs_ignore_biases(self, softmax_layer):
        softmax_layer.set_biases([10.0, 0.0, 0.0, 0.0])
        softmax_layer.update_rule.apply(softmax_layer, softmax_layer.data_holder)
        assert softmax_layer.activations.argmax() == 3

    def test_scalar_apply_is_unsupported(self):
        neuron = Neuron(SoftmaxRule())
        with pytest.raises(UnsupportedOperationError):
            neuron.update_rule.apply(neuron, neuron.data_holder)
        with pytest.raises(NotImplementedError):
            SoftmaxRule().apply_scalar(neuron, neuron.data_holder)

    def test_no_derivative(self, softmax_layer):
        with pytest.raises(UnsupportedOperationError):
            SoftmaxRule().derivative(softmax_layer)

    def test_bounds_are_fixed(self):
        rule = SoftmaxRule(temperature=5.0)
        rule.lower_bound = -3.0
        rule.upper_bound = 7.0
        assert rule.lower_bound == 0.0
        assert rule.upper_bound == 1.0

    def test_copy_is_independent(self):
        rule = SoftmaxRule(temperature=0.5)
        clone = rule.copy()
        assert clone == rule
        clone.temperature = 2.0
        assert rule.temperature == 0.5


class TestBiasedSoftmax:

    def test_uses_activations_plus_biases(self):
        layer = NeuronArray(3, BiasedSoftmaxRule(temperature=2.0))
        layer.set_inputs([100.0, 0.0, 0.0])
        layer.set_activations([0.1, 0.2, 0.3])
        layer.set_biases([0.5, -0.5, 0.0])
        layer.update_rule.apply(layer, layer.data_holder)
        expected = softmax(np.array([0.6, -0.3, 0.3]), 2.0)
        np.testing.assert_allclose(layer.activations, expected, rtol=1e-12)
        assert abs(layer.activations.sum() - 1.0) < 1e-9

    def test_derivative_is_diagonal(self):
        layer = NeuronArray(5, BiasedSoftmaxRule())
        layer.set_activations([0.3, -1.0, 2.0, 0.0, 0.7])
        layer.set_biases([0.1, 0.2, 0.3, 0.4, 0.5])
        rule = layer.update_rule
        rule.apply(layer, layer.data_holder)
        a = layer.activations
        derivative = rule.derivative(layer)
        assert derivative.shape == (5,)
        np.testing.assert_array_equal(derivative, a * (1 - a))

    def test_copy_keeps_type(self):
        clone = BiasedSoftmaxRule(temperature=3.0).copy()
        assert isinstance(clone, BiasedSoftmaxRule)
        assert clone.temperature == 3.0


# ---------------------------------------------------------------------------
# Linear and spiking rules
# ---------------------------------------------------------------------------

class TestLinearRule:

    def test_scalar_clipped(self):
        neuron = Neuron(LinearRule(slope=2.0, bias=0.5))
        neuron.input = 1.0
        neuron.update_rule.apply(neuron, neuron.data_holder)
        assert neuron.activation == 1.0

    def test_scalar_unclipped(self):
        neuron = Neuron(LinearRule(slope=2.0, bias=0.5, clipping=False))
        neuron.input = 1.0
        neuron.update_rule.apply(neuron, neuron.data_holder)
        assert neuron.activation == 2.5

    def test_matrix_and_derivative(self):
        layer = NeuronArray(3, LinearRule(slope=0.5))
        layer.set_inputs([-4.0, 1.0, 4.0])
        layer.update_rule.apply(layer, layer.data_holder)
        np.testing.assert_array_equal(layer.activations, [-1.0, 0.5, 1.0])
        np.testing.assert_array_equal(layer.update_rule.derivative(layer),
                                      [0.0, 0.5, 0.0])


class TestSpikingThresholdRule:

    def test_scalar_spike(self):
        neuron = Neuron(SpikingThresholdRule(threshold=0.5))
        neuron.input = 0.7
        neuron.update_rule.apply(neuron, neuron.data_holder)
        assert neuron.spiked
        assert neuron.activation == 1.0
        neuron.input = 0.2
        neuron.update_rule.apply(neuron, neuron.data_holder)
        assert not neuron.spiked
        assert neuron.activation == 0.0

    def test_matrix_spikes(self):
        layer = NeuronArray(4, SpikingThresholdRule(threshold=1.0))
        layer.set_inputs([0.0, 1.0, 2.0, 0.99])
        layer.update_rule.apply(layer, layer.data_holder)
        np.testing.assert_array_equal(layer.spikes, [False, True, True, False])
        np.testing.assert_array_equal(layer.activations, [0.0, 1.0, 1.0, 0.0])

    def test_is_spiking(self):
        assert SpikingThresholdRule().is_spiking_rule
        assert not LinearRule().is_spiking_rule
