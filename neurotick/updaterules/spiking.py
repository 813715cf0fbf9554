"""Spiking threshold rule: spike whenever the input reaches a threshold."""

from dataclasses import dataclass

from neurotick.state import SpikingMatrixData, SpikingScalarData
from neurotick.params import Parameter
from neurotick.updaterules.base import NeuronUpdateRule


@dataclass
class SpikingThresholdRule(NeuronUpdateRule):
    """Emit a spike (activation 1) when input >= threshold, else 0.

    The spike flags are kept in the neuron's or layer's data holder, which
    is what spike responders read on the next tick.
    """
    threshold: float = 0.5

    PARAMETERS = (
        Parameter("threshold", "Threshold",
                  "Input level at or above which the neuron spikes.",
                  increment=0.1, order=1),
    )
    name = "Spiking threshold"
    is_spiking_rule = True

    def create_scalar_data(self):
        return SpikingScalarData()

    def create_matrix_data(self, size):
        return SpikingMatrixData(size)

    def apply_scalar(self, neuron, data):
        data.spiked = bool(neuron.input >= self.threshold)
        neuron.activation = 1.0 if data.spiked else 0.0

    def apply_matrix(self, layer, data):
        data.spikes[:] = layer.inputs >= self.threshold
        layer.set_activations(data.spikes.astype(float))

    def copy(self):
        return SpikingThresholdRule(self.threshold)
