"""Linear rate rule: activation = slope * input + bias, optionally clipped."""

from dataclasses import dataclass

import numpy as np

from neurotick.params import Parameter
from neurotick.updaterules.base import BoundedUpdateRule, NeuronUpdateRule


@dataclass
class LinearRule(BoundedUpdateRule, NeuronUpdateRule):
    """The default rate-coded update rule.

    Parameters
    ----------
    slope : float
        Gain applied to the input.
    bias : float
        Constant added after the gain.
    clipping : bool
        If True, activations are clipped to [lower_bound, upper_bound].
    lower_bound, upper_bound : float
        Clipping range.
    """
    slope: float = 1.0
    bias: float = 0.0
    clipping: bool = True
    lower_bound: float = -1.0
    upper_bound: float = 1.0

    PARAMETERS = (
        Parameter("slope", "Slope", "Slope of the linear function.", order=1),
        Parameter("bias", "Bias", "Constant added to the weighted input.",
                  order=2),
    )
    name = "Linear"

    def _activation(self, inputs):
        values = self.slope * inputs + self.bias
        return self.clip(values) if self.clipping else values

    def apply_scalar(self, neuron, data):
        neuron.activation = float(self._activation(neuron.input))

    def apply_matrix(self, layer, data):
        layer.set_activations(self._activation(layer.inputs))

    def derivative(self, layer):
        derivative = np.full(layer.size, self.slope, dtype=np.float64)
        if self.clipping:
            values = self.slope * layer.inputs + self.bias
            outside = (values < self.lower_bound) | (values > self.upper_bound)
            derivative[outside] = 0.0
        return derivative

    def copy(self):
        return LinearRule(self.slope, self.bias, self.clipping,
                          self.lower_bound, self.upper_bound)
