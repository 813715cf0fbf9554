"""Softmax layer activation.

Softmax is a whole-layer computation: each output depends on every input
of the layer. The scalar form is therefore unsupported.

    a_k = exp(x_k / T) / Σ_j exp(x_j / T)

T is the temperature. Above 1 the distribution flattens, between 0 and 1
it sharpens towards the largest input.
"""

from dataclasses import dataclass

import numpy as np

from neurotick.errors import UnsupportedOperationError
from neurotick.params import Parameter
from neurotick.updaterules.base import BoundedUpdateRule, NeuronUpdateRule


def softmax(values, temperature=1.0, bias=None):
    """Normalized exponentials of (values + bias) / temperature.

    The maximum logit is subtracted before exponentiating. This leaves the
    result unchanged and keeps large finite inputs from overflowing.
    A zero temperature is not guarded against; it produces nan.
    """
    # These are often called "logits", a set of unnormalized values
    logits = np.asarray(values, dtype=np.float64)
    if bias is not None:
        logits = logits + bias
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        logits = logits / temperature
        exponentials = np.exp(logits - np.max(logits))
        return exponentials / np.sum(exponentials)


TEMPERATURE = Parameter(
    name="temperature",
    label="Temperature",
    description='Above 1 is a "hotter", more chaotic, and thus flatter '
                'distribution. 0 to 1 is a "cooler", more predictable, '
                'sharper distribution.',
    minimum=0.0,
    exclusive_minimum=True,
    increment=0.1,
    order=10,
)


@dataclass
class SoftmaxRule(BoundedUpdateRule, NeuronUpdateRule):
    """Softmax over the layer's inputs.

    Output bounds are always [0, 1]; assigning them has no effect.
    """
    temperature: float = 1.0

    PARAMETERS = (TEMPERATURE,)
    name = "Softmax"

    def apply_matrix(self, layer, data):
        layer.set_activations(softmax(layer.inputs, self.temperature))

    def apply_scalar(self, neuron, data):
        raise UnsupportedOperationError(
            f"{type(self).__name__} does not support scalar data")

    @property
    def lower_bound(self):
        return 0.0

    @lower_bound.setter
    def lower_bound(self, value):
        pass

    @property
    def upper_bound(self):
        return 1.0

    @upper_bound.setter
    def upper_bound(self, value):
        pass

    def copy(self):
        return type(self)(temperature=self.temperature)


@dataclass
class BiasedSoftmaxRule(SoftmaxRule):
    """Softmax over the layer's current activations plus its biases.

        a_k <- exp((a_k + b_k) / T) / Σ_j exp((a_j + b_j) / T)

    The derivative is the diagonal of the softmax Jacobian only,
    a_k (1 - a_k), evaluated at the current activations. Learning rules
    that consume it expect a vector, not the full matrix.
    """

    name = "Softmax (biased)"

    def apply_matrix(self, layer, data):
        layer.set_activations(
            softmax(layer.activations, self.temperature, layer.biases))

    def derivative(self, layer):
        activations = layer.activations
        return activations * (1 - activations)
