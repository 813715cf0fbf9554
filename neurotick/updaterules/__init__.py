"""updaterules — Neuron and layer activation rules.

    LinearRule            rate-coded, the default for neurons and layers
    SpikingThresholdRule  binary spikes, readable by spike responders
    SoftmaxRule           whole-layer softmax over inputs
    BiasedSoftmaxRule     softmax over activations + biases, with derivative
"""

from .base import NeuronUpdateRule, BoundedUpdateRule
from .linear import LinearRule
from .spiking import SpikingThresholdRule
from .softmax import SoftmaxRule, BiasedSoftmaxRule, softmax
