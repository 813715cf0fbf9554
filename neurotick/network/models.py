"""Network models: neurons, synapses, layers and weight-matrix connectors.

Scalar models (Neuron, Synapse) hold one value each. Matrix models
(NeuronArray, WeightMatrix) hold vectors and matrices sized at
construction time. Every model declares its ``kind`` so the tick driver
can pick the scalar or matrix entry point of a rule without type checks.

Assigning a rule to a model creates the rule's state holder for that
model; the model owns it exclusively.
"""

import numpy as np

from neurotick.errors import ShapeMismatchError
from neurotick.state import LayerActivationState, RuleKind, SpikingMatrixData
from neurotick.updaterules.linear import LinearRule


# ---------------------------------------------------------------------------
# Scalar models
# ---------------------------------------------------------------------------

class Neuron:
    """A single neuron.

    Parameters
    ----------
    update_rule : NeuronUpdateRule, optional
        Defaults to LinearRule().
    activation : float
        Initial activation.
    label : str
        Display name.
    """
    kind = RuleKind.SCALAR

    def __init__(self, update_rule=None, activation=0.0, label=""):
        self.label = label
        self.activation = activation
        self.input = 0.0
        self.clamped = False
        self.external_input = 0.0
        self.update_rule = update_rule if update_rule is not None else LinearRule()

    @property
    def update_rule(self):
        return self._update_rule

    @update_rule.setter
    def update_rule(self, rule):
        self._update_rule = rule
        self.data_holder = rule.create_scalar_data()

    @property
    def spiked(self):
        """True if the neuron spiked on the last update."""
        return bool(getattr(self.data_holder, "spiked", False))

    def add_input(self, value):
        """Add external input consumed on the next tick."""
        self.external_input += value

    def __repr__(self):
        return f"Neuron({self.label!r}, activation={self.activation:.4f})"


class Synapse:
    """A weighted scalar connection between two neurons.

    Parameters
    ----------
    source, target : Neuron
    strength : float
        Synaptic weight, kept within [lower_bound, upper_bound] by learning.
    spike_responder : SpikeResponder, optional
        If set, the synapse transmits its post-synaptic response instead of
        strength * source activation.
    learning_rule : optional
        Rule applied to the strength once per tick.
    """
    kind = RuleKind.SCALAR

    def __init__(self, source, target, strength=1.0, spike_responder=None,
                 learning_rule=None, lower_bound=-100.0, upper_bound=100.0):
        self.source = source
        self.target = target
        self.strength = strength
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound
        self.spike_responder = spike_responder
        self.learning_rule = learning_rule

    @property
    def spike_responder(self):
        return self._spike_responder

    @spike_responder.setter
    def spike_responder(self, responder):
        self._spike_responder = responder
        self.responder_data = (responder.create_scalar_data()
                               if responder is not None else None)

    @property
    def learning_rule(self):
        return self._learning_rule

    @learning_rule.setter
    def learning_rule(self, rule):
        self._learning_rule = rule
        self.learning_data = (rule.create_scalar_data()
                              if rule is not None else None)

    @property
    def psr(self):
        """Post-synaptic response, or None without a spike responder."""
        if self.responder_data is None:
            return None
        return self.responder_data.post_synaptic_response

    def clip(self, value):
        return min(max(value, self.lower_bound), self.upper_bound)

    def output(self):
        """Value delivered to the target neuron this tick."""
        if self.spike_responder is not None:
            return self.psr
        return self.strength * self.source.activation

    def __repr__(self):
        return f"Synapse({self.source.label!r}->{self.target.label!r}, strength={self.strength:.4f})"


# ---------------------------------------------------------------------------
# Matrix models
# ---------------------------------------------------------------------------

class NeuronArray:
    """A layer of units updated together.

    Parameters
    ----------
    size : int
        Number of units. The layer is never resized.
    update_rule : NeuronUpdateRule, optional
        Defaults to LinearRule().
    label : str
        Display name.
    """
    kind = RuleKind.MATRIX

    def __init__(self, size, update_rule=None, label=""):
        self.size = size
        self.label = label
        self.clamped = False
        self.state = LayerActivationState(size)
        self.external_input = np.zeros(size, dtype=np.float64)
        self.update_rule = update_rule if update_rule is not None else LinearRule()

    @property
    def update_rule(self):
        return self._update_rule

    @update_rule.setter
    def update_rule(self, rule):
        self._update_rule = rule
        self.data_holder = rule.create_matrix_data(self.size)

    @property
    def inputs(self):
        return self.state.inputs

    @property
    def biases(self):
        return self.state.biases

    @property
    def activations(self):
        return self.state.activations

    def set_inputs(self, values):
        self.state.set_inputs(values)

    def set_biases(self, values):
        self.state.set_biases(values)

    def set_activations(self, values):
        self.state.set_activations(values)

    @property
    def spikes(self):
        """Per-unit spike flags; all False unless the rule is spiking."""
        if isinstance(self.data_holder, SpikingMatrixData):
            return self.data_holder.spikes
        return np.zeros(self.size, dtype=bool)

    def add_inputs(self, values):
        """Add an external input vector consumed on the next tick."""
        values = np.asarray(values, dtype=np.float64)
        if values.shape != (self.size,):
            raise ShapeMismatchError(
                f"inputs must have shape ({self.size},), got {values.shape}")
        self.external_input += values

    def __repr__(self):
        return f"NeuronArray({self.label!r}, size={self.size}, rule={self.update_rule})"


class WeightMatrix:
    """A dense connector from a source layer to a target layer.

    ``weight_matrix[i, j]`` is the weight from source unit j to target
    unit i, so the matrix has shape (target.size, source.size).

    Parameters
    ----------
    source, target : NeuronArray
    weights : array-like, optional
        Initial weights. Defaults to the identity (unit i of the source
        drives unit i of the target), or to samples from ``randomizer``
        when one is given.
    spike_responder : SpikeResponder, optional
        If set, the connector transmits the row sums of its response matrix.
    randomizer : ProbabilityDistribution, optional
        Distribution used to initialize the weights.
    """
    kind = RuleKind.MATRIX

    def __init__(self, source, target, weights=None, spike_responder=None,
                 randomizer=None):
        self.source = source
        self.target = target
        shape = (target.size, source.size)
        if weights is None:
            if randomizer is not None:
                weights = randomizer.sample_double(shape[0] * shape[1]).reshape(shape)
            else:
                weights = np.eye(*shape)
        weights = np.array(weights, dtype=np.float64)
        if weights.shape != shape:
            raise ShapeMismatchError(
                f"weights must have shape {shape} (target x source), "
                f"got {weights.shape}")
        self.weight_matrix = weights
        self.spike_responder = spike_responder

    @property
    def shape(self):
        return self.weight_matrix.shape

    @property
    def spike_responder(self):
        return self._spike_responder

    @spike_responder.setter
    def spike_responder(self, responder):
        self._spike_responder = responder
        self.responder_data = (responder.create_matrix_data(*self.shape)
                               if responder is not None else None)

    @property
    def psr_matrix(self):
        """Post-synaptic response matrix, or None without a responder."""
        if self.responder_data is None:
            return None
        return getattr(self.responder_data, "response_matrix", None)

    def output(self):
        """Input vector delivered to the target layer this tick."""
        psr = self.psr_matrix
        if psr is not None:
            return psr.sum(axis=1)
        return self.weight_matrix @ self.source.activations

    def __repr__(self):
        return f"WeightMatrix({self.source.label!r}->{self.target.label!r}, shape={self.shape})"
