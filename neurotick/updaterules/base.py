"""Base class for neuron update rules.

An update rule turns the inputs of a neuron (scalar form) or a layer
(matrix form) into activations. The network calls ``apply`` once per tick
for every unclamped neuron and layer, after all incoming responders have
run and inputs have been aggregated.
"""

from abc import ABC, abstractmethod

import numpy as np

from neurotick.errors import UnsupportedOperationError
from neurotick.state import EmptyMatrixData, EmptyScalarData, RuleKind


class NeuronUpdateRule(ABC):
    """A per-tick rule computing activations from inputs.

    Subclasses implement ``apply_scalar`` and ``apply_matrix``. A rule that
    only makes sense for whole layers raises UnsupportedOperationError from
    ``apply_scalar``.
    """

    PARAMETERS = ()
    name = "Update rule"
    is_spiking_rule = False

    def apply(self, model, data):
        """Dispatch on the declared kind of the model."""
        if model.kind is RuleKind.MATRIX:
            return self.apply_matrix(model, data)
        return self.apply_scalar(model, data)

    @abstractmethod
    def apply_scalar(self, neuron, data):
        """Update a single neuron in place."""

    @abstractmethod
    def apply_matrix(self, layer, data):
        """Update a whole layer in place."""

    def derivative(self, layer):
        """Derivative of the activations with respect to the inputs.

        Raises
        ------
        UnsupportedOperationError
            Unless the rule defines a derivative.
        """
        raise UnsupportedOperationError(
            f"{type(self).__name__} does not define a derivative")

    def create_scalar_data(self):
        return EmptyScalarData()

    def create_matrix_data(self, size):
        return EmptyMatrixData(size)

    @abstractmethod
    def copy(self):
        """Return an independent rule with the same parameters."""

    def __str__(self):
        return self.name


class BoundedUpdateRule:
    """Mixin for rules whose activations lie in [lower_bound, upper_bound]."""
    lower_bound = -1.0
    upper_bound = 1.0

    def clip(self, values):
        return np.clip(values, self.lower_bound, self.upper_bound)
