"""Base class for spike responders.

A spike responder turns pre-synaptic spikes into a post-synaptic response
(PSR) that evolves over several ticks. The scalar form updates one
synapse; the matrix form updates every cell of a weight-matrix connector.
"""

from abc import ABC, abstractmethod

from neurotick.state import RuleKind


class SpikeResponder(ABC):
    """A per-tick rule shaping the response of a synapse to spikes."""

    PARAMETERS = ()
    name = "Spike responder"

    def apply(self, connector, data, time_step):
        """Dispatch on the declared kind of the connector."""
        if connector.kind is RuleKind.MATRIX:
            return self.apply_matrix(connector, data, time_step)
        return self.apply_scalar(connector, data, time_step)

    @abstractmethod
    def apply_scalar(self, synapse, data, time_step):
        """Update one synapse's response state in place."""

    @abstractmethod
    def apply_matrix(self, connector, data, time_step):
        """Update a weight-matrix connector's response state in place."""

    @abstractmethod
    def create_scalar_data(self):
        """State holder for one synapse."""

    @abstractmethod
    def create_matrix_data(self, rows, cols):
        """State holder for a (rows x cols) connector."""

    @abstractmethod
    def copy(self):
        """Return an independent responder with the same parameters."""

    def __str__(self):
        return self.name
