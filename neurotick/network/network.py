"""Tick driver for networks of neurons, synapses, layers and connectors.

Each call to ``update`` advances the network by one time step in four
phases:

    1. spike responders of every synapse and connector
    2. input aggregation for every neuron and layer
    3. update rules of every unclamped neuron and layer
    4. learning rules of every synapse

Within a phase, models are visited in insertion order. Phase 1 reads the
spikes produced by phase 3 of the previous tick, and phase 3 reads inputs
that were fully settled in phase 2.
"""

from copy import deepcopy

import numpy as np

from neurotick.network.models import Neuron, NeuronArray, Synapse, WeightMatrix
from neurotick.utils import get_logger

LOG = get_logger("network")


class Network:
    """A container of network models with a discrete-time update.

    Parameters
    ----------
    time_step : float
        Simulated time per tick (ms).
    """

    def __init__(self, time_step=0.1):
        self.time_step = time_step
        self.time = 0.0
        self.n_ticks = 0
        self.neurons = []
        self.synapses = []
        self.layers = []
        self.connectors = []

    def add(self, *models):
        """Add models to the network. Returns the last one added."""
        for model in models:
            if isinstance(model, Neuron):
                self.neurons.append(model)
            elif isinstance(model, Synapse):
                self.synapses.append(model)
            elif isinstance(model, NeuronArray):
                self.layers.append(model)
            elif isinstance(model, WeightMatrix):
                self.connectors.append(model)
            else:
                raise TypeError(f"Cannot add {type(model).__name__} to a Network")
        return models[-1] if models else None

    def remove(self, *models):
        """Remove models from the network.

        Raises
        ------
        ValueError
            If a model is not in the network.
        """
        for model in models:
            for container in (self.neurons, self.synapses,
                              self.layers, self.connectors):
                if any(m is model for m in container):
                    container[:] = [m for m in container if m is not model]
                    break
            else:
                raise ValueError(f"{model!r} is not in this network")

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update(self):
        """Advance the network by one tick."""
        # 1. Spike responders
        for edge in self.synapses + self.connectors:
            if edge.spike_responder is not None:
                edge.spike_responder.apply(edge, edge.responder_data, self.time_step)

        # 2. Input aggregation
        for neuron in self.neurons:
            neuron.input = neuron.external_input
            neuron.external_input = 0.0
        for synapse in self.synapses:
            synapse.target.input += synapse.output()
        for layer in self.layers:
            layer.set_inputs(layer.external_input)
            layer.external_input[:] = 0.0
        for connector in self.connectors:
            connector.target.inputs[:] += connector.output()

        # 3. Update rules
        for node in self.neurons + self.layers:
            if not node.clamped:
                node.update_rule.apply(node, node.data_holder)

        # 4. Learning rules
        for synapse in self.synapses:
            if synapse.learning_rule is not None:
                synapse.learning_rule.apply(synapse, synapse.learning_data)

        self.n_ticks += 1
        self.time = self.n_ticks * self.time_step

    def run(self, n_ticks, callback=None):
        """Run n_ticks updates.

        Parameters
        ----------
        n_ticks : int
            Number of ticks.
        callback : callable, optional
            Called after every tick as callback(tick, network).
        """
        LOG.info("Starting run: %d neurons, %d synapses, %d layers, "
                 "%d connectors, %d ticks, dt=%.3f",
                 len(self.neurons), len(self.synapses), len(self.layers),
                 len(self.connectors), n_ticks, self.time_step)
        for tick in range(n_ticks):
            self.update()
            if callback is not None:
                callback(tick, self)
        LOG.info("Run complete at t=%.3f", self.time)
        return self

    def copy(self):
        """An independent deep copy, valid at any point of a run."""
        return deepcopy(self)

    def summary(self):
        """Return a summary string."""
        n_units = len(self.neurons) + int(np.sum([l.size for l in self.layers]))
        lines = [
            f"Network: {n_units:,} units "
            f"({len(self.neurons)} neurons, {len(self.layers)} layers)",
            f"  edges: {len(self.synapses)} synapses, "
            f"{len(self.connectors)} connectors",
            f"  time: {self.time:.3f} ms after {self.n_ticks} ticks "
            f"(dt={self.time_step})",
        ]
        return "\n".join(lines)
