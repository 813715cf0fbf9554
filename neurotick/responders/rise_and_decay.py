"""Rise-and-decay spike response.

On a pre-synaptic spike the recovery variable jumps to 1 and then relaxes
exponentially. The response rises towards a peak driven by recovery and
decays back to baseline, producing an alpha-like PSR:

    recovery <- 1                                   (if spiked)
    recovery += dt/τ * (-recovery)
    psr      += dt/τ * (e * R_max * recovery * (1 - psr) - psr)
    psr      *= strength

The same arithmetic is used for one synapse and, elementwise, for a whole
weight matrix. Every matrix cell is independent of the others.
"""

import math
from dataclasses import dataclass

import numpy as np

from neurotick.errors import ConnectorMismatchError
from neurotick.network.models import NeuronArray, WeightMatrix
from neurotick.state import (
    RiseAndDecayData,
    RiseAndDecayMatrixData,
    SpikingMatrixData,
)
from neurotick.params import Parameter
from neurotick.responders.base import SpikeResponder


def rise_and_decay(spiked, psr, recovery, strength, time_step,
                   maximum_response=1.0, time_constant=3.0):
    """One rise-and-decay step for a single synapse.

    Parameters
    ----------
    spiked : bool
        Whether the pre-synaptic neuron spiked this tick.
    psr, recovery : float
        Prior response and recovery.
    strength : float
        Synaptic strength scaling the new response.
    time_step : float
        Network time step.
    maximum_response, time_constant : float
        Responder parameters.

    Returns
    -------
    tuple of float
        (new_psr, new_recovery)
    """
    if spiked:
        recovery = 1.0
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        rate = np.float64(time_step) / time_constant
        recovery += rate * -recovery
        psr += rate * (math.e * maximum_response * recovery * (1 - psr) - psr)
        psr *= strength
    return float(psr), float(recovery)


def rise_and_decay_matrix(spikes, psr, recovery, strengths, time_step,
                          maximum_response=1.0, time_constant=3.0):
    """Elementwise rise_and_decay over a (target x source) matrix.

    ``spikes`` has one entry per source unit (column). ``psr`` and
    ``recovery`` are updated in place and also returned.
    """
    recovery[:, np.asarray(spikes, dtype=bool)] = 1.0
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        rate = np.float64(time_step) / time_constant
        recovery += rate * -recovery
        psr += rate * (math.e * maximum_response * recovery * (1 - psr) - psr)
        psr *= strengths
    return psr, recovery


@dataclass
class RiseAndDecay(SpikeResponder):
    """Spike responder with a rise to a peak followed by decay.

    Parameters
    ----------
    maximum_response : float
        Maximum response value.
    time_constant : float
        Time constant of rise, decay and recovery (ms). Roughly the time it
        takes to rise to the peak and decay to near baseline.
    strict : bool
        If True, applying the matrix form to a connector it cannot update
        raises ConnectorMismatchError. By default such connectors are
        skipped without notice, so a network can mix connector types under
        one tick loop.
    """
    maximum_response: float = 1.0
    time_constant: float = 3.0
    strict: bool = False

    PARAMETERS = (
        Parameter("maximum_response", "Maximum Response",
                  "Maximum response value.",
                  minimum=0.0, exclusive_minimum=True, increment=0.1, order=1),
        Parameter("time_constant", "Time constant",
                  "Time constant for rising decay (ms). Roughly the time it "
                  "takes to rise to max value then decay to near-baseline. "
                  "Larger time constants produce slower changes.",
                  minimum=0.0, exclusive_minimum=True, increment=0.1, order=2),
    )
    name = "Rise and Decay"

    def create_scalar_data(self):
        return RiseAndDecayData()

    def create_matrix_data(self, rows, cols):
        return RiseAndDecayMatrixData(rows, cols)

    def apply_scalar(self, synapse, data, time_step):
        data.post_synaptic_response, data.recovery = rise_and_decay(
            synapse.source.spiked,
            data.post_synaptic_response,
            data.recovery,
            synapse.strength,
            time_step,
            self.maximum_response,
            self.time_constant,
        )

    def apply_matrix(self, connector, data, time_step):
        reason = self._mismatch(connector, data)
        if reason is not None:
            if self.strict:
                raise ConnectorMismatchError(reason)
            return
        rise_and_decay_matrix(
            connector.source.data_holder.spikes,
            data.response_matrix,
            data.recovery_matrix,
            connector.weight_matrix,
            time_step,
            self.maximum_response,
            self.time_constant,
        )

    @staticmethod
    def _mismatch(connector, data):
        """Why the matrix form cannot update this connector, or None."""
        if not isinstance(connector, WeightMatrix):
            return f"{type(connector).__name__} is not a WeightMatrix"
        source = connector.source
        if not isinstance(source, NeuronArray):
            return f"source {type(source).__name__} is not a NeuronArray"
        if not isinstance(data, RiseAndDecayMatrixData):
            return f"state {type(data).__name__} is not RiseAndDecayMatrixData"
        if not isinstance(source.data_holder, SpikingMatrixData):
            return f"source layer {source.label!r} keeps no spike data"
        if not source.update_rule.is_spiking_rule:
            return f"source layer {source.label!r} has a non-spiking rule"
        if data.shape != connector.shape:
            return f"state shape {data.shape} != weight shape {connector.shape}"
        return None

    def copy(self):
        return RiseAndDecay(self.maximum_response, self.time_constant, self.strict)
