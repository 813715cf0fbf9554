"""Traces of rule outputs over time, as DataFrames.

    rise_and_decay_trace         PSR of one synapse driven by a spike train
    softmax_temperature_sweep    softmax of one input vector at many temperatures
"""

import numpy as np
import pandas as pd

from neurotick.network import Network, Neuron, Synapse
from neurotick.responders import RiseAndDecay
from neurotick.updaterules import SpikingThresholdRule, softmax
from neurotick.utils import get_logger

LOG = get_logger("explore.response_traces")


def rise_and_decay_trace(spike_ticks=(0,), n_ticks=50, strength=1.0,
                         maximum_response=1.0, time_constant=3.0,
                         time_step=1.0):
    """Run a two-neuron network and record the synapse's response.

    The source neuron spikes on the tick after each entry of
    ``spike_ticks`` receives its drive; the responder sees that spike on
    the following tick.

    Parameters
    ----------
    spike_ticks : iterable of int
        Ticks on which the source neuron is driven above threshold.
    n_ticks : int
        Number of ticks to run.
    strength : float
        Synaptic strength.
    maximum_response, time_constant : float
        RiseAndDecay parameters.
    time_step : float
        Network time step.

    Returns
    -------
    pd.DataFrame
        Columns: tick, time, source_spiked, psr, recovery, target_input.
    """
    net = Network(time_step=time_step)
    source = net.add(Neuron(SpikingThresholdRule(threshold=0.5), label="source"))
    target = net.add(Neuron(label="target"))
    target.clamped = True
    synapse = net.add(Synapse(
        source, target, strength=strength,
        spike_responder=RiseAndDecay(maximum_response, time_constant)))

    spike_ticks = set(spike_ticks)
    rows = []
    for tick in range(n_ticks):
        if tick in spike_ticks:
            source.add_input(1.0)
        net.update()
        rows.append({
            "tick": tick,
            "time": net.time,
            "source_spiked": source.spiked,
            "psr": synapse.psr,
            "recovery": synapse.responder_data.recovery,
            "target_input": target.input,
        })

    trace = pd.DataFrame(rows)
    LOG.info("Rise-and-decay trace: %d ticks, peak psr %.4f at tick %d",
             n_ticks, trace["psr"].max(), int(trace["psr"].idxmax()))
    return trace


def softmax_temperature_sweep(inputs, temperatures):
    """Softmax of ``inputs`` at each temperature.

    Returns
    -------
    pd.DataFrame
        One row per temperature, one column per input unit, plus
        ``spread`` = max - min of the row.
    """
    inputs = np.asarray(inputs, dtype=np.float64)
    rows = {}
    for temperature in temperatures:
        rows[temperature] = softmax(inputs, temperature)
    frame = pd.DataFrame.from_dict(
        rows, orient="index",
        columns=[f"unit_{k}" for k in range(len(inputs))])
    frame.index.name = "temperature"
    frame["spread"] = frame.max(axis=1) - frame.min(axis=1)
    return frame
