"""explore — Small experiments that record rule behaviour as DataFrames."""

from .response_traces import rise_and_decay_trace, softmax_temperature_sweep
