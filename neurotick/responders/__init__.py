"""responders — Spike responders shaping post-synaptic responses."""

from .base import SpikeResponder
from .rise_and_decay import RiseAndDecay, rise_and_decay, rise_and_decay_matrix
