"""State holders that rules read and write each tick.

A state holder is owned by exactly one neuron, synapse, layer or
connector. ``copy()`` always returns an object with new backing arrays so
that a copied network never shares state with its original.
"""

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from neurotick.errors import ShapeMismatchError


# ---------------------------------------------------------------------------
# Rules without per-unit state
# ---------------------------------------------------------------------------

@dataclass
class EmptyScalarData:
    """Placeholder state for scalar rules that keep nothing."""

    def copy(self):
        return EmptyScalarData()


@dataclass
class EmptyMatrixData:
    """Placeholder state for layer rules that keep nothing."""
    size: int = 0

    def copy(self):
        return EmptyMatrixData(self.size)


# ---------------------------------------------------------------------------
# Neuron-side state
# ---------------------------------------------------------------------------

@dataclass
class SpikingScalarData:
    """Spike flag of a single spiking neuron."""
    spiked: bool = False

    def copy(self):
        return SpikingScalarData(self.spiked)


class SpikingMatrixData:
    """Per-unit spike flags of a layer driven by a spiking rule.

    Parameters
    ----------
    size : int
        Number of units in the layer. Fixed for the holder's lifetime.
    """

    def __init__(self, size):
        self.size = size
        self.spikes = np.zeros(size, dtype=bool)

    def copy(self):
        data = SpikingMatrixData(self.size)
        data.spikes = self.spikes.copy()
        return data


class LayerActivationState:
    """Inputs, biases and activations of a layer.

    All three vectors are allocated once with the layer's size. Writes go
    into the existing arrays; a vector of a different length is rejected.

    Parameters
    ----------
    size : int
        Number of units.
    """

    def __init__(self, size):
        self.size = size
        self.inputs = np.zeros(size, dtype=np.float64)
        self.biases = np.zeros(size, dtype=np.float64)
        self.activations = np.zeros(size, dtype=np.float64)

    def set_inputs(self, values):
        self.inputs[:] = self._checked(values, "inputs")

    def set_biases(self, values):
        self.biases[:] = self._checked(values, "biases")

    def set_activations(self, values):
        self.activations[:] = self._checked(values, "activations")

    def _checked(self, values, what):
        values = np.asarray(values, dtype=np.float64)
        if values.shape != (self.size,):
            raise ShapeMismatchError(
                f"{what} must have shape ({self.size},), got {values.shape}")
        return values

    def copy(self):
        state = LayerActivationState(self.size)
        state.inputs = self.inputs.copy()
        state.biases = self.biases.copy()
        state.activations = self.activations.copy()
        return state


# ---------------------------------------------------------------------------
# Synapse-side state
# ---------------------------------------------------------------------------

@dataclass
class RiseAndDecayData:
    """Post-synaptic response and recovery of one synapse."""
    post_synaptic_response: float = 0.0
    recovery: float = 0.0

    def copy(self):
        return RiseAndDecayData(self.post_synaptic_response, self.recovery)


@dataclass
class RiseAndDecayMatrixData:
    """Response and recovery matrices of one weight-matrix connector.

    Shape is (rows, cols) = (target size, source size) and never changes.
    """
    rows: int
    cols: int
    recovery_matrix: np.ndarray = field(default=None, repr=False)
    response_matrix: np.ndarray = field(default=None, repr=False)

    def __post_init__(self):
        shape = (self.rows, self.cols)
        if self.recovery_matrix is None:
            self.recovery_matrix = np.zeros(shape, dtype=np.float64)
        if self.response_matrix is None:
            self.response_matrix = np.zeros(shape, dtype=np.float64)
        for name in ("recovery_matrix", "response_matrix"):
            if getattr(self, name).shape != shape:
                raise ShapeMismatchError(
                    f"{name} must have shape {shape}, "
                    f"got {getattr(self, name).shape}")

    @property
    def shape(self):
        return (self.rows, self.cols)

    def copy(self):
        return RiseAndDecayMatrixData(
            self.rows, self.cols,
            recovery_matrix=self.recovery_matrix.copy(),
            response_matrix=self.response_matrix.copy(),
        )


class RuleKind(Enum):
    """Shape of the model a rule is applied to.

    SCALAR models are single neurons and synapses; MATRIX models are
    layers and weight-matrix connectors.
    """
    SCALAR = "scalar"
    MATRIX = "matrix"
