"""network — Models, state holders and the tick driver.

    Neuron, Synapse            scalar models
    NeuronArray, WeightMatrix  layer and dense connector models
    Network                    four-phase per-tick update
    Sparse, connect_sparse     random sparse connection strategy
"""

from neurotick.state import (
    RuleKind,
    EmptyScalarData,
    EmptyMatrixData,
    SpikingScalarData,
    SpikingMatrixData,
    LayerActivationState,
    RiseAndDecayData,
    RiseAndDecayMatrixData,
)
from .models import Neuron, Synapse, NeuronArray, WeightMatrix
from .network import Network
from .connections import Sparse, connect_sparse
