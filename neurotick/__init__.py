"""neurotick — Per-tick update rules for small neural-network simulations.

Subpackages:
    network        Neurons, synapses, layers, connectors and the tick driver
    responders     Spike responders (rise and decay)
    updaterules    Activation rules (linear, spiking threshold, softmax)
    learningrules  Synaptic plasticity (short-term plasticity)
    stats          Seedable probability distributions
    textworld      Token embeddings
    explore        Recorded traces of rule behaviour

Modules:
    state          Per-model state holders and RuleKind
    params         Declared parameters, bounds and attribute/value round trip
    config         YAML rule configurations
    errors         Exception hierarchy
"""

__version__ = "0.1.0"
