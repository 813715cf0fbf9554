"""Short-term plasticity of synaptic strength.

When the pre-synaptic neuron is active the strength is bumped towards one
of the synapse bounds (down for depression, up for facilitation). When it
is inactive the strength relaxes back to a baseline:

    active, depression:    s -= bump_rate  * (s - lower_bound)
    active, facilitation:  s += bump_rate  * (upper_bound - s)
    inactive:              s -= decay_rate * (s - baseline_strength)

The result is clipped to the synapse bounds. A spiking source is active
when it spiked; any other source is active when its activation exceeds
``firing_threshold``.
"""

from dataclasses import dataclass

from neurotick.state import EmptyScalarData
from neurotick.params import Parameter

STD = 0
STF = 1


@dataclass
class ShortTermPlasticityRule:
    """Short-term depression (STD) or facilitation (STF).

    Parameters
    ----------
    plasticity_type : int
        STD (0) or STF (1).
    baseline_strength : float
        Strength the synapse decays back to when inactive.
    firing_threshold : float
        Activation above which a non-spiking source counts as active.
    bump_rate : float
        Fraction of the distance to the bound covered per active tick.
    decay_rate : float
        Fraction of the distance to baseline covered per inactive tick.
    """
    plasticity_type: int = STD
    baseline_strength: float = 1.0
    firing_threshold: float = 0.0
    bump_rate: float = 0.5
    decay_rate: float = 0.2

    PARAMETERS = (
        Parameter("plasticity_type", "Plasticity type",
                  "0 for depression, 1 for facilitation.",
                  minimum=0, maximum=1, increment=1, order=1),
        Parameter("baseline_strength", "Baseline strength",
                  "Strength the synapse returns to when inactive.", order=2),
        Parameter("firing_threshold", "Firing threshold",
                  "Source activation above which the rule is active.",
                  order=3),
        Parameter("bump_rate", "Bump rate",
                  "Rate at which strength moves towards its bound.",
                  minimum=0.0, maximum=1.0, increment=0.05, order=4),
        Parameter("decay_rate", "Decay rate",
                  "Rate at which strength returns to baseline.",
                  minimum=0.0, maximum=1.0, increment=0.05, order=5),
    )
    name = "Short term plasticity"

    def create_scalar_data(self):
        return EmptyScalarData()

    def is_active(self, source):
        if source.update_rule.is_spiking_rule:
            return source.spiked
        return source.activation > self.firing_threshold

    def apply(self, synapse, data=None):
        strength = synapse.strength
        if self.is_active(synapse.source):
            if self.plasticity_type == STD:
                strength -= self.bump_rate * (strength - synapse.lower_bound)
            else:
                strength += self.bump_rate * (synapse.upper_bound - strength)
        else:
            strength -= self.decay_rate * (strength - self.baseline_strength)
        synapse.strength = synapse.clip(strength)

    def copy(self):
        return ShortTermPlasticityRule(
            self.plasticity_type, self.baseline_strength,
            self.firing_threshold, self.bump_rate, self.decay_rate,
        )
