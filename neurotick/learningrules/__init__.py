"""learningrules — Rules that change synaptic strength each tick."""

from .short_term_plasticity import ShortTermPlasticityRule, STD, STF
