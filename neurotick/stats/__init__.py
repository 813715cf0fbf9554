"""stats — Seedable probability distributions.

Used to initialize weights (WeightMatrix randomizer) and to generate
stochastic inputs. Every instance owns its own generator.
"""

from .distributions import (
    ProbabilityDistribution,
    ExponentialDistribution,
    GammaDistribution,
    LogNormalDistribution,
    NormalDistribution,
    ParetoDistribution,
    UniformRealDistribution,
    PoissonDistribution,
    UniformIntegerDistribution,
    DISTRIBUTION_TYPES,
    distribution_from_dict,
    random_state,
)
