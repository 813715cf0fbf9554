"""Probability distributions with per-instance random generators.

Each distribution owns its own ``numpy.random.RandomState``. Seeding one
instance never changes the sequence drawn from another.

Real-valued distributions return truncated samples from ``sample_int``.
Integer-valued distributions return the integer sample cast to float from
``sample_double``; the value is the same one, never a fresh draw.

Distributions are reconstructed from attribute/value pairs through their
constructor parameters (see ``distribution_from_dict``).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import numpy as np

from neurotick.params import Parameter, from_dict, to_dict


def random_state(seed=None):
    """A ``RandomState`` seeded from any 64-bit integer, or from OS entropy.

    The seed is taken modulo 2**64 and expanded through a ``SeedSequence``,
    so negative seeds and seeds above 2**32 are accepted.
    """
    if seed is None:
        return np.random.RandomState()
    entropy = int(seed) & 0xFFFFFFFFFFFFFFFF
    return np.random.RandomState(
        np.random.MT19937(np.random.SeedSequence(entropy)))


@dataclass
class ProbabilityDistribution(ABC):
    """Base class. Subclasses implement ``_draw(size)``."""

    _rng: np.random.RandomState = field(
        init=False, repr=False, compare=False,
        default_factory=np.random.RandomState)

    PARAMETERS = ()
    name = "Distribution"
    is_integer = False

    @abstractmethod
    def _draw(self, size=None):
        """Draw one sample (size None) or an array of samples."""

    def sample_double(self, n=None):
        """One float sample, or an array of n samples."""
        values = self._draw(n)
        if n is None:
            return float(values)
        return np.asarray(values, dtype=np.float64)

    def sample_int(self, n=None):
        """One int sample, or an int64 array of n samples."""
        values = self._draw(n)
        if n is None:
            return int(values)
        return np.asarray(values).astype(np.int64)

    def set_seed(self, seed):
        """Reset this instance's generator so its sequence is reproducible.

        Any 64-bit integer is accepted, negative values included.
        """
        self._rng = random_state(seed)

    def copy(self):
        """Same parameters, fresh generator."""
        return from_dict(type(self), to_dict(self))

    def to_dict(self):
        return to_dict(self)

    def __str__(self):
        return self.name


@dataclass
class ExponentialDistribution(ProbabilityDistribution):
    lambda_: float = 1.0

    PARAMETERS = (
        Parameter("lambda_", "Rate (λ)", "Rate of the exponential.",
                  minimum=0.0, exclusive_minimum=True, order=1),
    )
    name = "Exponential"

    def _draw(self, size=None):
        return self._rng.exponential(1.0 / self.lambda_, size)


@dataclass
class GammaDistribution(ProbabilityDistribution):
    shape: float = 2.0
    scale: float = 1.0

    PARAMETERS = (
        Parameter("shape", "Shape (k)", minimum=0.0, exclusive_minimum=True,
                  order=1),
        Parameter("scale", "Scale (θ)", minimum=0.0, exclusive_minimum=True,
                  order=2),
    )
    name = "Gamma"

    def _draw(self, size=None):
        return self._rng.gamma(self.shape, self.scale, size)


@dataclass
class LogNormalDistribution(ProbabilityDistribution):
    """Exponential of a normal with mean ``location`` and sd ``scale``."""
    location: float = 1.0
    scale: float = 0.5

    PARAMETERS = (
        Parameter("location", "Location (μ)", order=1),
        Parameter("scale", "Scale (σ)", minimum=0.0, order=2),
    )
    name = "Log-Normal"

    def _draw(self, size=None):
        return self._rng.lognormal(self.location, self.scale, size)


@dataclass
class NormalDistribution(ProbabilityDistribution):
    mean: float = 1.0
    standard_deviation: float = 0.5

    PARAMETERS = (
        Parameter("mean", "Mean (μ)", order=1),
        Parameter("standard_deviation", "Std. dev. (σ)", minimum=0.0,
                  order=2),
    )
    name = "Normal"

    def _draw(self, size=None):
        return self._rng.normal(self.mean, self.standard_deviation, size)


@dataclass
class ParetoDistribution(ProbabilityDistribution):
    """Classical Pareto with shape ``slope`` and lower bound ``min``."""
    slope: float = 2.0
    min: float = 1.0

    PARAMETERS = (
        Parameter("slope", "Slope (α)", minimum=0.0, exclusive_minimum=True,
                  order=1),
        Parameter("min", "Minimum", minimum=0.0, exclusive_minimum=True,
                  order=2),
    )
    name = "Pareto"

    def _draw(self, size=None):
        # numpy draws the Lomax form; shift and scale to the classical one
        return (self._rng.pareto(self.slope, size) + 1.0) * self.min


@dataclass
class UniformRealDistribution(ProbabilityDistribution):
    floor: float = 0.0
    ceil: float = 1.0

    PARAMETERS = (
        Parameter("floor", "Floor", order=1),
        Parameter("ceil", "Ceiling", order=2),
    )
    name = "Uniform (Real)"

    def _draw(self, size=None):
        return self._rng.uniform(self.floor, self.ceil, size)


@dataclass
class PoissonDistribution(ProbabilityDistribution):
    lambda_: float = 1.0

    PARAMETERS = (
        Parameter("lambda_", "Mean (λ)", minimum=0.0, order=1),
    )
    name = "Poisson"
    is_integer = True

    def _draw(self, size=None):
        return self._rng.poisson(self.lambda_, size)


@dataclass
class UniformIntegerDistribution(ProbabilityDistribution):
    """Integers from floor to ceil, both inclusive."""
    floor: int = 0
    ceil: int = 1

    PARAMETERS = (
        Parameter("floor", "Floor", increment=1, order=1),
        Parameter("ceil", "Ceiling", increment=1, order=2),
    )
    name = "Uniform (Integer)"
    is_integer = True

    def _draw(self, size=None):
        return self._rng.randint(self.floor, self.ceil + 1, size)


DISTRIBUTION_TYPES = {
    cls.__name__: cls
    for cls in (
        ExponentialDistribution,
        GammaDistribution,
        LogNormalDistribution,
        NormalDistribution,
        ParetoDistribution,
        UniformRealDistribution,
        PoissonDistribution,
        UniformIntegerDistribution,
    )
}


def distribution_from_dict(values):
    """Rebuild a distribution from its ``to_dict()`` output.

    Values may be strings (as read from attribute/value pairs); they are
    converted to the constructor parameter types.

    Raises
    ------
    KeyError
        If ``values["type"]`` is not a known distribution.
    """
    type_name = values["type"]
    if type_name not in DISTRIBUTION_TYPES:
        raise KeyError(
            f"Unknown distribution '{type_name}'. "
            f"Available: {list(DISTRIBUTION_TYPES.keys())}"
        )
    return from_dict(DISTRIBUTION_TYPES[type_name], values)
