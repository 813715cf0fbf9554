"""Load and save rule configurations as YAML.

A configuration file maps names to objects. Each entry names a registered
class under ``type``; the remaining keys are its constructor parameters::

    excitatory_response:
      type: RiseAndDecay
      maximum_response: 1.0
      time_constant: 3.0
    output_layer:
      type: SoftmaxRule
      temperature: 0.5

Values are checked against each class's declared parameter bounds when
the file is loaded, so a degenerate value (e.g. a zero time constant) is
rejected here rather than showing up as nan during a run.
"""

from pathlib import Path

import yaml

from neurotick.learningrules import ShortTermPlasticityRule
from neurotick.network.connections import Sparse
from neurotick.params import from_dict, to_dict, validate
from neurotick.responders import RiseAndDecay
from neurotick.stats import DISTRIBUTION_TYPES
from neurotick.textworld import TokenEmbeddingBuilder
from neurotick.updaterules import (
    BiasedSoftmaxRule,
    LinearRule,
    SoftmaxRule,
    SpikingThresholdRule,
)
from neurotick.utils import get_logger

LOG = get_logger("config")


REGISTRY = {
    cls.__name__: cls
    for cls in (
        RiseAndDecay,
        LinearRule,
        SpikingThresholdRule,
        SoftmaxRule,
        BiasedSoftmaxRule,
        ShortTermPlasticityRule,
        TokenEmbeddingBuilder,
        Sparse,
        *DISTRIBUTION_TYPES.values(),
    )
}


def object_from_dict(values):
    """Build and validate a registered object from attribute/value pairs.

    Raises
    ------
    KeyError
        If the type is missing or not registered.
    ParameterError
        If a value is outside its declared bounds.
    """
    if "type" not in values:
        raise KeyError(f"Configuration entry has no 'type': {values}")
    type_name = values["type"]
    if type_name not in REGISTRY:
        raise KeyError(
            f"Unknown type '{type_name}'. Available: {sorted(REGISTRY)}")
    return validate(from_dict(REGISTRY[type_name], values))


def load_config(path):
    """Read a YAML configuration file into {name: object}."""
    path = Path(path)
    LOG.info("Loading configuration from %s", path)
    with open(path, "r") as f:
        entries = yaml.safe_load(f) or {}
    objects = {name: object_from_dict(values) for name, values in entries.items()}
    LOG.info("Loaded %d objects: %s", len(objects),
             {name: type(obj).__name__ for name, obj in objects.items()})
    return objects


def save_config(objects, path):
    """Write {name: object} as a YAML configuration file."""
    path = Path(path)
    LOG.info("Saving %d objects to %s", len(objects), path)
    with open(path, "w") as f:
        yaml.safe_dump({name: to_dict(obj) for name, obj in objects.items()},
                       f, sort_keys=False)
    return path
