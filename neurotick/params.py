"""Declared parameters of rules and distributions.

Each configurable class lists its user-facing fields in a ``PARAMETERS``
tuple of ``Parameter`` records (name, label, bounds, increment). An editor
reads the schema; the engine only needs get/set access to the fields.

Bounds are enforced when a value is committed through ``set_parameter``
or checked with ``validate``. They are never enforced inside ``apply``:
a rule given a degenerate value computes with it.

Objects are reconstructed from attribute/value pairs with ``from_dict``,
which calls the class constructor with values coerced to the declared
field types. Configurable classes are therefore dataclasses whose
constructor parameters match their field names.
"""

import dataclasses
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from neurotick.errors import ParameterError


@dataclass(frozen=True)
class Parameter:
    """Schema entry for one editable field.

    Parameters
    ----------
    name : str
        Attribute name on the owning object.
    label : str
        Short human-readable label.
    description : str
        Longer help text.
    minimum, maximum : float, optional
        Inclusive bounds. None means unbounded on that side.
    exclusive_minimum : bool
        If True the minimum itself is not allowed (value must be > minimum).
    increment : float
        Step size suggested to an editor.
    order : int
        Display order.
    """
    name: str
    label: str
    description: str = ""
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    exclusive_minimum: bool = False
    increment: float = 0.1
    order: int = 0

    def check(self, value):
        """Raise ParameterError if value is outside the declared bounds."""
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            return
        if self.minimum is not None:
            if self.exclusive_minimum and not value > self.minimum:
                raise ParameterError(
                    f"{self.name} must be > {self.minimum}, got {value}")
            if value < self.minimum:
                raise ParameterError(
                    f"{self.name} must be >= {self.minimum}, got {value}")
        if self.maximum is not None and value > self.maximum:
            raise ParameterError(
                f"{self.name} must be <= {self.maximum}, got {value}")

    def to_dict(self):
        return dataclasses.asdict(self)


def parameters_of(obj):
    """Return the parameter schema of an object or class, sorted by order."""
    return tuple(sorted(getattr(obj, "PARAMETERS", ()), key=lambda p: p.order))


def get_parameter(obj, name):
    """Look up a Parameter by name.

    Raises
    ------
    ParameterError
        If the object declares no parameter with that name.
    """
    for p in parameters_of(obj):
        if p.name == name:
            return p
    raise ParameterError(
        f"{type(obj).__name__} has no parameter '{name}'. "
        f"Available: {[p.name for p in parameters_of(obj)]}"
    )


def set_parameter(obj, name, value):
    """Commit a parameter value after checking its bounds.

    The value is coerced to the declared field type (or, for a class that
    is not a dataclass, the type of the current value), so a string read
    from a file or a numpy scalar can be committed directly.
    """
    param = get_parameter(obj, name)
    value = _coerce(value, _field_type(obj, name))
    param.check(value)
    setattr(obj, name, value)
    return obj


def _field_type(obj, name):
    if dataclasses.is_dataclass(obj):
        for f in dataclasses.fields(obj):
            if f.name == name and isinstance(f.type, type):
                return f.type
    return type(getattr(obj, name))


def validate(obj):
    """Check every declared parameter of obj against its bounds."""
    for p in parameters_of(obj):
        p.check(getattr(obj, p.name))
    return obj


# ---------------------------------------------------------------------------
# Attribute/value round trip
# ---------------------------------------------------------------------------

def to_dict(obj):
    """Serialize a dataclass-based object to constructor parameters.

    The class name is stored under ``"type"``. Enum values are stored by name.
    """
    d = {"type": type(obj).__name__}
    for f in dataclasses.fields(obj):
        if not f.init:
            continue
        value = getattr(obj, f.name)
        if isinstance(value, Enum):
            value = value.name
        d[f.name] = value
    return d


def from_dict(cls, values):
    """Construct cls from attribute/value pairs.

    Keys that are not constructor parameters (including ``"type"``) are
    ignored. Missing keys fall back to the constructor defaults. String
    values are converted to the declared field type.
    """
    kwargs = {}
    for f in dataclasses.fields(cls):
        if not f.init or f.name not in values:
            continue
        kwargs[f.name] = _coerce(values[f.name], f.type)
    return cls(**kwargs)


def _coerce(value, target):
    if not isinstance(target, type) or type(value) is target:
        return value
    if target not in (bool, int, float, str) and isinstance(value, target):
        return value
    if issubclass(target, Enum):
        return target[value] if isinstance(value, str) else target(value)
    if target is bool:
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ("true", "1", "yes"):
                return True
            if lowered in ("false", "0", "no"):
                return False
            raise ParameterError(f"Cannot interpret '{value}' as a boolean")
        return bool(value)
    if target in (int, float, str):
        try:
            if target is int and isinstance(value, str):
                return int(float(value))
            return target(value)
        except (TypeError, ValueError) as err:
            raise ParameterError(
                f"Cannot convert {value!r} to {target.__name__}") from err
    return value
