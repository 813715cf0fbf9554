"""Exception hierarchy for neurotick.

NeurotickError (base)
├── UnsupportedOperationError - rule applied in a mode it does not define
├── ParameterError            - bad value committed to a rule parameter
├── ShapeMismatchError        - sizes disagree at construction time
└── ConnectorMismatchError    - strict responder met an incompatible connector

Numerical degeneracy (zero time constant, zero temperature) is not an
error: it yields inf/nan in the rule output.
"""


class NeurotickError(Exception):
    """Base exception for all neurotick errors."""


class UnsupportedOperationError(NeurotickError, NotImplementedError):
    """A rule was asked for something it does not implement.

    Examples are applying a whole-layer rule (softmax) to a single neuron,
    or asking a rule without a derivative for one. This indicates the wrong
    rule is attached to the wrong shape of model and is fatal to the tick.
    """


class ParameterError(NeurotickError, ValueError):
    """A parameter value is outside its declared bounds, or unknown."""


class ShapeMismatchError(NeurotickError, ValueError):
    """Array sizes disagree at construction time."""


class ConnectorMismatchError(NeurotickError, TypeError):
    """A matrix responder in strict mode met a connector it cannot update."""
