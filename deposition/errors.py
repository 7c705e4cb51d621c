"""Exception types raised by the deposition engine."""


class DepositionError(Exception):
    """Base class for all deposition errors."""


class InvalidParameter(DepositionError, ValueError):
    """Out-of-domain numeric input."""


class UnknownMethod(DepositionError, ValueError):
    """Unrecognised bend-model selector."""


class ModelDomainError(DepositionError, ArithmeticError):
    """Correlation evaluated outside its range or producing a non-physical value."""


class UnsupportedOperation(DepositionError, TypeError):
    """Aggregation requested on an incompatible record set."""


class OrderingPrecondition(DepositionError, RuntimeError):
    """Element processed out of transport order, or derived data missing."""
