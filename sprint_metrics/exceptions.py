"""Exceptions raised by the Sprint Metrics engine.

Load-boundary problems are reported as ``SnapshotError`` (or its subclass
``ReferentialError``); arithmetic preconditions inside the engine are
reported as ``ArithmeticPreconditionError``.
"""


class SnapshotError(Exception):
    """
    Exception raised when sprint or task records violate a load-time invariant.
    """


class ReferentialError(SnapshotError):
    """
    Exception raised when a task references a sprint that does not exist.
    """


class ArithmeticPreconditionError(ArithmeticError):
    """
    Exception raised when a ratio is requested over an empty group.

    Grouped reports never produce empty groups, so receiving one means the
    caller broke the precondition.
    """
