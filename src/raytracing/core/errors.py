"""Exceptions raised by the scene description subsystem.

Every error leaves the registry untouched, so callers can catch it and keep
using the same scene. Each class also derives from the built-in exception
of its category, which lets callers catch e.g. ``IndexError`` generically.
"""


class SceneError(Exception):
    """Base class for all scene description errors."""


class CapacityExceededError(SceneError, RuntimeError):
    """A registration was attempted when the kind's array is already full.

    Attributes:
        kind: The name of the kind whose capacity was reached.
        capacity: The fixed capacity of that kind.
    """

    def __init__(self, kind: str, capacity: int) -> None:
        self.kind = kind
        self.capacity = capacity
        super().__init__(f"Maximum number of {kind} ({capacity}) exceeded")


class DegenerateBasisError(SceneError, ValueError):
    """Frame construction inputs are zero-length or linearly dependent."""


class IndexOutOfRangeError(SceneError, IndexError):
    """An index refers past the valid entries of a kind.

    Attributes:
        kind: The name of the kind that was indexed.
        index: The offending index.
        count: The number of valid entries of that kind.
    """

    def __init__(self, kind: str, index: int, count: int) -> None:
        self.kind = kind
        self.index = index
        self.count = count
        super().__init__(f"Invalid {kind} index {index} (only {count} registered)")


class KindMismatchError(SceneError, TypeError):
    """A record does not belong to the kind it is being stored as."""


class KernelConstantMismatchError(SceneError, RuntimeError):
    """Constants compiled into the kernel differ from the host's."""
