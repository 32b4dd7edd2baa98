"""
Errors raised by the CRDT types.

Every error is local and immediate: the receiver's state is left exactly as it
was before the call, and the caller decides whether to retry with corrected
arguments.
"""


class CRDTError(Exception):
    """Base class for all CRDT errors."""


class InvalidIndex(CRDTError, IndexError):
    """Counter operation addressed a slot outside 0..size-1."""

    def __init__(self, index, size):
        self.index = index
        self.size = size
        super().__init__(f"index {index} out of range for counter of size {size}")


class IncompatibleShape(CRDTError, ValueError):
    """Two values with different static configuration were combined."""

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(f"incompatible size: expected {expected}, got {actual}")


class ElementNotObserved(CRDTError, KeyError):
    """Remove of an element this replica has never seen added."""

    def __init__(self, element):
        self.element = element
        super().__init__(element)

    def __str__(self):
        return f"element {self.element!r} was never added"


class SnapshotNotWritable(CRDTError):
    """Tag-issuing operation on a copy that shares its source's replica id."""

    def __init__(self, replica_id):
        self.replica_id = replica_id
        super().__init__(
            f"snapshot of replica {replica_id!r} cannot issue tags; copy it with a new replica_id"
        )
