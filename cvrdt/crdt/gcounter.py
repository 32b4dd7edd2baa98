import structlog

from ..digest import fingerprint
from ..errors import IncompatibleShape, InvalidIndex
from ..models import GCounterSnapshot

log = structlog.get_logger()


class GCounter:
    """
    Grow-only counter CRDT. One slot per replica, fixed number of slots.
    Total = sum of all slots. Merge = max per slot.

    A replica only increments its own slot; the other slots are copies
    learned through merge.
    """

    def __init__(self, size):
        if size < 0:
            raise ValueError(f"counter size must be >= 0, got {size}")
        self._counts = [0] * size

    @property
    def size(self):
        return len(self._counts)

    @property
    def counts(self):
        return tuple(self._counts)

    @property
    def value(self):
        return sum(self._counts)

    def increment(self, index, amount=1):
        """Add `amount` to slot `index`. Out-of-range indices raise InvalidIndex."""
        if not 0 <= index < len(self._counts):
            log.warning("increment_rejected", index=index, size=self.size)
            raise InvalidIndex(index, self.size)
        if not isinstance(amount, int):
            raise TypeError(f"increment amount must be an int, got {type(amount).__name__}")
        if amount < 0:
            raise ValueError(f"increment amount must be >= 0, got {amount}")
        self._counts[index] += amount

    def merge(self, other):
        self._check_shape(other)
        for i, count in enumerate(other._counts):
            if count > self._counts[i]:
                self._counts[i] = count
        log.debug("gcounter_merged", size=self.size, value=self.value)

    def _check_shape(self, other):
        if not isinstance(other, GCounter):
            raise TypeError(f"cannot merge {type(other).__name__} into GCounter")
        if other.size != self.size:
            log.warning("merge_rejected", crdt="gcounter", expected=self.size, actual=other.size)
            raise IncompatibleShape(self.size, other.size)

    def __le__(self, other):
        if not isinstance(other, GCounter):
            return NotImplemented
        if other.size != self.size:
            raise IncompatibleShape(self.size, other.size)
        return all(mine <= theirs for mine, theirs in zip(self._counts, other._counts))

    def __eq__(self, other):
        if not isinstance(other, GCounter):
            return NotImplemented
        return self._counts == other._counts

    __hash__ = None

    def __len__(self):
        return len(self._counts)

    def __getitem__(self, index):
        return self._counts[index]

    def __repr__(self):
        return f"GCounter({self._counts!r})"

    def copy(self):
        c = GCounter(self.size)
        c._counts = list(self._counts)
        return c

    def fingerprint(self):
        return fingerprint(self.to_dict())

    def to_dict(self):
        return GCounterSnapshot(
            counts=list(self._counts), total_value=self.value
        ).model_dump()

    @classmethod
    def from_dict(cls, data):
        snapshot = GCounterSnapshot.model_validate(data)
        c = cls(len(snapshot.counts))
        c._counts = list(snapshot.counts)
        return c
