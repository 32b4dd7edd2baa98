"""
PN-Counter (Positive-Negative Counter) CRDT.

Used for values that can both increase and decrease. Internally composed of
two G-Counters of the same size: one for increments (P) and one for
decrements (N). Value = sum(P) - sum(N). Merge takes max per slot on both
sides.
"""

import structlog

from ..digest import fingerprint
from ..errors import IncompatibleShape
from ..models import PNCounterSnapshot
from .gcounter import GCounter

log = structlog.get_logger()


class PNCounter:
    """
    Positive-Negative Counter.

      - increment(0) three times, decrement(0) once → value 2

    The value may go negative. Each inner counter is independently
    grow-only, so merge stays conflict-free.
    """

    def __init__(self, size):
        self._p = GCounter(size)  # positive increments
        self._n = GCounter(size)  # negative decrements

    @property
    def size(self):
        return self._p.size

    @property
    def positive(self):
        return self._p

    @property
    def negative(self):
        return self._n

    @property
    def value(self):
        """Net value = total increments - total decrements."""
        return self._p.value - self._n.value

    def increment(self, index, amount=1):
        self._p.increment(index, amount)

    def decrement(self, index, amount=1):
        self._n.increment(index, amount)

    def merge(self, other):
        """Merge another PN-Counter. Both sides merge independently."""
        if not isinstance(other, PNCounter):
            raise TypeError(f"cannot merge {type(other).__name__} into PNCounter")
        # check up front so a mismatch never leaves P merged and N untouched
        if other.size != self.size:
            log.warning("merge_rejected", crdt="pn_counter", expected=self.size, actual=other.size)
            raise IncompatibleShape(self.size, other.size)
        self._p.merge(other._p)
        self._n.merge(other._n)

    def __le__(self, other):
        if not isinstance(other, PNCounter):
            return NotImplemented
        return self._p <= other._p and self._n <= other._n

    def __eq__(self, other):
        if not isinstance(other, PNCounter):
            return NotImplemented
        return self._p == other._p and self._n == other._n

    __hash__ = None

    def __repr__(self):
        return f"PNCounter(positive={self._p.counts!r}, negative={self._n.counts!r})"

    def copy(self):
        c = PNCounter(self.size)
        c._p = self._p.copy()
        c._n = self._n.copy()
        return c

    def fingerprint(self):
        return fingerprint(self.to_dict())

    def to_dict(self):
        return PNCounterSnapshot(
            positive=self._p.to_dict(),
            negative=self._n.to_dict(),
            total_value=self.value,
        ).model_dump()

    @classmethod
    def from_dict(cls, data):
        snapshot = PNCounterSnapshot.model_validate(data)
        c = cls(len(snapshot.positive.counts))
        c._p = GCounter.from_dict(snapshot.positive.model_dump())
        c._n = GCounter.from_dict(snapshot.negative.model_dump())
        return c
