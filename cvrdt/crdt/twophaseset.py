"""
2P-Set (Two-Phase Set) CRDT.

Two grow-only sets: one for adds, one for removes. An element can be removed
only after it has been observed as added, and once removed it stays removed.
Re-adding it is accepted but has no effect on membership (remove wins).

Use an ORSet instead when elements need to come back after removal.
"""

import structlog

from ..digest import canonical, fingerprint
from ..errors import ElementNotObserved
from ..models import TwoPhaseSetSnapshot
from .gset import GSet

log = structlog.get_logger()


class TwoPhaseSet:
    """
    Two-Phase Set.

      - add("x")     → "x" is present
      - remove("x")  → "x" is gone for good
      - add("x")     → still gone

    remove() of an element that was never added is a no-op by default, which
    keeps remove total and idempotent. Pass strict=True to get
    ElementNotObserved instead.
    """

    def __init__(self):
        self._adds = GSet()
        self._removes = GSet()

    @property
    def adds(self):
        return self._adds.value

    @property
    def removes(self):
        return self._removes.value

    @property
    def value(self):
        """Materialize adds - removes.

        Recomputed on every access, O(len(adds)). Not cached, so it never
        goes stale after further mutation or merge.
        """
        return frozenset(e for e in self._adds if e not in self._removes)

    def add(self, element):
        self._adds.add(element)

    def remove(self, element, strict=False):
        if not self._adds.contains(element):
            if strict:
                log.warning("remove_rejected", crdt="two_phase_set", element=repr(element))
                raise ElementNotObserved(element)
            return
        self._removes.add(element)

    def contains(self, element):
        return self._adds.contains(element) and not self._removes.contains(element)

    def merge(self, other):
        if not isinstance(other, TwoPhaseSet):
            raise TypeError(f"cannot merge {type(other).__name__} into TwoPhaseSet")
        self._adds.merge(other._adds)
        self._removes.merge(other._removes)

    def __le__(self, other):
        if not isinstance(other, TwoPhaseSet):
            return NotImplemented
        return self._adds <= other._adds and self._removes <= other._removes

    def __eq__(self, other):
        if not isinstance(other, TwoPhaseSet):
            return NotImplemented
        return self._adds == other._adds and self._removes == other._removes

    __hash__ = None

    def __contains__(self, element):
        return self.contains(element)

    def __repr__(self):
        return f"TwoPhaseSet(adds={self._adds!r}, removes={self._removes!r})"

    def copy(self):
        s = TwoPhaseSet()
        s._adds = self._adds.copy()
        s._removes = self._removes.copy()
        return s

    def fingerprint(self):
        return fingerprint(self.to_dict())

    def to_dict(self):
        return TwoPhaseSetSnapshot(
            adds=canonical(self._adds),
            removes=canonical(self._removes),
            active_elements=canonical(self.value),
        ).model_dump()

    @classmethod
    def from_dict(cls, data):
        snapshot = TwoPhaseSetSnapshot.model_validate(data)
        s = cls()
        s._adds = GSet(snapshot.adds)
        s._removes = GSet(snapshot.removes)
        return s
