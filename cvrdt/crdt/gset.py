"""
G-Set (Grow-only Set) CRDT.

Elements can only be added. Merge is set union, so any two replicas that
have seen the same adds hold the same set, whatever the merge order.
"""

import structlog

from ..digest import canonical, fingerprint
from ..models import GSetSnapshot

log = structlog.get_logger()


class GSet:
    """Grow-only set of hashable elements."""

    def __init__(self, elements=()):
        self._data = set(elements)

    @property
    def value(self):
        return frozenset(self._data)

    def add(self, element):
        """Add an element. Adding one that is already present changes nothing."""
        self._data.add(element)

    def contains(self, element):
        return element in self._data

    def merge(self, other):
        if not isinstance(other, GSet):
            raise TypeError(f"cannot merge {type(other).__name__} into GSet")
        before = len(self._data)
        self._data |= other._data
        log.debug("gset_merged", added=len(self._data) - before, size=len(self._data))

    def __le__(self, other):
        """True iff every element here is also a member of `other`."""
        if not isinstance(other, GSet):
            return NotImplemented
        return all(element in other._data for element in self._data)

    def __eq__(self, other):
        if not isinstance(other, GSet):
            return NotImplemented
        return self._data == other._data

    __hash__ = None

    def __contains__(self, element):
        return element in self._data

    def __iter__(self):
        return iter(self._data)

    def __len__(self):
        return len(self._data)

    def __repr__(self):
        return f"GSet({canonical(self._data)!r})"

    def copy(self):
        return GSet(self._data)

    def fingerprint(self):
        return fingerprint(self.to_dict())

    def to_dict(self):
        return GSetSnapshot(elements=canonical(self._data)).model_dump()

    @classmethod
    def from_dict(cls, data):
        snapshot = GSetSnapshot.model_validate(data)
        return cls(snapshot.elements)
