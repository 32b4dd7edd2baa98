"""
OR-Set (Observed-Remove Set) CRDT.

Used for sets where elements can be added and removed concurrently, and
re-added after removal. Add wins over a concurrent remove.

Each add operation generates a unique tag (replica id + per-replica sequence
number). Remove tombstones only the tags the removing replica has *observed*.
Concurrent adds from other replicas survive the remove because their tags
were not observed yet. Tombstones only grow, and a tombstone shadows the
matching add even when the add arrives later through a merge.
"""

import structlog

from ..digest import canonical, fingerprint
from ..errors import SnapshotNotWritable
from ..models import ORSetEntry, ORSetSnapshot, Tag, TagModel

log = structlog.get_logger()


class ORSetElements:
    """Live view of the distinct elements present in an ORSet.

    Nothing is materialized up front. Each iteration starts over and reads
    the set's current state.
    """

    def __init__(self, orset):
        self._orset = orset

    def __iter__(self):
        tombstones = self._orset._tombstones
        for element, tags in self._orset._elements.items():
            if not tags <= tombstones:
                yield element

    def __contains__(self, element):
        return self._orset.contains(element)

    def __len__(self):
        return sum(1 for _ in self)

    def __repr__(self):
        return f"ORSetElements({canonical(self)!r})"


class ORSet:
    """
    Observed-Remove Set.

      - add("x")     → "x" present, tagged (replica_id, 1)
      - remove("x")  → every observed tag of "x" tombstoned, "x" absent
      - add("x")     → new tag (replica_id, 2), "x" present again
      - concurrent add + remove → add wins after merge

    Internally: elements maps element -> set of tags ever added for it,
    tombstones is the set of removed tags. One ORSet instance owns
    `replica_id` for its lifetime; two live instances of the same logical
    set must never share it, or tags collide.
    """

    def __init__(self, replica_id):
        self.replica_id = replica_id
        self._sequence = 0
        # set on copies that share the source's replica id; they may merge but not add
        self._snapshot = False
        # element -> { Tag, Tag, ... }
        self._elements = {}
        self._tombstones = set()

    @property
    def value(self):
        """Return the set of elements currently present."""
        return frozenset(self.elements())

    @property
    def tombstones(self):
        return frozenset(self._tombstones)

    def tags(self, element):
        """Live (not tombstoned) tags for an element."""
        return frozenset(self._elements.get(element, set()) - self._tombstones)

    def _next_tag(self):
        self._sequence += 1
        return Tag(self.replica_id, self._sequence)

    def add(self, element):
        """Add an element under a fresh tag and return the tag."""
        if self._snapshot:
            log.warning("add_rejected", crdt="or_set", replica_id=self.replica_id)
            raise SnapshotNotWritable(self.replica_id)
        tag = self._next_tag()
        self._elements.setdefault(element, set()).add(tag)
        return tag

    def remove(self, element):
        """Tombstone every tag observed here for `element`.

        Returns the tags that were tombstoned; empty if the element was not
        present. Tags added elsewhere and not merged in yet are untouched,
        which is what lets a concurrent add survive.
        """
        observed = self._elements.get(element, set()) - self._tombstones
        self._tombstones |= observed
        return frozenset(observed)

    def contains(self, element):
        tags = self._elements.get(element)
        return bool(tags) and not tags <= self._tombstones

    def elements(self):
        return ORSetElements(self)

    def merge(self, other):
        """Union of tagged adds, union of tombstones."""
        if not isinstance(other, ORSet):
            raise TypeError(f"cannot merge {type(other).__name__} into ORSet")
        for element, tags in other._elements.items():
            self._elements.setdefault(element, set()).update(tags)
        self._tombstones |= other._tombstones
        self._observe_own_tags(tag for tags in other._elements.values() for tag in tags)
        log.debug(
            "orset_merged",
            replica_id=self.replica_id,
            from_replica=other.replica_id,
            elements=len(self._elements),
            tombstones=len(self._tombstones),
        )

    def _observe_own_tags(self, tags):
        # a restored snapshot may be behind tags this replica already issued
        for tag in tags:
            if tag.replica_id == self.replica_id and tag.sequence > self._sequence:
                self._sequence = tag.sequence

    def _entries(self):
        return {(element, tag) for element, tags in self._elements.items() for tag in tags}

    def __le__(self, other):
        if not isinstance(other, ORSet):
            return NotImplemented
        for element, tags in self._elements.items():
            if not tags <= other._elements.get(element, set()):
                return False
        return self._tombstones <= other._tombstones

    def __eq__(self, other):
        if not isinstance(other, ORSet):
            return NotImplemented
        return self._entries() == other._entries() and self._tombstones == other._tombstones

    __hash__ = None

    def __contains__(self, element):
        return self.contains(element)

    def __iter__(self):
        return iter(self.elements())

    def __len__(self):
        return len(self.elements())

    def __repr__(self):
        return f"ORSet(replica_id={self.replica_id!r}, value={canonical(self.value)!r})"

    def copy(self, replica_id=None):
        """Independent copy of the lattice state.

        Without a replica_id (or with the source's own id) the copy is a
        merge-only snapshot: it can merge, remove and be read, but add()
        raises SnapshotNotWritable, since its tags would collide with the
        ones the original issues next. Pass a new replica_id to get a copy
        that can add alongside the original.
        """
        s = ORSet(self.replica_id if replica_id is None else replica_id)
        s._elements = {element: set(tags) for element, tags in self._elements.items()}
        s._tombstones = set(self._tombstones)
        if s.replica_id == self.replica_id:
            s._sequence = self._sequence
            s._snapshot = True
        else:
            s._observe_own_tags(tag for element, tag in self._entries())
        return s

    def fingerprint(self):
        payload = self.to_dict()
        # identity is not lattice state; equal sets on different replicas match
        payload.pop("replica_id")
        return fingerprint(payload)

    def to_dict(self):
        entries = canonical(
            {"element": element, "tag": tag} for element, tag in self._entries()
        )
        return ORSetSnapshot(
            replica_id=self.replica_id,
            entries=[
                ORSetEntry(element=e["element"], tag=TagModel.from_tag(e["tag"]))
                for e in entries
            ],
            tombstones=[TagModel.from_tag(t) for t in canonical(self._tombstones)],
            active_elements=canonical(self.value),
        ).model_dump()

    @classmethod
    def from_dict(cls, data, replica_id=None):
        """Rebuild an ORSet. The sequence resumes after the highest tag this
        replica id has already issued in the snapshot."""
        snapshot = ORSetSnapshot.model_validate(data)
        s = cls(snapshot.replica_id if replica_id is None else replica_id)
        for entry in snapshot.entries:
            s._elements.setdefault(entry.element, set()).add(entry.tag.to_tag())
        s._tombstones = {t.to_tag() for t in snapshot.tombstones}
        s._observe_own_tags(tag for element, tag in s._entries())
        s._observe_own_tags(s._tombstones)
        return s
