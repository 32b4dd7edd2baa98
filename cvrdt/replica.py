"""
Local replica identity.

A Replica knows which counter slot it owns and which id it stamps on ORSet
tags, and builds CRDT values pre-sized for the cluster.
"""

import structlog

from .config import Config
from .crdt import GCounter, GSet, ORSet, PNCounter, TwoPhaseSet
from .errors import IncompatibleShape, InvalidIndex

log = structlog.get_logger()


class Replica:
    def __init__(self, replica_id, index, size):
        if not 0 <= index < size:
            log.warning("replica_rejected", replica_id=replica_id, index=index, size=size)
            raise InvalidIndex(index, size)
        self.replica_id = replica_id
        self.index = index
        self.size = size

    @classmethod
    def from_config(cls, config: Config):
        replica = cls(config.replica_id, config.replica_index, config.replica_count)
        log.info(
            "replica_configured",
            replica_id=replica.replica_id,
            index=replica.index,
            size=replica.size,
        )
        return replica

    def gcounter(self):
        return GCounter(self.size)

    def pncounter(self):
        return PNCounter(self.size)

    def gset(self):
        return GSet()

    def two_phase_set(self):
        return TwoPhaseSet()

    def orset(self):
        return ORSet(self.replica_id)

    def increment(self, counter, amount=1):
        """Bump this replica's own slot of a GCounter or PNCounter."""
        if counter.size != self.size:
            raise IncompatibleShape(self.size, counter.size)
        counter.increment(self.index, amount)

    def decrement(self, counter, amount=1):
        if counter.size != self.size:
            raise IncompatibleShape(self.size, counter.size)
        counter.decrement(self.index, amount)

    def __repr__(self):
        return f"Replica({self.replica_id!r}, index={self.index}, size={self.size})"
