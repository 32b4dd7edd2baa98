"""
State-based (convergent) replicated data types.

Every type here is a join-semilattice: merge is commutative, associative and
idempotent, and `a <= b` holds exactly when merging a into b leaves b
unchanged.
"""

from .crdt import GCounter, GSet, ORSet, ORSetElements, PNCounter, TwoPhaseSet
from .errors import (
    CRDTError,
    ElementNotObserved,
    IncompatibleShape,
    InvalidIndex,
    SnapshotNotWritable,
)
from .models import Tag
from .replica import Replica

__all__ = [
    "GCounter",
    "PNCounter",
    "GSet",
    "TwoPhaseSet",
    "ORSet",
    "ORSetElements",
    "Tag",
    "Replica",
    "CRDTError",
    "InvalidIndex",
    "IncompatibleShape",
    "ElementNotObserved",
    "SnapshotNotWritable",
]
