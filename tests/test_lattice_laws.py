"""
Semilattice laws for every CRDT type: merge is idempotent, commutative and
associative, and `<=` agrees with merge.
"""

import pytest

from cvrdt import GCounter, GSet, ORSet, PNCounter, TwoPhaseSet


def merged(a, b):
    result = a.copy()
    result.merge(b)
    return result


def gcounter_states():
    a, b, c = GCounter(3), GCounter(3), GCounter(3)
    a.increment(0, 2)
    b.increment(1)
    b.increment(0)
    c.increment(2, 5)
    return a, b, c


def pncounter_states():
    a, b, c = PNCounter(3), PNCounter(3), PNCounter(3)
    a.increment(0, 3)
    a.decrement(0)
    b.decrement(1, 2)
    c.increment(2)
    c.decrement(0, 4)
    return a, b, c


def gset_states():
    return GSet(["x", "y"]), GSet(["y", "z"]), GSet([1, (2, 3)])


def two_phase_set_states():
    a, b, c = TwoPhaseSet(), TwoPhaseSet(), TwoPhaseSet()
    a.add("x")
    a.add("y")
    b.merge(a)
    b.remove("x")
    b.add("z")
    c.add("y")
    c.remove("y")
    return a, b, c


def orset_states():
    a, b, c = ORSet("a"), ORSet("b"), ORSet("c")
    a.add("x")
    b.merge(a)
    b.remove("x")
    a.add("x")
    b.add("y")
    c.add("y")
    c.remove("y")
    c.add("z")
    return a, b, c


BUILDERS = [
    gcounter_states,
    pncounter_states,
    gset_states,
    two_phase_set_states,
    orset_states,
]


@pytest.fixture(params=BUILDERS, ids=lambda f: f.__name__.replace("_states", ""))
def states(request):
    return request.param()


def test_merge_is_idempotent(states):
    for s in states:
        assert merged(s, s) == s


def test_merge_is_commutative(states):
    a, b, c = states
    assert merged(a, b) == merged(b, a)
    assert merged(b, c) == merged(c, b)


def test_merge_is_associative(states):
    a, b, c = states
    assert merged(merged(a, b), c) == merged(a, merged(b, c))


def test_merge_is_an_upper_bound(states):
    a, b, c = states
    ab = merged(a, b)
    assert a <= ab
    assert b <= ab
    assert merged(ab, c) >= c


def test_le_matches_merge(states):
    a, b, _ = states
    ab = merged(a, b)
    # a <= b exactly when merging a into b leaves b unchanged
    assert (a <= ab) == (merged(a, ab) == ab)
    assert (ab <= a) == (merged(ab, a) == a)


def test_merge_order_does_not_change_fingerprint(states):
    a, b, c = states
    left = merged(merged(a, b), c)
    right = merged(merged(c, a), b)
    assert left.fingerprint() == right.fingerprint()


def test_merge_does_not_mutate_argument(states):
    a, b, _ = states
    before = b.copy()
    merged(a, b)
    assert b == before
