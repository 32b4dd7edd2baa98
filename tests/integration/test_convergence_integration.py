"""
Several replicas mutate independently and exchange snapshots through
to_dict / from_dict in different orders; all of them must converge.
"""

import itertools
import random

from cvrdt.crdt.orset import ORSet
from cvrdt.crdt.pncounter import PNCounter
from cvrdt.crdt.twophaseset import TwoPhaseSet
from cvrdt.replica import Replica


def _replicas(n):
    return [Replica(f"replica-{i}", i, n) for i in range(n)]


def _exchange(values, from_dict, rng):
    """Random gossip rounds, then a full all-pairs pass so everyone has everything."""
    for _ in range(10):
        src, dst = rng.sample(range(len(values)), 2)
        values[dst].merge(from_dict(values[src].to_dict()))
    for src, dst in itertools.permutations(range(len(values)), 2):
        values[dst].merge(from_dict(values[src].to_dict()))


def test_pncounters_converge():
    rng = random.Random(7)
    replicas = _replicas(4)
    counters = [r.pncounter() for r in replicas]
    expected = 0
    for replica, counter in zip(replicas, counters):
        for _ in range(rng.randint(1, 5)):
            amount = rng.randint(1, 9)
            if rng.random() < 0.5:
                replica.increment(counter, amount)
                expected += amount
            else:
                replica.decrement(counter, amount)
                expected -= amount

    _exchange(counters, PNCounter.from_dict, rng)

    assert all(c == counters[0] for c in counters)
    assert counters[0].value == expected
    assert len({c.fingerprint() for c in counters}) == 1


def test_two_phase_sets_converge_remove_wins():
    rng = random.Random(11)
    sets = [TwoPhaseSet() for _ in range(3)]
    sets[0].add("road_a")
    sets[0].add("road_b")
    sets[1].merge(sets[0])
    sets[1].remove("road_a")
    sets[2].add("road_a")  # independent add of the same value

    _exchange(sets, TwoPhaseSet.from_dict, rng)

    for s in sets:
        assert s.value == {"road_b"}


def test_orsets_converge_add_wins():
    rng = random.Random(3)
    replicas = _replicas(3)
    sets = [r.orset() for r in replicas]

    # A adds x (t1); B observes t1 and removes it; A concurrently re-adds (t2)
    t1 = sets[0].add("x")
    sets[1].merge(ORSet.from_dict(sets[0].to_dict()))
    assert sets[1].remove("x") == {t1}
    t2 = sets[0].add("x")
    sets[2].add("y")
    sets[2].remove("y")

    _exchange(sets, ORSet.from_dict, rng)

    for s in sets:
        assert s.contains("x")
        assert s.tags("x") == {t2}
        assert not s.contains("y")
        assert s.value == {"x"}
    assert len({s.fingerprint() for s in sets}) == 1
