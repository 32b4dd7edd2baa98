from .gcounter import GCounter
from .pncounter import PNCounter
from .gset import GSet
from .twophaseset import TwoPhaseSet
from .orset import ORSet, ORSetElements

__all__ = ["GCounter", "PNCounter", "GSet", "TwoPhaseSet", "ORSet", "ORSetElements"]
