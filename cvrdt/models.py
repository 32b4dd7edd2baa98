from typing import Any, List, Literal, NamedTuple

from pydantic import BaseModel, ConfigDict, NonNegativeInt, field_validator, model_validator


def _as_element(value):
    """Set members come back from JSON with tuples turned into lists."""
    if isinstance(value, list):
        value = tuple(_as_element(v) for v in value)
    try:
        hash(value)
    except TypeError:
        raise ValueError(f"set element is not hashable: {value!r}")
    return value


def _as_elements(values):
    return [_as_element(v) for v in values]


class Tag(NamedTuple):
    """Identity of one ORSet add: the adding replica and its sequence number."""

    replica_id: str
    sequence: int


class TagModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    replica_id: str
    sequence: NonNegativeInt

    @classmethod
    def from_tag(cls, tag: Tag) -> "TagModel":
        return cls(replica_id=tag.replica_id, sequence=tag.sequence)

    def to_tag(self) -> Tag:
        return Tag(self.replica_id, self.sequence)


class GCounterSnapshot(BaseModel):
    """Serializable state of a GCounter. `total_value` is informational only."""

    type: Literal["gcounter"] = "gcounter"
    counts: List[NonNegativeInt]
    total_value: int = 0


class PNCounterSnapshot(BaseModel):
    type: Literal["pn_counter"] = "pn_counter"
    positive: GCounterSnapshot
    negative: GCounterSnapshot
    total_value: int = 0

    @model_validator(mode="after")
    def check_same_size(self):
        if len(self.positive.counts) != len(self.negative.counts):
            raise ValueError("positive and negative counters differ in size")
        return self


class GSetSnapshot(BaseModel):
    type: Literal["gset"] = "gset"
    elements: List[Any]

    @field_validator("elements")
    @classmethod
    def check_elements_hashable(cls, values):
        return _as_elements(values)


class TwoPhaseSetSnapshot(BaseModel):
    """Both phases of a TwoPhaseSet. Every removed element must also be added."""

    type: Literal["two_phase_set"] = "two_phase_set"
    adds: List[Any]
    removes: List[Any]
    active_elements: List[Any] = []

    @field_validator("adds", "removes")
    @classmethod
    def check_elements_hashable(cls, values):
        return _as_elements(values)

    @model_validator(mode="after")
    def check_removes_observed(self):
        added = set(self.adds)
        unobserved = [e for e in self.removes if e not in added]
        if unobserved:
            raise ValueError(f"removed elements never added: {unobserved!r}")
        return self


class ORSetEntry(BaseModel):
    element: Any
    tag: TagModel

    @field_validator("element")
    @classmethod
    def check_element_hashable(cls, value):
        return _as_element(value)


class ORSetSnapshot(BaseModel):
    type: Literal["or_set"] = "or_set"
    replica_id: str
    entries: List[ORSetEntry]
    tombstones: List[TagModel]
    active_elements: List[Any] = []
