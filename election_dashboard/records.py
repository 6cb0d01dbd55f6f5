"""Typed rows parsed from the result CSVs and the statistics derived from them."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal, Mapping


@dataclass(frozen=True)
class ConstituencyResult:
    constituency: str
    const_no: str
    leading_candidate: str
    leading_party: str
    trailing_candidate: str
    trailing_party: str
    margin: int
    status: str


@dataclass(frozen=True)
class CandidateResult:
    sn: int
    candidate: str
    party: str
    evm_votes: int
    postal_votes: int
    total_votes: int
    vote_percentage: float
    state: str
    constituency: str


@dataclass(frozen=True)
class DetailedResult:
    state: str
    pc_no: int
    pc_name: str
    sl_no: int
    candidate: str
    party: str
    evm_votes: int
    postal_votes: int
    total_votes: int
    vote_share: float


@dataclass(frozen=True)
class PartyStats:
    party: str
    seats: int
    # Seat aggregate only: sum of winning margins, not a vote total.
    aggregate_margin_votes: int
    # Vote-share aggregate only: sum of total votes over every candidate row.
    votes: int
    percentage: float
    color: str


@dataclass(frozen=True)
class StateStats:
    state: str
    total_seats: int
    parties: Mapping[str, int]
    total_votes: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "parties", MappingProxyType(dict(self.parties)))


InsightKind = Literal["highlight", "warning", "trend", "comparison"]


@dataclass(frozen=True)
class InsightData:
    kind: InsightKind
    title: str
    description: str
    value: int | float | None = None
    # Percent change backing a comparison; None when not applicable.
    change: float | None = None
    subject: str | None = None
