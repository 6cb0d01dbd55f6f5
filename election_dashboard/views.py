"""Read-only projections over the aggregates: leaderboards, filters, comparisons.

Comparison accessors return a ``NoComparison`` sentinel instead of a half
filled bundle when either side is unknown; callers test the result for truth.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence, TypeVar

from .analytics import constituency_winners, safe_div
from .enrichment import DEFAULT_TABLES, ReferenceTables
from .records import ConstituencyResult, DetailedResult, PartyStats, StateStats

T = TypeVar("T")


@dataclass(frozen=True)
class NoComparison:
    reason: str

    def __bool__(self) -> bool:
        return False


def top_n(items: Sequence[T], key: Callable[[T], float], n: int) -> list[T]:
    """Largest ``n`` items by ``key``; ties keep their input order, short inputs return whole."""
    return sorted(items, key=key, reverse=True)[: max(n, 0)]


def closest_contests(constituencies: Sequence[ConstituencyResult], n: int = 10) -> list[ConstituencyResult]:
    return sorted(constituencies, key=lambda c: c.margin)[: max(n, 0)]


def largest_margins(constituencies: Sequence[ConstituencyResult], n: int = 10) -> list[ConstituencyResult]:
    return top_n(constituencies, lambda c: c.margin, n)


def filter_by_query(items: Sequence[T], query: str, fields: Sequence[Callable[[T], str]]) -> list[T]:
    """Case-insensitive substring match against any of ``fields``; a blank query keeps everything."""
    needle = query.strip().lower()
    if not needle:
        return list(items)
    return [item for item in items if any(needle in (get(item) or "").lower() for get in fields)]


def filter_constituencies(constituencies: Sequence[ConstituencyResult], query: str) -> list[ConstituencyResult]:
    return filter_by_query(
        constituencies,
        query,
        [lambda c: c.constituency, lambda c: c.leading_party, lambda c: c.leading_candidate],
    )


ALL_PARTIES = "All parties"


def filter_by_party(constituencies: Sequence[ConstituencyResult], party: str) -> list[ConstituencyResult]:
    """Seats won by one party; a blank party or ``ALL_PARTIES`` keeps everything."""
    if not party or party == ALL_PARTIES:
        return list(constituencies)
    return [c for c in constituencies if c.leading_party == party]


@dataclass(frozen=True)
class ConstituencySummary:
    total_seats: int
    avg_margin: float
    closest_contest: ConstituencyResult | None
    biggest_victory: ConstituencyResult | None


def summarize_constituencies(constituencies: Sequence[ConstituencyResult]) -> ConstituencySummary:
    return ConstituencySummary(
        total_seats=len(constituencies),
        avg_margin=safe_div(sum(c.margin for c in constituencies), len(constituencies)),
        closest_contest=min(constituencies, key=lambda c: c.margin, default=None),
        biggest_victory=max(constituencies, key=lambda c: c.margin, default=None),
    )


SORT_KEYS: dict[str, Callable[[ConstituencyResult], object]] = {
    "constituency": lambda c: c.constituency,
    "leading_party": lambda c: c.leading_party,
    "margin": lambda c: c.margin,
}


def sort_constituencies(
    constituencies: Sequence[ConstituencyResult],
    by: str = "margin",
    descending: bool = True,
) -> list[ConstituencyResult]:
    if by not in SORT_KEYS:
        raise ValueError(f"unknown sort key: {by}")
    return sorted(constituencies, key=SORT_KEYS[by], reverse=descending)


def paginate(items: Sequence[T], page: int, page_size: int) -> list[T]:
    """1-based page slice; pages past the end are empty."""
    if page < 1 or page_size < 1:
        return []
    start = (page - 1) * page_size
    return list(items[start : start + page_size])


def page_count(total: int, page_size: int) -> int:
    return -(-total // page_size) if page_size > 0 else 0


def state_party_breakdown(state_stats: Sequence[StateStats], state: str) -> list[tuple[str, int]]:
    """(party, seats) pairs for one state, most seats first; empty when the state is unknown."""
    match = next((s for s in state_stats if s.state == state), None)
    if match is None:
        return []
    return sorted(match.parties.items(), key=lambda kv: kv[1], reverse=True)


WinnerIndex = dict[tuple[str, str], DetailedResult]


def match_constituency(result: ConstituencyResult, winners: WinnerIndex) -> tuple[str, str] | None:
    """(state, name) key of the detailed rows behind a constituency result.

    Some names repeat across states (Hamirpur, Aurangabad); the group whose
    top-voted candidate is the result's leading candidate wins, else the first seen.
    """
    keys = [key for key in winners if key[1] == result.constituency]
    if not keys:
        return None
    return next((key for key in keys if winners[key].candidate == result.leading_candidate), keys[0])


def with_others(
    stats: Sequence[PartyStats],
    limit: int,
    tables: ReferenceTables = DEFAULT_TABLES,
) -> list[PartyStats]:
    """First ``limit`` rows plus one "Others" row folding the remainder."""
    head = list(stats[:limit])
    rest = stats[limit:]
    if not rest:
        return head
    head.append(
        PartyStats(
            party="Others",
            seats=sum(s.seats for s in rest),
            aggregate_margin_votes=sum(s.aggregate_margin_votes for s in rest),
            votes=sum(s.votes for s in rest),
            percentage=sum(s.percentage for s in rest),
            color=tables.default_color,
        )
    )
    return head


# Party comparison


@dataclass(frozen=True)
class PartyProfile:
    party: str
    short_name: str
    color: str
    seats: int
    seat_percentage: float
    prior_seats: int
    seat_change: int
    aggregate_margin_votes: int
    total_votes: int
    vote_share: float
    avg_margin: float
    max_margin: int
    constituencies: int


@dataclass(frozen=True)
class PartyComparison:
    left: PartyProfile
    right: PartyProfile


def _party_profile(
    stats: PartyStats,
    constituencies: Sequence[ConstituencyResult],
    detailed: Sequence[DetailedResult],
    grand_total: int,
    tables: ReferenceTables,
) -> PartyProfile:
    won = [c for c in constituencies if c.leading_party == stats.party]
    total_votes = sum(d.total_votes for d in detailed if d.party == stats.party)
    prior = tables.prior_seats(stats.party)
    return PartyProfile(
        party=stats.party,
        short_name=tables.short_name(stats.party),
        color=tables.color(stats.party),
        seats=stats.seats,
        seat_percentage=stats.percentage,
        prior_seats=prior,
        seat_change=stats.seats - prior,
        aggregate_margin_votes=stats.aggregate_margin_votes,
        total_votes=total_votes,
        vote_share=safe_div(total_votes, grand_total) * 100,
        avg_margin=safe_div(sum(c.margin for c in won), len(won)),
        max_margin=max((c.margin for c in won), default=0),
        constituencies=len(won),
    )


def compare_parties(
    party_stats: Sequence[PartyStats],
    constituencies: Sequence[ConstituencyResult],
    detailed: Sequence[DetailedResult],
    left: str,
    right: str,
    tables: ReferenceTables = DEFAULT_TABLES,
) -> PartyComparison | NoComparison:
    by_party = {s.party: s for s in party_stats}
    for name in (left, right):
        if name not in by_party:
            return NoComparison(f"no seat data for party: {name!r}")
    grand_total = sum(d.total_votes for d in detailed)
    return PartyComparison(
        left=_party_profile(by_party[left], constituencies, detailed, grand_total, tables),
        right=_party_profile(by_party[right], constituencies, detailed, grand_total, tables),
    )


# State comparison


@dataclass(frozen=True)
class StateProfile:
    state: str
    total_seats: int
    parties: dict[str, int]
    total_votes: int
    dominant_party: str | None
    dominant_party_seats: int
    avg_margin: float
    max_margin: int
    unique_parties: int
    constituencies: list[ConstituencyResult]


@dataclass(frozen=True)
class StateComparison:
    left: StateProfile
    right: StateProfile


def _state_profile(
    stats: StateStats,
    constituencies: Sequence[ConstituencyResult],
    detailed: Sequence[DetailedResult],
    winners: WinnerIndex,
) -> StateProfile:
    in_state = []
    for c in constituencies:
        key = match_constituency(c, winners)
        if key is not None and key[0] == stats.state:
            in_state.append(c)
    ranked = sorted(stats.parties.items(), key=lambda kv: kv[1], reverse=True)
    dominant = ranked[0] if ranked else (None, 0)
    return StateProfile(
        state=stats.state,
        total_seats=stats.total_seats,
        parties=dict(stats.parties),
        # every candidate's votes in the state, not just the winners'
        total_votes=sum(d.total_votes for d in detailed if d.state == stats.state),
        dominant_party=dominant[0],
        dominant_party_seats=dominant[1],
        avg_margin=safe_div(sum(c.margin for c in in_state), len(in_state)),
        max_margin=max((c.margin for c in in_state), default=0),
        unique_parties=len(stats.parties),
        constituencies=in_state,
    )


def compare_states(
    state_stats: Sequence[StateStats],
    constituencies: Sequence[ConstituencyResult],
    detailed: Sequence[DetailedResult],
    left: str,
    right: str,
) -> StateComparison | NoComparison:
    by_state = {s.state: s for s in state_stats}
    for name in (left, right):
        if name not in by_state:
            return NoComparison(f"no results for state: {name!r}")
    winners = constituency_winners(detailed)
    return StateComparison(
        left=_state_profile(by_state[left], constituencies, detailed, winners),
        right=_state_profile(by_state[right], constituencies, detailed, winners),
    )


# Candidate and constituency comparison


@dataclass(frozen=True)
class CandidateProfile:
    name: str
    party: str
    constituency: str
    margin: int
    votes: int
    vote_share: float
    color: str


@dataclass(frozen=True)
class CandidateComparison:
    left: CandidateProfile
    right: CandidateProfile


def _candidate_profile(
    winner: ConstituencyResult,
    detailed: Sequence[DetailedResult],
    winners: WinnerIndex,
    tables: ReferenceTables,
) -> CandidateProfile:
    key = match_constituency(winner, winners)
    row = next(
        (d for d in detailed if (d.state, d.pc_name) == key and d.candidate == winner.leading_candidate),
        None,
    )
    return CandidateProfile(
        name=winner.leading_candidate,
        party=winner.leading_party,
        constituency=winner.constituency,
        margin=winner.margin,
        votes=row.total_votes if row else 0,
        vote_share=row.vote_share if row else 0.0,
        color=tables.color(winner.leading_party),
    )


def compare_candidates(
    constituencies: Sequence[ConstituencyResult],
    detailed: Sequence[DetailedResult],
    left: str,
    right: str,
    tables: ReferenceTables = DEFAULT_TABLES,
) -> CandidateComparison | NoComparison:
    """Compare two winning candidates by name."""
    by_name: dict[str, ConstituencyResult] = {}
    for c in constituencies:
        by_name.setdefault(c.leading_candidate, c)
    for name in (left, right):
        if name not in by_name:
            return NoComparison(f"not a winning candidate: {name!r}")
    winners = constituency_winners(detailed)
    return CandidateComparison(
        left=_candidate_profile(by_name[left], detailed, winners, tables),
        right=_candidate_profile(by_name[right], detailed, winners, tables),
    )


@dataclass(frozen=True)
class ConstituencyProfile:
    result: ConstituencyResult
    state: str
    candidates: list[DetailedResult]
    total_votes: int
    contestants: int


@dataclass(frozen=True)
class ConstituencyComparison:
    left: ConstituencyProfile
    right: ConstituencyProfile


def _constituency_profile(
    result: ConstituencyResult,
    detailed: Sequence[DetailedResult],
    winners: WinnerIndex,
) -> ConstituencyProfile:
    key = match_constituency(result, winners)
    rows = sorted((d for d in detailed if (d.state, d.pc_name) == key), key=lambda d: d.sl_no)
    return ConstituencyProfile(
        result=result,
        state=key[0] if key else "",
        candidates=rows,
        total_votes=sum(d.total_votes for d in rows),
        contestants=len(rows),
    )


def compare_constituencies(
    constituencies: Sequence[ConstituencyResult],
    detailed: Sequence[DetailedResult],
    left: str,
    right: str,
) -> ConstituencyComparison | NoComparison:
    by_name: dict[str, ConstituencyResult] = {}
    for c in constituencies:
        by_name.setdefault(c.constituency, c)
    for name in (left, right):
        if name not in by_name:
            return NoComparison(f"unknown constituency: {name!r}")
    winners = constituency_winners(detailed)
    return ConstituencyComparison(
        left=_constituency_profile(by_name[left], detailed, winners),
        right=_constituency_profile(by_name[right], detailed, winners),
    )


# 2019 vs 2024


@dataclass(frozen=True)
class SeatChange:
    party: str
    short_name: str
    prior_seats: int
    seats: int
    change: int
    percent_change: float
    color: str


@dataclass(frozen=True)
class SeatChangeSummary:
    gainers: int
    losers: int
    total_gained: int
    total_lost: int
    biggest_gainer: SeatChange | None
    biggest_loser: SeatChange | None


def seat_changes(
    party_stats: Sequence[PartyStats],
    tables: ReferenceTables = DEFAULT_TABLES,
    limit: int = 15,
) -> list[SeatChange]:
    rows = []
    for stats in party_stats[:limit]:
        prior = tables.prior_seats(stats.party)
        change = stats.seats - prior
        if prior > 0:
            percent = change / prior * 100
        else:
            percent = 100.0 if stats.seats > 0 else 0.0
        rows.append(
            SeatChange(
                party=stats.party,
                short_name=tables.short_name(stats.party),
                prior_seats=prior,
                seats=stats.seats,
                change=change,
                percent_change=percent,
                color=tables.color(stats.party),
            )
        )
    return sorted(rows, key=lambda r: abs(r.change), reverse=True)


def seat_change_summary(changes: Sequence[SeatChange]) -> SeatChangeSummary:
    gainers = [c for c in changes if c.change > 0]
    losers = [c for c in changes if c.change < 0]
    return SeatChangeSummary(
        gainers=len(gainers),
        losers=len(losers),
        total_gained=sum(c.change for c in gainers),
        total_lost=-sum(c.change for c in losers),
        biggest_gainer=max(gainers, key=lambda c: c.change, default=None),
        biggest_loser=min(losers, key=lambda c: c.change, default=None),
    )
