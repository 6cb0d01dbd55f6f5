"""Party, state and vote-share aggregates plus the headline insights.

Every function here is pure: it reads the parsed records, returns freshly
built statistics and leaves its inputs untouched, so the dashboard can
recompute on every rerun without any shared cache.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .enrichment import DEFAULT_TABLES, ReferenceTables
from .records import ConstituencyResult, DetailedResult, InsightData, PartyStats, StateStats

NONE_OF_THE_ABOVE = "None of the Above"
REFERENCE_PARTIES = ("Bharatiya Janata Party", "Indian National Congress")


def safe_div(a: float, b: float) -> float:
    return a / b if b else 0.0


def compute_party_stats(
    constituencies: Sequence[ConstituencyResult],
    tables: ReferenceTables = DEFAULT_TABLES,
) -> list[PartyStats]:
    """Seats per leading party, largest first.

    ``aggregate_margin_votes`` is the sum of winning margins over the party's
    seats. It is kept as the margin sum (not a vote total) because
    average-margin views divide it by ``seats``.
    """
    seats: dict[str, int] = {}
    margins: dict[str, int] = {}
    for row in constituencies:
        seats[row.leading_party] = seats.get(row.leading_party, 0) + 1
        margins[row.leading_party] = margins.get(row.leading_party, 0) + row.margin

    total_seats = len(constituencies)
    stats = [
        PartyStats(
            party=party,
            seats=count,
            aggregate_margin_votes=margins[party],
            votes=0,
            percentage=safe_div(count, total_seats) * 100,
            color=tables.color(party),
        )
        for party, count in seats.items()
    ]
    # dicts keep encounter order and sorted() is stable, so ties stay in input order
    return sorted(stats, key=lambda s: s.seats, reverse=True)


def constituency_winners(detailed: Sequence[DetailedResult]) -> dict[tuple[str, str], DetailedResult]:
    """Highest-vote row per (state, constituency); the first row wins a tie."""
    winners: dict[tuple[str, str], DetailedResult] = {}
    for row in detailed:
        key = (row.state, row.pc_name)
        current = winners.get(key)
        if current is None or row.total_votes > current.total_votes:
            winners[key] = row
    return winners


def compute_state_stats(detailed: Sequence[DetailedResult]) -> list[StateStats]:
    seats: dict[str, int] = {}
    parties: dict[str, dict[str, int]] = {}
    votes: dict[str, int] = {}
    for (state, _), winner in constituency_winners(detailed).items():
        seats[state] = seats.get(state, 0) + 1
        by_party = parties.setdefault(state, {})
        by_party[winner.party] = by_party.get(winner.party, 0) + 1
        votes[state] = votes.get(state, 0) + winner.total_votes

    stats = [
        StateStats(state=state, total_seats=count, parties=parties[state], total_votes=votes[state])
        for state, count in seats.items()
    ]
    return sorted(stats, key=lambda s: s.total_seats, reverse=True)


def compute_vote_share(
    detailed: Sequence[DetailedResult],
    tables: ReferenceTables = DEFAULT_TABLES,
    none_of_the_above: str = NONE_OF_THE_ABOVE,
) -> list[PartyStats]:
    """Votes per party over every candidate row, NOTA excluded from both sides of the ratio."""
    party_votes: dict[str, int] = {}
    grand_total = 0
    for row in detailed:
        if row.party == none_of_the_above:
            continue
        party_votes[row.party] = party_votes.get(row.party, 0) + row.total_votes
        grand_total += row.total_votes

    stats = [
        PartyStats(
            party=party,
            seats=0,
            aggregate_margin_votes=0,
            votes=total,
            percentage=safe_div(total, grand_total) * 100,
            color=tables.color(party),
        )
        for party, total in party_votes.items()
    ]
    return sorted(stats, key=lambda s: s.votes, reverse=True)


def generate_insights(
    constituencies: Sequence[ConstituencyResult],
    detailed: Sequence[DetailedResult],
    tables: ReferenceTables = DEFAULT_TABLES,
    reference_parties: tuple[str, str] = REFERENCE_PARTIES,
) -> list[InsightData]:
    insights: list[InsightData] = []
    party_stats = compute_party_stats(constituencies, tables)

    if party_stats:
        top = party_stats[0]
        insights.append(
            InsightData(
                kind="highlight",
                title="Leading Party",
                description=(
                    f"{tables.short_name(top.party)} leads with {top.seats} seats "
                    f"({top.percentage:.1f}% of total)"
                ),
                value=top.seats,
                subject=top.party,
            )
        )

    if constituencies:
        # min()/max() return the first extreme element, matching a stable sort
        closest = min(constituencies, key=lambda c: c.margin)
        insights.append(
            InsightData(
                kind="warning",
                title="Closest Contest",
                description=f"{closest.constituency}: {closest.leading_candidate} won by just {closest.margin:,} votes",
                value=closest.margin,
                subject=closest.constituency,
            )
        )
        biggest = max(constituencies, key=lambda c: c.margin)
        insights.append(
            InsightData(
                kind="highlight",
                title="Biggest Victory Margin",
                description=f"{biggest.constituency}: {biggest.leading_candidate} won by {biggest.margin:,} votes",
                value=biggest.margin,
                subject=biggest.constituency,
            )
        )

        first, second = reference_parties
        seats_by_party = {s.party: s.seats for s in party_stats}
        first_seats = seats_by_party.get(first, 0)
        second_seats = seats_by_party.get(second, 0)
        first_label = tables.short_name(first)
        second_label = tables.short_name(second)
        insights.append(
            InsightData(
                kind="comparison",
                title=f"{first_label} vs {second_label}",
                description=(
                    f"{first_label} has {first_seats} seats compared to {second_label}'s {second_seats} seats"
                ),
                value=first_seats - second_seats,
                change=((first_seats - second_seats) / second_seats * 100) if second_seats else None,
                subject=first,
            )
        )

    if detailed:
        candidates = count_candidates(detailed)
        insights.append(
            InsightData(
                kind="trend",
                title="Total Candidates",
                description=f"{candidates:,} candidates contested across all constituencies",
                value=candidates,
            )
        )

    return insights


def count_candidates(detailed: Sequence[DetailedResult]) -> int:
    return len({row.candidate for row in detailed})


@dataclass(frozen=True)
class DashboardSummary:
    party_stats: list[PartyStats]
    state_stats: list[StateStats]
    vote_share: list[PartyStats]
    insights: list[InsightData]
    states: list[str]
    parties: list[str]
    total_votes: int
    total_constituencies: int
    total_candidates: int


def summarize(
    constituencies: Sequence[ConstituencyResult],
    detailed: Sequence[DetailedResult],
    tables: ReferenceTables = DEFAULT_TABLES,
    none_of_the_above: str = NONE_OF_THE_ABOVE,
    reference_parties: tuple[str, str] = REFERENCE_PARTIES,
) -> DashboardSummary:
    """Everything the dashboard tabs read, computed in one pass over the records."""
    return DashboardSummary(
        party_stats=compute_party_stats(constituencies, tables),
        state_stats=compute_state_stats(detailed),
        vote_share=compute_vote_share(detailed, tables, none_of_the_above),
        insights=generate_insights(constituencies, detailed, tables, reference_parties),
        states=sorted({row.state for row in detailed}),
        parties=sorted({row.leading_party for row in constituencies}),
        total_votes=sum(row.total_votes for row in detailed),
        total_constituencies=len(constituencies),
        total_candidates=count_candidates(detailed),
    )


def format_number(num: float) -> str:
    """Compact Indian units: crore, lakh, thousand."""
    if num >= 10_000_000:
        return f"{num / 10_000_000:.2f} Cr"
    if num >= 100_000:
        return f"{num / 100_000:.2f} L"
    if num >= 1_000:
        return f"{num / 1_000:.1f}K"
    return f"{num:,.0f}" if float(num).is_integer() else f"{num:,}"


def format_percentage(num: float) -> str:
    return f"{num:.1f}%"
