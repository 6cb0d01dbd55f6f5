"""JSON payloads for the static build of the dashboard."""

from __future__ import annotations

import datetime as dt
from dataclasses import asdict
from typing import Any, Sequence

from .analytics import summarize
from .config import DashboardConfig
from .enrichment import DEFAULT_TABLES, ReferenceTables
from .loader import ElectionDataset
from .records import ConstituencyResult
from .views import closest_contests, largest_margins, seat_change_summary, seat_changes


def _plain(obj: Any) -> Any:
    return asdict(obj) if obj is not None else None


def build_payload(
    dataset: ElectionDataset,
    config: DashboardConfig,
    tables: ReferenceTables = DEFAULT_TABLES,
) -> dict[str, Any]:
    summary = summarize(
        dataset.constituencies,
        dataset.detailed,
        tables,
        config.none_of_the_above,
        config.reference_parties,
    )
    changes = seat_changes(summary.party_stats, tables)
    change_totals = seat_change_summary(changes)
    return {
        "overview": {
            "totalConstituencies": summary.total_constituencies,
            "totalCandidates": summary.total_candidates,
            "totalVotes": summary.total_votes,
            "states": summary.states,
            "parties": summary.parties,
        },
        "partyStats": [asdict(s) | {"shortName": tables.short_name(s.party)} for s in summary.party_stats],
        "voteShare": [asdict(s) | {"shortName": tables.short_name(s.party)} for s in summary.vote_share],
        "stateStats": [
            {
                "state": s.state,
                "totalSeats": s.total_seats,
                "parties": dict(s.parties),
                "totalVotes": s.total_votes,
            }
            for s in summary.state_stats
        ],
        "insights": [asdict(i) for i in summary.insights],
        "closestContests": [asdict(c) for c in closest_contests(dataset.constituencies, config.top_n)],
        "largestMargins": [asdict(c) for c in largest_margins(dataset.constituencies, config.top_n)],
        "seatChanges": [asdict(c) for c in changes],
        "seatChangeSummary": {
            "gainers": change_totals.gainers,
            "losers": change_totals.losers,
            "totalGained": change_totals.total_gained,
            "totalLost": change_totals.total_lost,
            "biggestGainer": _plain(change_totals.biggest_gainer),
            "biggestLoser": _plain(change_totals.biggest_loser),
        },
    }


def build_metadata(dataset: ElectionDataset, now: dt.datetime | None = None) -> dict[str, Any]:
    now = now or dt.datetime.now(dt.timezone.utc)
    return {
        "generatedAt": now.isoformat(),
        "sources": [{"source": source, "sha256": digest} for source, digest in dataset.checksums],
        "rowCounts": {
            "constituencies": len(dataset.constituencies),
            "candidates": len(dataset.candidates),
            "detailed": len(dataset.detailed),
        },
    }


CONSTITUENCY_CSV_COLUMNS = ["Constituency", "Winner", "Party", "Runner-up", "Runner-up Party", "Margin"]


def constituency_table_rows(constituencies: Sequence[ConstituencyResult]) -> list[dict[str, Any]]:
    """Rows for the downloadable constituency table, keyed by ``CONSTITUENCY_CSV_COLUMNS``."""
    return [
        dict(
            zip(
                CONSTITUENCY_CSV_COLUMNS,
                (c.constituency, c.leading_candidate, c.leading_party, c.trailing_candidate, c.trailing_party, c.margin),
            )
        )
        for c in constituencies
    ]
