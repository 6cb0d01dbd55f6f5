"""Parse the result CSVs into typed records.

Columns are located by searching the header row for a substring rather than
by position, so files whose headers drift between dataset vintages
("Total Votes" vs "Total Votes Polled", "Sl no" vs "Sl no.") still parse.
Each parse call resolves a small table of ``ColumnSpec`` entries against the
header once, then reads every row through the resolved indices.

Malformed rows never abort a parse: numeric cells that do not parse become 0,
and a row without its identifying field is dropped.
"""

from __future__ import annotations

import csv
import io
import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterator

from .records import CandidateResult, ConstituencyResult, DetailedResult

logger = logging.getLogger(__name__)

HeaderMatcher = Callable[[str], bool]


@dataclass(frozen=True)
class ColumnSpec:
    field: str
    matches: HeaderMatcher


def contains(fragment: str) -> HeaderMatcher:
    needle = fragment.lower()

    def _match(header: str) -> bool:
        return needle in header.lower()

    return _match


def resolve_columns(headers: list[str], specs: list[ColumnSpec]) -> dict[str, int | None]:
    """Map each column's field to the index of the first header it matches (or None)."""
    cleaned = [h.strip().lstrip("\ufeff") for h in headers]
    resolved: dict[str, int | None] = {}
    for column in specs:
        resolved[column.field] = next((i for i, h in enumerate(cleaned) if column.matches(h)), None)
    return resolved


CONSTITUENCY_COLUMNS = [
    ColumnSpec("constituency", contains("Constituency")),
    ColumnSpec("const_no", contains("Const. No")),
    ColumnSpec("leading_candidate", contains("Leading Candidate")),
    ColumnSpec("leading_party", contains("Leading Party")),
    ColumnSpec("trailing_candidate", contains("Trailing Candidate")),
    ColumnSpec("trailing_party", contains("Trailing Party")),
    ColumnSpec("margin", contains("Margin")),
    ColumnSpec("status", contains("Status")),
]

CANDIDATE_COLUMNS = [
    ColumnSpec("sn", contains("S.N")),
    ColumnSpec("candidate", contains("Candidate")),
    ColumnSpec("party", contains("Party")),
    ColumnSpec("evm_votes", contains("EVM Votes")),
    ColumnSpec("postal_votes", contains("Postal Votes")),
    ColumnSpec("total_votes", contains("Total Votes")),
    ColumnSpec("vote_percentage", contains("% of Votes")),
    ColumnSpec("state", contains("State")),
    ColumnSpec("constituency", contains("Constituency")),
]

DETAILED_COLUMNS = [
    ColumnSpec("state", contains("State")),
    ColumnSpec("pc_no", contains("PC No")),
    ColumnSpec("pc_name", contains("PC Name")),
    ColumnSpec("sl_no", contains("Sl no")),
    ColumnSpec("candidate", contains("Candidate")),
    ColumnSpec("party", contains("Party")),
    ColumnSpec("evm_votes", contains("EVM Votes")),
    ColumnSpec("postal_votes", contains("Postal Votes")),
    ColumnSpec("total_votes", contains("Total Votes")),
    ColumnSpec("vote_share", contains("Vote Share")),
]


def to_int(value: str | None) -> int:
    if value is None:
        return 0
    s = str(value).strip().replace(",", "")
    if not s:
        return 0
    try:
        x = float(s)
    except ValueError:
        return 0
    # "inf", "1e999" and "NaN" all parse as floats
    return int(x) if math.isfinite(x) else 0


def to_float(value: str | None) -> float:
    if value is None:
        return 0.0
    s = str(value).strip().replace(",", "").rstrip("%")
    if not s:
        return 0.0
    try:
        x = float(s)
    except ValueError:
        return 0.0
    return x if math.isfinite(x) else 0.0


def iter_rows(text: str, specs: list[ColumnSpec]) -> Iterator[dict[str, str]]:
    """Yield one ``{field: cell}`` dict per non-blank data row; missing cells read as ""."""
    reader = csv.reader(io.StringIO(text))
    header = next(reader, None)
    if header is None:
        return
    columns = resolve_columns(header, specs)
    missing = [name for name, idx in columns.items() if idx is None]
    if missing:
        logger.debug("columns not found in header: %s", ", ".join(missing))

    for row in reader:
        if not any(cell.strip() for cell in row):
            continue
        yield {
            name: (row[idx].strip() if idx is not None and idx < len(row) else "")
            for name, idx in columns.items()
        }


def parse_constituency_results(text: str) -> list[ConstituencyResult]:
    out = []
    dropped = 0
    for rec in iter_rows(text, CONSTITUENCY_COLUMNS):
        if not rec["constituency"]:
            dropped += 1
            continue
        out.append(
            ConstituencyResult(
                constituency=rec["constituency"],
                const_no=rec["const_no"],
                leading_candidate=rec["leading_candidate"],
                leading_party=rec["leading_party"],
                trailing_candidate=rec["trailing_candidate"],
                trailing_party=rec["trailing_party"],
                # Margins are differences of vote counts; a negative cell is a data error.
                margin=max(to_int(rec["margin"]), 0),
                status=rec["status"],
            )
        )
    if dropped:
        logger.debug("dropped %d constituency rows without a name", dropped)
    return out


def parse_candidate_results(text: str) -> list[CandidateResult]:
    out = []
    dropped = 0
    for rec in iter_rows(text, CANDIDATE_COLUMNS):
        if not rec["candidate"]:
            dropped += 1
            continue
        out.append(
            CandidateResult(
                sn=to_int(rec["sn"]),
                candidate=rec["candidate"],
                party=rec["party"],
                evm_votes=to_int(rec["evm_votes"]),
                postal_votes=to_int(rec["postal_votes"]),
                total_votes=to_int(rec["total_votes"]),
                vote_percentage=to_float(rec["vote_percentage"]),
                state=rec["state"],
                constituency=rec["constituency"],
            )
        )
    if dropped:
        logger.debug("dropped %d candidate rows without a candidate name", dropped)
    return out


def parse_detailed_results(text: str) -> list[DetailedResult]:
    out = []
    dropped = 0
    for rec in iter_rows(text, DETAILED_COLUMNS):
        if not rec["candidate"]:
            dropped += 1
            continue
        out.append(
            DetailedResult(
                state=rec["state"],
                pc_no=to_int(rec["pc_no"]),
                pc_name=rec["pc_name"],
                sl_no=to_int(rec["sl_no"]),
                candidate=rec["candidate"],
                party=rec["party"],
                evm_votes=to_int(rec["evm_votes"]),
                # "-" marks constituencies without postal ballots.
                postal_votes=to_int(rec["postal_votes"]),
                total_votes=to_int(rec["total_votes"]),
                vote_share=to_float(rec["vote_share"]),
            )
        )
    if dropped:
        logger.debug("dropped %d detailed rows without a candidate name", dropped)
    return out
