"""Knowledge context handed to the question-answering service."""

from __future__ import annotations

from typing import Sequence

from .records import DetailedResult

ELECTION_CONTEXT = """You are an expert analyst for Indian General Elections 2024 with official Election Commission data.

CRITICAL RULES:
1. For ELECTION-SPECIFIC questions: Use ONLY data provided below
2. For GENERAL KNOWLEDGE questions (people, places, history): Use your training data
3. HIGHEST margin: Dhubri, Assam - Rakibul Hussain (INC) - 1,012,476 votes
4. PM: Narendra Modi (BJP), won Varanasi with 612,970 votes
5. Total seats: 543

QUESTION TYPES:
A. ELECTION DATA (use provided data): seat counts, margins, constituency results, party performance
B. GENERAL INFO (use your knowledge): who is X person, what is Y organization, general political info
C. COMBINED: "How did PM Modi perform?" -> use both knowledge + election data

=== PARTY RESULTS 2024 ===
BJP: 240 | INC: 99 | SP: 37 | TMC: 29 | DMK: 22 | TDP: 16 | JDU: 12 | SS-UBT: 9 | NCP-SP: 8 | Shiv Sena: 7 | IND: 7 | LJP: 5 | CPM: 4 | YSRCP: 4 | RJD: 4 | JMM: 3 | AAP: 3 | IUML: 3 | JKNC: 2 | JSP: 2 | CPI: 2 | VCK: 2 | RLD: 2 | JDS: 2

=== STATE RESULTS (TOP 10) ===
UP (80): SP 37, BJP 33, INC 6, RLD 2
Maharashtra (48): INC 13, BJP 9, SS-UBT 9, NCP-SP 8, Shiv Sena 7
West Bengal (42): TMC 29, BJP 12, INC 1
Bihar (40): JDU 12, BJP 12, LJP 5, RJD 4, INC 3
Tamil Nadu (39): DMK 22, INC 9, CPM 2, CPI 2, VCK 2
MP (29): BJP 29
Karnataka (28): BJP 17, INC 9, JDS 2
Gujarat (26): BJP 25, INC 1
AP (25): TDP 16, YSRCP 4, BJP 3, JSP 2
Rajasthan (25): BJP 14, INC 8

=== TOP 5 MARGINS ===
1. Dhubri, Assam - Rakibul Hussain (INC): 1,012,476
2. Indore, MP - Shankar Lalwani (BJP): 1,008,077
3. Vidisha, MP - Shivraj Singh Chouhan (BJP): 821,408
4. Navsari, Gujarat - C R Patil (BJP): 773,551
5. Gandhinagar, Gujarat - Amit Shah (BJP): 744,716

=== 2019 vs 2024 COMPARISON ===
BJP: 303 -> 240 (-63 seats)
INC: 52 -> 99 (+47 seats)
SP: 5 -> 37 (+32 seats)
TMC: 22 -> 29 (+7 seats)
DMK: 23 -> 22 (-1 seat)
TDP: 3 -> 16 (+13 seats)
JDU: 16 -> 12 (-4 seats)

NDA 2024: ~292 seats (BJP + allies)
INDIA 2024: ~234 seats (INC + allies)

FORMATTING: Use **bold** for names, parties, places, numbers. Structure responses clearly."""


def constituency_context(detailed: Sequence[DetailedResult]) -> str:
    """Winner and runner-up of every constituency as a plain-text block.

    Rows are keyed by (state, constituency name); a runner-up (rank 2) is only
    attached once the winner (rank 1) for that constituency has been seen.
    """
    seats: dict[tuple[str, str], dict[str, DetailedResult | None]] = {}
    for row in detailed:
        if not row.pc_name:
            continue
        key = (row.state, row.pc_name)
        if row.sl_no == 1:
            seats[key] = {"winner": row, "runner_up": None}
        elif row.sl_no == 2 and key in seats:
            seats[key]["runner_up"] = row

    if not seats:
        return ""

    lines = [f"=== ALL {len(seats)} CONSTITUENCY RESULTS (COMPLETE DATA) ===", ""]
    for entry in seats.values():
        winner = entry["winner"]
        runner_up = entry["runner_up"]
        lines.append(f"{winner.pc_name}, {winner.state}:")
        lines.append(f"  Winner: {winner.candidate} ({winner.party}) - {winner.total_votes} votes")
        if runner_up is not None:
            lines.append(f"  Runner-up: {runner_up.candidate} ({runner_up.party}) - {runner_up.total_votes} votes")
            lines.append(f"  Margin: {winner.total_votes - runner_up.total_votes:,} votes")
        lines.append("")
    return "\n".join(lines)


def build_context(detailed: Sequence[DetailedResult] = ()) -> str:
    extra = constituency_context(detailed)
    return f"{ELECTION_CONTEXT}\n\n{extra}" if extra else ELECTION_CONTEXT
