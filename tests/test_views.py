from __future__ import annotations

from dataclasses import replace

import pytest

from election_dashboard.analytics import compute_party_stats, compute_state_stats, constituency_winners
from election_dashboard.enrichment import DEFAULT_COLOR, ReferenceTables
from election_dashboard.records import PartyStats
from election_dashboard.views import (
    ALL_PARTIES,
    NoComparison,
    closest_contests,
    compare_candidates,
    compare_constituencies,
    compare_parties,
    compare_states,
    filter_by_party,
    filter_by_query,
    filter_constituencies,
    largest_margins,
    match_constituency,
    page_count,
    paginate,
    seat_change_summary,
    seat_changes,
    sort_constituencies,
    state_party_breakdown,
    summarize_constituencies,
    top_n,
    with_others,
)


def _stats(party: str, seats: int, percentage: float = 0.0) -> PartyStats:
    return PartyStats(
        party=party,
        seats=seats,
        aggregate_margin_votes=seats * 10,
        votes=0,
        percentage=percentage,
        color=DEFAULT_COLOR,
    )


def test_closest_and_largest(xyz_constituencies) -> None:
    assert [c.constituency for c in closest_contests(xyz_constituencies)] == ["C", "B", "A"]
    assert [c.constituency for c in largest_margins(xyz_constituencies)] == ["A", "B", "C"]
    assert [c.constituency for c in closest_contests(xyz_constituencies, 1)] == ["C"]
    assert [c.constituency for c in largest_margins(xyz_constituencies, 2)] == ["A", "B"]


def test_single_constituency_is_both_closest_and_largest(make_constituency) -> None:
    rows = [make_constituency("Only", "P", 7)]
    assert closest_contests(rows) == largest_margins(rows) == rows


def test_top_n_ties_keep_input_order(make_constituency) -> None:
    rows = [make_constituency("A", "P", 5), make_constituency("B", "P", 9), make_constituency("C", "P", 5)]
    assert [c.constituency for c in top_n(rows, lambda c: c.margin, 3)] == ["B", "A", "C"]
    assert [c.constituency for c in closest_contests(rows, 2)] == ["A", "C"]
    assert top_n(rows, lambda c: c.margin, 0) == []
    assert top_n(rows, lambda c: c.margin, -1) == []


def test_empty_query_is_identity(xyz_constituencies) -> None:
    assert filter_constituencies(xyz_constituencies, "") == xyz_constituencies
    assert filter_constituencies(xyz_constituencies, "   ") == xyz_constituencies


def test_filter_constituencies_matches_any_field(make_constituency) -> None:
    rows = [
        make_constituency("Varanasi", "Bharatiya Janata Party", 10, candidate="NARENDRA MODI"),
        make_constituency("Rae Bareli", "Indian National Congress", 20, candidate="RAHUL GANDHI"),
    ]
    assert [c.constituency for c in filter_constituencies(rows, "vara")] == ["Varanasi"]
    assert [c.constituency for c in filter_constituencies(rows, "congress")] == ["Rae Bareli"]
    assert [c.constituency for c in filter_constituencies(rows, "modi")] == ["Varanasi"]
    assert filter_constituencies(rows, "nowhere") == []


def test_filter_by_query_tolerates_missing_fields() -> None:
    items = [{"name": "Alpha"}, {"name": None}]
    assert filter_by_query(items, "alp", [lambda d: d["name"]]) == [{"name": "Alpha"}]


def test_sort_constituencies(xyz_constituencies) -> None:
    assert [c.constituency for c in sort_constituencies(xyz_constituencies)] == ["A", "B", "C"]
    assert [c.constituency for c in sort_constituencies(xyz_constituencies, "margin", descending=False)] == ["C", "B", "A"]
    assert [c.constituency for c in sort_constituencies(xyz_constituencies, "leading_party", descending=False)] == [
        "A",
        "B",
        "C",
    ]
    with pytest.raises(ValueError):
        sort_constituencies(xyz_constituencies, "turnout")


def test_paginate() -> None:
    items = list(range(45))
    assert paginate(items, 1, 20) == list(range(20))
    assert paginate(items, 3, 20) == list(range(40, 45))
    assert paginate(items, 4, 20) == []
    assert paginate(items, 0, 20) == []
    assert page_count(45, 20) == 3
    assert page_count(40, 20) == 2
    assert page_count(0, 20) == 0
    assert page_count(10, 0) == 0


def test_state_party_breakdown(detailed_rows) -> None:
    stats = compute_state_stats(detailed_rows)
    assert state_party_breakdown(stats, "Gujarat") == [("Bharatiya Janata Party", 1)]
    assert len(state_party_breakdown(stats, "Kerala")) == 2
    assert state_party_breakdown(stats, "Atlantis") == []


def test_with_others_folds_the_tail() -> None:
    stats = [_stats("A", 5, 50.0), _stats("B", 3, 30.0), _stats("C", 1, 10.0), _stats("D", 1, 10.0)]
    rows = with_others(stats, 2, ReferenceTables(default_color="#999"))

    assert [r.party for r in rows] == ["A", "B", "Others"]
    others = rows[-1]
    assert others.seats == 2
    assert others.percentage == pytest.approx(20.0)
    assert others.aggregate_margin_votes == 20
    assert others.color == "#999"


def test_with_others_without_tail() -> None:
    stats = [_stats("A", 5), _stats("B", 3)]
    assert with_others(stats, 5) == stats


def test_compare_parties(xyz_constituencies) -> None:
    party_stats = compute_party_stats(xyz_constituencies)
    result = compare_parties(party_stats, xyz_constituencies, [], "X", "Y")

    assert result
    assert result.left.party == "X"
    assert result.left.seats == 2
    assert result.left.avg_margin == 75.0
    assert result.left.max_margin == 100
    assert result.left.vote_share == 0.0
    assert result.right.seats == 1
    assert result.right.avg_margin == 10.0


def test_compare_parties_uses_prior_seats(make_constituency, detailed_rows) -> None:
    rows = [make_constituency("Wayanad", "Indian National Congress", 300)]
    party_stats = compute_party_stats(rows)
    result = compare_parties(party_stats, rows, detailed_rows, "Indian National Congress", "Indian National Congress")

    assert result.left.prior_seats == 52
    assert result.left.seat_change == 1 - 52
    assert result.left.total_votes == 1050
    assert result.left.vote_share == pytest.approx(1050 / 2700 * 100)


def test_compare_parties_unknown_side(xyz_constituencies) -> None:
    party_stats = compute_party_stats(xyz_constituencies)
    result = compare_parties(party_stats, xyz_constituencies, [], "X", "Nobody")

    assert isinstance(result, NoComparison)
    assert not result
    assert "Nobody" in result.reason


def test_compare_states(make_constituency, detailed_rows) -> None:
    constituencies = [
        make_constituency("Wayanad", "Indian National Congress", 300),
        make_constituency("Thrissur", "Bharatiya Janata Party", 50),
        make_constituency("Navsari", "Bharatiya Janata Party", 800),
    ]
    state_stats = compute_state_stats(detailed_rows)
    result = compare_states(state_stats, constituencies, detailed_rows, "Kerala", "Gujarat")

    assert result
    kerala, gujarat = result.left, result.right
    assert kerala.total_seats == 2
    assert kerala.unique_parties == 2
    assert kerala.avg_margin == 175.0
    assert kerala.max_margin == 300
    assert kerala.total_votes == 1700
    assert [c.constituency for c in kerala.constituencies] == ["Wayanad", "Thrissur"]
    assert gujarat.dominant_party == "Bharatiya Janata Party"
    assert gujarat.dominant_party_seats == 1


def test_compare_states_unknown_side(detailed_rows) -> None:
    result = compare_states(compute_state_stats(detailed_rows), [], detailed_rows, "Kerala", "Atlantis")
    assert isinstance(result, NoComparison)


def test_compare_candidates(make_constituency, detailed_rows) -> None:
    constituencies = [
        make_constituency("Wayanad", "Indian National Congress", 300, candidate="Alice"),
        make_constituency("Navsari", "Bharatiya Janata Party", 800, candidate="Eve"),
    ]
    result = compare_candidates(constituencies, detailed_rows, "Alice", "Eve")

    assert result
    assert result.left.constituency == "Wayanad"
    assert result.left.votes == 600
    assert result.right.votes == 900
    assert result.right.color == "hsl(24, 95%, 53%)"
    assert isinstance(compare_candidates(constituencies, detailed_rows, "Alice", "Bob"), NoComparison)


def test_compare_constituencies(make_constituency, detailed_rows) -> None:
    constituencies = [
        make_constituency("Wayanad", "Indian National Congress", 300),
        make_constituency("Navsari", "Bharatiya Janata Party", 800),
    ]
    result = compare_constituencies(constituencies, detailed_rows, "Wayanad", "Navsari")

    assert result
    assert result.left.state == "Kerala"
    assert result.left.contestants == 3
    assert result.left.total_votes == 950
    assert [d.candidate for d in result.left.candidates] == ["Alice", "Bob", "NOTA"]
    assert result.right.contestants == 2
    assert isinstance(compare_constituencies(constituencies, detailed_rows, "Wayanad", "Amethi"), NoComparison)


def test_seat_changes() -> None:
    tables = ReferenceTables(prior_results={"A": (10, 5.0), "B": (4, 2.0), "C": (3, 1.0)})
    stats = [_stats("A", 15), _stats("B", 2), _stats("New", 6), _stats("C", 3)]
    changes = seat_changes(stats, tables)

    assert [c.party for c in changes] == ["New", "A", "B", "C"]
    new, a, b, c = changes
    assert new.prior_seats == 0
    assert new.percent_change == 100.0
    assert a.change == 5
    assert a.percent_change == pytest.approx(50.0)
    assert b.change == -2
    assert b.percent_change == pytest.approx(-50.0)
    assert c.change == 0
    assert c.percent_change == 0.0


def test_seat_changes_limit() -> None:
    stats = [_stats(f"P{i}", 20 - i) for i in range(20)]
    assert len(seat_changes(stats, ReferenceTables())) == 15
    assert len(seat_changes(stats, ReferenceTables(), limit=3)) == 3


def test_seat_change_summary() -> None:
    tables = ReferenceTables(prior_results={"A": (10, 5.0), "B": (4, 2.0), "D": (9, 1.0)})
    changes = seat_changes([_stats("A", 15), _stats("B", 2), _stats("D", 1), _stats("E", 0)], tables)
    summary = seat_change_summary(changes)

    assert summary.gainers == 1
    assert summary.losers == 2
    assert summary.total_gained == 5
    assert summary.total_lost == 10
    assert summary.biggest_gainer.party == "A"
    assert summary.biggest_loser.party == "D"


def test_seat_change_summary_empty() -> None:
    summary = seat_change_summary([])
    assert summary.gainers == summary.losers == 0
    assert summary.biggest_gainer is None
    assert summary.biggest_loser is None


def test_match_constituency_picks_the_state_its_winner_ran_in(shared_name_rows, shared_name_constituencies) -> None:
    winners = constituency_winners(shared_name_rows)
    hp, up = shared_name_constituencies

    assert match_constituency(hp, winners) == ("Himachal Pradesh", "Hamirpur")
    assert match_constituency(up, winners) == ("Uttar Pradesh", "Hamirpur")
    assert match_constituency(replace(hp, constituency="Atlantis"), winners) is None


def test_compare_constituencies_does_not_merge_states(shared_name_rows, shared_name_constituencies) -> None:
    result = compare_constituencies(shared_name_constituencies, shared_name_rows, "Hamirpur", "Hamirpur")

    # first row with the name wins
    assert result.left.result.leading_candidate == "h1"
    assert result.left.state == "Himachal Pradesh"
    assert [d.candidate for d in result.left.candidates] == ["h1", "h2"]
    assert result.left.contestants == 2
    assert result.left.total_votes == 1000


def test_compare_states_attaches_only_own_constituencies(shared_name_rows, shared_name_constituencies) -> None:
    state_stats = compute_state_stats(shared_name_rows)
    result = compare_states(state_stats, shared_name_constituencies, shared_name_rows, "Uttar Pradesh", "Himachal Pradesh")

    assert [c.leading_candidate for c in result.left.constituencies] == ["u1"]
    assert result.left.avg_margin == 100.0
    assert result.left.max_margin == 100
    assert [c.leading_candidate for c in result.right.constituencies] == ["h1"]
    assert result.right.avg_margin == 400.0


def test_compare_candidates_with_shared_constituency_name(shared_name_rows, shared_name_constituencies) -> None:
    result = compare_candidates(shared_name_constituencies, shared_name_rows, "u1", "h1")

    assert result.left.votes == 500
    assert result.right.votes == 700


def test_comparisons_take_the_first_duplicate(make_constituency) -> None:
    rows = [
        make_constituency("Hamirpur", "P", 10, candidate="First"),
        make_constituency("Hamirpur", "Q", 20, candidate="Second"),
        make_constituency("Other", "P", 30, candidate="First"),
    ]
    assert compare_constituencies(rows, [], "Hamirpur", "Other").left.result.leading_candidate == "First"
    assert compare_candidates(rows, [], "First", "Second").left.constituency == "Hamirpur"
    assert compare_candidates(rows, [], "First", "Second").left.margin == 10


def test_filter_by_party(xyz_constituencies) -> None:
    assert [c.constituency for c in filter_by_party(xyz_constituencies, "X")] == ["A", "B"]
    assert filter_by_party(xyz_constituencies, ALL_PARTIES) == xyz_constituencies
    assert filter_by_party(xyz_constituencies, "") == xyz_constituencies
    assert filter_by_party(xyz_constituencies, "Z") == []


def test_summarize_constituencies(xyz_constituencies) -> None:
    stats = summarize_constituencies(filter_by_party(xyz_constituencies, "X"))

    assert stats.total_seats == 2
    assert stats.avg_margin == 75.0
    assert stats.closest_contest.constituency == "B"
    assert stats.biggest_victory.constituency == "A"


def test_summarize_constituencies_empty_selection() -> None:
    stats = summarize_constituencies([])

    assert stats.total_seats == 0
    assert stats.avg_margin == 0.0
    assert stats.closest_contest is None
    assert stats.biggest_victory is None


def test_zero_margins_sort_first_in_input_order(make_constituency) -> None:
    rows = [make_constituency("A", "P", 5), make_constituency("B", "Q", 0), make_constituency("C", "R", 0)]

    assert [c.constituency for c in closest_contests(rows)] == ["B", "C", "A"]
    assert [c.constituency for c in largest_margins(rows)] == ["A", "B", "C"]
    assert summarize_constituencies(rows).closest_contest.constituency == "B"
