from __future__ import annotations

import pytest

from election_dashboard.records import ConstituencyResult, DetailedResult


def _constituency(name: str, party: str, margin: int, candidate: str | None = None) -> ConstituencyResult:
    return ConstituencyResult(
        constituency=name,
        const_no="1",
        leading_candidate=candidate or f"{name} winner",
        leading_party=party,
        trailing_candidate=f"{name} runner-up",
        trailing_party="Other",
        margin=margin,
        status="Result Declared",
    )


def _detailed(state: str, pc_name: str, sl_no: int, candidate: str, party: str, total_votes: int) -> DetailedResult:
    return DetailedResult(
        state=state,
        pc_no=1,
        pc_name=pc_name,
        sl_no=sl_no,
        candidate=candidate,
        party=party,
        evm_votes=total_votes,
        postal_votes=0,
        total_votes=total_votes,
        vote_share=0.0,
    )


@pytest.fixture
def xyz_constituencies() -> list[ConstituencyResult]:
    return [
        _constituency("A", "X", 100),
        _constituency("B", "X", 50),
        _constituency("C", "Y", 10),
    ]


@pytest.fixture
def detailed_rows() -> list[DetailedResult]:
    return [
        _detailed("Kerala", "Wayanad", 1, "Alice", "Indian National Congress", 600),
        _detailed("Kerala", "Wayanad", 2, "Bob", "Communist Party of India", 300),
        _detailed("Kerala", "Wayanad", 3, "NOTA", "None of the Above", 50),
        _detailed("Kerala", "Thrissur", 1, "Carol", "Bharatiya Janata Party", 400),
        _detailed("Kerala", "Thrissur", 2, "Dan", "Indian National Congress", 350),
        _detailed("Gujarat", "Navsari", 1, "Eve", "Bharatiya Janata Party", 900),
        _detailed("Gujarat", "Navsari", 2, "Frank", "Indian National Congress", 100),
    ]


@pytest.fixture
def make_constituency():
    return _constituency


@pytest.fixture
def make_detailed():
    return _detailed


@pytest.fixture
def shared_name_rows() -> list[DetailedResult]:
    """Hamirpur exists in two states; rows of both are interleaved."""
    return [
        _detailed("Uttar Pradesh", "Hamirpur", 1, "u1", "Samajwadi Party", 500),
        _detailed("Himachal Pradesh", "Hamirpur", 1, "h1", "Bharatiya Janata Party", 700),
        _detailed("Uttar Pradesh", "Hamirpur", 2, "u2", "Bharatiya Janata Party", 400),
        _detailed("Himachal Pradesh", "Hamirpur", 2, "h2", "Indian National Congress", 300),
    ]


@pytest.fixture
def shared_name_constituencies() -> list[ConstituencyResult]:
    return [
        _constituency("Hamirpur", "Bharatiya Janata Party", 400, candidate="h1"),
        _constituency("Hamirpur", "Samajwadi Party", 100, candidate="u1"),
    ]
