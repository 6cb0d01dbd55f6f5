"""Static reference tables: party short names, display colours, 2019 results.

Lookups are exact string matches. The result files spell some parties with
irregular spacing ("Janata Dal  (United)" with two spaces,
"Lok Janshakti Party(Ram Vilas)" without one), and those exact spellings are
the keys here; a near-miss falls back instead of being normalised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

DEFAULT_COLOR = "hsl(220, 10%, 50%)"
SHORT_NAME_MAX_LEN = 5

PARTY_SHORT_NAMES = {
    "Bharatiya Janata Party": "BJP",
    "Indian National Congress": "INC",
    "Samajwadi Party": "SP",
    "All India Trinamool Congress": "TMC",
    "Dravida Munnetra Kazhagam": "DMK",
    "Telugu Desam": "TDP",
    "Janata Dal (United)": "JD(U)",
    "Janata Dal  (United)": "JD(U)",
    "Shiv Sena": "SHS",
    "Shiv Sena (Uddhav Balasaheb Thackrey)": "SS-UBT",
    "Nationalist Congress Party – Sharadchandra Pawar": "NCP-SP",
    "Aam Aadmi Party": "AAP",
    "Communist Party of India (Marxist)": "CPI(M)",
    "Communist Party of India  (Marxist)": "CPI(M)",
    "Yuvajana Sramika Rythu Congress Party": "YSRCP",
    "Rashtriya Janata Dal": "RJD",
    "Biju Janata Dal": "BJD",
    "Janasena Party": "JSP",
    "Communist Party of India (Marxist-Leninist) (Liberation)": "CPI(ML)",
    "Communist Party of India  (Marxist-Leninist)  (Liberation)": "CPI(ML)",
    "Shiromani Akali Dal": "SAD",
    "Jharkhand Mukti Morcha": "JMM",
    "Rashtriya Lok Dal": "RLD",
    "Lok Janshakti Party(Ram Vilas)": "LJP(RV)",
    "Indian Union Muslim League": "IUML",
    "Jammu & Kashmir National Conference": "JKNC",
    "Viduthalai Chiruthaigal Katchi": "VCK",
    "Janata Dal  (Secular)": "JD(S)",
    "Independent": "IND",
}

PARTY_COLORS = {
    "Bharatiya Janata Party": "hsl(24, 95%, 53%)",
    "Indian National Congress": "hsl(210, 70%, 45%)",
    "Samajwadi Party": "hsl(0, 75%, 45%)",
    "All India Trinamool Congress": "hsl(150, 60%, 40%)",
    "Dravida Munnetra Kazhagam": "hsl(0, 75%, 50%)",
    "Telugu Desam": "hsl(45, 100%, 50%)",
    "Janata Dal (United)": "hsl(120, 50%, 45%)",
    "Janata Dal  (United)": "hsl(120, 50%, 45%)",
    "Aam Aadmi Party": "hsl(45, 100%, 50%)",
    "Communist Party of India (Marxist)": "hsl(0, 80%, 40%)",
    "Communist Party of India  (Marxist)": "hsl(0, 80%, 40%)",
    "Yuvajana Sramika Rythu Congress Party": "hsl(200, 70%, 50%)",
}

# party -> (seats won in 2019, 2019 vote share %)
PRIOR_RESULTS = {
    "Bharatiya Janata Party": (303, 37.36),
    "Indian National Congress": (52, 19.49),
    "Dravida Munnetra Kazhagam": (23, 2.26),
    "All India Trinamool Congress": (22, 4.07),
    "Yuvajana Sramika Rythu Congress Party": (22, 2.53),
    "Shiv Sena": (18, 2.10),
    "Shiv Sena (Uddhav Balasaheb Thackrey)": (0, 0.0),
    "Janata Dal  (United)": (16, 1.46),
    "Biju Janata Dal": (12, 1.66),
    "Bahujan Samaj Party": (10, 3.63),
    "Telugu Desam": (3, 2.34),
    "Samajwadi Party": (5, 2.55),
    "Nationalist Congress Party": (5, 1.39),
    "Nationalist Congress Party – Sharadchandra Pawar": (0, 0.0),
    "Communist Party of India  (Marxist)": (3, 1.75),
    "Communist Party of India": (2, 0.60),
    "Aam Aadmi Party": (1, 0.44),
    "Rashtriya Janata Dal": (0, 1.46),
    "Jharkhand Mukti Morcha": (1, 0.38),
    "Shiromani Akali Dal": (2, 0.80),
    "Lok Janshakti Party(Ram Vilas)": (6, 0.52),
    "Janasena Party": (0, 0.69),
    "Rashtriya Lok Dal": (0, 0.24),
    "Asom Gana Parishad": (0, 0.28),
    "Communist Party of India  (Marxist-Leninist)  (Liberation)": (0, 0.10),
    "Jammu & Kashmir National Conference": (3, 0.29),
    "Indian Union Muslim League": (3, 0.26),
    "Kerala Congress": (1, 0.12),
    "All India Anna Dravida Munnetra Kazhagam": (1, 2.16),
    "Janata Dal  (Secular)": (1, 0.35),
    "Sikkim Krantikari Morcha": (1, 0.15),
    "All India Majlis-E-Ittehadul Muslimeen": (2, 0.40),
    "Apna Dal (Soneylal)": (2, 0.20),
    "Independent": (4, 2.97),
}


@dataclass(frozen=True)
class PriorStateResult:
    state: str
    total_seats: int
    bjp_seats: int
    inc_seats: int
    other_parties: tuple[tuple[str, int], ...] = ()


PRIOR_STATE_RESULTS = (
    PriorStateResult("Uttar Pradesh", 80, 62, 1, (("SP", 5), ("BSP", 10), ("Apna Dal", 2))),
    PriorStateResult("Maharashtra", 48, 23, 1, (("Shiv Sena", 18), ("NCP", 4), ("Others", 2))),
    PriorStateResult("West Bengal", 42, 18, 0, (("TMC", 22), ("Others", 2))),
    PriorStateResult("Bihar", 40, 17, 1, (("JDU", 16), ("LJP", 6), ("Others", 0))),
    PriorStateResult("Tamil Nadu", 39, 0, 8, (("DMK", 23), ("AIADMK", 1), ("Others", 7))),
    PriorStateResult("Madhya Pradesh", 29, 28, 1),
    PriorStateResult("Karnataka", 28, 25, 1, (("JDS", 1), ("Independent", 1))),
    PriorStateResult("Gujarat", 26, 26, 0),
    PriorStateResult("Rajasthan", 25, 24, 0, (("Independent", 1),)),
    PriorStateResult("Andhra Pradesh", 25, 0, 0, (("YSRCP", 22), ("TDP", 3))),
    PriorStateResult("Odisha", 21, 8, 0, (("BJD", 12), ("Independent", 1))),
    PriorStateResult("Kerala", 20, 0, 15, (("IUML", 3), ("CPI(M)", 1), ("Others", 1))),
    PriorStateResult("Telangana", 17, 4, 3, (("TRS", 9), ("AIMIM", 1))),
    PriorStateResult("Assam", 14, 9, 3, (("AIUDF", 1), ("Independent", 1))),
    PriorStateResult("Jharkhand", 14, 11, 0, (("JMM", 1), ("Others", 2))),
    PriorStateResult("Punjab", 13, 2, 8, (("SAD", 2), ("AAP", 1))),
    PriorStateResult("Chhattisgarh", 11, 9, 2),
    PriorStateResult("Haryana", 10, 10, 0),
    PriorStateResult("Delhi", 7, 7, 0),
)


def abbreviate(party: str, max_len: int = SHORT_NAME_MAX_LEN) -> str:
    """First letter of each word, e.g. "Voice of the People Party" -> "VotPP"."""
    letters = "".join(word[0] for word in party.split())
    return letters[:max_len] or "?"


def _frozen(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class ReferenceTables:
    short_names: Mapping[str, str] = field(default_factory=dict)
    colors: Mapping[str, str] = field(default_factory=dict)
    prior_results: Mapping[str, tuple[int, float]] = field(default_factory=dict)
    prior_states: Mapping[str, PriorStateResult] = field(default_factory=dict)
    default_color: str = DEFAULT_COLOR

    def __post_init__(self) -> None:
        for name in ("short_names", "colors", "prior_results", "prior_states"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))

    def short_name(self, party: str) -> str:
        return self.short_names.get(party) or abbreviate(party)

    def color(self, party: str) -> str:
        return self.colors.get(party, self.default_color)

    def prior_seats(self, party: str) -> int:
        return self.prior_results.get(party, (0, 0.0))[0]

    def prior_vote_share(self, party: str) -> float:
        return self.prior_results.get(party, (0, 0.0))[1]

    def prior_state_result(self, state: str) -> PriorStateResult | None:
        return self.prior_states.get(state)


DEFAULT_TABLES = ReferenceTables(
    short_names=PARTY_SHORT_NAMES,
    colors=PARTY_COLORS,
    prior_results=PRIOR_RESULTS,
    prior_states={s.state: s for s in PRIOR_STATE_RESULTS},
)
