"""Dashboard settings from ``config/dashboard-config.json`` and the environment."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields
from pathlib import Path

DEFAULT_CONFIG_PATH = "config/dashboard-config.json"
CONFIG_ENV = "ELECTION_DASHBOARD_CONFIG"

DEFAULT_QUERY_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_QUERY_MODEL = "google/gemini-2.5-flash"


class ConfigError(ValueError):
    pass


# field -> accepted JSON value types
FIELD_TYPES: dict[str, tuple[type, ...]] = {
    "constituency_source": (str,),
    "candidate_source": (str,),
    "detailed_source": (str,),
    "none_of_the_above": (str,),
    "top_n": (int,),
    "page_size": (int,),
    "request_timeout": (int, float),
}


@dataclass(frozen=True)
class DashboardConfig:
    constituency_source: str = "data/sample_data.csv"
    candidate_source: str = "data/eci_data_2024.csv"
    detailed_source: str = "data/results_2024.csv"
    none_of_the_above: str = "None of the Above"
    reference_parties: tuple[str, str] = ("Bharatiya Janata Party", "Indian National Congress")
    top_n: int = 10
    page_size: int = 20
    request_timeout: float = 30.0


@dataclass(frozen=True)
class QuerySettings:
    api_key: str | None
    url: str = DEFAULT_QUERY_URL
    model: str = DEFAULT_QUERY_MODEL
    timeout: float = 60.0
    max_tokens: int = 2048
    temperature: float = 0.7


def load_config(path: str | Path | None = None) -> DashboardConfig:
    """Read the JSON config; a missing file means defaults."""
    path = Path(path or os.environ.get(CONFIG_ENV) or DEFAULT_CONFIG_PATH)
    if not path.exists():
        return DashboardConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid JSON in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: expected a JSON object")

    known = {f.name for f in fields(DashboardConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"{path}: unknown keys: {', '.join(unknown)}")

    for key, types in FIELD_TYPES.items():
        # bool passes isinstance(x, int)
        if key in raw and (isinstance(raw[key], bool) or not isinstance(raw[key], types)):
            raise ConfigError(f"{path}: {key} must be {' or '.join(t.__name__ for t in types)}, got {raw[key]!r}")
    for key in ("top_n", "page_size", "request_timeout"):
        if key in raw and raw[key] <= 0:
            raise ConfigError(f"{path}: {key} must be positive")

    if "reference_parties" in raw:
        pair = raw["reference_parties"]
        if not isinstance(pair, list) or len(pair) != 2:
            raise ConfigError(f"{path}: reference_parties must list exactly two party names")
        raw["reference_parties"] = (str(pair[0]), str(pair[1]))
    return DashboardConfig(**raw)


def query_settings_from_env() -> QuerySettings:
    return QuerySettings(
        api_key=os.environ.get("ELECTION_QUERY_API_KEY") or None,
        url=os.environ.get("ELECTION_QUERY_URL") or DEFAULT_QUERY_URL,
        model=os.environ.get("ELECTION_QUERY_MODEL") or DEFAULT_QUERY_MODEL,
    )
