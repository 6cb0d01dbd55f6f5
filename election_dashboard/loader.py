"""Load the three result CSVs into one immutable dataset.

A load either yields all three record sets or raises ``DatasetLoadError``;
callers never see a partially loaded dataset.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path

import requests

from .config import DashboardConfig
from .parser import parse_candidate_results, parse_constituency_results, parse_detailed_results
from .records import CandidateResult, ConstituencyResult, DetailedResult

logger = logging.getLogger(__name__)


class DatasetLoadError(RuntimeError):
    pass


@dataclass(frozen=True)
class ElectionDataset:
    constituencies: tuple[ConstituencyResult, ...]
    candidates: tuple[CandidateResult, ...]
    detailed: tuple[DetailedResult, ...]
    # source location -> sha256 of the raw text
    checksums: tuple[tuple[str, str], ...] = ()


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def read_source(source: str, timeout: float = 30.0, session: requests.Session | None = None) -> str:
    if is_url(source):
        http = session or requests
        resp = http.get(source, timeout=timeout)
        resp.raise_for_status()
        return resp.content.decode("utf-8-sig")
    return Path(source).read_text(encoding="utf-8-sig")


def sha256_text(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def load_dataset(config: DashboardConfig, session: requests.Session | None = None) -> ElectionDataset:
    sources = (config.constituency_source, config.candidate_source, config.detailed_source)
    texts = []
    for source in sources:
        try:
            texts.append(read_source(source, config.request_timeout, session))
        except (OSError, UnicodeDecodeError, requests.RequestException) as e:
            raise DatasetLoadError(f"failed to load {source}: {e}") from e

    constituency_text, candidate_text, detailed_text = texts
    dataset = ElectionDataset(
        constituencies=tuple(parse_constituency_results(constituency_text)),
        candidates=tuple(parse_candidate_results(candidate_text)),
        detailed=tuple(parse_detailed_results(detailed_text)),
        checksums=tuple((source, sha256_text(text)) for source, text in zip(sources, texts)),
    )
    logger.info(
        "loaded constituencies=%d candidates=%d detailed=%d",
        len(dataset.constituencies),
        len(dataset.candidates),
        len(dataset.detailed),
    )
    return dataset
