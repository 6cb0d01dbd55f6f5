#!/usr/bin/env python3
"""Build precomputed dataset for the static Lok Sabha 2024 dashboard."""

from __future__ import annotations

import argparse
import hashlib
import json
import sys
from pathlib import Path

from election_dashboard.config import ConfigError, load_config
from election_dashboard.export import build_metadata, build_payload
from election_dashboard.loader import DatasetLoadError, load_dataset

TOTAL_LOK_SABHA_SEATS = 543


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build dashboard-data.json for static hosting")
    parser.add_argument("--config", default="config/dashboard-config.json")
    parser.add_argument("--output-dir", default="docs/data")
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    try:
        config = load_config(args.config)
        dataset = load_dataset(config)
    except (ConfigError, DatasetLoadError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    dashboard_data = build_payload(dataset, config)
    json_text = json.dumps(dashboard_data, ensure_ascii=False, separators=(",", ":"))

    metadata = build_metadata(dataset)
    seats_total = sum(p["seats"] for p in dashboard_data["partyStats"])
    metadata["checks"] = {
        "constituencyCountIs543": len(dataset.constituencies) == TOTAL_LOK_SABHA_SEATS,
        "seatsReconcile": seats_total == len(dataset.constituencies),
        "stateSeatsReconcile": all(sum(s["parties"].values()) == s["totalSeats"] for s in dashboard_data["stateStats"]),
    }
    metadata["dataSha256"] = hashlib.sha256(json_text.encode("utf-8")).hexdigest()

    (output_dir / "dashboard-data.json").write_text(json_text, encoding="utf-8")
    (output_dir / "metadata.json").write_text(json.dumps(metadata, ensure_ascii=False, indent=2), encoding="utf-8")

    print(f"wrote {(output_dir / 'dashboard-data.json')}")
    print(f"wrote {(output_dir / 'metadata.json')}")
    print(
        f"constituencies={len(dataset.constituencies)} candidates={len(dataset.candidates)} "
        f"detailed={len(dataset.detailed)}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
