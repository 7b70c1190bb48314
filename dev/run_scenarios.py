#!/usr/bin/env python3
"""
Footprint Scenario Runner - score named answer sets from a YAML file.

USAGE EXAMPLES:

Score the bundled scenarios:
    python3 dev/run_scenarios.py

Custom scenario file and CSV export:
    python3 dev/run_scenarios.py --scenarios my_scenarios.yaml --out data/outputs/scenarios.csv

FILE FORMAT:
    scenarios:
      <name>:
        <question_id>: <value>
        ...

Answers are scored as given (no catalog validation) so partial or odd answer
sets can be checked against the engine's defaulting rules. Quoted or boolean
values count as unanswered.
"""

import sys
from pathlib import Path

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import argparse
from typing import Dict

import pandas as pd
import yaml

from ecotrace.scoring import score
from ecotrace.utils import get_logger

log = get_logger("ecotrace.dev.run_scenarios")


def load_scenarios(path: Path) -> Dict[str, Dict[str, float]]:
    with open(path, "r", encoding="utf-8") as f:
        doc = yaml.safe_load(f) or {}
    scenarios = doc.get("scenarios")
    if not isinstance(scenarios, dict) or not scenarios:
        raise ValueError(f"{path}: expected a non-empty 'scenarios' mapping")
    out: Dict[str, Dict[str, float]] = {}
    for name, answers in scenarios.items():
        if not isinstance(answers, dict):
            raise ValueError(f"{path}: scenario '{name}' must be a mapping of answers")
        out[str(name)] = dict(answers)
    return out


def build_table(scenarios: Dict[str, Dict[str, float]]) -> pd.DataFrame:
    rows = []
    for name, answers in scenarios.items():
        result = score(answers)
        row = {
            "scenario": name,
            "tonnes": result.footprint_tonnes,
            "raw": round(result.raw_tonnes, 3),
            "category": result.category.value,
            "n_recommendations": len(result.recommendations),
        }
        row.update({f"t_{k}": round(v, 3) for k, v in result.contributions.items()})
        rows.append(row)
    return pd.DataFrame(rows).set_index("scenario")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Score named answer sets")
    ap.add_argument("--scenarios", default=str(ROOT / "config" / "scenarios.yaml"), help="YAML scenario file")
    ap.add_argument("--out", default=None, help="Optional CSV output path")
    args = ap.parse_args(argv)

    scenarios = load_scenarios(Path(args.scenarios))
    log.info("scoring %d scenarios from %s", len(scenarios), args.scenarios)
    table = build_table(scenarios)

    with pd.option_context("display.width", 200, "display.max_columns", 20):
        print(table[["tonnes", "raw", "category", "n_recommendations"]].to_string())

    if args.out:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        table.to_csv(out)
        print(f"\nWrote {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
