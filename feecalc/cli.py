"""CLI report comparing the saved offers under the saved scenario.

Usage:
    python -m feecalc.cli                       # state file from settings (or defaults)
    python -m feecalc.cli data/state.json --steps 10
    python -m feecalc.cli data/state.json --tsv # tab-separated comparison table
"""

import argparse
import json
import logging
import sys

from pydantic import ValidationError as SchemaError

from feecalc.config import settings
from feecalc.data.state_store import StateVersionError, read_state_file
from feecalc.engine.comparator import as_tab_separated, compare_results
from feecalc.engine.recompute import EvaluationSnapshot, recompute
from feecalc.formatting import format_currency_full, format_irr, format_moic
from feecalc.models.results import ComparisonTable

logger = logging.getLogger(__name__)


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


def print_comparison(table: ComparisonTable) -> None:
    _header("Results Comparison")
    with_delta = any(row.delta is not None for row in table.rows)
    names = "".join(f"{name[:14]:>16}" for name in table.offer_names)
    delta_header = f"{'Delta':>12}" if with_delta else ""
    print(f"  {'Metric':<20}{names}{delta_header}")
    for row in table.rows:
        cells = ""
        for i, value in enumerate(row.values):
            marker = "*" if i == row.best_index else " "
            cells += f"{value + marker:>16}"
        delta = f"{row.delta:>12}" if row.delta is not None else ""
        print(f"  {row.label:<20}{cells}{delta}")
    print("\n  * best offer for the metric")


def print_fee_breakdown(snapshot: EvaluationSnapshot) -> None:
    _header("Fee Breakdown")
    for r in snapshot.results:
        fb = r.fee_breakdown
        print(f"  {r.offer_name}")
        print(f"    Setup Fee:          {format_currency_full(fb.setup_fee)}")
        print(f"    Placement Fee:      {format_currency_full(fb.placement_fee)}")
        print(f"    Management Fees:    {format_currency_full(fb.total_management_fees)}")
        print(f"    Admin Fees:         {format_currency_full(fb.total_admin_fees)}")
        print(f"    Carry:              {format_currency_full(fb.carry)}")


def print_sensitivity(snapshot: EvaluationSnapshot, every: int = 5) -> None:
    _header("Sensitivity (net MOIC / net IRR by exit price)")
    for point in snapshot.sensitivity[::every]:
        cells = "  ".join(
            f"{r.offer_name[:10]}: {format_moic(point.results[r.offer_id].net_moic)}"
            f" / {format_irr(point.results[r.offer_id].net_irr)}"
            for r in snapshot.results
        )
        print(f"  ${float(point.exit_price):>10,.2f}   {cells}")


def print_validation(snapshot: EvaluationSnapshot) -> None:
    if snapshot.is_valid:
        return
    _header("Input Warnings")
    for e in snapshot.scenario_errors + snapshot.collection_errors:
        print(f"  {e.field}: {e.message}")
    for offer_id, errors in snapshot.offer_errors.items():
        for e in errors:
            print(f"  [{offer_id}] {e.field}: {e.message}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Compare investment offers net of fees")
    parser.add_argument("state_file", nargs="?", default=settings.state_file, help="Saved calculator state (JSON)")
    parser.add_argument("--steps", type=int, default=settings.sensitivity_steps, help="Sensitivity grid steps")
    parser.add_argument("--tsv", action="store_true", help="Print the comparison as tab-separated text")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level)

    try:
        state = read_state_file(args.state_file)
    except (StateVersionError, SchemaError, json.JSONDecodeError) as e:
        logger.error("Could not load state from %s: %s", args.state_file, e)
        return 1

    snapshot = recompute(state.scenario, state.offers, args.steps)
    table = compare_results(snapshot.results)

    if args.tsv:
        print(as_tab_separated(table))
        return 0

    print_validation(snapshot)
    print_comparison(table)
    print_fee_breakdown(snapshot)
    print_sensitivity(snapshot)
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
