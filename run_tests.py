#!/usr/bin/env python3
"""Test runner for PokeSnipe.

Selects tests by marker (unit, integration, slow) and by pipeline component,
so one stage of the listing pipeline can be checked on its own:

  parser     title parsing and its rule tables
  expansion  set-name matching
  catalog    catalog client, bounded caches
  pricing    price selection, exchange rate, profit and tiers
  engine     arbitrage engine, scanner, diagnostics, preferences
  listing    listing sources, condition hints, deal store
  cli        command line
  utils      config, logging, errors, retry
"""

import argparse
import subprocess
import sys
from pathlib import Path

COMPONENTS = {
    "parser": ["test_title_parser.py", "test_patterns.py", "test_similarity.py"],
    "expansion": ["test_expansion_matcher.py"],
    "catalog": ["test_catalog_client.py", "test_bounded_cache.py"],
    "pricing": ["test_price_selector.py", "test_exchange_rate.py", "test_profit.py"],
    "engine": [
        "test_engine.py",
        "test_scanner.py",
        "test_diagnostics.py",
        "test_preferences.py",
        "test_integration.py",
    ],
    "listing": ["test_listing_source.py", "test_condition.py", "test_deal_store.py"],
    "cli": ["test_cli.py"],
    "utils": ["test_config.py", "test_log.py", "test_error_handler.py", "test_retry.py"],
}


def marker_expression(args) -> str:
    """Combine the marker flags into one -m expression."""
    if args.unit:
        selected = "unit"
    elif args.integration:
        selected = "integration"
    elif args.performance:
        selected = "slow"
    else:
        selected = ""

    if args.fast and selected != "slow":
        return f"{selected} and not slow" if selected else "not slow"
    return selected


def selected_paths(args):
    if args.file:
        return [f"tests/{args.file}"]
    if args.component:
        paths = []
        for component in args.component:
            paths.extend(f"tests/{name}" for name in COMPONENTS[component])
        return paths
    return ["tests/"]


def build_command(args):
    cmd = [sys.executable, "-m", "pytest", *selected_paths(args)]

    expression = marker_expression(args)
    if expression:
        cmd.extend(["-m", expression])
    if args.keyword:
        cmd.extend(["-k", args.keyword])
    if args.verbose:
        cmd.append("-v")
    if args.coverage:
        cmd.extend(["--cov=pokesnipe", "--cov-report=html", "--cov-report=term-missing"])

    cmd.extend(["--tb=short", "--strict-markers", "--disable-warnings"])
    return cmd


def main():
    parser = argparse.ArgumentParser(
        description="Run PokeSnipe tests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_tests.py                          # Run all tests
  python run_tests.py --unit --fast            # Unit tests, skip slow ones
  python run_tests.py --component engine       # Engine, scanner and diagnostics
  python run_tests.py -C parser -C pricing     # Several components
  python run_tests.py --integration            # End-to-end scans only
  python run_tests.py -k "printed_total"       # Tests matching a keyword
  python run_tests.py --coverage               # With coverage report
        """,
    )
    markers = parser.add_mutually_exclusive_group()
    markers.add_argument("--unit", action="store_true", help="Run only unit tests")
    markers.add_argument("--integration", action="store_true", help="Run only integration tests")
    markers.add_argument("--performance", action="store_true", help="Run only slow tests")

    scope = parser.add_mutually_exclusive_group()
    scope.add_argument("--file", type=str, help="Run tests from one file under tests/")
    scope.add_argument(
        "--component", "-C",
        action="append",
        choices=sorted(COMPONENTS),
        help="Run the tests for one pipeline component (repeatable)",
    )

    parser.add_argument("--keyword", "-k", type=str, help="Only tests matching this pytest -k expression")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--coverage", action="store_true", help="Report coverage of the pokesnipe package")
    parser.add_argument("--fast", action="store_true", help="Skip slow tests")
    args = parser.parse_args()

    if not Path("pokesnipe").exists() or not Path("tests").exists():
        print("❌ Error: Please run this script from the pokesnipe root directory")
        sys.exit(1)

    cmd = build_command(args)
    print(f"Running: {' '.join(cmd)}\n")
    try:
        result = subprocess.run(cmd)
    except FileNotFoundError:
        print(f"❌ Command not found: {cmd[0]}")
        sys.exit(1)

    if result.returncode == 0:
        print("\n✅ PokeSnipe tests passed")
        if args.coverage:
            print("📊 Coverage report generated in htmlcov/index.html")
    else:
        print(f"\n❌ PokeSnipe tests failed with exit code {result.returncode}")
    sys.exit(result.returncode)


if __name__ == "__main__":
    main()
