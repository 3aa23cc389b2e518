#!/usr/bin/env python3
"""Validate local environment readiness and the splitter's core guarantees."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.domain.constraints import validate_occupancy_policy
from backend.services.partition_service import partition_room
from backend.services.redistribution_service import redistribute
from backend.services.validation_service import exceeds_policy
from backend.utils.config import get_settings

SEPARATOR_LINE = "=" * 44

REFERENCE_SPLITS = {
    (1, 5): [(1, 5)],
    (3, 5): [(1, 2), (1, 2), (1, 1)],
    (4, 6): [(1, 2), (1, 2), (1, 2), (1, 0)],
    (5, 2): [(2, 1), (2, 1), (1, 0)],
    (2, 2): [(1, 1), (1, 1)],
}


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def _sweep_failures(policy) -> list[str]:
    failures: list[str] = []
    child_capacity = policy.max_guests_per_room - 1
    for adults in range(1, 9):
        for children in range(0, 13):
            result = partition_room(adults, children, policy)
            if result.placed_adults != adults:
                failures.append(f"({adults},{children}) lost adults")
            if result.placed_children + result.unplaced_children != children:
                failures.append(f"({adults},{children}) lost children")
            if adults > policy.family_exception_adults:
                expected_unplaced = max(0, children - adults * child_capacity)
                if result.unplaced_children != expected_unplaced:
                    failures.append(
                        f"({adults},{children}) left {result.unplaced_children} unplaced"
                    )
    return failures


def main() -> int:
    results: list[str] = []
    all_passed = True

    # CHECK 1 — Python version >= 3.11
    if sys.version_info >= (3, 11):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.11",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2 — Required packages importable
    package_specs = ["fastapi", "uvicorn", "pydantic", "httpx", "pytest"]
    import_errors: list[str] = []
    for module_name in package_specs:
        try:
            importlib.import_module(module_name)
        except Exception as exc:  # pragma: no cover - runtime guard
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 3 — Configured occupancy policy
    policy = get_settings().occupancy_policy()
    try:
        validate_occupancy_policy(policy)
        ok, line = _print_result(
            "Occupancy policy",
            True,
            f": max {policy.max_adults_per_room} adults / {policy.max_guests_per_room} guests",
        )
    except ValueError as exc:
        ok, line = _print_result("Occupancy policy", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 4 — Reference splits (default policy only)
    mismatches = []
    for (adults, children), expected in REFERENCE_SPLITS.items():
        units = [(u.adults, u.children) for u in partition_room(adults, children).units]
        if units != expected:
            mismatches.append(f"({adults},{children}) -> {units}")
    ok, line = _print_result(
        "Reference splits",
        not mismatches,
        "; ".join(mismatches),
    )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 5 — Partition sweep adults 1..8 x children 0..12
    failures = _sweep_failures(policy)
    ok, line = _print_result(
        "Partition sweep",
        not failures,
        "; ".join(failures[:5]) if failures else ": 104 combinations",
    )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 6 — Validator and redistributor on an empty selection
    empty = redistribute([])
    empty_ok = not exceeds_policy([]) and empty.total_rooms == 0 and not empty.produced_rooms
    ok, line = _print_result(
        "Empty selection",
        empty_ok,
        "" if empty_ok else "unexpected output for empty selection",
    )
    results.append(line)
    all_passed = all_passed and ok

    print(SEPARATOR_LINE)
    print(" Guest Room Splitter Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
