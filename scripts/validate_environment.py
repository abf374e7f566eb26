#!/usr/bin/env python3
"""Validate local pricing helper environment readiness."""

from __future__ import annotations

import importlib
import importlib.metadata
import sys
from datetime import date
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pricing_helper.domain.coercion import InputValidationError
from pricing_helper.domain.models import FeatureInput, IdentifierInput, SharedFlags
from pricing_helper.domain.payloads import (
    build_booking_week_by_index,
    build_recommend_from_features,
)
from pricing_helper.services.workflow_service import PricingWorkflowService
from pricing_helper.utils.config import get_settings

SEPARATOR_LINE = "=" * 44


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True
    settings = get_settings()

    # CHECK 1: Python version >= 3.10
    if sys.version_info >= (3, 10):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.10",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2: Required packages importable
    package_specs = [
        ("requests", "requests"),
        ("pydantic", "pydantic"),
        ("pandas", "pandas"),
        ("streamlit", "streamlit"),
    ]
    import_errors: list[str] = []
    for module_name, dist_name in package_specs:
        try:
            importlib.import_module(module_name)
            importlib.metadata.version(dist_name)
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

    # CHECK 3: Default form values assemble into valid request bodies
    try:
        build_recommend_from_features(FeatureInput(), SharedFlags())
        build_booking_week_by_index(IdentifierInput(), "120", date.today().isoformat())
        ok, line = _print_result("Default payload assembly", True)
    except InputValidationError as exc:
        ok, line = _print_result("Default payload assembly", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 4: Prediction service reachable (advisory; the service is external)
    workflow = PricingWorkflowService(settings=settings)
    health = workflow.check_health()
    if health is not None:
        _, line = _print_result(
            f"Prediction service at {settings.api_base_url}",
            True,
            f": status={health.status} rows={health.n_rows} "
            f"booking_model_loaded={health.booking_model_loaded}",
        )
    else:
        line = (
            f"[WARN] Prediction service at {settings.api_base_url}: "
            f"{workflow.session.health_state.error}"
        )
    results.append(line)

    print(SEPARATOR_LINE)
    print(" Pricing Helper Environment Validation")
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
