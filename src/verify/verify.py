"""Layering conformance verification entry point."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from verify.analyzer import (
    analyze,
    check_cycles,
    check_forbidden_externals,
    check_layer_direction,
    sort_violations,
)
from verify.report import VerificationReport

if TYPE_CHECKING:
    from graph.model import DependencyModel
    from rules.registry import RuleRegistry
    from verify.violations import Violation

logger = logging.getLogger(__name__)


def verify(
    registry: RuleRegistry,
    model: DependencyModel,
    *,
    parallel: bool = False,
) -> VerificationReport:
    """Verify that a dependency model conforms to the registry's rules.

    Analysis is total: once ``registry`` and ``model`` exist, this always
    returns a report. Rule breaches are violations inside the report, never
    exceptions.

    Args:
        registry: Layer order, same-layer policy and forbidden externals.
        model: Modules and dependency edges to check.
        parallel: Run the three passes on worker threads. The report is
            identical to the sequential one.

    Returns:
        VerificationReport with violations in deterministic order.
    """
    if parallel:
        violations = _analyze_parallel(registry, model)
    else:
        violations = analyze(registry, model)

    report = VerificationReport.from_violations(violations)
    logger.debug(
        "Verified %d modules: conforms=%s, violations=%d",
        len(model),
        report.conforms,
        len(report.violations),
    )
    return report


def _analyze_parallel(
    registry: RuleRegistry, model: DependencyModel
) -> list[Violation]:
    with ThreadPoolExecutor(max_workers=3) as executor:
        futures = [
            executor.submit(check_layer_direction, registry, model),
            executor.submit(check_forbidden_externals, registry, model),
            executor.submit(check_cycles, model),
        ]
        violations: list[Violation] = []
        for future in futures:
            violations.extend(future.result())
    return sort_violations(violations)


__all__ = ["verify"]
