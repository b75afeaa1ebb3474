"""Conformance passes over a dependency model.

The three passes are independent of each other. Each returns its own
violations; :func:`sort_violations` puts any combination of them into report
order.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from graph.algos import find_cycles, shortest_cycle
from verify.violations import (
    CycleViolation,
    ForbiddenExternalViolation,
    LayerDirectionViolation,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from graph.model import DependencyModel
    from rules.registry import RuleRegistry
    from verify.violations import Violation

logger = logging.getLogger(__name__)


def check_layer_direction(
    registry: RuleRegistry, model: DependencyModel
) -> list[LayerDirectionViolation]:
    """Report edges that point from a lower layer to a higher one.

    Same-layer edges are reported only under the ``forbid`` policy.
    """
    forbid_same_layer = registry.same_layer_policy() == "forbid"
    violations: list[LayerDirectionViolation] = []

    for edge in model.edges():
        source_layer = model.layer_of(edge.source)
        target_layer = model.layer_of(edge.target)
        source_rank = registry.rank_of(source_layer)
        target_rank = registry.rank_of(target_layer)

        if source_rank > target_rank:
            continue
        if source_rank == target_rank and not forbid_same_layer:
            continue

        violations.append(
            LayerDirectionViolation(
                source=edge.source,
                target=edge.target,
                source_layer=source_layer,
                target_layer=target_layer,
            )
        )

    logger.debug("Layer-direction pass: %d violation(s)", len(violations))
    return violations


def check_forbidden_externals(
    registry: RuleRegistry, model: DependencyModel
) -> list[ForbiddenExternalViolation]:
    violations: list[ForbiddenExternalViolation] = []

    for module in model.modules():
        for external in sorted(model.external_dependencies_of(module.id)):
            if registry.is_forbidden_external(module.layer, external):
                violations.append(
                    ForbiddenExternalViolation(
                        module=module.id,
                        layer=module.layer,
                        external=external,
                    )
                )

    logger.debug("Forbidden-external pass: %d violation(s)", len(violations))
    return violations


def check_cycles(model: DependencyModel) -> list[CycleViolation]:
    """Report one violation per cyclic component and per self-loop."""
    graph = model.adjacency()
    cycles = find_cycles(graph)
    logger.debug("Cycle pass: %d cycle(s)", len(cycles))
    return [
        CycleViolation(
            modules=tuple(cycle),
            path=tuple(shortest_cycle(cycle[0], set(cycle), graph)),
        )
        for cycle in cycles
    ]


def sort_violations(violations: Iterable[Violation]) -> list[Violation]:
    """Order by kind priority, then primary module, then details."""
    return sorted(violations, key=lambda v: v.sort_key())


def analyze(registry: RuleRegistry, model: DependencyModel) -> list[Violation]:
    """Run all passes sequentially and return violations in report order."""
    violations: list[Violation] = []
    violations.extend(check_layer_direction(registry, model))
    violations.extend(check_forbidden_externals(registry, model))
    violations.extend(check_cycles(model))
    return sort_violations(violations)


__all__ = [
    "analyze",
    "check_cycles",
    "check_forbidden_externals",
    "check_layer_direction",
    "sort_violations",
]
