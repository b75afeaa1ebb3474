from __future__ import annotations

import pytest

from graph.model import DependencyModel, Module
from render.formatters import render_json
from rules.errors import UnknownModuleError
from rules.registry import RuleRegistry
from verify.report import VerificationReport
from verify.verify import verify
from verify.violations import CycleViolation, ForbiddenExternalViolation

LAYERS = ["Domain", "Application", "Infrastructure", "Api"]


def _mixed_inputs() -> tuple[RuleRegistry, DependencyModel]:
    registry = RuleRegistry.build(
        LAYERS,
        same_layer="forbid",
        forbidden=[("Domain", "EntityFrameworkCore"), ("Application", "AspNetCore")],
    )
    modules = [
        Module.of("Domain.Order", "Domain", ["EntityFrameworkCore"]),
        Module.of("Domain.Customer", "Domain"),
        Module.of("App.PlaceOrder", "Application", ["AspNetCore", "MediatR"]),
        Module.of("Infra.Db", "Infrastructure", ["EntityFrameworkCore"]),
        Module.of("Api.Orders", "Api", ["AspNetCore"]),
    ]
    edges = [
        ("Api.Orders", "App.PlaceOrder"),
        ("App.PlaceOrder", "Domain.Order"),
        ("Domain.Order", "Infra.Db"),
        ("Infra.Db", "Domain.Order"),
        ("Domain.Order", "Domain.Customer"),
        ("Domain.Customer", "Domain.Customer"),
    ]
    return registry, DependencyModel.build(registry, modules, edges)


def test_empty_model_conforms() -> None:
    registry = RuleRegistry.build(LAYERS, same_layer="forbid")
    model = DependencyModel.build(registry, [Module.of("Domain.Order", "Domain")], [])

    report = verify(registry, model)

    assert report.conforms is True
    assert report.violations == ()
    assert report.count("cycle") == 0


def test_report_counts_each_kind() -> None:
    registry, model = _mixed_inputs()

    report = verify(registry, model)

    assert report.conforms is False
    assert dict(report.counts) == {
        "layer-direction": 3,
        "forbidden-external": 2,
        "cycle": 2,
    }
    assert report.count("forbidden-external") == 2
    assert [v.message for v in report.violations] == [
        "Domain.Customer -> Domain.Customer: "
        "same-layer dependency within Domain is forbidden",
        "Domain.Order -> Domain.Customer: "
        "same-layer dependency within Domain is forbidden",
        "Domain.Order -> Infra.Db: "
        "Domain must not depend on higher layer Infrastructure",
        "App.PlaceOrder: layer Application must not reference external 'AspNetCore'",
        "Domain.Order: layer Domain must not reference external 'EntityFrameworkCore'",
        "dependency cycle: Domain.Customer -> Domain.Customer",
        "dependency cycle: Domain.Order -> Infra.Db -> Domain.Order",
    ]


def test_verify_is_idempotent() -> None:
    registry, model = _mixed_inputs()

    first = verify(registry, model)
    second = verify(registry, model)

    assert first == second
    assert render_json(first) == render_json(second)


def test_parallel_report_matches_sequential() -> None:
    registry, model = _mixed_inputs()

    assert verify(registry, model, parallel=True) == verify(registry, model)


def test_rebuilt_model_with_shuffled_input_gives_identical_report() -> None:
    registry, model = _mixed_inputs()
    shuffled = DependencyModel.build(
        registry,
        list(reversed(model.modules())),
        list(reversed(list(model.edges()))),
    )

    assert render_json(verify(registry, shuffled)) == render_json(verify(registry, model))


def test_single_forbidden_external_is_only_violation() -> None:
    registry = RuleRegistry.build(
        LAYERS, same_layer="forbid", forbidden=[("Domain", "EntityFrameworkCore")]
    )
    model = DependencyModel.build(
        registry, [Module.of("Domain.Order", "Domain", ["EntityFrameworkCore"])], []
    )

    report = verify(registry, model)

    assert report.violations == (
        ForbiddenExternalViolation(
            module="Domain.Order", layer="Domain", external="EntityFrameworkCore"
        ),
    )


def test_unknown_edge_target_produces_no_report() -> None:
    registry = RuleRegistry.build(LAYERS, same_layer="allow")

    with pytest.raises(UnknownModuleError):
        DependencyModel.build(
            registry,
            [Module.of("Api.Orders", "Api")],
            [("Api.Orders", "Domain.Missing")],
        )


def test_report_to_dict_shape() -> None:
    report = VerificationReport.from_violations(
        [CycleViolation(modules=("A", "B"), path=("A", "B"))]
    )

    assert report.to_dict() == {
        "conforms": False,
        "counts": {"layer-direction": 0, "forbidden-external": 0, "cycle": 1},
        "violations": [
            {
                "kind": "cycle",
                "modules": ["A", "B"],
                "path": ["A", "B"],
                "message": "dependency cycle: A -> B -> A",
            }
        ],
    }
