from __future__ import annotations

import dataclasses

import pytest

from rules.errors import DuplicateLayerError, LayerOrderError, UnknownLayerError
from rules.registry import Layer, RuleRegistry

LAYERS = ["Domain", "Application", "Infrastructure", "Api"]


def test_rank_of_follows_declaration_order() -> None:
    registry = RuleRegistry.build(LAYERS, same_layer="allow")

    assert [registry.rank_of(name) for name in LAYERS] == [0, 1, 2, 3]
    assert registry.layer_names == tuple(LAYERS)


def test_rank_of_unknown_layer_raises() -> None:
    registry = RuleRegistry.build(LAYERS, same_layer="allow")

    with pytest.raises(UnknownLayerError, match="Presentation") as exc_info:
        registry.rank_of("Presentation")

    assert exc_info.value.layer == "Presentation"


def test_duplicate_layer_rejected() -> None:
    with pytest.raises(DuplicateLayerError, match="Domain") as exc_info:
        RuleRegistry.build(["Domain", "Api", "Domain"], same_layer="allow")

    assert exc_info.value.layer == "Domain"


def test_forbidden_rule_for_undeclared_layer_rejected() -> None:
    with pytest.raises(UnknownLayerError, match="forbidden external rule"):
        RuleRegistry.build(
            LAYERS,
            same_layer="allow",
            forbidden=[("Presentation", "Django")],
        )


def test_invalid_same_layer_policy_rejected() -> None:
    with pytest.raises(ValueError, match="same-layer policy"):
        RuleRegistry.build(LAYERS, same_layer="maybe")  # type: ignore[arg-type]


def test_is_forbidden_external_matches_exact_layer_and_identifier() -> None:
    registry = RuleRegistry.build(
        LAYERS,
        same_layer="forbid",
        forbidden=[("Domain", "EntityFrameworkCore")],
    )

    assert registry.is_forbidden_external("Domain", "EntityFrameworkCore") is True
    assert registry.is_forbidden_external("Infrastructure", "EntityFrameworkCore") is False
    assert registry.is_forbidden_external("Domain", "EntityFramework") is False
    assert registry.same_layer_policy() == "forbid"


def test_registry_is_immutable() -> None:
    registry = RuleRegistry.build(LAYERS, same_layer="allow")

    with pytest.raises(dataclasses.FrozenInstanceError):
        registry.same_layer = "forbid"  # type: ignore[misc]


def test_registries_built_from_same_input_are_equal() -> None:
    first = RuleRegistry.build(LAYERS, same_layer="allow", forbidden=[("Api", "x")])
    second = RuleRegistry.build(LAYERS, same_layer="allow", forbidden=[("Api", "x")])

    assert first == second
    assert hash(first) == hash(second)


@pytest.mark.parametrize("second_rank", [0, -1])
def test_constructor_rejects_ranks_that_do_not_increase(second_rank: int) -> None:
    with pytest.raises(LayerOrderError, match="'Api' has rank") as exc_info:
        RuleRegistry(
            layers=(Layer("Domain", 0), Layer("Api", second_rank)),
            same_layer="allow",
        )

    assert exc_info.value.layer == "Api"


def test_constructor_accepts_gapped_increasing_ranks() -> None:
    registry = RuleRegistry(
        layers=(Layer("Domain", 0), Layer("Application", 10), Layer("Api", 25)),
        same_layer="allow",
    )

    assert registry.rank_of("Domain") < registry.rank_of("Application")
    assert registry.rank_of("Application") < registry.rank_of("Api")
