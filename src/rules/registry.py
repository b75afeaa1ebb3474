"""Declared layer order and the rules attached to each layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, get_args

from rules.errors import DuplicateLayerError, LayerOrderError, UnknownLayerError

if TYPE_CHECKING:
    from collections.abc import Iterable

SameLayerPolicy = Literal["allow", "forbid"]

VALID_SAME_LAYER_POLICIES = frozenset(get_args(SameLayerPolicy))


@dataclass(frozen=True)
class Layer:
    """A named stage in the architectural stack.

    Rank is the declaration index: earlier layers sit lower in the stack.
    """

    name: str
    rank: int


@dataclass(frozen=True)
class RuleRegistry:
    """Immutable set of layering rules.

    Use :meth:`build` rather than the constructor; it validates the layer
    order and forbidden pairs before any instance exists.
    """

    layers: tuple[Layer, ...]
    same_layer: SameLayerPolicy
    forbidden: frozenset[tuple[str, str]] = field(default_factory=frozenset)
    _ranks: dict[str, int] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        ranks: dict[str, int] = {}
        previous: Layer | None = None
        for layer in self.layers:
            if layer.name in ranks:
                raise DuplicateLayerError(layer.name)
            if previous is not None and layer.rank <= previous.rank:
                raise LayerOrderError(
                    layer.name, layer.rank, previous.name, previous.rank
                )
            ranks[layer.name] = layer.rank
            previous = layer

        if self.same_layer not in VALID_SAME_LAYER_POLICIES:
            msg = (
                f"Invalid same-layer policy {self.same_layer!r}. "
                f"Valid policies: {', '.join(sorted(VALID_SAME_LAYER_POLICIES))}"
            )
            raise ValueError(msg)

        for layer_name, _identifier in sorted(self.forbidden):
            if layer_name not in ranks:
                raise UnknownLayerError(layer_name, context="forbidden external rule")

        object.__setattr__(self, "_ranks", ranks)

    @classmethod
    def build(
        cls,
        layers: Iterable[str],
        *,
        same_layer: SameLayerPolicy,
        forbidden: Iterable[tuple[str, str]] = (),
    ) -> RuleRegistry:
        """Build a registry from an ordered sequence of layer names."""
        declared = tuple(Layer(name=name, rank=index) for index, name in enumerate(layers))
        return cls(
            layers=declared,
            same_layer=same_layer,
            forbidden=frozenset(forbidden),
        )

    def has_layer(self, layer: str) -> bool:
        return layer in self._ranks

    def rank_of(self, layer: str) -> int:
        try:
            return self._ranks[layer]
        except KeyError:
            raise UnknownLayerError(layer) from None

    def is_forbidden_external(self, layer: str, identifier: str) -> bool:
        return (layer, identifier) in self.forbidden

    def same_layer_policy(self) -> SameLayerPolicy:
        return self.same_layer

    @property
    def layer_names(self) -> tuple[str, ...]:
        return tuple(layer.name for layer in self.layers)


__all__ = [
    "VALID_SAME_LAYER_POLICIES",
    "Layer",
    "RuleRegistry",
    "SameLayerPolicy",
]
