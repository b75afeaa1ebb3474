"""In-memory dependency graph of layered modules."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from rules.errors import DuplicateModuleError, UnknownLayerError, UnknownModuleError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from rules.registry import RuleRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Module:
    """A unit of code assigned to exactly one layer."""

    id: str
    layer: str
    externals: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not isinstance(self.externals, frozenset):
            object.__setattr__(self, "externals", frozenset(self.externals))

    @classmethod
    def of(cls, module_id: str, layer: str, externals: Iterable[str] = ()) -> Module:
        return cls(id=module_id, layer=layer, externals=frozenset(externals))


@dataclass(frozen=True, order=True)
class DependencyEdge:
    """``source`` references ``target``."""

    source: str
    target: str


class DependencyModel:
    """Read-only directed graph over module identifiers.

    Instances are created through :meth:`build`, which validates every
    module layer against the registry and every edge endpoint against the
    module set. Parallel edges collapse to one.
    """

    __slots__ = ("_adjacency", "_modules")

    def __init__(
        self,
        modules: Mapping[str, Module],
        adjacency: Mapping[str, frozenset[str]],
    ) -> None:
        self._modules = MappingProxyType(dict(modules))
        self._adjacency = MappingProxyType(dict(adjacency))

    @classmethod
    def build(
        cls,
        registry: RuleRegistry,
        modules: Iterable[Module],
        edges: Iterable[DependencyEdge | tuple[str, str]],
    ) -> DependencyModel:
        """Validate inputs and build a model.

        Raises:
            DuplicateModuleError: If two modules share an identifier.
            UnknownLayerError: If a module's layer is not declared.
            UnknownModuleError: If an edge endpoint is not a known module.
        """
        by_id: dict[str, Module] = {}
        for module in modules:
            if module.id in by_id:
                raise DuplicateModuleError(module.id)
            if not registry.has_layer(module.layer):
                raise UnknownLayerError(module.layer, context=f"module {module.id!r}")
            by_id[module.id] = module

        targets: dict[str, set[str]] = {module_id: set() for module_id in by_id}
        for edge in edges:
            source, target = _edge_pair(edge)
            if source not in by_id:
                raise UnknownModuleError(source, context=f"edge source {source} -> {target}")
            if target not in by_id:
                raise UnknownModuleError(target, context=f"edge target {source} -> {target}")
            targets[source].add(target)

        adjacency = {module_id: frozenset(deps) for module_id, deps in targets.items()}
        model = cls(by_id, adjacency)
        logger.debug(
            "Built dependency model with %d modules and %d edges",
            len(by_id),
            model.edge_count,
        )
        return model

    def modules(self) -> list[Module]:
        """Return all modules sorted by identifier."""
        return [self._modules[module_id] for module_id in sorted(self._modules)]

    def module(self, module_id: str) -> Module:
        try:
            return self._modules[module_id]
        except KeyError:
            raise UnknownModuleError(module_id) from None

    def layer_of(self, module_id: str) -> str:
        return self.module(module_id).layer

    def edges_from(self, module_id: str) -> frozenset[str]:
        if module_id not in self._adjacency:
            raise UnknownModuleError(module_id)
        return self._adjacency[module_id]

    def external_dependencies_of(self, module_id: str) -> frozenset[str]:
        return self.module(module_id).externals

    def edges(self) -> Iterator[DependencyEdge]:
        """Yield every edge once, ordered by (source, target)."""
        for source in sorted(self._adjacency):
            for target in sorted(self._adjacency[source]):
                yield DependencyEdge(source, target)

    def adjacency(self) -> dict[str, set[str]]:
        """Return a mutable copy of the graph as ``source -> targets``."""
        return {source: set(targets) for source, targets in self._adjacency.items()}

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self._adjacency.values())

    def __len__(self) -> int:
        return len(self._modules)

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._modules


def _edge_pair(edge: DependencyEdge | tuple[str, str]) -> tuple[str, str]:
    if isinstance(edge, DependencyEdge):
        return edge.source, edge.target
    source, target = edge
    return source, target


__all__ = ["DependencyEdge", "DependencyModel", "Module"]
