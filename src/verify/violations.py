"""Violation records produced by the analyzer.

Each variant carries a ``kind`` discriminator so a serialized report can be
validated back into the right model.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

ViolationKind = Literal["layer-direction", "forbidden-external", "cycle"]

# Fixed report order: layer direction first, cycles last.
KIND_PRIORITY: dict[str, int] = {
    "layer-direction": 0,
    "forbidden-external": 1,
    "cycle": 2,
}

VIOLATION_KINDS: tuple[ViolationKind, ...] = (
    "layer-direction",
    "forbidden-external",
    "cycle",
)


class _ViolationBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: ViolationKind

    @property
    def primary_module(self) -> str:
        raise NotImplementedError

    def detail_key(self) -> tuple[str, ...]:
        return ()

    def sort_key(self) -> tuple[int, str, tuple[str, ...]]:
        return (KIND_PRIORITY[self.kind], self.primary_module, self.detail_key())


class LayerDirectionViolation(_ViolationBase):
    """An edge that points up the layer stack, or sideways when forbidden."""

    kind: Literal["layer-direction"] = "layer-direction"
    source: str
    target: str
    source_layer: str
    target_layer: str

    @property
    def primary_module(self) -> str:
        return self.source

    @property
    def same_layer(self) -> bool:
        return self.source_layer == self.target_layer

    def detail_key(self) -> tuple[str, ...]:
        return (self.target,)

    @property
    def message(self) -> str:
        if self.same_layer:
            reason = f"same-layer dependency within {self.source_layer} is forbidden"
        else:
            reason = (
                f"{self.source_layer} must not depend on higher layer "
                f"{self.target_layer}"
            )
        return f"{self.source} -> {self.target}: {reason}"


class ForbiddenExternalViolation(_ViolationBase):
    """A module referencing an external identifier its layer forbids."""

    kind: Literal["forbidden-external"] = "forbidden-external"
    module: str
    layer: str
    external: str

    @property
    def primary_module(self) -> str:
        return self.module

    def detail_key(self) -> tuple[str, ...]:
        return (self.external,)

    @property
    def message(self) -> str:
        return (
            f"{self.module}: layer {self.layer} must not reference "
            f"external {self.external!r}"
        )


class CycleViolation(_ViolationBase):
    """A cyclic component, listed from its smallest module identifier.

    ``modules`` holds every member of the component. ``path`` is a closed
    walk of real edges through the smallest member; it equals ``modules``
    when the component is a single loop.
    """

    kind: Literal["cycle"] = "cycle"
    modules: tuple[str, ...] = Field(min_length=1)
    path: tuple[str, ...] = Field(min_length=1)

    @property
    def primary_module(self) -> str:
        return self.modules[0]

    @property
    def is_simple(self) -> bool:
        return self.path == self.modules

    def detail_key(self) -> tuple[str, ...]:
        return self.modules

    @property
    def message(self) -> str:
        walk = " -> ".join((*self.path, self.path[0]))
        if self.is_simple:
            return f"dependency cycle: {walk}"
        return f"dependency cycle among {', '.join(self.modules)}: {walk}"


Violation = Annotated[
    Union[LayerDirectionViolation, ForbiddenExternalViolation, CycleViolation],
    Field(discriminator="kind"),
]


__all__ = [
    "KIND_PRIORITY",
    "VIOLATION_KINDS",
    "CycleViolation",
    "ForbiddenExternalViolation",
    "LayerDirectionViolation",
    "Violation",
    "ViolationKind",
]
