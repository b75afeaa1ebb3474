"""Input errors raised while building a rule registry or dependency model."""

from __future__ import annotations


class LayerCheckInputError(Exception):
    """Base class for malformed analysis input."""


class DuplicateLayerError(LayerCheckInputError):
    """Raised when a layer name is declared more than once."""

    def __init__(self, layer: str) -> None:
        self.layer = layer
        super().__init__(f"Layer {layer!r} is declared more than once")


class LayerOrderError(LayerCheckInputError):
    """Raised when layer ranks do not strictly increase in declaration order."""

    def __init__(self, layer: str, rank: int, previous: str, previous_rank: int) -> None:
        self.layer = layer
        self.rank = rank
        super().__init__(
            f"Layer {layer!r} has rank {rank}, which must be greater than "
            f"rank {previous_rank} of preceding layer {previous!r}"
        )


class UnknownLayerError(LayerCheckInputError):
    """Raised when a layer name was never declared in the registry."""

    def __init__(self, layer: str, *, context: str | None = None) -> None:
        self.layer = layer
        self.context = context
        msg = f"Unknown layer {layer!r}"
        if context:
            msg = f"{msg} ({context})"
        super().__init__(msg)


class UnknownModuleError(LayerCheckInputError):
    """Raised when an edge references a module that is not in the model."""

    def __init__(self, module_id: str, *, context: str | None = None) -> None:
        self.module_id = module_id
        self.context = context
        msg = f"Unknown module {module_id!r}"
        if context:
            msg = f"{msg} ({context})"
        super().__init__(msg)


class DuplicateModuleError(LayerCheckInputError):
    def __init__(self, module_id: str) -> None:
        self.module_id = module_id
        super().__init__(f"Module {module_id!r} is declared more than once")


__all__ = [
    "DuplicateLayerError",
    "DuplicateModuleError",
    "LayerCheckInputError",
    "LayerOrderError",
    "UnknownLayerError",
    "UnknownModuleError",
]
