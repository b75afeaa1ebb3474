"""Rule definitions for layercheck."""

from rules.config import (
    ConfigError,
    LayerCheckConfig,
    load_config,
)
from rules.errors import (
    DuplicateLayerError,
    DuplicateModuleError,
    LayerCheckInputError,
    LayerOrderError,
    UnknownLayerError,
    UnknownModuleError,
)
from rules.registry import Layer, RuleRegistry, SameLayerPolicy

__all__ = [
    "ConfigError",
    "DuplicateLayerError",
    "DuplicateModuleError",
    "Layer",
    "LayerCheckConfig",
    "LayerCheckInputError",
    "LayerOrderError",
    "RuleRegistry",
    "SameLayerPolicy",
    "UnknownLayerError",
    "UnknownModuleError",
    "load_config",
]
