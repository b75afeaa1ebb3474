from __future__ import annotations

from pathlib import Path

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from rules.registry import RuleRegistry, SameLayerPolicy

CONFIG_FILENAME = "layercheck.toml"


class LayersSection(BaseModel):
    """Declared layer stack, lowest layer first."""

    model_config = ConfigDict(extra="forbid")

    order: list[str] = Field(
        description="Layer names in stack order (e.g., Domain, Application, Api)"
    )
    same_layer: SameLayerPolicy = Field(
        description="Whether edges between modules of the same layer are allowed",
    )

    @field_validator("order")
    @classmethod
    def validate_order(cls, v: list[str]) -> list[str]:
        for name in v:
            if not name.strip():
                msg = "layer names must be non-empty strings"
                raise ValueError(msg)
        return v


class ForbiddenExternals(BaseModel):
    """External identifiers a layer may not reference."""

    model_config = ConfigDict(extra="forbid")

    layer: str = Field(description="Layer the rule applies to")
    externals: list[str] = Field(
        default_factory=list,
        description="External dependency identifiers forbidden for this layer",
    )


class LayerCheckConfig(BaseModel):
    """Configuration for layer conformance verification."""

    model_config = ConfigDict(extra="forbid")

    layers: LayersSection
    forbidden: list[ForbiddenExternals] = Field(
        default_factory=list,
        description="Per-layer forbidden external dependency rules",
    )
    manifest: str = Field(
        default="layercheck-manifest.json",
        description="Default dependency manifest path, relative to the root",
    )

    def forbidden_pairs(self) -> list[tuple[str, str]]:
        return sorted(
            (rule.layer, external)
            for rule in self.forbidden
            for external in rule.externals
        )

    def to_registry(self) -> RuleRegistry:
        """Build the immutable rule registry described by this config.

        Raises:
            DuplicateLayerError: If a layer appears twice in ``layers.order``.
            UnknownLayerError: If a forbidden rule names an undeclared layer.
        """
        return RuleRegistry.build(
            self.layers.order,
            same_layer=self.layers.same_layer,
            forbidden=self.forbidden_pairs(),
        )


class ConfigError(Exception):
    """Raised when the config file is missing or cannot be parsed."""


def load_config(root: Path) -> LayerCheckConfig:
    """Load configuration from layercheck.toml under ``root``."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        msg = f"Config file not found: {config_path}"
        raise ConfigError(msg)

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return LayerCheckConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ForbiddenExternals",
    "LayerCheckConfig",
    "LayersSection",
    "load_config",
]
