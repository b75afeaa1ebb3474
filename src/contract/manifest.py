"""Dependency manifest contract.

The manifest is what an external discovery tool hands to layercheck: the
modules it found, the layer each belongs to, the external libraries each
references, and the module-to-module edges. layercheck never discovers these
itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from graph.model import DependencyEdge, DependencyModel, Module

if TYPE_CHECKING:
    from pathlib import Path

    from rules.registry import RuleRegistry

MANIFEST_SCHEMA_VERSION = 1


class ManifestError(Exception):
    """Raised when a manifest file cannot be read or does not match the schema."""


class ModuleEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1, description="Unique module identifier")
    layer: str = Field(description="Declared layer name")
    externals: list[str] = Field(
        default_factory=list,
        description="External dependency identifiers referenced by the module",
    )


class ManifestRecord(BaseModel):
    """Top-level manifest document."""

    model_config = ConfigDict(extra="forbid")

    schema_version: int = Field(default=MANIFEST_SCHEMA_VERSION)
    modules: list[ModuleEntry] = Field(default_factory=list)
    edges: list[tuple[str, str]] = Field(
        default_factory=list,
        description="Pairs of [source, target] module identifiers",
    )


def parse_manifest(raw: bytes, *, source: str = "<manifest>") -> ManifestRecord:
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        msg = f"Invalid JSON in {source}: {exc}"
        raise ManifestError(msg) from exc

    if not isinstance(data, dict):
        msg = f"Expected JSON object in {source}"
        raise ManifestError(msg)

    try:
        manifest = ManifestRecord.model_validate(data)
    except ValidationError as exc:
        msg = f"Invalid manifest in {source}: {exc}"
        raise ManifestError(msg) from exc

    if manifest.schema_version != MANIFEST_SCHEMA_VERSION:
        msg = (
            f"Unsupported manifest schema_version {manifest.schema_version} "
            f"in {source} (expected {MANIFEST_SCHEMA_VERSION})"
        )
        raise ManifestError(msg)

    return manifest


def load_manifest(path: Path) -> ManifestRecord:
    """Load and validate a manifest file."""
    try:
        raw = path.read_bytes()
    except OSError as exc:
        msg = f"Failed to read manifest {path}: {exc}"
        raise ManifestError(msg) from exc
    return parse_manifest(raw, source=str(path))


def manifest_to_model(
    manifest: ManifestRecord, registry: RuleRegistry
) -> DependencyModel:
    """Build a dependency model from a manifest.

    Input errors from :meth:`DependencyModel.build` propagate unchanged.
    """
    modules = [
        Module.of(entry.id, entry.layer, entry.externals) for entry in manifest.modules
    ]
    edges = [DependencyEdge(source, target) for source, target in manifest.edges]
    return DependencyModel.build(registry, modules, edges)


__all__ = [
    "MANIFEST_SCHEMA_VERSION",
    "ManifestError",
    "ManifestRecord",
    "ModuleEntry",
    "load_manifest",
    "manifest_to_model",
    "parse_manifest",
]
