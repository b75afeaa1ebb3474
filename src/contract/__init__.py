"""Input contract between discovery tools and layercheck."""

from contract.manifest import (
    MANIFEST_SCHEMA_VERSION,
    ManifestError,
    ManifestRecord,
    ModuleEntry,
    load_manifest,
    manifest_to_model,
    parse_manifest,
)

__all__ = [
    "MANIFEST_SCHEMA_VERSION",
    "ManifestError",
    "ManifestRecord",
    "ModuleEntry",
    "load_manifest",
    "manifest_to_model",
    "parse_manifest",
]
