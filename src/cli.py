"""Command-line interface for layercheck."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from contract.manifest import ManifestError, load_manifest, manifest_to_model
from render.formatters import FORMATTERS, get_formatter
from rules.config import ConfigError, load_config
from rules.errors import LayerCheckInputError
from verify.verify import verify

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_INPUT_ERROR = 2


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project root containing layercheck.toml (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="layercheck")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check", help="Verify a dependency manifest against layer rules"
    )
    _add_common_paths(check_parser)
    check_parser.add_argument(
        "--manifest",
        default=None,
        help="Dependency manifest JSON (default: config manifest path)",
    )
    check_parser.add_argument(
        "--format",
        choices=sorted(FORMATTERS),
        default="text",
        help="Report format (default: text)",
    )
    check_parser.add_argument(
        "--parallel",
        action="store_true",
        help="Run analysis passes on worker threads",
    )

    return parser


def _resolve_manifest_path(root: Path, manifest: str | None, default: str) -> Path:
    if manifest is None:
        return (root / default).resolve()
    return Path(manifest).expanduser().resolve()


def _handle_check(
    root: Path, manifest: str | None, output_format: str, *, parallel: bool
) -> int:
    try:
        config = load_config(root)
        registry = config.to_registry()
        manifest_path = _resolve_manifest_path(root, manifest, config.manifest)
        model = manifest_to_model(load_manifest(manifest_path), registry)
    except (ConfigError, ManifestError, LayerCheckInputError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_INPUT_ERROR

    report = verify(registry, model, parallel=parallel)
    sys.stdout.write(get_formatter(output_format)(report))
    return EXIT_OK if report.conforms else EXIT_VIOLATIONS


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )

    root = Path(args.root).expanduser().resolve()

    if args.command == "check":
        return _handle_check(root, args.manifest, args.format, parallel=args.parallel)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
