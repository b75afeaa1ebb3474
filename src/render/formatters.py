"""Render verification reports as text, JSON or CI annotations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

import orjson

if TYPE_CHECKING:
    from verify.report import VerificationReport

Formatter = Callable[["VerificationReport"], str]


def render_text(report: VerificationReport) -> str:
    if report.conforms:
        return "OK: no violations\n"

    lines = [violation.message for violation in report.violations]
    counts = " ".join(f"{kind}={count}" for kind, count in report.counts)
    lines.append(f"{len(report.violations)} violation(s): {counts}")
    return "\n".join(lines) + "\n"


def render_json(report: VerificationReport) -> str:
    """Serialize with sorted keys so identical reports give identical bytes."""
    opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
    return orjson.dumps(report.to_dict(), option=opts).decode("utf-8") + "\n"


def _escape_annotation(value: str) -> str:
    # GitHub workflow command escaping for message data.
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def render_github(report: VerificationReport) -> str:
    """Output GitHub Actions ``::error`` annotations, one per violation."""
    lines = [
        f"::error title=layercheck {violation.kind}::"
        f"{_escape_annotation(violation.message)}"
        for violation in report.violations
    ]
    return "".join(f"{line}\n" for line in lines)


FORMATTERS: dict[str, Formatter] = {
    "text": render_text,
    "json": render_json,
    "github": render_github,
}


def get_formatter(name: str) -> Formatter:
    try:
        return FORMATTERS[name]
    except KeyError:
        msg = f"Unknown format {name!r}. Valid formats: {', '.join(sorted(FORMATTERS))}"
        raise ValueError(msg) from None


__all__ = [
    "FORMATTERS",
    "Formatter",
    "get_formatter",
    "render_github",
    "render_json",
    "render_text",
]
