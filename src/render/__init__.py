"""Report renderers."""

from render.formatters import (
    FORMATTERS,
    get_formatter,
    render_github,
    render_json,
    render_text,
)

__all__ = [
    "FORMATTERS",
    "get_formatter",
    "render_github",
    "render_json",
    "render_text",
]
