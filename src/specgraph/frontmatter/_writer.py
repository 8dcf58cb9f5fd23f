# pyright: reportExplicitAny=false, reportAny=false
"""Render header blocks for writing metadata back into documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import yaml

from ._extractor import HEADER_DELIMITER, split_frontmatter

if TYPE_CHECKING:
    from collections.abc import Mapping


def render_frontmatter(fields: Mapping[str, Any]) -> str:
    """Render fields as a ``---`` delimited header block.

    Keys keep their given order and long values stay on one line, so the
    output stays within the dialect the header parser accepts.

    Example:
        >>> print(render_frontmatter({"status": "planned", "tags": ["api"]}), end="")
        ---
        status: planned
        tags:
        - api
        ---
    """
    body = yaml.safe_dump(
        dict(fields),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=float("inf"),
    )
    return f"{HEADER_DELIMITER}\n{body}{HEADER_DELIMITER}\n"


def replace_frontmatter(text: str, fields: Mapping[str, Any]) -> str:
    """Return ``text`` with its header replaced by one rendered from ``fields``.

    A document without a header gets one prepended. The body is kept as is.
    """
    _, body = split_frontmatter(text)
    return render_frontmatter(fields) + body
