"""Frontmatter parsing, normalization, and rendering.

Example:
    >>> from specgraph.frontmatter import extract_frontmatter
    >>> result = extract_frontmatter("---\\nstatus: wip\\ncreated: 2025-01-15\\n---\\n# Title\\n")
    >>> result.has_valid_header, result.metadata.status
    (True, <SpecStatus.IN_PROGRESS: 'in-progress'>)
"""

from specgraph.exceptions import FrontmatterError, IndentationParseError, ParseError

from ._extractor import (
    CANDIDATE_KEYS,
    HEADER_DELIMITER,
    PRIORITY_ALIASES,
    STATUS_SYNONYMS,
    FrontmatterResult,
    coerce_date,
    extract_frontmatter,
    normalize_metadata,
    normalize_priority,
    normalize_status,
    normalize_tags,
    select_field,
    split_frontmatter,
)
from ._lean_yaml import (
    INDENT_STEP,
    StructuredMapping,
    StructuredScalar,
    StructuredTextParser,
    StructuredValue,
    parse_structured_text,
)
from ._writer import render_frontmatter, replace_frontmatter

__all__ = [
    "CANDIDATE_KEYS",
    "HEADER_DELIMITER",
    "INDENT_STEP",
    "PRIORITY_ALIASES",
    "STATUS_SYNONYMS",
    "FrontmatterError",
    "FrontmatterResult",
    "IndentationParseError",
    "ParseError",
    "StructuredMapping",
    "StructuredScalar",
    "StructuredTextParser",
    "StructuredValue",
    "coerce_date",
    "extract_frontmatter",
    "normalize_metadata",
    "normalize_priority",
    "normalize_status",
    "normalize_tags",
    "parse_structured_text",
    "render_frontmatter",
    "replace_frontmatter",
    "select_field",
    "split_frontmatter",
]
