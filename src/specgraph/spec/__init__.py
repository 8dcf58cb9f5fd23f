"""Spec corpus analysis: relationships, validation, inference, and loading.

Example:
    >>> from specgraph.models import DocumentMetadata
    >>> from specgraph.spec import build_relationship_map
    >>> relationships = build_relationship_map({
    ...     "001-core": DocumentMetadata(),
    ...     "002-api": DocumentMetadata(depends_on=("001-core",)),
    ... })
    >>> relationships["001-core"].required_by
    ['002-api']
"""

from ._backfill import BackfillResult, backfill_metadata, write_backfill
from ._checks import (
    check_dependency_alignment,
    check_frontmatter,
    check_primary_size,
    find_spec_references,
)
from ._dependency_graph import DependencyGraph
from ._inference import (
    ADR_STATUS_VOCABULARY,
    CREATED_RULES,
    STATUS_RULES,
    infer_created_date,
    infer_created_from_content,
    infer_metadata,
    infer_status,
    infer_status_from_content,
    parse_long_date,
)
from ._io import atomic_write_text, read_text_file
from ._loader import (
    LoadFailure,
    SpecDocument,
    corpus_metadata,
    discover_spec_directories,
    find_document,
    load_corpus,
    load_spec_directory,
)
from ._relationships import (
    build_relationship_map,
    normalize_relationship_list,
    resolve_spec_id,
)
from ._tokens import (
    GOOD_TOKEN_LIMIT,
    OPTIMAL_TOKEN_LIMIT,
    WARNING_TOKEN_LIMIT,
    TokenStatus,
    classify_tokens,
    estimate_tokens,
)
from ._validator import (
    DEFAULT_PRIMARY_DOCUMENT,
    SubDocumentValidator,
    build_sub_document,
    extract_local_links,
    validate_sub_documents,
)

__all__ = [
    "ADR_STATUS_VOCABULARY",
    "CREATED_RULES",
    "DEFAULT_PRIMARY_DOCUMENT",
    "GOOD_TOKEN_LIMIT",
    "OPTIMAL_TOKEN_LIMIT",
    "STATUS_RULES",
    "WARNING_TOKEN_LIMIT",
    "BackfillResult",
    "DependencyGraph",
    "LoadFailure",
    "SpecDocument",
    "SubDocumentValidator",
    "TokenStatus",
    "atomic_write_text",
    "backfill_metadata",
    "build_relationship_map",
    "build_sub_document",
    "check_dependency_alignment",
    "check_frontmatter",
    "check_primary_size",
    "classify_tokens",
    "corpus_metadata",
    "discover_spec_directories",
    "estimate_tokens",
    "extract_local_links",
    "find_document",
    "find_spec_references",
    "infer_created_date",
    "infer_created_from_content",
    "infer_metadata",
    "infer_status",
    "infer_status_from_content",
    "load_corpus",
    "load_spec_directory",
    "normalize_relationship_list",
    "parse_long_date",
    "read_text_file",
    "resolve_spec_id",
    "validate_sub_documents",
    "write_backfill",
]
