"""Default configuration values.

DEFAULT_CONFIG is a plain dict so it can flow through deep_merge; the merge
functions copy their inputs, so it is never mutated.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "logging": {
        "level": "warning",
        "format": "json",
        "file": "",
    },
    "specs": {
        "directory": "specs",
        "primary_document": "README.md",
    },
    "validation": {
        "max_lines": 400,
        "warning_threshold": 3500,
        "error_threshold": 5000,
        "check_cross_references": True,
        "check_dependency_alignment": True,
    },
}
