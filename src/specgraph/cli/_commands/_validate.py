# pyright: reportUnusedCallResult=false
# ruff: noqa: D415, FBT002, PLR0913
"""The validate command."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from cyclopts import Parameter
from pydantic import ValidationError

from specgraph.models import ValidationResult
from specgraph.spec import (
    check_dependency_alignment,
    check_frontmatter,
    check_primary_size,
    validate_sub_documents,
)

from ._context import CLIContext, OutputFormat
from ._corpus import load_specs, select_specs
from ._shared import ExitCode, exit_with_error, format_json, format_table

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from specgraph.config import ValidationConfiguration
    from specgraph.spec import SpecDocument


def validate_document(
    document: SpecDocument,
    config: ValidationConfiguration,
    known_ids: list[str],
    *,
    logger: FilteringBoundLogger | None = None,
) -> ValidationResult:
    """Run every document-level check on one spec."""
    primary = document.primary_name
    result = check_frontmatter(document.extraction, file=primary)
    result.merge(check_primary_size(primary, document.text, config))
    result.merge(
        validate_sub_documents(
            document.body,
            document.sub_documents,
            config,
            primary_name=primary,
            logger=logger,
        )
    )
    if config.check_dependency_alignment:
        result.merge(
            check_dependency_alignment(
                document.spec_id,
                document.metadata,
                document.body,
                known_ids,
                file=primary,
            )
        )
    return result


def validate(
    *specs: Annotated[str, Parameter(help="Spec ids or numbers; all specs if omitted")],
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TABLE,
    no_cross_references: Annotated[
        bool,
        Parameter(
            name="--no-cross-references",
            negative="",
            help="Skip the cross-reference check",
        ),
    ] = False,
    warning_threshold: Annotated[
        int | None,
        Parameter(name="--warning-threshold", help="Token count that draws a warning"),
    ] = None,
    error_threshold: Annotated[
        int | None,
        Parameter(name="--error-threshold", help="Token count that fails validation"),
    ] = None,
    max_lines: Annotated[
        int | None,
        Parameter(name="--max-lines", help="Line count that draws a warning"),
    ] = None,
) -> None:
    """Validate spec headers, sizes, sub-documents, and references

    Exits with VALIDATION_ERROR when any spec has an error.

    Args:
        specs: Spec ids or numeric prefixes to validate.
        format_: Output format.
        no_cross_references: Skip checking links between sub-documents.
        warning_threshold: Override the token warning threshold.
        error_threshold: Override the token error threshold.
        max_lines: Override the line limit.
    """
    ctx = CLIContext.get_current()
    try:
        config = ctx.config.validation.with_overrides(
            warning_threshold=warning_threshold,
            error_threshold=error_threshold,
            max_lines=max_lines,
            check_cross_references=False if no_cross_references else None,
        )
    except ValidationError as e:
        exit_with_error(f"Invalid validation settings: {e}", ExitCode.VALIDATION_ERROR)

    documents, failures = load_specs(ctx)
    known_ids = [document.spec_id for document in documents]

    results: dict[str, ValidationResult] = {}
    for document in select_specs(documents, specs):
        results[document.spec_id] = validate_document(
            document, config, known_ids, logger=ctx.logger
        )
    if not specs:
        for failure in failures:
            failed = ValidationResult()
            failed.add_error("load", failure.error, file=str(failure.path))
            results[failure.spec_id] = failed

    passed = all(result.passed for result in results.values())

    if format_ == OutputFormat.JSON:
        data = {
            "passed": passed,
            "specs": {spec_id: result.to_dict() for spec_id, result in results.items()},
        }
        print(format_json(data))
    else:
        rows = [
            [spec_id, issue.severity.value, issue.category, issue.file or "", issue.message]
            for spec_id, result in results.items()
            for issue in result.issues
        ]
        if rows:
            print(format_table(["Spec", "Severity", "Check", "File", "Message"], rows))
        if not ctx.quiet:
            failed_count = sum(1 for result in results.values() if not result.passed)
            print(f"{len(results)} spec(s) validated, {failed_count} failed")

    if not passed:
        raise SystemExit(ExitCode.VALIDATION_ERROR)
