"""Corpus loading shared by the commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from specgraph.exceptions import SpecIOError
from specgraph.spec import find_document, load_corpus

from ._shared import ExitCode, exit_code_for_exception, exit_with_error

if TYPE_CHECKING:
    from collections.abc import Sequence

    from specgraph.spec import LoadFailure, SpecDocument

    from ._context import CLIContext


def load_specs(ctx: CLIContext) -> tuple[list[SpecDocument], list[LoadFailure]]:
    """Load the configured spec corpus, exiting with IO_ERROR if it is unreadable."""
    specs_dir = ctx.resolve_specs_dir()
    if not specs_dir.is_dir():
        exit_with_error(f"Specs directory not found: {specs_dir}", ExitCode.NOT_FOUND)
    try:
        return load_corpus(
            specs_dir,
            primary_document=ctx.config.specs.primary_document,
            logger=ctx.logger,
        )
    except SpecIOError as e:
        exit_with_error(str(e), exit_code_for_exception(e))


def select_specs(
    documents: Sequence[SpecDocument],
    references: Sequence[str],
) -> list[SpecDocument]:
    """Pick the specs named on the command line, or all of them when none are.

    References may be full ids or numeric prefixes. An unknown reference
    exits with NOT_FOUND.
    """
    if not references:
        return list(documents)
    selected: list[SpecDocument] = []
    for reference in references:
        document = find_document(documents, reference)
        if document is None:
            exit_with_error(f"Spec not found: {reference}", ExitCode.NOT_FOUND)
        if document not in selected:
            selected.append(document)
    return selected
