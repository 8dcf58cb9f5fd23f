# pyright: reportUnusedCallResult=false
# ruff: noqa: D415, FBT002
"""The backfill command."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from cyclopts import Parameter

from specgraph.exceptions import FrontmatterError, SpecIOError
from specgraph.history import GitHistory
from specgraph.spec import backfill_metadata, write_backfill

from ._context import CLIContext, OutputFormat
from ._corpus import load_specs, select_specs
from ._shared import ExitCode, format_json, format_table, get_error_console

if TYPE_CHECKING:
    from specgraph.spec import BackfillResult


def _describe(result: BackfillResult) -> list[str]:
    return [
        result.spec_id,
        ", ".join(
            f"{name}={result.fields[name]} ({result.sources[name].value})"
            if name in result.sources
            else f"{name} (history)"
            for name in result.inferred
        )
        or "-",
    ]


def backfill(
    *specs: Annotated[str, Parameter(help="Spec ids or numbers; all specs if omitted")],
    write: Annotated[
        bool,
        Parameter(name="--write", negative="", help="Write inferred fields to the files"),
    ] = False,
    no_git: Annotated[
        bool,
        Parameter(name="--no-git", negative="", help="Do not consult git history"),
    ] = False,
    transitions: Annotated[
        bool,
        Parameter(name="--transitions", negative="", help="Add status transitions from git"),
    ] = False,
    force: Annotated[
        bool,
        Parameter(name="--force", negative="", help="Overwrite existing git-derived dates"),
    ] = False,
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TABLE,
) -> None:
    """Infer missing status and dates for specs

    Nothing is written unless --write is given.

    Args:
        specs: Spec ids or numeric prefixes to backfill.
        write: Write the completed headers back into the documents.
        no_git: Infer from document content only.
        transitions: Also add the status transitions recorded in git.
        force: Replace created, updated, completed and transitions values
            already in the header with those from git.
        format_: Output format.
    """
    ctx = CLIContext.get_current()
    documents, _ = load_specs(ctx)
    selected = select_specs(documents, specs)

    history = None if no_git else GitHistory(ctx.resolve_project_root(), logger=ctx.logger)
    try:
        results = [
            (
                document,
                backfill_metadata(
                    document,
                    history,
                    include_transitions=transitions,
                    force=force,
                    logger=ctx.logger,
                ),
            )
            for document in selected
        ]
    finally:
        if history is not None:
            history.close()

    changed = [(document, result) for document, result in results if result.changed]
    written: list[str] = []
    write_failed = False
    if write:
        console = get_error_console()
        for document, result in changed:
            try:
                write_backfill(document, result)
            except (FrontmatterError, SpecIOError) as e:
                console.print(f"[yellow]Skipped[/yellow] {document.spec_id}: {e}")
                write_failed = True
                continue
            written.append(document.spec_id)

    if format_ == OutputFormat.JSON:
        data = {
            "specs": [result.to_dict() for _, result in changed],
            "written": written,
        }
        print(format_json(data))
    else:
        if changed:
            print(format_table(["Spec", "Inferred"], [_describe(r) for _, r in changed]))
        if not ctx.quiet:
            action = f"{len(written)} written" if write else "dry run, use --write to apply"
            print(f"{len(changed)} spec(s) need backfill ({action})")

    if write_failed:
        raise SystemExit(ExitCode.IO_ERROR)
