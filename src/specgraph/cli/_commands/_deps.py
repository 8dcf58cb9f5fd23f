# pyright: reportUnusedCallResult=false
# ruff: noqa: D415
"""The deps and graph commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from cyclopts import Parameter

from specgraph.exceptions import CircularDependencyError
from specgraph.spec import DependencyGraph, build_relationship_map, corpus_metadata

from ._context import CLIContext, OutputFormat
from ._corpus import load_specs, select_specs
from ._shared import format_json, format_table

if TYPE_CHECKING:
    from collections.abc import Sequence

    from specgraph.models import RelationshipMap
    from specgraph.spec import SpecDocument


def _build(
    ctx: CLIContext, documents: Sequence[SpecDocument]
) -> tuple[RelationshipMap, DependencyGraph]:
    relationships = build_relationship_map(corpus_metadata(documents), logger=ctx.logger)
    return relationships, DependencyGraph.from_relationship_map(relationships)


def deps(
    spec: Annotated[str, Parameter(help="Spec id or number")],
    /,
    *,
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TABLE,
    depth: Annotated[
        int | None,
        Parameter(name="--depth", help="Limit transitive results to this many hops"),
    ] = None,
) -> None:
    """Show what a spec depends on and what depends on it

    Args:
        spec: Spec id or numeric prefix.
        format_: Output format.
        depth: Maximum number of hops for transitive dependencies.
    """
    ctx = CLIContext.get_current()
    documents, _ = load_specs(ctx)
    (document,) = select_specs(documents, [spec])
    relationships, dependency_graph = _build(ctx, documents)

    spec_id = document.spec_id
    rel = relationships[spec_id]
    cycle = dependency_graph.find_cycle(spec_id)
    data = {
        "spec": spec_id,
        "depends_on": rel.depends_on,
        "required_by": rel.required_by,
        "upstream": dependency_graph.upstream(spec_id, max_depth=depth),
        "downstream": dependency_graph.downstream(spec_id, max_depth=depth),
        "cycle": cycle,
    }

    if format_ == OutputFormat.JSON:
        print(format_json(data))
        return

    rows = [
        ["Depends on", ", ".join(rel.depends_on) or "-"],
        ["Required by", ", ".join(rel.required_by) or "-"],
        ["Upstream", ", ".join(data["upstream"]) or "-"],
        ["Downstream", ", ".join(data["downstream"]) or "-"],
        ["Cycle", " -> ".join(cycle) or "-"],
    ]
    print(f"## {spec_id}\n")
    print(format_table(["Relationship", "Specs"], rows))


def graph(
    *,
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TABLE,
) -> None:
    """Show the dependency graph of the whole corpus

    Args:
        format_: Output format.
    """
    ctx = CLIContext.get_current()
    documents, _ = load_specs(ctx)
    relationships, dependency_graph = _build(ctx, documents)

    cycle = dependency_graph.find_cycle()
    try:
        order: list[str] | None = dependency_graph.topological_order()
    except CircularDependencyError:
        order = None

    if format_ == OutputFormat.JSON:
        data = {
            "specs": {spec_id: rel.to_dict() for spec_id, rel in relationships.items()},
            "cycle": cycle,
            "order": order,
        }
        print(format_json(data))
        return

    rows = [
        [spec_id, ", ".join(rel.depends_on) or "-", ", ".join(rel.required_by) or "-"]
        for spec_id, rel in relationships.items()
    ]
    if rows:
        print(format_table(["Spec", "Depends on", "Required by"], rows))
    if cycle:
        print(f"\nCycle: {' -> '.join(cycle)}")
    elif order is not None and not ctx.quiet:
        print(f"\nOrder: {', '.join(order)}")

