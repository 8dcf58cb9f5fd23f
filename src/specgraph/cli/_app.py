"""The command-line interface for specgraph."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from specgraph.config import safe_load_config
from specgraph.utils import create_cli_logger

from ._commands import register_commands
from ._commands._context import CLIContext

_HELP = "Validate, relate, and backfill spec documents."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="specgraph",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Enable verbose output")] = False,
        quiet: Annotated[bool, Parameter(help="Suppress non-essential output")] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        project_root: Annotated[
            Path | None, Parameter(name="--project-root", help="Path to project root")
        ] = None,
    ) -> None:
        """Launch specgraph with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            verbose: Enable verbose output with debug logging.
            quiet: Suppress non-essential output.
            config: Explicit path to config file.
            project_root: Path to project root directory.
        """
        loaded_config, config_error = safe_load_config(
            config_path=config,
            project_root=project_root,
        )

        level = loaded_config.logging.level.value
        if verbose:
            level = "debug"
        elif quiet:
            level = "error"

        cli_logger = create_cli_logger(
            level=level,
            log_format=loaded_config.logging.format.value,  # type: ignore[arg-type]
            log_file=loaded_config.logging.file,
            command=tokens[0] if tokens else "",
        )

        ctx = CLIContext(
            config=loaded_config,
            verbose=verbose,
            quiet=quiet,
            project_root=project_root,
            config_error=config_error,
            logger=cli_logger,
        )
        CLIContext.set_current(ctx)

        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


def main() -> None:
    """Default entrypoint for the `specgraph` CLI."""
    app = create_app()
    app.meta()


if __name__ == "__main__":
    main()
