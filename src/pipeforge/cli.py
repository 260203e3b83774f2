# src/pipeforge/cli.py
"""PipeForge Command Line Interface.

Entry point for the pipeforge CLI tool. Generated pipeline text and tables
go to stdout; logs and errors go to stderr.
"""

from __future__ import annotations

from pathlib import Path

import structlog
import typer
from pydantic import ValidationError

from pipeforge import __version__
from pipeforge.compiler import analyze_graph, generate, job_execution_order, output_path
from pipeforge.contracts.enums import OutputFormat
from pipeforge.core.catalog import TEMPLATES, get_template, list_blocks
from pipeforge.core.config import PipeforgeSettings, load_settings
from pipeforge.core.documents import GraphLoadError, dump_graph, load_graph
from pipeforge.core.graph.models import GraphValidationError, GraphValidationWarning, PipelineGraph
from pipeforge.publish import AuthenticationError, GitHubPublisher, PublishError

logger = structlog.get_logger(__name__)

app = typer.Typer(
    name="pipeforge",
    help="PipeForge: compile block graphs into CI/CD pipelines.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"pipeforge version {__version__}")
        raise typer.Exit()


def _load_dotenv(env_file: Path | None = None) -> bool:
    """Load environment variables from a .env file.

    Without ``env_file``, searches the current directory and its parents.
    Existing environment variables are never overridden.

    Raises:
        typer.Exit: If an explicit env_file path doesn't exist.
    """
    from dotenv import load_dotenv

    if env_file is not None:
        if not env_file.exists():
            typer.secho(
                f"Error: .env file not found: {env_file}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(1)
        return load_dotenv(env_file, override=False)

    return load_dotenv(override=False)


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_dotenv: bool = typer.Option(
        False,
        "--no-dotenv",
        help="Skip loading .env file.",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Path to .env file (skips automatic search).",
        exists=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """PipeForge: compile block graphs into CI/CD pipelines."""
    from pipeforge.core.logging import configure_logging

    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "INFO")

    if not no_dotenv:
        _load_dotenv(env_file=env_file)
    elif env_file is not None:
        typer.secho(
            "Warning: --env-file ignored because --no-dotenv is set.",
            fg=typer.colors.YELLOW,
            err=True,
        )


def _format_error(
    title: str,
    message: str,
    hint: str | None = None,
    details: list[str] | None = None,
) -> None:
    """Display a formatted error panel on stderr."""
    from rich.console import Console
    from rich.panel import Panel
    from rich.text import Text

    console = Console(stderr=True)

    content = Text()
    content.append(message, style="white")

    if details:
        content.append("\n\n")
        for detail in details:
            content.append(f"  • {detail}\n", style="dim")

    if hint:
        content.append("\n")
        content.append("Hint: ", style="yellow bold")
        content.append(hint, style="yellow")

    panel = Panel(
        content,
        title=f"[red bold]{title}[/]",
        border_style="red",
        padding=(0, 1),
    )
    console.print(panel)


def _warning_lines(warnings: list[GraphValidationWarning] | tuple[GraphValidationWarning, ...]) -> list[str]:
    return [f"[{warning.code}] {warning.message}" for warning in warnings]


def _load_settings_or_exit(settings: Path | None) -> PipeforgeSettings:
    try:
        return load_settings(settings.expanduser() if settings is not None else None)
    except FileNotFoundError as e:
        _format_error("Settings Not Found", str(e))
        raise typer.Exit(1) from None
    except ValidationError as e:
        details = [f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()]
        _format_error("Invalid Settings", "Settings failed validation.", details=details)
        raise typer.Exit(1) from None


def _load_graph_or_exit(path: Path) -> PipelineGraph:
    try:
        return load_graph(path.expanduser())
    except GraphLoadError as e:
        _format_error(
            "Cannot Load Graph",
            e.reason,
            hint=f"Check {e.path}, or create a starter graph with 'pipeforge init'.",
        )
        raise typer.Exit(1) from None


def _analyze_or_exit(graph: PipelineGraph, *, strict: bool) -> list[GraphValidationWarning]:
    warnings = analyze_graph(graph)
    for warning in warnings:
        logger.warning("graph_warning", code=warning.code, message=warning.message, node_ids=list(warning.node_ids))
    if strict and warnings:
        _format_error(
            "Graph Validation Failed",
            f"{len(warnings)} problem(s) found in strict mode.",
            details=_warning_lines(warnings),
        )
        raise typer.Exit(1)
    return warnings


@app.command("generate")
def generate_command(
    graph_path: Path = typer.Argument(..., metavar="GRAPH", help="Graph document (YAML or JSON)."),
    output_format: OutputFormat | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Target CI dialect (default from settings: github).",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write to this file instead of stdout.",
    ),
    write: bool = typer.Option(
        False,
        "--write",
        help="Write to the dialect's conventional path under --root.",
    ),
    root: Path = typer.Option(
        Path("."),
        "--root",
        help="Repository root used with --write.",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Fail when graph analysis finds problems.",
    ),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
) -> None:
    """Compile a graph document into CI configuration."""
    if output is not None and write:
        _format_error("Conflicting Options", "Use either --output or --write, not both.")
        raise typer.Exit(1)

    fmt = output_format or _load_settings_or_exit(settings).default_format
    graph = _load_graph_or_exit(graph_path)
    _analyze_or_exit(graph, strict=strict)
    text = generate(graph, fmt)
    logger.info("pipeline_generated", format=str(fmt), nodes=len(graph.nodes), edges=len(graph.edges))

    destination = output if output is not None else (root / output_path(fmt) if write else None)
    if destination is None:
        typer.echo(text, nl=not text.endswith("\n"))
        return

    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(text, encoding="utf-8")
    typer.secho(f"Wrote {destination}", fg=typer.colors.GREEN, err=True)


@app.command()
def check(
    graph_path: Path = typer.Argument(..., metavar="GRAPH", help="Graph document (YAML or JSON)."),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit non-zero when any problem is found.",
    ),
) -> None:
    """Analyze a graph and show the job run order."""
    graph = _load_graph_or_exit(graph_path)
    warnings = analyze_graph(graph)

    if warnings:
        typer.secho(f"{len(warnings)} problem(s) found:", fg=typer.colors.YELLOW)
        for line in _warning_lines(warnings):
            typer.echo(f"  - {line}")
    else:
        typer.secho("No problems found.", fg=typer.colors.GREEN)

    try:
        order = job_execution_order(graph)
    except GraphValidationError:
        typer.echo("Run order: undefined (job dependencies form a cycle)")
    else:
        typer.echo(f"Run order: {' -> '.join(order) if order else '(no jobs)'}")

    if strict and warnings:
        raise typer.Exit(1)


@app.command()
def blocks() -> None:
    """List the block types available for graphs."""
    from rich.console import Console
    from rich.table import Table

    table = Table(title="PipeForge blocks")
    table.add_column("Category")
    table.add_column("Type", style="cyan")
    table.add_column("Label")
    table.add_column("Description", style="dim")
    table.add_column("Defaults")
    for spec in list_blocks():
        defaults = ", ".join(f"{key}={value}" for key, value in spec.defaults.items())
        table.add_row(str(spec.category), str(spec.block_type), spec.label, spec.description, defaults)
    Console().print(table)


@app.command()
def init(
    template: str = typer.Option(
        "nodejs",
        "--template",
        "-t",
        help=f"Starter template ({', '.join(TEMPLATES)}).",
    ),
    output: Path = typer.Option(
        Path("pipeline.yaml"),
        "--output",
        "-o",
        help="Where to write the graph document.",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite an existing file.",
    ),
) -> None:
    """Write a starter graph document from a template."""
    try:
        graph = get_template(template)
    except KeyError:
        _format_error("Unknown Template", f"No template named {template!r}.", hint=f"Available: {', '.join(TEMPLATES)}")
        raise typer.Exit(1) from None

    if output.exists() and not force:
        _format_error("File Exists", f"{output} already exists.", hint="Pass --force to overwrite it.")
        raise typer.Exit(1)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(dump_graph(graph), encoding="utf-8")
    typer.secho(f"Created {output} from the '{template}' template.", fg=typer.colors.GREEN)


def _publisher_or_exit(settings: PipeforgeSettings) -> GitHubPublisher:
    try:
        return GitHubPublisher.from_settings(settings.github)
    except AuthenticationError as e:
        _format_error("GitHub Token Missing", str(e), hint="Set PIPEFORGE_GITHUB__TOKEN (a .env file works too).")
        raise typer.Exit(1) from None


@app.command()
def push(
    graph_path: Path = typer.Argument(..., metavar="GRAPH", help="Graph document (YAML or JSON)."),
    repo: str = typer.Option(
        ...,
        "--repo",
        "-r",
        help="Target repository as owner/name.",
    ),
    output_format: OutputFormat | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Target CI dialect (default from settings: github).",
    ),
    path: str | None = typer.Option(
        None,
        "--path",
        help="Repository path to write (default: the dialect's conventional path).",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Refuse to push when graph analysis finds problems.",
    ),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
) -> None:
    """Generate a pipeline and commit it to a GitHub repository."""
    config = _load_settings_or_exit(settings)
    fmt = output_format or config.default_format
    graph = _load_graph_or_exit(graph_path)
    _analyze_or_exit(graph, strict=strict)
    text = generate(graph, fmt)

    with _publisher_or_exit(config) as publisher:
        try:
            result = publisher.push(repo, text, fmt, path=path)
        except PublishError as e:
            hint = "The request may succeed if retried." if e.retryable else None
            _format_error("Push Failed", str(e), hint=hint)
            raise typer.Exit(1) from None

    typer.secho(result.message, fg=typer.colors.GREEN)
    typer.echo(f"  File: {result.file}")
    typer.echo(f"  URL:  {result.url}")


@app.command()
def repos(
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
) -> None:
    """List repositories owned by the authenticated GitHub user."""
    from rich.console import Console
    from rich.table import Table

    config = _load_settings_or_exit(settings)
    with _publisher_or_exit(config) as publisher:
        try:
            repositories = publisher.list_repositories()
        except PublishError as e:
            _format_error("Cannot List Repositories", str(e))
            raise typer.Exit(1) from None

    table = Table(title="Repositories")
    table.add_column("Repository", style="cyan")
    table.add_column("Visibility")
    table.add_column("Default branch")
    for repository in repositories:
        table.add_row(repository.full_name, "private" if repository.private else "public", repository.default_branch)
    Console().print(table)


if __name__ == "__main__":
    app()
