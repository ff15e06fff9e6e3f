import asyncio
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from isoblock.core.analyzer import AnalyzerError
from isoblock.core.config import Config
from isoblock.core.copier import CopyResult
from isoblock.core.isolator import IsolationReport, Isolator, SetupError
from isoblock.core.sanitizer import is_valid_candidate, sanitize
from isoblock.utils.log import configure_logging

app = typer.Typer(
    name="isoblock",
    help="isoblock - copy a code block and its asset dependencies into a sandbox",
    add_completion=False,
)

console = Console()
config = Config()


@app.callback()
def main() -> None:
    configure_logging(config.log_level, config.log_file)


def _build_config(project_root: Path | None, sandbox: Path | None) -> Config:
    overrides: dict[str, Any] = {}
    if project_root is not None:
        overrides["project_root"] = project_root
    if sandbox is not None:
        overrides["sandbox_dir"] = sandbox
    return config.model_copy(update=overrides)


def _print_result(result: CopyResult) -> None:
    if result.success:
        console.print(f"[green]{result.message}[/green]")
    else:
        console.print(f"[red]{result.message}[/red]")


def _print_drop(candidate: str, reason: str) -> None:
    console.print(f"[dim]Skipped {candidate} ({reason})[/dim]")


def _show_summary(report: IsolationReport, sandbox_root: Path) -> None:
    table = Table(show_header=False)
    table.add_row("[cyan]Sandbox[/cyan]", str(sandbox_root))
    table.add_row("[cyan]Dependencies found[/cyan]", str(len(report.dependencies)))
    table.add_row("[cyan]Files copied[/cyan]", str(len(report.copied)))
    table.add_row("[cyan]Failed copies[/cyan]", str(len(report.failed)))
    console.print(table)


def _do_run(
    code_block_file: Path | None,
    main_file: str | None,
    run_config: Config,
    dry_run: bool,
    verbose: bool,
) -> None:
    isolator = Isolator(config=run_config)
    code_block = isolator.load_code_block(code_block_file)

    if not main_file:
        main_file = typer.prompt("Enter the name of the main file (e.g., index.html)")

    on_drop = _print_drop if verbose else None

    if dry_run:
        dependencies = asyncio.run(isolator.discover(code_block, main_file, on_drop=on_drop))
        console.print(Panel(f"[bold]{len(dependencies)}[/bold] dependencies", title="Dry Run"))
        for dep in dependencies:
            console.print(f"  - {dep}")
        console.print(f"  - {main_file} [dim](main file)[/dim]")
        return

    report = asyncio.run(
        isolator.run(code_block, main_file, on_result=_print_result, on_drop=on_drop)
    )
    console.print(
        "\n[bold green]All files and dependencies have been copied successfully.[/bold green]"
    )
    _show_summary(report, isolator.copier.sandbox_root)


@app.command()
def run(
    code_block_file: Path | None = typer.Argument(
        None, help="File containing the code block (default: CODE_BLOCK_FILE setting)"
    ),
    main_file: str | None = typer.Option(
        None, "--main", "-m", help="Main file, relative to the project root"
    ),
    project_root: Path | None = typer.Option(
        None, "--project-root", "-p", help="Directory dependency paths are resolved against"
    ),
    sandbox: Path | None = typer.Option(
        None, "--sandbox", "-s", help="Output directory (emptied on every run)"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="List dependencies without touching the sandbox"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show skipped candidates"),
) -> None:
    """Isolate a code block and its dependencies into the sandbox."""
    try:
        _do_run(code_block_file, main_file, _build_config(project_root, sandbox), dry_run, verbose)
    except SetupError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    except AnalyzerError as e:
        console.print(f"[red]Error calling the analyzer: {e}[/red]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Error during the process: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def check(
    paths: list[str] = typer.Argument(..., help="Candidate dependency paths to validate"),
) -> None:
    """Show how candidate paths are sanitized and whether they are accepted."""
    table = Table(title="Candidate Paths")
    table.add_column("Input")
    table.add_column("Sanitized")
    table.add_column("Valid")
    for raw in paths:
        cleaned = sanitize(raw)
        valid = is_valid_candidate(cleaned, config.allowed_extensions)
        table.add_row(raw, cleaned, "[green]yes[/green]" if valid else "[red]no[/red]")
    console.print(table)


@app.command()
def version() -> None:
    """Show isoblock version."""
    from isoblock import __version__

    console.print(f"[bold]isoblock[/bold] version {__version__}")


if __name__ == "__main__":
    app()
