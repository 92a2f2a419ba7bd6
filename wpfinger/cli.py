import typer
import asyncio
from typing import Optional
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.align import Align

from .config import settings
from .constants import ItemKind, LogLevel, Verdict, VERDICT_COLORS
from .exceptions import InvalidVersionBound
from .scanner.http_client import HttpClient
from .scanner.readme_cascade import ReadmeCascade
from .scanner.version_checks import VulnerabilityEvaluator
from .scanner.version_discovery import VersionDiscoverer

app = typer.Typer(help="wpfinger - WordPress version fingerprinting and vulnerability range checks")
console = Console()


def print_banner(target: str):
    console.print(Panel(Align.center(f"[bold blue]wpfinger[/bold blue]\n[cyan]{target}[/cyan]"), border_style="blue"))


def make_log_callback(verbose: bool):
    async def log_callback(level: str, message: str):
        if level == LogLevel.ERROR:
            console.print(f"[red][ERROR][/red] {message}")
        elif level == LogLevel.WARNING:
            console.print(f"[yellow][WARN][/yellow]  {message}")
        elif verbose:
            console.print(f"[dim][{level}][/dim] {message}")
    return log_callback


async def run_discover_async(target: str, verbose: bool) -> Optional[str]:
    log_callback = make_log_callback(verbose)
    async with HttpClient(settings, log_callback) as http_client:
        discoverer = VersionDiscoverer(http_client, log_callback)
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            console=console
        ) as progress:
            progress.add_task(description="Fingerprinting WordPress version...", total=None)
            return await discoverer.discover(target)


async def run_check_async(
    target: str,
    kind: ItemKind,
    name: str,
    fixed_version: Optional[str],
    introduced_version: Optional[str],
    verbose: bool,
) -> Verdict:
    log_callback = make_log_callback(verbose)
    async with HttpClient(settings, log_callback) as http_client:
        cascade = ReadmeCascade(http_client, target, log_callback, config=settings)
        return await cascade.check_version(kind, name, fixed_version, introduced_version)


@app.command()
def discover(
    target: str = typer.Argument(..., help="Base URL of the WordPress site"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show every probe"),
):
    """
    Detect the WordPress core version of a site.
    """
    print_banner(target)
    version = asyncio.run(run_discover_async(target, verbose))
    if version is None:
        console.print("[yellow]WordPress version not found[/yellow]")
        raise typer.Exit(code=1)
    console.print(f"[bold green]WordPress {version}[/bold green]")


@app.command()
def check(
    target: str = typer.Argument(..., help="Base URL of the WordPress site"),
    plugin: Optional[str] = typer.Option(None, "--plugin", help="Plugin slug to check"),
    theme: Optional[str] = typer.Option(None, "--theme", help="Theme slug to check"),
    fixed: Optional[str] = typer.Option(None, "--fixed", help="Version the vulnerability was fixed in"),
    introduced: Optional[str] = typer.Option(None, "--introduced", help="Version the vulnerability was introduced in"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show every request and verdict"),
):
    """
    Check a plugin or theme version against a vulnerable range.
    """
    if (plugin is None) == (theme is None):
        console.print("[bold red]Exactly one of --plugin or --theme is required[/bold red]")
        raise typer.Exit(code=2)

    try:
        VulnerabilityEvaluator().validate_bounds(fixed, introduced)
    except InvalidVersionBound as e:
        console.print(f"[bold red]{e.message}[/bold red]")
        raise typer.Exit(code=2)

    kind = ItemKind.PLUGIN if plugin is not None else ItemKind.THEME
    name = plugin if plugin is not None else theme

    print_banner(target)
    verdict = asyncio.run(run_check_async(target, kind, name, fixed, introduced, verbose))
    color = VERDICT_COLORS[verdict]
    console.print(f"[bold {color}]{verdict.value.upper()}[/bold {color}] {kind} {name}: {verdict.description}")


if __name__ == "__main__":
    app()
