"""
CLI for lombok-agent.

Provides command-line access to Lombok detection, jar provisioning and
JAVA_TOOL_OPTIONS merging.
"""

import asyncio
import logging
import os
import shlex
from pathlib import Path
from typing import Optional

import typer
import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from lombok_agent.core.config import LombokAgentConfig, load_config
from lombok_agent.core.java_options import merge_java_tool_options
from lombok_agent.core.path_utils import (
    is_lsp_download_disabled,
    lombok_jar_path,
    opencode_data_dir,
)
from lombok_agent.services import SetupStatus, create_services
from lombok_agent.services.setup_service import JAVA_TOOL_OPTIONS_ENV

# Initialize Rich Console
console = Console()

app = typer.Typer(
    name="lombok-agent",
    help="Configure the Lombok javaagent for JVM language servers",
    add_completion=False,
)

_state: dict[str, Optional[Path]] = {"config_path": None}


def _setup_logging(config: LombokAgentConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.logging.level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=config.logging.format, force=True)


def _load() -> LombokAgentConfig:
    try:
        return load_config(_state["config_path"])
    except (FileNotFoundError, ValueError, TypeError, yaml.YAMLError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(2)


@app.callback()
def main(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (.yaml, .yml or .json)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Configure the Lombok javaagent for JVM language servers."""
    load_dotenv()
    _state["config_path"] = config_path
    _setup_logging(_load(), verbose)


@app.command()
def detect(
    path: Path = typer.Argument(..., help="Project directory to scan"),
):
    """Check whether a project declares a Lombok dependency."""
    container = create_services(config=_load())
    result = asyncio.run(container.scanner.scan(path))

    if result.detected:
        console.print(f"[bold green]Lombok detected[/bold green] in {result.build_file}")
        return

    console.print(
        f"[yellow]No Lombok dependency found[/yellow] "
        f"({result.files_inspected} build files inspected)"
    )
    raise typer.Exit(1)


@app.command("data-dir")
def data_dir():
    """Show the data directory and the cached lombok.jar location."""
    directory = opencode_data_dir()
    jar = lombok_jar_path(directory)

    table = Table.grid(padding=1)
    table.add_column(style="bold")
    table.add_column()
    table.add_row("Data directory:", directory)
    table.add_row("lombok.jar:", jar)
    table.add_row("Present:", "yes" if Path(jar).exists() else "no")
    table.add_row("Downloads disabled:", "yes" if is_lsp_download_disabled() else "no")
    console.print(table)


@app.command("show-config")
def show_config(
    json_output: bool = typer.Option(False, "--json", help="Print JSON instead of YAML"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the effective configuration to a .yaml or .json file"
    ),
):
    """Show the effective configuration (file, environment and defaults merged)."""
    config = _load()

    if output is not None:
        try:
            config.save(output)
        except (OSError, ValueError) as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(2)
        console.print(f"[green]Configuration written to[/green] {output}")
        return

    typer.echo(config.to_json() if json_output else config.to_yaml())


@app.command("ensure-jar")
def ensure_jar(
    dest: Optional[Path] = typer.Option(
        None, "--dest", "-d", help="Where to store lombok.jar (default: data directory)"
    ),
):
    """Download lombok.jar unless it is already cached."""
    container = create_services(config=_load())
    target = dest if dest is not None else Path(lombok_jar_path())
    download_disabled = is_lsp_download_disabled()

    async def _run():
        try:
            return await container.provisioner.ensure(target, download_disabled=download_disabled)
        finally:
            await container.close()

    jar = asyncio.run(_run())
    if jar is None:
        hint = " (downloads disabled)" if download_disabled else ""
        console.print(f"[bold red]lombok.jar unavailable{hint}[/bold red]")
        raise typer.Exit(1)

    typer.echo(str(jar))


@app.command("merge-options")
def merge_options(
    jar: str = typer.Argument(..., help="Path to lombok.jar"),
    current: Optional[str] = typer.Option(
        None, "--current", help="Existing options (default: $JAVA_TOOL_OPTIONS)"
    ),
):
    """Print JAVA_TOOL_OPTIONS with the Lombok javaagent added once."""
    existing = current if current is not None else os.environ.get(JAVA_TOOL_OPTIONS_ENV)
    typer.echo(merge_java_tool_options(existing, jar))


@app.command()
def configure(
    path: Path = typer.Argument(..., help="Project directory"),
    shell: bool = typer.Option(
        False, "--shell", help="Print an export statement instead of a summary"
    ),
):
    """Detect Lombok, provision the jar and merge JAVA_TOOL_OPTIONS."""
    container = create_services(config=_load())
    environ = dict(os.environ)

    async def _run():
        try:
            return await container.setup_service.configure(path, environ=environ)
        finally:
            await container.close()

    result = asyncio.run(_run())

    if shell:
        if result.configured:
            typer.echo(f"export {JAVA_TOOL_OPTIONS_ENV}={shlex.quote(result.java_tool_options)}")
            return
        raise typer.Exit(1)

    summary = Table.grid(padding=1)
    summary.add_column(style="bold")
    summary.add_column()
    summary.add_row("Status:", result.status.value)
    if result.build_file is not None:
        summary.add_row("Build file:", str(result.build_file))
    if result.jar_path is not None:
        summary.add_row("lombok.jar:", str(result.jar_path))
    if result.java_tool_options is not None:
        summary.add_row(f"{JAVA_TOOL_OPTIONS_ENV}:", result.java_tool_options)

    style = "green" if result.configured else "yellow"
    console.print(
        Panel(summary, title=f"[bold {style}]Lombok setup[/bold {style}]", border_style=style, expand=False)
    )

    if result.status == SetupStatus.JAR_UNAVAILABLE:
        raise typer.Exit(1)
