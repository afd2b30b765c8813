"""Main CLI entry point for ubuntu-diag."""

from pathlib import Path
from typing import List, Optional

import typer

from ubuntu_diag.cli import commands
from ubuntu_diag.cli.utils import CliSettings, build_generator, console, emit, fail
from ubuntu_diag.renderers import OutputFormat

app = typer.Typer(
    name="ubuntu-diag",
    help="Read-only health report for audio, video and services on Ubuntu desktops.",
    rich_markup_mode="rich",
)

# Register subcommands
app.command(name="audio")(commands.audio_cmd)
app.command(name="video")(commands.video_cmd)
app.command(name="services")(commands.services_cmd)
app.command(name="system")(commands.system_cmd)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    format: Optional[OutputFormat] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format (text, json, markdown, terminal)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the report to a file instead of stdout",
    ),
    service: Optional[List[str]] = typer.Option(
        None,
        "--service",
        "-s",
        help="systemd unit to check (repeatable, replaces configured units)",
    ),
    user: Optional[bool] = typer.Option(
        None,
        "--user/--system",
        help="Query user units instead of system units",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Per-command timeout in seconds",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a YAML configuration file",
    ),
    sequential: bool = typer.Option(False, "--sequential", help="Run collectors one after another"),
    color: Optional[bool] = typer.Option(
        None,
        "--color/--no-color",
        help="Colour terminal output (default from config)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output"),
) -> None:
    """
    ubuntu-diag: system diagnostics for Ubuntu desktops.

    Without a subcommand, prints the full report. Subcommands:

    - [bold]audio[/bold]: PipeWire/PulseAudio status, sinks and sources
    - [bold]video[/bold]: GPUs, NVIDIA driver, VA-API and display server
    - [bold]services[/bold]: systemd unit states
    - [bold]system[/bold]: kernel, distribution and desktop

    Diagnostic failures inside the report never change the exit code.
    """
    from ubuntu_diag.utils.config import load_config
    from ubuntu_diag.utils.errors import UbuntuDiagError, validate_service_name, validate_timeout
    from ubuntu_diag.utils.logging import configure_logging, level_for

    configure_logging(level=level_for(verbose, quiet), structured=verbose)

    # version runs without loading configuration
    if ctx.invoked_subcommand == "version":
        return

    try:
        cfg = load_config(config)
        services = list(service) if service else list(cfg.services.units)
        for name in services:
            validate_service_name(name)
        if timeout is not None:
            validate_timeout(timeout)
        output_format = format or OutputFormat(cfg.output.default_format)
    except UbuntuDiagError as e:
        fail(e.message)
    except ValueError as e:
        fail(f"Invalid configuration: {e}")

    settings = CliSettings(
        format=output_format,
        output=output,
        services=services,
        user_services=cfg.services.user if user is None else user,
        timeout=timeout if timeout is not None else cfg.commands.timeout,
        locale=cfg.commands.locale,
        parallel=cfg.commands.parallel and not sequential,
        color=cfg.output.color if color is None else color,
    )
    ctx.obj = settings

    if ctx.invoked_subcommand is None:
        report = build_generator(settings).generate(settings.services, user_services=settings.user_services)
        emit(report, settings)


@app.command()
def version() -> None:
    """Show the ubuntu-diag version."""
    from ubuntu_diag import __version__

    console.print(f"ubuntu-diag version {__version__}")


if __name__ == "__main__":
    app()
