"""Single-section CLI commands."""

import typer

from ubuntu_diag.cli.utils import build_generator, emit, get_settings


def audio_cmd(ctx: typer.Context) -> None:
    """
    Check the sound server, sinks and sources.

    Example:
        ubuntu-diag audio
    """
    settings = get_settings(ctx)
    emit(build_generator(settings).audio(), settings)


def video_cmd(ctx: typer.Context) -> None:
    """
    List GPUs and check the NVIDIA driver.

    Example:
        ubuntu-diag --format json video
    """
    settings = get_settings(ctx)
    emit(build_generator(settings).video(), settings)


def services_cmd(ctx: typer.Context) -> None:
    """
    Check systemd units with systemctl is-active.

    Example:
        ubuntu-diag -s pipewire -s wireplumber services
    """
    settings = get_settings(ctx)
    generator = build_generator(settings)
    emit(generator.services(settings.services, user=settings.user_services), settings)


def system_cmd(ctx: typer.Context) -> None:
    """
    Show kernel, distribution and desktop.

    Example:
        ubuntu-diag system
    """
    settings = get_settings(ctx)
    emit(build_generator(settings).system(), settings)
