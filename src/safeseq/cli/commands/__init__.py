from pathlib import Path

import typer

from ..app import app, app_state
from ...core.config import LOG_LEVELS, load_config
from ...core.errors import ConfigError
from ...utils.log import setup_logging

# Import commands
from . import replay, demo

__all__ = ['replay', 'demo']


@app.callback()
def setup(
        ctx: typer.Context,
        config: Path | None = typer.Option(
            Path("safeseq.toml"),
            "--config", "-c",
            envvar="SAFESEQ_CONFIG",
            help="Config file, it is optional",
            file_okay=True, dir_okay=False,
        ),
        log_level: str | None = typer.Option(
            None,
            "--log-level", "-l",
            help="Log level, overrides the config file",
        ),
):
    """
    SafeSequence Command Line Interface
    """
    if ctx.resilient_parsing:
        return

    # If no subcommand is provided, show complete help like --help
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)

    try:
        app_state.config = load_config(config)
    except ConfigError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(1)
    app_state.config_path = config

    if log_level is not None:
        if log_level.upper() not in LOG_LEVELS:
            typer.secho(f"Invalid log level: {log_level}, must be one of {', '.join(LOG_LEVELS)}",
                        fg="red", err=True)
            raise typer.Exit(1)
        app_state.config.log_level = log_level.upper()

    setup_logging(app_state.config.log_level, app_state.config.color_log)
