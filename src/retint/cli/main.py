"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path

import click

from retint.exceptions import RetintError
from retint.models import EngineConfig

from .commands import base_css, css, matrix, themes, transform
from .output import exit_with_error

logger = logging.getLogger(__name__)

# Handlers added by setup_logging, replaced on the next call
_handlers: list[logging.Handler] = []


def setup_logging(verbose: int, log_file: Path | None = None) -> None:
    """
    Configure logging for the CLI.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        log_file: Also write logs to this file (rotating) when given
    """
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in _handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
    _handlers.append(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        # Keeps last 5 files, max 10MB each
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=10 * 1024 * 1024, backupCount=5
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        _handlers.append(file_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_file}")


@click.group()
@click.version_option(version="0.1.0", prog_name="retint")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v: INFO, -vv: DEBUG)")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write logs to this file",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Engine config file (default: ~/.retint/config.json)",
)
@click.pass_context
def cli(ctx, verbose: int, log_file: Path | None, config_path: Path | None):
    """
    retint - re-theme web page colors.

    Offline tools for the theme engine: transform single colors, rewrite
    stylesheet files into override rules, and inspect the theme catalog.

    \b
    Examples:
      # Transform a color for the dark theme
      retint transform "#ffffff" --role background --theme dark

      # Rewrite stylesheets into override CSS
      retint css site.css vendor.css --theme night-warm -o overrides.css

      # Print the base stylesheet for a theme
      retint base-css --theme high-contrast

      # List themes
      retint themes
    """
    setup_logging(verbose, log_file)

    try:
        config = EngineConfig.load_or_default(config_path)
    except RetintError as e:
        logger.error(f"Failed to load config: {e}")
        exit_with_error(e, str(log_file) if log_file else None)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["log_file"] = str(log_file) if log_file else None


cli.add_command(transform)
cli.add_command(css)
cli.add_command(base_css)
cli.add_command(themes)
cli.add_command(matrix)

if __name__ == "__main__":
    cli()
