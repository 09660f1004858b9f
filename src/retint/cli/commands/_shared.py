"""Options and helpers shared by the CLI commands."""

import click

from retint.catalog import get_catalog
from retint.models import ColorBlindnessMode, EngineConfig, ThemeProfile, UserSettings
from retint.transform import TransformContext


def theme_options(func):
    """Add --theme, --color-blindness and --reduced-motion to a command."""
    func = click.option(
        "--reduced-motion", is_flag=True, help="Resolve the theme with reduced motion"
    )(func)
    func = click.option(
        "--color-blindness",
        type=click.Choice([m.value for m in ColorBlindnessMode], case_sensitive=False),
        default=ColorBlindnessMode.NONE.value,
        show_default=True,
        help="Color-blindness filter overlay",
    )(func)
    func = click.option(
        "--theme", "-t", default="dark", show_default=True, help="Theme id (see 'retint themes')"
    )(func)
    return func


def resolve_theme(theme_id: str, color_blindness: str, reduced_motion: bool) -> ThemeProfile:
    """
    Resolve a catalog theme with the user overlays given on the command line.

    Raises:
        ThemeNotFoundError: If theme_id is not in the catalog
    """
    settings = UserSettings(
        color_blindness=ColorBlindnessMode(color_blindness.lower()),
        prefer_reduced_motion=reduced_motion,
    )
    return get_catalog().resolve_profile(theme_id, settings)


def make_context(ctx: click.Context) -> TransformContext:
    """A fresh transform context using the CLI's engine config."""
    config = (ctx.obj or {}).get("config") or EngineConfig()
    return TransformContext(config=config)


def log_file_hint(ctx: click.Context) -> str | None:
    return (ctx.obj or {}).get("log_file")
