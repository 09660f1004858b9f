"""Theme catalog inspection commands."""

import click

from retint.catalog import get_catalog
from retint.exceptions import RetintError
from retint.transform import create_filter_matrix, detect_theme_mode, format_matrix

from ..output import exit_with_error
from ._shared import log_file_hint, resolve_theme, theme_options


@click.command()
@click.option("--verbose-list", "-l", is_flag=True, help="Show palette and filters")
def themes(verbose_list: bool):
    """List the preset themes."""
    for profile in get_catalog().profiles:
        click.echo(f"{profile.id:<26} {profile.label}")
        if not verbose_list:
            continue

        click.echo(f"    {profile.description}")
        palette = profile.palette
        click.echo(
            f"    Palette: bg {palette.background}  surface {palette.surface}  "
            f"text {palette.text}  accent {palette.accent}"
        )
        if profile.filters:
            values = profile.filters.model_dump(exclude_none=True)
            if values:
                click.echo("    Filters: " + ", ".join(f"{k}={v}" for k, v in values.items()))
        click.echo(f"    Minimum contrast: {profile.minimum_contrast or 4.5}")
        if profile.reduced_motion:
            click.echo("    Reduced motion")
        click.echo()


@click.command()
@theme_options
@click.option(
    "--dark/--light",
    "is_dark",
    default=None,
    help="Matrix disposition (default: from the theme mode)",
)
@click.pass_context
def matrix(ctx, theme: str, color_blindness: str, reduced_motion: bool, is_dark: bool | None):
    """Show the perceptual filter matrix for a theme."""
    try:
        profile = resolve_theme(theme, color_blindness, reduced_motion)
    except RetintError as e:
        exit_with_error(e, log_file_hint(ctx))

    if is_dark is None:
        is_dark = detect_theme_mode(profile).is_dark

    click.echo(format_matrix(create_filter_matrix(profile, is_dark)))
