"""Single-color transform command."""

import click

from retint.colors import hsl_to_string, parse_color, rgb_to_hsl
from retint.exceptions import RetintError
from retint.models import ColorRole, ThemeMode
from retint.transform import transform_color

from ..output import exit_with_error
from ._shared import log_file_hint, make_context, resolve_theme, theme_options


@click.command()
@click.argument("color")
@click.option(
    "--role",
    "-r",
    type=click.Choice([r.value for r in ColorRole], case_sensitive=False),
    default=ColorRole.BACKGROUND.value,
    show_default=True,
    help="How the color is used",
)
@click.option(
    "--mode",
    type=click.Choice([m.value for m in ThemeMode], case_sensitive=False),
    default=None,
    help="Override the mode derived from the theme id",
)
@click.option("--hsl", "show_hsl", is_flag=True, help="Also print source and result as HSL")
@theme_options
@click.pass_context
def transform(
    ctx,
    color: str,
    role: str,
    mode: str | None,
    show_hsl: bool,
    theme: str,
    color_blindness: str,
    reduced_motion: bool,
):
    """
    Transform COLOR for a theme.

    COLOR is any CSS color: hex, rgb()/rgba(), hsl()/hsla() or a named
    color.

    \b
    Examples:
      retint transform white --role background --theme dark
      retint transform "rgb(0 0 0)" --role text --theme night-warm --hsl
    """
    try:
        profile = resolve_theme(theme, color_blindness, reduced_motion)
    except RetintError as e:
        exit_with_error(e, log_file_hint(ctx))

    rgba = parse_color(color)
    if rgba is None:
        raise click.BadParameter(f"'{color}' is not a CSS color", param_hint="COLOR")

    result = transform_color(
        rgba,
        ColorRole(role.lower()),
        profile,
        mode=ThemeMode(mode.lower()) if mode else None,
        register=False,
        context=make_context(ctx),
    )
    click.echo(result)

    if show_hsl:
        click.echo(f"  source: {hsl_to_string(rgb_to_hsl(rgba))}")
        click.echo(f"  result: {hsl_to_string(rgb_to_hsl(parse_color(result)))}")
