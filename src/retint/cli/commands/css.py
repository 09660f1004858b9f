"""Stylesheet rewrite commands."""

from pathlib import Path

import click

from retint.core import build_base_css
from retint.css import parse_stylesheet, process_stylesheet
from retint.exceptions import RetintError, StylesheetAccessError, collect_errors

from ..output import exit_with_error
from ._shared import log_file_hint, make_context, resolve_theme, theme_options


@click.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write override CSS here instead of stdout",
)
@theme_options
@click.pass_context
def css(
    ctx,
    files: tuple[Path, ...],
    output: Path | None,
    theme: str,
    color_blindness: str,
    reduced_motion: bool,
):
    """
    Rewrite stylesheet FILES into override CSS for a theme.

    Only rules with a changed color are emitted. Files that cannot be read
    are reported and skipped; the exit status is 1 if any failed.
    """
    try:
        profile = resolve_theme(theme, color_blindness, reduced_motion)
    except RetintError as e:
        exit_with_error(e, log_file_hint(ctx))

    context = make_context(ctx)
    collector = collect_errors("rewrite stylesheets")
    chunks: list[str] = []

    for path in files:
        with collector.try_operation(str(path)):
            try:
                text = path.read_text(encoding="utf-8")
            except OSError as e:
                raise StylesheetAccessError(str(path), str(e)) from e

            sheet = parse_stylesheet(text, href=str(path))
            overrides = process_stylesheet(sheet, profile, context)
            if overrides:
                chunks.append(f"/* {path.name} */\n{overrides}")

    result = "\n\n".join(chunks)
    if output:
        output.write_text(result + "\n", encoding="utf-8")
        click.echo(f"Wrote {len(chunks)} override block(s) to {output}", err=True)
    elif result:
        click.echo(result)

    if collector.has_errors:
        click.echo(collector.get_summary(), err=True)
        ctx.exit(1)


@click.command(name="base-css")
@theme_options
@click.pass_context
def base_css(ctx, theme: str, color_blindness: str, reduced_motion: bool):
    """Print the base stylesheet injected for a theme."""
    try:
        profile = resolve_theme(theme, color_blindness, reduced_motion)
    except RetintError as e:
        exit_with_error(e, log_file_hint(ctx))

    click.echo(build_base_css(profile, make_context(ctx)))
