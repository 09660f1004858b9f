"""Base stylesheet injected ahead of every page stylesheet.

Sets the root colors, catches common light backgrounds and themes the
user-agent styled controls (forms, links, buttons, scrollbars, tables,
dialogs). Every derived color comes from a role-aware transform of a fixed
reference color, so the base stylesheet agrees with the rewritten page
styles.
"""

import logging

from retint.colors import parse_color, rgb_to_hex
from retint.models import RGBA, ColorRole, ThemeProfile
from retint.transform import TransformContext, transform_css_color

logger = logging.getLogger(__name__)

BASE_STYLE_CLASS = "retint-base"
OVERRIDE_STYLE_CLASS = "retint-override"
INLINE_ATTRIBUTE_PREFIX = "data-retint-inline-"

FALLBACK_BACKGROUND = RGBA(r=26, g=26, b=26)
FALLBACK_TEXT = RGBA(r=230, g=230, b=230)

# Reference colors: (source, role, fallback)
_REFERENCES: dict[str, tuple[str, ColorRole, str]] = {
    "border": ("#4c4c4c", ColorRole.BORDER, "#666666"),
    "success": ("#22c55e", ColorRole.TEXT, "#22c55e"),
    "error": ("#ef4444", ColorRole.TEXT, "#ef4444"),
    "warning": ("#f59e0b", ColorRole.TEXT, "#f59e0b"),
    "control_bg": ("#ffffff", ColorRole.BACKGROUND, "#1a1a1a"),
    "control_text": ("#000000", ColorRole.TEXT, "#e6e6e6"),
    "visited": ("#8b5cf6", ColorRole.TEXT, "#8b5cf6"),
    "placeholder": ("#a9a9a9", ColorRole.TEXT, "#a9a9a9"),
    "scrollbar_hover": ("#6b7280", ColorRole.BORDER, "#6b7280"),
}

_WHITE_INLINE_SELECTORS = ",\n".join(
    f'[style*="{prop}:{space}{value}"]'
    for prop in ("background", "background-color")
    for value in ("white", "#fff", "#ffffff")
    for space in (" ", "")
)

BASE_TEMPLATE = """\
:root {{
  --retint-bg: {bg};
  --retint-text: {text};
  --retint-surface: {surface};
  --retint-accent: {accent};
  --retint-border: {border};
  --retint-success: {success};
  --retint-error: {error};
  --retint-warning: {warning};
}}
html, body {{
  background: {bg} !important;
  color: {text} !important;
}}
section, main, article, aside, header, footer, nav, ::before, ::after {{
  background: transparent !important;
  color: {text};
}}
{white_inline} {{
  background-color: {bg} !important;
}}
input:not([type="image"]), textarea, select, button {{
  background: {control_bg} !important;
  color: {control_text} !important;
  border-color: {border} !important;
}}
input:disabled, textarea:disabled, select:disabled, button:disabled {{
  opacity: 0.5 !important;
  cursor: not-allowed !important;
}}
input:focus, textarea:focus, select:focus, button:focus {{
  outline-color: {accent} !important;
  box-shadow: 0 0 0 2px {bg}, 0 0 0 4px {accent} !important;
}}
a {{
  color: {accent} !important;
  background: transparent !important;
}}
a:visited {{
  color: {visited} !important;
}}
a:hover {{
  opacity: 0.8 !important;
}}
a:active {{
  opacity: 0.6 !important;
}}
button, [role="button"] {{
  background: {accent} !important;
  color: {bg} !important;
  border: 1px solid {accent} !important;
  cursor: pointer !important;
}}
button:hover, [role="button"]:hover {{
  opacity: 0.9 !important;
}}
button:active, [role="button"]:active {{
  opacity: 0.7 !important;
}}
::placeholder {{
  color: {placeholder} !important;
  opacity: 0.6 !important;
}}
::selection {{
  background: {accent} !important;
  color: {bg} !important;
}}
::-webkit-scrollbar {{
  width: 12px;
  height: 12px;
}}
::-webkit-scrollbar-track {{
  background: {bg} !important;
}}
::-webkit-scrollbar-thumb {{
  background: {border} !important;
  border-radius: 6px;
}}
::-webkit-scrollbar-thumb:hover {{
  background: {scrollbar_hover} !important;
}}
* {{
  scrollbar-color: {border} {bg} !important;
  scrollbar-width: thin !important;
}}
code, pre {{
  background: {surface} !important;
  color: {accent} !important;
  border: 1px solid {border} !important;
}}
pre {{
  padding: 12px !important;
  border-radius: 4px !important;
  overflow-x: auto !important;
}}
table {{
  border-collapse: collapse !important;
  border-color: {border} !important;
}}
thead {{
  background: {surface} !important;
  color: {text} !important;
}}
tbody tr:nth-child(even) {{
  background: {surface} !important;
}}
tbody tr:nth-child(odd) {{
  background: {bg} !important;
}}
td, th {{
  border-color: {border} !important;
  padding: 8px !important;
}}
[role="dialog"], .modal, .dialog {{
  background: {bg} !important;
  color: {text} !important;
  border-color: {border} !important;
}}
[role="dialog"]::backdrop, .modal::backdrop {{
  background-color: rgba(0, 0, 0, 0.5) !important;
}}
input:valid, textarea:valid {{
  border-color: {success} !important;
}}
input:invalid, textarea:invalid {{
  border-color: {error} !important;
}}
[aria-invalid="true"], .error, .is-invalid {{
  color: {error} !important;
  border-color: {error} !important;
}}
.success, .is-valid {{
  color: {success} !important;
  border-color: {success} !important;
}}
.warning {{
  color: {warning} !important;
  border-color: {warning} !important;
}}
[role="img"], .badge, .label, .tag {{
  background: {surface} !important;
  color: {text} !important;
  border-color: {border} !important;
}}
[{invert_attr}] {{
  filter: invert(1) hue-rotate(180deg);
}}
"""

REDUCED_MOTION_BLOCK = """\
*, *::before, *::after {
  animation-duration: 0ms !important;
  animation-iteration-count: 1 !important;
  transition-duration: 0ms !important;
  scroll-behavior: auto !important;
}
"""


def base_colors(theme: ThemeProfile, context: TransformContext | None = None) -> dict[str, str]:
    """
    Resolve every color the base stylesheet uses.

    Palette background and text are used as-is; unparseable palette
    entries fall back to neutral defaults.
    """
    background = parse_color(theme.palette.background) or FALLBACK_BACKGROUND
    text = parse_color(theme.palette.text) or FALLBACK_TEXT
    surface = parse_color(theme.palette.surface) or background

    colors = {
        "bg": rgb_to_hex(background),
        "text": rgb_to_hex(text),
        "surface": rgb_to_hex(surface),
        "accent": transform_css_color(theme.palette.accent, ColorRole.TEXT, theme, context=context)
        or "#4f46e5",
    }
    for name, (source, role, fallback) in _REFERENCES.items():
        colors[name] = transform_css_color(source, role, theme, context=context) or fallback
    return colors


def build_base_css(theme: ThemeProfile, context: TransformContext | None = None) -> str:
    """Render the base stylesheet for a theme."""
    css = BASE_TEMPLATE.format(
        white_inline=_WHITE_INLINE_SELECTORS,
        invert_attr=f"{INLINE_ATTRIBUTE_PREFIX}invert",
        **base_colors(theme, context),
    )
    if theme.reduced_motion:
        css += REDUCED_MOTION_BLOCK
    logger.debug(f"Built base stylesheet for {theme.id} ({len(css)} chars)")
    return css
