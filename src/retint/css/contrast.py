"""WCAG contrast measurement and text color repair."""

from collections.abc import Iterator

from retint.models import RGBA

WCAG_AA_CONTRAST = 4.5


def _linear_channel(value: float) -> float:
    v = value / 255
    return v / 12.92 if v <= 0.03928 else ((v + 0.055) / 1.055) ** 2.4


def relative_luminance(rgba: RGBA) -> float:
    """WCAG 2.x relative luminance (alpha is ignored)."""
    r, g, b = (_linear_channel(c) for c in (rgba.r, rgba.g, rgba.b))
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(first: RGBA, second: RGBA) -> float:
    """WCAG contrast ratio between two colors, from 1 to 21."""
    lum1 = relative_luminance(first)
    lum2 = relative_luminance(second)
    return (max(lum1, lum2) + 0.05) / (min(lum1, lum2) + 0.05)


def iter_contrast_adjustments(
    text: RGBA, background: RGBA, step: int = 15, max_iterations: int = 20
) -> Iterator[RGBA]:
    """
    Yield successive text colors stepped away from the background.

    Every channel moves by ``step`` per iteration: lighter on dark
    backgrounds (luminance < 0.5), darker otherwise. Channels saturate at
    0 and 255.
    """
    lighten = relative_luminance(background) < 0.5
    delta = step if lighten else -step
    r, g, b = text.r, text.g, text.b

    for _ in range(max_iterations):
        r, g, b = (min(255.0, max(0.0, c + delta)) for c in (r, g, b))
        yield RGBA(r=r, g=g, b=b, a=text.a)


def adjust_for_contrast(
    text: RGBA,
    background: RGBA,
    target_ratio: float = WCAG_AA_CONTRAST,
    step: int = 15,
    max_iterations: int = 20,
) -> RGBA:
    """
    Step the text color until it reaches target_ratio against background.

    Returns the input unchanged when it already meets the target, and the
    last candidate when max_iterations is reached first.
    """
    if contrast_ratio(text, background) >= target_ratio:
        return text

    adjusted = text
    for adjusted in iter_contrast_adjustments(text, background, step, max_iterations):
        if contrast_ratio(adjusted, background) >= target_ratio:
            break
    return adjusted
