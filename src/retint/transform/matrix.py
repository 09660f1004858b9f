"""Color matrix filters for perceptual correction.

Colors remapped in HSL can look oversaturated or flat once converted
back to RGB. A 3x3 matrix applied to normalized RGB channels corrects
for display gamma, contrast and brightness:

    [R', G', B'] = M x [R, G, B]

Matrices are numpy arrays. Composition is matrix multiplication and is
order-significant for non-diagonal matrices.
"""

import logging
from enum import Enum

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator

from retint.colors import round_half_up
from retint.models import RGBA, ThemeProfile

logger = logging.getLogger(__name__)

DARK_MODE_GAMMA = 2.0
LIGHT_MODE_GAMMA = 2.2

# Rec. 601 luma weights
LUMA_WEIGHTS = (0.299, 0.587, 0.114)


class MatrixKind(str, Enum):
    """What a color matrix does."""

    GAMMA = "gamma"
    CONTRAST = "contrast"
    BRIGHTNESS = "brightness"
    SATURATION = "saturation"
    COMBINED = "combined"


class ColorMatrix(BaseModel):
    """A 3x3 RGB transform with debugging metadata."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    values: np.ndarray = Field(description="3x3 row-major matrix")
    kind: MatrixKind = MatrixKind.COMBINED
    description: str = ""

    @field_validator("values", mode="before")
    @classmethod
    def _as_read_only_3x3(cls, value):
        array = np.array(value, dtype=float).reshape(3, 3)
        array.setflags(write=False)
        return array

    def flat(self) -> list[float]:
        """The nine values in row-major order."""
        return [float(v) for v in self.values.ravel()]


IDENTITY_MATRIX = ColorMatrix(
    values=np.identity(3),
    kind=MatrixKind.COMBINED,
    description="Identity (no transformation)",
)


def _diagonal(factor: float, kind: MatrixKind, description: str) -> ColorMatrix:
    return ColorMatrix(values=np.identity(3) * factor, kind=kind, description=description)


def create_gamma_matrix(gamma: float = LIGHT_MODE_GAMMA) -> ColorMatrix:
    """
    Create a gamma correction matrix.

    Uses a uniform diagonal factor of 2^(1/gamma - 1), so no channel
    mixing takes place.
    """
    factor = 2 ** (1 / gamma - 1)
    return _diagonal(factor, MatrixKind.GAMMA, f"Gamma {gamma:.2f} correction")


def create_contrast_matrix(contrast: float = 1.0) -> ColorMatrix:
    """Create a contrast matrix; returns IDENTITY_MATRIX for a multiplier of 1."""
    if contrast == 1:
        return IDENTITY_MATRIX
    return _diagonal(contrast, MatrixKind.CONTRAST, f"Contrast {contrast * 100:.0f}%")


def create_brightness_matrix(brightness: float = 1.0) -> ColorMatrix:
    """Create a brightness matrix; returns IDENTITY_MATRIX for a multiplier of 1."""
    if brightness == 1:
        return IDENTITY_MATRIX
    return _diagonal(brightness, MatrixKind.BRIGHTNESS, f"Brightness {brightness * 100:.0f}%")


def create_saturation_matrix(saturation: float = 1.0) -> ColorMatrix:
    """
    Create a luma-preserving saturation matrix.

    A factor of 0 produces grayscale, 1 is identity, above 1 oversaturates.
    """
    if saturation == 1:
        return IDENTITY_MATRIX

    luma = np.array(LUMA_WEIGHTS)
    values = np.tile(luma * (1 - saturation), (3, 1)) + np.identity(3) * saturation
    return ColorMatrix(
        values=values,
        kind=MatrixKind.SATURATION,
        description=f"Saturation {saturation * 100:.0f}%",
    )


def compose_matrices(matrix_a: ColorMatrix, matrix_b: ColorMatrix) -> ColorMatrix:
    """Compose two matrices as A x B (B is applied to the color first)."""
    return ColorMatrix(
        values=matrix_a.values @ matrix_b.values,
        kind=MatrixKind.COMBINED,
        description=f"{matrix_a.description} + {matrix_b.description}",
    )


def apply_color_matrix(rgba: RGBA, matrix: ColorMatrix) -> RGBA:
    """
    Apply a matrix to a color.

    Channels are normalized to [0, 1], transformed, clamped to [0, 1] and
    rounded back to integers in [0, 255]. Alpha passes through.
    """
    vector = np.array([rgba.r, rgba.g, rgba.b]) / 255
    result = np.clip(matrix.values @ vector, 0.0, 1.0) * 255
    r, g, b = (round_half_up(float(c)) for c in result)
    return RGBA(r=r, g=g, b=b, a=rgba.a)


def create_filter_matrix(theme: ThemeProfile, is_dark_mode: bool = True) -> ColorMatrix:
    """
    Build the perceptual correction matrix for a theme.

    Composes identity x brightness x contrast x gamma, with gamma 2.0 for
    dark mode and 2.2 (sRGB) for light mode.
    """
    filters = theme.filters
    matrix = IDENTITY_MATRIX

    if filters is not None and filters.brightness and filters.brightness != 1:
        matrix = compose_matrices(matrix, create_brightness_matrix(filters.brightness))

    if filters is not None and filters.contrast and filters.contrast != 1:
        matrix = compose_matrices(matrix, create_contrast_matrix(filters.contrast))

    gamma = DARK_MODE_GAMMA if is_dark_mode else LIGHT_MODE_GAMMA
    return compose_matrices(matrix, create_gamma_matrix(gamma))


class MatrixCache:
    """Filter matrices computed once per theme and mode."""

    def __init__(self) -> None:
        self._matrices: dict[tuple, ColorMatrix] = {}

    def get(self, theme: ThemeProfile, is_dark_mode: bool) -> ColorMatrix:
        """Get or create the filter matrix for a theme."""
        filters_key = theme.filters.cache_key if theme.filters else None
        key = (theme.id, filters_key, is_dark_mode)

        matrix = self._matrices.get(key)
        if matrix is None:
            matrix = create_filter_matrix(theme, is_dark_mode)
            self._matrices[key] = matrix
            logger.debug(f"Built filter matrix for {theme.id} (dark={is_dark_mode})")
        return matrix

    def clear(self) -> None:
        self._matrices.clear()

    def __len__(self) -> int:
        return len(self._matrices)


def format_matrix(matrix: ColorMatrix) -> str:
    """Render a matrix as a small text table."""
    rows = [" ".join(f"{v:.3f}" for v in row) for row in matrix.values]
    width = max(len(row) for row in rows)
    lines = [f"Matrix: {matrix.description}", "┌ " + " " * width + " ┐"]
    lines.extend(f"│ {row} │" for row in rows)
    lines.append("└ " + " " * width + " ┘")
    return "\n".join(lines)
