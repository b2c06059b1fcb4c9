"""Procedural title images for posts without a featured image.

The image is a diagonal blue-to-purple gradient with the post title centred
on it in bold white type. The title is word-wrapped to 85% of the width and
the font shrinks in 2px steps until the block fits 80% of the height, or the
24px floor is reached (below which overflow is accepted).

``background_color`` and ``text_color`` are accepted on requests but the
gradient and the white text are fixed; images generated for the same title
are identical regardless of the colours passed.
"""

from __future__ import annotations

import base64
import functools
import io
import logging
from collections.abc import Callable
from typing import Any

import numpy as np
from PIL import Image, ImageColor, ImageDraw, ImageFont
from pydantic import BaseModel, ConfigDict, Field

from postcraft.config import ImageSettings
from postcraft.exceptions import SurfaceUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 900
DEFAULT_HEIGHT = 400
DEFAULT_FONT_SIZE = 48

GRADIENT_START = "#3b82f6"
GRADIENT_END = "#9333ea"
TEXT_FILL = "#ffffff"

WIDTH_RATIO = 0.85
HEIGHT_RATIO = 0.8
LINE_HEIGHT = 1.2

_FONT_CANDIDATES = (
    "DejaVuSans-Bold.ttf",
    "LiberationSans-Bold.ttf",
    "Arial Bold.ttf",
    "arialbd.ttf",
    "Helvetica-Bold.ttf",
)

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont
Measure = Callable[[str], float]


class ImageRequest(BaseModel):
    """Parameters for a generated title image."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(default="", description="Text drawn on the image")
    width: int = Field(default=DEFAULT_WIDTH, description="Surface width in pixels")
    height: int = Field(default=DEFAULT_HEIGHT, description="Surface height in pixels")
    background_color: str = Field(default="#1e293b", description="Accepted for compatibility, not drawn")
    text_color: str = Field(default="#ffffff", description="Accepted for compatibility, not drawn")
    font_size: int = Field(default=DEFAULT_FONT_SIZE, gt=0, description="Starting font size in pixels")


@functools.lru_cache(maxsize=64)
def load_font(size: int, font_path: str | None = None) -> Font:
    """Return a bold sans-serif font at ``size``, or Pillow's default font."""
    candidates = (font_path, *_FONT_CANDIDATES) if font_path else _FONT_CANDIDATES
    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    logger.debug("No bold system font found; using Pillow default at %spx", size)
    return ImageFont.load_default(size=size)


def wrap_title(title: str, measure: Measure, max_width: float) -> list[str]:
    """Greedily pack the words of ``title`` into lines no wider than ``max_width``.

    A single word wider than ``max_width`` still gets its own line.
    """
    lines: list[str] = []
    current = ""
    for word in title.split():
        candidate = f"{current} {word}" if current else word
        if not current or measure(candidate) <= max_width:
            current = candidate
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


def fit_title(
    title: str,
    measure_at: Callable[[int], Measure],
    *,
    width: int,
    height: int,
    font_size: int,
    min_font_size: int = 24,
    step: int = 2,
) -> tuple[int, list[str]]:
    """Choose the font size and line breaks for ``title``.

    ``measure_at(size)`` returns a text-width function for that font size.
    """
    max_width = width * WIDTH_RATIO
    max_height = height * HEIGHT_RATIO
    size = font_size
    while True:
        lines = wrap_title(title, measure_at(size), max_width)
        if len(lines) * size * LINE_HEIGHT <= max_height or size <= min_font_size:
            return size, lines
        size = max(size - step, min_font_size)


def diagonal_gradient(width: int, height: int, start: str = GRADIENT_START, end: str = GRADIENT_END) -> Image.Image:
    """Linear gradient from the top-left corner to the bottom-right corner."""
    xs = np.arange(width, dtype=np.float64)
    ys = np.arange(height, dtype=np.float64)
    # Position of each pixel projected onto the (width, height) diagonal.
    t = (xs[None, :] * width + ys[:, None] * height) / float(width * width + height * height)
    t = np.clip(t, 0.0, 1.0)[..., None]
    start_rgb = np.array(ImageColor.getrgb(start)[:3], dtype=np.float64)
    end_rgb = np.array(ImageColor.getrgb(end)[:3], dtype=np.float64)
    pixels = (1.0 - t) * start_rgb + t * end_rgb
    return Image.fromarray(np.round(pixels).astype(np.uint8))


def _create_surface(width: int, height: int) -> Image.Image:
    if width <= 0 or height <= 0:
        msg = f"Cannot create a {width}x{height} drawing surface"
        raise SurfaceUnavailableError(msg)
    try:
        return diagonal_gradient(width, height)
    except (ValueError, MemoryError, OSError) as exc:
        msg = f"Cannot create a {width}x{height} drawing surface: {exc}"
        raise SurfaceUnavailableError(msg) from exc


def encode_data_uri(image: Image.Image) -> str:
    """Encode ``image`` as a ``data:image/png;base64,...`` URI."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG", optimize=True)
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def render_title_image(request: ImageRequest, settings: ImageSettings | None = None) -> Image.Image:
    """Draw ``request`` onto a new surface and return the Pillow image."""
    settings = settings or ImageSettings()
    surface = _create_surface(request.width, request.height)
    draw = ImageDraw.Draw(surface)

    def measure_at(size: int) -> Measure:
        font = load_font(size, settings.font_path)
        return lambda text: draw.textlength(text, font=font)

    size, lines = fit_title(
        request.title,
        measure_at,
        width=request.width,
        height=request.height,
        font_size=request.font_size,
        min_font_size=settings.min_font_size,
        step=settings.font_step,
    )
    font = load_font(size, settings.font_path)

    line_height = size * LINE_HEIGHT
    start_y = (request.height - len(lines) * line_height) / 2 + line_height / 2
    for index, line in enumerate(lines):
        center_y = start_y + index * line_height
        left, top, right, bottom = draw.textbbox((0, 0), line, font=font)
        x = (request.width - (right - left)) / 2 - left
        y = center_y - (bottom - top) / 2 - top
        draw.text((x, y), line, font=font, fill=TEXT_FILL)

    logger.debug("Drew title image %sx%s at %spx (%d lines)", request.width, request.height, size, len(lines))
    return surface


def generate_title_image(
    request: ImageRequest | None = None,
    *,
    settings: ImageSettings | None = None,
    **fields: Any,
) -> str:
    """Generate a title image and return it as a PNG data URI.

    Either pass an :class:`ImageRequest` or its fields as keyword arguments;
    keyword arguments override fields of a given request. Unset dimensions
    come from ``settings``.

    Raises:
        SurfaceUnavailableError: If no drawing surface can be created.

    """
    settings = settings or ImageSettings()
    if request is None:
        defaults = {"width": settings.width, "height": settings.height, "font_size": settings.font_size}
        request = ImageRequest(**{**defaults, **fields})
    elif fields:
        request = ImageRequest(**{**request.model_dump(), **fields})

    image = render_title_image(request, settings)
    return encode_data_uri(image)


__all__ = [
    "ImageRequest",
    "diagonal_gradient",
    "encode_data_uri",
    "fit_title",
    "generate_title_image",
    "load_font",
    "render_title_image",
    "wrap_title",
]
