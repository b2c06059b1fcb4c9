"""Decide which image a post displays.

Precedence:

1. the post's ``featured_image`` when set,
2. a generated title image,
3. a positional pick from the caller's fallback list.

:class:`BlogImage` carries the same decision into the display layer, where a
broken image URL is swapped for the fallback exactly once.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from postcraft.exceptions import EmptyFallbackError
from postcraft.images.title_image import generate_title_image

logger = logging.getLogger(__name__)

# Colour intent passed along with generated post images.
POST_BACKGROUND_COLOR = "#0f172a"
POST_TEXT_COLOR = "#f1f5f9"

TitleImageGenerator = Callable[..., str]


def _field(post: Any, name: str) -> Any:
    if isinstance(post, Mapping):
        return post.get(name)
    return getattr(post, name, None)


def fallback_image(fallback_images: Sequence[str], index: int = 0) -> str:
    """Return ``fallback_images[index % len(fallback_images)]``."""
    if not fallback_images:
        raise EmptyFallbackError
    return fallback_images[index % len(fallback_images)]


def get_image_for_blog(
    post: Any,
    fallback_images: Sequence[str],
    index: int = 0,
    *,
    generator: TitleImageGenerator | None = None,
) -> str:
    """Return the image URL (or data URI) to show for ``post``.

    ``post`` is a :class:`~postcraft.posts.PostRecord` or any mapping/object
    exposing ``title`` and an optional ``featured_image``.
    """
    featured = _field(post, "featured_image")
    if featured:
        return featured

    generate = generator or generate_title_image
    title = _field(post, "title") or ""
    try:
        return generate(
            title=title,
            background_color=POST_BACKGROUND_COLOR,
            text_color=POST_TEXT_COLOR,
        )
    except Exception as e:
        logger.warning("Error generating image for post %r: %s", title, e)
        return fallback_image(fallback_images, index)


@dataclass
class BlogImage:
    """Display state for a post image.

    ``src`` starts as the resolved image. When the display reports a load
    failure, :meth:`handle_load_error` switches to the positional fallback;
    the original source is never retried.
    """

    post: Any
    fallback_images: Sequence[str]
    index: int = 0
    alt: str = ""
    generator: TitleImageGenerator | None = None
    src: str = field(init=False)
    errored: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        try:
            self.src = get_image_for_blog(self.post, self.fallback_images, self.index, generator=self.generator)
        except EmptyFallbackError:
            raise
        except Exception:
            logger.exception("Error getting image for post")
            self.src = fallback_image(self.fallback_images, self.index)
            self.errored = True

    def handle_load_error(self) -> str:
        """Record an image load failure and return the source to show next."""
        if not self.errored:
            logger.info("Image %s failed to load; using fallback", self.src[:80])
            self.errored = True
            self.src = fallback_image(self.fallback_images, self.index)
        return self.src


__all__ = ["BlogImage", "fallback_image", "get_image_for_blog"]
