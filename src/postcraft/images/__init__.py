"""Title image generation and post image resolution."""

from postcraft.images.resolver import BlogImage, fallback_image, get_image_for_blog
from postcraft.images.title_image import ImageRequest, generate_title_image

__all__ = [
    "BlogImage",
    "ImageRequest",
    "fallback_image",
    "generate_title_image",
    "get_image_for_blog",
]
