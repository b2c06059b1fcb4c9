"""postcraft: markdown-lite rendering and title images for a small blog."""

from postcraft.images import BlogImage, ImageRequest, generate_title_image, get_image_for_blog
from postcraft.rendering import BASIC, ENHANCED, MarkdownRenderer, StyleRegistry, render

__version__ = "0.1.0"

__all__ = [
    "BASIC",
    "ENHANCED",
    "BlogImage",
    "ImageRequest",
    "MarkdownRenderer",
    "StyleRegistry",
    "generate_title_image",
    "get_image_for_blog",
    "render",
]
