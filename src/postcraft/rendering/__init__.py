"""Markdown-lite rendering for article bodies and editor previews."""

from postcraft.rendering.assets import StyleRegistry
from postcraft.rendering.markdown_lite import (
    MarkdownRenderer,
    random_block_id,
    render,
    sequential_ids,
)
from postcraft.rendering.profiles import BASIC, ENHANCED, PROFILES, StylingProfile, get_profile

__all__ = [
    "BASIC",
    "ENHANCED",
    "PROFILES",
    "MarkdownRenderer",
    "StyleRegistry",
    "StylingProfile",
    "get_profile",
    "random_block_id",
    "render",
    "sequential_ids",
]
