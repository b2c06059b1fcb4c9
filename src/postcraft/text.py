"""Slug helpers for posts and categories."""

import re
from unicodedata import normalize

from pymdownx.slugs import slugify as _md_slugify

from postcraft.exceptions import InvalidInputError

slugify_lower = _md_slugify(case="lower", separator="-")

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_CATEGORY_DISALLOWED = re.compile(r"[^a-z0-9 -]")
_WHITESPACE = re.compile(r"\s+")
_DASH_RUNS = re.compile(r"-+")


def _ascii(text: str) -> str:
    return normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")


def post_slug(title: str, max_len: int = 80) -> str:
    """Derive a post URL slug from ``title``.

    Accents are transliterated and every run of characters outside
    ``[a-z0-9]`` becomes a single ``-`` (``Node.js`` becomes ``node-js``).
    May be empty when the title has no usable characters.
    """
    if title is None:
        msg = "Input text cannot be None"
        raise InvalidInputError(msg)

    slug = slugify_lower(_NON_ALNUM.sub(" ", _ascii(title).lower()), sep="-")
    slug = _NON_ALNUM.sub("-", slug).strip("-")
    if len(slug) > max_len:
        slug = slug[:max_len].rstrip("-")
    return slug


def category_slug(name: str) -> str:
    """Derive a category slug from ``name``.

    Characters outside ``[a-z0-9 -]`` are removed (not replaced), whitespace
    runs become ``-`` and repeated dashes collapse.
    """
    if name is None:
        msg = "Input text cannot be None"
        raise InvalidInputError(msg)

    slug = _CATEGORY_DISALLOWED.sub("", _ascii(name).strip().lower())
    slug = _WHITESPACE.sub("-", slug)
    return _DASH_RUNS.sub("-", slug)
