"""Markdown-lite to HTML rendering for post previews and article bodies.

This is deliberately not a Markdown parser. The renderer applies a fixed
sequence of regex substitutions, each operating on the output of the
previous one:

1. headers (``###``, ``##``, ``#``)
2. bold, then italic
3. links
4. images
5. fenced code blocks
6. inline code
7. list items
8. blockquotes
9. newlines to ``<br />``
10. wrapping of consecutive ``<li>`` runs in a list element

Raw HTML in the source passes through unescaped; author input is trusted.
"""

from __future__ import annotations

import itertools
import logging
import random
import re
import secrets
import string
from collections.abc import Callable, Iterator

from postcraft.rendering.assets import (
    COPY_BUTTON_JS,
    COPY_BUTTON_SCRIPT_NAME,
    COPY_TOAST_CSS,
    COPY_TOAST_STYLE_NAME,
    StyleRegistry,
)
from postcraft.rendering.profiles import BASIC, StylingProfile, class_attr

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_LENGTH = 7
_DEFAULT_LANGUAGE = "code"

_H3 = re.compile(r"^### (.*)$", re.MULTILINE)
_H2 = re.compile(r"^## (.*)$", re.MULTILINE)
_H1 = re.compile(r"^# (.*)$", re.MULTILINE)
_BOLD = re.compile(r"\*\*(.+?)\*\*")
# An opening asterisk followed by a space is a list bullet, not emphasis.
_ITALIC = re.compile(r"\*(?!\s)(.+?)\*")
_LINK = re.compile(r"(?<!!)\[([^\]]+)\]\(([^)]+)\)")
_IMAGE = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")
_FENCED_CODE = re.compile(r"```(\w+)?\n(.*?)```", re.DOTALL)
_INLINE_CODE = re.compile(r"`([^`]+)`")
_UNORDERED_ITEM = re.compile(r"^\* (.+)$", re.MULTILINE)
_ORDERED_ITEM = re.compile(r"^(\d+)\. (.+)$", re.MULTILINE)
_BLOCKQUOTE = re.compile(r"^> (.+)$", re.MULTILINE)
_NEWLINE = re.compile(r"\r?\n")
_LIST_RUN = re.compile(r"<li\b[^>]*>.*?</li>(?:(?:<br />)?<li\b[^>]*>.*?</li>)*")
_LIST_ITEM = re.compile(r"<li\b([^>]*)>.*?</li>")

# Rendered code blocks are parked behind per-render markers so that later
# passes leave their bodies untouched.
_PLACEHOLDER_PREFIX = "\x00CODEBLOCK-{nonce}-"


def random_block_id() -> str:
    """Return a fresh ``code-xxxxxxx`` identifier."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=_ID_LENGTH))
    return f"code-{suffix}"


def sequential_ids(prefix: str = "code") -> IdFactory:
    """Return an id factory yielding ``prefix-1``, ``prefix-2``, ..."""
    counter: Iterator[int] = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


class MarkdownRenderer:
    """Render markdown-lite source text to an HTML fragment.

    Args:
        profile: Styling profile deciding element decoration.
        id_factory: Callable producing code-block ids. Defaults to
            :func:`random_block_id`, so repeated renders of code blocks differ.
        styles: Optional page-level registry; code blocks make sure the
            assets they depend on are registered there.

    """

    def __init__(
        self,
        profile: StylingProfile = BASIC,
        *,
        id_factory: IdFactory | None = None,
        styles: StyleRegistry | None = None,
    ) -> None:
        self.profile = profile
        self.id_factory = id_factory or random_block_id
        self.styles = styles

    def render(self, source: str) -> str:
        profile = self.profile
        blocks: list[str] = []
        marker = _PLACEHOLDER_PREFIX.format(nonce=secrets.token_hex(8))

        html = source.replace("\r\n", "\n")
        html = _H3.sub(lambda m: self._tag("h3", profile.h3_class, m.group(1)), html)
        html = _H2.sub(lambda m: self._tag("h2", profile.h2_class, m.group(1)), html)
        html = _H1.sub(lambda m: self._tag("h1", profile.h1_class, m.group(1)), html)

        html = _BOLD.sub(lambda m: self._tag("strong", profile.strong_class, m.group(1)), html)
        html = _ITALIC.sub(lambda m: self._tag("em", profile.em_class, m.group(1)), html)

        html = _LINK.sub(self._link, html)
        html = _IMAGE.sub(self._image, html)

        html = _FENCED_CODE.sub(lambda m: self._park_code_block(m, blocks, marker), html)
        html = _INLINE_CODE.sub(lambda m: self._tag("code", profile.inline_code_class, m.group(1)), html)

        html = _UNORDERED_ITEM.sub(lambda m: self._list_item(m.group(1)), html)
        html = _ORDERED_ITEM.sub(self._ordered_item, html)

        html = _BLOCKQUOTE.sub(lambda m: self._tag("blockquote", profile.blockquote_class, m.group(1)), html)

        html = _NEWLINE.sub("<br />", html)
        html = _LIST_RUN.sub(self._wrap_list_run, html)

        if blocks:
            parked = re.compile(re.escape(marker) + r"(\d+)\x00")
            html = parked.sub(lambda m: blocks[int(m.group(1))], html)
            self._ensure_assets()

        logger.debug("Rendered %d chars with %s profile, %d code blocks", len(source), profile.name, len(blocks))
        return html

    @staticmethod
    def _tag(name: str, classes: str, content: str) -> str:
        return f"<{name}{class_attr(classes)}>{content}</{name}>"

    def _link(self, match: re.Match[str]) -> str:
        label, url = match.groups()
        return (
            f'<a href="{url}" target="_blank" rel="noopener noreferrer"'
            f"{class_attr(self.profile.link_class)}>{label}</a>"
        )

    def _image(self, match: re.Match[str]) -> str:
        alt, url = match.groups()
        style = f' style="{self.profile.image_style}"' if self.profile.image_style else ""
        return f'<img src="{url}" alt="{alt}"{class_attr(self.profile.image_class)}{style} />'

    def _park_code_block(self, match: re.Match[str], blocks: list[str], marker: str) -> str:
        lang, code = match.groups()
        blocks.append(
            self.profile.code_block(
                lang=lang or _DEFAULT_LANGUAGE,
                block_id=self.id_factory(),
                code=code.strip(),
            )
        )
        return f"{marker}{len(blocks) - 1}\x00"

    def _list_item(self, content: str, value: str | None = None) -> str:
        attrs = class_attr(self.profile.list_item_class)
        if value is not None:
            attrs += f' value="{value}"'
        return f"<li{attrs}>{content}</li>"

    def _ordered_item(self, match: re.Match[str]) -> str:
        number, content = match.groups()
        if self.profile.keep_ordered_marker:
            return self._list_item(f"{number}. {content}")
        return self._list_item(content, value=number)

    def _wrap_list_run(self, match: re.Match[str]) -> str:
        items = _LIST_ITEM.finditer(match.group(0))
        parts = []
        for ordered, group in itertools.groupby(items, key=lambda item: ' value="' in item.group(1)):
            if ordered:
                tag, classes = "ol", self.profile.ordered_list_class
            else:
                tag, classes = "ul", self.profile.unordered_list_class
            body = "".join(item.group(0) for item in group)
            parts.append(f"<{tag}{class_attr(classes)}>{body}</{tag}>")
        return "".join(parts)

    def _ensure_assets(self) -> None:
        if self.styles is None:
            return
        self.styles.ensure(COPY_TOAST_STYLE_NAME, COPY_TOAST_CSS)
        if self.profile.copy_mode == "delegated":
            self.styles.ensure_script(COPY_BUTTON_SCRIPT_NAME, COPY_BUTTON_JS)


def render(
    source: str,
    profile: StylingProfile = BASIC,
    *,
    id_factory: IdFactory | None = None,
    styles: StyleRegistry | None = None,
) -> str:
    """Render ``source`` with a one-off :class:`MarkdownRenderer`."""
    return MarkdownRenderer(profile, id_factory=id_factory, styles=styles).render(source)


__all__ = ["IdFactory", "MarkdownRenderer", "random_block_id", "render", "sequential_ids"]
