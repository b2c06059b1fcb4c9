"""Styling profiles for the markdown-lite renderer.

Both profiles share one set of transformation rules. A profile only decides
how the produced elements are decorated and how the Copy control of a code
block is wired:

- ``basic``: plain tags as shown on the article page, inline image style and
  a self-contained ``onclick`` copy script.
- ``enhanced``: class-decorated tags as shown in the admin preview, ordered
  lists rendered as ``<ol>`` without the literal number, and a Copy control
  wired by a shared script registered once per page.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from postcraft.exceptions import UnknownProfileError

CopyMode = Literal["inline", "delegated"]

_COPY_ICON = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="12" height="12" viewBox="0 0 24 24" '
    'fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" '
    'stroke-linejoin="round"><rect x="9" y="9" width="13" height="13" rx="2" ry="2"></rect>'
    '<path d="M5 15H4a2 2 0 0 1-2-2V4a2 2 0 0 1 2-2h9a2 2 0 0 1 2 2v1"></path></svg>'
)

_INLINE_COPY_SCRIPT = (
    "(() => {{"
    "navigator.clipboard.writeText(document.getElementById('{block_id}').textContent);"
    "const toast = document.createElement('div');"
    "toast.className = 'fixed bottom-4 right-4 bg-slate-800 text-white px-4 py-2 rounded "
    "shadow-lg z-50 animate-fade-in-up';"
    "toast.textContent = 'Code copied!';"
    "document.body.appendChild(toast);"
    "setTimeout(() => toast.remove(), 2000);"
    "}})()"
)

_BASIC_CODE_BLOCK = (
    '<div class="code-block relative rounded-lg overflow-hidden my-6">'
    '<div class="flex justify-between items-center px-4 py-2 bg-slate-800 dark:bg-slate-700 text-white">'
    '<span class="text-sm font-mono">{lang}</span>'
    '<button type="button" onclick="' + _INLINE_COPY_SCRIPT + '" '
    'class="bg-slate-700 hover:bg-slate-600 dark:bg-slate-600 dark:hover:bg-slate-500 text-white '
    'text-xs px-2 py-1 rounded flex items-center gap-1 transition-colors duration-200">'
    + _COPY_ICON
    + "Copy</button></div>"
    '<pre class="m-0 p-4 bg-slate-100 dark:bg-slate-800 overflow-x-auto text-sm">'
    '<code id="{block_id}" class="font-mono text-slate-800 dark:text-slate-200">{code}</code>'
    "</pre></div>"
)

_ENHANCED_CODE_BLOCK = (
    '<div class="code-block relative bg-slate-900 rounded-lg my-6 overflow-hidden shadow-lg '
    'border border-slate-700">'
    '<div class="flex items-center justify-between bg-slate-800 px-4 py-3 border-b border-slate-700">'
    '<span class="text-slate-300 text-sm font-medium">{lang}</span>'
    '<button type="button" data-copy-target="{block_id}" class="flex items-center gap-2 '
    'bg-slate-700 hover:bg-slate-600 text-slate-200 px-3 py-1.5 rounded text-xs font-medium '
    'transition-colors">'
    + _COPY_ICON
    + "Copy</button></div>"
    '<div class="p-4 overflow-x-auto"><pre class="text-sm">'
    '<code id="{block_id}" class="text-slate-100 leading-relaxed">{code}</code>'
    "</pre></div></div>"
)


def class_attr(classes: str) -> str:
    """Return ``' class="..."'`` or an empty string when no classes are set."""
    return f' class="{classes}"' if classes else ""


@dataclass(frozen=True)
class StylingProfile:
    """Visual decoration for one renderer call site."""

    name: str
    h1_class: str = ""
    h2_class: str = ""
    h3_class: str = ""
    strong_class: str = ""
    em_class: str = ""
    link_class: str = ""
    image_class: str = ""
    image_style: str = ""
    inline_code_class: str = ""
    list_item_class: str = ""
    unordered_list_class: str = ""
    ordered_list_class: str = ""
    blockquote_class: str = ""
    keep_ordered_marker: bool = True
    code_block_template: str = _BASIC_CODE_BLOCK
    copy_mode: CopyMode = "inline"

    def code_block(self, *, lang: str, block_id: str, code: str) -> str:
        return self.code_block_template.format(lang=lang, block_id=block_id, code=code)


BASIC = StylingProfile(
    name="basic",
    image_style="max-width: 100%; height: auto; border-radius: 8px; margin: 16px 0;",
    inline_code_class=(
        "bg-slate-100 dark:bg-slate-800 px-1.5 py-0.5 rounded text-slate-800 "
        "dark:text-slate-200 font-mono text-sm"
    ),
    unordered_list_class="list-disc pl-5 my-4",
    ordered_list_class="list-disc pl-5 my-4",
    blockquote_class="border-l-4 border-blue-500 pl-4 py-2 my-4 italic text-slate-600 dark:text-slate-400",
    keep_ordered_marker=True,
    code_block_template=_BASIC_CODE_BLOCK,
    copy_mode="inline",
)

ENHANCED = StylingProfile(
    name="enhanced",
    h1_class="text-3xl font-bold mb-8 mt-10",
    h2_class="text-2xl font-bold mb-6 mt-8",
    h3_class="text-xl font-semibold mb-4 mt-6",
    strong_class="font-bold",
    em_class="italic",
    link_class="text-blue-600 hover:text-blue-800 underline",
    image_class="max-w-full h-auto rounded-lg my-6 shadow-lg",
    inline_code_class=(
        "bg-slate-100 dark:bg-slate-800 text-slate-800 dark:text-slate-200 px-2 py-1 "
        "rounded text-sm font-mono border"
    ),
    list_item_class="mb-2",
    unordered_list_class="list-disc pl-6 mb-4",
    ordered_list_class="list-decimal pl-6 mb-4",
    blockquote_class=(
        "border-l-4 border-blue-500 pl-6 py-2 my-4 italic text-slate-600 dark:text-slate-400 "
        "bg-slate-50 dark:bg-slate-800 rounded-r"
    ),
    keep_ordered_marker=False,
    code_block_template=_ENHANCED_CODE_BLOCK,
    copy_mode="delegated",
)

PROFILES: dict[str, StylingProfile] = {profile.name: profile for profile in (BASIC, ENHANCED)}


def get_profile(name: str) -> StylingProfile:
    """Look up a registered profile by name."""
    try:
        return PROFILES[name]
    except KeyError:
        raise UnknownProfileError(name, sorted(PROFILES)) from None


__all__ = ["BASIC", "ENHANCED", "PROFILES", "StylingProfile", "class_attr", "get_profile"]
