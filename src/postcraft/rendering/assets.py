"""Load-once registry for the styles and scripts rendered HTML relies on."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

AssetKind = Literal["style", "script"]

COPY_TOAST_STYLE_NAME = "copy-toast"
COPY_TOAST_CSS = (
    "@keyframes fade-in-up{from{opacity:0;transform:translateY(8px)}"
    "to{opacity:1;transform:translateY(0)}}"
    ".animate-fade-in-up{animation:fade-in-up .2s ease-out}"
)

COPY_BUTTON_SCRIPT_NAME = "copy-button"
COPY_BUTTON_JS = (
    "if(!window.__postcraftCopy){window.__postcraftCopy=true;"
    "document.addEventListener('click',(event)=>{"
    "const button=event.target.closest('[data-copy-target]');"
    "if(!button)return;"
    "const code=document.getElementById(button.dataset.copyTarget);"
    "if(code)navigator.clipboard.writeText(code.textContent);});}"
)


@dataclass
class StyleRegistry:
    """Ordered, idempotent set of named ``<style>``/``<script>`` assets.

    Pages register what they need with :meth:`ensure` (any number of times)
    and emit :meth:`render` once in their head.
    """

    _entries: dict[str, tuple[AssetKind, str]] = field(default_factory=dict)

    def ensure(self, name: str, content: str, kind: AssetKind = "style") -> bool:
        """Register ``content`` under ``name``; return True if newly added."""
        if name in self._entries:
            return False
        self._entries[name] = (kind, content)
        return True

    def ensure_script(self, name: str, content: str) -> bool:
        return self.ensure(name, content, kind="script")

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def names(self) -> list[str]:
        return list(self._entries)

    def render(self) -> str:
        parts = []
        for name, (kind, content) in self._entries.items():
            parts.append(f'<{kind} data-asset="{name}">{content}</{kind}>')
        return "".join(parts)
