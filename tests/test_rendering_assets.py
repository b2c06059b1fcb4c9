from __future__ import annotations

import pytest

from postcraft.exceptions import UnknownProfileError
from postcraft.rendering import BASIC, ENHANCED, MarkdownRenderer, StyleRegistry, get_profile
from postcraft.rendering.assets import COPY_BUTTON_SCRIPT_NAME, COPY_TOAST_STYLE_NAME


def test_ensure_is_idempotent() -> None:
    registry = StyleRegistry()

    assert registry.ensure("fade", ".a{}") is True
    assert registry.ensure("fade", ".b{}") is False
    assert registry.render() == '<style data-asset="fade">.a{}</style>'


def test_registry_renders_in_insertion_order() -> None:
    registry = StyleRegistry()
    registry.ensure("one", "a")
    registry.ensure_script("two", "b")

    assert registry.names() == ["one", "two"]
    assert registry.render() == '<style data-asset="one">a</style><script data-asset="two">b</script>'


def test_code_blocks_register_toast_style_once() -> None:
    registry = StyleRegistry()
    renderer = MarkdownRenderer(BASIC, styles=registry)

    renderer.render("```\na\n```")
    renderer.render("```\nb\n```")

    assert registry.names() == [COPY_TOAST_STYLE_NAME]
    assert registry.render().count("<style") == 1


def test_enhanced_code_blocks_register_copy_script() -> None:
    registry = StyleRegistry()

    MarkdownRenderer(ENHANCED, styles=registry).render("```\na\n```")

    assert COPY_TOAST_STYLE_NAME in registry
    assert COPY_BUTTON_SCRIPT_NAME in registry


def test_text_without_code_registers_nothing() -> None:
    registry = StyleRegistry()

    MarkdownRenderer(ENHANCED, styles=registry).render("# Title")

    assert len(registry) == 0


def test_get_profile() -> None:
    assert get_profile("basic") is BASIC
    assert get_profile("enhanced") is ENHANCED


def test_get_profile_rejects_unknown_names() -> None:
    with pytest.raises(UnknownProfileError, match="fancy"):
        get_profile("fancy")
