from __future__ import annotations

from unittest.mock import Mock

import pytest

from postcraft.exceptions import EmptyFallbackError
from postcraft.images.resolver import BlogImage, fallback_image, get_image_for_blog
from postcraft.posts import PostRecord


def test_featured_image_wins_without_generation(fallback_images: list[str]) -> None:
    generator = Mock()

    result = get_image_for_blog(
        {"title": "T", "featured_image": "http://x/y.png"}, fallback_images, 0, generator=generator
    )

    assert result == "http://x/y.png"
    generator.assert_not_called()


def test_generated_image_used_without_featured_image(fallback_images: list[str]) -> None:
    generator = Mock(return_value="data:image/png;base64,AAA")

    result = get_image_for_blog(PostRecord(title="Hello"), fallback_images, generator=generator)

    assert result == "data:image/png;base64,AAA"
    generator.assert_called_once_with(title="Hello", background_color="#0f172a", text_color="#f1f5f9")


def test_empty_featured_image_is_ignored(fallback_images: list[str]) -> None:
    generator = Mock(return_value="generated")

    assert get_image_for_blog({"title": "T", "featured_image": ""}, fallback_images, generator=generator) == (
        "generated"
    )


def test_generation_failure_falls_back_by_index(fallback_images: list[str], failing_generator) -> None:
    assert get_image_for_blog({"title": "T"}, fallback_images, 4, generator=failing_generator) == "b"


def test_generation_failure_with_no_fallbacks_raises(failing_generator) -> None:
    with pytest.raises(EmptyFallbackError):
        get_image_for_blog({"title": "T"}, [], 0, generator=failing_generator)


def test_default_generator_produces_data_uri(fallback_images: list[str]) -> None:
    assert get_image_for_blog({"title": "T"}, fallback_images).startswith("data:image/png;base64,")


@pytest.mark.parametrize(("index", "expected"), [(0, "a"), (2, "c"), (3, "a"), (7, "b"), (-1, "c")])
def test_fallback_image_wraps(fallback_images: list[str], index: int, expected: str) -> None:
    assert fallback_image(fallback_images, index) == expected


class TestBlogImage:
    def test_starts_with_resolved_source(self, fallback_images: list[str]) -> None:
        image = BlogImage({"title": "T", "featured_image": "http://x/y.png"}, fallback_images, index=1)

        assert image.src == "http://x/y.png"
        assert image.errored is False

    def test_load_error_switches_to_fallback_once(self, fallback_images: list[str]) -> None:
        image = BlogImage({"title": "T", "featured_image": "http://broken"}, fallback_images, index=1)

        assert image.handle_load_error() == "b"
        assert image.errored is True
        assert image.handle_load_error() == "b"
        assert image.src == "b"

    def test_generation_failure_is_already_resolved(self, fallback_images: list[str], failing_generator) -> None:
        image = BlogImage({"title": "T"}, fallback_images, index=5, generator=failing_generator)

        assert image.src == "c"
