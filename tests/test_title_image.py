from __future__ import annotations

import base64
import io

import pytest
from PIL import Image

from postcraft.config import ImageSettings
from postcraft.exceptions import SurfaceUnavailableError, TitleImageError
from postcraft.images.title_image import (
    ImageRequest,
    diagonal_gradient,
    fit_title,
    generate_title_image,
    wrap_title,
)

PREFIX = "data:image/png;base64,"


def _decode(data_uri: str) -> Image.Image:
    assert data_uri.startswith(PREFIX)
    return Image.open(io.BytesIO(base64.b64decode(data_uri[len(PREFIX) :])))


def _close(actual: tuple[int, ...], expected: tuple[int, int, int], tolerance: int = 2) -> bool:
    return all(abs(a - e) <= tolerance for a, e in zip(actual[:3], expected, strict=True))


@pytest.mark.parametrize(
    "title",
    [
        "",
        "T",
        "A very very very long title that needs wrapping across several lines",
        "Supercalifragilisticexpialidocious" * 8,
        " ".join(["word"] * 200),
    ],
)
def test_generate_returns_png_data_uri_for_any_title(title: str) -> None:
    image = _decode(generate_title_image(title=title))

    assert image.format == "PNG"
    assert image.size == (900, 400)


def test_request_dimensions_are_honoured() -> None:
    image = _decode(generate_title_image(ImageRequest(title="Hello", width=320, height=200, font_size=30)))

    assert image.size == (320, 200)


def test_keyword_fields_override_request() -> None:
    image = _decode(generate_title_image(ImageRequest(title="Hello"), width=200))

    assert image.size == (200, 400)


def test_settings_supply_default_dimensions() -> None:
    image = _decode(generate_title_image(title="Hello", settings=ImageSettings(width=300, height=150)))

    assert image.size == (300, 150)


def test_background_runs_from_blue_to_purple() -> None:
    image = _decode(generate_title_image(title="Short")).convert("RGB")

    assert _close(image.getpixel((0, 0)), (59, 130, 246))
    assert _close(image.getpixel((899, 399)), (147, 51, 234))


def test_title_is_drawn_in_white() -> None:
    image = _decode(generate_title_image(title="WWWW MMMM", font_size=60)).convert("RGB")

    colors = {color for _, color in image.getcolors(maxcolors=900 * 400)}
    assert (255, 255, 255) in colors


def test_color_parameters_do_not_change_output() -> None:
    plain = generate_title_image(title="Same")
    tinted = generate_title_image(title="Same", background_color="#000000", text_color="#ff0000")

    assert plain == tinted


@pytest.mark.parametrize(("width", "height"), [(0, 400), (900, 0), (-5, 10)])
def test_missing_surface_raises(width: int, height: int) -> None:
    with pytest.raises(SurfaceUnavailableError):
        generate_title_image(title="x", width=width, height=height)


def test_surface_error_is_a_title_image_error() -> None:
    assert issubclass(SurfaceUnavailableError, TitleImageError)


def test_gradient_corners() -> None:
    image = diagonal_gradient(10, 10)

    assert image.getpixel((0, 0)) == (59, 130, 246)
    assert _close(image.getpixel((9, 9)), (147, 51, 234), tolerance=10)


class TestWrapTitle:
    def test_packs_words_greedily(self) -> None:
        assert wrap_title("aa bb cc", len, 5) == ["aa bb", "cc"]

    def test_overlong_word_gets_its_own_line(self) -> None:
        assert wrap_title("abcdefgh ij", len, 3) == ["abcdefgh", "ij"]

    def test_empty_title_has_no_lines(self) -> None:
        assert wrap_title("", len, 10) == []

    def test_collapses_repeated_spaces(self) -> None:
        assert wrap_title("a   b", len, 10) == ["a b"]


def _measure_at(size: int):
    return lambda text: len(text) * size / 2


class TestFitTitle:
    def test_keeps_requested_size_when_block_fits(self) -> None:
        assert fit_title("hi", _measure_at, width=100, height=100, font_size=48) == (48, ["hi"])

    def test_shrinks_in_steps_until_the_block_fits(self) -> None:
        size, lines = fit_title("aaaa bbbb", _measure_at, width=200, height=100, font_size=48)

        assert size == 36
        assert lines == ["aaaa bbbb"]

    def test_stops_at_the_floor_and_accepts_overflow(self) -> None:
        size, lines = fit_title("aaaa bbbb cccc dddd", _measure_at, width=100, height=100, font_size=48)

        assert size == 24
        assert lines == ["aaaa", "bbbb", "cccc", "dddd"]

    def test_starting_below_the_floor_does_not_loop(self) -> None:
        size, _ = fit_title("aaaa bbbb cccc dddd", _measure_at, width=100, height=100, font_size=20)

        assert size == 20
