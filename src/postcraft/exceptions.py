"""Centralized exceptions for postcraft."""


class PostcraftError(Exception):
    """Base exception for all postcraft errors."""


class ConfigurationError(PostcraftError):
    """Raised when settings cannot be loaded or fail validation."""


class RenderingError(PostcraftError):
    """Base exception for rendering-related errors.

    ``render`` itself never raises: malformed markup degrades into literal
    punctuation. Only configuration lookups around it use this family.
    """


class UnknownProfileError(RenderingError):
    """Raised when a styling profile name is not registered."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        choices = ", ".join(available)
        super().__init__(f"Unknown styling profile '{name}' (available: {choices})")


class TitleImageError(PostcraftError):
    """Base exception for errors during title image generation."""


class SurfaceUnavailableError(TitleImageError):
    """Raised when no raster surface can be created for drawing."""


class ImageResolutionError(PostcraftError):
    """Base exception for blog image resolution errors."""


class EmptyFallbackError(ImageResolutionError):
    """Raised when a positional fallback is requested from an empty list."""

    def __init__(self) -> None:
        super().__init__("Fallback image list must not be empty")


class SlugifyError(PostcraftError):
    """Base exception for slugify-related errors."""


class InvalidInputError(SlugifyError):
    """Raised when the input to a function is invalid."""
