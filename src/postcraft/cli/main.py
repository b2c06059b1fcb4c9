"""Main Typer application for postcraft."""

from __future__ import annotations

import base64
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from postcraft.config import PostcraftSettings, load_settings
from postcraft.exceptions import PostcraftError
from postcraft.images.resolver import get_image_for_blog
from postcraft.images.title_image import generate_title_image
from postcraft.logging_setup import configure_logging
from postcraft.posts import PostRecord
from postcraft.rendering import MarkdownRenderer, StyleRegistry, get_profile
from postcraft.text import category_slug, post_slug

logger = logging.getLogger(__name__)

console = Console(stderr=True)

app = typer.Typer(
    name="postcraft",
    help="Render markdown-lite posts and generate title images",
    add_completion=False,
)

_DATA_URI_PREFIX = "data:image/png;base64,"


def _settings(ctx: typer.Context) -> PostcraftSettings:
    return ctx.obj if isinstance(ctx.obj, PostcraftSettings) else load_settings()


def _fail(message: str) -> typer.Exit:
    console.print(f"[red]{message}[/red]")
    return typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="TOML settings file (default: ./postcraft.toml)"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """Load settings and configure logging for all subcommands."""
    configure_logging("DEBUG" if verbose else None)
    try:
        ctx.obj = load_settings(config)
    except PostcraftError as e:
        raise _fail(str(e)) from e


@app.command()
def render(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="Text file to render, or '-' for stdin")],
    profile: Annotated[str | None, typer.Option("--profile", "-p", help="Styling profile")] = None,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Write HTML here")] = None,
    with_styles: Annotated[
        bool,
        typer.Option("--with-styles", help="Prefix the styles and scripts the HTML depends on"),
    ] = False,
) -> None:
    """Render markdown-lite text to HTML."""
    settings = _settings(ctx)
    try:
        styling = get_profile(profile or settings.rendering.profile)
    except PostcraftError as e:
        raise _fail(str(e)) from e

    if source == "-":
        text = sys.stdin.read()
    else:
        try:
            text = Path(source).read_text(encoding="utf-8")
        except OSError as e:
            raise _fail(f"Cannot read {source}: {e}") from e

    styles = StyleRegistry()
    html = MarkdownRenderer(styling, styles=styles).render(text)
    if with_styles:
        html = styles.render() + html

    if output is None:
        typer.echo(html)
    else:
        output.write_text(html, encoding="utf-8")
        console.print(f"Wrote {output}")


@app.command("title-image")
def title_image(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Title drawn on the image")],
    width: Annotated[int | None, typer.Option(help="Image width in pixels")] = None,
    height: Annotated[int | None, typer.Option(help="Image height in pixels")] = None,
    font_size: Annotated[int | None, typer.Option(help="Starting font size in pixels")] = None,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Write the PNG here")] = None,
) -> None:
    """Generate a title image and print its data URI (or save the PNG)."""
    settings = _settings(ctx)
    overrides = {
        key: value
        for key, value in {"width": width, "height": height, "font_size": font_size}.items()
        if value is not None
    }
    try:
        data_uri = generate_title_image(title=title, settings=settings.image, **overrides)
    except PostcraftError as e:
        raise _fail(str(e)) from e

    if output is None:
        typer.echo(data_uri)
    else:
        output.write_bytes(base64.b64decode(data_uri.removeprefix(_DATA_URI_PREFIX)))
        console.print(f"Wrote {output}")


@app.command("resolve-image")
def resolve_image(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Post title")],
    featured_image: Annotated[str | None, typer.Option(help="Stored featured image URL")] = None,
    index: Annotated[int, typer.Option(help="Position used to pick a fallback image")] = 0,
) -> None:
    """Print the image a post would display."""
    settings = _settings(ctx)
    post = PostRecord(title=title, featured_image=featured_image)
    typer.echo(get_image_for_blog(post, settings.fallback_images, index))


@app.command()
def slug(
    text: Annotated[str, typer.Argument(help="Post title or category name")],
    category: Annotated[bool, typer.Option("--category", help="Use category slug rules")] = False,
) -> None:
    """Print the slug for a post title or category name."""
    typer.echo(category_slug(text) if category else post_slug(text))


if __name__ == "__main__":
    app()
