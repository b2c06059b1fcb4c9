"""Post and category records as read from the hosted data store."""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field, model_validator

from postcraft.text import category_slug, post_slug

DEFAULT_CATEGORY_COLOR = "#3B82F6"

ReactionKind = Literal["like", "dislike"]


class Category(BaseModel):
    """A post category."""

    model_config = ConfigDict(extra="ignore")

    name: str
    slug: str = ""
    description: str | None = None
    color: str = Field(default=DEFAULT_CATEGORY_COLOR, pattern=r"^#[0-9A-Fa-f]{6}$")
    image_url: str | None = None

    @model_validator(mode="after")
    def fill_slug(self) -> Category:
        if not self.slug:
            self.slug = category_slug(self.name)
        return self


class PostRecord(BaseModel):
    """A blog post row. Only ``title`` and ``featured_image`` drive images."""

    model_config = ConfigDict(extra="ignore")

    title: str
    featured_image: str | None = None
    slug: str = ""
    content: str = ""
    category: Category | None = None
    created_at: datetime | None = None

    @model_validator(mode="after")
    def fill_slug(self) -> PostRecord:
        if not self.slug:
            self.slug = post_slug(self.title)
        return self


class ReactionTally(BaseModel):
    """Like and dislike counts for a post, plus the reader's own reaction.

    Tallies are immutable; :meth:`toggle` returns the next state.
    """

    model_config = ConfigDict(frozen=True)

    likes: int = Field(default=0, ge=0)
    dislikes: int = Field(default=0, ge=0)
    reaction: ReactionKind | None = None

    def toggle(self, kind: ReactionKind) -> ReactionTally:
        """Apply a click on ``kind``.

        Clicking the current reaction withdraws it. Clicking the other one
        moves the reader's vote across. Counts never drop below zero.
        """
        if kind not in ("like", "dislike"):
            msg = f"Unknown reaction '{kind}' (expected 'like' or 'dislike')"
            raise ValueError(msg)

        counts = {"like": self.likes, "dislike": self.dislikes}
        if self.reaction == kind:
            counts[kind] = max(0, counts[kind] - 1)
            reaction = None
        else:
            if self.reaction is not None:
                counts[self.reaction] = max(0, counts[self.reaction] - 1)
            counts[kind] += 1
            reaction = kind

        return ReactionTally(likes=counts["like"], dislikes=counts["dislike"], reaction=reaction)


def share_links(url: str, title: str) -> dict[str, str]:
    """Return share URLs for ``url`` keyed by network name."""
    return {
        "facebook": "https://www.facebook.com/sharer/sharer.php?" + urlencode({"u": url}),
        "twitter": "https://twitter.com/intent/tweet?" + urlencode({"url": url, "text": title}),
        "linkedin": "https://www.linkedin.com/shareArticle?"
        + urlencode({"mini": "true", "url": url, "title": title}),
    }


__all__ = ["Category", "PostRecord", "ReactionKind", "ReactionTally", "share_links"]
