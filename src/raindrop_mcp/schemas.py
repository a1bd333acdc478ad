"""Pydantic schemas for tool arguments and Raindrop API items."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CreateBookmarkArgs(BaseModel):
    """Arguments of the create-bookmark tool."""

    model_config = ConfigDict(extra="ignore")

    url: str = ""
    title: str | None = None
    tags: list[str] | None = None
    # 0 or absent means the Unsorted collection
    collection: int | None = None

    def to_payload(self) -> dict[str, Any]:
        """Build the ``POST /raindrop`` body, always naming a collection."""
        return {
            "link": self.url.strip(),
            "title": self.title or "",
            "tags": self.tags or [],
            "collection": {"$id": self.collection or 0},
        }


class SearchBookmarksArgs(BaseModel):
    """Arguments of the search-bookmarks tool."""

    model_config = ConfigDict(extra="ignore")

    query: str = ""
    tags: list[str] | None = None

    def to_params(self) -> dict[str, str]:
        """Build the query parameters for ``GET /raindrops/0``."""
        params = {"search": self.query}
        if self.tags:
            params["tags"] = ",".join(self.tags)
        return params


class Bookmark(BaseModel):
    """
    A bookmark item as returned by the Raindrop API.

    Decoding never fails on a single field: a missing or wrongly typed value
    falls back to its default.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = ""
    link: str = ""
    tags: list[str] = Field(default_factory=list)

    @field_validator("title", "link", mode="before")
    @classmethod
    def string_or_empty(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("tags", mode="before")
    @classmethod
    def string_items_only(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [tag for tag in value if isinstance(tag, str)]


def parse_bookmarks(items: list[Any]) -> list[Bookmark]:
    """Decode the items that are objects; anything else is skipped."""
    return [Bookmark.model_validate(item) for item in items if isinstance(item, dict)]
