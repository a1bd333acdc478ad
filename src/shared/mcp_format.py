"""Shared formatting utilities for tool results."""

from collections.abc import Sequence
from typing import Protocol

NO_RESULTS_MESSAGE = "No bookmarks found matching your search."
NO_TAGS_PLACEHOLDER = "No tags"


class BookmarkLike(Protocol):
    """Fields needed to render a bookmark in search results."""

    title: str
    link: str
    tags: list[str]


def format_tags(tags: Sequence[str]) -> str:
    """Join tags with commas, or return the placeholder when there are none."""
    return ", ".join(tags) if tags else NO_TAGS_PLACEHOLDER


def format_search_results(bookmarks: Sequence[BookmarkLike], total: int | None = None) -> str:
    """
    Render bookmarks as a human-readable summary.

    ``total`` is the number of items the API returned and defaults to
    ``len(bookmarks)``. It can be larger when some items could not be rendered.

    Example for one bookmark:
        Found 1 bookmarks:
        Title: Example
        URL: https://example.com
        Tags: docs, python
        ---
    """
    if total is None:
        total = len(bookmarks)
    if not total:
        return NO_RESULTS_MESSAGE
    blocks = [
        f"\nTitle: {b.title}\nURL: {b.link}\nTags: {format_tags(b.tags)}\n---"
        for b in bookmarks
    ]
    return f"Found {total} bookmarks:" + "".join(blocks)
