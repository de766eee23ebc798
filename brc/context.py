"""
Chapter windows for the Bible Reader Core.

A reader scrolling through a book wants the chapters around the one on
screen already loaded. This module fetches such a window concurrently and
merges it into what the reader already holds.

Public API:

- load_chapter_window(service, book, center, before=2, after=2) -> List[ChapterText]
- merge_chapters(existing, incoming) -> List[ChapterText]
- search_loaded_chapters(chapters, text) -> List[Location]
"""

from __future__ import annotations

import asyncio
from typing import Iterable, List

from . import config
from .errors import InvalidReferenceError, NotFoundError
from .model import ChapterText, Location
from .util import info, debug


def merge_chapters(existing: Iterable[ChapterText], incoming: Iterable[ChapterText]) -> List[ChapterText]:
    """
    Combine two chapter lists.

    - The first occurrence of a chapter number wins (existing before incoming).
    - Chapter numbers <= 0 are dropped.
    - The result is sorted by chapter number.
    """
    seen = set()
    merged: List[ChapterText] = []
    for chapter in [*existing, *incoming]:
        if chapter.chapter <= 0 or chapter.chapter in seen:
            continue
        seen.add(chapter.chapter)
        merged.append(chapter)
    merged.sort(key=lambda c: c.chapter)
    return merged


async def load_chapter_window(
    service,
    book: str,
    center: int,
    before: int = config.WINDOW_BEFORE,
    after: int = config.WINDOW_AFTER,
) -> List[ChapterText]:
    """
    Fetch chapters center-before .. center+after of a book concurrently.

    Chapters outside the book (non-positive, or past the last chapter) are
    left out rather than reported; an unknown book yields an empty list.

    Example:
        await load_chapter_window(service, "Genesis", 1)   # chapters 1..3
    """
    info(
        f"=== CHAPTER WINDOW === book={book!r}, center={center}, "
        f"before={before}, after={after}"
    )
    numbers = list(range(center - before, center + after + 1))
    outcomes = await asyncio.gather(
        *(service.get_chapter(book, n) for n in numbers),
        return_exceptions=True,
    )

    loaded: List[ChapterText] = []
    for number, outcome in zip(numbers, outcomes):
        if isinstance(outcome, (InvalidReferenceError, NotFoundError)):
            debug(f"Skipping chapter {number}: {outcome}")
            continue
        if isinstance(outcome, BaseException):
            raise outcome
        loaded.append(outcome)

    window = merge_chapters([], loaded)
    info(f"Chapter window loaded {len(window)} chapter(s).")
    return window


def search_loaded_chapters(chapters: Iterable[ChapterText], text: str) -> List[Location]:
    """
    Find verses in the chapters a reader already holds.

    A plain case-insensitive substring match, so phrases work. Queries
    shorter than MIN_PHRASE_LENGTH characters return [].
    """
    if len(text) < config.MIN_PHRASE_LENGTH:
        return []

    needle = text.lower()
    return [
        Location(chapter.book_key, chapter.chapter, v.verse, v.text)
        for chapter in chapters
        for v in chapter.verses
        if needle in v.text.lower()
    ]
