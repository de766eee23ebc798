"""
Verse and chapter lookup with bounds checking, plus the {...} annotation
extraction used when displaying verse text.
"""

from __future__ import annotations

import re

from .errors import InvalidReferenceError, NotFoundError
from .model import AnnotatedVerse, Book, ChapterText, VerseText
from .util import debug

_ANNOTATION_RE = re.compile(r"\{([^}]*)\}")
_SPACE_RUN_RE = re.compile(r"\s{2,}")


def _find_book(store, book_key: str) -> Book:
    book = store.get_book_by_key(book_key)
    if book is None:
        raise NotFoundError(f"Book not found: {book_key!r}")
    return book


def get_verse(store, book_key: str, chapter: int, verse: int) -> VerseText:
    """
    Fetch one verse.

    Raises
    ------
    InvalidReferenceError
        chapter or verse < 1.
    NotFoundError
        Unknown book, or chapter/verse beyond the book's length.
    """
    if chapter < 1 or verse < 1:
        raise InvalidReferenceError(f"Invalid chapter or verse number: {chapter}:{verse}")

    book = _find_book(store, book_key)
    if chapter > book.chapter_count:
        raise NotFoundError(f"Chapter not found: {book.key} {chapter}")
    verses = book.chapters[chapter - 1]
    if verse > len(verses):
        raise NotFoundError(f"Verse not found: {book.key} {chapter}:{verse}")

    return VerseText(verse=verse, text=verses[verse - 1])


def get_chapter(store, book_key: str, chapter: int) -> ChapterText:
    """
    Fetch a whole chapter, verses numbered 1..N in order.

    Raises
    ------
    InvalidReferenceError
        chapter < 1.
    NotFoundError
        Unknown book, or chapter beyond the book's length.
    """
    if chapter < 1:
        raise InvalidReferenceError(f"Invalid chapter number: {chapter}")

    book = _find_book(store, book_key)
    if chapter > book.chapter_count:
        raise NotFoundError(f"Chapter not found: {book.key} {chapter}")

    texts = book.chapters[chapter - 1]
    debug(f"Chapter {book.key} {chapter} has {len(texts)} verse(s).")
    return ChapterText(
        book_key=book.key,
        chapter=chapter,
        verses=[VerseText(verse=i, text=t) for i, t in enumerate(texts, start=1)],
    )


def extract_annotations(text: str) -> AnnotatedVerse:
    """
    Split editorial comments out of a verse.

    "In the {note: symbolic} beginning" -> text "In the beginning",
    comment "note: symbolic". Several spans are joined with single spaces
    in the order they appear. Text without braces is returned as-is with
    comment None.
    """
    comments = _ANNOTATION_RE.findall(text)
    if not comments:
        return AnnotatedVerse(text=text, comment=None)

    stripped = _ANNOTATION_RE.sub("", text)
    stripped = _SPACE_RUN_RE.sub(" ", stripped).strip()
    comment = " ".join(c.strip() for c in comments if c.strip())
    return AnnotatedVerse(text=stripped, comment=comment or None)
