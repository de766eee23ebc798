"""
Corpus loading for the Bible Reader Core.

This module:
- Provides the byte sources a corpus can be read from (file, memory,
  bundled asset with a cached working copy).
- Parses the corpus JSON document and validates its shape.

The corpus document is an array of book objects:

    [{"abbrev": "gn", "name": "Genesis", "chapters": [["In the beginning ...", ...], ...]}, ...]
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Union

from .errors import CorpusFormatError
from .model import Book
from .util import info, debug


class FileSource:
    """Read the corpus from a JSON file on disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def read_bytes(self) -> bytes:
        if not self.path.exists():
            raise CorpusFormatError(f"Corpus file not found: {self.path}")
        info(f"Loading corpus from file: {self.path}")
        return self.path.read_bytes()

    def __repr__(self) -> str:
        return f"FileSource({str(self.path)!r})"


class BytesSource:
    """Serve an already-loaded corpus document (embedded assets, tests)."""

    def __init__(self, data: Union[bytes, str]):
        self.data = data.encode("utf-8") if isinstance(data, str) else data

    def read_bytes(self) -> bytes:
        return self.data

    def __repr__(self) -> str:
        return f"BytesSource({len(self.data)} bytes)"


class CachedAssetSource:
    """
    Read the cached working copy of the corpus, creating it from the
    bundled asset the first time.

    asset:
        The corpus shipped with the application.
    cache:
        Where the working copy lives. Read directly when it exists.
    """

    def __init__(self, asset: Union[str, Path], cache: Union[str, Path]):
        self.asset = Path(asset)
        self.cache = Path(cache)

    def read_bytes(self) -> bytes:
        if self.cache.exists():
            info(f"Loading corpus from cache: {self.cache}")
            return self.cache.read_bytes()

        if not self.asset.exists():
            raise CorpusFormatError(
                f"Corpus asset not found: {self.asset} (and no cached copy at {self.cache})"
            )

        info(f"Loading corpus from bundled asset: {self.asset}")
        data = self.asset.read_bytes()
        self.cache.parent.mkdir(parents=True, exist_ok=True)
        self.cache.write_bytes(data)
        debug(f"Wrote cached corpus copy to {self.cache}")
        return data

    def __repr__(self) -> str:
        return f"CachedAssetSource({str(self.asset)!r}, {str(self.cache)!r})"


def _parse_book(entry: Any, position: int) -> Book:
    if not isinstance(entry, dict):
        raise CorpusFormatError(f"Book #{position}: expected an object, got {type(entry).__name__}")

    key = entry.get("abbrev")
    if not isinstance(key, str) or not key.strip():
        raise CorpusFormatError(f"Book #{position}: missing or empty 'abbrev'")

    name = entry.get("name")
    if not isinstance(name, str) or not name.strip():
        raise CorpusFormatError(f"Book #{position} ({key!r}): missing or empty 'name'")

    chapters = entry.get("chapters")
    if not isinstance(chapters, list):
        raise CorpusFormatError(f"Book {key!r}: 'chapters' is not a list")
    if not chapters:
        raise CorpusFormatError(f"Book {key!r}: 'chapters' is empty")

    parsed_chapters = []
    for ch_idx, chapter in enumerate(chapters, start=1):
        if not isinstance(chapter, list):
            raise CorpusFormatError(f"Book {key!r} chapter {ch_idx}: expected a list of verses")
        for v_idx, verse in enumerate(chapter, start=1):
            if not isinstance(verse, str):
                raise CorpusFormatError(
                    f"Book {key!r} {ch_idx}:{v_idx}: verse text is not a string"
                )
        parsed_chapters.append(tuple(chapter))

    return Book(key=key.strip(), name=name.strip(), chapters=tuple(parsed_chapters))


def parse_corpus(raw: Union[bytes, str]) -> List[Book]:
    """
    Parse and validate a corpus document.

    Parameters
    ----------
    raw:
        The JSON document. Bytes are decoded as UTF-8 (a leading BOM is allowed).

    Returns
    -------
    List[Book]
        Books in document (canonical) order.

    Raises
    ------
    CorpusFormatError
        If the document is not JSON, is not a non-empty list of books, a book
        lacks its key, name or chapters, or two books share a key.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise CorpusFormatError(f"Corpus is not valid UTF-8: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CorpusFormatError(f"Corpus is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise CorpusFormatError(f"Corpus must be a list of books, got {type(data).__name__}")
    if not data:
        raise CorpusFormatError("Corpus contains no books")

    books: List[Book] = []
    seen = {}
    for position, entry in enumerate(data, start=1):
        book = _parse_book(entry, position)
        lowered = book.key.lower()
        if lowered in seen:
            raise CorpusFormatError(
                f"Duplicate book key {book.key!r} (books #{seen[lowered]} and #{position})"
            )
        seen[lowered] = position
        books.append(book)

    debug(f"Parsed {len(books)} book(s) from corpus document.")
    return books
