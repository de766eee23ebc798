"""
Corpus store for the Bible Reader Core.

The store owns the parsed corpus and its search index. It is created
explicitly and handed to whoever needs it; nothing here is module-level
state.

Lifecycle:

    UNINITIALIZED --initialize()--> INITIALIZING --> READY
                                                 \\-> FAILED

initialize() is safe to call repeatedly and concurrently: only the first
call reads and parses the source, later callers wait for it and observe
the same outcome. A failure is recorded and re-raised on every later
call; the source is never read a second time.
"""

from __future__ import annotations

import asyncio
import enum
from typing import Dict, List, Optional

from .errors import NotInitializedError
from .index import SearchIndex
from .loader import parse_corpus
from .model import Book
from .util import info, ok, warn, debug


class StoreState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


class CorpusStore:
    """
    Parameters
    ----------
    source:
        Any object with a read_bytes() method returning the corpus JSON
        (see brc.loader for FileSource, BytesSource, CachedAssetSource).
    index_options:
        Keyword arguments forwarded to SearchIndex.build().
    """

    def __init__(self, source, **index_options):
        self.source = source
        self.index_options = index_options
        self.state = StoreState.UNINITIALIZED
        self.error: Optional[BaseException] = None
        self._error_traceback = None
        # Number of parse + index passes performed; never exceeds 1.
        self.load_count = 0

        self._books: List[Book] = []
        self._positions: Dict[str, int] = {}
        self._index: Optional[SearchIndex] = None
        self._lock = asyncio.Lock()

    @property
    def is_ready(self) -> bool:
        return self.state is StoreState.READY

    async def initialize(self) -> None:
        """
        Load, validate and index the corpus (at most once).

        Raises
        ------
        CorpusFormatError
            If the source document is missing or malformed. The error is
            remembered and raised again by later calls.
        """
        if self.state is StoreState.READY:
            return
        if self.state is StoreState.FAILED:
            self._raise_failure()

        async with self._lock:
            # Another caller may have finished while we waited on the lock
            if self.state is StoreState.READY:
                return
            if self.state is StoreState.FAILED:
                self._raise_failure()

            self.state = StoreState.INITIALIZING
            info(f"Initializing corpus store from {self.source!r}...")
            try:
                raw = await asyncio.to_thread(self.source.read_bytes)
                self.load_count += 1
                books = parse_corpus(raw)
                index = SearchIndex.build(books, **self.index_options)
            except Exception as e:
                self.state = StoreState.FAILED
                self.error = e
                self._error_traceback = e.__traceback__
                warn(f"Corpus store failed to initialize: {e}")
                raise

            self._books = books
            self._positions = {book.key.lower(): i for i, book in enumerate(books)}
            self._index = index
            self.state = StoreState.READY

        first = self._books[0]
        debug(
            f"First book: key={first.key!r}, name={first.name!r}, "
            f"chapters={first.chapter_count}, verses in ch.1={first.verse_count(1)}"
        )
        ok(f"Corpus store ready: {len(self._books)} book(s).")

    def _raise_failure(self) -> None:
        # Each re-raise starts again from the first failure's traceback
        raise self.error.with_traceback(self._error_traceback)

    def _require_ready(self) -> None:
        if self.state is not StoreState.READY:
            raise NotInitializedError(
                f"Corpus store is not initialized (state={self.state.value}); await initialize() first"
            )

    @property
    def index(self) -> SearchIndex:
        self._require_ready()
        return self._index

    def get_books(self) -> List[Book]:
        """All books in canonical order."""
        self._require_ready()
        return list(self._books)

    def get_book_by_key(self, key: str) -> Optional[Book]:
        """Case-insensitive key match; None when no book has that key."""
        self._require_ready()
        pos = self._positions.get(key.strip().lower())
        return None if pos is None else self._books[pos]

    def get_book_by_index(self, index: int) -> Optional[Book]:
        """Book at a 0-based canonical position; None when out of range."""
        self._require_ready()
        if 0 <= index < len(self._books):
            return self._books[index]
        return None

    def _adjacent(self, key: str, step: int) -> Optional[Book]:
        self._require_ready()
        pos = self._positions.get(key.strip().lower())
        if pos is None:
            return None
        return self.get_book_by_index(pos + step)

    def get_next_book(self, key: str) -> Optional[Book]:
        return self._adjacent(key, 1)

    def get_prev_book(self, key: str) -> Optional[Book]:
        return self._adjacent(key, -1)

    def verse_count(self) -> int:
        """Total verses across the corpus."""
        self._require_ready()
        return sum(len(ch) for book in self._books for ch in book.chapters)
