"""
BibleService: the surface a reading UI (or the CLI) talks to.

One service wraps one CorpusStore. Lookup and search coroutines await
initialize() first, so callers may skip the explicit call; the plain
accessors (books, navigation, chapter counts) require a ready store and
raise NotInitializedError otherwise.

Book arguments may be names or keys: they go through resolve_book_key()
before lookup, so "Genesis", "genesis" and "gn" address the same book.
"""

from __future__ import annotations

from typing import List, Optional

from . import canon, config, lookup, search, thesaurus
from .model import Book, ChapterText, SearchResult, VerseText
from .store import CorpusStore


class BibleService:
    def __init__(self, store: CorpusStore):
        self.store = store

    async def initialize(self) -> None:
        await self.store.initialize()

    # -- books and navigation -------------------------------------------

    def get_books(self) -> List[Book]:
        return self.store.get_books()

    def get_book_by_key(self, key: str) -> Optional[Book]:
        return self.store.get_book_by_key(key)

    def get_next_book(self, name_or_key: str) -> Optional[Book]:
        return self.store.get_next_book(canon.resolve_book_key(name_or_key))

    def get_prev_book(self, name_or_key: str) -> Optional[Book]:
        return self.store.get_prev_book(canon.resolve_book_key(name_or_key))

    def resolve_book_key(self, name: str) -> str:
        return canon.resolve_book_key(name)

    get_book_abbrev = resolve_book_key

    def get_total_chapters(self, name_or_key: str) -> int:
        return canon.total_chapters(self.store, name_or_key)

    # -- lookup -----------------------------------------------------------

    async def get_verse(self, book: str, chapter: int, verse: int) -> VerseText:
        await self.initialize()
        return lookup.get_verse(self.store, canon.resolve_book_key(book), chapter, verse)

    async def get_chapter(self, book: str, chapter: int) -> ChapterText:
        await self.initialize()
        return lookup.get_chapter(self.store, canon.resolve_book_key(book), chapter)

    async def get_reference(self, ref: str) -> ChapterText:
        """
        Fetch the chapter named by a '<Book> <Chapter>' string. A ':verse'
        suffix narrows the result to that single verse.
        """
        parsed = canon.parse_reference(ref)
        if parsed.verse is None:
            return await self.get_chapter(parsed.book_key, parsed.chapter)
        verse = await self.get_verse(parsed.book_key, parsed.chapter, parsed.verse)
        book = self.store.get_book_by_key(parsed.book_key)
        return ChapterText(book_key=book.key, chapter=parsed.chapter, verses=[verse])

    # -- search -----------------------------------------------------------

    async def search_text(
        self,
        query: str,
        limit: int = config.SEARCH_RESULT_LIMIT,
        strict: bool = False,
    ) -> List[SearchResult]:
        await self.initialize()
        return search.search_text(self.store.index, query, limit=limit, strict=strict)

    def find_related_words(self, word: str) -> List[str]:
        return thesaurus.find_related_words(word)
