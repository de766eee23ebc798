"""
Data model definitions for the Bible Reader Core.

We define:
- Book         : one book of the loaded corpus (key, name, chapters)
- VerseRef     : a (book_key, chapter, optional verse) address
- Location     : an index posting (book_key, chapter, verse, text)
- SearchResult : one hit returned by the search engine
- VerseText / ChapterText : lookup return shapes
- AnnotatedVerse : verse text split from its {...} editorial comments
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Book:
    """
    A book of the corpus.

    key     : canonical short code as found in the corpus (e.g. 'gn')
    name    : display name (e.g. 'Genesis')
    chapters: chapter i+1 is chapters[i]; verse j+1 is chapters[i][j]
    """
    key: str
    name: str
    chapters: Tuple[Tuple[str, ...], ...]

    @property
    def chapter_count(self) -> int:
        return len(self.chapters)

    def verse_count(self, chapter: int) -> int:
        """Number of verses in a 1-based chapter, 0 when out of range."""
        if 1 <= chapter <= len(self.chapters):
            return len(self.chapters[chapter - 1])
        return 0


@dataclass(frozen=True)
class VerseRef:
    """
    A reference into the corpus.

    book_key: canonical key (lowercase)
    chapter : 1..N
    verse   : 1..N, or None for a whole chapter
    """
    book_key: str
    chapter: int
    verse: Optional[int] = None

    def to_normalized(self) -> str:
        """
        Compute the normalized reference string (e.g. 'GN.1' or 'GN.1.1').
        """
        if self.verse is None:
            return f"{self.book_key.upper()}.{self.chapter}"
        return f"{self.book_key.upper()}.{self.chapter}.{self.verse}"


@dataclass(frozen=True)
class Location:
    """A verse that contains an indexed token, with that verse's full text."""
    book_key: str
    chapter: int
    verse: int
    text: str


@dataclass(frozen=True)
class SearchResult:
    book_key: str
    chapter: int
    verse: int
    text: str
    offset: int
    keyword: str


@dataclass(frozen=True)
class VerseText:
    verse: int
    text: str


@dataclass
class ChapterText:
    """A whole chapter in verse order, as returned by lookups."""
    book_key: str
    chapter: int
    verses: List[VerseText] = field(default_factory=list)


@dataclass(frozen=True)
class AnnotatedVerse:
    """
    Display form of a verse.

    text   : verse text with every {...} span removed
    comment: the span bodies joined by spaces, or None when there were none
    """
    text: str
    comment: Optional[str] = None
