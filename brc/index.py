"""
Inverted word index over the loaded corpus.

Each token (lowercased word of at least MIN_TOKEN_LENGTH characters) maps
to the verses containing it. Posting sets are kept as insertion-ordered
dicts so they behave like sets while preserving canonical corpus order,
which keeps search output stable from run to run.

Tokenization splits on whitespace. By default surrounding punctuation is
stripped as well ("beginning," indexes as "beginning"); pass
strip_punctuation=False for the plain whitespace split.
"""

from __future__ import annotations

import string
from typing import Dict, Iterable, Iterator, List, Tuple

from . import config
from .model import Book, Location
from .util import info

PostingSet = Dict[Location, None]

# Curly quotes and similar show up in some translations
_PUNCTUATION = string.punctuation + "‘’“”¶"


def tokenize(
    text: str,
    min_length: int = config.MIN_TOKEN_LENGTH,
    strip_punctuation: bool = config.STRIP_PUNCTUATION,
) -> Iterator[str]:
    """
    Yield index tokens for a piece of text (duplicates included).
    """
    for word in text.split():
        token = word.lower()
        if strip_punctuation:
            token = token.strip(_PUNCTUATION)
        if len(token) >= min_length:
            yield token


class SearchIndex:
    """
    Token -> posting set of Locations. Built once, read-only afterwards.
    """

    def __init__(
        self,
        min_length: int = config.MIN_TOKEN_LENGTH,
        strip_punctuation: bool = config.STRIP_PUNCTUATION,
    ):
        self.min_length = min_length
        self.strip_punctuation = strip_punctuation
        self._postings: Dict[str, PostingSet] = {}
        self._built = False

    @classmethod
    def build(cls, books: Iterable[Book], **kwargs) -> "SearchIndex":
        index = cls(**kwargs)
        index._build(books)
        return index

    def _build(self, books: Iterable[Book]) -> None:
        if self._built:
            raise RuntimeError("SearchIndex is already built")

        verses = 0
        for book in books:
            for ch_num, chapter in enumerate(book.chapters, start=1):
                for v_num, text in enumerate(chapter, start=1):
                    location = Location(book.key, ch_num, v_num, text)
                    for token in tokenize(text, self.min_length, self.strip_punctuation):
                        # Repeats within a verse collapse onto the same key
                        self._postings.setdefault(token, {})[location] = None
                    verses += 1

        self._built = True
        info(f"Search index built: {len(self._postings)} token(s) over {verses} verse(s).")

    def normalize(self, word: str) -> str:
        """Turn a query word into the form used as an index key."""
        token = word.lower()
        if self.strip_punctuation:
            token = token.strip(_PUNCTUATION)
        return token

    def postings(self, word: str) -> List[Location]:
        """Locations for a word in corpus order; [] when the word is not indexed."""
        return list(self._postings.get(self.normalize(word), ()))

    def __contains__(self, word: str) -> bool:
        return self.normalize(word) in self._postings

    @property
    def token_count(self) -> int:
        return len(self._postings)

    @property
    def location_count(self) -> int:
        """Total postings across all tokens."""
        return sum(len(p) for p in self._postings.values())

    def most_common(self, n: int = 10) -> List[Tuple[str, int]]:
        """The n tokens with the largest posting sets (for status output)."""
        ranked = sorted(self._postings.items(), key=lambda kv: (-len(kv[1]), kv[0]))
        return [(token, len(locs)) for token, locs in ranked[:n]]
