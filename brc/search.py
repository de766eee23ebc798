"""
Free-text search over the corpus index.

This module provides:

- search_text(index, query, limit=100, strict=False)
    Multi-word AND search driven by the word index

- print_search_results(results)
    Pretty-print results to the console

How a query is answered: the query is split on whitespace and words of
two characters or fewer are dropped. The verses indexed under the FIRST
remaining word are the candidates; a candidate is kept when every
remaining word occurs in its text as a case-insensitive substring.

Known limitation: recall is bounded by the first word's postings. A verse
that contains the first word only as part of a longer word ("created"
for "create") is never a candidate even if every word matches as a
substring. strict=True narrows candidates further to verses indexed under
every word.
"""

from __future__ import annotations

import re
from typing import List, Optional

from . import config
from .canon import book_name
from .index import SearchIndex
from .model import SearchResult
from .util import info, debug

__all__ = ["search_text", "query_words", "print_search_results"]


def query_words(query: str, min_length: int = config.MIN_TOKEN_LENGTH) -> List[str]:
    """Whitespace-split query words long enough to search for, lowercased."""
    return [w.lower() for w in query.split() if len(w) >= min_length]


def _match_offset(pattern: re.Pattern, text: str) -> int:
    """Position of the first case-insensitive match in the original text, -1 if none."""
    m = pattern.search(text)
    return m.start() if m else -1


def search_text(
    index: SearchIndex,
    query: str,
    limit: int = config.SEARCH_RESULT_LIMIT,
    strict: bool = False,
) -> List[SearchResult]:
    """
    Search the corpus.

    Parameters
    ----------
    index:
        The SearchIndex owned by a ready CorpusStore.
    query:
        Free text; words of length <= 2 are ignored.
    limit:
        Maximum number of results. Iteration stops as soon as it is reached.
    strict:
        Only consider verses indexed under every query word.

    Returns
    -------
    List[SearchResult] in corpus order; [] when no usable word remains.
    """
    words = query_words(query, index.min_length)
    if not words:
        debug(f"Query {query!r} has no words of length >= {index.min_length}.")
        return []

    candidates = index.postings(words[0])
    if strict and len(words) > 1:
        allowed = None
        for word in words[1:]:
            word_set = set(index.postings(word))
            allowed = word_set if allowed is None else allowed & word_set
        candidates = [loc for loc in candidates if loc in allowed]

    first = re.compile(re.escape(words[0]), re.IGNORECASE)
    results: List[SearchResult] = []
    for loc in candidates:
        if len(results) >= limit:
            break
        lowered = loc.text.lower()
        if all(w in lowered for w in words):
            results.append(
                SearchResult(
                    book_key=loc.book_key,
                    chapter=loc.chapter,
                    verse=loc.verse,
                    text=loc.text,
                    offset=_match_offset(first, loc.text),
                    keyword=query,
                )
            )

    info(f"Search {query!r} returned {len(results)} result(s).")
    return results


def print_search_results(results: List[SearchResult], related: Optional[List[str]] = None) -> None:
    """
    Pretty-print search results to the console.
    """
    if not results:
        info("No results.")
    for r in results:
        name = book_name(r.book_key) or r.book_key
        print(f"{name} {r.chapter}:{r.verse}")
        print(f"    {r.text}")
        print()

    if related:
        info(f"Related words: {', '.join(related)}")
