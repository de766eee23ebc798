"""
Status and health-report helpers for the Bible Reader Core.
"""

from __future__ import annotations

from typing import Any, Dict

from .store import CorpusStore, StoreState
from .util import info, warn


def get_corpus_stats(store: CorpusStore) -> Dict[str, Any]:
    """
    Return basic counts for a store. Counts are only present once the store is ready.
    """
    stats: Dict[str, Any] = {
        "source": repr(store.source),
        "state": store.state.value,
        "load_count": store.load_count,
    }
    if store.state is StoreState.READY:
        books = store.get_books()
        stats.update(
            books=len(books),
            chapters=sum(b.chapter_count for b in books),
            verses=store.verse_count(),
            tokens=store.index.token_count,
            postings=store.index.location_count,
        )
    elif store.state is StoreState.FAILED:
        stats["error"] = str(store.error)
    return stats


def print_status(store: CorpusStore) -> None:
    """
    Print a human-readable status report:

    - Corpus source and store state
    - Book / chapter / verse counts
    - Index size and the most frequent tokens
    """
    stats = get_corpus_stats(store)
    info(f"Corpus source: {stats['source']}")
    info(f"Store state  : {stats['state']}")

    if "error" in stats:
        warn(f"Initialization error: {stats['error']}")
        return
    if "books" not in stats:
        warn("Corpus is not loaded.")
        return

    info(f"Books    : {stats['books']}")
    info(f"Chapters : {stats['chapters']}")
    info(f"Verses   : {stats['verses']}")
    info(f"Index    : {stats['tokens']} token(s), {stats['postings']} posting(s)")

    info("Most frequent tokens:")
    for token, count in store.index.most_common(10):
        print(f"  - {token}: {count} verse(s)")
