"""
brc - Bible Reader Core

This package contains the corpus engine behind the Bible reader:
- config: Project configuration and versioning
- paths: Corpus asset and cache locations
- util: Console output helpers
- loader: Corpus sources and JSON parsing
- store: The corpus store (load once, read-only afterwards)
- canon: Book names, keys and reference strings
- lookup: Verse / chapter lookup and annotation extraction
- index: Inverted word index
- search: Multi-word search
- thesaurus: Related-word suggestions
- service: The facade a reading UI talks to
- context: Chapter windows for smooth scrolling
- remote: bible-api.com client
- excel_import: Build a corpus from CSV / Excel sheets
- status: Corpus and index statistics
"""

from . import config
from .errors import (
    CorpusError,
    CorpusFormatError,
    NotInitializedError,
    InvalidReferenceError,
    NotFoundError,
)
from .loader import FileSource, BytesSource, CachedAssetSource, parse_corpus
from .store import CorpusStore, StoreState
from .canon import resolve_book_key, parse_reference, total_chapters
from .lookup import get_verse, get_chapter, extract_annotations
from .index import SearchIndex
from .search import search_text, print_search_results
from .thesaurus import find_related_words
from .service import BibleService
from .context import load_chapter_window, merge_chapters, search_loaded_chapters

__version__ = config.__version__
__all__ = [
    "config",
    "CorpusError",
    "CorpusFormatError",
    "NotInitializedError",
    "InvalidReferenceError",
    "NotFoundError",
    "FileSource",
    "BytesSource",
    "CachedAssetSource",
    "parse_corpus",
    "CorpusStore",
    "StoreState",
    "resolve_book_key",
    "parse_reference",
    "total_chapters",
    "get_verse",
    "get_chapter",
    "extract_annotations",
    "SearchIndex",
    "search_text",
    "print_search_results",
    "find_related_words",
    "BibleService",
    "load_chapter_window",
    "merge_chapters",
    "search_loaded_chapters",
]
