#!/usr/bin/env python
"""
reader.py – unified CLI for the Bible Reader Core

Commands:

  python reader.py books
      List the books of the loaded corpus in canonical order

  python reader.py chapter "Genesis 1" [--comments]
      Print a chapter (or a single verse with 'John 3:16')

  python reader.py verse gn 1 1
      Print one verse

  python reader.py window Genesis 5 --before 2 --after 2
      Load the chapters around a chapter, as the reader prefetches them
      (--find "let there" prints only the verses containing a phrase)

  python reader.py search "living water" --limit 20 [--strict] [--related]
      Search the corpus

  python reader.py related God
      Show related search words

  python reader.py remote "John 3" --translation web
      Fetch a passage from bible-api.com

  python reader.py import-table verses.xlsx data/en_kjv.json
      Build a corpus JSON document from a CSV / Excel sheet

  python reader.py status
      Show corpus and index statistics

By default the corpus is read from the cached copy of the bundled asset
(see brc.paths); --corpus points at any other corpus JSON file.
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from brc import config
from brc.canon import book_name
from brc.context import load_chapter_window, search_loaded_chapters
from brc.errors import CorpusError
from brc.excel_import import iter_verses_from_table, rows_to_corpus, write_corpus_json
from brc.loader import CachedAssetSource, FileSource
from brc.lookup import extract_annotations
from brc.model import ChapterText
from brc.paths import ASSET_PATH, CORPUS_PATH
from brc.remote import fetch_passage
from brc.search import print_search_results
from brc.service import BibleService
from brc.status import print_status
from brc.store import CorpusStore
from brc.thesaurus import find_related_words
from brc.util import info, warn, is_verbose, set_verbose


# ---------- Helpers ----------


def open_service(args: argparse.Namespace) -> BibleService:
    if args.corpus:
        source = FileSource(Path(args.corpus))
    else:
        source = CachedAssetSource(ASSET_PATH, CORPUS_PATH)
    return BibleService(CorpusStore(source))


def print_chapter(chapter: ChapterText, comments: bool = False) -> None:
    name = book_name(chapter.book_key) or chapter.book_key
    print(f"{name} {chapter.chapter}")
    for v in chapter.verses:
        shown = extract_annotations(v.text)
        print(f"  {v.verse:>3}  {shown.text}")
        if comments and shown.comment:
            print(f"       ({shown.comment})")
    print()


# ---------- Command handlers ----------


async def cmd_books(args: argparse.Namespace) -> None:
    """
    List every book with its key and chapter count.
    """
    service = open_service(args)
    await service.initialize()
    for book in service.get_books():
        print(f"  {book.key:<5} {book.name:<20} {book.chapter_count} chapter(s)")


async def cmd_chapter(args: argparse.Namespace) -> None:
    """
    Print the chapter (or single verse) named by a reference string.
    """
    service = open_service(args)
    chapter = await service.get_reference(args.ref)
    print_chapter(chapter, comments=args.comments)

    if args.nav:
        book = service.get_book_by_key(chapter.book_key)
        prev_book = service.get_prev_book(book.key)
        next_book = service.get_next_book(book.key)
        info(f"{book.name} has {service.get_total_chapters(book.key)} chapter(s).")
        info(f"Previous book: {prev_book.name if prev_book else '(none)'}")
        info(f"Next book    : {next_book.name if next_book else '(none)'}")


async def cmd_verse(args: argparse.Namespace) -> None:
    """
    Print one verse by book, chapter and verse number.
    """
    service = open_service(args)
    verse = await service.get_verse(args.book, args.chapter, args.verse)
    key = service.resolve_book_key(args.book)
    shown = extract_annotations(verse.text)
    print(f"{book_name(key) or key} {args.chapter}:{verse.verse}")
    print(f"    {shown.text}")
    if shown.comment:
        print(f"    ({shown.comment})")


async def cmd_window(args: argparse.Namespace) -> None:
    """
    Load the chapters around a focal chapter.
    """
    service = open_service(args)
    await service.initialize()
    chapters = await load_chapter_window(
        service, args.book, args.chapter, before=args.before, after=args.after
    )
    if args.find:
        matches = search_loaded_chapters(chapters, args.find)
        info(f"{len(matches)} verse(s) in the window contain {args.find!r}.")
        for loc in matches:
            print(f"{book_name(loc.book_key) or loc.book_key} {loc.chapter}:{loc.verse}")
            print(f"    {extract_annotations(loc.text).text}")
        return
    for chapter in chapters:
        print_chapter(chapter)


async def cmd_search(args: argparse.Namespace) -> None:
    """
    Search the corpus, optionally listing related words for each query word.
    """
    service = open_service(args)
    results = await service.search_text(args.query, limit=args.limit, strict=args.strict)

    related: List[str] = []
    if args.related:
        for word in args.query.split():
            for candidate in service.find_related_words(word):
                if candidate not in related:
                    related.append(candidate)
    print_search_results(results, related=related)


async def cmd_related(args: argparse.Namespace) -> None:
    """
    Show words related to a search term.
    """
    words = find_related_words(args.word)
    if not words:
        info(f"No related words for {args.word!r}.")
        return
    for word in words:
        print(f"  - {word}")


async def cmd_remote(args: argparse.Namespace) -> None:
    """
    Fetch a passage from the remote verse API.
    """
    passage = await asyncio.to_thread(fetch_passage, args.ref, args.translation)
    if passage is None:
        raise SystemExit(1)
    print(passage.reference)
    for v, text in zip(passage.verses, passage.texts()):
        print(f"  {v.get('verse', '?'):>3}  {text}")


async def cmd_import_table(args: argparse.Namespace) -> None:
    """
    Convert a CSV / Excel verse sheet into a corpus JSON document.
    """
    rows = list(
        iter_verses_from_table(Path(args.table), sheet_name=args.sheet, max_rows=args.max_rows)
    )
    if not rows:
        warn("No usable verse rows found; nothing written.")
        raise SystemExit(1)
    info(f"Parsed {len(rows)} verse row(s).")
    write_corpus_json(rows_to_corpus(rows), Path(args.output))


async def cmd_status(args: argparse.Namespace) -> None:
    """
    Show corpus and index statistics.
    """
    service = open_service(args)
    try:
        await service.initialize()
    finally:
        print_status(service.store)


# ---------- Parser setup ----------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reader",
        description=f"{config.APP_NAME} CLI (v{config.__version__})",
    )
    parser.add_argument(
        "--corpus",
        type=str,
        default=None,
        help="Path to a corpus JSON file (default: cached copy of the bundled corpus)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print [debug] messages",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # books
    p_books = sub.add_parser("books", help="List the books of the corpus")
    p_books.set_defaults(func=cmd_books)

    # chapter
    p_chapter = sub.add_parser(
        "chapter",
        help="Print a chapter by reference (e.g. 'Genesis 1', 'John 3:16')",
    )
    p_chapter.add_argument("ref", type=str, help="Reference string, e.g. 'Genesis 1'")
    p_chapter.add_argument(
        "--comments",
        action="store_true",
        help="Show {...} editorial comments under each verse",
    )
    p_chapter.add_argument(
        "--nav",
        action="store_true",
        help="Also show chapter count and the previous/next book",
    )
    p_chapter.set_defaults(func=cmd_chapter)

    # verse
    p_verse = sub.add_parser("verse", help="Print a single verse")
    p_verse.add_argument("book", type=str, help="Book name or key, e.g. Genesis or gn")
    p_verse.add_argument("chapter", type=int, help="Chapter number")
    p_verse.add_argument("verse", type=int, help="Verse number")
    p_verse.set_defaults(func=cmd_verse)

    # window
    p_window = sub.add_parser(
        "window",
        help="Load the chapters around a chapter (reader prefetch)",
    )
    p_window.add_argument("book", type=str, help="Book name or key")
    p_window.add_argument("chapter", type=int, help="Focal chapter number")
    p_window.add_argument(
        "--before",
        type=int,
        default=config.WINDOW_BEFORE,
        help=f"Chapters before the focal chapter (default: {config.WINDOW_BEFORE})",
    )
    p_window.add_argument(
        "--after",
        type=int,
        default=config.WINDOW_AFTER,
        help=f"Chapters after the focal chapter (default: {config.WINDOW_AFTER})",
    )
    p_window.add_argument(
        "--find",
        type=str,
        default=None,
        help="Only print verses in the window containing this phrase",
    )
    p_window.set_defaults(func=cmd_window)

    # search
    p_search = sub.add_parser("search", help="Search verses for words")
    p_search.add_argument("query", type=str, help="Search text")
    p_search.add_argument(
        "--limit",
        type=int,
        default=config.SEARCH_RESULT_LIMIT,
        help=f"Maximum number of verses to return (default: {config.SEARCH_RESULT_LIMIT})",
    )
    p_search.add_argument(
        "--strict",
        action="store_true",
        help="Only match verses indexed under every query word",
    )
    p_search.add_argument(
        "--related",
        action="store_true",
        help="Also suggest related words",
    )
    p_search.set_defaults(func=cmd_search)

    # related
    p_related = sub.add_parser("related", help="Show words related to a search term")
    p_related.add_argument("word", type=str, help="Search term, e.g. God")
    p_related.set_defaults(func=cmd_related)

    # remote
    p_remote = sub.add_parser("remote", help="Fetch a passage from bible-api.com")
    p_remote.add_argument("ref", type=str, help="Reference string, e.g. 'John 3'")
    p_remote.add_argument(
        "--translation",
        type=str,
        default=config.REMOTE_TRANSLATION,
        help=f"Translation code (default: {config.REMOTE_TRANSLATION})",
    )
    p_remote.set_defaults(func=cmd_remote)

    # import-table
    p_import = sub.add_parser(
        "import-table",
        help="Build a corpus JSON document from a CSV / Excel verse sheet",
    )
    p_import.add_argument("table", type=str, help="Path to the .csv / .xlsx file")
    p_import.add_argument("output", type=str, help="Where to write the corpus JSON")
    p_import.add_argument(
        "--sheet",
        type=str,
        default=None,
        help="Worksheet name (default: active sheet)",
    )
    p_import.add_argument(
        "--max-rows",
        type=int,
        default=None,
        help="Maximum number of data rows to read (for testing)",
    )
    p_import.set_defaults(func=cmd_import_table)

    # status
    p_status = sub.add_parser("status", help="Show corpus and index statistics")
    p_status.set_defaults(func=cmd_status)

    return parser


# ---------- Main ----------


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    # --verbose can turn debug output on, never off (BRC_VERBOSE)
    set_verbose(args.verbose or is_verbose())
    try:
        asyncio.run(args.func(args))
    except (CorpusError, FileNotFoundError, ValueError) as e:
        warn(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
