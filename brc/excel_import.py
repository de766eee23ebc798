"""
Excel and CSV import helpers for the Bible Reader Core.

This module:
- Opens .xlsx files via openpyxl or .csv files via csv module.
- Detects header row and column mapping.
- Yields verse rows: (book, chapter, verse, text).
- Groups rows into a corpus JSON document the CorpusStore can load.
"""

from __future__ import annotations

import csv
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional

from openpyxl import load_workbook

from .canon import CANON_ORDER, book_name, resolve_book_key
from .errors import CorpusFormatError
from .util import info, warn, ok


@dataclass
class TableVerseRow:
    book: str          # Book name or key
    chapter: int
    verse: int
    text: str
    raw_row_index: int  # for diagnostics


HEADER_CANDIDATES: Dict[str, List[str]] = {
    "book": ["book", "bookname", "abbrev", "bk"],
    "chapter": ["chapter", "chap", "ch"],
    "verse": ["verse", "versenum", "vs", "v"],
    "text": ["text", "versetext", "content", "body"],
}


_HEADER_JUNK = str.maketrans("", "", " -_.")


def _normalize_header(value: object) -> str:
    """'Verse Text' / 'verse_text' / 'VERSE-TEXT' -> 'versetext'."""
    return "" if value is None else str(value).strip().lower().translate(_HEADER_JUNK)


def _detect_column_mapping(headers: List[object]) -> Optional[Dict[str, int]]:
    """
    Locate the book, chapter, verse and text columns in a header row.

    Returns
    -------
    Dict[str, int]
        Field name -> 0-based column position, or None (with a warning)
        when any of the four fields has no recognisable header.
    """
    positions: Dict[str, int] = {}
    for col, header in enumerate(headers):
        norm = _normalize_header(header)
        for field_name, aliases in HEADER_CANDIDATES.items():
            if norm in aliases and field_name not in positions:
                positions[field_name] = col

    missing = [name for name in HEADER_CANDIDATES if name not in positions]
    if missing:
        warn(f"No column found for {', '.join(missing)}. Header row: {headers}")
        return None
    return positions


def _row_to_verse(row: List[Any], mapping: Dict[str, int], row_idx: int) -> Optional[TableVerseRow]:
    """Validate one data row; warn and return None for unusable rows."""
    if len(row) < max(mapping.values()) + 1:
        warn(f"Row {row_idx}: not enough columns; skipping.")
        return None

    book_raw = row[mapping["book"]]
    chapter_raw = row[mapping["chapter"]]
    verse_raw = row[mapping["verse"]]
    text_raw = row[mapping["text"]]

    if book_raw in (None, "") or chapter_raw in (None, "") or verse_raw in (None, ""):
        warn(f"Row {row_idx}: missing book/chapter/verse; skipping.")
        return None

    text_str = "" if text_raw is None else str(text_raw).strip()
    if not text_str:
        warn(f"Row {row_idx}: empty verse text; skipping.")
        return None

    try:
        chapter_int = int(chapter_raw)
        verse_int = int(verse_raw)
    except (TypeError, ValueError):
        warn(f"Row {row_idx}: non-integer chapter/verse; skipping. "
             f"chapter={chapter_raw!r}, verse={verse_raw!r}")
        return None

    book_str = str(book_raw).strip()
    if not book_str:
        warn(f"Row {row_idx}: empty book value; skipping.")
        return None

    return TableVerseRow(
        book=book_str,
        chapter=chapter_int,
        verse=verse_int,
        text=text_str,
        raw_row_index=row_idx,
    )


def _iter_rows(headers: List[Any], rows: Iterable[List[Any]], max_rows: Optional[int]) -> Iterator[TableVerseRow]:
    info(f"Detected header row: {headers}")
    mapping = _detect_column_mapping(headers)
    if mapping is None:
        warn("Failed to detect required columns; aborting import.")
        return

    count = 0
    for row_idx, row in enumerate(rows, start=2):  # 1-based row index; +1 for header
        if max_rows is not None and count >= max_rows:
            info(f"Stopping after max_rows={max_rows} rows.")
            break
        verse = _row_to_verse(list(row), mapping, row_idx)
        if verse is not None:
            yield verse
            count += 1


def iter_verses_from_table(
    path: Path,
    sheet_name: Optional[str] = None,
    max_rows: Optional[int] = None,
) -> Iterator[TableVerseRow]:
    """
    Yield TableVerseRow objects from Excel (.xlsx) or CSV (.csv) files.

    Parameters
    ----------
    path:
        Path to the Excel or CSV file.
    sheet_name:
        Optional worksheet name (Excel only). If None, the active sheet is used.
    max_rows:
        Optional limit on number of data rows yielded (for testing).
    """
    path = Path(path).resolve()
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        info(f"Opening CSV file: {path}")
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            reader = csv.reader(f)
            headers = next(reader, None)
            if headers is None:
                warn("CSV file is empty.")
                return
            yield from _iter_rows(headers, reader, max_rows)
    elif suffix in (".xlsx", ".xlsm"):
        info(f"Opening Excel file: {path}")
        wb = load_workbook(filename=str(path), read_only=True, data_only=True)
        try:
            if sheet_name is None:
                ws = wb.active
            elif sheet_name in wb.sheetnames:
                ws = wb[sheet_name]
            else:
                raise ValueError(f"Sheet {sheet_name!r} not found. Available: {wb.sheetnames}")
            info(f"Using sheet: {ws.title!r}")

            rows = ws.iter_rows(values_only=True)
            headers = next(rows, None)
            if headers is None:
                warn("Excel sheet is empty.")
                return
            yield from _iter_rows(list(headers), rows, max_rows)
        finally:
            wb.close()
    else:
        warn(f"Unsupported file format: {suffix}. Expected .csv, .xlsx or .xlsm")


def rows_to_corpus(rows: Iterable[TableVerseRow]) -> List[Dict[str, Any]]:
    """
    Group verse rows into corpus JSON book objects.

    Books are ordered canonically when their key is in the canon table,
    others follow in first-seen order. Chapters and verses must each run
    1..N without gaps or repeats.

    Raises
    ------
    CorpusFormatError
        On a duplicate verse, a gap in chapter or verse numbering, or no rows.
    """
    grouped: Dict[str, Dict[int, Dict[int, str]]] = {}
    names: Dict[str, str] = {}
    first_seen: Dict[str, int] = {}

    for r in rows:
        key = resolve_book_key(r.book)
        names.setdefault(key, book_name(key) or r.book)
        first_seen.setdefault(key, len(first_seen))
        verses = grouped.setdefault(key, {}).setdefault(r.chapter, {})
        if r.verse in verses:
            raise CorpusFormatError(
                f"Row {r.raw_row_index}: duplicate verse {key} {r.chapter}:{r.verse}"
            )
        verses[r.verse] = r.text

    if not grouped:
        raise CorpusFormatError("No verse rows to build a corpus from")

    def order(key: str):
        return (CANON_ORDER.get(key, len(CANON_ORDER)), first_seen[key])

    books: List[Dict[str, Any]] = []
    for key in sorted(grouped, key=order):
        chapters_map = grouped[key]
        if sorted(chapters_map) != list(range(1, len(chapters_map) + 1)):
            raise CorpusFormatError(f"Book {key!r}: chapters are not numbered 1..{len(chapters_map)}")

        chapters: List[List[str]] = []
        for ch_num in range(1, len(chapters_map) + 1):
            verses = chapters_map[ch_num]
            if sorted(verses) != list(range(1, len(verses) + 1)):
                raise CorpusFormatError(f"Book {key!r} chapter {ch_num}: verses are not numbered 1..{len(verses)}")
            chapters.append([verses[v] for v in range(1, len(verses) + 1)])

        books.append({"abbrev": key, "name": names[key], "chapters": chapters})

    return books


def write_corpus_json(books: List[Dict[str, Any]], output_path: Path) -> None:
    """Write a corpus document that FileSource / CachedAssetSource can read."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(books, ensure_ascii=False), encoding="utf-8")
    verse_total = sum(len(ch) for b in books for ch in b["chapters"])
    ok(f"Wrote corpus with {len(books)} book(s), {verse_total} verse(s) to {output_path}")
