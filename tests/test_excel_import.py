import asyncio

import pytest
from openpyxl import Workbook

from brc.errors import CorpusFormatError
from brc.excel_import import (
    TableVerseRow,
    iter_verses_from_table,
    rows_to_corpus,
    write_corpus_json,
)
from brc.loader import FileSource
from brc.store import CorpusStore

ROWS = [
    ["Exodus", 1, 1, "Now these are the names of the children of Israel."],
    ["Genesis", 1, 1, "In the beginning God created the heaven and the earth."],
    ["Genesis", 1, 2, "And the earth was without form, and void."],
    ["Genesis", 2, 1, "Thus the heavens and the earth were finished."],
]


def _write_csv(path, header, rows):
    lines = [",".join(header)]
    for row in rows:
        lines.append(",".join(f'"{v}"' if isinstance(v, str) else str(v) for v in row))
    path.write_text("\ufeff" + "\n".join(lines) + "\n", encoding="utf-8")
    return path


def _write_xlsx(path, header, rows, title="Verses"):
    wb = Workbook()
    ws = wb.active
    ws.title = title
    ws.append(header)
    for row in rows:
        ws.append(row)
    wb.save(path)
    return path


def _row(book, chapter, verse, text="text", idx=2):
    return TableVerseRow(book=book, chapter=chapter, verse=verse, text=text, raw_row_index=idx)


def test_csv_rows(tmp_path):
    path = _write_csv(tmp_path / "verses.csv", ["Book", "Chapter", "Verse", "Text"], ROWS)
    rows = list(iter_verses_from_table(path))
    assert [(r.book, r.chapter, r.verse) for r in rows] == [
        ("Exodus", 1, 1),
        ("Genesis", 1, 1),
        ("Genesis", 1, 2),
        ("Genesis", 2, 1),
    ]
    assert rows[0].raw_row_index == 2


def test_xlsx_rows_with_alternate_headers(tmp_path):
    path = _write_xlsx(tmp_path / "verses.xlsx", ["Abbrev", "Ch", "Verse Num", "Verse Text"], ROWS)
    rows = list(iter_verses_from_table(path, sheet_name="Verses"))
    assert len(rows) == 4
    assert rows[1].text.startswith("In the beginning")


def test_xlsx_unknown_sheet(tmp_path):
    path = _write_xlsx(tmp_path / "verses.xlsx", ["Book", "Chapter", "Verse", "Text"], ROWS)
    with pytest.raises(ValueError):
        list(iter_verses_from_table(path, sheet_name="Missing"))


def test_unusable_rows_are_skipped(tmp_path):
    rows = ROWS + [["Genesis", "two", 1, "bad chapter"], ["Genesis", 3, 1, ""], ["", 3, 1, "no book"]]
    path = _write_xlsx(tmp_path / "verses.xlsx", ["Book", "Chapter", "Verse", "Text"], rows)
    assert len(list(iter_verses_from_table(path))) == 4


def test_max_rows(tmp_path):
    path = _write_csv(tmp_path / "verses.csv", ["Book", "Chapter", "Verse", "Text"], ROWS)
    assert len(list(iter_verses_from_table(path, max_rows=2))) == 2


def test_missing_columns_yield_nothing(tmp_path):
    path = _write_csv(tmp_path / "verses.csv", ["Book", "Chapter", "Text"], [r[:2] + r[3:] for r in ROWS])
    assert list(iter_verses_from_table(path)) == []


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        list(iter_verses_from_table(tmp_path / "nope.csv"))


def test_rows_to_corpus_orders_books_canonically():
    books = rows_to_corpus(
        [_row("Exodus", 1, 1), _row("Enoch", 1, 1), _row("Genesis", 1, 2, "b"), _row("Genesis", 1, 1, "a")]
    )
    assert [b["abbrev"] for b in books] == ["gn", "ex", "enoch"]
    assert books[0]["name"] == "Genesis"
    assert books[0]["chapters"] == [["a", "b"]]
    assert books[2]["name"] == "Enoch"


@pytest.mark.parametrize(
    "rows",
    [
        [],
        [_row("Genesis", 1, 1), _row("gn", 1, 1)],
        [_row("Genesis", 1, 1), _row("Genesis", 1, 3)],
        [_row("Genesis", 1, 1), _row("Genesis", 3, 1)],
        [_row("Genesis", 2, 1)],
    ],
)
def test_rows_to_corpus_rejects_bad_numbering(rows):
    with pytest.raises(CorpusFormatError):
        rows_to_corpus(rows)


def test_imported_corpus_loads(tmp_path):
    table = _write_csv(tmp_path / "verses.csv", ["Book", "Chapter", "Verse", "Text"], ROWS)
    output = tmp_path / "out" / "corpus.json"
    write_corpus_json(rows_to_corpus(iter_verses_from_table(table)), output)

    store = CorpusStore(FileSource(output))
    asyncio.run(store.initialize())
    assert [b.key for b in store.get_books()] == ["gn", "ex"]
    assert store.get_book_by_key("gn").chapter_count == 2
