import asyncio

import pytest

from brc.errors import CorpusFormatError
from brc.loader import BytesSource
from brc.status import get_corpus_stats, print_status
from brc.store import CorpusStore


def test_stats_for_ready_store(store):
    stats = get_corpus_stats(store)
    assert stats["state"] == "ready"
    assert stats["load_count"] == 1
    assert stats["books"] == 3
    assert stats["chapters"] == 8
    assert stats["verses"] == 12
    assert stats["tokens"] == store.index.token_count


def test_stats_before_initialize(corpus_bytes):
    stats = get_corpus_stats(CorpusStore(BytesSource(corpus_bytes)))
    assert stats["state"] == "uninitialized"
    assert "books" not in stats


def test_stats_for_failed_store(capsys):
    store = CorpusStore(BytesSource(b"[]"))
    with pytest.raises(CorpusFormatError):
        asyncio.run(store.initialize())

    stats = get_corpus_stats(store)
    assert stats["state"] == "failed"
    assert "no books" in stats["error"]

    print_status(store)
    assert "Initialization error" in capsys.readouterr().err


def test_print_status_lists_tokens(store, capsys):
    print_status(store)
    out = capsys.readouterr().out
    assert "Verses   : 12" in out
    assert "- the:" in out
