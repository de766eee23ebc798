import asyncio
import json
import traceback

import pytest

from brc.errors import CorpusFormatError, NotInitializedError
from brc.loader import BytesSource, CachedAssetSource, FileSource, parse_corpus
from brc.store import CorpusStore, StoreState

from conftest import CountingSource


def test_accessors_before_initialize_raise(corpus_bytes):
    store = CorpusStore(BytesSource(corpus_bytes))
    assert store.state is StoreState.UNINITIALIZED
    with pytest.raises(NotInitializedError):
        store.get_books()
    with pytest.raises(NotInitializedError):
        store.get_book_by_key("gn")


def test_books_keep_document_order(store):
    assert [b.key for b in store.get_books()] == ["gn", "ex", "jo"]
    assert store.get_books()[0].name == "Genesis"
    assert store.is_ready


def test_get_book_by_key_is_case_insensitive(store):
    assert store.get_book_by_key("GN").name == "Genesis"
    assert store.get_book_by_key(" ex ").name == "Exodus"
    assert store.get_book_by_key("zz") is None


def test_next_and_prev_book(store):
    assert store.get_next_book("gn").key == "ex"
    assert store.get_prev_book("ex").key == "gn"
    assert store.get_prev_book("gn") is None
    assert store.get_next_book("jo") is None
    assert store.get_next_book("unknown") is None


def test_get_book_by_index(store):
    assert store.get_book_by_index(2).key == "jo"
    assert store.get_book_by_index(3) is None
    assert store.get_book_by_index(-1) is None


def test_concurrent_initialize_loads_once(corpus_bytes):
    source = CountingSource(corpus_bytes)

    async def run():
        store = CorpusStore(source)
        await asyncio.gather(store.initialize(), store.initialize(), store.initialize())
        await store.initialize()
        return store

    store = asyncio.run(run())
    assert store.load_count == 1
    assert source.reads == 1
    assert store.state is StoreState.READY


def test_failed_initialize_is_sticky():
    source = CountingSource(b"{not json")
    store = CorpusStore(source)

    with pytest.raises(CorpusFormatError):
        asyncio.run(store.initialize())
    assert store.state is StoreState.FAILED

    with pytest.raises(CorpusFormatError):
        asyncio.run(store.initialize())
    assert source.reads == 1
    with pytest.raises(NotInitializedError):
        store.get_books()


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"abbrev": "gn"},
        [{"name": "Genesis", "chapters": [["x"]]}],
        [{"abbrev": "", "name": "Genesis", "chapters": [["x"]]}],
        [{"abbrev": "gn", "chapters": [["x"]]}],
        [{"abbrev": "gn", "name": "Genesis", "chapters": "x"}],
        [{"abbrev": "gn", "name": "Genesis", "chapters": []}],
        [{"abbrev": "gn", "name": "Genesis", "chapters": ["not a list"]}],
        [{"abbrev": "gn", "name": "Genesis", "chapters": [[1, 2]]}],
        [
            {"abbrev": "gn", "name": "Genesis", "chapters": [["x"]]},
            {"abbrev": "GN", "name": "Genesis again", "chapters": [["y"]]},
        ],
    ],
)
def test_parse_corpus_rejects_bad_shapes(payload):
    with pytest.raises(CorpusFormatError):
        parse_corpus(json.dumps(payload))


def test_parse_corpus_accepts_bom(corpus_bytes):
    books = parse_corpus(b"\xef\xbb\xbf" + corpus_bytes)
    assert books[0].key == "gn"
    assert books[0].chapters[0][0].startswith("In the beginning")


def test_file_source_missing_file(tmp_path):
    with pytest.raises(CorpusFormatError):
        FileSource(tmp_path / "missing.json").read_bytes()


def test_cached_asset_source_writes_cache_once(tmp_path, corpus_bytes):
    asset = tmp_path / "asset.json"
    cache = tmp_path / "cache" / "corpus.json"
    asset.write_bytes(corpus_bytes)

    source = CachedAssetSource(asset, cache)
    assert source.read_bytes() == corpus_bytes
    assert cache.read_bytes() == corpus_bytes

    # Later reads come from the cache even if the asset goes away
    asset.unlink()
    assert source.read_bytes() == corpus_bytes


def test_store_from_file(corpus_file):
    store = CorpusStore(FileSource(corpus_file))
    asyncio.run(store.initialize())
    assert store.verse_count() == 12


def test_failed_initialize_traceback_does_not_grow():
    store = CorpusStore(BytesSource(b"[]"))

    def depth():
        with pytest.raises(CorpusFormatError) as excinfo:
            asyncio.run(store.initialize())
        return len(list(traceback.walk_tb(excinfo.value.__traceback__)))

    depth()
    second = depth()
    assert depth() == second
    assert depth() == second
