import asyncio
import json

import pytest

from brc.loader import BytesSource
from brc.service import BibleService
from brc.store import CorpusStore

SAMPLE_BOOKS = [
    {
        "abbrev": "gn",
        "name": "Genesis",
        "chapters": [
            [
                "In the beginning God created the heaven and the earth.",
                "And the earth was without form, and void; and darkness was upon the face of the deep.",
                "And God said, Let there be light: and there was light.",
            ],
            [
                "Thus the heavens and the earth were finished, and all the host of them.",
                "And on the seventh day God ended his work {Hebrew: rested} which he had made.",
            ],
            [
                "Now the serpent was more subtil than any beast of the field.",
            ],
        ],
    },
    {
        "abbrev": "ex",
        "name": "Exodus",
        "chapters": [
            [
                "Now these are the names of the children of Israel, which came into Egypt.",
            ],
            [
                "And there went a man of the house of Levi.",
                "And the woman conceived, and bare a son.",
            ],
        ],
    },
    {
        "abbrev": "jo",
        "name": "John",
        "chapters": [
            ["In the beginning was the Word, and the Word was with God, and the Word was God."],
            ["And the third day there was a marriage in Cana of Galilee."],
            ["For God so loved the world, that he gave his only begotten Son."],
        ],
    },
]


class CountingSource:
    """Byte source that records how often it was read."""

    def __init__(self, data: bytes):
        self.data = data
        self.reads = 0

    def read_bytes(self) -> bytes:
        self.reads += 1
        return self.data


@pytest.fixture
def corpus_bytes() -> bytes:
    return json.dumps(SAMPLE_BOOKS).encode("utf-8")


@pytest.fixture
def corpus_file(tmp_path, corpus_bytes):
    path = tmp_path / "corpus.json"
    path.write_bytes(corpus_bytes)
    return path


@pytest.fixture
def store(corpus_bytes) -> CorpusStore:
    s = CorpusStore(BytesSource(corpus_bytes))
    asyncio.run(s.initialize())
    return s


@pytest.fixture
def service(store) -> BibleService:
    return BibleService(store)
