"""
Reference resolution for the Bible Reader Core.

Maps human-facing book names ("Genesis", "song of solomon", "1 John") to
the canonical keys used by the corpus ("gn", "so", "1jo"), and parses
"<BookNameOrKey> <Chapter>" reference strings.

The key set follows the widely distributed en_kjv.json corpus.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .errors import InvalidReferenceError
from .model import VerseRef

# (key, display name) in canonical order
CANON: List[Tuple[str, str]] = [
    ("gn", "Genesis"), ("ex", "Exodus"), ("lv", "Leviticus"), ("nm", "Numbers"),
    ("dt", "Deuteronomy"), ("js", "Joshua"), ("jud", "Judges"), ("rt", "Ruth"),
    ("1sm", "1 Samuel"), ("2sm", "2 Samuel"), ("1kgs", "1 Kings"), ("2kgs", "2 Kings"),
    ("1ch", "1 Chronicles"), ("2ch", "2 Chronicles"), ("ezr", "Ezra"), ("ne", "Nehemiah"),
    ("et", "Esther"), ("job", "Job"), ("ps", "Psalms"), ("prv", "Proverbs"),
    ("ec", "Ecclesiastes"), ("so", "Song of Solomon"), ("is", "Isaiah"), ("jr", "Jeremiah"),
    ("lm", "Lamentations"), ("ez", "Ezekiel"), ("dn", "Daniel"), ("ho", "Hosea"),
    ("jl", "Joel"), ("am", "Amos"), ("ob", "Obadiah"), ("jn", "Jonah"),
    ("mi", "Micah"), ("na", "Nahum"), ("hk", "Habakkuk"), ("zp", "Zephaniah"),
    ("hg", "Haggai"), ("zc", "Zechariah"), ("ml", "Malachi"),
    ("mt", "Matthew"), ("mk", "Mark"), ("lk", "Luke"), ("jo", "John"),
    ("act", "Acts"), ("rm", "Romans"), ("1co", "1 Corinthians"), ("2co", "2 Corinthians"),
    ("gl", "Galatians"), ("eph", "Ephesians"), ("ph", "Philippians"), ("cl", "Colossians"),
    ("1ts", "1 Thessalonians"), ("2ts", "2 Thessalonians"), ("1tm", "1 Timothy"),
    ("2tm", "2 Timothy"), ("tt", "Titus"), ("phm", "Philemon"), ("hb", "Hebrews"),
    ("jm", "James"), ("1pe", "1 Peter"), ("2pe", "2 Peter"), ("1jo", "1 John"),
    ("2jo", "2 John"), ("3jo", "3 John"), ("jd", "Jude"), ("re", "Revelation"),
]

# Extra spellings people actually type
ALIASES: Dict[str, str] = {
    "psalm": "ps",
    "song of songs": "so",
    "canticles": "so",
    "revelations": "re",
    "revelation of john": "re",
    "qoheleth": "ec",
}

KEY_TO_NAME: Dict[str, str] = {key: name for key, name in CANON}
CANON_ORDER: Dict[str, int] = {key: i for i, (key, _) in enumerate(CANON)}


def _build_name_lookup() -> Dict[str, str]:
    """
    Build a mapping from lowercased book names to keys.

    Keys include:
    - full name (genesis)
    - full name without spaces (1samuel, songofsolomon)
    - aliases
    """
    lookup: Dict[str, str] = {}
    for key, name in CANON:
        lowered = name.lower()
        lookup[lowered] = key
        lookup[lowered.replace(" ", "")] = key
    lookup.update(ALIASES)
    return lookup


NAME_TO_KEY: Dict[str, str] = _build_name_lookup()


def resolve_book_key(name: str) -> str:
    """
    Translate a book name into its canonical key.

    Unknown names come back lowercased but otherwise unchanged, so a caller
    that already holds a key ("gn", "GN") gets it back in usable form.
    """
    normalized = " ".join(name.split()).lower()
    return NAME_TO_KEY.get(normalized, normalized)


def book_name(key: str) -> Optional[str]:
    """Display name for a canonical key, None when the key is not in the canon table."""
    return KEY_TO_NAME.get(key.strip().lower())


def total_chapters(store, name_or_key: str) -> int:
    """Chapter count of the resolved book; 0 when the corpus has no such book."""
    book = store.get_book_by_key(resolve_book_key(name_or_key))
    return 0 if book is None else book.chapter_count


def _positive_int(value: str, what: str, ref: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise InvalidReferenceError(f"Non-integer {what} in reference: {ref!r}") from None
    if number < 1:
        raise InvalidReferenceError(f"{what.capitalize()} must be >= 1 in reference: {ref!r}")
    return number


def parse_reference(ref: str) -> VerseRef:
    """
    Parse a reference string like 'Genesis 1', 'Song of Solomon 2', 'gn 3'
    or 'John 3:16' into a VerseRef with a resolved book key.

    Raises
    ------
    InvalidReferenceError
        If the string has no book part, the chapter/verse are not integers,
        or they are not positive.
    """
    s = ref.strip()
    if not s:
        raise InvalidReferenceError("Empty reference string")

    try:
        space_idx = s.rindex(" ")
    except ValueError:
        raise InvalidReferenceError(
            f"Could not split book and chapter from reference: {ref!r}"
        ) from None

    book_str = s[:space_idx].strip()
    cv_str = s[space_idx + 1 :].strip()

    if ":" in cv_str:
        chap_str, verse_str = cv_str.split(":", 1)
        chapter = _positive_int(chap_str.strip(), "chapter", ref)
        verse: Optional[int] = _positive_int(verse_str.strip(), "verse", ref)
    else:
        chapter = _positive_int(cv_str, "chapter", ref)
        verse = None

    return VerseRef(book_key=resolve_book_key(book_str), chapter=chapter, verse=verse)
