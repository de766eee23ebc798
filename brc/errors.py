"""
Exception types raised by the Bible Reader Core.

Everything derives from CorpusError so a front end can catch the whole
family at its command boundary.
"""


class CorpusError(Exception):
    """Base class for corpus store, lookup and search errors."""


class CorpusFormatError(CorpusError):
    """The corpus document is missing or does not have the expected shape."""


class NotInitializedError(CorpusError):
    """An accessor was called before the store finished initializing."""


class InvalidReferenceError(CorpusError):
    """A chapter or verse number is non-positive, or a reference is malformed."""


class NotFoundError(CorpusError):
    """A well-formed reference points outside the loaded corpus."""
