"""Exceptions raised by pyhunspell.

Every failure at the libhunspell boundary is a ``HunspellError``. Each class
also derives from the builtin a caller would reach for first, so
``except FileNotFoundError`` or ``except ValueError`` keep working.
"""

from __future__ import annotations

__all__ = [
    "HunspellError",
    "AffixFileMissing",
    "DictionaryFileMissing",
    "TooManyDictionaries",
    "EngineConstructionFailed",
    "EngineError",
    "NullPointer",
    "NegativeLength",
    "InvalidEncoding",
    "EmbeddedNulInInput",
    "SessionClosed",
]


class HunspellError(Exception):
    """Base class for all pyhunspell errors."""


class AffixFileMissing(HunspellError, FileNotFoundError):
    """The affix (.aff) path is not an existing regular file."""

    def __init__(self, path) -> None:
        self.path = path
        super().__init__(f"affix file not found: {path}")


class DictionaryFileMissing(HunspellError, FileNotFoundError):
    """A dictionary (.dic) path is not an existing regular file."""

    def __init__(self, path) -> None:
        self.path = path
        super().__init__(f"dictionary file not found: {path}")


class TooManyDictionaries(HunspellError, ValueError):
    """The additional dictionary limit is already reached."""

    def __init__(self, path, limit: int) -> None:
        self.path = path
        self.limit = limit
        super().__init__(
            f"cannot add {path}: at most {limit} additional dictionaries are allowed"
        )


class EngineConstructionFailed(HunspellError, RuntimeError):
    """libhunspell did not produce a handle."""


class EngineError(HunspellError, RuntimeError):
    """A libhunspell call returned a nonzero status."""

    def __init__(self, code: int, operation: str = "") -> None:
        self.code = code
        self.operation = operation
        where = f"{operation} " if operation else ""
        super().__init__(f"hunspell {where}failed with status {code}")


class NullPointer(HunspellError, RuntimeError):
    """A list or list element returned by libhunspell was NULL."""

    def __init__(self, index: int | None = None) -> None:
        self.index = index
        if index is None:
            super().__init__("hunspell returned a NULL list with a nonzero count")
        else:
            super().__init__(f"hunspell returned a NULL string at index {index}")


class NegativeLength(HunspellError, ValueError):
    """libhunspell reported a negative list length."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"hunspell returned a negative list length: {length}")


class InvalidEncoding(HunspellError, ValueError):
    """Text could not be converted to or from the dictionary encoding.

    The underlying ``UnicodeError`` (or ``LookupError``) is the ``__cause__``.
    """


class EmbeddedNulInInput(HunspellError, ValueError):
    """An argument contains a NUL byte and cannot be passed as a C string."""

    def __init__(self, what: str, position: int) -> None:
        self.what = what
        self.position = position
        super().__init__(f"{what} contains an embedded NUL byte at position {position}")


class SessionClosed(HunspellError, RuntimeError):
    """The session's native handle has already been released."""
