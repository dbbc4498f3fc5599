"""Utility helpers for pyhunspell.

Path validation and conversion of Python values into the NUL-terminated byte
strings libhunspell expects. Everything here runs before a native call is
issued, so malformed input never reaches the engine.
"""

from __future__ import annotations

import codecs
import os
from pathlib import Path

from .errors import AffixFileMissing, DictionaryFileMissing, EmbeddedNulInInput, InvalidEncoding

__all__ = [
    "validate_paths",
    "validate_dictionary",
    "to_cstring",
    "path_to_cstring",
    "normalize_encoding",
]

# Hunspell SET names that Python's codec registry does not know as-is
_ENCODING_ALIASES = {
    "microsoft-cp1251": "cp1251",
    "tis620-2533": "tis-620",
}


def validate_paths(affix, dictionary) -> tuple[Path, Path]:
    """Check that the affix and dictionary files exist.

    Returns:
        The two paths as ``Path`` objects.

    Raises:
        AffixFileMissing: If ``affix`` is not a regular file.
        DictionaryFileMissing: If ``dictionary`` is not a regular file.
    """
    affix = Path(affix)
    if not affix.is_file():
        raise AffixFileMissing(affix)
    return affix, validate_dictionary(dictionary)


def validate_dictionary(dictionary) -> Path:
    """Check that a single dictionary file exists."""
    dictionary = Path(dictionary)
    if not dictionary.is_file():
        raise DictionaryFileMissing(dictionary)
    return dictionary


def _check_nul(data: bytes, what: str) -> bytes:
    pos = data.find(b"\0")
    if pos != -1:
        raise EmbeddedNulInInput(what, pos)
    return data


def to_cstring(value: str | bytes, encoding: str = "utf-8", *, what: str = "word") -> bytes:
    """Encode ``value`` for use as a C string argument.

    Args:
        value: Text, or bytes already in the dictionary encoding.
        encoding: Codec used for ``str`` input.
        what: Name of the argument, used in error messages.

    Raises:
        InvalidEncoding: If ``value`` cannot be represented in ``encoding``.
        EmbeddedNulInInput: If the encoded value contains a NUL byte.
        TypeError: If ``value`` is neither str nor bytes.
    """
    if isinstance(value, str):
        try:
            data = value.encode(encoding)
        except UnicodeEncodeError as e:
            raise InvalidEncoding(f"{what} cannot be encoded as {encoding}: {e}") from e
    elif isinstance(value, (bytes, bytearray)):
        data = bytes(value)
    else:
        raise TypeError(f"{what} must be str or bytes, not {type(value).__name__}")
    return _check_nul(data, what)


def path_to_cstring(path, *, what: str = "path") -> bytes:
    """Encode a filesystem path with the filesystem encoding."""
    try:
        data = os.fsencode(path)
    except UnicodeEncodeError as e:
        raise InvalidEncoding(f"{what} cannot be encoded for the filesystem: {e}") from e
    return _check_nul(data, what)


def normalize_encoding(name: str) -> str:
    """Map a Hunspell ``SET`` encoding name to a Python codec name.

    Raises:
        InvalidEncoding: If Python has no codec for ``name``.
    """
    key = name.strip().lower()
    key = _ENCODING_ALIASES.get(key, key)
    try:
        return codecs.lookup(key).name
    except LookupError as e:
        raise InvalidEncoding(f"unsupported dictionary encoding: {name!r}") from e
