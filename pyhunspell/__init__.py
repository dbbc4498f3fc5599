"""Hunspell spell checking, stemming and morphology via CFFI.

Usage:
    from pyhunspell import SpellChecker

    sc = SpellChecker("en_US.aff", "en_US.dic")
    sc.check("cats")        # True
    sc.suggest("progra")    # ["program", ...]
    sc.close()

libhunspell is located at first use; set HUNSPELL_LIB_PATH or HUNSPELL_LIB_DIR
to point at a specific build.
"""

from .config import SpellCheckerConfig
from .errors import (
    AffixFileMissing,
    DictionaryFileMissing,
    EmbeddedNulInInput,
    EngineConstructionFailed,
    EngineError,
    HunspellError,
    InvalidEncoding,
    NegativeLength,
    NullPointer,
    SessionClosed,
    TooManyDictionaries,
)
from .spellchecker import MAX_ADDITIONAL_DICTIONARIES, SpellChecker

__all__ = [
    "SpellChecker",
    "SpellCheckerConfig",
    "MAX_ADDITIONAL_DICTIONARIES",
    # errors
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
