"""Hunspell spell checker session.

Usage:
    with SpellChecker("en_US.aff", "en_US.dic") as sc:
        sc.check("cats")        # True
        sc.suggest("progra")    # ["program", ...]
        sc.stem("cats")         # ["cat"]

A session owns one libhunspell handle. It has no internal lock; keep a session
on one thread or serialize calls to it. Every method, including the ones that
look like pure queries, may change the engine's internal state.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from ._handle import NativeHandle
from .config import SpellCheckerConfig
from .errors import EngineConstructionFailed, SessionClosed, TooManyDictionaries
from .util import (
    normalize_encoding,
    path_to_cstring,
    to_cstring,
    validate_dictionary,
    validate_paths,
)

__all__ = ["SpellChecker", "MAX_ADDITIONAL_DICTIONARIES"]

logger = logging.getLogger(__name__)

MAX_ADDITIONAL_DICTIONARIES = 20


class SpellChecker:
    """Spell checking, stemming, morphological analysis and generation.

    Args:
        affix: Path of the hunspell affix file (.aff).
        dictionary: Path of the hunspell dictionary file (.dic).
        key: Key to decrypt dictionaries encrypted with hzip (optional).
        lib: Loaded libhunspell to use instead of the one found by the loader.

    Raises:
        AffixFileMissing: If ``affix`` is not an existing file.
        DictionaryFileMissing: If ``dictionary`` is not an existing file.
        EmbeddedNulInInput: If a path or the key contains a NUL byte.
        InvalidEncoding: If a path or the key cannot be encoded.
        EngineConstructionFailed: If libhunspell cannot open the files.
    """

    __slots__ = ("_affix", "_dictionary", "_additional", "_key", "_lib", "_handle", "_encoding")

    def __init__(self, affix, dictionary, key: str | None = None, *, lib: Any = None) -> None:
        self._handle = None
        affix_c = path_to_cstring(affix, what="affix path")
        dictionary_c = path_to_cstring(dictionary, what="dictionary path")
        key_c = None if key is None else to_cstring(key, what="key")
        affix, dictionary = validate_paths(affix, dictionary)

        handle = NativeHandle.open(affix_c, dictionary_c, key_c, lib=lib)
        try:
            encoding = normalize_encoding(handle.dic_encoding())
        except BaseException:
            handle.close()
            raise

        self._affix = affix
        self._dictionary = dictionary
        self._additional: list[Path] = []
        self._key = key
        self._lib = handle.lib
        self._encoding = encoding
        self._handle = handle

    @classmethod
    def with_key(cls, affix, dictionary, key: str, *, lib: Any = None) -> "SpellChecker":
        """Open an hzip-encrypted dictionary with ``key``."""
        return cls(affix, dictionary, key, lib=lib)

    @classmethod
    def from_config(cls, config: SpellCheckerConfig, *, lib: Any = None) -> "SpellChecker":
        """Open a session and replay every additional dictionary of ``config``.

        Raises:
            EngineConstructionFailed: If libhunspell rejects a replayed dictionary.
            Any error the constructor or add_dictionary() raises.
        """
        sc = cls(config.affix, config.dictionary, config.key, lib=lib)
        try:
            for path in config.additional_dictionaries:
                if not sc.add_dictionary(path):
                    raise EngineConstructionFailed(f"hunspell could not load dictionary {path}")
        except BaseException:
            sc.close()
            raise
        return sc

    # -- Lifecycle --

    def __del__(self):
        self.close()

    def __enter__(self) -> "SpellChecker":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def close(self) -> None:
        """Release the native handle. Safe to call more than once."""
        if self._handle is not None:
            self._handle.close()

    @property
    def closed(self) -> bool:
        return self._handle is None or self._handle.closed

    def clone(self) -> "SpellChecker":
        """Return an independent session opened from the same configuration.

        The clone gets a fresh native handle; words added at runtime with
        add() are not carried over.

        Raises:
            AffixFileMissing, DictionaryFileMissing: If a file no longer exists.
            EngineConstructionFailed: If libhunspell cannot reopen the files.
        """
        return type(self).from_config(self.config, lib=self._lib)

    __copy__ = clone

    def __deepcopy__(self, memo) -> "SpellChecker":
        return self.clone()

    def __reduce__(self):
        return (_restore, (self.config,))

    # -- Configuration --

    @property
    def affix(self) -> Path:
        return self._affix

    @property
    def dictionary(self) -> Path:
        return self._dictionary

    @property
    def additional_dictionaries(self) -> tuple[Path, ...]:
        return tuple(self._additional)

    @property
    def key(self) -> str | None:
        return self._key

    @property
    def encoding(self) -> str:
        """Python codec name of the dictionary encoding."""
        return self._encoding

    @property
    def config(self) -> SpellCheckerConfig:
        return SpellCheckerConfig(self._affix, self._dictionary, self._additional, self._key)

    def add_dictionary(self, dictionary) -> bool:
        """Load an additional dictionary for lookups.

        The extra dictionary uses this session's affix file. At most
        MAX_ADDITIONAL_DICTIONARIES can be added.

        Returns:
            Whether libhunspell loaded it. The path is recorded only on success.

        Raises:
            TooManyDictionaries: If the limit is already reached.
            DictionaryFileMissing: If ``dictionary`` is not an existing file.
        """
        if len(self._additional) >= MAX_ADDITIONAL_DICTIONARIES:
            raise TooManyDictionaries(dictionary, MAX_ADDITIONAL_DICTIONARIES)
        dictionary_c = path_to_cstring(dictionary, what="dictionary path")
        path = validate_dictionary(dictionary)
        ok = self._native().add_dictionary(dictionary_c)
        if ok:
            self._additional.append(path)
        else:
            logger.debug("hunspell rejected additional dictionary %s", path)
        return ok

    # -- Runtime lexicon --

    def add(self, word: str) -> None:
        """Add a word to the runtime dictionary.

        Runtime words last as long as the session. For a permanent addition,
        put the words in a dictionary file and use add_dictionary().
        """
        self._native().add(self._enc(word))

    def add_with_affix(self, word: str, example: str) -> None:
        """Add a word that takes the affixes and compounding of ``example``."""
        word_c = self._enc(word)
        example_c = self._enc(example, "example")
        self._native().add_with_affix(word_c, example_c)

    def remove(self, word: str) -> None:
        """Remove a word added with add() or add_with_affix()."""
        self._native().remove(self._enc(word))

    # -- Queries --

    def check(self, word: str) -> bool:
        """Return True if ``word`` is spelled correctly."""
        return self._native().spell(self._enc(word))

    def __contains__(self, word: str) -> bool:
        return self.check(word)

    def suggest(self, word: str) -> list[str]:
        """Suggested spellings, in the engine's order."""
        with self._native().suggest(self._enc(word)) as found:
            return found.decode(self._encoding)

    def analyze(self, word: str) -> list[str]:
        """Morphological analyses of ``word``."""
        with self._native().analyze(self._enc(word)) as found:
            return found.decode(self._encoding)

    def stem(self, word: str) -> list[str]:
        with self._native().stem(self._enc(word)) as found:
            return found.decode(self._encoding)

    def extended_stem(self, word: str) -> list[str]:
        """Stems derived from the morphological analysis of ``word``."""
        handle = self._native()
        with handle.analyze(self._enc(word)) as analyzed:
            with handle.stem_from_analysis(analyzed) as found:
                return found.decode(self._encoding)

    def generate(self, word: str, model: str) -> list[str]:
        """Forms of ``word`` built on the affixation of ``model``.

        For example, generate("dog", "cats") gives ["dogs"] with a
        dictionary where both take the same plural suffix.
        """
        word_c = self._enc(word)
        model_c = self._enc(model, "model word")
        with self._native().generate(word_c, model_c) as found:
            return found.decode(self._encoding)

    def extended_generate(self, word: str, model: str) -> list[str]:
        """Forms of ``model`` that carry the morphology of ``word``.

        ``word`` is analyzed first and the analyses drive the generation,
        so extended_generate("cats", "dog") gives the same ["dogs"] as
        generate("dog", "cats").
        """
        word_c = self._enc(word)
        model_c = self._enc(model, "model word")
        handle = self._native()
        with handle.analyze(word_c) as analyzed:
            with handle.generate_from_analysis(model_c, analyzed) as found:
                return found.decode(self._encoding)

    # -- Internals --

    def _native(self) -> NativeHandle:
        if self._handle is None:
            raise SessionClosed("session was never opened")
        return self._handle

    def _enc(self, word: str, what: str = "word") -> bytes:
        return to_cstring(word, self._encoding, what=what)

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return (
            f"SpellChecker(affix={str(self._affix)!r}, dictionary={str(self._dictionary)!r}, "
            f"additional_dictionaries={len(self._additional)}, {state})"
        )


def _restore(config: SpellCheckerConfig) -> SpellChecker:
    return SpellChecker.from_config(config)
