"""Exclusive owner of one libhunspell ``Hunhandle``.

``NativeHandle`` is the only place raw libhunspell calls are issued. It takes
already encoded, NUL-free byte strings, so every conversion error has been
raised before the engine sees anything.

libhunspell is not documented as thread safe. A handle has no lock of its own:
callers keep a handle on one thread or serialize access to it themselves.
"""

from __future__ import annotations

import logging
from typing import Any

from ._loader import ffi, load_lib, load_libc
from .errors import (
    EngineConstructionFailed,
    EngineError,
    NegativeLength,
    NullPointer,
    SessionClosed,
)
from .transfer import NativeStringList, Ownership

__all__ = ["NativeHandle", "LIST_OWNERSHIP"]

logger = logging.getLogger(__name__)

# Owner of the list each call writes to its char*** out-parameter. libhunspell
# allocates all of them itself and frees them with Hunspell_free_list().
# HOST is for engines that hand a list's ownership to the caller.
LIST_OWNERSHIP = {
    "Hunspell_suggest": Ownership.NATIVE,
    "Hunspell_analyze": Ownership.NATIVE,
    "Hunspell_stem": Ownership.NATIVE,
    "Hunspell_stem2": Ownership.NATIVE,
    "Hunspell_generate": Ownership.NATIVE,
    "Hunspell_generate2": Ownership.NATIVE,
}


class NativeHandle:
    """Owns a ``Hunhandle *`` and releases it exactly once."""

    __slots__ = ("_ptr", "_lib")

    def __init__(self, ptr: Any, lib: Any) -> None:
        self._ptr = ptr
        self._lib = lib

    @classmethod
    def open(
        cls,
        affix: bytes,
        dictionary: bytes,
        key: bytes | None = None,
        *,
        lib: Any = None,
    ) -> "NativeHandle":
        """Create a handle with Hunspell_create() or Hunspell_create_key().

        Args:
            affix: Encoded path of the .aff file.
            dictionary: Encoded path of the .dic file.
            key: Key for hzip-encrypted dictionaries (optional).
            lib: Loaded libhunspell; the default is found by the loader.

        Raises:
            EngineConstructionFailed: If libhunspell returns NULL.
        """
        if lib is None:
            lib = load_lib()
        if key is None:
            ptr = lib.Hunspell_create(affix, dictionary)
        else:
            ptr = lib.Hunspell_create_key(affix, dictionary, key)
        if ptr == ffi.NULL:
            raise EngineConstructionFailed(
                f"Hunspell_create returned NULL for {affix!r}, {dictionary!r}"
            )
        logger.debug("opened hunspell handle for %r, %r", affix, dictionary)
        return cls(ptr, lib)

    @property
    def lib(self) -> Any:
        return self._lib

    @property
    def closed(self) -> bool:
        return self._ptr == ffi.NULL

    def close(self) -> None:
        """Destroy the native handle. Further calls are no-ops."""
        if self._ptr == ffi.NULL:
            return
        ptr, self._ptr = self._ptr, ffi.NULL
        self._lib.Hunspell_destroy(ptr)
        logger.debug("destroyed hunspell handle")

    def _handle(self) -> Any:
        if self._ptr == ffi.NULL:
            raise SessionClosed("hunspell handle has already been closed")
        return self._ptr

    def _check(self, rc: int, operation: str) -> None:
        if rc != 0:
            raise EngineError(rc, operation)

    def _release_native(self, slot: Any, count: int) -> None:
        self._lib.Hunspell_free_list(self._handle(), slot, max(count, 0))

    def _release_host(self, slot: Any, count: int) -> None:
        libc = load_libc()
        array = slot[0]
        for i in range(max(count, 0)):
            if array[i] != ffi.NULL:
                libc.free(array[i])
        libc.free(array)
        slot[0] = ffi.NULL

    def _list_call(self, name: str, *args: Any) -> NativeStringList:
        slot = ffi.new("char ***")
        count = getattr(self._lib, name)(self._handle(), slot, *args)
        ownership = LIST_OWNERSHIP[name]
        if ownership is Ownership.NATIVE:
            releaser = self._release_native
        else:
            releaser = self._release_host
        return NativeStringList(slot, count, ownership, releaser)

    # -- Dictionaries and runtime lexicon --

    def add_dictionary(self, dictionary: bytes) -> bool:
        """Load an extra .dic file; True when libhunspell reports success."""
        rc = self._lib.Hunspell_add_dic(self._handle(), dictionary)
        logger.debug("Hunspell_add_dic(%r) -> %d", dictionary, rc)
        return rc == 0

    def add(self, word: bytes) -> None:
        self._check(self._lib.Hunspell_add(self._handle(), word), "add")

    def add_with_affix(self, word: bytes, example: bytes) -> None:
        rc = self._lib.Hunspell_add_with_affix(self._handle(), word, example)
        self._check(rc, "add_with_affix")

    def remove(self, word: bytes) -> None:
        self._check(self._lib.Hunspell_remove(self._handle(), word), "remove")

    # -- Queries --

    def spell(self, word: bytes) -> bool:
        """Hunspell_spell() returns nonzero for a correct word."""
        return self._lib.Hunspell_spell(self._handle(), word) != 0

    def dic_encoding(self) -> str:
        """The SET encoding name of the loaded dictionary."""
        raw = self._lib.Hunspell_get_dic_encoding(self._handle())
        if raw == ffi.NULL:
            return "UTF-8"
        # any byte decodes; unknown names fail in normalize_encoding()
        return ffi.string(raw).decode("latin-1")

    def suggest(self, word: bytes) -> NativeStringList:
        return self._list_call("Hunspell_suggest", word)

    def analyze(self, word: bytes) -> NativeStringList:
        return self._list_call("Hunspell_analyze", word)

    def stem(self, word: bytes) -> NativeStringList:
        return self._list_call("Hunspell_stem", word)

    def generate(self, word: bytes, model: bytes) -> NativeStringList:
        return self._list_call("Hunspell_generate", word, model)

    def stem_from_analysis(self, analysis: NativeStringList) -> NativeStringList:
        """Second step of extended stemming (Hunspell_stem2)."""
        _check_analysis(analysis)
        return self._list_call("Hunspell_stem2", analysis.pointer, analysis.count)

    def generate_from_analysis(
        self, model: bytes, analysis: NativeStringList
    ) -> NativeStringList:
        """Second step of extended generation (Hunspell_generate2)."""
        _check_analysis(analysis)
        return self._list_call(
            "Hunspell_generate2", model, analysis.pointer, analysis.count
        )


def _check_analysis(analysis: NativeStringList) -> None:
    # The intermediate list is handed back to C unread; validate it the same
    # way decode_list() would.
    if analysis.released:
        raise RuntimeError("Cannot reuse a list after release()")
    if analysis.count < 0:
        raise NegativeLength(analysis.count)
    if analysis.count and analysis.pointer == ffi.NULL:
        raise NullPointer()
