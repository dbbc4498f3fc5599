"""Transfer of libhunspell string lists into Python.

libhunspell returns lists as an out-parameter ``char ***slst`` plus an ``int``
count. The strings are copied into Python ``str`` objects and the C list is
then released, once, by whichever allocator owns it.
"""

from __future__ import annotations

import enum
from typing import Any, Callable

from ._loader import ffi
from .errors import InvalidEncoding, NegativeLength, NullPointer

__all__ = ["Ownership", "NativeStringList", "decode_list"]


class Ownership(enum.Enum):
    """Which allocator must release a returned list."""

    #: Released with Hunspell_free_list() on the producing handle.
    NATIVE = "native"
    #: Ownership moved to the caller; each string and the array go to libc free().
    HOST = "host"


def decode_list(pointer: Any, count: int, encoding: str = "utf-8") -> list[str]:
    """Copy ``count`` C strings from a ``char **`` into a list of str.

    A zero count yields an empty list without touching ``pointer``.

    Raises:
        NegativeLength: If ``count`` is negative.
        NullPointer: If ``pointer`` or one of its elements is NULL.
        InvalidEncoding: If an element is not valid ``encoding`` text.
    """
    if count == 0:
        return []
    if count < 0:
        raise NegativeLength(count)
    if pointer == ffi.NULL:
        raise NullPointer()
    result = []
    for i in range(count):
        item = pointer[i]
        if item == ffi.NULL:
            raise NullPointer(i)
        raw = ffi.string(item)
        try:
            result.append(raw.decode(encoding))
        except UnicodeDecodeError as e:
            raise InvalidEncoding(
                f"hunspell returned invalid {encoding} at index {i}: {raw!r}"
            ) from e
    return result


class NativeStringList:
    """One list produced by a single libhunspell call.

    Holds the ``char ***`` out-slot the call wrote into, the returned count and
    the releaser for the list's owner. Use it as a context manager so the list
    is released on every exit path:

        with handle.suggest(b"progra") as found:
            words = found.decode()
    """

    __slots__ = ("_slot", "_count", "_ownership", "_releaser", "_released")

    def __init__(
        self,
        slot: Any,
        count: int,
        ownership: Ownership,
        releaser: Callable[[Any, int], None],
    ) -> None:
        self._slot = slot
        self._count = count
        self._ownership = ownership
        self._releaser = releaser
        self._released = False

    @property
    def count(self) -> int:
        return self._count

    @property
    def pointer(self) -> Any:
        """The ``char **`` array, NULL when the engine returned nothing."""
        return self._slot[0]

    @property
    def ownership(self) -> Ownership:
        return self._ownership

    @property
    def released(self) -> bool:
        return self._released

    def decode(self, encoding: str = "utf-8") -> list[str]:
        """Copy the list into Python strings."""
        if self._released:
            raise RuntimeError("Cannot call decode() after release()")
        return decode_list(self._slot[0], self._count, encoding)

    def release(self) -> None:
        """Give the list back to its owner. Must be called exactly once."""
        if self._released:
            raise RuntimeError("Cannot call release() after release()")
        self._released = True
        if self._slot[0] != ffi.NULL:
            self._releaser(self._slot, self._count)

    def __enter__(self) -> "NativeStringList":
        return self

    def __exit__(self, *args) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self._released else "live"
        return f"NativeStringList(count={self._count}, {self._ownership.name}, {state})"
