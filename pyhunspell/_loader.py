"""Dynamic loader for libhunspell using CFFI (ABI mode).

Nothing is compiled at install time. The declarations in hunspell_cdef.h are
parsed once at import, while the shared library itself is only opened when the
first session needs it, so importing pyhunspell works without libhunspell.

Environment variables:
- HUNSPELL_LIB_PATH: full path to the libhunspell shared library to load
- HUNSPELL_LIB_DIR: directory containing the shared library

Exports:
- ffi: a cffi.FFI instance with the libhunspell API declared
- load_lib(): the loaded libhunspell (ffi.dlopen), cached
- load_libc(): the C runtime, for releasing caller-owned allocations
"""

from __future__ import annotations

import ctypes.util
import logging
import os
import sys
from pathlib import Path
from typing import Any, Iterable

from cffi import FFI

__all__ = ["ffi", "load_lib", "load_libc"]

logger = logging.getLogger(__name__)

# find_library() names, newest API first
_LIBRARY_NAMES = ("hunspell-1.7", "hunspell-1.6", "hunspell")

ffi = FFI()
ffi.cdef(Path(__file__).with_name("hunspell_cdef.h").read_text(encoding="utf-8"))

_lib: Any = None
_libc: Any = None


def _platform_lib_names() -> tuple[str, ...]:
    if sys.platform == "darwin":
        return (
            "libhunspell-1.7.0.dylib",
            "libhunspell-1.7.dylib",
            "libhunspell-1.6.0.dylib",
            "libhunspell.dylib",
        )
    if os.name == "nt":
        return ("libhunspell.dll", "hunspell.dll", "libhunspell-1.7-0.dll")
    return (
        "libhunspell-1.7.so.0",
        "libhunspell-1.7.so",
        "libhunspell-1.6.so.0",
        "libhunspell.so",
    )


def _candidate_paths() -> Iterable[str]:
    # 1) Explicit override
    p = os.environ.get("HUNSPELL_LIB_PATH")
    if p:
        yield p

    # 2) Directory override
    d = os.environ.get("HUNSPELL_LIB_DIR")
    if d:
        for name in _platform_lib_names():
            path = Path(d) / name
            if path.exists():
                yield str(path)

    # 3) A library staged inside the package
    pkg_build = Path(__file__).parent / "build"
    for name in _platform_lib_names():
        path = pkg_build / name
        if path.exists():
            yield str(path)

    # 4) System search via ctypes
    for name in _LIBRARY_NAMES:
        found = ctypes.util.find_library(name)
        if found:
            yield found

    # 5) Let the dynamic loader search system paths
    yield from _platform_lib_names()


def load_lib() -> Any:
    """Return the loaded libhunspell, opening it on first use.

    Raises:
        OSError: If no candidate could be loaded.
    """
    global _lib
    if _lib is not None:
        return _lib
    last_err: Exception | None = None
    for cand in _candidate_paths():
        try:
            _lib = ffi.dlopen(cand)
        except OSError as e:  # try next candidate
            last_err = e
            continue
        logger.debug("loaded libhunspell from %s", cand)
        return _lib
    hint = (
        "Set HUNSPELL_LIB_PATH to the full path of libhunspell or HUNSPELL_LIB_DIR "
        "to the folder containing it, or install libhunspell system-wide."
    )
    raise OSError(f"Could not load libhunspell: {last_err}\n{hint}")


def load_libc() -> Any:
    """Return the C runtime, used to free lists owned by the caller."""
    global _libc
    if _libc is not None:
        return _libc
    libc_name = ctypes.util.find_library("c")
    if libc_name:
        try:
            _libc = ffi.dlopen(libc_name)
            return _libc
        except OSError:
            logger.debug("could not dlopen %s, falling back to process globals", libc_name)
    # Fallback: try process globals (works on many Unix platforms)
    try:
        _libc = ffi.dlopen(None)
    except OSError as e:
        raise OSError(f"Unable to load the C runtime: {e}") from e
    return _libc
