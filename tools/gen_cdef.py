#!/usr/bin/env python3
"""Generate the CFFI cdef file from the libhunspell C header.

This script parses hunspell.h and extracts the opaque handle typedef and the
Hunspell_* function declarations needed by pyhunspell, writing them to
pyhunspell/hunspell_cdef.h.

Usage:
    tools/gen_cdef.py [path/to/hunspell.h]
"""

import pathlib
import re
import sys

# Functions bound by pyhunspell, in the order they are written out
FUNCTIONS = (
    "Hunspell_create",
    "Hunspell_create_key",
    "Hunspell_destroy",
    "Hunspell_add_dic",
    "Hunspell_spell",
    "Hunspell_get_dic_encoding",
    "Hunspell_suggest",
    "Hunspell_analyze",
    "Hunspell_stem",
    "Hunspell_stem2",
    "Hunspell_generate",
    "Hunspell_generate2",
    "Hunspell_add",
    "Hunspell_add_with_affix",
    "Hunspell_remove",
    "Hunspell_free_list",
)

LIBC_DECLARATIONS = (
    "/* libc, for lists whose ownership moved to the caller */",
    "void free(void* ptr);",
)


def preprocess_content(content: str) -> str:
    """Remove comments, preprocessor directives, and extern "C" blocks."""
    content = re.sub(r"/\*.*?\*/", " ", content, flags=re.DOTALL)
    content = re.sub(r"//.*$", "", content, flags=re.MULTILINE)
    content = re.sub(r"^\s*#.*$", "", content, flags=re.MULTILINE)
    content = re.sub(r'extern\s+"C"\s*\{', "", content)
    content = re.sub(r"(?:^|\n)\s*\}\s*(?:\n|$)", "\n", content, flags=re.MULTILINE)
    return content


def clean_declaration(text: str) -> str:
    """Clean up a C declaration for CFFI consumption."""
    text = re.sub(r"\bLIBHUNSPELL_DLL_EXPORTED\b", "", text)
    text = re.sub(r"\bHUNSPELL_WARN_UNUSED_RESULT\b", "", text)
    text = re.sub(r"\s+", " ", text).strip()
    text = re.sub(r"\s*\*\s*", "* ", text)
    text = re.sub(r"\*\s+\*", "**", text)
    text = re.sub(r"\*\s+\*", "**", text)
    text = re.sub(r"\(\s+", "(", text)
    text = re.sub(r"\s+\)", ")", text)
    text = re.sub(r"\s*,\s*", ", ", text)
    return text.replace("* )", "*)").replace("* ,", "*,")


def extract_declarations(content: str) -> tuple[list[str], dict[str, str]]:
    """Return (typedefs, {function name: declaration}) found in a header."""
    content = preprocess_content(content)
    typedefs = [
        clean_declaration(m.group(0))
        for m in re.finditer(r"typedef\s+struct\s+\w+\s+\w+\s*;", content)
    ]
    functions = {}
    func_pattern = r"([A-Za-z_][\w\s\*]*?\b(Hunspell_\w+)\s*\([^;{]*?\)\s*;)"
    for match in re.finditer(func_pattern, content, re.DOTALL):
        functions[match.group(2)] = clean_declaration(match.group(1))
    return typedefs, functions


def generate_cdef(header: pathlib.Path) -> str:
    """Generate the complete CFFI cdef string from hunspell.h."""
    typedefs, functions = extract_declarations(header.read_text(encoding="utf-8"))
    missing = [name for name in FUNCTIONS if name not in functions]
    if missing:
        raise ValueError(f"{header} does not declare: {', '.join(missing)}")

    lines = [
        "/* This file is generated with tools/gen_cdef.py. Do not edit. */",
        "",
        *typedefs,
        "",
        f"/* {header.name} */",
        *(functions[name] for name in FUNCTIONS),
        "",
        *LIBC_DECLARATIONS,
        "",
    ]
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    root = pathlib.Path(__file__).parent.parent
    if argv:
        header = pathlib.Path(argv[0])
    else:
        header = pathlib.Path("/usr/include/hunspell/hunspell.h")

    if not header.exists():
        print(f"Header not found: {header}", file=sys.stderr)
        return 1

    try:
        cdef_string = generate_cdef(header)
    except ValueError as e:
        print(e, file=sys.stderr)
        return 1

    output_path = root / "pyhunspell" / "hunspell_cdef.h"
    output_path.write_text(cdef_string, encoding="utf-8")
    print(f"Generated: {output_path}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
