"""Serializable configuration of a SpellChecker.

Only what is needed to open an equivalent session is stored: the affix and
dictionary paths, the additional dictionaries in the order they were added and
the optional key. The native handle is never part of it.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path

__all__ = ["SpellCheckerConfig"]

FIELDS = ("affix", "dictionary", "additional_dictionaries", "key")


class SpellCheckerConfig:
    """Paths and key of a SpellChecker."""

    __slots__ = FIELDS

    def __init__(
        self,
        affix,
        dictionary,
        additional_dictionaries: Sequence = (),
        key: str | None = None,
    ) -> None:
        self.affix = Path(affix)
        self.dictionary = Path(dictionary)
        self.additional_dictionaries = tuple(Path(d) for d in additional_dictionaries)
        self.key = key

    def to_dict(self) -> dict:
        return {
            "affix": str(self.affix),
            "dictionary": str(self.dictionary),
            "additional_dictionaries": [str(d) for d in self.additional_dictionaries],
            "key": self.key,
        }

    @classmethod
    def from_dict(cls, data: Mapping | Sequence) -> "SpellCheckerConfig":
        """Build a config from a mapping, or a sequence in field order.

        All four fields are required; ``key`` may be None.

        Raises:
            ValueError: If a field is missing, unknown, or of the wrong type.
        """
        if isinstance(data, Mapping):
            unknown = set(data) - set(FIELDS)
            if unknown:
                raise ValueError(f"unknown field(s): {', '.join(sorted(map(str, unknown)))}")
            for name in FIELDS:
                if name not in data:
                    raise ValueError(f"missing field {name!r}")
            values = [data[name] for name in FIELDS]
        elif isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
            if len(data) != len(FIELDS):
                raise ValueError(
                    f"expected {len(FIELDS)} elements ({', '.join(FIELDS)}), got {len(data)}"
                )
            values = list(data)
        else:
            raise ValueError(f"cannot build a config from {type(data).__name__}")

        affix, dictionary, additional, key = values
        if isinstance(additional, (str, bytes)) or not isinstance(additional, Sequence):
            raise ValueError("additional_dictionaries must be a list of paths")
        if key is not None and not isinstance(key, str):
            raise ValueError("key must be a string or null")
        return cls(affix, dictionary, additional, key)

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    @classmethod
    def from_json(cls, text: str | bytes) -> "SpellCheckerConfig":
        return cls.from_dict(json.loads(text))

    def __eq__(self, other) -> bool:
        if not isinstance(other, SpellCheckerConfig):
            return NotImplemented
        return all(getattr(self, f) == getattr(other, f) for f in FIELDS)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"SpellCheckerConfig(affix={str(self.affix)!r}, "
            f"dictionary={str(self.dictionary)!r}, "
            f"additional_dictionaries={[str(d) for d in self.additional_dictionaries]!r}, "
            f"key={'***' if self.key is not None else None})"
        )
