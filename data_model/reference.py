"""
data_model/reference.py — read-only reference dictionaries.

ReferenceData is built once per batch (see reference.dictionaries) and passed
explicitly to every component that needs lookups. Nothing mutates it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


def _frozen(mapping: Mapping | None = None) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True, slots=True)
class ReferenceData:
    """
    - street_names:    "MAIN STREET" -> ("MENINGIE", "TAILEM BEND")
    - street_suffixes: "ST" -> "STREET"
    - suburb_names:    "MENINGIE" -> "MENINGIE SA 5264"
    - hundred_names:   ("BONNEY", ...)  (loaded, not used by extraction)
    """

    street_names: Mapping[str, tuple[str, ...]] = field(default_factory=_frozen)
    street_suffixes: Mapping[str, str] = field(default_factory=_frozen)
    suburb_names: Mapping[str, str] = field(default_factory=_frozen)
    hundred_names: tuple[str, ...] = ()
    suffix_expansions: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "suffix_expansions", frozenset(self.street_suffixes.values()))

    @classmethod
    def build(
        cls,
        street_names: Mapping[str, list[str] | tuple[str, ...]] | None = None,
        street_suffixes: Mapping[str, str] | None = None,
        suburb_names: Mapping[str, str] | None = None,
        hundred_names: list[str] | tuple[str, ...] = (),
    ) -> ReferenceData:
        """Copies plain dicts into immutable mappings (keys and values upper-cased)."""
        return cls(
            street_names=_frozen({
                k.strip().upper(): tuple(s.strip().upper() for s in v)
                for k, v in (street_names or {}).items()
            }),
            street_suffixes=_frozen({
                k.strip().upper(): v.strip().upper()
                for k, v in (street_suffixes or {}).items()
            }),
            suburb_names=_frozen({
                k.strip().upper(): v.strip().upper()
                for k, v in (suburb_names or {}).items()
            }),
            hundred_names=tuple(h.strip().upper() for h in hundred_names),
        )

    def expand_suffix(self, token: str) -> str | None:
        """
        Bidirectional suffix lookup.

        Returns the expansion of an abbreviation ("HWY" -> "HIGHWAY"), the token
        itself when it already is an expansion, or None when unrecognised.
        """
        key = token.strip().upper()
        if key in self.street_suffixes:
            return self.street_suffixes[key]
        if key in self.suffix_expansions:
            return key
        return None
