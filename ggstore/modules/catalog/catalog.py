"""Item catalog: tag -> price and generator capability."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Iterable, Iterator, Optional

from .exceptions import UnknownItemTypeError
from .generators import generate_gg, generate_test_card

Generator = Callable[[Optional[random.Random]], str]


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    tag: str
    label: str
    unit_price: Decimal
    generate: Generator
    aliases: tuple[str, ...] = ()


@dataclass(slots=True)
class Catalog:
    entries: dict[str, CatalogEntry] = field(default_factory=dict)
    _lookup: dict[str, str] = field(default_factory=dict, repr=False)

    @classmethod
    def from_entries(cls, entries: Iterable[CatalogEntry]) -> "Catalog":
        catalog = cls()
        for entry in entries:
            catalog.register(entry)
        return catalog

    def register(self, entry: CatalogEntry) -> None:
        self.entries[entry.tag] = entry
        for name in (entry.tag, *entry.aliases):
            self._lookup[name.lower()] = entry.tag

    def resolve(self, item_type: str) -> CatalogEntry:
        tag = self._lookup.get((item_type or "").strip().lower())
        if tag is None:
            raise UnknownItemTypeError(item_type, sorted(self.entries))
        return self.entries[tag]

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self.entries.values())


def default_catalog() -> Catalog:
    return Catalog.from_entries(
        [
            CatalogEntry("gg", "GG", Decimal("5.00"), generate_gg),
            CatalogEntry(
                "card",
                "cartão de teste",
                Decimal("10.00"),
                generate_test_card,
                aliases=("cartao", "cartão"),
            ),
        ]
    )
