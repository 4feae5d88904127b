"""Catalog specific exceptions."""

from typing import Sequence


class CatalogError(Exception):
    """Base class for catalog errors."""


class UnknownItemTypeError(CatalogError):
    """Raised when a purchase names an item type that is not for sale."""

    def __init__(self, item_type: str, available: Sequence[str]) -> None:
        self.item_type = item_type
        self.available = tuple(available)
        super().__init__(f"Unknown item type {item_type!r}")
