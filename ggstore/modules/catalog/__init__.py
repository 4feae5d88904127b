"""Catalog exports"""

from .catalog import Catalog, CatalogEntry, default_catalog
from .exceptions import CatalogError, UnknownItemTypeError
from .generators import generate_gg, generate_test_card, luhn_check_digit, luhn_is_valid

__all__ = [
    "Catalog",
    "CatalogEntry",
    "CatalogError",
    "UnknownItemTypeError",
    "default_catalog",
    "generate_gg",
    "generate_test_card",
    "luhn_check_digit",
    "luhn_is_valid",
]
