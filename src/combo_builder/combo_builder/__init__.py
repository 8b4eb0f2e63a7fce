"""Combo products: "choose N for a base price, extras cost extra"."""

from .admin import ComboAdmin
from .builder import ComboBuilder
from .cart import CartSink, InMemoryCart, format_price, format_summary
from .catalog import CatalogLookup, JsonCatalog
from .enums import BuilderState, SlotKind, ValidationRule
from .exceptions import (
    BuilderStateError,
    ComboError,
    ComboNotFoundError,
    ComboValidationError,
    CommitPreconditionError,
    PersistenceError,
)
from .models import (
    CartLine,
    CartLineEntry,
    CatalogProduct,
    ComboChanges,
    ComboConfig,
    ComboDraft,
    ComboOption,
    PricedOption,
    PricedSelection,
)
from .pricing import price_selection
from .store import ComboStore, JsonFileStorage, MemoryStorage, WriteResult
from .validation import check_combo, validate_combo

__all__ = [
    "BuilderState",
    "BuilderStateError",
    "CartLine",
    "CartLineEntry",
    "CartSink",
    "CatalogLookup",
    "CatalogProduct",
    "ComboAdmin",
    "ComboBuilder",
    "ComboChanges",
    "ComboConfig",
    "ComboDraft",
    "ComboError",
    "ComboNotFoundError",
    "ComboOption",
    "ComboStore",
    "ComboValidationError",
    "CommitPreconditionError",
    "InMemoryCart",
    "JsonCatalog",
    "JsonFileStorage",
    "MemoryStorage",
    "PersistenceError",
    "PricedOption",
    "PricedSelection",
    "SlotKind",
    "ValidationRule",
    "WriteResult",
    "check_combo",
    "format_price",
    "format_summary",
    "price_selection",
    "validate_combo",
]
