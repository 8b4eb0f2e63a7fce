"""Operator-side combo management.

Every create and update goes through `validation.validate_combo` before the
store is touched. Updates are validated against the stored record with the
changes merged in, so a partial update cannot sneak past a rule (for
example, deactivating options until fewer remain than the base count).
"""

import uuid
from decimal import Decimal, InvalidOperation

from loguru import logger

from .cart import format_price
from .catalog import CatalogLookup
from .enums import ValidationRule
from .exceptions import ComboNotFoundError, ComboValidationError
from .models import ComboChanges, ComboConfig, ComboDraft, ComboOption
from .store import ComboStore, WriteResult
from .validation import validate_combo


class ComboAdmin:
    def __init__(
        self,
        store: ComboStore,
        catalog: CatalogLookup | None = None,
        currency_code: str = "GHS",
    ) -> None:
        self.store = store
        self.catalog = catalog
        self.currency_code = currency_code

    # -----------------------------------------------------------------------
    # Reads
    # -----------------------------------------------------------------------

    def list_combos(self) -> list[ComboConfig]:
        return self.store.get_all()

    def get_combo(self, combo_id: str) -> ComboConfig | None:
        return self.store.get_by_id(combo_id)

    def linkable_products(self) -> list[tuple[str, str]]:
        """(product id, label) pairs for choosing the product a combo sells as."""
        if self.catalog is None:
            return []
        return [
            (product.id, f"{product.name} — {format_price(product.price, self.currency_code)}")
            for product in self.catalog.list_products()
        ]

    # -----------------------------------------------------------------------
    # Writes
    # -----------------------------------------------------------------------

    def _check(self, combo: ComboDraft) -> None:
        validate_combo(combo)
        if self.catalog is not None and self.catalog.get_product(combo.base_product_id) is None:
            raise ComboValidationError(
                ValidationRule.UNKNOWN_PRODUCT,
                f"linked product {combo.base_product_id} is not in the catalog",
            )

    def create_combo(self, draft: ComboDraft) -> WriteResult:
        draft = draft.model_copy(
            update={
                "name": draft.name.strip(),
                "description": draft.description.strip(),
                "base_product_id": draft.base_product_id.strip(),
            }
        )
        self._check(draft)
        return self.store.create(draft)

    def update_combo(self, combo_id: str, changes: ComboChanges) -> WriteResult | None:
        current = self.store.get_by_id(combo_id)
        if current is None:
            return None
        self._check(current.merged(changes))
        return self.store.update(combo_id, changes)

    def delete_combo(self, combo_id: str) -> WriteResult:
        logger.info("Deleting combo {}", combo_id)
        return self.store.delete(combo_id)

    # -----------------------------------------------------------------------
    # Option editing
    # -----------------------------------------------------------------------

    @staticmethod
    def new_option(name: str, price: Decimal | str | int) -> ComboOption:
        """Build a fresh active option with a generated id."""
        name = name.strip()
        try:
            price = Decimal(str(price))
        except InvalidOperation:
            price = None
        if not name or price is None or not price.is_finite() or price < 0:
            raise ComboValidationError(
                ValidationRule.OPTION_INVALID,
                "option needs a name and a non-negative price",
            )
        return ComboOption(id=uuid.uuid4().hex, name=name, price=price)

    def _require(self, combo_id: str) -> ComboConfig:
        combo = self.store.get_by_id(combo_id)
        if combo is None:
            raise ComboNotFoundError(combo_id)
        return combo

    def add_option(self, combo_id: str, name: str, price: Decimal | str | int) -> WriteResult:
        combo = self._require(combo_id)
        options = [*combo.options, self.new_option(name, price)]
        return self.update_combo(combo_id, ComboChanges(options=options))

    def set_option_active(self, combo_id: str, option_id: str, active: bool) -> WriteResult:
        combo = self._require(combo_id)
        if combo.option(option_id) is None:
            raise ComboNotFoundError(combo_id, option_id)
        options = [
            o.model_copy(update={"is_active": active}) if o.id == option_id else o
            for o in combo.options
        ]
        return self.update_combo(combo_id, ComboChanges(options=options))

    def remove_option(self, combo_id: str, option_id: str) -> WriteResult:
        combo = self._require(combo_id)
        if combo.option(option_id) is None:
            raise ComboNotFoundError(combo_id, option_id)
        options = [o for o in combo.options if o.id != option_id]
        return self.update_combo(combo_id, ComboChanges(options=options))
