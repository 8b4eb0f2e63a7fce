"""Interactive combo build for one customer.

A ComboBuilder is either IDLE (no combo open) or BUILDING. While building,
every toggle re-prices the whole selection; commit hands a single CartLine
to the cart sink and returns to IDLE whether or not the sink succeeded.
"""

from loguru import logger

from .cart import CartSink, format_price, quantize_money
from .enums import BuilderState, SlotKind
from .exceptions import BuilderStateError, CommitPreconditionError
from .models import CartLine, CartLineEntry, ComboConfig, PricedSelection
from .pricing import price_selection


def fallback_description(count: int) -> str:
    return f"Custom combo with {count} flavour{'s' if count != 1 else ''}."


class ComboBuilder:
    def __init__(
        self,
        cart: CartSink,
        currency_code: str = "GHS",
        currency_symbol: str = "₵",
    ) -> None:
        self.cart = cart
        self.currency_code = currency_code
        self.currency_symbol = currency_symbol
        self.combo: ComboConfig | None = None
        self.selected_ids: list[str] = []
        self._breakdown: PricedSelection | None = None

    # -----------------------------------------------------------------------
    # State
    # -----------------------------------------------------------------------

    @property
    def state(self) -> BuilderState:
        return BuilderState.IDLE if self.combo is None else BuilderState.BUILDING

    def _require_open(self) -> ComboConfig:
        if self.combo is None:
            raise BuilderStateError("No combo is open")
        return self.combo

    @property
    def breakdown(self) -> PricedSelection:
        """Current priced selection. Only available while building."""
        self._require_open()
        return self._breakdown

    @property
    def can_commit(self) -> bool:
        return self._breakdown is not None and self._breakdown.can_commit

    def slot_kind(self, option_id: str) -> SlotKind | None:
        """INCLUDED/EXTRA for a selected option, None if it is not selected."""
        if self._breakdown is None:
            return None
        for line in self._breakdown.lines:
            if line.option.id == option_id:
                return line.kind
        return None

    @property
    def status_label(self) -> str:
        """Text for the commit action, e.g. 'Add combo to cart (₵ 120.00)'."""
        combo = self._require_open()
        if self.can_commit:
            total = format_price(self._breakdown.total, self.currency_symbol)
            return f"Add combo to cart ({total})"
        return f"Select at least {combo.base_selection_count} flavours"

    # -----------------------------------------------------------------------
    # Transitions
    # -----------------------------------------------------------------------

    def open(self, combo: ComboConfig) -> PricedSelection:
        """Start building `combo` with an empty selection.

        Opening while another combo is being built discards that selection.
        """
        if self.combo is not None:
            logger.debug("Discarding open combo {} to open {}", self.combo.id, combo.id)
        self.combo = combo
        self.selected_ids = []
        self._reprice()
        logger.info("Opened combo {} ({})", combo.id, combo.name)
        return self._breakdown

    def toggle(self, option_id: str) -> bool:
        """Select `option_id` if it is not selected, otherwise deselect it.

        Returns False, leaving the selection unchanged, when the option cannot
        be added: it is unknown or inactive, or extras are not allowed and
        the base selection count has already been reached.
        """
        combo = self._require_open()

        if option_id in self.selected_ids:
            self.selected_ids.remove(option_id)
            self._reprice()
            logger.debug("Deselected {} from combo {}", option_id, combo.id)
            return True

        option = combo.option(option_id)
        if option is None or not option.is_active:
            logger.debug("Ignoring unavailable option {} for combo {}", option_id, combo.id)
            return False
        if not combo.allow_extras and len(self.selected_ids) >= combo.base_selection_count:
            logger.debug(
                "Combo {} does not allow extras beyond {} picks",
                combo.id,
                combo.base_selection_count,
            )
            return False

        self.selected_ids.append(option_id)
        self._reprice()
        logger.debug("Selected {} for combo {}", option_id, combo.id)
        return True

    def cancel(self) -> None:
        if self.combo is not None:
            logger.info("Cancelled combo {}", self.combo.id)
        self._reset()

    def commit(self) -> CartLine:
        """Send the current build to the cart and return to IDLE.

        Raises CommitPreconditionError, without touching state or the cart,
        if fewer than `base_selection_count` options are selected.
        """
        combo = self._require_open()
        breakdown = self._breakdown
        if not breakdown.can_commit:
            raise CommitPreconditionError(
                breakdown.selected_count, combo.base_selection_count
            )

        line = self._build_line(combo, breakdown)
        try:
            self.cart.add_line(line)
        except Exception:
            logger.opt(exception=True).warning(
                "Cart sink failed for combo {}; builder closed anyway", combo.id
            )
        logger.info("Committed combo {} at {}", combo.id, line.display_price)
        self._reset()
        return line

    # -----------------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------------

    def _reprice(self) -> None:
        self._breakdown = price_selection(self.combo, self.selected_ids)

    def _reset(self) -> None:
        self.combo = None
        self.selected_ids = []
        self._breakdown = None

    def _build_line(self, combo: ComboConfig, breakdown: PricedSelection) -> CartLine:
        entries = [
            CartLineEntry(
                label=priced.option.name,
                price_delta=priced.charge,
                included=priced.kind == SlotKind.INCLUDED,
            )
            for priced in breakdown.lines
        ]
        return CartLine(
            product_id=combo.base_product_id,
            name=combo.name,
            unit_price=breakdown.total,
            display_price=f"{self.currency_code} {quantize_money(breakdown.total)}",
            description=combo.description or fallback_description(len(entries)),
            image=combo.image,
            quantity=1,
            variant=None,
            entries=entries,
        )
