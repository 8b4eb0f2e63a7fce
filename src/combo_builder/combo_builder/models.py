from decimal import Decimal

from pydantic import BaseModel, Field

from .enums import SlotKind


class ComboOption(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    price: Decimal = Field(default=Decimal("0"), ge=0)
    is_active: bool = True
    image: str | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComboOption):
            return NotImplemented
        return (
            self.id == other.id
            and self.name == other.name
            and self.price == other.price
            and self.is_active == other.is_active
            and self.image == other.image
        )

    def __hash__(self) -> int:
        return hash(self.id)


class ComboDraft(BaseModel):
    """Everything an operator supplies when authoring a combo.

    Business rules (positive counts and prices, enough active options, a
    linked product) are checked by `validation.validate_combo`, not here,
    so that a stored combo which no longer satisfies them can still be
    loaded and inspected.
    """

    name: str
    description: str = ""
    image: str | None = None
    base_selection_count: int
    base_price: Decimal
    allow_extras: bool = True
    base_product_id: str = ""
    options: list[ComboOption] = Field(default_factory=list)

    @property
    def active_options(self) -> list[ComboOption]:
        """Options a customer may pick, in config order."""
        return [option for option in self.options if option.is_active]

    def option(self, option_id: str) -> ComboOption | None:
        return next((o for o in self.options if o.id == option_id), None)


NULLABLE_FIELDS = {"image"}


class ComboConfig(ComboDraft):
    id: str

    def merged(self, changes: "ComboChanges") -> "ComboConfig":
        """Return a new config with the explicitly-set fields of `changes` applied.

        The id is never replaced. The result is re-validated by pydantic so
        nested options come back as ComboOption instances.
        """
        data = self.model_dump()
        for field, value in changes.model_dump(exclude_unset=True).items():
            if value is None and field not in NULLABLE_FIELDS:
                # None clears the description; other required fields keep their value
                if field == "description":
                    data[field] = ""
                continue
            data[field] = value
        data["id"] = self.id
        return ComboConfig.model_validate(data)


class ComboChanges(BaseModel):
    """Partial update for a stored combo. Only fields that are set are merged.

    An explicit None clears `image` and `description`; for every other field
    it leaves the stored value alone.
    """

    name: str | None = None
    description: str | None = None
    image: str | None = None
    base_selection_count: int | None = None
    base_price: Decimal | None = None
    allow_extras: bool | None = None
    base_product_id: str | None = None
    options: list[ComboOption] | None = None


class CatalogProduct(BaseModel):
    id: str
    name: str
    price: Decimal = Field(ge=0)


class PricedOption(BaseModel):
    option: ComboOption
    kind: SlotKind
    position: int = Field(ge=0)  # Index in selection order
    charge: Decimal  # What this pick adds on top of the base price


class PricedSelection(BaseModel):
    combo_id: str
    base_price: Decimal
    base_selection_count: int
    lines: list[PricedOption] = Field(default_factory=list)
    extras_total: Decimal = Decimal("0")
    total: Decimal
    can_commit: bool = False

    @property
    def included(self) -> list[ComboOption]:
        return [line.option for line in self.lines if line.kind == SlotKind.INCLUDED]

    @property
    def extras(self) -> list[ComboOption]:
        return [line.option for line in self.lines if line.kind == SlotKind.EXTRA]

    @property
    def selected_count(self) -> int:
        return len(self.lines)

    @property
    def remaining(self) -> int:
        """How many more picks are needed before the combo can be committed."""
        return max(self.base_selection_count - len(self.lines), 0)


class CartLineEntry(BaseModel):
    label: str
    price_delta: Decimal = Decimal("0")
    included: bool


class CartLine(BaseModel):
    """One cart row produced by committing a combo.

    `entries` keeps the per-option breakdown structured; turning it into
    display text is left to `cart.format_summary`.
    """

    product_id: str
    name: str
    unit_price: Decimal
    display_price: str
    description: str
    image: str | None = None
    quantity: int = Field(default=1, ge=1)
    variant: str | None = None
    entries: list[CartLineEntry] = Field(default_factory=list)
