"""Shared pytest fixtures for combo builder tests."""

from decimal import Decimal

import pytest

from combo_builder.builder import ComboBuilder
from combo_builder.catalog import JsonCatalog
from combo_builder.models import CartLine, CatalogProduct, ComboConfig, ComboDraft, ComboOption
from combo_builder.store import ComboStore, MemoryStorage


class RecordingCart:
    """Cart sink that remembers every line it is handed."""

    def __init__(self) -> None:
        self.lines: list[CartLine] = []

    def add_line(self, line: CartLine) -> bool:
        self.lines.append(line)
        return True


class FailingStorage(MemoryStorage):
    """Storage whose writes always fail, like a full disk."""

    def write(self, key: str, value: str) -> None:
        raise OSError("disk full")


def make_options() -> list[ComboOption]:
    return [
        ComboOption(id="A", name="Coconut", price=Decimal("0")),
        ComboOption(id="B", name="Blueberry", price=Decimal("0")),
        ComboOption(id="C", name="Chocolate", price=Decimal("20")),
        ComboOption(id="D", name="Red Velvet", price=Decimal("15")),
    ]


@pytest.fixture
def draft() -> ComboDraft:
    """Two picks for 100, extras allowed, four active options."""
    return ComboDraft(
        name="Flight Box",
        description="Pick any two flavours.",
        base_selection_count=2,
        base_price=Decimal("100"),
        allow_extras=True,
        base_product_id="flight-box",
        options=make_options(),
    )


@pytest.fixture
def combo(draft: ComboDraft) -> ComboConfig:
    return ComboConfig(id="combo-1", **draft.model_dump())


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage: MemoryStorage) -> ComboStore:
    return ComboStore(storage)


@pytest.fixture
def failing_storage() -> FailingStorage:
    return FailingStorage()


@pytest.fixture
def cart() -> RecordingCart:
    return RecordingCart()


@pytest.fixture
def builder(cart: RecordingCart) -> ComboBuilder:
    return ComboBuilder(cart)


@pytest.fixture
def catalog() -> JsonCatalog:
    return JsonCatalog(
        [
            CatalogProduct(id="flight-box", name="Flight Box", price=Decimal("100")),
            CatalogProduct(id="gift-combo", name="Gift Combo", price=Decimal("180.5")),
        ]
    )
