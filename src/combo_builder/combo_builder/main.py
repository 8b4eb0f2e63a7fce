"""CLI entry point for building combos against the local combo store.

Usage:
    python -m combo_builder.main [--seed] [--memory]
"""

import argparse
from decimal import Decimal
from pathlib import Path

from loguru import logger

from .admin import ComboAdmin
from .builder import ComboBuilder
from .cart import InMemoryCart, format_delta, format_price, format_summary
from .catalog import JsonCatalog
from .config import get_settings
from .enums import SlotKind
from .exceptions import ComboError
from .logging import setup_logging
from .models import ComboConfig, ComboDraft
from .store import ComboStore, JsonFileStorage, MemoryStorage


def _demo_draft(base_product_id: str) -> ComboDraft:
    return ComboDraft(
        name="Flight Box",
        description="Pick any two flavours; extras are charged per flavour.",
        base_selection_count=2,
        base_price=Decimal("100"),
        allow_extras=True,
        base_product_id=base_product_id,
        options=[
            ComboAdmin.new_option("Coconut", "0"),
            ComboAdmin.new_option("Blueberry", "0"),
            ComboAdmin.new_option("Chocolate", "20"),
            ComboAdmin.new_option("Red Velvet", "15"),
        ],
    )


def _load_catalog(path: str) -> JsonCatalog | None:
    if not Path(path).exists():
        logger.info("No catalog at {} — product links will not be checked", path)
        return None
    catalog = JsonCatalog.from_json_file(path)
    logger.info("Catalog loaded: {} products", len(catalog.list_products()))
    return catalog


def _print_combo_card(index: int, combo: ComboConfig, symbol: str) -> None:
    print(f"[{index}] {combo.name}")
    print(f"    {combo.description or 'Create your own signature combo.'}")
    print(
        f"    Choose any {combo.base_selection_count} for "
        f"{format_price(combo.base_price, symbol)}"
    )
    if combo.allow_extras:
        print(f"    Extras beyond {combo.base_selection_count} are charged per flavour.")


def _print_builder(builder: ComboBuilder) -> None:
    combo = builder.combo
    symbol = builder.currency_symbol
    print()
    for index, option in enumerate(combo.active_options, start=1):
        kind = builder.slot_kind(option.id)
        if kind == SlotKind.INCLUDED:
            tag = "Included"
        elif kind == SlotKind.EXTRA:
            tag = format_delta(option.price, symbol)
        else:
            tag = format_price(option.price, symbol)
        marker = "x" if kind else " "
        print(f"  [{marker}] {index}. {option.name:<20} {tag}")

    breakdown = builder.breakdown
    print(f"  Base price: {format_price(breakdown.base_price, symbol)}")
    if breakdown.extras:
        print(
            f"  Extras ({len(breakdown.extras)}): "
            f"+{format_price(breakdown.extras_total, symbol)}"
        )
    print(f"  Total: {format_price(breakdown.total, symbol)}")
    print(f"  -> {builder.status_label}")


def _build_session(builder: ComboBuilder, combo: ComboConfig) -> None:
    """Run one combo build until the customer commits or cancels."""
    builder.open(combo)
    while True:
        _print_builder(builder)
        try:
            choice = input("Toggle # / c=commit / x=cancel: ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            builder.cancel()
            print()
            return

        if choice == "x":
            builder.cancel()
            return
        if choice == "c":
            if not builder.can_commit:
                print(builder.status_label)
                continue
            line = builder.commit()
            print(f"Added {line.name} ({line.display_price}) to cart")
            return
        if choice.isdigit():
            options = combo.active_options
            index = int(choice) - 1
            if 0 <= index < len(options):
                if not builder.toggle(options[index].id):
                    print(f"Only {combo.base_selection_count} selections allowed for this combo")
                continue
        print("Unrecognised choice")


def main() -> None:
    """Run the combo builder CLI."""
    parser = argparse.ArgumentParser(description="Build combo products from the local store")
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Create a demo Flight Box when the store is empty",
    )
    parser.add_argument(
        "--memory",
        action="store_true",
        help="Keep combos in memory only (nothing is written to disk)",
    )
    args = parser.parse_args()

    settings = get_settings()
    setup_logging(level=settings.log_level)
    logger.info("Starting combo builder CLI")

    storage = MemoryStorage() if args.memory else JsonFileStorage(settings.storage_dir)
    store = ComboStore(storage, key=settings.storage_key)
    catalog = _load_catalog(settings.catalog_json_path)
    admin = ComboAdmin(store, catalog=catalog, currency_code=settings.currency_code)

    if args.seed and not admin.list_combos():
        choices = admin.linkable_products()
        product_id = choices[0][0] if choices else "flight-box"
        try:
            result = admin.create_combo(_demo_draft(product_id))
        except ComboError as exc:
            print(f"Could not seed demo combo: {exc}")
        else:
            if not result.durable:
                print(f"Demo combo saved for this session only: {result.error}")

    cart = InMemoryCart()
    builder = ComboBuilder(
        cart,
        currency_code=settings.currency_code,
        currency_symbol=settings.currency_symbol,
    )

    while True:
        combos = admin.list_combos()
        if not combos:
            print("No combos configured. Run with --seed to create a demo combo.")
            break

        print("-" * 50)
        for index, combo in enumerate(combos, start=1):
            _print_combo_card(index, combo, settings.currency_symbol)
        print("-" * 50)

        try:
            choice = input("Pick a combo # (q to quit): ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye!")
            break

        if choice in ("quit", "exit", "q"):
            print("Goodbye!")
            break
        if not choice.isdigit() or not 1 <= int(choice) <= len(combos):
            print("Unrecognised choice")
            continue

        try:
            _build_session(builder, combos[int(choice) - 1])
        except ComboError as exc:
            logger.warning("Combo session failed: {}", exc)
            print(f"Error: {exc}")
            builder.cancel()

    if cart.lines:
        print()
        print("Cart:")
        for line in cart.lines:
            print(f"{line.name} — {line.display_price}")
            print(format_summary(line, settings.currency_symbol))
            print()
        print(f"Cart total: {format_price(cart.total, settings.currency_symbol)}")

    logger.info("Combo builder CLI session ended")


if __name__ == "__main__":
    main()
