"""Cart sink contract and display helpers for committed combos."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

from loguru import logger

from .models import CartLine

CENTS = Decimal("0.01")


class CartSink(Protocol):
    """Anything that accepts a committed combo line.

    The return value reports success, but the combo builder does not act on
    it: once a line is handed over, failures are the sink's concern.
    """

    def add_line(self, line: CartLine) -> bool: ...


class InMemoryCart:
    """Ordered list of cart lines, enough for the CLI and tests."""

    def __init__(self) -> None:
        self.lines: list[CartLine] = []

    def add_line(self, line: CartLine) -> bool:
        self.lines.append(line)
        logger.info(
            "Cart: added {}x {} at {}", line.quantity, line.name, line.display_price
        )
        return True

    @property
    def total(self) -> Decimal:
        return sum((line.unit_price * line.quantity for line in self.lines), Decimal("0"))

    def clear(self) -> None:
        self.lines.clear()


def quantize_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_price(amount: Decimal, symbol: str = "₵") -> str:
    """'₵ 120.00' style price, as shown on combo cards and totals."""
    return f"{symbol} {quantize_money(amount)}"


def format_delta(amount: Decimal, symbol: str = "₵") -> str:
    """'+₵20.00' style surcharge for an extra pick."""
    return f"+{symbol}{quantize_money(amount)}"


def format_summary(line: CartLine, symbol: str = "₵") -> str:
    """Render a combo line's description plus one bullet per picked option."""
    bullets = [
        f"• {entry.label} (Included)"
        if entry.included
        else f"• {entry.label} ({format_delta(entry.price_delta, symbol)})"
        for entry in line.entries
    ]
    if not bullets:
        return line.description
    return f"{line.description}\n\n" + "\n".join(bullets)
