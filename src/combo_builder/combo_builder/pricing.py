"""Combo pricing: N picks for the base price, anything beyond adds its own price.

`price_selection` is a pure function. It is called again from scratch after
every change to the selection, so included/extra classification can never
drift from the current selection order.
"""

from decimal import Decimal

from .enums import SlotKind
from .models import ComboDraft, ComboConfig, ComboOption, PricedOption, PricedSelection


def resolve_selection(combo: ComboDraft, selected_ids: list[str]) -> list[ComboOption]:
    """Map ids to active options in the order the customer picked them.

    Unknown, inactive and repeated ids are dropped.
    """
    active = {option.id: option for option in combo.active_options}
    resolved: list[ComboOption] = []
    seen: set[str] = set()
    for option_id in selected_ids:
        option = active.get(option_id)
        if option is None or option_id in seen:
            continue
        seen.add(option_id)
        resolved.append(option)
    return resolved


def price_selection(combo: ComboConfig, selected_ids: list[str]) -> PricedSelection:
    """Price `selected_ids` (selection order) against `combo`.

    The first `base_selection_count` picks are included in the base price;
    later picks are extras and add their own price. The cap implied by
    `allow_extras` is not enforced here.
    """
    selected = resolve_selection(combo, selected_ids)
    n = combo.base_selection_count

    lines = []
    for position, option in enumerate(selected):
        if position < n:
            lines.append(
                PricedOption(
                    option=option,
                    kind=SlotKind.INCLUDED,
                    position=position,
                    charge=Decimal("0"),
                )
            )
        else:
            lines.append(
                PricedOption(
                    option=option,
                    kind=SlotKind.EXTRA,
                    position=position,
                    charge=option.price,
                )
            )

    extras_total = sum(
        (line.charge for line in lines if line.kind == SlotKind.EXTRA), Decimal("0")
    )
    if len(selected) <= n:
        total = combo.base_price
    else:
        total = combo.base_price + extras_total

    return PricedSelection(
        combo_id=combo.id,
        base_price=combo.base_price,
        base_selection_count=n,
        lines=lines,
        extras_total=extras_total,
        total=total,
        can_commit=len(selected) >= n,
    )
