"""Tests for the combo pricing engine."""

from decimal import Decimal

from combo_builder.enums import SlotKind
from combo_builder.models import ComboConfig, ComboOption
from combo_builder.pricing import price_selection, resolve_selection


class TestBasePrice:
    """Picks up to the base count are covered by the base price."""

    def test_empty_selection_shows_base_price(self, combo: ComboConfig):
        """Nothing chosen yet should still price at the base offer."""
        priced = price_selection(combo, [])
        assert priced.total == Decimal("100")
        assert priced.lines == []
        assert priced.can_commit is False
        assert priced.remaining == 2

    def test_exactly_n_picks_cost_base_price_whatever_their_prices(self, combo: ComboConfig):
        """Any n picks cost base_price, even the expensive ones."""
        for selection in (["A", "B"], ["C", "D"], ["D", "A"]):
            priced = price_selection(combo, selection)
            assert priced.total == Decimal("100")
            assert priced.extras_total == Decimal("0")
            assert priced.can_commit is True

    def test_fewer_than_n_picks_cannot_commit(self, combo: ComboConfig):
        priced = price_selection(combo, ["C"])
        assert priced.total == Decimal("100")
        assert priced.can_commit is False
        assert priced.remaining == 1


class TestExtras:
    """Picks beyond the base count add their own price."""

    def test_extras_add_their_prices(self, combo: ComboConfig):
        priced = price_selection(combo, ["A", "B", "C", "D"])
        assert priced.extras_total == Decimal("35")
        assert priced.total == Decimal("135")
        assert [o.id for o in priced.extras] == ["C", "D"]
        assert [o.id for o in priced.included] == ["A", "B"]

    def test_classification_follows_selection_order(self, combo: ComboConfig):
        """Picking expensive first vs cheap first changes the extras when n=1."""
        single = combo.model_copy(update={"base_selection_count": 1})

        cheap_first = price_selection(single, ["D", "C"])
        expensive_first = price_selection(single, ["C", "D"])

        assert cheap_first.extras_total == Decimal("20")
        assert expensive_first.extras_total == Decimal("15")
        assert cheap_first.total != expensive_first.total

    def test_lines_record_position_and_charge(self, combo: ComboConfig):
        priced = price_selection(combo, ["C", "A", "D"])
        assert [(line.option.id, line.kind, line.position, line.charge) for line in priced.lines] == [
            ("C", SlotKind.INCLUDED, 0, Decimal("0")),
            ("A", SlotKind.INCLUDED, 1, Decimal("0")),
            ("D", SlotKind.EXTRA, 2, Decimal("15")),
        ]

    def test_engine_does_not_enforce_allow_extras(self, combo: ComboConfig):
        """The cap is the builder's job; the engine just prices what it gets."""
        capped = combo.model_copy(update={"allow_extras": False})
        priced = price_selection(capped, ["A", "B", "C"])
        assert priced.total == Decimal("120")


class TestSelectionResolution:
    """Unknown, inactive and repeated ids are ignored, not errors."""

    def test_unknown_ids_are_dropped(self, combo: ComboConfig):
        priced = price_selection(combo, ["A", "nope", "B"])
        assert [o.id for o in priced.included] == ["A", "B"]
        assert priced.total == Decimal("100")

    def test_inactive_options_are_dropped(self, combo: ComboConfig):
        options = [
            o.model_copy(update={"is_active": False}) if o.id == "C" else o
            for o in combo.options
        ]
        combo = combo.model_copy(update={"options": options})
        resolved = resolve_selection(combo, ["A", "C", "D"])
        assert [o.id for o in resolved] == ["A", "D"]

    def test_duplicate_ids_count_once(self, combo: ComboConfig):
        priced = price_selection(combo, ["C", "C", "C"])
        assert priced.selected_count == 1
        assert priced.can_commit is False


class TestScenario:
    """Walk through toggling as a customer would."""

    def test_select_and_deselect_reprices_from_scratch(self, combo: ComboConfig):
        assert price_selection(combo, ["A", "B"]).total == Decimal("100")
        assert price_selection(combo, ["A", "B", "C"]).total == Decimal("120")
        assert price_selection(combo, ["A", "B", "C", "D"]).total == Decimal("135")

        priced = price_selection(combo, ["B", "C", "D"])
        assert [o.id for o in priced.included] == ["B", "C"]
        assert [o.id for o in priced.extras] == ["D"]
        assert priced.total == Decimal("115")

    def test_fractional_prices(self):
        combo = ComboConfig(
            id="x",
            name="Mini box",
            base_selection_count=1,
            base_price=Decimal("49.90"),
            base_product_id="p",
            options=[
                ComboOption(id="a", name="Plain", price=Decimal("0")),
                ComboOption(id="b", name="Glazed", price=Decimal("7.45")),
            ],
        )
        assert price_selection(combo, ["a", "b"]).total == Decimal("57.35")
