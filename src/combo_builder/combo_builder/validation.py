"""Save-time rules for combo configurations.

Rules run in a fixed order and stop at the first failure, so an operator
always sees the most basic problem first. They are applied to the complete
candidate config: for an update that means the stored record with the
proposed changes already merged in, never the changes alone.
"""

from collections import Counter

from loguru import logger

from .enums import ValidationRule
from .exceptions import ComboValidationError
from .models import ComboDraft

RULE_MESSAGES: dict[ValidationRule, str] = {
    ValidationRule.NAME_REQUIRED: "name required",
    ValidationRule.SELECTION_COUNT: "selection count must be positive",
    ValidationRule.BASE_PRICE: "base price must be positive",
    ValidationRule.ACTIVE_OPTIONS: "not enough active options",
    ValidationRule.LINKED_PRODUCT: "linked product required",
    ValidationRule.DUPLICATE_OPTION_IDS: "option ids must be unique",
}


def check_combo(combo: ComboDraft) -> ValidationRule | None:
    """Return the first rule `combo` breaks, or None if it is valid."""
    if not combo.name.strip():
        return ValidationRule.NAME_REQUIRED
    if combo.base_selection_count < 1:
        return ValidationRule.SELECTION_COUNT
    if combo.base_price <= 0:
        return ValidationRule.BASE_PRICE
    if len(combo.active_options) < combo.base_selection_count:
        return ValidationRule.ACTIVE_OPTIONS
    if not combo.base_product_id.strip():
        return ValidationRule.LINKED_PRODUCT
    counts = Counter(option.id for option in combo.options)
    if any(count > 1 for count in counts.values()):
        return ValidationRule.DUPLICATE_OPTION_IDS
    return None


def validate_combo(combo: ComboDraft) -> None:
    """Raise ComboValidationError naming the first rule `combo` breaks."""
    rule = check_combo(combo)
    if rule is None:
        return
    message = RULE_MESSAGES[rule]
    logger.info("Combo '{}' rejected: {}", combo.name, message)
    raise ComboValidationError(rule, message)
