from enum import StrEnum


class SlotKind(StrEnum):
    INCLUDED = "included"
    EXTRA = "extra"


class BuilderState(StrEnum):
    IDLE = "idle"
    BUILDING = "building"


class ValidationRule(StrEnum):
    NAME_REQUIRED = "name_required"
    SELECTION_COUNT = "selection_count"
    BASE_PRICE = "base_price"
    ACTIVE_OPTIONS = "active_options"
    LINKED_PRODUCT = "linked_product"
    DUPLICATE_OPTION_IDS = "duplicate_option_ids"
    OPTION_INVALID = "option_invalid"
    UNKNOWN_PRODUCT = "unknown_product"
