"""Exceptions raised by the combo builder."""

from .enums import ValidationRule


class ComboError(Exception):
    """Base exception for combo builder errors."""


class ComboValidationError(ComboError):
    """Raised when a combo configuration breaks one of the save-time rules."""

    def __init__(self, rule: ValidationRule, message: str) -> None:
        self.rule = rule
        self.message = message
        super().__init__(message)


class ComboNotFoundError(ComboError):
    """Raised by admin helpers that address an unknown combo or option."""

    def __init__(self, combo_id: str, option_id: str | None = None) -> None:
        self.combo_id = combo_id
        self.option_id = option_id
        if option_id is None:
            message = f"Combo {combo_id} not found"
        else:
            message = f"Option {option_id} not found in combo {combo_id}"
        super().__init__(message)


class PersistenceError(ComboError):
    """Raised by a storage medium when a write cannot be made durable."""

    def __init__(self, key: str, cause: Exception | None = None) -> None:
        self.key = key
        self.cause = cause
        message = f"Failed to write storage key {key}"
        if cause:
            message = f"{message}: {cause}"
        super().__init__(message)


class CommitPreconditionError(ComboError):
    """Raised when commit is called before the base selection count is reached."""

    def __init__(self, selected: int, required: int) -> None:
        self.selected = selected
        self.required = required
        super().__init__(
            f"Cannot commit combo with {selected} selection(s); {required} required"
        )


class BuilderStateError(ComboError):
    """Raised when a builder operation needs an open combo but none is open."""
