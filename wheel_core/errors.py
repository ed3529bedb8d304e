"""Exceptions raised by the wheel engine when a caller breaks a precondition."""

from __future__ import annotations


class WheelError(ValueError):
    """Base class for recoverable input and configuration errors."""


class InvalidSlot(WheelError):
    """A slot number outside ``[1, total_slots]`` was resolved."""

    def __init__(self, slot: int, total_slots: int | None = None) -> None:
        self.slot = slot
        self.total_slots = total_slots
        if total_slots is None:
            message = f"Slot {slot} is not a valid 1-based slot number."
        else:
            message = f"Slot {slot} is outside the wheel range 1..{total_slots}."
        super().__init__(message)


class InvalidCommission(WheelError):
    """Commission percentage outside the inclusive ``[0, 100]`` interval."""

    def __init__(self, commission_percent: float) -> None:
        self.commission_percent = commission_percent
        super().__init__(
            f"Commission must be between 0 and 100 percent, received {commission_percent}."
        )


class NoStopCondition(WheelError):
    """A break was requested but no prize ends a break when hit."""

    def __init__(self) -> None:
        super().__init__(
            "Cannot run a break: no prize is marked to stop the break when hit."
        )


class SlotSpaceExhausted(WheelError):
    """Every slot was drawn before all stop-when-hit prizes came up."""

    def __init__(self, total_slots: int, remaining_required: int) -> None:
        self.total_slots = total_slots
        self.remaining_required = remaining_required
        super().__init__(
            f"All {total_slots} slots were drawn with {remaining_required} "
            "required prize slots still outstanding."
        )


class ConfigCapacityExceeded(WheelError):
    """Prize ranges would need more slots than the wheel has."""

    def __init__(self, requested_slots: int, total_slots: int) -> None:
        self.requested_slots = requested_slots
        self.total_slots = total_slots
        super().__init__(
            f"Cannot allocate more than {total_slots} slots "
            f"(prizes would use {requested_slots})."
        )


class ConfigValidationError(WheelError):
    """A configuration field failed validation."""


class PrizeNotFound(KeyError):
    """No prize range with the requested id exists."""

    def __init__(self, prize_id: str) -> None:
        self.prize_id = prize_id
        super().__init__(f"Prize configuration with ID {prize_id} not found")

    def __str__(self) -> str:
        return self.args[0]


class ConfigurationNotFound(KeyError):
    """The configuration store has no entry for the requested id."""

    def __init__(self, config_id: int) -> None:
        self.config_id = config_id
        super().__init__(f"Configuration {config_id} not found")

    def __str__(self) -> str:
        return self.args[0]
