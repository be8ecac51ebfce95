"""
Shared enumerations for database models.

Using Python enums mapped to database enums ensures that
only valid values can be stored. An unknown registration
status or payment method is rejected at the database level,
not just in Python validation.
"""

import enum


class RegistrationStatus(str, enum.Enum):
    """Lifecycle state of a player's enrollment in a program."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    WAITLISTED = "waitlisted"
    CANCELLED = "cancelled"


class PaymentMethod(str, enum.Enum):
    CARD = "card"
    BANK = "bank"
    CASH = "cash"
    CHECK = "check"
    OTHER = "other"


class PaymentStatus(str, enum.Enum):
    """A payment is pending while a gateway intent is outstanding."""
    PENDING = "pending"
    COMPLETED = "completed"


class RosterStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
