"""
Typed Exception Hierarchy for the HR Kernel.

Every error has a typed class, a machine-readable ``code`` class attribute,
and structured attributes carrying its context.  Callers catch by type and
read attributes; they never parse messages.

    HrKernelError (base)
    |
    +-- ValidationError
    |   +-- NegativeAmountError
    |   +-- InvalidQuantityError
    |   +-- InvalidScheduleError
    |   +-- InvalidRecordError
    |
    +-- RecordNotFoundError
        +-- UniformNotFoundError
        +-- TrainingDebtNotFoundError

Category    | Code                  | When Raised
------------|-----------------------|------------------------------------------
Validation  | NEGATIVE_AMOUNT       | Monetary field below zero at the boundary
            | INVALID_QUANTITY      | Item quantity below one
            | INVALID_SCHEDULE      | Malformed depreciation schedule
            | INVALID_RECORD        | Missing key field or wrong field type
------------|-----------------------|------------------------------------------
Not found   | UNIFORM_NOT_FOUND     | Corrective edit of an unknown uniform
            | TRAINING_DEBT_NOT_FOUND | Lookup of an unknown training debt

Store failures (``sqlalchemy.exc.IntegrityError`` and friends) are not
wrapped: they propagate unchanged to the caller after rollback.
"""

from decimal import Decimal
from uuid import UUID


class HrKernelError(Exception):
    """
    Base exception for all HR kernel errors.

    All subclasses must have a ``code`` class attribute for
    machine-readable error identification.
    """

    code: str = "HR_KERNEL_ERROR"


# Validation exceptions


class ValidationError(HrKernelError):
    """Base exception for records rejected at the boundary."""

    code: str = "VALIDATION_ERROR"


class NegativeAmountError(ValidationError):
    """A monetary field that must be non-negative is below zero."""

    code: str = "NEGATIVE_AMOUNT"

    def __init__(self, field_name: str, amount: Decimal):
        self.field_name = field_name
        self.amount = str(amount)
        super().__init__(f"{field_name} cannot be negative: {amount}")


class InvalidQuantityError(ValidationError):
    """Quantity must be a positive whole number."""

    code: str = "INVALID_QUANTITY"

    def __init__(self, quantity: int):
        self.quantity = quantity
        super().__init__(f"Quantity must be at least 1, got {quantity}")


class InvalidScheduleError(ValidationError):
    """Depreciation schedule steps violate ordering or range rules."""

    code: str = "INVALID_SCHEDULE"

    def __init__(self, schedule_name: str, reason: str):
        self.schedule_name = schedule_name
        self.reason = reason
        super().__init__(f"Invalid schedule '{schedule_name}': {reason}")


class InvalidRecordError(ValidationError):
    """A record field is missing or has the wrong type."""

    code: str = "INVALID_RECORD"

    def __init__(self, record_type: str, field_name: str, reason: str):
        self.record_type = record_type
        self.field_name = field_name
        self.reason = reason
        super().__init__(f"Invalid {record_type}.{field_name}: {reason}")


# Lookup exceptions


class RecordNotFoundError(HrKernelError):
    """Base exception for lookups of records that do not exist."""

    code: str = "RECORD_NOT_FOUND"


class UniformNotFoundError(RecordNotFoundError):
    """Uniform item with given ID was not found."""

    code: str = "UNIFORM_NOT_FOUND"

    def __init__(self, item_id: UUID | str):
        self.item_id = str(item_id)
        super().__init__(f"Uniform item not found: {item_id}")


class TrainingDebtNotFoundError(RecordNotFoundError):
    """Training debt with given ID was not found."""

    code: str = "TRAINING_DEBT_NOT_FOUND"

    def __init__(self, debt_id: UUID | str):
        self.debt_id = str(debt_id)
        super().__init__(f"Training debt not found: {debt_id}")
