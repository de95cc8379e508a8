"""
Tests for boundary validation helpers and the typed error hierarchy.
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from hr_kernel.db.types import money_from_str
from hr_kernel.exceptions import (
    HrKernelError,
    InvalidQuantityError,
    InvalidRecordError,
    NegativeAmountError,
    RecordNotFoundError,
    UniformNotFoundError,
    ValidationError,
)
from hr_modules._validation import require_text, to_amount, to_date, to_quantity


class TestToAmount:

    @pytest.mark.parametrize("value", [Decimal("12.50"), 12, "12.50"])
    def test_accepts_exact_types(self, value):
        assert to_amount("R", "f", value) == Decimal(value)

    @pytest.mark.parametrize("value", [None, True, 1.5, "abc", "NaN", "Infinity"])
    def test_rejects_non_amounts(self, value):
        with pytest.raises(InvalidRecordError):
            to_amount("R", "f", value)

    def test_negative(self):
        with pytest.raises(NegativeAmountError) as exc_info:
            to_amount("R", "basic_salary", Decimal("-0.01"))
        assert exc_info.value.code == "NEGATIVE_AMOUNT"

    def test_zero_allowed(self):
        assert to_amount("R", "f", 0) == Decimal("0")


class TestOtherCoercions:

    def test_to_date(self):
        assert to_date("R", "d", "2024-01-15") == date(2024, 1, 15)
        assert to_date("R", "d", datetime(2024, 1, 15, 9)) == date(2024, 1, 15)
        with pytest.raises(InvalidRecordError):
            to_date("R", "d", "15/01/2024")
        with pytest.raises(InvalidRecordError):
            to_date("R", "d", None)

    def test_to_quantity(self):
        assert to_quantity(3) == 3
        for bad in (0, -1, 1.0, True, "2"):
            with pytest.raises(InvalidQuantityError):
                to_quantity(bad)

    def test_require_text_strips(self):
        assert require_text("R", "f", "  Emp001 ") == "Emp001"
        with pytest.raises(InvalidRecordError):
            require_text("R", "f", "   ")

    def test_money_from_str(self):
        assert money_from_str("10.25") == Decimal("10.25")
        with pytest.raises(ValueError):
            money_from_str("ten")
        with pytest.raises(ValueError):
            money_from_str("sNaN")


class TestErrorHierarchy:

    def test_families(self):
        assert issubclass(NegativeAmountError, ValidationError)
        assert issubclass(UniformNotFoundError, RecordNotFoundError)
        assert issubclass(ValidationError, HrKernelError)

    def test_codes_are_unique(self):
        classes = [
            HrKernelError, ValidationError, NegativeAmountError,
            InvalidQuantityError, InvalidRecordError, RecordNotFoundError,
            UniformNotFoundError,
        ]
        codes = [c.code for c in classes]
        assert len(codes) == len(set(codes))

    def test_structured_fields(self):
        err = InvalidRecordError("SalaryRecord", "year", "expected a positive year")
        assert err.record_type == "SalaryRecord"
        assert err.field_name == "year"
        assert "year" in str(err)
