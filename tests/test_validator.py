"""Tests for form validation."""

from decimal import Decimal, InvalidOperation

import pytest

from anthaathi.models.expense import ExpenseCategory
from anthaathi.validation import InputValidationError, InputValidator


@pytest.fixture
def validator():
    return InputValidator()


class TestPhoneValidation:

    def test_valid_phone(self, validator):
        assert validator.validate_phone("9876543210").is_valid

    def test_surrounding_spaces_are_ignored(self, validator):
        assert validator.validate_phone(" 9876543210 ").is_valid

    def test_empty_phone(self, validator):
        result = validator.validate_phone("")
        assert result.first_message == "Please enter your phone number"

    @pytest.mark.parametrize("phone", ["98765", "98765432101", "98765-4321", "+919876543210"])
    def test_malformed_phone(self, validator, phone):
        result = validator.validate_phone(phone)
        assert result.has_errors
        assert result.first_message == "Please enter a valid 10-digit phone number"


class TestOtpValidation:

    @pytest.mark.parametrize("code", ["1234", "123456"])
    def test_valid_otp(self, validator, code):
        assert validator.validate_otp(code).is_valid

    @pytest.mark.parametrize("code", ["", "123", "12a4"])
    def test_invalid_otp(self, validator, code):
        assert validator.validate_otp(code).first_message == "Please enter the 4-digit OTP"


class TestAmountParsing:

    @pytest.mark.parametrize("raw,expected", [
        ("500", Decimal("500")),
        ("1,500.25", Decimal("1500.25")),
        (250, Decimal("250")),
        (12.5, Decimal("12.5")),
        (Decimal("7"), Decimal("7")),
    ])
    def test_parse_amount(self, validator, raw, expected):
        assert validator.parse_amount(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "NaN", "Infinity", True])
    def test_parse_amount_rejects(self, validator, raw):
        with pytest.raises(InvalidOperation):
            validator.parse_amount(raw)


class TestExpenseValidation:

    def test_valid_expense(self, validator):
        result = validator.validate_expense("Urea", "450", ExpenseCategory.FERTILIZER)
        assert result.is_valid
        assert result.form == "expense"

    def test_blank_fields_report_one_message(self, validator):
        result = validator.validate_expense("", "", "seeds")
        assert result.error_count == 2
        assert {issue.message for issue in result.issues} == {"Please fill in all fields"}

    def test_none_amount_is_missing(self, validator):
        result = validator.validate_expense("Urea", None, "seeds")
        assert result.first_message == "Please fill in all fields"

    def test_title_length_limit(self, validator):
        assert validator.validate_expense("x" * 200, "10", "seeds").is_valid

        result = validator.validate_expense("x" * 201, "10", "seeds")
        assert result.issues[0].issue_type == "too_long"
        assert result.first_message == "Title must be at most 200 characters"

    def test_unknown_category_suggests_choices(self, validator):
        result = validator.validate_expense("Urea", "450", "fuel")
        assert result.first_message == "Unknown category: fuel"
        assert "fertilizer" in result.issues[0].suggested_fix


class TestInputValidationError:

    def test_message_is_first_error(self, validator):
        error = InputValidationError(validator.validate_expense("", "abc", "seeds"))
        assert str(error) == "Please fill in all fields"
        assert len(error.issues) == 2
