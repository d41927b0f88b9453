"""
User Input Validation

DESIGN DECISION: Forms are validated before any store or service is
called. A failed check aborts the action and the first error is shown
to the user as a blocking alert; nothing is persisted.

Validation NEVER silently fixes input beyond trimming whitespace.
"""

from decimal import Decimal, InvalidOperation
from typing import Union

from anthaathi.models.expense import TITLE_MAX_LENGTH, ExpenseCategory
from anthaathi.models.validation import ValidationIssue, ValidationResult


PHONE_DIGITS = 10
OTP_DIGITS = 4


class InputValidationError(Exception):
    """User input failed validation. Carries the full result for display."""

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.first_message or f"Invalid {result.form}")

    @property
    def issues(self) -> list[ValidationIssue]:
        return self.result.issues


AmountInput = Union[str, int, float, Decimal]


class InputValidator:
    """Checks the login and expense forms."""

    def validate_phone(self, phone: str) -> ValidationResult:
        """A phone number is exactly ten digits (the +91 prefix is implied)."""
        issues = []
        value = (phone or "").strip()

        if not value:
            issues.append(ValidationIssue(
                field="phone",
                issue_type="missing",
                message="Please enter your phone number",
            ))
        elif not value.isdigit() or len(value) != PHONE_DIGITS:
            issues.append(ValidationIssue(
                field="phone",
                issue_type="invalid_format",
                message="Please enter a valid 10-digit phone number",
                suggested_fix="Enter the number without +91 or spaces",
            ))

        return ValidationResult(form="phone", issues=issues)

    def validate_otp(self, code: str) -> ValidationResult:
        issues = []
        value = (code or "").strip()

        if len(value) < OTP_DIGITS or not value.isdigit():
            issues.append(ValidationIssue(
                field="otp",
                issue_type="invalid_format",
                message="Please enter the 4-digit OTP",
            ))

        return ValidationResult(form="otp", issues=issues)

    def parse_amount(self, amount: AmountInput) -> Decimal:
        """
        Convert form input to a Decimal amount.

        Raises:
            InvalidOperation: If the value is not a finite number
        """
        if isinstance(amount, bool):
            raise InvalidOperation(f"Not an amount: {amount!r}")
        if isinstance(amount, float):
            value = Decimal(str(amount))
        elif isinstance(amount, str):
            value = Decimal(amount.strip().replace(",", ""))
        else:
            value = Decimal(amount)
        if not value.is_finite():
            raise InvalidOperation(f"Not a finite amount: {amount!r}")
        return value

    def validate_expense(
        self,
        title: str,
        amount: AmountInput,
        category: Union[str, ExpenseCategory],
    ) -> ValidationResult:
        """
        Validate the add-expense form.

        Title and amount are required, the title is at most
        TITLE_MAX_LENGTH characters, the amount must be a positive
        number and the category must be one of the fixed set.
        """
        issues = []
        title_value = (title or "").strip()

        if not title_value:
            issues.append(ValidationIssue(
                field="title",
                issue_type="missing",
                message="Please fill in all fields",
            ))
        elif len(title_value) > TITLE_MAX_LENGTH:
            issues.append(ValidationIssue(
                field="title",
                issue_type="too_long",
                message=f"Title must be at most {TITLE_MAX_LENGTH} characters",
                suggested_fix="Shorten the description",
            ))

        if amount is None or (isinstance(amount, str) and not amount.strip()):
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Please fill in all fields",
            ))
        else:
            try:
                value = self.parse_amount(amount)
            except (InvalidOperation, ValueError, TypeError):
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="invalid_format",
                    message="Amount must be a number",
                    suggested_fix="Enter digits only, e.g. 500",
                ))
            else:
                if value <= 0:
                    issues.append(ValidationIssue(
                        field="amount",
                        issue_type="invalid_value",
                        message="Amount must be greater than zero",
                    ))

        try:
            ExpenseCategory(category)
        except ValueError:
            allowed = ", ".join(c.value for c in ExpenseCategory)
            issues.append(ValidationIssue(
                field="category",
                issue_type="invalid_value",
                message=f"Unknown category: {category}",
                suggested_fix=f"Choose one of: {allowed}",
            ))

        return ValidationResult(form="expense", issues=issues)
