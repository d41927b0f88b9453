"""User input validation package."""

from anthaathi.validation.validator import InputValidationError, InputValidator

__all__ = ["InputValidationError", "InputValidator"]
