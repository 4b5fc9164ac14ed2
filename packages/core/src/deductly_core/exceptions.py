"""Custom exceptions for the Deductly calculation engine.

This module provides the exception hierarchy raised by the calculators.
All exceptions inherit from DeductlyError, making it easy to catch every
engine-specific error in one place.

Only two failure kinds exist:

- ValidationError: malformed or out-of-range input. Raised before any
  computation begins; the whole calculation is rejected as a unit.
- ConfigurationError: a statutory constant table is missing for the
  requested tax year. Never silently replaced by another year's figures.

Example:
    try:
        result = calculate_form_8829(settings, tax_year=2024)
    except ValidationError as e:
        for message in e.errors:
            show_to_user(message)
    except ConfigurationError as e:
        logger.error("missing_tax_year", **e.details)
        raise
"""

from typing import Any, Optional


class DeductlyError(Exception):
    """Base exception for all Deductly engine errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
        recoverable: Whether the error is potentially recoverable.

    Example:
        >>> raise DeductlyError("Something went wrong", details={"code": 500})
        DeductlyError: Something went wrong
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize DeductlyError.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context about the error.
            recoverable: Whether the error can be resolved by correcting input
                and calling again. Defaults to False.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation of the error."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"recoverable={self.recoverable!r})"
        )


class ValidationError(DeductlyError):
    """Error raised when calculator input fails validation.

    Raised for invalid home geometry, negative amounts, missing required
    fields, out-of-range percentages and values outside the fixed
    enumerations. A single ValidationError reports every problem found in
    the input batch.

    Attributes:
        field: The first field that failed validation (if known).
        value: The invalid value (if safe to include).
        constraint: The validation constraint that was violated.
        errors: Every validation message collected for the input.

    Example:
        >>> raise ValidationError(
        ...     "Office area must be less than total home area",
        ...     field="office_area_sq_ft",
        ...     value=2500,
        ...     constraint="office_area_sq_ft < total_home_area_sq_ft",
        ... )
        ValidationError: Office area must be less than total home area
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        errors: Optional[list[str]] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """Initialize ValidationError.

        Args:
            message: Human-readable error description.
            field: The name of the field that failed validation.
            value: The invalid value.
            constraint: Description of the validation rule violated.
            errors: All validation messages for the rejected input. Defaults
                to a single-item list holding ``message``.
            details: Optional dictionary with additional context.
            recoverable: Whether the error can be fixed by user correction.
                Defaults to True.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.field = field
        self.value = value
        self.constraint = constraint
        self.errors = list(errors) if errors else [message]

        if field:
            self.details["field"] = field
        if value is not None:
            self.details["value"] = value
        if constraint:
            self.details["constraint"] = constraint
        self.details["errors"] = self.errors


class ConfigurationError(DeductlyError):
    """Error raised when configuration is invalid or missing.

    Most commonly raised when a calculator is asked for a tax year whose
    statutory constants are not registered.

    Attributes:
        config_key: The configuration key that is problematic.
        expected: Description of the expected value or format.
        actual: The actual value found (if any).

    Example:
        >>> raise ConfigurationError(
        ...     "No tax constants registered for 2019",
        ...     config_key="tax_year",
        ...     expected="One of: [2023, 2024, 2025]",
        ...     actual=2019,
        ... )
        ConfigurationError: No tax constants registered for 2019
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize ConfigurationError.

        Args:
            message: Human-readable error description.
            config_key: The name of the configuration key that is problematic.
            expected: Description of what value was expected.
            actual: The actual value found.
            details: Optional dictionary with additional context.
            recoverable: Defaults to False since a missing rate table
                requires a data change, not different user input.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.config_key = config_key
        self.expected = expected
        self.actual = actual

        if config_key:
            self.details["config_key"] = config_key
        if expected:
            self.details["expected"] = expected
        if actual is not None:
            self.details["actual"] = actual


__all__ = [
    "DeductlyError",
    "ValidationError",
    "ConfigurationError",
]
