"""Input validation for the calculators.

Each validator inspects a whole input batch, collects every problem it
finds and raises one ValidationError listing them all. Nothing is computed
for a batch that fails validation.
"""

from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional, TypeVar

import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError
from .models import Asset, HomeOfficeSettings, TaxSummaryInput, Transaction
from .money import to_decimal

logger = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=BaseModel)


def _format_pydantic_errors(exc: PydanticValidationError, label: Optional[str]) -> list[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "input"
        message = f"{location}: {error.get('msg', 'invalid value')}"
        messages.append(f"{label}: {message}" if label else message)
    return messages


def parse_model(model_cls: type[ModelT], data: Any, *, label: Optional[str] = None) -> ModelT:
    """Return ``data`` as an instance of ``model_cls``.

    Model instances pass through untouched. Mappings are parsed, and any
    parsing failure (wrong type, value outside an enumeration, missing
    required field) is raised as ValidationError.

    Raises:
        ValidationError: If the mapping cannot be parsed.
    """
    if isinstance(data, model_cls):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump()
    if not isinstance(data, Mapping):
        name = model_cls.__name__
        raise ValidationError(
            f"{label + ': ' if label else ''}Expected {name} or a mapping, got {type(data).__name__}",
            field=label,
            constraint=f"instance of {name}",
        )
    try:
        return model_cls.model_validate(dict(data))
    except PydanticValidationError as exc:
        errors = _format_pydantic_errors(exc, label)
        raise _rejection(errors, model=model_cls.__name__) from exc


def _rejection(errors: list[str], **context: Any) -> ValidationError:
    logger.warning("validation_failed", errors=errors, **context)
    return ValidationError(
        errors[0] if len(errors) == 1 else f"{len(errors)} validation errors: {errors[0]}",
        errors=errors,
    )


# =============================================================================
# FORM 8829
# =============================================================================

_SHARED_EXPENSE_LABELS = {
    "rent_or_mortgage_interest": "Rent or mortgage interest",
    "utilities": "Utilities",
    "insurance": "Insurance",
    "repairs_maintenance": "Repairs and maintenance",
    "property_tax": "Property tax",
    "other": "Other expenses",
}


def home_office_errors(
    settings: HomeOfficeSettings,
    direct_expenses: Decimal = Decimal("0"),
) -> list[str]:
    """Return every problem with a home office settings record."""
    errors: list[str] = []
    total = settings.total_home_area_sq_ft
    office = settings.office_area_sq_ft

    if total <= 0:
        errors.append("Total home square footage must be greater than 0")
    if office <= 0:
        errors.append("Office square footage must be greater than 0")
    if total > 0 and office > 0 and office >= total:
        errors.append("Office square footage must be less than total home square footage")

    for name, amount in settings.shared_expenses.items():
        if amount < 0:
            errors.append(f"{_SHARED_EXPENSE_LABELS[name]} cannot be negative")

    if direct_expenses < 0:
        errors.append("Direct office expenses cannot be negative")
    return errors


def validate_home_office(
    settings: Any,
    direct_expenses: Decimal = Decimal("0"),
) -> HomeOfficeSettings:
    """Parse and validate home office settings.

    Raises:
        ValidationError: On non-positive areas, an office that is not
            strictly smaller than the home, or negative expenses.
    """
    parsed = parse_model(HomeOfficeSettings, settings, label="Home office")
    errors = home_office_errors(parsed, direct_expenses)
    if errors:
        raise _rejection(errors, model="HomeOfficeSettings")
    return parsed


# =============================================================================
# FORM 4562
# =============================================================================

def asset_errors(asset: Asset, index: int, current_year: int) -> list[str]:
    """Return every problem with one asset (``index`` is 1-based)."""
    prefix = f"Asset {index}"
    errors: list[str] = []

    if not asset.description or not asset.description.strip():
        errors.append(f"{prefix}: Description is required")
    if asset.cost <= 0:
        errors.append(f"{prefix}: Cost must be greater than 0")
    if asset.business_use_percent < 0 or asset.business_use_percent > 100:
        errors.append(f"{prefix}: Business use percentage must be between 0 and 100")
    if asset.year_placed_in_service > current_year:
        errors.append(f"{prefix}: Date placed in service cannot be in the future")
    return errors


def validate_assets(assets: Iterable[Any], current_year: int) -> list[Asset]:
    """Parse and validate a batch of assets.

    Raises:
        ValidationError: If any asset is invalid. The whole batch is rejected.
    """
    parsed: list[Asset] = []
    errors: list[str] = []

    for index, raw in enumerate(assets, start=1):
        try:
            asset = parse_model(Asset, raw, label=f"Asset {index}")
        except ValidationError as exc:
            errors.extend(exc.errors)
            continue
        errors.extend(asset_errors(asset, index, current_year))
        parsed.append(asset)

    if errors:
        raise _rejection(errors, model="Asset", asset_count=len(parsed))
    return parsed


# =============================================================================
# SCHEDULE SE
# =============================================================================

def tax_summary_errors(summary: TaxSummaryInput) -> list[str]:
    """Return every problem with a Schedule SE input."""
    errors: list[str] = []
    if summary.schedule_c_net_profit < 0:
        errors.append(
            "Schedule C net profit cannot be negative; "
            "self-employment tax does not apply to a loss"
        )
    if summary.adjustments < 0:
        errors.append("Adjustments cannot be negative")
    return errors


def validate_tax_summary(summary: Any) -> TaxSummaryInput:
    """Parse and validate a Schedule SE input.

    Raises:
        ValidationError: On negative net profit or adjustments.
    """
    parsed = parse_model(TaxSummaryInput, summary, label="Tax summary")
    errors = tax_summary_errors(parsed)
    if errors:
        raise _rejection(errors, model="TaxSummaryInput", tax_year=parsed.tax_year)
    return parsed


def validate_tax_summaries(summaries: Iterable[Any]) -> list[TaxSummaryInput]:
    """Parse and validate a multi-year batch of Schedule SE inputs.

    Raises:
        ValidationError: If any input is invalid. Messages are prefixed with
            the tax year (or position when the year is unknown).
    """
    parsed: list[TaxSummaryInput] = []
    errors: list[str] = []

    for index, raw in enumerate(summaries, start=1):
        try:
            summary = parse_model(TaxSummaryInput, raw, label=f"Tax summary {index}")
        except ValidationError as exc:
            errors.extend(exc.errors)
            continue
        errors.extend(
            f"Tax year {summary.tax_year}: {message}"
            for message in tax_summary_errors(summary)
        )
        parsed.append(summary)

    if errors:
        raise _rejection(errors, model="TaxSummaryInput", summary_count=len(parsed))
    return parsed


# =============================================================================
# SCHEDULE C
# =============================================================================

def validate_transactions(transactions: Iterable[Any]) -> list[Transaction]:
    """Parse a batch of transactions, reporting every unparseable one.

    Raises:
        ValidationError: If any transaction mapping cannot be parsed.
    """
    parsed: list[Transaction] = []
    errors: list[str] = []

    for index, raw in enumerate(transactions, start=1):
        try:
            parsed.append(parse_model(Transaction, raw, label=f"Transaction {index}"))
        except ValidationError as exc:
            errors.extend(exc.errors)

    if errors:
        raise _rejection(errors, model="Transaction", transaction_count=len(parsed))
    return parsed


def coerce_amount(value: Any, field: str) -> Decimal:
    """Convert a numeric input to Decimal or raise ValidationError."""
    try:
        return to_decimal(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(
            f"{field} must be a number",
            field=field,
            value=str(value),
            constraint="finite decimal amount",
        ) from exc


def validate_as_of(as_of: Any) -> date:
    """Ensure an as-of value is a date."""
    if isinstance(as_of, date):
        return as_of
    raise ValidationError(
        "as_of must be a date",
        field="as_of",
        value=str(as_of),
        constraint="datetime.date",
    )


__all__ = [
    "parse_model",
    "home_office_errors",
    "validate_home_office",
    "asset_errors",
    "validate_assets",
    "tax_summary_errors",
    "validate_tax_summary",
    "validate_tax_summaries",
    "validate_transactions",
    "coerce_amount",
    "validate_as_of",
]
