"""Tests for the Form 8829 home office calculator."""

from decimal import Decimal

import pytest

from deductly_core import ConfigurationError, ValidationError
from deductly_core.home_office import HomeOfficeCalculator, calculate_form_8829
from deductly_core.models import HomeOfficeSettings, SharedHomeExpenses
from deductly_core.tax_year import TAX_YEAR_2024


@pytest.fixture
def calculator() -> HomeOfficeCalculator:
    return HomeOfficeCalculator(TAX_YEAR_2024)


@pytest.fixture
def small_office() -> HomeOfficeSettings:
    """2000 sq ft home with a 200 sq ft office and $12,000 rent."""
    return HomeOfficeSettings(
        total_home_area_sq_ft=Decimal("2000"),
        office_area_sq_ft=Decimal("200"),
        shared_expenses=SharedHomeExpenses(rent_or_mortgage_interest=Decimal("12000")),
    )


class TestHomeOfficeCalculator:
    """Test suite for HomeOfficeCalculator."""

    def test_business_use_and_allocation(self, calculator, small_office):
        """10% of the home is the office, so 10% of rent is allocated."""
        result = calculator.calculate(small_office)

        assert result.business_use_percent == Decimal("10.00")
        assert result.allocated_expenses.rent_or_mortgage_interest == Decimal("1200.00")
        assert result.total_allocated_expenses == Decimal("1200.00")
        assert result.allowed_deduction == Decimal("1200.00")
        assert result.carryover_to_next_year == Decimal("0.00")

    def test_annual_cap_and_carryover(self, calculator):
        """The excess over the annual cap is carried over."""
        settings = HomeOfficeSettings(
            total_home_area_sq_ft=Decimal("2000"),
            office_area_sq_ft=Decimal("200"),
            shared_expenses=SharedHomeExpenses(rent_or_mortgage_interest=Decimal("24000")),
        )
        result = calculator.calculate(settings)

        assert result.tentative_deduction == Decimal("2400.00")
        assert result.annual_cap == Decimal("1500.00")
        assert result.allowed_deduction == Decimal("1500.00")
        assert result.carryover_to_next_year == Decimal("900.00")

    def test_direct_expenses_added_in_full(self, calculator, small_office):
        result = calculator.calculate(small_office, direct_expenses="100")

        assert result.direct_office_expenses == Decimal("100.00")
        assert result.tentative_deduction == Decimal("1300.00")

    def test_allocated_never_exceeds_raw_expenses(self, calculator):
        expenses = SharedHomeExpenses(
            rent_or_mortgage_interest=Decimal("9000"),
            utilities=Decimal("1800"),
            insurance=Decimal("600"),
            other=Decimal("250.55"),
        )
        raw_total = sum(amount for _, amount in expenses.items())

        for office in (1, 333, 999, 1499):
            result = calculator.calculate(
                HomeOfficeSettings(
                    total_home_area_sq_ft=Decimal("1500"),
                    office_area_sq_ft=Decimal(office),
                    shared_expenses=expenses,
                )
            )
            assert Decimal("0") < result.business_use_percent < Decimal("100")
            assert result.total_allocated_expenses <= raw_total

    def test_allowed_deduction_monotonic_in_office_size(self, calculator):
        """A bigger office never lowers the deduction, and the cap holds."""
        expenses = SharedHomeExpenses(
            rent_or_mortgage_interest=Decimal("6000"),
            utilities=Decimal("1200"),
        )
        previous = Decimal("0")
        for office in range(100, 2000, 300):
            result = calculator.calculate(
                HomeOfficeSettings(
                    total_home_area_sq_ft=Decimal("2000"),
                    office_area_sq_ft=Decimal(office),
                    shared_expenses=expenses,
                )
            )
            assert result.allowed_deduction >= previous
            assert result.allowed_deduction <= TAX_YEAR_2024.home_office_annual_cap
            previous = result.allowed_deduction

    def test_accepts_flat_camel_case_document(self, calculator):
        """The settings store's flat camelCase document parses directly."""
        result = calculator.calculate(
            {
                "totalHomeSqFt": 2000,
                "officeSqFt": 200,
                "rentOrMortgageInterest": 12000,
                "utilities": "2400",
            }
        )

        assert result.allocated_expenses.rent_or_mortgage_interest == Decimal("1200.00")
        assert result.allocated_expenses.utilities == Decimal("240.00")

    def test_audit_log_populated(self, calculator, small_office):
        result = calculator.calculate(small_office)

        step_names = [entry.step for entry in result.audit_log]
        assert "business_use_percent" in step_names
        assert "allocate_rent_or_mortgage_interest" in step_names
        assert "annual_cap" in step_names
        assert result.constants_version == "2024.1"


class TestHomeOfficeValidation:
    """Invalid settings are rejected before anything is computed."""

    def test_office_must_be_smaller_than_home(self, calculator):
        settings = HomeOfficeSettings(
            total_home_area_sq_ft=Decimal("200"),
            office_area_sq_ft=Decimal("200"),
        )
        with pytest.raises(ValidationError) as exc_info:
            calculator.calculate(settings)

        assert exc_info.value.errors == [
            "Office square footage must be less than total home square footage"
        ]
        assert exc_info.value.recoverable is True

    def test_collects_every_problem(self, calculator):
        settings = HomeOfficeSettings(
            total_home_area_sq_ft=Decimal("0"),
            office_area_sq_ft=Decimal("0"),
            shared_expenses=SharedHomeExpenses(utilities=Decimal("-5")),
        )
        with pytest.raises(ValidationError) as exc_info:
            calculator.calculate(settings, direct_expenses=-1)

        errors = exc_info.value.errors
        assert "Total home square footage must be greater than 0" in errors
        assert "Office square footage must be greater than 0" in errors
        assert "Utilities cannot be negative" in errors
        assert "Direct office expenses cannot be negative" in errors
        assert exc_info.value.details["errors"] == errors

    def test_non_numeric_direct_expenses(self, calculator, small_office):
        with pytest.raises(ValidationError):
            calculator.calculate(small_office, direct_expenses="lots")

    def test_missing_field_in_mapping(self, calculator):
        with pytest.raises(ValidationError) as exc_info:
            calculator.calculate({"totalHomeSqFt": 2000})

        assert any("Home office" in message for message in exc_info.value.errors)


class TestCalculateForm8829:
    """Test suite for the calculate_form_8829 function."""

    def test_by_year(self, small_office):
        result = calculate_form_8829(small_office, tax_year=2024)

        assert result.tax_year == 2024
        assert result.allowed_deduction == Decimal("1200.00")

    def test_unregistered_year(self, small_office):
        """No silent fallback to another year's constants."""
        with pytest.raises(ConfigurationError):
            calculate_form_8829(small_office, tax_year=2019)
