"""Tests for the deduction engine facade."""

from datetime import date
from decimal import Decimal
from typing import Optional

import pytest

from deductly_core import ConfigurationError, DeductionEngine, ValidationError
from deductly_core.config import get_settings
from deductly_core.models import (
    Asset,
    AssetCategory,
    DepreciationMethod,
    FilingStatus,
    HomeOfficeSettings,
    Transaction,
)


def txn(txn_id: str, amount: str, category: str, is_deductible: Optional[bool] = True):
    return Transaction(
        id=txn_id,
        date=date(2024, 4, 2),
        amount=Decimal(amount),
        category_code=category,
        is_deductible=is_deductible,
    )


@pytest.fixture
def transactions() -> list[Transaction]:
    return [
        txn("invoice", "-50000", "INCOME_WAGES", is_deductible=None),
        txn("lunch", "80", "FOOD_AND_DRINK_RESTAURANT"),
        txn("paper", "500", "GENERAL_MERCHANDISE_OFFICE_SUPPLIES"),
    ]


@pytest.fixture
def home_office() -> HomeOfficeSettings:
    return HomeOfficeSettings.model_validate(
        {"totalHomeSqFt": 2000, "officeSqFt": 200, "rentOrMortgageInterest": 12000}
    )


@pytest.fixture
def laptop() -> Asset:
    return Asset(
        id="laptop",
        description="Laptop",
        date_placed_in_service=date(2024, 1, 15),
        cost=Decimal("2000"),
        business_use_percent=Decimal("100"),
        category=AssetCategory.COMPUTER,
        depreciation_method=DepreciationMethod.MACRS_5YR,
    )


class TestDeductionEngine:
    """Test suite for DeductionEngine.summarize."""

    def test_full_summary(self, transactions, home_office, laptop):
        summary = DeductionEngine(2024).summarize(
            transactions, home_office=home_office, assets=[laptop]
        )

        assert summary.schedule_c.total_deductible == Decimal("540.00")
        assert summary.profit_and_loss.net_profit == Decimal("49460.00")
        assert summary.form_8829.allowed_deduction == Decimal("1200.00")
        assert summary.form_4562.total_depreciation == Decimal("400.00")
        assert summary.total_business_deductions == Decimal("2140.00")

    def test_schedule_se_on_profit_after_deductions(self, transactions, home_office, laptop):
        summary = DeductionEngine(2024).summarize(
            transactions,
            home_office=home_office,
            assets=[laptop],
            filing_status="married_jointly",
        )

        assert summary.schedule_se.net_profit == Decimal("47860.00")
        assert summary.schedule_se.se_base == Decimal("44198.71")
        assert summary.schedule_se.filing_status == FilingStatus.MARRIED_JOINTLY

    def test_section_179_limited_by_net_profit(self, transactions):
        truck = Asset(
            id="truck",
            description="Truck",
            date_placed_in_service=date(2024, 5, 1),
            cost=Decimal("60000"),
            business_use_percent=Decimal("100"),
            category=AssetCategory.VEHICLE,
            depreciation_method=DepreciationMethod.MACRS_5YR,
            section_179_requested=True,
        )
        summary = DeductionEngine(2024).summarize(transactions, assets=[truck])

        assert summary.form_4562.business_income == Decimal("49460.00")
        assert summary.form_4562.total_section_179 == Decimal("49460.00")

    def test_optional_inputs_omitted(self, transactions):
        summary = DeductionEngine(2024).summarize(transactions)

        assert summary.form_8829 is None
        assert summary.form_4562 is None
        assert summary.schedule_se is not None

    def test_loss_skips_schedule_se(self):
        summary = DeductionEngine(2024).summarize([txn("paper", "500", "SERVICE_SHIPPING")])

        assert summary.profit_and_loss.is_loss
        assert summary.schedule_se is None

    def test_invalid_filing_status(self, transactions):
        with pytest.raises(ValidationError):
            DeductionEngine(2024).summarize(transactions, filing_status="bogus")

    def test_invalid_asset_rejects_whole_summary(self, transactions, laptop):
        bad = laptop.model_copy(update={"id": "bad", "cost": Decimal("-1")})
        with pytest.raises(ValidationError) as exc_info:
            DeductionEngine(2024).summarize(transactions, assets=[laptop, bad])

        assert exc_info.value.errors == ["Asset 2: Cost must be greater than 0"]

    def test_unregistered_year(self):
        with pytest.raises(ConfigurationError):
            DeductionEngine(2019)

    def test_default_year_from_settings(self, monkeypatch):
        monkeypatch.setenv("DEDUCTLY_DEFAULT_TAX_YEAR", "2023")
        get_settings.cache_clear()
        try:
            assert DeductionEngine().tax_year == 2023
        finally:
            get_settings.cache_clear()
