#!/usr/bin/env python3
"""
Schedule C Deduction Demonstration

This script walks one sole proprietor through a tax year:
1. Classify bank transactions onto Schedule C lines
2. Calculate the home office deduction and asset depreciation
3. Compute self-employment tax on the resulting profit
4. Estimate tax savings to date

Run: python packages/core/examples/schedule_c_demo.py
"""

from datetime import date
from decimal import Decimal

from deductly_core import (
    Asset,
    DeductionEngine,
    FilingStatus,
    HomeOfficeSettings,
    TaxSavingsEstimator,
    Transaction,
    ValidationError,
)
from deductly_core.config import EngineSettings
from deductly_core.logging import configure_logging
from deductly_core.models import AssetCategory, DepreciationMethod


def create_sample_transactions() -> list[Transaction]:
    """Create a year of realistic bank transactions."""
    rows = [
        ("inv-01", date(2024, 1, 31), "-9500.00", "INCOME_WAGES", None),
        ("inv-02", date(2024, 2, 29), "-11250.00", "INCOME_WAGES", None),
        ("inv-03", date(2024, 3, 29), "-10800.00", "INCOME_WAGES", None),
        ("t-001", date(2024, 1, 8), "86.40", "FOOD_AND_DRINK_RESTAURANT", True),
        ("t-002", date(2024, 1, 12), "62.15", "TRANSPORTATION_FUEL", True),
        ("t-003", date(2024, 1, 19), "450.00", "SERVICE_ACCOUNTING", True),
        ("t-004", date(2024, 2, 2), "129.99", "GENERAL_MERCHANDISE_OFFICE_SUPPLIES", True),
        ("t-005", date(2024, 2, 14), "412.80", "TRAVEL_FLIGHTS", True),
        ("t-006", date(2024, 2, 15), "289.00", "TRAVEL_LODGING", True),
        ("t-007", date(2024, 3, 3), "14.75", "FOOD_AND_DRINK_COFFEE_SHOP", None),
        ("t-008", date(2024, 3, 9), "58.90", "TRANSPORTATION_FUEL", None),
        ("t-009", date(2024, 3, 21), "39.00", "ENTERTAINMENT_MOVIES_AND_DVDS", False),
    ]
    return [
        Transaction(
            id=txn_id,
            date=posted,
            amount=Decimal(amount),
            category_code=category,
            is_deductible=deductible,
        )
        for txn_id, posted, amount, category, deductible in rows
    ]


def create_sample_assets() -> list[Asset]:
    """Create the business assets placed in service."""
    return [
        Asset(
            id="a-laptop",
            description="Laptop",
            date_placed_in_service=date(2024, 1, 10),
            cost=Decimal("2400"),
            business_use_percent=Decimal("100"),
            category=AssetCategory.COMPUTER,
            depreciation_method=DepreciationMethod.MACRS_5YR,
            section_179_requested=True,
        ),
        Asset(
            id="a-desk",
            description="Standing desk",
            date_placed_in_service=date(2023, 6, 1),
            cost=Decimal("1100"),
            business_use_percent=Decimal("100"),
            category=AssetCategory.FURNITURE,
            depreciation_method=DepreciationMethod.MACRS_7YR,
        ),
        Asset(
            id="a-camera",
            description="Camera kit",
            date_placed_in_service=date(2024, 2, 20),
            cost=Decimal("3200"),
            business_use_percent=Decimal("80"),
            category=AssetCategory.EQUIPMENT,
            depreciation_method=DepreciationMethod.MACRS_5YR,
            bonus_eligible=True,
        ),
    ]


def main():
    """Run the Schedule C deduction demonstration."""
    configure_logging(EngineSettings(env="development", log_level="WARNING"))

    print("=" * 70)
    print("DEDUCTLY CORE - Schedule C Deduction Demo")
    print("=" * 70)
    print()

    transactions = create_sample_transactions()
    home_office = HomeOfficeSettings.model_validate(
        {
            "totalHomeSqFt": 1800,
            "officeSqFt": 150,
            "rentOrMortgageInterest": 26400,
            "utilities": 2160,
            "insurance": 480,
        }
    )

    # Step 1: Summarize the year
    print("Step 1: Summarizing tax year 2024...")
    engine = DeductionEngine(2024)
    summary = engine.summarize(
        transactions,
        home_office=home_office,
        assets=create_sample_assets(),
        filing_status=FilingStatus.SINGLE,
    )

    print()
    print("Schedule C expense lines")
    print("-" * 70)
    for line in summary.schedule_c.lines:
        print(
            f"  Line {line.line_code:<4} {line.line_name:<34}"
            f" ${line.deductible_total:>10,.2f}"
            f"  ({line.confirmed_count} confirmed, {line.potential_count} potential)"
        )
    print(f"  {'Total deductible':<40} ${summary.schedule_c.total_deductible:>10,.2f}")

    pnl = summary.profit_and_loss
    print()
    print(f"  - Gross receipts: ${pnl.gross_receipts:,.2f}")
    print(f"  - Net profit before home office and depreciation: ${pnl.net_profit:,.2f}")

    # Step 2: Form 8829 and Form 4562
    print()
    print("Step 2: Home office and depreciation...")
    form_8829 = summary.form_8829
    print(f"  - Business use: {form_8829.business_use_percent}%")
    print(f"  - Allowed home office deduction: ${form_8829.allowed_deduction:,.2f}")
    print(f"  - Carryover to 2025: ${form_8829.carryover_to_next_year:,.2f}")

    form_4562 = summary.form_4562
    for item in form_4562.assets:
        print(
            f"  - {item.description}: Section 179 ${item.section_179_deduction:,.2f},"
            f" bonus ${item.bonus_depreciation:,.2f},"
            f" MACRS/SL ${item.scheduled_depreciation:,.2f}"
        )
    print(f"  - Total depreciation: ${form_4562.total_depreciation:,.2f}")

    # Step 3: Schedule SE
    print()
    print("Step 3: Self-employment tax...")
    if summary.schedule_se is None:
        print("  - No self-employment tax: the business had a loss")
    else:
        se = summary.schedule_se
        print(f"  - SE base: ${se.se_base:,.2f}")
        print(f"  - Social Security: ${se.social_security_tax:,.2f}")
        print(f"  - Medicare: ${se.medicare_tax:,.2f}")
        print(f"  - Total SE tax: ${se.total_se_tax:,.2f}")
        print(f"  - Deductible half: ${se.half_se_deduction:,.2f}")

    # Step 4: Savings to date
    print()
    print("Step 4: Estimated savings to date...")
    estimate = TaxSavingsEstimator().estimate(transactions, as_of=date(2024, 3, 31))
    print(f"  - Confirmed deductions YTD: ${estimate.year_to_date_deductions:,.2f}")
    print(f"  - Estimated savings YTD: ${estimate.year_to_date_savings:,.2f}")
    print(f"  - Projected annual savings: ${estimate.projected_annual_savings:,.2f}")
    print(f"  - This month vs target: {estimate.monthly_target_percentage}%")

    # Invalid input is rejected as a unit
    print()
    print("Validation example...")
    try:
        engine.summarize(
            transactions,
            assets=[
                {
                    "id": "x",
                    "description": "",
                    "datePlacedInService": "2024-01-01",
                    "cost": 0,
                    "businessUsePercent": 100,
                    "category": "equipment",
                    "method": "MACRS_5YR",
                }
            ],
        )
    except ValidationError as e:
        for message in e.errors:
            print(f"  - {message}")

    print()
    print("=" * 70)
    print("Demo complete!")
    print("=" * 70)


if __name__ == "__main__":
    main()
