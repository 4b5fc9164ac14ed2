"""Deduction engine facade.

Runs every calculator for one tax year in the order the forms feed each
other:

1. Schedule C expense lines and profit and loss from the transactions.
2. Form 8829 home office deduction, when home office settings are given.
3. Form 4562 depreciation, when assets are given. Section 179 is limited by
   the Schedule C net profit.
4. Schedule SE on the net profit left after the home office and
   depreciation deductions, when that profit is positive.

Example:
    >>> engine = DeductionEngine(2024)
    >>> summary = engine.summarize(transactions, home_office=settings)
    >>> summary.total_business_deductions
"""

from typing import Any, Iterable, Optional, Union

import structlog

from .config import get_settings
from .depreciation import DepreciationCalculator
from .exceptions import ValidationError
from .home_office import HomeOfficeCalculator
from .models import (
    Asset,
    FilingStatus,
    HomeOfficeSettings,
    TaxSummaryInput,
    TaxYearSummary,
    Transaction,
)
from .money import ZERO, Number
from .schedule_c import ScheduleCBuilder
from .self_employment import SelfEmploymentTaxCalculator
from .tax_year import TaxYearConstants, resolve_constants
from .validators import coerce_amount, validate_transactions

logger = structlog.get_logger()


def _filing_status(value: Union[FilingStatus, str]) -> FilingStatus:
    try:
        return FilingStatus(value)
    except ValueError as exc:
        raise ValidationError(
            f"Unknown filing status: {value}",
            field="filing_status",
            value=str(value),
            constraint=", ".join(status.value for status in FilingStatus),
        ) from exc


class DeductionEngine:
    """Summarize all deductions and self-employment tax for one tax year.

    Args:
        tax_year: Year or constants table. Defaults to the configured
            default tax year.

    Raises:
        ConfigurationError: If the tax year has no registered constants.
    """

    def __init__(self, tax_year: Optional[Union[int, TaxYearConstants]] = None):
        if tax_year is None:
            tax_year = get_settings().default_tax_year
        self.constants = resolve_constants(tax_year)
        self.schedule_c = ScheduleCBuilder(self.constants)
        self.home_office = HomeOfficeCalculator(self.constants)
        self.depreciation = DepreciationCalculator(self.constants)
        self.self_employment = SelfEmploymentTaxCalculator(self.constants)

    @property
    def tax_year(self) -> int:
        return self.constants.tax_year

    def summarize(
        self,
        transactions: Iterable[Union[Transaction, dict[str, Any]]],
        home_office: Optional[Union[HomeOfficeSettings, dict[str, Any]]] = None,
        assets: Iterable[Union[Asset, dict[str, Any]]] = (),
        filing_status: Union[FilingStatus, str] = FilingStatus.SINGLE,
        adjustments: Number = 0,
        direct_home_office_expenses: Optional[Number] = None,
    ) -> TaxYearSummary:
        """Run every applicable calculator and collect the results.

        Sub-results for inputs that were not supplied are None. A Schedule C
        loss leaves the Schedule SE result as None.

        Raises:
            ValidationError: If any supplied input is invalid.
        """
        txns = validate_transactions(transactions)
        asset_list = list(assets)
        status = _filing_status(filing_status)
        adjustment_amount = coerce_amount(adjustments, "adjustments")

        schedule = self.schedule_c.build(txns)
        pnl = self.schedule_c.profit_and_loss(txns, schedule=schedule)

        form_8829 = None
        if home_office is not None:
            form_8829 = self.home_office.calculate(home_office, direct_home_office_expenses)

        form_4562 = None
        if asset_list:
            form_4562 = self.depreciation.calculate(asset_list, pnl.net_profit)

        se_profit = (
            pnl.net_profit
            - (form_8829.allowed_deduction if form_8829 else ZERO)
            - (form_4562.total_depreciation if form_4562 else ZERO)
        )
        schedule_se = None
        if se_profit > 0:
            schedule_se = self.self_employment.calculate(
                TaxSummaryInput(
                    schedule_c_net_profit=se_profit,
                    tax_year=self.tax_year,
                    adjustments=adjustment_amount,
                    filing_status=status,
                )
            )

        logger.info(
            "tax_year_summarized",
            tax_year=self.tax_year,
            transaction_count=len(txns),
            asset_count=len(asset_list),
            net_profit=str(pnl.net_profit),
            schedule_se=schedule_se is not None,
        )

        return TaxYearSummary(
            tax_year=self.tax_year,
            schedule_c=schedule,
            profit_and_loss=pnl,
            form_8829=form_8829,
            form_4562=form_4562,
            schedule_se=schedule_se,
        )


__all__ = [
    "DeductionEngine",
]
