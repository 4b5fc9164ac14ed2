"""Estimated tax savings from confirmed deductions.

Savings are estimated by applying one marginal rate to the confirmed
deductible total. The figure is a progress indicator for the dashboard, not
a tax computation, so it uses the configured rate rather than brackets.
"""

import calendar
from collections import defaultdict
from datetime import date
from typing import Any, Iterable, Optional, Union

import structlog

from .config import EngineSettings, get_settings
from .exceptions import ValidationError
from .models import MonthlySavings, TaxSavingsEstimate, Transaction
from .money import HUNDRED, ZERO, Number, round_currency
from .schedule_c import is_confirmed
from .validators import coerce_amount, validate_as_of, validate_transactions

logger = structlog.get_logger()


class TaxSavingsEstimator:
    """Estimate year-to-date tax savings and progress toward a goal.

    Args:
        marginal_rate: Rate applied to deductions, between 0 and 1.
        annual_deduction_goal: Target total deductions for the year.
        settings: Source of defaults for the two figures above.
    """

    def __init__(
        self,
        marginal_rate: Optional[Number] = None,
        annual_deduction_goal: Optional[Number] = None,
        settings: Optional[EngineSettings] = None,
    ):
        settings = settings or get_settings()
        rate = coerce_amount(
            marginal_rate if marginal_rate is not None else settings.estimated_marginal_rate,
            "marginal_rate",
        )
        goal = coerce_amount(
            annual_deduction_goal
            if annual_deduction_goal is not None
            else settings.annual_deduction_goal,
            "annual_deduction_goal",
        )
        if rate < 0 or rate > 1:
            raise ValidationError(
                "Marginal rate must be between 0 and 1",
                field="marginal_rate",
                value=str(rate),
                constraint="0 <= rate <= 1",
            )
        if goal < 0:
            raise ValidationError(
                "Annual deduction goal cannot be negative",
                field="annual_deduction_goal",
                value=str(goal),
                constraint=">= 0",
            )
        self.marginal_rate = rate
        self.annual_deduction_goal = goal

    def estimate(
        self,
        transactions: Iterable[Union[Transaction, dict[str, Any]]],
        as_of: date,
    ) -> TaxSavingsEstimate:
        """Estimate savings for ``as_of.year`` up to and including ``as_of``.

        Only confirmed deductible transactions count.
        """
        as_of = validate_as_of(as_of)
        counted = [
            txn for txn in validate_transactions(transactions)
            if is_confirmed(txn)
            and txn.date.year == as_of.year
            and txn.date <= as_of
        ]

        by_month: dict[int, list[Transaction]] = defaultdict(list)
        for txn in counted:
            by_month[txn.date.month].append(txn)

        breakdown: list[MonthlySavings] = []
        for month in range(1, 13):
            members = by_month.get(month, [])
            month_total = sum((abs(txn.amount) for txn in members), ZERO)
            breakdown.append(
                MonthlySavings(
                    month=month,
                    month_name=calendar.month_name[month],
                    deductible_total=round_currency(month_total),
                    estimated_savings=round_currency(month_total * self.marginal_rate),
                    transaction_count=len(members),
                )
            )

        ytd_total = sum((abs(txn.amount) for txn in counted), ZERO)
        month_total = sum((abs(txn.amount) for txn in by_month.get(as_of.month, [])), ZERO)
        ytd_savings = ytd_total * self.marginal_rate
        projected = ytd_savings / as_of.month * 12

        monthly_target = self.annual_deduction_goal / 12
        if monthly_target > 0:
            target_pct = month_total / monthly_target * HUNDRED
        else:
            target_pct = ZERO

        logger.info(
            "tax_savings_estimated",
            tax_year=as_of.year,
            as_of=as_of.isoformat(),
            transaction_count=len(counted),
            year_to_date_deductions=str(round_currency(ytd_total)),
        )

        return TaxSavingsEstimate(
            tax_year=as_of.year,
            as_of=as_of,
            marginal_rate=self.marginal_rate,
            year_to_date_deductions=round_currency(ytd_total),
            current_month_deductions=round_currency(month_total),
            year_to_date_savings=round_currency(ytd_savings),
            current_month_savings=round_currency(month_total * self.marginal_rate),
            projected_annual_savings=round_currency(projected),
            annual_deduction_goal=round_currency(self.annual_deduction_goal),
            monthly_target=round_currency(monthly_target),
            monthly_target_percentage=round_currency(target_pct),
            monthly_breakdown=breakdown,
            transaction_count=len(counted),
        )


__all__ = [
    "TaxSavingsEstimator",
]
