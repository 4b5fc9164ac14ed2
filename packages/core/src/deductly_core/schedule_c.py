"""Schedule C expense aggregation and profit and loss.

Transactions for the tax year are split into two groups:

- confirmed: ``is_deductible`` is True
- potential: not yet reviewed, an expense, and in a business category

Both groups are grouped by Schedule C line. Transactions confirmed as not
deductible never count, and unreviewed transactions outside the business
categories are left out until someone reviews them.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Any, Iterable, Optional, Union

from .classifier import TaxLine, classify, is_potentially_business, ordered_lines
from .models import (
    AuditTrail,
    ProfitAndLossSummary,
    ScheduleCLineSummary,
    ScheduleCSummary,
    Transaction,
)
from .money import ZERO, round_currency
from .tax_year import TaxYearConstants, resolve_constants
from .validators import validate_transactions


def is_confirmed(txn: Transaction) -> bool:
    return txn.is_deductible is True


def is_potential(txn: Transaction) -> bool:
    """Unreviewed expense in a category that is usually a business cost."""
    return (
        not txn.is_reviewed
        and txn.is_expense
        and is_potentially_business(txn.category_code)
    )


class ScheduleCBuilder:
    """Build the Schedule C expense summary for one tax year."""

    def __init__(self, constants: TaxYearConstants):
        self.constants = constants

    @property
    def tax_year(self) -> int:
        return self.constants.tax_year

    def _for_year(
        self, transactions: Iterable[Union[Transaction, dict[str, Any]]]
    ) -> list[Transaction]:
        return [
            txn for txn in validate_transactions(transactions)
            if txn.date.year == self.tax_year
        ]

    def _deductible_share(self, line: TaxLine, total: Decimal) -> Decimal:
        if line is TaxLine.MEALS:
            return total * self.constants.meals_deduction_rate
        return total

    def build(
        self,
        transactions: Iterable[Union[Transaction, dict[str, Any]]],
        include_potential: bool = True,
    ) -> ScheduleCSummary:
        """Group the year's deductible transactions by Schedule C line.

        Args:
            transactions: Transactions from any year; others are ignored.
            include_potential: Count unreviewed business-category expenses.
                Set False for a confirmed-only schedule.

        Returns:
            ScheduleCSummary with all six lines in line order. An empty
            working set gives an all-zero summary.

        Raises:
            ValidationError: If a transaction mapping cannot be parsed.
        """
        year_txns = self._for_year(transactions)
        audit = AuditTrail("schedule_c_calculation_step", tax_year=self.tax_year)

        grouped: dict[TaxLine, list[Transaction]] = defaultdict(list)
        for txn in year_txns:
            if is_confirmed(txn) or (include_potential and is_potential(txn)):
                grouped[classify(txn.category_code)].append(txn)

        lines: list[ScheduleCLineSummary] = []
        for line in ordered_lines():
            members = grouped.get(line, [])
            raw_total = sum((abs(txn.amount) for txn in members), ZERO)
            total = round_currency(raw_total)
            deductible = round_currency(self._deductible_share(line, raw_total))
            confirmed = sum(1 for txn in members if is_confirmed(txn))

            if members:
                audit.log_step(
                    step=f"line_{line.line_code}",
                    input_value=f"{len(members)} transactions, total={total}",
                    output_value=str(deductible),
                    source=f"Schedule C {self.tax_year}",
                    notes=line.line_name,
                    line_number=f"Line {line.line_code}",
                )

            lines.append(
                ScheduleCLineSummary(
                    line=line,
                    line_code=line.line_code,
                    line_name=line.line_name,
                    total=total,
                    deductible_total=deductible,
                    transaction_count=len(members),
                    confirmed_count=confirmed,
                    potential_count=len(members) - confirmed,
                    transactions=members,
                )
            )

        total_deductible = sum((item.deductible_total for item in lines), ZERO)
        audit.log_step(
            step="total_expenses",
            input_value=f"{len(lines)} lines",
            output_value=str(total_deductible),
            source=f"Schedule C {self.tax_year}",
            line_number="Line 28",
        )

        return ScheduleCSummary(
            tax_year=self.tax_year,
            lines=lines,
            total_expenses=sum((item.total for item in lines), ZERO),
            total_deductible=total_deductible,
            transaction_count=sum(item.transaction_count for item in lines),
            confirmed_count=sum(item.confirmed_count for item in lines),
            potential_count=sum(item.potential_count for item in lines),
            audit_log=audit.entries,
        )

    def profit_and_loss(
        self,
        transactions: Iterable[Union[Transaction, dict[str, Any]]],
        include_potential: bool = True,
        schedule: Optional[ScheduleCSummary] = None,
    ) -> ProfitAndLossSummary:
        """Gross receipts less Schedule C deductions for the year.

        Gross receipts are the income (negative amount) transactions not
        marked as non-business. The net profit may be negative.

        Args:
            transactions: Transactions from any year; others are ignored.
            include_potential: Count unreviewed business-category expenses
                as deductions.
            schedule: A summary already built from the same transactions
                with the same ``include_potential``. Built when omitted.
        """
        year_txns = self._for_year(transactions)
        if schedule is None:
            schedule = self.build(year_txns, include_potential=include_potential)

        income = [
            txn for txn in year_txns
            if txn.amount < 0 and txn.is_deductible is not False
        ]
        gross_receipts = round_currency(sum((abs(txn.amount) for txn in income), ZERO))

        return ProfitAndLossSummary(
            tax_year=self.tax_year,
            gross_receipts=gross_receipts,
            total_deductions=schedule.total_deductible,
            net_profit=gross_receipts - schedule.total_deductible,
            income_transaction_count=len(income),
            includes_potential=include_potential,
        )


def build_schedule_c(
    transactions: Iterable[Union[Transaction, dict[str, Any]]],
    tax_year: Union[int, TaxYearConstants],
    include_potential: bool = True,
) -> ScheduleCSummary:
    """Build the Schedule C expense summary for a tax year.

    Raises:
        ConfigurationError: If the tax year has no registered constants.
    """
    return ScheduleCBuilder(resolve_constants(tax_year)).build(transactions, include_potential)


__all__ = [
    "ScheduleCBuilder",
    "build_schedule_c",
    "is_confirmed",
    "is_potential",
]
