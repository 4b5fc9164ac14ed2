"""Home office deduction (Form 8829).

The office's share of the home's floor area sets the business-use
percentage. That percentage allocates each shared home expense; direct
office expenses are added in full and the total is limited by the annual
cap for the tax year, with the excess carried over.
"""

from decimal import Decimal
from typing import Any, Optional, Union

from .models import (
    AllocatedHomeExpenses,
    AuditTrail,
    Form8829Result,
    HomeOfficeSettings,
)
from .money import Number, allocate, percent_of, round_currency
from .tax_year import TaxYearConstants, resolve_constants
from .validators import coerce_amount, validate_home_office


class HomeOfficeCalculator:
    """Calculate the Form 8829 home office deduction for one tax year."""

    def __init__(self, constants: TaxYearConstants):
        self.constants = constants

    def calculate(
        self,
        settings: Union[HomeOfficeSettings, dict[str, Any]],
        direct_expenses: Optional[Number] = None,
    ) -> Form8829Result:
        """Allocate shared home expenses and apply the annual cap.

        Args:
            settings: Home geometry and shared expenses.
            direct_expenses: Expenses attributable to the office alone.
                Defaults to zero.

        Returns:
            Form8829Result with the allowed deduction and carryover.

        Raises:
            ValidationError: If the geometry is invalid or any expense is
                negative. No partial result is produced.
        """
        direct = (
            coerce_amount(direct_expenses, "direct_expenses")
            if direct_expenses is not None
            else Decimal("0")
        )
        settings = validate_home_office(settings, direct)

        audit = AuditTrail("form_8829_calculation_step", tax_year=self.constants.tax_year)

        # Line 7: business percentage, full precision for allocation
        business_pct = percent_of(settings.office_area_sq_ft, settings.total_home_area_sq_ft)
        audit.log_step(
            step="business_use_percent",
            input_value=(
                f"office={settings.office_area_sq_ft} sq ft, "
                f"home={settings.total_home_area_sq_ft} sq ft"
            ),
            output_value=str(business_pct),
            source="Form 8829 Part I",
            line_number="Line 7",
        )

        allocated: dict[str, Decimal] = {}
        for name, amount in settings.shared_expenses.items():
            allocated[name] = allocate(amount, business_pct)
            if amount:
                audit.log_step(
                    step=f"allocate_{name}",
                    input_value=f"{amount} x {business_pct}%",
                    output_value=str(allocated[name]),
                    source="Form 8829 Part II, indirect expenses",
                )

        total_allocated = sum(allocated.values(), Decimal("0"))
        tentative = total_allocated + direct
        audit.log_step(
            step="tentative_deduction",
            input_value=f"allocated={total_allocated}, direct={direct}",
            output_value=str(tentative),
            source="Form 8829 Part II",
        )

        cap = self.constants.home_office_annual_cap
        allowed = min(tentative, cap)
        carryover = max(Decimal("0"), tentative - cap)
        audit.log_step(
            step="annual_cap",
            input_value=f"tentative={tentative}, cap={cap}",
            output_value=f"allowed={allowed}, carryover={carryover}",
            source=f"Home office annual cap {self.constants.tax_year}",
            line_number="Line 36",
        )

        return Form8829Result(
            tax_year=self.constants.tax_year,
            business_use_percent=round_currency(business_pct),
            allocated_expenses=AllocatedHomeExpenses(
                **{name: round_currency(value) for name, value in allocated.items()}
            ),
            total_allocated_expenses=round_currency(total_allocated),
            direct_office_expenses=round_currency(direct),
            tentative_deduction=round_currency(tentative),
            annual_cap=round_currency(cap),
            allowed_deduction=round_currency(allowed),
            carryover_to_next_year=round_currency(carryover),
            audit_log=audit.entries,
            constants_version=self.constants.version,
        )


def calculate_form_8829(
    settings: Union[HomeOfficeSettings, dict[str, Any]],
    tax_year: Union[int, TaxYearConstants],
    direct_expenses: Optional[Number] = None,
) -> Form8829Result:
    """Calculate Form 8829 for a tax year.

    Raises:
        ConfigurationError: If the tax year has no registered constants.
        ValidationError: If the settings are invalid.
    """
    return HomeOfficeCalculator(resolve_constants(tax_year)).calculate(settings, direct_expenses)


__all__ = [
    "HomeOfficeCalculator",
    "calculate_form_8829",
]
