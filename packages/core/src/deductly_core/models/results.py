"""Result models returned by the calculators.

Results are not persisted by this package; the rendering layer turns them
into PDF or CSV documents. Monetary fields are Decimal rounded to cents.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from ..classifier import TaxLine
from .audit import AuditEntry
from .inputs import FilingStatus, TaxSummaryInput, Transaction


# =============================================================================
# FORM 8829 - HOME OFFICE
# =============================================================================

class AllocatedHomeExpenses(BaseModel):
    """Business share of each shared home expense."""

    rent_or_mortgage_interest: Decimal = Decimal("0")
    utilities: Decimal = Decimal("0")
    insurance: Decimal = Decimal("0")
    repairs_maintenance: Decimal = Decimal("0")
    property_tax: Decimal = Decimal("0")
    other: Decimal = Decimal("0")


class Form8829Result(BaseModel):
    """Home office deduction for one tax year."""

    tax_year: int
    business_use_percent: Decimal = Field(
        description="Office share of the home, rounded for display"
    )
    allocated_expenses: AllocatedHomeExpenses
    total_allocated_expenses: Decimal
    direct_office_expenses: Decimal
    tentative_deduction: Decimal = Field(
        description="Allocated plus direct expenses before the annual cap"
    )
    annual_cap: Decimal
    allowed_deduction: Decimal
    carryover_to_next_year: Decimal

    audit_log: list[AuditEntry] = Field(default_factory=list)
    constants_version: str


# =============================================================================
# FORM 4562 - DEPRECIATION
# =============================================================================

class AssetDepreciationResult(BaseModel):
    """Current-year depreciation for a single asset."""

    asset_id: str
    description: str
    years_in_service: int
    business_basis: Decimal
    section_179_deduction: Decimal
    bonus_depreciation: Decimal
    scheduled_depreciation: Decimal
    total_depreciation: Decimal
    remaining_basis: Decimal = Field(
        description="Basis left after Section 179 and bonus, before scheduled depreciation"
    )
    carryover_to_next_year: Decimal


class Form4562Result(BaseModel):
    """Depreciation across all assets for one tax year."""

    tax_year: int
    business_income: Decimal
    section_179_limit: Decimal = Field(
        description="Dollar limit after the phase-out reduction"
    )
    section_179_limit_unused: Decimal
    assets: list[AssetDepreciationResult] = Field(
        default_factory=list,
        description="Per-asset results in processing order (highest cost first)",
    )
    total_section_179: Decimal
    total_bonus_depreciation: Decimal
    total_scheduled_depreciation: Decimal
    total_depreciation: Decimal
    total_carryover: Decimal

    audit_log: list[AuditEntry] = Field(default_factory=list)
    constants_version: str

    def for_asset(self, asset_id: str) -> Optional[AssetDepreciationResult]:
        """Return the result for an asset id, if present."""
        return next((a for a in self.assets if a.asset_id == asset_id), None)


# =============================================================================
# SCHEDULE SE - SELF-EMPLOYMENT TAX
# =============================================================================

class ScheduleSEResult(BaseModel):
    """Self-employment tax for one tax year."""

    tax_year: int
    filing_status: FilingStatus
    net_profit: Decimal
    adjustments: Decimal
    net_earnings: Decimal
    se_base: Decimal
    social_security_taxable: Decimal
    social_security_tax: Decimal
    medicare_tax: Decimal
    additional_medicare_threshold: Decimal
    additional_medicare_tax: Decimal
    total_se_tax: Decimal
    half_se_deduction: Decimal

    audit_log: list[AuditEntry] = Field(default_factory=list)
    constants_version: str


# =============================================================================
# SCHEDULE C - DEDUCTION AGGREGATION
# =============================================================================

class ScheduleCLineSummary(BaseModel):
    """Totals for one Schedule C expense line."""

    line: TaxLine
    line_code: str
    line_name: str
    total: Decimal = Decimal("0")
    deductible_total: Decimal = Decimal("0")
    transaction_count: int = 0
    confirmed_count: int = 0
    potential_count: int = 0
    transactions: list[Transaction] = Field(default_factory=list)


class ScheduleCSummary(BaseModel):
    """Schedule C expense lines for one tax year."""

    tax_year: int
    lines: list[ScheduleCLineSummary] = Field(
        description="One entry per line, in Schedule C line order"
    )
    total_expenses: Decimal
    total_deductible: Decimal
    transaction_count: int
    confirmed_count: int
    potential_count: int

    audit_log: list[AuditEntry] = Field(default_factory=list)

    def line(self, tax_line: TaxLine) -> ScheduleCLineSummary:
        """Return the summary for a line."""
        return next(item for item in self.lines if item.line == tax_line)

    @property
    def non_empty_lines(self) -> list[ScheduleCLineSummary]:
        return [item for item in self.lines if item.transaction_count > 0]

    @property
    def is_empty(self) -> bool:
        return self.transaction_count == 0


class ProfitAndLossSummary(BaseModel):
    """Gross receipts less deductions for one tax year."""

    tax_year: int
    gross_receipts: Decimal
    total_deductions: Decimal
    net_profit: Decimal
    income_transaction_count: int
    includes_potential: bool

    @property
    def is_loss(self) -> bool:
        return self.net_profit < 0

    def to_tax_summary_input(
        self,
        filing_status: FilingStatus = FilingStatus.SINGLE,
        adjustments: Decimal = Decimal("0"),
    ) -> TaxSummaryInput:
        """Build the Schedule SE input from this summary.

        A loss is passed through unchanged; the Schedule SE validator will
        reject it, since self-employment tax does not apply to a loss.
        """
        return TaxSummaryInput(
            schedule_c_net_profit=self.net_profit,
            tax_year=self.tax_year,
            adjustments=adjustments,
            filing_status=filing_status,
        )


# =============================================================================
# ESTIMATED TAX SAVINGS
# =============================================================================

class MonthlySavings(BaseModel):
    """Confirmed deductions and estimated savings for one calendar month."""

    month: int = Field(ge=1, le=12)
    month_name: str
    deductible_total: Decimal = Decimal("0")
    estimated_savings: Decimal = Decimal("0")
    transaction_count: int = 0


class TaxSavingsEstimate(BaseModel):
    """Estimated tax savings from confirmed deductions, year to date."""

    tax_year: int
    as_of: date
    marginal_rate: Decimal
    year_to_date_deductions: Decimal
    current_month_deductions: Decimal
    year_to_date_savings: Decimal
    current_month_savings: Decimal
    projected_annual_savings: Decimal
    annual_deduction_goal: Decimal
    monthly_target: Decimal
    monthly_target_percentage: Decimal
    monthly_breakdown: list[MonthlySavings]
    transaction_count: int


# =============================================================================
# ENGINE
# =============================================================================

class TaxYearSummary(BaseModel):
    """All calculator results for one user and tax year."""

    tax_year: int
    schedule_c: ScheduleCSummary
    profit_and_loss: ProfitAndLossSummary
    form_8829: Optional[Form8829Result] = None
    form_4562: Optional[Form4562Result] = None
    schedule_se: Optional[ScheduleSEResult] = None

    @property
    def total_business_deductions(self) -> Decimal:
        """Schedule C expense lines plus home office and depreciation."""
        total = self.schedule_c.total_deductible
        if self.form_8829 is not None:
            total += self.form_8829.allowed_deduction
        if self.form_4562 is not None:
            total += self.form_4562.total_depreciation
        return total


__all__ = [
    "AllocatedHomeExpenses",
    "Form8829Result",
    "AssetDepreciationResult",
    "Form4562Result",
    "ScheduleSEResult",
    "ScheduleCLineSummary",
    "ScheduleCSummary",
    "ProfitAndLossSummary",
    "MonthlySavings",
    "TaxSavingsEstimate",
    "TaxYearSummary",
]
