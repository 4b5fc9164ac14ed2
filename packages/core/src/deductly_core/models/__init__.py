"""Data models for deductly-core.

This package provides:
- Input models owned by external collaborators (inputs.py)
- Calculator result models (results.py)
- Audit trail of calculation steps (audit.py)
"""

from deductly_core.models.inputs import (
    # Enumerations
    FilingStatus,
    AssetCategory,
    DepreciationMethod,
    # Inputs
    Transaction,
    SharedHomeExpenses,
    HomeOfficeSettings,
    Asset,
    TaxSummaryInput,
)

from deductly_core.models.audit import (
    AuditEntry,
    AuditTrail,
)

from deductly_core.models.results import (
    AllocatedHomeExpenses,
    Form8829Result,
    AssetDepreciationResult,
    Form4562Result,
    ScheduleSEResult,
    ScheduleCLineSummary,
    ScheduleCSummary,
    ProfitAndLossSummary,
    MonthlySavings,
    TaxSavingsEstimate,
    TaxYearSummary,
)

__all__ = [
    # Enumerations
    "FilingStatus",
    "AssetCategory",
    "DepreciationMethod",
    # Inputs
    "Transaction",
    "SharedHomeExpenses",
    "HomeOfficeSettings",
    "Asset",
    "TaxSummaryInput",
    # Audit
    "AuditEntry",
    "AuditTrail",
    # Results
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
