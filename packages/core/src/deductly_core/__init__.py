"""Deductly Core - Schedule C deductions, depreciation and self-employment tax."""

__version__ = "0.1.0"

from .classifier import TaxLine, classify, is_potentially_business
from .depreciation import DepreciationCalculator, calculate_form_4562
from .engine import DeductionEngine
from .exceptions import ConfigurationError, DeductlyError, ValidationError
from .home_office import HomeOfficeCalculator, calculate_form_8829
from .models import (
    Asset,
    FilingStatus,
    HomeOfficeSettings,
    TaxSummaryInput,
    TaxYearSummary,
    Transaction,
)
from .savings import TaxSavingsEstimator
from .schedule_c import ScheduleCBuilder, build_schedule_c
from .self_employment import SelfEmploymentTaxCalculator, calculate_schedule_se
from .tax_year import TaxYearConstants, get_tax_year_constants, register_tax_year

__all__ = [
    "TaxLine",
    "classify",
    "is_potentially_business",
    "DepreciationCalculator",
    "calculate_form_4562",
    "DeductionEngine",
    "ConfigurationError",
    "DeductlyError",
    "ValidationError",
    "HomeOfficeCalculator",
    "calculate_form_8829",
    "Asset",
    "FilingStatus",
    "HomeOfficeSettings",
    "TaxSummaryInput",
    "TaxYearSummary",
    "Transaction",
    "TaxSavingsEstimator",
    "ScheduleCBuilder",
    "build_schedule_c",
    "SelfEmploymentTaxCalculator",
    "calculate_schedule_se",
    "TaxYearConstants",
    "get_tax_year_constants",
    "register_tax_year",
]
