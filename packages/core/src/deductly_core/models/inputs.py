"""Input models consumed by the calculators.

These models describe data owned by external collaborators: transactions
arrive from the bank sync and classification services, home office facts,
assets and tax summary figures from the settings store. The models only
fix types and shapes. Range and geometry rules live in
``deductly_core.validators`` so that every rejected input surfaces as a
single ``deductly_core.ValidationError``.

Field names are snake_case; the camelCase keys used by the datastore
(``categoryCode``, ``isDeductible``, ``totalHomeSqFt`` ...) are accepted
on input.
"""

import datetime
import re
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


def _normalize_key(value: Any) -> str:
    return re.sub(r"[^a-z0-9]", "", str(value).lower())


class FilingStatus(str, Enum):
    """Federal filing status."""

    SINGLE = "single"
    MARRIED_JOINTLY = "married_jointly"
    MARRIED_SEPARATELY = "married_separately"
    HEAD_OF_HOUSEHOLD = "head_of_household"
    QUALIFYING_WIDOW = "qualifying_widow"

    @classmethod
    def _missing_(cls, value: Any) -> Optional["FilingStatus"]:
        return _FILING_STATUS_SPELLINGS.get(_normalize_key(value))


_FILING_STATUS_SPELLINGS = {
    "single": FilingStatus.SINGLE,
    "marriedjointly": FilingStatus.MARRIED_JOINTLY,
    "marriedfilingjointly": FilingStatus.MARRIED_JOINTLY,
    "married": FilingStatus.MARRIED_JOINTLY,
    "mfj": FilingStatus.MARRIED_JOINTLY,
    "marriedseparately": FilingStatus.MARRIED_SEPARATELY,
    "marriedfilingseparately": FilingStatus.MARRIED_SEPARATELY,
    "mfs": FilingStatus.MARRIED_SEPARATELY,
    "headofhousehold": FilingStatus.HEAD_OF_HOUSEHOLD,
    "hoh": FilingStatus.HEAD_OF_HOUSEHOLD,
    "qualifyingwidow": FilingStatus.QUALIFYING_WIDOW,
    "qualifyingwidower": FilingStatus.QUALIFYING_WIDOW,
    "qualifyingsurvivingspouse": FilingStatus.QUALIFYING_WIDOW,
    "qw": FilingStatus.QUALIFYING_WIDOW,
}


class AssetCategory(str, Enum):
    """Kinds of business assets tracked for depreciation."""

    COMPUTER = "computer"
    FURNITURE = "furniture"
    VEHICLE = "vehicle"
    EQUIPMENT = "equipment"
    OTHER = "other"


class DepreciationMethod(str, Enum):
    """Supported depreciation methods."""

    MACRS_5YR = "MACRS_5YR"
    MACRS_7YR = "MACRS_7YR"
    STRAIGHT_LINE = "SL"

    @classmethod
    def _missing_(cls, value: Any) -> Optional["DepreciationMethod"]:
        return {
            "macrs5yr": cls.MACRS_5YR,
            "macrs5": cls.MACRS_5YR,
            "macrs7yr": cls.MACRS_7YR,
            "macrs7": cls.MACRS_7YR,
            "sl": cls.STRAIGHT_LINE,
            "straightline": cls.STRAIGHT_LINE,
        }.get(_normalize_key(value))


class _InputModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class Transaction(_InputModel):
    """A classified bank transaction.

    Positive amounts are expenses; negative amounts are income or refunds.
    ``is_deductible`` is None until the transaction has been reviewed.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "id": "txn_01",
                    "date": "2024-03-14",
                    "amount": "80.00",
                    "categoryCode": "FOOD_AND_DRINK_RESTAURANT",
                    "merchantName": "Blue Door Bistro",
                    "isDeductible": True,
                    "deductionConfidence": 0.92,
                }
            ]
        }
    )

    id: str = Field(description="Transaction identifier from the bank feed")
    date: datetime.date = Field(description="Posting date")
    amount: Decimal = Field(
        description="Signed amount. Positive for expenses, negative for income or refunds"
    )
    category_code: str = Field(
        default="",
        validation_alias=AliasChoices("category_code", "categoryCode", "category"),
        description="Provider category code, e.g. FOOD_AND_DRINK_RESTAURANT",
    )
    merchant_name: str = Field(default="", description="Merchant display name")
    is_deductible: Optional[bool] = Field(
        default=None,
        description="Deductibility decided by the classification service or the user",
    )
    deduction_confidence: Optional[float] = Field(
        default=None,
        description="Classifier confidence in [0, 1]",
    )

    @property
    def is_expense(self) -> bool:
        """True for positive (expense) amounts."""
        return self.amount > 0

    @property
    def is_reviewed(self) -> bool:
        """True once a deductibility decision has been recorded."""
        return self.is_deductible is not None


_SHARED_EXPENSE_KEYS = {
    "rent_or_mortgage_interest": ("rentOrMortgageInterest",),
    "utilities": (),
    "insurance": (),
    "repairs_maintenance": ("repairsMaintenance",),
    "property_tax": ("propertyTax",),
    "other": (),
}


class SharedHomeExpenses(_InputModel):
    """Annual expenses shared between the home and the office."""

    rent_or_mortgage_interest: Decimal = Decimal("0")
    utilities: Decimal = Decimal("0")
    insurance: Decimal = Decimal("0")
    repairs_maintenance: Decimal = Decimal("0")
    property_tax: Decimal = Decimal("0")
    other: Decimal = Decimal("0")

    def items(self) -> list[tuple[str, Decimal]]:
        """Return (field name, amount) pairs in form order."""
        return [(name, getattr(self, name)) for name in _SHARED_EXPENSE_KEYS]


class HomeOfficeSettings(_InputModel):
    """Home office facts entered by the user once per tax year."""

    total_home_area_sq_ft: Decimal = Field(
        validation_alias=AliasChoices(
            "total_home_area_sq_ft", "totalHomeAreaSqFt", "totalHomeSqFt"
        ),
    )
    office_area_sq_ft: Decimal = Field(
        validation_alias=AliasChoices("office_area_sq_ft", "officeAreaSqFt", "officeSqFt"),
    )
    shared_expenses: SharedHomeExpenses = Field(
        default_factory=SharedHomeExpenses,
        validation_alias=AliasChoices(
            "shared_expenses", "sharedExpenses", "sharedExpenseFields"
        ),
    )

    @model_validator(mode="before")
    @classmethod
    def lift_flat_expense_fields(cls, data: Any) -> Any:
        """Accept the flat settings document where expenses sit at top level."""
        if not isinstance(data, dict):
            return data
        nested_keys = ("shared_expenses", "sharedExpenses", "sharedExpenseFields")
        if any(key in data for key in nested_keys):
            return data

        shared: dict[str, Any] = {}
        for name, aliases in _SHARED_EXPENSE_KEYS.items():
            for key in (name, *aliases):
                if key in data:
                    shared[name] = data[key]
                    break
        if not shared:
            return data
        return {**data, "shared_expenses": shared}


class Asset(_InputModel):
    """A business asset placed in service."""

    id: str
    description: str = ""
    date_placed_in_service: date
    cost: Decimal
    business_use_percent: Decimal
    category: AssetCategory
    depreciation_method: DepreciationMethod = Field(
        validation_alias=AliasChoices(
            "depreciation_method", "depreciationMethod", "method"
        ),
    )
    section_179_requested: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "section_179_requested", "section179Requested"
        ),
    )
    bonus_eligible: bool = False

    @property
    def year_placed_in_service(self) -> int:
        return self.date_placed_in_service.year


class TaxSummaryInput(_InputModel):
    """Figures needed for the Schedule SE calculation."""

    schedule_c_net_profit: Decimal = Field(
        validation_alias=AliasChoices(
            "schedule_c_net_profit", "scheduleCNetProfit"
        ),
    )
    tax_year: int
    adjustments: Decimal = Decimal("0")
    filing_status: FilingStatus = FilingStatus.SINGLE


__all__ = [
    "FilingStatus",
    "AssetCategory",
    "DepreciationMethod",
    "Transaction",
    "SharedHomeExpenses",
    "HomeOfficeSettings",
    "Asset",
    "TaxSummaryInput",
]
