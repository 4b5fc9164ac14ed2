"""Provider category codes mapped to Schedule C expense lines.

The bank feed tags each transaction with a provider category code such as
``TRANSPORTATION_FUEL`` or ``FOOD_AND_DRINK_RESTAURANT``. This module maps
those codes onto the six Schedule C lines the engine reports. Codes that
appear in the table are the "potentially business" categories: an
unreviewed expense in one of them is projected as deductible until the user
decides otherwise.
"""

import re
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class TaxLine(str, Enum):
    """Schedule C expense lines produced by the engine."""

    CAR_AND_TRUCK = "car_and_truck"
    PROFESSIONAL_SERVICES = "professional_services"
    OFFICE_EXPENSE = "office_expense"
    TRAVEL = "travel"
    MEALS = "meals"
    OTHER_EXPENSES = "other_expenses"

    @property
    def line_code(self) -> str:
        """Schedule C line number, e.g. "24b"."""
        return _LINE_INFO[self][0]

    @property
    def line_name(self) -> str:
        """Schedule C line caption."""
        return _LINE_INFO[self][1]

    @property
    def sort_key(self) -> tuple[int, str]:
        """Order by line number, then by letter suffix."""
        match = re.fullmatch(r"(\d+)([a-z]?)", self.line_code)
        return int(match.group(1)), match.group(2)


_LINE_INFO: Mapping[TaxLine, tuple[str, str]] = MappingProxyType({
    TaxLine.CAR_AND_TRUCK: ("9", "Car and truck expenses"),
    TaxLine.PROFESSIONAL_SERVICES: ("17", "Legal and professional services"),
    TaxLine.OFFICE_EXPENSE: ("18", "Office expense"),
    TaxLine.TRAVEL: ("24a", "Travel"),
    TaxLine.MEALS: ("24b", "Meals"),
    TaxLine.OTHER_EXPENSES: ("27a", "Other expenses"),
})


CATEGORY_LINE_MAP: Mapping[str, TaxLine] = MappingProxyType({
    # Meals
    "FOOD_AND_DRINK_COFFEE_SHOP": TaxLine.MEALS,
    "FOOD_AND_DRINK_FAST_FOOD": TaxLine.MEALS,
    "FOOD_AND_DRINK_RESTAURANT": TaxLine.MEALS,
    "FOOD_AND_DRINK_ALCOHOL_AND_BARS": TaxLine.MEALS,

    # Office expense
    "GENERAL_MERCHANDISE_OFFICE_SUPPLIES": TaxLine.OFFICE_EXPENSE,
    "GENERAL_MERCHANDISE_COMPUTERS_AND_ELECTRONICS": TaxLine.OFFICE_EXPENSE,
    "GENERAL_MERCHANDISE_HOME_IMPROVEMENT": TaxLine.OFFICE_EXPENSE,
    "GENERAL_MERCHANDISE_PHARMACY": TaxLine.OFFICE_EXPENSE,
    "GENERAL_MERCHANDISE_OTHER_GENERAL_MERCHANDISE": TaxLine.OFFICE_EXPENSE,
    "SERVICE_SHIPPING": TaxLine.OFFICE_EXPENSE,
    "SERVICE_UTILITIES": TaxLine.OFFICE_EXPENSE,
    "SERVICE_STORAGE": TaxLine.OFFICE_EXPENSE,

    # Legal and professional services
    "SERVICE_ACCOUNTING": TaxLine.PROFESSIONAL_SERVICES,
    "SERVICE_CONSULTING": TaxLine.PROFESSIONAL_SERVICES,
    "SERVICE_LEGAL": TaxLine.PROFESSIONAL_SERVICES,
    "SERVICE_MARKETING": TaxLine.PROFESSIONAL_SERVICES,
    "SERVICE_ADVERTISING": TaxLine.PROFESSIONAL_SERVICES,
    "SERVICE_SECURITY": TaxLine.PROFESSIONAL_SERVICES,
    "SERVICE_INSURANCE": TaxLine.PROFESSIONAL_SERVICES,

    # Car and truck expenses
    "TRANSPORTATION_RIDESHARE": TaxLine.CAR_AND_TRUCK,
    "TRANSPORTATION_AUTO_PARKING": TaxLine.CAR_AND_TRUCK,
    "TRANSPORTATION_AUTO_REPAIR": TaxLine.CAR_AND_TRUCK,
    "TRANSPORTATION_AUTO_SERVICE": TaxLine.CAR_AND_TRUCK,
    "TRANSPORTATION_FUEL": TaxLine.CAR_AND_TRUCK,
    "TRANSPORTATION_TOLLS": TaxLine.CAR_AND_TRUCK,
    "TRANSPORTATION_AUTO_INSURANCE": TaxLine.CAR_AND_TRUCK,

    # Travel
    "TRAVEL_FLIGHTS": TaxLine.TRAVEL,
    "TRAVEL_LODGING": TaxLine.TRAVEL,
    "TRAVEL_OTHER_TRAVEL": TaxLine.TRAVEL,

    # Other expenses
    "ENTERTAINMENT_SPORTS_AND_OUTDOORS": TaxLine.OTHER_EXPENSES,
    "ENTERTAINMENT_ARTS": TaxLine.OTHER_EXPENSES,
    "ENTERTAINMENT_THEATER": TaxLine.OTHER_EXPENSES,
    "ENTERTAINMENT_MUSIC": TaxLine.OTHER_EXPENSES,
    "ENTERTAINMENT_MOVIES_AND_DVDS": TaxLine.OTHER_EXPENSES,
    "GENERAL_MERCHANDISE_SPORTING_GOODS": TaxLine.OTHER_EXPENSES,
    "PERSONAL_CARE_GYMS_AND_FITNESS_CENTERS": TaxLine.OTHER_EXPENSES,
    "COMMUNITY_CHARITY": TaxLine.OTHER_EXPENSES,
    "COMMUNITY_EDUCATION": TaxLine.OTHER_EXPENSES,
    "COMMUNITY_RELIGIOUS": TaxLine.OTHER_EXPENSES,
})

DEFAULT_LINE = TaxLine.OTHER_EXPENSES


def _normalize_code(category_code: Optional[str]) -> str:
    return (category_code or "").strip().upper()


def classify(category_code: Optional[str]) -> TaxLine:
    """Return the Schedule C line for a provider category code.

    Unmapped or missing codes fall back to Other expenses.
    """
    return CATEGORY_LINE_MAP.get(_normalize_code(category_code), DEFAULT_LINE)


def is_potentially_business(category_code: Optional[str]) -> bool:
    """Return True if the code is one of the mapped business categories."""
    return _normalize_code(category_code) in CATEGORY_LINE_MAP


def ordered_lines() -> list[TaxLine]:
    """Return every line in Schedule C order."""
    return sorted(TaxLine, key=lambda line: line.sort_key)


__all__ = [
    "TaxLine",
    "CATEGORY_LINE_MAP",
    "DEFAULT_LINE",
    "classify",
    "is_potentially_business",
    "ordered_lines",
]
