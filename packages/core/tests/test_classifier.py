"""Tests for the category-to-line classifier."""

import pytest

from deductly_core.classifier import (
    CATEGORY_LINE_MAP,
    TaxLine,
    classify,
    is_potentially_business,
    ordered_lines,
)


class TestClassify:
    """Test suite for classify."""

    @pytest.mark.parametrize(
        "code, line",
        [
            ("FOOD_AND_DRINK_RESTAURANT", TaxLine.MEALS),
            ("TRANSPORTATION_FUEL", TaxLine.CAR_AND_TRUCK),
            ("SERVICE_ACCOUNTING", TaxLine.PROFESSIONAL_SERVICES),
            ("GENERAL_MERCHANDISE_OFFICE_SUPPLIES", TaxLine.OFFICE_EXPENSE),
            ("TRAVEL_FLIGHTS", TaxLine.TRAVEL),
            ("COMMUNITY_EDUCATION", TaxLine.OTHER_EXPENSES),
        ],
    )
    def test_mapped_codes(self, code, line):
        assert classify(code) == line

    def test_code_is_normalized(self):
        """Codes are matched case-insensitively and trimmed."""
        assert classify("  food_and_drink_coffee_shop ") == TaxLine.MEALS

    @pytest.mark.parametrize("code", ["SHOPS_MISC", "", None])
    def test_unmapped_falls_back_to_other(self, code):
        """Unknown codes are grouped under Other expenses, never dropped."""
        assert classify(code) == TaxLine.OTHER_EXPENSES

    def test_every_mapping_targets_a_line(self):
        assert all(isinstance(line, TaxLine) for line in CATEGORY_LINE_MAP.values())


class TestPotentiallyBusiness:
    """Test suite for is_potentially_business."""

    def test_mapped_code_is_business(self):
        assert is_potentially_business("TRAVEL_LODGING")

    def test_unmapped_code_is_not_business(self):
        assert not is_potentially_business("GENERAL_SERVICES_OTHER")
        assert not is_potentially_business(None)


class TestLineOrdering:
    """Test suite for Schedule C line order."""

    def test_ordered_by_line_number_then_suffix(self):
        codes = [line.line_code for line in ordered_lines()]
        assert codes == ["9", "17", "18", "24a", "24b", "27a"]

    def test_line_names(self):
        assert TaxLine.MEALS.line_name == "Meals"
        assert TaxLine.CAR_AND_TRUCK.line_name == "Car and truck expenses"
