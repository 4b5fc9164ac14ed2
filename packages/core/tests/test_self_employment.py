"""Tests for the Schedule SE self-employment tax calculator."""

from decimal import Decimal

import pytest

from deductly_core import ConfigurationError, ValidationError
from deductly_core.models import FilingStatus, TaxSummaryInput
from deductly_core.self_employment import (
    SelfEmploymentTaxCalculator,
    calculate_schedule_se,
)
from deductly_core.tax_year import TAX_YEAR_2023, TAX_YEAR_2024


def summary(
    net_profit: str,
    tax_year: int = 2024,
    filing_status: FilingStatus = FilingStatus.SINGLE,
    adjustments: str = "0",
) -> TaxSummaryInput:
    return TaxSummaryInput(
        schedule_c_net_profit=Decimal(net_profit),
        tax_year=tax_year,
        adjustments=Decimal(adjustments),
        filing_status=filing_status,
    )


@pytest.fixture
def calculator() -> SelfEmploymentTaxCalculator:
    return SelfEmploymentTaxCalculator()


class TestSelfEmploymentTax:
    """Test suite for SelfEmploymentTaxCalculator.calculate."""

    def test_eighty_thousand_single(self, calculator):
        result = calculator.calculate(summary("80000"))

        assert result.se_base == Decimal("73880.00")
        assert result.social_security_tax == Decimal("9161.12")
        assert result.medicare_tax == Decimal("2142.52")
        assert result.additional_medicare_tax == Decimal("0.00")
        assert result.total_se_tax == Decimal("11303.64")
        assert result.half_se_deduction == Decimal("5651.82")

    def test_total_is_sum_of_components(self, calculator):
        result = calculator.calculate(summary("123456.78"))

        assert result.total_se_tax == (
            result.social_security_tax
            + result.medicare_tax
            + result.additional_medicare_tax
        )

    def test_social_security_capped_at_wage_base(self, calculator):
        result = calculator.calculate(summary("200000"))

        assert result.se_base == Decimal("184700.00")
        assert result.social_security_taxable == Decimal("168600.00")
        assert result.social_security_tax == Decimal("20906.40")
        assert result.medicare_tax == Decimal("5356.30")
        assert result.additional_medicare_tax == Decimal("0.00")
        assert result.total_se_tax == Decimal("26262.70")
        assert result.half_se_deduction == Decimal("13131.35")

    @pytest.mark.parametrize(
        "status, threshold, additional",
        [
            (FilingStatus.SINGLE, "200000", "693.45"),
            (FilingStatus.MARRIED_JOINTLY, "250000", "243.45"),
            (FilingStatus.MARRIED_SEPARATELY, "125000", "1368.45"),
            (FilingStatus.HEAD_OF_HOUSEHOLD, "200000", "693.45"),
        ],
    )
    def test_additional_medicare_by_filing_status(
        self, calculator, status, threshold, additional
    ):
        result = calculator.calculate(summary("300000", filing_status=status))

        assert result.se_base == Decimal("277050.00")
        assert result.additional_medicare_threshold == Decimal(threshold)
        assert result.additional_medicare_tax == Decimal(additional)

    def test_higher_threshold_never_increases_additional_tax(self, calculator):
        for profit in ("150000", "250000", "400000"):
            single = calculator.calculate(summary(profit))
            joint = calculator.calculate(
                summary(profit, filing_status=FilingStatus.MARRIED_JOINTLY)
            )
            assert joint.additional_medicare_tax <= single.additional_medicare_tax

    def test_adjustments_added_to_net_earnings(self, calculator):
        result = calculator.calculate(summary("80000", adjustments="20000"))

        assert result.net_earnings == Decimal("100000.00")
        assert result.se_base == Decimal("92350.00")

    def test_accepts_camel_case_mapping(self, calculator):
        result = calculator.calculate(
            {"scheduleCNetProfit": 80000, "taxYear": 2024, "filingStatus": "marriedJointly"}
        )

        assert result.filing_status == FilingStatus.MARRIED_JOINTLY
        assert result.total_se_tax == Decimal("11303.64")

    def test_audit_log_populated(self, calculator):
        result = calculator.calculate(summary("80000"))

        assert [entry.step for entry in result.audit_log] == [
            "net_earnings",
            "se_base",
            "social_security_tax",
            "medicare_tax",
            "additional_medicare_tax",
            "total_se_tax",
        ]


class TestSelfEmploymentValidation:
    """Invalid Schedule SE inputs."""

    def test_loss_rejected(self, calculator):
        with pytest.raises(ValidationError) as exc_info:
            calculator.calculate(summary("-100"))

        assert "cannot be negative" in exc_info.value.errors[0]

    def test_negative_adjustments_rejected(self, calculator):
        with pytest.raises(ValidationError) as exc_info:
            calculator.calculate(summary("100", adjustments="-1"))

        assert exc_info.value.errors == ["Adjustments cannot be negative"]

    def test_unknown_filing_status(self, calculator):
        with pytest.raises(ValidationError):
            calculator.calculate(
                {"scheduleCNetProfit": 1000, "taxYear": 2024, "filingStatus": "bogus"}
            )

    def test_unregistered_year(self, calculator):
        with pytest.raises(ConfigurationError) as exc_info:
            calculator.calculate(summary("80000", tax_year=2019))

        assert exc_info.value.details["config_key"] == "tax_year"

    def test_pinned_calculator_rejects_other_year(self):
        with pytest.raises(ConfigurationError):
            SelfEmploymentTaxCalculator(TAX_YEAR_2023).calculate(summary("80000"))


class TestMultiYear:
    """Test suite for calculate_multi_year."""

    def test_each_year_uses_its_own_wage_base(self, calculator):
        results = calculator.calculate_multi_year(
            [
                summary("200000", tax_year=2023),
                summary("200000", tax_year=2024),
                summary("200000", tax_year=2025),
            ]
        )

        assert [r.tax_year for r in results] == [2023, 2024, 2025]
        assert [r.constants_version for r in results] == ["2023.1", "2024.1", "2025.1"]
        assert results[0].social_security_tax == Decimal("19864.80")
        assert results[1].social_security_tax == Decimal("20906.40")
        assert results[2].social_security_tax == Decimal("21836.40")

    def test_batch_validated_before_computing(self, calculator):
        with pytest.raises(ValidationError) as exc_info:
            calculator.calculate_multi_year(
                [summary("80000", tax_year=2024), summary("-5", tax_year=2023)]
            )

        assert len(exc_info.value.errors) == 1
        assert exc_info.value.errors[0].startswith("Tax year 2023:")

    def test_unregistered_year_fails_whole_batch(self, calculator):
        with pytest.raises(ConfigurationError):
            calculator.calculate_multi_year(
                [summary("80000", tax_year=2024), summary("80000", tax_year=2019)]
            )


class TestCalculateScheduleSE:
    """Test suite for the calculate_schedule_se function."""

    def test_default_uses_input_year(self):
        result = calculate_schedule_se(summary("80000"))

        assert result.constants_version == "2024.1"

    def test_pinned_constants(self):
        result = calculate_schedule_se(summary("80000"), TAX_YEAR_2024)

        assert result.tax_year == 2024
