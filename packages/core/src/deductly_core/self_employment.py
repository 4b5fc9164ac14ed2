"""Self-employment tax (Schedule SE)."""

from typing import Any, Iterable, Optional, Union

from .exceptions import ConfigurationError
from .models import AuditTrail, ScheduleSEResult, TaxSummaryInput
from .money import ZERO, round_currency
from .tax_year import TaxYearConstants, get_tax_year_constants, resolve_constants
from .validators import validate_tax_summaries, validate_tax_summary


class SelfEmploymentTaxCalculator:
    """Calculate Schedule SE self-employment tax.

    A calculator built with a constants table only computes that table's
    year. Without one it looks up the constants for each input's tax year,
    which is what the multi-year calculation relies on.
    """

    def __init__(self, constants: Optional[TaxYearConstants] = None):
        self.constants = constants

    def _constants_for(self, tax_year: int) -> TaxYearConstants:
        if self.constants is None:
            return get_tax_year_constants(tax_year)
        if self.constants.tax_year != tax_year:
            raise ConfigurationError(
                f"Calculator is configured for {self.constants.tax_year}, not {tax_year}",
                config_key="tax_year",
                expected=self.constants.tax_year,
                actual=tax_year,
            )
        return self.constants

    def calculate(self, summary: Union[TaxSummaryInput, dict[str, Any]]) -> ScheduleSEResult:
        """Compute self-employment tax for one tax year.

        Raises:
            ValidationError: If net profit or adjustments are negative.
            ConfigurationError: If the tax year has no registered constants.
        """
        summary = validate_tax_summary(summary)
        constants = self._constants_for(summary.tax_year)
        return self._compute(summary, constants)

    def calculate_multi_year(
        self,
        summaries: Iterable[Union[TaxSummaryInput, dict[str, Any]]],
    ) -> list[ScheduleSEResult]:
        """Compute one result per input, each with its own year's constants.

        Every input is validated and every year's constants are resolved
        before any tax is computed.
        """
        validated = validate_tax_summaries(summaries)
        resolved = [(s, self._constants_for(s.tax_year)) for s in validated]
        return [self._compute(summary, constants) for summary, constants in resolved]

    def _compute(self, summary: TaxSummaryInput, constants: TaxYearConstants) -> ScheduleSEResult:
        audit = AuditTrail(
            "schedule_se_calculation_step",
            tax_year=summary.tax_year,
            filing_status=summary.filing_status.value,
        )
        source = f"Schedule SE {summary.tax_year}"

        net_earnings = summary.schedule_c_net_profit + summary.adjustments
        audit.log_step(
            step="net_earnings",
            input_value=(
                f"net_profit={summary.schedule_c_net_profit}, "
                f"adjustments={summary.adjustments}"
            ),
            output_value=str(net_earnings),
            source=source,
            line_number="Line 3",
        )

        # Line 4a: 92.35% of net earnings
        se_base = net_earnings * constants.se_net_earnings_factor
        audit.log_step(
            step="se_base",
            input_value=f"{net_earnings} x {constants.se_net_earnings_factor}",
            output_value=str(se_base),
            source=source,
            line_number="Line 4a",
        )

        ss_taxable = min(se_base, constants.ss_wage_base)
        ss_tax = round_currency(ss_taxable * constants.se_ss_rate)
        audit.log_step(
            step="social_security_tax",
            input_value=(
                f"min({se_base}, wage_base={constants.ss_wage_base}) x {constants.se_ss_rate}"
            ),
            output_value=str(ss_tax),
            source=source,
            line_number="Line 10",
        )

        medicare_tax = round_currency(se_base * constants.se_medicare_rate)
        audit.log_step(
            step="medicare_tax",
            input_value=f"{se_base} x {constants.se_medicare_rate}",
            output_value=str(medicare_tax),
            source=source,
            line_number="Line 11",
        )

        threshold = constants.additional_medicare_threshold(summary.filing_status)
        additional_tax = round_currency(
            max(ZERO, se_base - threshold) * constants.additional_medicare_rate
        )
        audit.log_step(
            step="additional_medicare_tax",
            input_value=(
                f"max(0, {se_base} - {threshold}) x {constants.additional_medicare_rate}"
            ),
            output_value=str(additional_tax),
            source=f"Form 8959 {summary.tax_year}",
        )

        total = ss_tax + medicare_tax + additional_tax
        half = round_currency(total * constants.se_tax_deduction_rate)
        audit.log_step(
            step="total_se_tax",
            input_value=(
                f"social_security={ss_tax}, medicare={medicare_tax}, "
                f"additional={additional_tax}"
            ),
            output_value=f"total={total}, half_deduction={half}",
            source=source,
            line_number="Line 12",
        )

        return ScheduleSEResult(
            tax_year=summary.tax_year,
            filing_status=summary.filing_status,
            net_profit=round_currency(summary.schedule_c_net_profit),
            adjustments=round_currency(summary.adjustments),
            net_earnings=round_currency(net_earnings),
            se_base=round_currency(se_base),
            social_security_taxable=round_currency(ss_taxable),
            social_security_tax=ss_tax,
            medicare_tax=medicare_tax,
            additional_medicare_threshold=round_currency(threshold),
            additional_medicare_tax=additional_tax,
            total_se_tax=total,
            half_se_deduction=half,
            audit_log=audit.entries,
            constants_version=constants.version,
        )


def calculate_schedule_se(
    summary: Union[TaxSummaryInput, dict[str, Any]],
    constants: Optional[Union[int, TaxYearConstants]] = None,
) -> ScheduleSEResult:
    """Calculate Schedule SE for the input's tax year.

    Args:
        summary: Net profit, adjustments, filing status and tax year.
        constants: Optional year or constants table to pin the calculation
            to. Defaults to the table registered for the input's year.
    """
    pinned = resolve_constants(constants) if constants is not None else None
    return SelfEmploymentTaxCalculator(pinned).calculate(summary)


__all__ = [
    "SelfEmploymentTaxCalculator",
    "calculate_schedule_se",
]
