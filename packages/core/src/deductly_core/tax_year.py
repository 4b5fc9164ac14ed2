"""Statutory constants by tax year.

Every figure that changes from one tax year to the next (Section 179 limits,
bonus depreciation rate, home office cap, Social Security wage base,
Additional Medicare thresholds, MACRS percentage tables) lives in one
versioned TaxYearConstants record. Calculators receive a record and never
hard-code a rate, so supporting a new year is a data change only.

Sources:
- Form 4562 instructions (Section 179 limit, phase-out, bonus rate)
- Publication 946, Table A-1 (MACRS half-year convention percentages)
- Schedule SE instructions (wage base, SE factor, Medicare rates)
- Form 8959 instructions (Additional Medicare Tax thresholds)

Example:
    >>> constants = get_tax_year_constants(2024)
    >>> constants.ss_wage_base
    Decimal('168600')
"""

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Union

from .exceptions import ConfigurationError
from .models import DepreciationMethod, FilingStatus


# =============================================================================
# MACRS TABLES (half-year convention, Pub. 946 Table A-1)
# =============================================================================

MACRS_5_YEAR = (
    Decimal("0.20"),
    Decimal("0.32"),
    Decimal("0.192"),
    Decimal("0.1152"),
    Decimal("0.1152"),
    Decimal("0.0576"),
)

MACRS_7_YEAR = (
    Decimal("0.1429"),
    Decimal("0.2449"),
    Decimal("0.1749"),
    Decimal("0.1249"),
    Decimal("0.0893"),
    Decimal("0.0892"),
    Decimal("0.0893"),
    Decimal("0.0446"),
)


def _default_macrs_tables() -> Mapping[DepreciationMethod, tuple[Decimal, ...]]:
    return MappingProxyType({
        DepreciationMethod.MACRS_5YR: MACRS_5_YEAR,
        DepreciationMethod.MACRS_7YR: MACRS_7_YEAR,
    })


@dataclass(frozen=True)
class TaxYearConstants:
    """Statutory figures for one tax year.

    All monetary values and rates are Decimal. The record is frozen so a
    calculator can never alter the figures it was handed.

    Attributes:
        tax_year: The tax year these values apply to.
        version: Label recorded on every result computed with this table.
        section_179_limit: Section 179 annual dollar limit.
        section_179_phaseout_threshold: Total Section 179 property cost above
            which the dollar limit is reduced dollar-for-dollar.
        bonus_depreciation_rate: Bonus depreciation rate on basis remaining
            after Section 179.
        straight_line_life_years: Useful life used for straight-line assets.
        macrs_tables: Per-year percentages for each MACRS class.
        home_office_annual_cap: Ceiling on the allowed home office deduction.
        ss_wage_base: Social Security wage base for SE tax.
        additional_medicare_thresholds: Additional Medicare threshold by
            filing status.
    """

    tax_year: int
    version: str

    # Form 4562
    section_179_limit: Decimal
    section_179_phaseout_threshold: Decimal
    bonus_depreciation_rate: Decimal
    straight_line_life_years: int = 5
    macrs_tables: Mapping[DepreciationMethod, tuple[Decimal, ...]] = field(
        default_factory=_default_macrs_tables
    )

    # Form 8829
    home_office_annual_cap: Decimal = Decimal("1500")

    # Schedule SE
    ss_wage_base: Decimal = Decimal("0")
    se_net_earnings_factor: Decimal = Decimal("0.9235")  # 92.35% of net SE income
    se_ss_rate: Decimal = Decimal("0.124")  # 12.4% (6.2% x 2)
    se_medicare_rate: Decimal = Decimal("0.029")  # 2.9% (1.45% x 2)
    additional_medicare_rate: Decimal = Decimal("0.009")
    additional_medicare_thresholds: Mapping[FilingStatus, Decimal] = field(
        default_factory=lambda: MappingProxyType({
            FilingStatus.SINGLE: Decimal("200000"),
            FilingStatus.MARRIED_JOINTLY: Decimal("250000"),
            FilingStatus.MARRIED_SEPARATELY: Decimal("125000"),
            FilingStatus.HEAD_OF_HOUSEHOLD: Decimal("200000"),
            FilingStatus.QUALIFYING_WIDOW: Decimal("200000"),
        })
    )
    se_tax_deduction_rate: Decimal = Decimal("0.5")

    # Schedule C
    meals_deduction_rate: Decimal = Decimal("0.5")

    def macrs_rate(self, method: DepreciationMethod, years_in_service: int) -> Decimal:
        """Return the MACRS percentage for a recovery year.

        Returns zero once the asset has passed the end of its table.

        Raises:
            ConfigurationError: If no table is registered for the method.
        """
        table = self.macrs_tables.get(method)
        if table is None:
            raise ConfigurationError(
                f"No MACRS table registered for {method.value} in {self.tax_year}",
                config_key="macrs_tables",
                expected=", ".join(m.value for m in self.macrs_tables),
                actual=method.value,
            )
        if years_in_service < 1 or years_in_service > len(table):
            return Decimal("0")
        return table[years_in_service - 1]

    def additional_medicare_threshold(self, filing_status: FilingStatus) -> Decimal:
        """Return the Additional Medicare Tax threshold for a filing status.

        Raises:
            ConfigurationError: If the status has no registered threshold.
        """
        try:
            return self.additional_medicare_thresholds[filing_status]
        except KeyError:
            raise ConfigurationError(
                f"No Additional Medicare threshold for {filing_status.value} in {self.tax_year}",
                config_key="additional_medicare_thresholds",
                actual=filing_status.value,
            ) from None


# 2023 - Rev. Proc. 2022-38
TAX_YEAR_2023 = TaxYearConstants(
    tax_year=2023,
    version="2023.1",
    section_179_limit=Decimal("1160000"),
    section_179_phaseout_threshold=Decimal("2890000"),
    bonus_depreciation_rate=Decimal("0.80"),
    ss_wage_base=Decimal("160200"),
)

# 2024 - figures used by the filing workflow since launch
TAX_YEAR_2024 = TaxYearConstants(
    tax_year=2024,
    version="2024.1",
    section_179_limit=Decimal("1160000"),
    section_179_phaseout_threshold=Decimal("2900000"),
    bonus_depreciation_rate=Decimal("0.60"),
    ss_wage_base=Decimal("168600"),
)

# 2025 - Rev. Proc. 2024-40, TCJA bonus phase-down
TAX_YEAR_2025 = TaxYearConstants(
    tax_year=2025,
    version="2025.1",
    section_179_limit=Decimal("1250000"),
    section_179_phaseout_threshold=Decimal("3130000"),
    bonus_depreciation_rate=Decimal("0.40"),
    ss_wage_base=Decimal("176100"),
)

_REGISTRY: dict[int, TaxYearConstants] = {
    2023: TAX_YEAR_2023,
    2024: TAX_YEAR_2024,
    2025: TAX_YEAR_2025,
}


def available_tax_years() -> list[int]:
    """Return the registered tax years in ascending order."""
    return sorted(_REGISTRY)


def get_tax_year_constants(year: int) -> TaxYearConstants:
    """Get the statutory constants for a tax year.

    Args:
        year: The tax year (e.g., 2024).

    Returns:
        TaxYearConstants for the requested year.

    Raises:
        ConfigurationError: If no table is registered for the year. There is
            no fallback to a neighbouring year.
    """
    constants = _REGISTRY.get(year)
    if constants is None:
        raise ConfigurationError(
            f"No tax constants registered for {year}",
            config_key="tax_year",
            expected=f"One of: {available_tax_years()}",
            actual=year,
        )
    return constants


def register_tax_year(constants: TaxYearConstants, *, replace: bool = False) -> None:
    """Register the constants table for a new tax year.

    Raises:
        ConfigurationError: If the year is already registered and replace
            is False.
    """
    if constants.tax_year in _REGISTRY and not replace:
        raise ConfigurationError(
            f"Tax constants for {constants.tax_year} are already registered",
            config_key="tax_year",
            actual=constants.tax_year,
        )
    _REGISTRY[constants.tax_year] = constants


def resolve_constants(tax_year: Union[int, TaxYearConstants]) -> TaxYearConstants:
    """Accept either a year or a constants record."""
    if isinstance(tax_year, TaxYearConstants):
        return tax_year
    return get_tax_year_constants(tax_year)


__all__ = [
    "MACRS_5_YEAR",
    "MACRS_7_YEAR",
    "TaxYearConstants",
    "TAX_YEAR_2023",
    "TAX_YEAR_2024",
    "TAX_YEAR_2025",
    "available_tax_years",
    "get_tax_year_constants",
    "register_tax_year",
    "resolve_constants",
]
