"""Asset depreciation (Form 4562).

For each asset the business basis is reduced, in order, by:

1. Section 179 expensing, drawn from a dollar limit shared by all assets.
2. Bonus depreciation on the basis Section 179 left behind.
3. Scheduled depreciation (MACRS table or straight line) on what remains.

Assets are processed highest cost first. The Section 179 limit is a pool:
each asset draws from whatever the assets before it left, so the largest
assets are served first. The remaining pool is threaded explicitly through
the fold over the sorted assets; there is no module-level state.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Optional, Union

from .exceptions import ConfigurationError
from .models import (
    Asset,
    AssetDepreciationResult,
    AuditTrail,
    DepreciationMethod,
    Form4562Result,
)
from .money import HUNDRED, ZERO, Number, round_currency
from .tax_year import TaxYearConstants, resolve_constants
from .validators import coerce_amount, validate_assets


@dataclass(frozen=True)
class _AssetFigures:
    """Unrounded per-asset figures."""

    asset: Asset
    years_in_service: int
    business_basis: Decimal
    section_179: Decimal
    bonus: Decimal
    remaining_basis: Decimal
    scheduled: Decimal


def section_179_limit(assets: Iterable[Asset], constants: TaxYearConstants) -> Decimal:
    """Return the Section 179 dollar limit after the phase-out reduction.

    The limit drops dollar-for-dollar by the amount the total cost of the
    assets requesting Section 179 exceeds the phase-out threshold.
    """
    requested_cost = sum(
        (asset.cost for asset in assets if asset.section_179_requested),
        ZERO,
    )
    reduction = max(ZERO, requested_cost - constants.section_179_phaseout_threshold)
    return max(ZERO, constants.section_179_limit - reduction)


class DepreciationCalculator:
    """Calculate Form 4562 depreciation for one tax year."""

    def __init__(self, constants: TaxYearConstants):
        self.constants = constants

    def _scheduled_depreciation(
        self,
        method: DepreciationMethod,
        remaining_basis: Decimal,
        years_in_service: int,
    ) -> Decimal:
        if remaining_basis <= 0:
            return ZERO
        if method is DepreciationMethod.STRAIGHT_LINE:
            life = self.constants.straight_line_life_years
            if years_in_service > life:
                return ZERO
            return min(remaining_basis, remaining_basis / life)
        return remaining_basis * self.constants.macrs_rate(method, years_in_service)

    def _depreciate(
        self,
        asset: Asset,
        current_year: int,
        business_income: Decimal,
        cap_remaining: Decimal,
        audit: AuditTrail,
    ) -> tuple[_AssetFigures, Decimal]:
        """Depreciate one asset and return it with the cap left for the next."""
        business_basis = asset.cost * (asset.business_use_percent / HUNDRED)
        years_in_service = current_year - asset.year_placed_in_service + 1
        remaining = business_basis

        section_179 = ZERO
        if asset.section_179_requested and asset.cost <= self.constants.section_179_limit:
            available = min(cap_remaining, business_income, business_basis)
            if available > 0:
                section_179 = available
                remaining -= section_179
                cap_remaining -= section_179

        bonus = ZERO
        if asset.bonus_eligible and remaining > 0:
            bonus = remaining * self.constants.bonus_depreciation_rate
            remaining -= bonus

        scheduled = self._scheduled_depreciation(
            asset.depreciation_method, remaining, years_in_service
        )

        audit.log_step(
            step=f"asset_{asset.id}",
            input_value=(
                f"cost={asset.cost}, business_use={asset.business_use_percent}%, "
                f"method={asset.depreciation_method.value}, year={years_in_service}"
            ),
            output_value=(
                f"basis={business_basis}, section_179={section_179}, "
                f"bonus={bonus}, scheduled={scheduled}"
            ),
            source=f"Form 4562 {self.constants.tax_year}",
            notes=asset.description,
        )

        figures = _AssetFigures(
            asset=asset,
            years_in_service=years_in_service,
            business_basis=business_basis,
            section_179=section_179,
            bonus=bonus,
            remaining_basis=remaining,
            scheduled=scheduled,
        )
        return figures, cap_remaining

    @staticmethod
    def _publish(figures: _AssetFigures) -> AssetDepreciationResult:
        section_179 = round_currency(figures.section_179)
        bonus = round_currency(figures.bonus)
        scheduled = round_currency(figures.scheduled)
        business_basis = round_currency(figures.business_basis)
        total = section_179 + bonus + scheduled

        return AssetDepreciationResult(
            asset_id=figures.asset.id,
            description=figures.asset.description,
            years_in_service=figures.years_in_service,
            business_basis=business_basis,
            section_179_deduction=section_179,
            bonus_depreciation=bonus,
            scheduled_depreciation=scheduled,
            total_depreciation=total,
            remaining_basis=round_currency(figures.remaining_basis),
            carryover_to_next_year=max(ZERO, business_basis - total),
        )

    def calculate(
        self,
        assets: Iterable[Union[Asset, dict[str, Any]]],
        business_income: Number,
        current_year: Optional[int] = None,
    ) -> Form4562Result:
        """Depreciate every asset for the current year.

        Args:
            assets: Assets placed in service in or before ``current_year``.
            business_income: Business income limiting Section 179.
            current_year: Year being calculated. Defaults to the tax year of
                the constants table.

        Returns:
            Form4562Result with per-asset results in processing order.

        Raises:
            ValidationError: If any asset is invalid. No asset is computed.
            ConfigurationError: If ``current_year`` is not the tax year of the
                constants table.
        """
        year = self.constants.tax_year
        if current_year is not None and current_year != year:
            raise ConfigurationError(
                f"Calculator is configured for {year}, not {current_year}",
                config_key="tax_year",
                expected=year,
                actual=current_year,
            )
        income = coerce_amount(business_income, "business_income")
        validated = validate_assets(assets, year)

        audit = AuditTrail("form_4562_calculation_step", tax_year=year)

        limit = section_179_limit(validated, self.constants)
        audit.log_step(
            step="section_179_limit",
            input_value=(
                f"limit={self.constants.section_179_limit}, "
                f"phaseout_threshold={self.constants.section_179_phaseout_threshold}"
            ),
            output_value=str(limit),
            source="Form 4562 Part I",
            line_number="Line 5",
        )

        ordered = sorted(validated, key=lambda asset: asset.cost, reverse=True)

        cap_remaining = limit
        published: list[AssetDepreciationResult] = []
        for asset in ordered:
            figures, cap_remaining = self._depreciate(
                asset, year, income, cap_remaining, audit
            )
            published.append(self._publish(figures))

        total_179 = sum((a.section_179_deduction for a in published), ZERO)
        total_bonus = sum((a.bonus_depreciation for a in published), ZERO)
        total_scheduled = sum((a.scheduled_depreciation for a in published), ZERO)
        total_carryover = sum((a.carryover_to_next_year for a in published), ZERO)
        total = total_179 + total_bonus + total_scheduled

        audit.log_step(
            step="total_depreciation",
            input_value=(
                f"section_179={total_179}, bonus={total_bonus}, "
                f"scheduled={total_scheduled}"
            ),
            output_value=f"total={total}, carryover={total_carryover}",
            source="Form 4562 Part IV",
            line_number="Line 22",
        )

        return Form4562Result(
            tax_year=year,
            business_income=round_currency(income),
            section_179_limit=round_currency(limit),
            section_179_limit_unused=round_currency(cap_remaining),
            assets=published,
            total_section_179=total_179,
            total_bonus_depreciation=total_bonus,
            total_scheduled_depreciation=total_scheduled,
            total_depreciation=total,
            total_carryover=total_carryover,
            audit_log=audit.entries,
            constants_version=self.constants.version,
        )


def calculate_form_4562(
    assets: Iterable[Union[Asset, dict[str, Any]]],
    business_income: Number,
    tax_year: Union[int, TaxYearConstants],
) -> Form4562Result:
    """Calculate Form 4562 for a tax year.

    Raises:
        ConfigurationError: If the tax year has no registered constants.
        ValidationError: If any asset is invalid.
    """
    return DepreciationCalculator(resolve_constants(tax_year)).calculate(assets, business_income)


__all__ = [
    "DepreciationCalculator",
    "calculate_form_4562",
    "section_179_limit",
]
