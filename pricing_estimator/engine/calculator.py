"""Cost estimation module for the usage-based pricing plan."""

from typing import Optional, Sequence, Any
import logging
import math

from ..config.settings import PricingConstants
from ..models.usage import CadencePreset, ProductUsage, sanitize_annual_units, sanitize_hours
from ..models.estimate import EstimateResult

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12
ONBOARDING_MONTHS = 3  # Onboarding fee covers these, nothing else billed
BILLED_MONTHS_FIRST_YEAR = MONTHS_PER_YEAR - ONBOARDING_MONTHS


class InputValidationError(ValueError):
    """Raised in strict mode for a malformed numeric input."""

    def __init__(self, field_name: str, value: Any, reason: str):
        self.field = field_name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field_name}: {value!r} ({reason})")


def _check_strict(field_name: str, value: Any):
    """Reject non-numeric, non-finite or negative values."""
    if value is None or isinstance(value, bool):
        raise InputValidationError(field_name, value, "must be a number")
    try:
        number = float(value)
    except OverflowError:
        raise InputValidationError(field_name, value, "must be finite") from None
    except (TypeError, ValueError):
        raise InputValidationError(field_name, value, "must be a number") from None
    if not math.isfinite(number):
        raise InputValidationError(field_name, value, "must be finite")
    if number < 0:
        raise InputValidationError(field_name, value, "must not be negative")


def _as_float(value: Any) -> float:
    """Convert a unit count to float, infinity past the float range."""
    try:
        return float(value)
    except OverflowError:
        return math.inf


class PricingEngine:
    """
    Calculate cost estimates for the tiered pricing plan.

    Pure and stateless: each call derives a fresh EstimateResult from
    its inputs and the pricing schedule, and never mutates the inputs.
    """

    def __init__(self, constants: Optional[PricingConstants] = None, strict: bool = False):
        """
        Initialize pricing engine.

        Args:
            constants: Pricing schedule (published schedule if None)
            strict: Raise InputValidationError for bad numbers instead of
                clamping them to zero
        """
        self.constants = constants or PricingConstants.default()
        self.strict = strict

    def estimate(
        self,
        products: Sequence[ProductUsage],
        consulting_hours_per_month: Any = 0
    ) -> EstimateResult:
        """
        Calculate the estimate for a product list.

        Args:
            products: Products in display order; duplicates and zero-usage
                entries each count
            consulting_hours_per_month: Optional consulting hours

        Returns:
            EstimateResult with every derived figure
        """
        c = self.constants

        # Per-product and total usage
        product_annual_units = tuple(self._annual_units(p, idx) for idx, p in enumerate(products))
        product_count = len(product_annual_units)
        total_annual_units = sum(product_annual_units)

        # Company-wide blended price, applied once to the aggregate
        unit_price = c.tier_table.select_unit_price(total_annual_units)
        annual_usage_cost = _as_float(total_annual_units) * unit_price
        avg_monthly_usage_cost = annual_usage_cost / MONTHS_PER_YEAR

        monthly_support = product_count * c.support_fee_per_product_month
        baseline_platform_monthly = monthly_support + avg_monthly_usage_cost
        units_per_month = _as_float(total_annual_units) / MONTHS_PER_YEAR

        # Minimum fee replaces the baseline, with metered overage above the allowance
        minimum_applied = baseline_platform_monthly < c.minimum_monthly_platform_fee
        if minimum_applied:
            excess_units_per_month = max(0.0, units_per_month - c.included_units_per_month)
            platform_monthly = c.minimum_monthly_platform_fee + excess_units_per_month * c.overage_unit_price
        else:
            excess_units_per_month = 0.0
            platform_monthly = baseline_platform_monthly

        hours = self._consulting_hours(consulting_hours_per_month)
        consulting_monthly = hours * c.consulting_fee_per_hour
        monthly_all_in = platform_monthly + consulting_monthly

        onboarding_one_time = product_count * c.onboarding_fee_per_product
        year1_total = onboarding_one_time + monthly_all_in * BILLED_MONTHS_FIRST_YEAR

        logger.debug(
            f"{product_count} product(s), {total_annual_units} units/yr at {unit_price}/unit; "
            f"baseline {baseline_platform_monthly:.2f}, minimum applied: {minimum_applied}"
        )

        return EstimateResult(
            product_count=product_count,
            total_annual_units=total_annual_units,
            units_per_month=units_per_month,
            selected_unit_price=unit_price,
            annual_usage_cost=annual_usage_cost,
            avg_monthly_usage_cost=avg_monthly_usage_cost,
            monthly_support=monthly_support,
            baseline_platform_monthly=baseline_platform_monthly,
            minimum_applied=minimum_applied,
            excess_units_per_month=excess_units_per_month,
            platform_monthly=platform_monthly,
            consulting_monthly=consulting_monthly,
            monthly_all_in=monthly_all_in,
            onboarding_one_time=onboarding_one_time,
            year1_total=year1_total,
            product_annual_units=product_annual_units
        )

    def _annual_units(self, product: ProductUsage, idx: int) -> int:
        """Resolve annual units for one product under the active policy."""
        if product.cadence_preset != CadencePreset.CUSTOM:
            return product.annual_units

        raw = product.custom_annual_units
        if self.strict:
            _check_strict(f"custom_annual_units (product {idx + 1})", raw)

        units = sanitize_annual_units(raw)
        if not self.strict and not self._is_clean(raw, units):
            logger.warning(f"Product {idx + 1}: custom annual units {raw!r} treated as {units}")
        return units

    def _consulting_hours(self, value: Any) -> float:
        """Resolve consulting hours under the active policy."""
        if self.strict:
            _check_strict("consulting_hours_per_month", value)
            return float(value)

        hours = sanitize_hours(value)
        if value is not None and not self._is_clean(value, hours):
            logger.warning(f"Consulting hours {value!r} treated as {hours}")
        return hours

    @staticmethod
    def _is_clean(raw: Any, sanitized: float) -> bool:
        """Check whether sanitizing left the value unchanged."""
        if isinstance(raw, int) and not isinstance(raw, bool):
            return raw == sanitized
        try:
            return float(raw) == sanitized
        except (TypeError, ValueError, OverflowError):
            return False


def format_currency(amount: float, currency: str = "USD", decimals: int = 0) -> str:
    """
    Format amount as currency string.

    Args:
        amount: Amount to format
        currency: Currency code
        decimals: Digits after the decimal point (whole units by default)

    Returns:
        Formatted currency string
    """
    if currency == "USD":
        return f"${amount:,.{decimals}f}"
    elif currency == "EUR":
        return f"€{amount:,.{decimals}f}"
    else:
        return f"{amount:,.{decimals}f} {currency}"
