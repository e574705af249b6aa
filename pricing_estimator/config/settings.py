"""Configuration management module."""

import math
import yaml
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Sequence, Any
from pathlib import Path

from ..models.usage import CadencePreset, ProductUsage


@dataclass(frozen=True)
class PricingTier:
    """Company-wide volume tier."""

    threshold_annual_units: int  # Applies from this annual volume up
    unit_price: float
    label: Optional[str] = None


@dataclass(frozen=True)
class PricingTierTable:
    """
    Volume tiers ordered by descending threshold.

    The ordering is an invariant of the table, checked on construction,
    so lookups never depend on how the tiers were declared.
    """

    tiers: Sequence[PricingTier]
    default_unit_price: float  # Below every threshold

    def __post_init__(self):
        """Validate tier ordering."""
        object.__setattr__(self, 'tiers', tuple(self.tiers))

        if not math.isfinite(self.default_unit_price):
            raise ValueError(f"Default unit price must be finite: {self.default_unit_price}")
        if self.default_unit_price < 0:
            raise ValueError("Default unit price must not be negative")

        previous = None
        for tier in self.tiers:
            if tier.threshold_annual_units < 0:
                raise ValueError(f"Tier threshold must not be negative: {tier.threshold_annual_units}")
            if not math.isfinite(tier.unit_price):
                raise ValueError(f"Tier unit price must be finite: {tier.unit_price}")
            if tier.unit_price < 0:
                raise ValueError(f"Tier unit price must not be negative: {tier.unit_price}")
            if previous is not None and tier.threshold_annual_units >= previous.threshold_annual_units:
                raise ValueError(
                    "Tier thresholds must be strictly descending: "
                    f"{tier.threshold_annual_units} follows {previous.threshold_annual_units}"
                )
            previous = tier

    def select_tier(self, total_annual_units: float) -> Optional[PricingTier]:
        """Return the first tier whose threshold is reached, None below all tiers."""
        for tier in self.tiers:
            if total_annual_units >= tier.threshold_annual_units:
                return tier
        return None

    def select_unit_price(self, total_annual_units: float) -> float:
        """Blended unit price for the company-wide annual volume."""
        tier = self.select_tier(total_annual_units)
        if tier is None:
            return self.default_unit_price
        return tier.unit_price


def default_tier_table() -> PricingTierTable:
    """Published volume tiers."""
    return PricingTierTable(
        tiers=[
            PricingTier(365, 200, "Daily (>=365/yr)"),
            PricingTier(180, 300, "15 per month (>=180/yr)"),
            PricingTier(104, 350, "2 per week (>=104/yr)"),
            PricingTier(52, 450, "1 per week (>=52/yr)"),
        ],
        default_unit_price=450
    )


@dataclass(frozen=True)
class PricingConstants:
    """Fixed pricing schedule."""

    # One-time
    onboarding_fee_per_product: float = 15000

    # Monthly
    support_fee_per_product_month: float = 750
    consulting_fee_per_hour: float = 250

    # Minimum platform fee with included usage
    minimum_monthly_platform_fee: float = 2500
    included_units_per_month: float = 3
    overage_unit_price: float = 450

    tier_table: PricingTierTable = field(default_factory=default_tier_table)

    # Display only, no conversion
    currency: str = "USD"

    @classmethod
    def default(cls) -> "PricingConstants":
        """Published pricing schedule."""
        return cls()


@dataclass
class ReportConfig:
    """Report generation settings."""

    output_dir: str = "./reports"


@dataclass
class Config:
    """Main configuration class."""

    pricing: PricingConstants = field(default_factory=PricingConstants)
    report: ReportConfig = field(default_factory=ReportConfig)
    products: List[ProductUsage] = field(default_factory=list)

    @classmethod
    def from_yaml(cls, file_path: str) -> "Config":
        """Load configuration from YAML file."""
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {file_path}")

        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: Dict) -> "Config":
        """Create config from dictionary."""
        defaults = PricingConstants()
        default_table = defaults.tier_table

        if not isinstance(data, dict):
            raise ValueError(f"Configuration must be a mapping, got {type(data).__name__}")

        # Parse pricing
        pricing_data = _section(data, 'pricing')

        tiers_data = pricing_data.get('tiers')
        if tiers_data is None:
            tiers = default_table.tiers
        else:
            tiers = [
                PricingTier(
                    threshold_annual_units=int(t['threshold_annual_units']),
                    unit_price=float(t['unit_price']),
                    label=t.get('label')
                )
                for t in tiers_data
            ]

        tier_table = PricingTierTable(
            tiers=tiers,
            default_unit_price=float(pricing_data.get('default_unit_price', default_table.default_unit_price))
        )

        pricing = PricingConstants(
            onboarding_fee_per_product=float(pricing_data.get(
                'onboarding_fee_per_product', defaults.onboarding_fee_per_product)),
            support_fee_per_product_month=float(pricing_data.get(
                'support_fee_per_product_month', defaults.support_fee_per_product_month)),
            consulting_fee_per_hour=float(pricing_data.get(
                'consulting_fee_per_hour', defaults.consulting_fee_per_hour)),
            minimum_monthly_platform_fee=float(pricing_data.get(
                'minimum_monthly_platform_fee', defaults.minimum_monthly_platform_fee)),
            included_units_per_month=float(pricing_data.get(
                'included_units_per_month', defaults.included_units_per_month)),
            overage_unit_price=float(pricing_data.get(
                'overage_unit_price', defaults.overage_unit_price)),
            tier_table=tier_table,
            currency=pricing_data.get('currency', defaults.currency)
        )

        # Parse report config
        report_data = _section(data, 'report')
        report = ReportConfig(
            output_dir=report_data.get('output_dir', './reports')
        )

        products = parse_products(data.get('products') or [])

        return cls(
            pricing=pricing,
            report=report,
            products=products
        )

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []
        pricing = self.pricing

        # Validate fees
        fees = {
            'onboarding_fee_per_product': pricing.onboarding_fee_per_product,
            'support_fee_per_product_month': pricing.support_fee_per_product_month,
            'consulting_fee_per_hour': pricing.consulting_fee_per_hour,
            'minimum_monthly_platform_fee': pricing.minimum_monthly_platform_fee,
            'included_units_per_month': pricing.included_units_per_month,
            'overage_unit_price': pricing.overage_unit_price,
        }
        for name, value in fees.items():
            if not math.isfinite(value):
                errors.append(f"{name} must be a finite number")
            elif value < 0:
                errors.append(f"{name} must not be negative")

        if not pricing.currency:
            errors.append("Currency code is required")

        # Tier price must not rise with volume
        prices = [t.unit_price for t in pricing.tier_table.tiers]
        prices.append(pricing.tier_table.default_unit_price)
        for higher_volume, lower_volume in zip(prices, prices[1:]):
            if higher_volume > lower_volume:
                errors.append(
                    f"Tier prices must not increase with volume ({higher_volume} > {lower_volume})"
                )

        return errors


def _section(data: Dict, name: str) -> Dict:
    """Return a top-level config section, empty if absent."""
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{name}' must be a mapping, got {type(section).__name__}")
    return section


def parse_products(products_data: List[Dict[str, Any]]) -> List[ProductUsage]:
    """
    Parse product definitions.

    Args:
        products_data: List of mappings with 'cadence', optional 'name'
            and 'custom_annual_units'

    Returns:
        List of ProductUsage in the given order
    """
    if not isinstance(products_data, list):
        raise ValueError(f"Products must be a list, got {type(products_data).__name__}")

    products = []
    for idx, item in enumerate(products_data):
        if not isinstance(item, dict):
            raise ValueError(f"Product {idx}: expected a mapping, got {item!r}")

        cadence = item.get('cadence', CadencePreset.WEEKLY_ONCE.value)
        products.append(
            ProductUsage(
                cadence_preset=CadencePreset.from_key(cadence),
                custom_annual_units=item.get('custom_annual_units', 0),
                name=item.get('name') or ''
            )
        )

    return products


def load_products(file_path: str) -> List[ProductUsage]:
    """Load a product list from a YAML file (a list, or a mapping with 'products')."""
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Products file not found: {file_path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if isinstance(data, dict):
        data = data.get('products')

    return parse_products(data or [])
