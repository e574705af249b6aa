"""Data models for estimate results."""

from dataclasses import dataclass, field, asdict
from typing import Tuple, Dict, Any


@dataclass(frozen=True)
class EstimateResult:
    """Snapshot of every figure derived from one set of inputs."""

    # Commitment
    product_count: int
    total_annual_units: int
    units_per_month: float
    selected_unit_price: float

    # Usage costs
    annual_usage_cost: float
    avg_monthly_usage_cost: float

    # Platform
    monthly_support: float
    baseline_platform_monthly: float
    minimum_applied: bool
    excess_units_per_month: float
    platform_monthly: float

    # Consulting and totals
    consulting_monthly: float
    monthly_all_in: float  # After the onboarding period
    onboarding_one_time: float
    year1_total: float

    # Per product, in input order
    product_annual_units: Tuple[int, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict of all fields."""
        data = asdict(self)
        data['product_annual_units'] = list(self.product_annual_units)
        return data
