"""Data models for product usage inputs."""

from dataclasses import dataclass, field
from typing import Optional, Any
from enum import Enum
import math
import uuid


class CadencePreset(Enum):
    """Model cadence preset for a product."""
    DAILY = "daily"
    FIFTEEN_PER_MONTH = "15pm"
    TWICE_WEEKLY = "2pw"
    WEEKLY_ONCE = "1pw"
    MONTHLY_ONCE = "1pm"
    CUSTOM = "custom"  # Uses custom_annual_units

    @classmethod
    def from_key(cls, key: str) -> "CadencePreset":
        """
        Resolve a preset from its short key or member name.

        Args:
            key: Preset key ("1pw") or name ("WEEKLY_ONCE"), case-insensitive

        Returns:
            Matching CadencePreset
        """
        normalized = str(key).strip().lower()
        for preset in cls:
            if normalized in (preset.value, preset.name.lower()):
                return preset

        valid = ", ".join(p.value for p in cls)
        raise ValueError(f"Unknown cadence preset '{key}' (expected one of: {valid})")

    @property
    def label(self) -> str:
        """Human readable label."""
        return _PRESET_LABELS[self]

    @property
    def annual_units(self) -> Optional[int]:
        """Fixed annual units for the preset, None for CUSTOM."""
        return _PRESET_ANNUAL_UNITS.get(self)


_PRESET_LABELS = {
    CadencePreset.DAILY: "Daily",
    CadencePreset.FIFTEEN_PER_MONTH: "15 per month",
    CadencePreset.TWICE_WEEKLY: "2 per week",
    CadencePreset.WEEKLY_ONCE: "1 per week",
    CadencePreset.MONTHLY_ONCE: "Monthly (1 per month)",
    CadencePreset.CUSTOM: "Custom (per year)",
}

_PRESET_ANNUAL_UNITS = {
    CadencePreset.DAILY: 365,
    CadencePreset.FIFTEEN_PER_MONTH: 15 * 12,
    CadencePreset.TWICE_WEEKLY: 2 * 52,
    CadencePreset.WEEKLY_ONCE: 52,
    CadencePreset.MONTHLY_ONCE: 12,
}


def _to_finite_float(value: Any) -> Optional[float]:
    """Convert value to a finite float, None if that is not possible."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def sanitize_annual_units(value: Any) -> int:
    """Floor custom annual units to an integer >= 0 (bad input becomes 0)."""
    if isinstance(value, int) and not isinstance(value, bool):
        return max(0, value)

    number = _to_finite_float(value)
    if number is None:
        return 0
    return max(0, math.floor(number))


def sanitize_hours(value: Any) -> float:
    """Clamp consulting hours to a finite value >= 0 (bad input becomes 0)."""
    number = _to_finite_float(value)
    if number is None:
        return 0.0
    return max(0.0, number)


@dataclass(frozen=True)
class ProductUsage:
    """A product the customer onboards, with its model cadence."""

    cadence_preset: CadencePreset
    custom_annual_units: Any = 0  # Only meaningful for CUSTOM
    name: str = ""

    # Stable for the session, not used by pricing
    id: str = field(default_factory=lambda: uuid.uuid4().hex, compare=False)

    @property
    def annual_units(self) -> int:
        """Annual units: preset constant or sanitized custom value."""
        if self.cadence_preset == CadencePreset.CUSTOM:
            return sanitize_annual_units(self.custom_annual_units)
        return self.cadence_preset.annual_units

    @property
    def display_name(self) -> str:
        """Name for reports."""
        return self.name or self.cadence_preset.label
