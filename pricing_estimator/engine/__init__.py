"""Pricing engine module."""

from .calculator import (
    PricingEngine,
    InputValidationError,
    format_currency,
    MONTHS_PER_YEAR,
    ONBOARDING_MONTHS,
    BILLED_MONTHS_FIRST_YEAR
)

__all__ = [
    'PricingEngine',
    'InputValidationError',
    'format_currency',
    'MONTHS_PER_YEAR',
    'ONBOARDING_MONTHS',
    'BILLED_MONTHS_FIRST_YEAR'
]
