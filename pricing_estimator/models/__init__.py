"""Data models."""

from .usage import CadencePreset, ProductUsage, sanitize_annual_units, sanitize_hours
from .estimate import EstimateResult

__all__ = [
    'CadencePreset',
    'ProductUsage',
    'EstimateResult',
    'sanitize_annual_units',
    'sanitize_hours'
]
