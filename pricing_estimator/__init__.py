"""Pricing estimator for the tiered usage-based plan."""

__version__ = "0.1.0"
