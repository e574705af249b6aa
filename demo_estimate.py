#!/usr/bin/env python3
"""
Demo script to show how the pricing estimate is built up.
Walks through a few product mixes with the published pricing schedule.
"""

from pricing_estimator.config.settings import PricingConstants
from pricing_estimator.engine.calculator import PricingEngine, format_currency
from pricing_estimator.models.usage import CadencePreset, ProductUsage

print("="*80)
print("PRICING ESTIMATOR - DEMO")
print("="*80)

# Load published schedule
print("\n1. Loading published pricing schedule...")
constants = PricingConstants.default()
print(f"   ✓ {len(constants.tier_table.tiers)} volume tiers, default {format_currency(constants.tier_table.default_unit_price)}/model")
print(f"   ✓ Minimum platform fee: {format_currency(constants.minimum_monthly_platform_fee)}/mo "
      f"incl. {constants.included_units_per_month:g} models/mo")

engine = PricingEngine(constants)

scenarios = [
    ("One product, weekly models", [ProductUsage(CadencePreset.WEEKLY_ONCE, name="Office")], 0),
    ("One small product + consulting", [ProductUsage(CadencePreset.CUSTOM, 10, name="Game")], 2),
    ("Three products, mixed cadence", [
        ProductUsage(CadencePreset.DAILY, name="Office"),
        ProductUsage(CadencePreset.TWICE_WEEKLY, name="Game"),
        ProductUsage(CadencePreset.MONTHLY_ONCE, name="Browser"),
    ], 4),
    ("One product, 45 models a year (minimum with overage)", [
        ProductUsage(CadencePreset.CUSTOM, 45, name="Search"),
    ], 0),
]

print("\n2. Estimating scenarios...")
for idx, (title, products, hours) in enumerate(scenarios, 1):
    result = engine.estimate(products, hours)

    print(f"\n   [{idx}] {title}")
    for product, units in zip(products, result.product_annual_units):
        print(f"       - {product.display_name:10} {product.cadence_preset.label:22} {units:>4} models/yr")

    minimum = " (minimum applied)" if result.minimum_applied else ""
    print(f"       Annual models:      {result.total_annual_units} (~{result.units_per_month:.1f}/mo)")
    print(f"       Per-model price:    {format_currency(result.selected_unit_price)}")
    print(f"       Platform monthly:   {format_currency(result.platform_monthly)}{minimum}")
    print(f"       All-in monthly:     {format_currency(result.monthly_all_in)}")
    print(f"       Onboarding:         {format_currency(result.onboarding_one_time)}")
    print(f"       Year-1 total:       {format_currency(result.year1_total)}")

print("\n" + "="*80)
print("✓ DEMO COMPLETE!")
print("="*80)
print("\nNext steps:")
print("  1. Copy config.example.yaml to config.yaml and list your products")
print("  2. Run: pricing-estimator estimate")
print()
