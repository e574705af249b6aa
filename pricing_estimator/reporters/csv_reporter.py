"""CSV/Excel reporter - exports estimates to spreadsheet formats."""

import csv
import json
from pathlib import Path
from typing import Sequence
import pandas as pd

from ..config.settings import PricingConstants
from ..models.estimate import EstimateResult
from ..models.usage import ProductUsage

# (field, column title) in report order
SUMMARY_FIELDS = [
    ('product_count', 'Total Products'),
    ('total_annual_units', 'Total Annual Models'),
    ('units_per_month', 'Models per Month'),
    ('selected_unit_price', 'Per-model Price'),
    ('annual_usage_cost', 'Annual Model Cost'),
    ('avg_monthly_usage_cost', 'Avg Monthly Model Cost'),
    ('monthly_support', 'Monthly Support'),
    ('baseline_platform_monthly', 'Baseline Platform Monthly'),
    ('minimum_applied', 'Minimum Applied'),
    ('excess_units_per_month', 'Models Above Included per Month'),
    ('platform_monthly', 'Platform Monthly'),
    ('consulting_monthly', 'Consulting Monthly'),
    ('monthly_all_in', 'All-in Monthly After Handoff'),
    ('onboarding_one_time', 'Onboarding (One-time)'),
    ('year1_total', 'Estimated Year-1 Total'),
]


class CSVReporter:
    """
    Exports estimates to CSV/Excel/JSON.

    Independent module that only knows about data models.
    """

    def _summary_rows(self, result: EstimateResult):
        data = result.to_dict()
        return [(title, data[name]) for name, title in SUMMARY_FIELDS]

    def _product_rows(self, result: EstimateResult, products: Sequence[ProductUsage]):
        return [
            {
                'Product': product.name or f"Product {idx}",
                'Cadence': product.cadence_preset.value,
                'Cadence Label': product.cadence_preset.label,
                'Annual Models': units
            }
            for idx, (product, units) in enumerate(zip(products, result.product_annual_units), 1)
        ]

    def export_to_csv(
        self,
        result: EstimateResult,
        products: Sequence[ProductUsage],
        output_path: str
    ) -> Path:
        """
        Export estimate to CSV file.

        Args:
            result: Estimate
            products: Products the estimate was computed from
            output_path: Output file path

        Returns:
            Path to generated file
        """
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        with open(output_file, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)

            writer.writerow(['Metric', 'Value'])
            for title, value in self._summary_rows(result):
                writer.writerow([title, value])

            # Products section
            writer.writerow([])
            writer.writerow(['Product', 'Cadence', 'Annual Models'])
            for row in self._product_rows(result, products):
                writer.writerow([row['Product'], row['Cadence'], row['Annual Models']])

        return output_file

    def export_to_excel(
        self,
        result: EstimateResult,
        products: Sequence[ProductUsage],
        constants: PricingConstants,
        output_path: str
    ) -> Path:
        """
        Export estimate to Excel file with multiple sheets.

        Args:
            result: Estimate
            products: Products the estimate was computed from
            constants: Pricing schedule used
            output_path: Output file path

        Returns:
            Path to generated file
        """
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        summary = self._summary_rows(result)
        df_summary = pd.DataFrame({
            'Metric': [title for title, _ in summary],
            'Value': [value for _, value in summary]
        })

        df_products = pd.DataFrame(
            self._product_rows(result, products),
            columns=['Product', 'Cadence', 'Cadence Label', 'Annual Models']
        )

        tiers = [
            {
                'Tier': tier.label or '',
                'Threshold (models/yr)': tier.threshold_annual_units,
                'Price per Model': tier.unit_price
            }
            for tier in constants.tier_table.tiers
        ]
        tiers.append({
            'Tier': 'Default',
            'Threshold (models/yr)': 0,
            'Price per Model': constants.tier_table.default_unit_price
        })
        df_tiers = pd.DataFrame(tiers)

        with pd.ExcelWriter(output_file, engine='openpyxl') as writer:
            df_summary.to_excel(writer, sheet_name='Summary', index=False)
            df_products.to_excel(writer, sheet_name='Products', index=False)
            df_tiers.to_excel(writer, sheet_name='Tiers', index=False)

        return output_file

    def export_to_json(self, result: EstimateResult, output_path: str) -> Path:
        """
        Export estimate fields to a JSON file.

        Args:
            result: Estimate
            output_path: Output file path

        Returns:
            Path to generated file
        """
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(result.to_dict(), f, indent=2)

        return output_file
