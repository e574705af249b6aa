"""Console reporter - outputs estimate tables to console using Rich."""

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text
from rich import box
from typing import Sequence

from ..config.settings import PricingConstants
from ..engine.calculator import format_currency, ONBOARDING_MONTHS
from ..models.estimate import EstimateResult
from ..models.usage import CadencePreset, ProductUsage


class ConsoleReporter:
    """
    Generates console reports using Rich library.

    Independent module that only knows about data models.
    """

    def __init__(self, console: Console = None):
        """
        Initialize console reporter.

        Args:
            console: Rich Console instance (creates new if None)
        """
        self.console = console or Console()

    def print_estimate(
        self,
        result: EstimateResult,
        products: Sequence[ProductUsage],
        constants: PricingConstants
    ):
        """
        Print complete estimate to console.

        Args:
            result: Estimate to print
            products: Products the estimate was computed from
            constants: Pricing schedule used
        """
        self._print_header(result, constants)

        if products:
            self._print_products(result, products)

        self._print_commitment(result, constants)
        self._print_recurring(result, constants)
        self._print_one_time(result, constants)

        self.console.print(
            f"[dim]All pricing in {constants.currency}. Taxes (if any) not included. "
            f"This is an estimate and not a binding quote.[/]"
        )

    def _money(self, amount: float, constants: PricingConstants) -> str:
        return format_currency(amount, constants.currency)

    def _print_header(self, result: EstimateResult, constants: PricingConstants):
        """Print estimate header."""
        title = Text("PRICING ESTIMATE", style="bold white on blue")
        subtitle = (
            f"Per-model price (based on your annual commitment): "
            f"[bold]{self._money(result.selected_unit_price, constants)}[/]"
        )

        panel = Panel(
            subtitle,
            title=title,
            border_style="blue",
            padding=(1, 2)
        )
        self.console.print(panel)
        self.console.print()

    def _print_products(self, result: EstimateResult, products: Sequence[ProductUsage]):
        """Print per-product usage."""
        table = Table(title="Products", box=box.SIMPLE)

        table.add_column("#", justify="right", style="dim")
        table.add_column("Product", style="white")
        table.add_column("Cadence", style="cyan")
        table.add_column("Annual Models", justify="right")

        for idx, (product, units) in enumerate(zip(products, result.product_annual_units), 1):
            table.add_row(
                str(idx),
                product.name or f"Product {idx}",
                product.cadence_preset.label,
                str(units)
            )

        self.console.print(table)
        self.console.print()

    def _print_commitment(self, result: EstimateResult, constants: PricingConstants):
        """Print usage commitment."""
        table = Table(title="Your Commitment", box=box.ROUNDED)
        table.add_column("Metric", style="cyan", no_wrap=True)
        table.add_column("Value", justify="right", style="white")

        table.add_row("Total Products", str(result.product_count))
        table.add_row(
            "Total Annual Models",
            f"{result.total_annual_units} (~{result.units_per_month:.1f}/mo)"
        )
        table.add_row("Support", f"{self._money(result.monthly_support, constants)}/mo")

        self.console.print(table)
        self.console.print()

    def _print_recurring(self, result: EstimateResult, constants: PricingConstants):
        """Print recurring costs after onboarding."""
        table = Table(title=f"Costs After Month {ONBOARDING_MONTHS}", box=box.ROUNDED)
        table.add_column("Metric", style="cyan", no_wrap=True)
        table.add_column("Value", justify="right", style="white")

        table.add_row("Avg Model Cost", f"{self._money(result.avg_monthly_usage_cost, constants)}/mo")

        if result.minimum_applied:
            table.add_row(
                "Platform Monthly (minimum applied)",
                f"[bold yellow]{self._money(result.platform_monthly, constants)}[/]"
            )
        else:
            table.add_row("Platform Monthly", self._money(result.platform_monthly, constants))

        table.add_row("Consulting", f"{self._money(result.consulting_monthly, constants)}/mo")
        table.add_row("", "")  # Separator
        table.add_row("[bold]All-in Monthly After Handoff[/]", f"[bold]{self._money(result.monthly_all_in, constants)}[/]")

        self.console.print(table)

        if result.minimum_applied:
            self.console.print(
                f"  [dim]Includes up to {constants.included_units_per_month:g}/mo; est. overage at "
                f"{self._money(constants.overage_unit_price, constants)}/model for "
                f"~{result.excess_units_per_month:.1f} extra models/mo.[/]"
            )
        self.console.print()

    def _print_one_time(self, result: EstimateResult, constants: PricingConstants):
        """Print one-time and first-year totals."""
        table = Table(title="One-time & Year 1", box=box.DOUBLE_EDGE)
        table.add_column("Metric", style="cyan", no_wrap=True)
        table.add_column("Value", justify="right", style="white")

        table.add_row(
            f"Onboarding (months 1-{ONBOARDING_MONTHS})",
            f"{self._money(result.onboarding_one_time, constants)} one-time"
        )
        table.add_row("Estimated Year-1 Total", f"[bold green]{self._money(result.year1_total, constants)}[/]")

        self.console.print(table)
        self.console.print()

    def print_schedule(self, constants: PricingConstants):
        """Print the pricing schedule."""
        money = lambda amount: self._money(amount, constants)

        self.console.print(Panel(
            f"{money(constants.onboarding_fee_per_product)} per product, one-time for months 1-{ONBOARDING_MONTHS}\n"
            f"Scope is per product, not OS-specific",
            title="1) Onboarding & Handoff",
            border_style="blue"
        ))

        table = Table(title="2) Ongoing Models (Company Tiered)", box=box.ROUNDED)
        table.add_column("Tier", style="cyan")
        table.add_column("From (models/yr)", justify="right")
        table.add_column("Price/model", justify="right")

        for tier in constants.tier_table.tiers:
            table.add_row(
                tier.label or f">={tier.threshold_annual_units}/yr",
                str(tier.threshold_annual_units),
                money(tier.unit_price)
            )
        table.add_row("[dim]Default[/]", "below all tiers", money(constants.tier_table.default_unit_price))

        self.console.print(table)
        self.console.print()

        self.console.print(Panel(
            f"{money(constants.support_fee_per_product_month)}/month per product for basic support\n"
            f"Minimum platform fee: [bold]{money(constants.minimum_monthly_platform_fee)}/month[/] "
            f"(includes support + up to {constants.included_units_per_month:g} models/mo; "
            f"overage {money(constants.overage_unit_price)}/model)\n"
            f"Optional consulting: {money(constants.consulting_fee_per_hour)}/hour",
            title="3) Support & Minimums",
            border_style="blue"
        ))

        presets = Table(title="Cadence Presets", box=box.SIMPLE)
        presets.add_column("Key", style="cyan")
        presets.add_column("Cadence")
        presets.add_column("Models/yr", justify="right")

        for preset in CadencePreset:
            annual = preset.annual_units
            presets.add_row(preset.value, preset.label, str(annual) if annual is not None else "custom")

        self.console.print(presets)
        self.console.print()
