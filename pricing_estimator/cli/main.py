"""Main CLI module - orchestrates all components."""

import click
import logging
from pathlib import Path
from datetime import datetime
from typing import List
from rich.console import Console

from ..config.settings import Config, load_products
from ..engine.calculator import PricingEngine, InputValidationError
from ..models.usage import CadencePreset, ProductUsage
from ..reporters.console_reporter import ConsoleReporter
from ..reporters.csv_reporter import CSVReporter


console = Console()
logger = logging.getLogger(__name__)


def parse_product_spec(spec: str) -> ProductUsage:
    """
    Parse a product given on the command line.

    Accepted forms: "1pw", "custom:10", "Office=1pw", "Game=custom:10".
    """
    name = ""
    if '=' in spec:
        name, spec = spec.split('=', 1)
        name = name.strip()

    key, _, units = spec.partition(':')
    preset = CadencePreset.from_key(key)

    if units and preset != CadencePreset.CUSTOM:
        raise ValueError(f"Only the custom cadence takes a unit count: '{spec}'")
    if preset == CadencePreset.CUSTOM and not units:
        raise ValueError(f"Custom cadence needs a unit count, e.g. 'custom:10': '{spec}'")

    return ProductUsage(
        cadence_preset=preset,
        custom_annual_units=units.strip() if units else 0,
        name=name
    )


@click.group()
@click.option('--config', '-c', default='config.yaml', help='Path to config file')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def main(ctx, config, verbose):
    """
    Pricing Estimator - CLI tool for tiered usage-based pricing estimates.

    Estimates onboarding, monthly and first-year costs for a set of products.
    """
    # Setup logging
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Load config
    try:
        ctx.ensure_object(dict)
        ctx.obj['config_path'] = config

        config_file = Path(config)
        if not config_file.exists():
            logger.debug(f"Config file not found: {config}, using published pricing")
            ctx.obj['config'] = Config()
        else:
            cfg = Config.from_yaml(config)
            ctx.obj['config'] = cfg
            logger.info(f"Configuration loaded from {config}")

    except Exception as e:
        console.print(f"[red]Failed to load config: {e}[/]")
        raise click.Abort()

    errors = ctx.obj['config'].validate()
    if errors:
        console.print("[red]Configuration errors:[/]")
        for error in errors:
            console.print(f"  - {error}")
        raise click.Abort()


@main.command()
@click.pass_context
def check(ctx):
    """Validate the pricing configuration."""
    config = ctx.obj['config']

    table = config.pricing.tier_table
    console.print("[green]✓ Configuration valid[/]")
    console.print(f"[green]✓ {len(table.tiers)} tier(s), default price {table.default_unit_price:g}[/]")
    console.print(f"[green]✓ {len(config.products)} default product(s)[/]")


@main.command()
@click.pass_context
def schedule(ctx):
    """Show the pricing schedule."""
    config = ctx.obj['config']

    reporter = ConsoleReporter(console)
    reporter.print_schedule(config.pricing)


@main.command()
@click.option('--product', '-p', 'product_specs', multiple=True,
              help='Product cadence: KEY, custom:UNITS or NAME=KEY[:UNITS] (repeatable)')
@click.option('--products-file', type=click.Path(), help='YAML file with a product list')
@click.option('--consulting-hours', '-H', default=0.0, type=float, help='Consulting hours per month')
@click.option('--strict', is_flag=True, help='Reject negative or non-finite inputs instead of clamping')
@click.option('--format', '-f', type=click.Choice(['console', 'csv', 'excel', 'json', 'all']), default='console', help='Output format')
@click.option('--output', '-o', help='Output file path (for csv/excel/json)')
@click.pass_context
def estimate(ctx, product_specs, products_file, consulting_hours, strict, format, output):
    """Estimate costs for a set of products."""
    config = ctx.obj['config']

    try:
        products: List[ProductUsage] = []
        if products_file:
            products.extend(load_products(products_file))
        products.extend(parse_product_spec(spec) for spec in product_specs)

        if not products_file and not product_specs:
            products = list(config.products)

        engine = PricingEngine(config.pricing, strict=strict)
        result = engine.estimate(products, consulting_hours)

    except (ValueError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/]")
        if isinstance(e, InputValidationError):
            logger.debug(f"Rejected {e.field}={e.value!r}")
        raise click.Abort()

    logger.info(f"Estimated {result.product_count} product(s), year-1 total {result.year1_total:.2f}")

    stamp = datetime.now().strftime('%Y%m%d_%H%M%S')

    def output_for(suffix):
        if output and format == 'all':
            return str(Path(output).with_suffix(suffix))
        return output or f"{config.report.output_dir}/estimate_{stamp}{suffix}"

    if format == 'console' or format == 'all':
        reporter = ConsoleReporter(console)
        reporter.print_estimate(result, products, config.pricing)

    if format == 'csv' or format == 'all':
        output_path = output_for('.csv')
        csv_file = CSVReporter().export_to_csv(result, products, output_path)
        console.print(f"[green]✓ CSV estimate saved to: {csv_file}[/]")

    if format == 'excel' or format == 'all':
        output_path = output_for('.xlsx')
        excel_file = CSVReporter().export_to_excel(result, products, config.pricing, output_path)
        console.print(f"[green]✓ Excel estimate saved to: {excel_file}[/]")

    if format == 'json' or format == 'all':
        output_path = output_for('.json')
        json_file = CSVReporter().export_to_json(result, output_path)
        console.print(f"[green]✓ JSON estimate saved to: {json_file}[/]")


if __name__ == '__main__':
    main()
