import json

import pytest
from click.testing import CliRunner

from pricing_estimator.cli.main import main, parse_product_spec
from pricing_estimator.models.usage import CadencePreset


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def no_config(tmp_path):
    return str(tmp_path / "absent.yaml")


def test_parse_product_spec_forms():
    weekly = parse_product_spec("1pw")
    assert weekly.cadence_preset == CadencePreset.WEEKLY_ONCE
    assert weekly.name == ""

    named = parse_product_spec("Game=custom:10")
    assert named.name == "Game"
    assert named.cadence_preset == CadencePreset.CUSTOM
    assert named.annual_units == 10


@pytest.mark.parametrize("spec", ["hourly", "1pw:5", "custom", "Office=custom"])
def test_parse_product_spec_rejects_bad_specs(spec):
    with pytest.raises(ValueError):
        parse_product_spec(spec)


def test_estimate_console(runner, no_config):
    result = runner.invoke(main, ['-c', no_config, 'estimate', '-p', 'Office=1pw'])

    assert result.exit_code == 0, result.output
    assert "$39,300" in result.output
    assert "Office" in result.output


def test_estimate_reports_minimum(runner, no_config):
    result = runner.invoke(main, ['-c', no_config, 'estimate', '-p', 'custom:10', '-H', '2'])

    assert result.exit_code == 0, result.output
    assert "minimum applied" in result.output
    assert "$42,000" in result.output


def test_estimate_json_export(runner, no_config, tmp_path):
    output = tmp_path / "out" / "estimate.json"
    result = runner.invoke(main, [
        '-c', no_config, 'estimate',
        '-p', '1pw', '-p', 'custom:10',
        '-f', 'json', '-o', str(output)
    ])

    assert result.exit_code == 0, result.output
    data = json.loads(output.read_text(encoding='utf-8'))
    assert data['product_count'] == 2
    assert data['total_annual_units'] == 62
    assert data['product_annual_units'] == [52, 10]


def test_estimate_csv_export(runner, no_config, tmp_path):
    output = tmp_path / "estimate.csv"
    result = runner.invoke(main, ['-c', no_config, 'estimate', '-p', '1pw', '-f', 'csv', '-o', str(output)])

    assert result.exit_code == 0, result.output
    content = output.read_text(encoding='utf-8')
    assert "Estimated Year-1 Total,39300.0" in content


def test_estimate_all_formats_use_separate_files(runner, no_config, tmp_path):
    output = tmp_path / "estimate"
    result = runner.invoke(main, ['-c', no_config, 'estimate', '-p', '1pw', '-f', 'all', '-o', str(output)])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "estimate.csv").exists()
    assert (tmp_path / "estimate.xlsx").exists()
    assert (tmp_path / "estimate.json").exists()


def test_estimate_negative_units_clamped_by_default(runner, no_config, tmp_path):
    output = tmp_path / "estimate.json"
    result = runner.invoke(main, ['-c', no_config, 'estimate', '-p', 'custom:-5', '-f', 'json', '-o', str(output)])

    assert result.exit_code == 0, result.output
    assert json.loads(output.read_text(encoding='utf-8'))['total_annual_units'] == 0


def test_estimate_strict_rejects_negative_units(runner, no_config):
    result = runner.invoke(main, ['-c', no_config, 'estimate', '-p', 'custom:-5', '--strict'])

    assert result.exit_code != 0
    assert "negative" in result.output


def test_estimate_unknown_preset_aborts(runner, no_config):
    result = runner.invoke(main, ['-c', no_config, 'estimate', '-p', 'hourly'])

    assert result.exit_code != 0
    assert "Unknown cadence preset" in result.output


def test_estimate_uses_config_products(runner, tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text(
        "products:\n"
        "  - {name: Office, cadence: daily}\n"
        "  - {name: Game, cadence: 2pw}\n",
        encoding='utf-8'
    )
    output = tmp_path / "estimate.json"

    result = runner.invoke(main, ['-c', str(config), 'estimate', '-f', 'json', '-o', str(output)])

    assert result.exit_code == 0, result.output
    data = json.loads(output.read_text(encoding='utf-8'))
    assert data['total_annual_units'] == 469
    assert data['selected_unit_price'] == 200


def test_estimate_products_file(runner, no_config, tmp_path):
    products = tmp_path / "products.yaml"
    products.write_text("- {cadence: 15pm}\n", encoding='utf-8')
    output = tmp_path / "estimate.json"

    result = runner.invoke(main, [
        '-c', no_config, 'estimate',
        '--products-file', str(products), '-p', '1pm',
        '-f', 'json', '-o', str(output)
    ])

    assert result.exit_code == 0, result.output
    assert json.loads(output.read_text(encoding='utf-8'))['product_annual_units'] == [180, 12]


def test_schedule(runner, no_config):
    result = runner.invoke(main, ['-c', no_config, 'schedule'])

    assert result.exit_code == 0, result.output
    assert "$15,000" in result.output
    assert "$2,500" in result.output
    assert "15pm" in result.output


def test_check_valid(runner, no_config):
    result = runner.invoke(main, ['-c', no_config, 'check'])

    assert result.exit_code == 0, result.output
    assert "Configuration valid" in result.output


def test_check_reports_errors(runner, tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("pricing:\n  overage_unit_price: -1\n", encoding='utf-8')

    result = runner.invoke(main, ['-c', str(config), 'check'])

    assert result.exit_code != 0
    assert "overage_unit_price must not be negative" in result.output


def test_bad_tier_order_fails_config_load(runner, tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text(
        "pricing:\n"
        "  tiers:\n"
        "    - {threshold_annual_units: 10, unit_price: 5}\n"
        "    - {threshold_annual_units: 20, unit_price: 4}\n",
        encoding='utf-8'
    )

    result = runner.invoke(main, ['-c', str(config), 'check'])

    assert result.exit_code != 0
    assert "Failed to load config" in result.output


@pytest.mark.parametrize("command", [['estimate', '-p', '1pw'], ['schedule']])
def test_invalid_config_aborts_every_command(runner, tmp_path, command):
    config = tmp_path / "config.yaml"
    config.write_text("pricing:\n  support_fee_per_product_month: -750\n", encoding='utf-8')

    result = runner.invoke(main, ['-c', str(config)] + command)

    assert result.exit_code != 0
    assert "Configuration errors" in result.output
    assert "support_fee_per_product_month must not be negative" in result.output
    assert "PRICING ESTIMATE" not in result.output


def test_non_finite_fee_aborts_estimate(runner, tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("pricing:\n  overage_unit_price: .nan\n", encoding='utf-8')

    result = runner.invoke(main, ['-c', str(config), 'estimate', '-p', 'custom:10'])

    assert result.exit_code != 0
    assert "overage_unit_price must be a finite number" in result.output


def test_non_mapping_config_fails_load(runner, tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("- pricing\n", encoding='utf-8')

    result = runner.invoke(main, ['-c', str(config), 'check'])

    assert result.exit_code != 0
    assert "Failed to load config" in result.output
    assert "must be a mapping" in result.output
