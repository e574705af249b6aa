import pytest

from pricing_estimator.models.usage import (
    CadencePreset,
    ProductUsage,
    sanitize_annual_units,
    sanitize_hours,
)


@pytest.mark.parametrize("preset, units", [
    (CadencePreset.DAILY, 365),
    (CadencePreset.FIFTEEN_PER_MONTH, 180),
    (CadencePreset.TWICE_WEEKLY, 104),
    (CadencePreset.WEEKLY_ONCE, 52),
    (CadencePreset.MONTHLY_ONCE, 12),
    (CadencePreset.CUSTOM, None),
])
def test_preset_annual_units(preset, units):
    assert preset.annual_units == units


@pytest.mark.parametrize("key, preset", [
    ("daily", CadencePreset.DAILY),
    ("15pm", CadencePreset.FIFTEEN_PER_MONTH),
    (" 2PW ", CadencePreset.TWICE_WEEKLY),
    ("weekly_once", CadencePreset.WEEKLY_ONCE),
    ("MONTHLY_ONCE", CadencePreset.MONTHLY_ONCE),
    ("custom", CadencePreset.CUSTOM),
])
def test_from_key(key, preset):
    assert CadencePreset.from_key(key) is preset


def test_from_key_unknown():
    with pytest.raises(ValueError, match="expected one of: daily, 15pm"):
        CadencePreset.from_key("yearly")


def test_every_preset_has_a_label():
    for preset in CadencePreset:
        assert preset.label


def test_product_annual_units():
    assert ProductUsage(CadencePreset.DAILY).annual_units == 365
    assert ProductUsage(CadencePreset.CUSTOM, 17.8).annual_units == 17
    assert ProductUsage(CadencePreset.CUSTOM, -3).annual_units == 0


def test_custom_value_ignored_for_presets():
    assert ProductUsage(CadencePreset.MONTHLY_ONCE, custom_annual_units=500).annual_units == 12


def test_product_ids_are_unique_and_ignored_in_equality():
    first = ProductUsage(CadencePreset.DAILY)
    second = ProductUsage(CadencePreset.DAILY)

    assert first.id != second.id
    assert first == second


def test_display_name():
    assert ProductUsage(CadencePreset.DAILY, name="Office").display_name == "Office"
    assert ProductUsage(CadencePreset.DAILY).display_name == "Daily"


@pytest.mark.parametrize("raw, expected", [
    (5, 5),
    (5.99, 5),
    ("8", 8),
    (-1, 0),
    (-0.5, 0),
    (float('nan'), 0),
    (float('-inf'), 0),
    (None, 0),
    (True, 0),
    ("", 0),
    (2 ** 53 + 1, 2 ** 53 + 1),
    (-10 ** 400, 0),
])
def test_sanitize_annual_units(raw, expected):
    value = sanitize_annual_units(raw)
    assert value == expected
    assert isinstance(value, int)


@pytest.mark.parametrize("raw, expected", [
    (2, 2.0),
    (0.25, 0.25),
    (-3, 0.0),
    (float('nan'), 0.0),
    (float('inf'), 0.0),
    (None, 0.0),
    ("1.5", 1.5),
    ("many", 0.0),
    (10 ** 400, 0.0),
])
def test_sanitize_hours(raw, expected):
    assert sanitize_hours(raw) == expected
