import pytest

from pricing_estimator.config.settings import PricingConstants
from pricing_estimator.engine.calculator import PricingEngine
from pricing_estimator.models.usage import CadencePreset, ProductUsage


@pytest.fixture
def constants():
    return PricingConstants.default()


@pytest.fixture
def engine(constants):
    return PricingEngine(constants)


@pytest.fixture
def strict_engine(constants):
    return PricingEngine(constants, strict=True)


@pytest.fixture
def weekly_product():
    return ProductUsage(CadencePreset.WEEKLY_ONCE, name="Office")


@pytest.fixture
def small_custom_product():
    return ProductUsage(CadencePreset.CUSTOM, 10, name="Game")
