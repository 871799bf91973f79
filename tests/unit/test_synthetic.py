"""
Tests for the deterministic synthetic price generator.

Covers:
- Name hash compatibility (signed 32-bit wraparound)
- Category bands and volatility fallbacks
- Reproducibility within a time bucket
- Change vector bounds and rounding
"""

import math

import pytest

from app.services.synthetic import (
    DEFAULT_VOLATILITY,
    PRICE_BANDS,
    SUPPORTED_PERIODS,
    VOLATILITY,
    Horizon,
    SyntheticPriceGenerator,
    max_volatility,
    name_hash,
    name_seed,
    price_band,
)
from app.services.token_registry import TOKEN_REGISTRY, TokenCategory


class TestNameHash:

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("", 0),
            ("A", 65),
            ("COIN", 2074257),
            ("hello", 99162322),
            ("Hello World", -862545276),
            ("OXYGEN", -1949272672),
            ("DYNAMITE", -2069063147),
        ],
    )
    def test_known_values(self, name, expected):
        assert name_hash(name) == expected

    def test_seed_is_normalised(self):
        for token in TOKEN_REGISTRY:
            seed = name_seed(token.name)
            assert 0 <= seed <= 1.0000001

    def test_seed_uses_absolute_hash(self):
        assert name_seed("Hello World") == pytest.approx(862545276 / 2147483647)


class TestCategoryTables:

    def test_unknown_category_uses_resource_band(self):
        assert price_band("mystery") == PRICE_BANDS[TokenCategory.RESOURCE]

    def test_unknown_category_uses_default_volatility(self):
        assert max_volatility("mystery") == DEFAULT_VOLATILITY == 15.0

    def test_string_categories_are_accepted(self):
        assert price_band("Explosive") == (0.002, 0.025)
        assert max_volatility("gas") == VOLATILITY[TokenCategory.GAS]


class TestSyntheticPriceGenerator:

    @pytest.fixture
    def generator(self, clock):
        return SyntheticPriceGenerator(clock=clock, time_bucket_ms=1000)

    def test_now_is_floored_to_bucket(self, clock, generator):
        clock.now = 1_700_000_000.987
        assert generator.now_ms() == 1_700_000_000_000

    def test_same_bucket_is_reproducible(self, clock, generator):
        first = generator.generate(TokenCategory.METAL, "COPPER")
        clock.advance(0.4)
        second = generator.generate(TokenCategory.METAL, "COPPER")
        assert first == second

    def test_base_price_within_band(self, generator):
        for token in TOKEN_REGISTRY:
            low, high = price_band(token.category)
            assert low <= generator.base_price(token.category, token.name) <= high

    def test_price_oscillates_within_ten_percent(self, generator):
        base = generator.base_price(TokenCategory.ENERGY, "HEAT")
        for now_ms in (0, 12_345_678, 157_079, 471_238):
            price = generator.price(TokenCategory.ENERGY, "HEAT", now_ms=now_ms)
            assert base * 0.9 - 1e-12 <= price <= base * 1.1 + 1e-12
            assert price > 0

    def test_price_at_epoch_equals_base(self, generator):
        assert generator.price(TokenCategory.CRAFTED, "GLASS", now_ms=0) == pytest.approx(
            generator.base_price(TokenCategory.CRAFTED, "GLASS")
        )

    def test_changes_within_volatility_envelope(self, generator):
        for token in TOKEN_REGISTRY:
            vol = max_volatility(token.category)
            changes = generator.changes(token.category, token.name)
            assert abs(changes.h24) <= vol * 1.1 + 0.01
            assert abs(changes.d7) <= vol * 1.6 + 0.01
            assert abs(changes.d30) <= vol * 2.4 + 0.01

    def test_changes_rounded_to_two_decimals(self, generator):
        changes = generator.changes(TokenCategory.ORGANIC, "ALGAE")
        for value in (changes.h24, changes.d7, changes.d30):
            assert math.isfinite(value)
            assert round(value, 2) == value

    def test_changes_match_formula(self, generator):
        now = 86_400_000
        seed = name_seed("STEEL")
        vol = 12
        expected = math.sin(seed * 1000 + 1) * vol * 0.8 + math.cos(seed * 1500 + 2) * vol * 0.3
        changes = generator.changes(TokenCategory.METAL, "STEEL", now_ms=now)
        assert changes.h24 == round(expected, 2)

    def test_supported_periods(self):
        assert SUPPORTED_PERIODS == ["24h", "7d", "30d"]
        assert Horizon.D30.label == "30d"
