"""Tests for the fallback dataset and synthetic history generator."""

import random
from decimal import Decimal

import pytest

from coinview.market_data.fallback import DEFAULT_FALLBACK_COINS, FallbackDataset
from coinview.market_data.intervals import INTERVALS
from tests.helpers import make_coin

NOW_MS = 1_704_067_200_000


@pytest.fixture
def dataset() -> FallbackDataset:
    return FallbackDataset()


class TestFallbackCoins:
    def test_default_order(self, dataset: FallbackDataset) -> None:
        assert [c.id for c in dataset.coins] == ["bitcoin", "ethereum", "dogecoin"]

    def test_covers_capped_uncapped_and_low_price(self) -> None:
        by_id = {c.id: c for c in DEFAULT_FALLBACK_COINS}
        assert by_id["bitcoin"].max_supply is not None
        assert by_id["ethereum"].max_supply is None
        assert Decimal(by_id["dogecoin"].price_usd) < 1
        assert Decimal(by_id["dogecoin"].supply) > Decimal("1e11")

    @pytest.mark.parametrize("limit, expected", [(0, 0), (1, 1), (2, 2), (3, 3), (50, 3)])
    def test_head_is_prefix(self, dataset: FallbackDataset, limit: int, expected: int) -> None:
        head = dataset.head(limit)
        assert len(head) == expected
        assert head == list(dataset.coins[:expected])

    def test_head_negative_limit(self, dataset: FallbackDataset) -> None:
        assert dataset.head(-5) == []

    def test_find_normalises_id(self, dataset: FallbackDataset) -> None:
        assert dataset.find(" Bitcoin ").id == "bitcoin"
        assert dataset.find("unknowncoin") is None

    def test_substitute_dataset(self) -> None:
        custom = FallbackDataset(coins=(make_coin("solana", "SOL", price="145.20"),))
        assert [c.id for c in custom.head(10)] == ["solana"]
        assert custom.find("bitcoin") is None

    def test_is_immutable(self, dataset: FallbackDataset) -> None:
        with pytest.raises(AttributeError):
            dataset.coins = ()  # type: ignore[misc]


class TestBasePrice:
    def test_explicit_base_prices(self, dataset: FallbackDataset) -> None:
        assert dataset.base_price("bitcoin") == 42000.0
        assert dataset.base_price("ethereum") == 2900.0

    def test_falls_back_to_coin_price(self, dataset: FallbackDataset) -> None:
        assert dataset.base_price("dogecoin") == pytest.approx(0.15)

    def test_unknown_id_uses_default(self) -> None:
        dataset = FallbackDataset(default_base_price=3.5)
        assert dataset.base_price("nothing") == 3.5


class TestGenerateHistory:
    @pytest.mark.parametrize("label", list(INTERVALS))
    def test_length_and_spacing(self, dataset: FallbackDataset, label: str) -> None:
        spec = INTERVALS[label]
        history = dataset.generate_history("bitcoin", spec, now_ms=NOW_MS)

        assert len(history) == spec.count
        steps = {b.time - a.time for a, b in zip(history, history[1:])}
        assert steps == {spec.width_ms}
        assert history[-1].time == NOW_MS - spec.width_ms
        assert history[0].time == NOW_MS - spec.count * spec.width_ms

    def test_same_shape_across_calls(self, dataset: FallbackDataset) -> None:
        spec = INTERVALS["1W"]
        a = dataset.generate_history("ethereum", spec, now_ms=NOW_MS)
        b = dataset.generate_history("ethereum", spec, now_ms=NOW_MS)
        assert [p.time for p in a] == [p.time for p in b]

    def test_prices_are_finite_positive_decimals(self, dataset: FallbackDataset) -> None:
        history = dataset.generate_history("dogecoin", INTERVALS["1Y"], now_ms=NOW_MS)
        for point in history:
            price = Decimal(point.price_usd)
            assert price.is_finite()
            assert price > 0

    def test_steps_bounded_by_max_pct(self) -> None:
        dataset = FallbackDataset(max_step_pct=0.05)
        history = dataset.generate_history(
            "bitcoin", INTERVALS["1H"], now_ms=NOW_MS, rng=random.Random(1)
        )
        prices = [42000.0] + [float(p.price_usd) for p in history]
        for prev, cur in zip(prices, prices[1:]):
            assert abs(cur / prev - 1) <= 0.05 + 1e-9

    def test_seeded_rng_reproducible(self, dataset: FallbackDataset) -> None:
        spec = INTERVALS["1D"]
        a = dataset.generate_history("bitcoin", spec, now_ms=NOW_MS, rng=random.Random(3))
        b = dataset.generate_history("bitcoin", spec, now_ms=NOW_MS, rng=random.Random(3))
        assert a == b

    def test_dates_match_times(self, dataset: FallbackDataset) -> None:
        history = dataset.generate_history("bitcoin", INTERVALS["1M"], now_ms=NOW_MS)
        assert history[-1].date == "2023-12-31T00:00:00.000Z"
