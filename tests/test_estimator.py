"""Tests for the category cost estimator."""

import pytest

from tests.conftest import make_trip
from src.core.estimator import (
    destination_price_factor,
    estimate_category_cost,
    estimate_trip_costs,
    mock_estimate,
    normalize_season,
)
from src.models.schemas import ALLOCATION_ORDER, BudgetCategory, CostOverrides, TravelSeason


class TestOverridePrecedence:
    def test_override_used_verbatim(self):
        cost = estimate_category_cost(BudgetCategory.FLIGHTS, make_trip(), override=987.65)
        assert cost == 987.65

    def test_zero_override_is_a_real_cost(self):
        cost = estimate_category_cost(BudgetCategory.ACTIVITIES, make_trip(), override=0)
        assert cost == 0

    def test_missing_override_uses_estimate(self):
        trip = make_trip()
        cost = estimate_category_cost(BudgetCategory.FOOD, trip)
        assert cost == mock_estimate(BudgetCategory.FOOD, trip)
        assert cost > 0

    def test_negative_override_ignored(self):
        trip = make_trip()
        cost = estimate_category_cost(BudgetCategory.FOOD, trip, override=-10)
        assert cost == mock_estimate(BudgetCategory.FOOD, trip)

    def test_non_finite_override_ignored(self):
        trip = make_trip()
        cost = estimate_category_cost(BudgetCategory.FOOD, trip, override=float("nan"))
        assert cost == mock_estimate(BudgetCategory.FOOD, trip)

    def test_trip_costs_mix_overrides_and_estimates(self):
        trip = make_trip()
        costs = estimate_trip_costs(trip, CostOverrides(flights=0, food=250))
        assert costs.flights == 0
        assert costs.food == 250
        assert costs.accommodations == mock_estimate(BudgetCategory.ACCOMMODATIONS, trip)

    def test_trip_costs_without_overrides(self):
        costs = estimate_trip_costs(make_trip())
        assert all(costs.get(c) > 0 for c in ALLOCATION_ORDER)


class TestMockEstimate:
    def test_deterministic(self):
        trip = make_trip(destinations=["Kyoto", "Osaka"])
        assert estimate_trip_costs(trip) == estimate_trip_costs(trip)

    def test_whole_dollars(self):
        costs = estimate_trip_costs(make_trip(destinations=["Reykjavik"]))
        for category in ALLOCATION_ORDER:
            assert costs.get(category) == int(costs.get(category))

    def test_peak_season_costs_more(self):
        peak = mock_estimate(BudgetCategory.ACCOMMODATIONS, make_trip(travel_season="summer"))
        shoulder = mock_estimate(BudgetCategory.ACCOMMODATIONS, make_trip(travel_season="spring"))
        off = mock_estimate(BudgetCategory.ACCOMMODATIONS, make_trip(travel_season="off-season"))
        assert peak > shoulder > off

    def test_preparation_ignores_season(self):
        peak = mock_estimate(BudgetCategory.PREPARATION, make_trip(travel_season="peak"))
        off = mock_estimate(BudgetCategory.PREPARATION, make_trip(travel_season="winter"))
        assert peak == off

    def test_scales_with_travelers(self):
        two = mock_estimate(BudgetCategory.FOOD, make_trip(travelers=2))
        four = mock_estimate(BudgetCategory.FOOD, make_trip(travelers=4))
        assert four == pytest.approx(two * 2, abs=1)

    def test_more_destinations_more_flights(self):
        one = mock_estimate(BudgetCategory.FLIGHTS, make_trip(destinations=["Rome"]))
        two = mock_estimate(BudgetCategory.FLIGHTS, make_trip(destinations=["Rome", "Florence"]))
        assert two > one


class TestDestinationPriceFactor:
    @pytest.mark.parametrize("name", ["Paris", "Tokyo", "Buenos Aires", "x"])
    def test_within_range(self, name):
        assert 0.85 <= destination_price_factor(name) <= 1.15

    def test_ignores_case_and_spacing(self):
        assert destination_price_factor("  New   York ") == destination_price_factor("new york")


class TestNormalizeSeason:
    @pytest.mark.parametrize("text, expected", [
        ("Summer", TravelSeason.PEAK),
        ("holiday season", TravelSeason.PEAK),
        ("off-season", TravelSeason.OFF),
        ("Winter", TravelSeason.OFF),
        ("Spring", TravelSeason.SHOULDER),
        ("fall", TravelSeason.SHOULDER),
        ("", TravelSeason.SHOULDER),
        ("monsoon", TravelSeason.SHOULDER),
    ])
    def test_mapping(self, text, expected):
        assert normalize_season(text) == expected
