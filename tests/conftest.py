"""Shared test fixtures for trip budget tests."""

from src.models.schemas import (
    CategoryCosts,
    PointsRedemption,
    SavedTrip,
    TripEstimateInput,
)


def make_costs(
    flights: float = 1200,
    accommodations: float = 800,
    transportation: float = 300,
    activities: float = 400,
    food: float = 500,
    preparation: float = 100,
) -> CategoryCosts:
    return CategoryCosts(
        flights=flights,
        accommodations=accommodations,
        transportation=transportation,
        activities=activities,
        food=food,
        preparation=preparation,
    )


def make_trip(
    destinations: list[str] | None = None,
    travelers: int = 2,
    trip_duration_days: int = 7,
    travel_season: str = "shoulder",
) -> TripEstimateInput:
    return TripEstimateInput(
        destinations=destinations or ["Lisbon"],
        travelers=travelers,
        trip_duration_days=trip_duration_days,
        travel_season=travel_season,
    )


def make_points(
    points_to_use: int = 50000,
    use_points: bool = True,
    connected_balance: int | None = 80000,
) -> PointsRedemption:
    return PointsRedemption(
        use_points=use_points,
        points_to_use=points_to_use,
        connected_balance=connected_balance,
    )


def make_saved_trip(
    name: str = "Portugal",
    costs: CategoryCosts | None = None,
    current_savings: float = 1500,
    monthly_savings: float = 0,
    points: PointsRedemption | None = None,
) -> SavedTrip:
    return SavedTrip(
        name=name,
        costs=costs or make_costs(),
        current_savings=current_savings,
        monthly_savings=monthly_savings,
        points=points or PointsRedemption(),
    )
