"""Pydantic models for trip budget inputs."""

import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- Points are valued at a fixed rate (1 point = $0.012) ---

POINTS_CONVERSION_RATE = 0.012


def round_currency(amount: float) -> float:
    """Round a dollar amount to whole cents."""
    return round(amount, 2)


def clamp_non_negative(amount: float | None) -> float:
    """Treat missing, negative and non-finite amounts as zero."""
    if amount is None or not math.isfinite(amount) or amount < 0:
        return 0.0
    return float(amount)


# --- Enums ---

class BudgetCategory(str, Enum):
    FLIGHTS = "flights"
    ACCOMMODATIONS = "accommodations"
    TRANSPORTATION = "transportation"
    ACTIVITIES = "activities"
    FOOD = "food"
    PREPARATION = "preparation"


# Savings are applied in this order. Flights come first because they are the
# least flexible booking.
ALLOCATION_ORDER: tuple[BudgetCategory, ...] = (
    BudgetCategory.FLIGHTS,
    BudgetCategory.ACCOMMODATIONS,
    BudgetCategory.TRANSPORTATION,
    BudgetCategory.ACTIVITIES,
    BudgetCategory.FOOD,
    BudgetCategory.PREPARATION,
)


class TravelSeason(str, Enum):
    PEAK = "peak"
    SHOULDER = "shoulder"
    OFF = "off"


# --- Cost Models ---

class CategoryCosts(BaseModel):
    """Net cost per category. All six categories are always present."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    flights: float = 0.0
    accommodations: float = 0.0
    transportation: float = 0.0
    activities: float = 0.0
    food: float = 0.0
    preparation: float = 0.0

    @field_validator("*", mode="before")
    @classmethod
    def _clamp(cls, value):
        if value is None:
            return 0.0
        try:
            return clamp_non_negative(float(value))
        except (TypeError, ValueError):
            return value  # let pydantic report the type error

    @classmethod
    def from_mapping(cls, values: dict) -> "CategoryCosts":
        """Build from a mapping keyed by category name or :class:`BudgetCategory`."""
        data = {}
        for key, amount in values.items():
            name = key.value if isinstance(key, BudgetCategory) else str(key)
            data[name] = amount
        return cls(**data)

    def get(self, category: BudgetCategory) -> float:
        return getattr(self, BudgetCategory(category).value)

    def with_cost(self, category: BudgetCategory, amount: float) -> "CategoryCosts":
        return self.model_copy(update={BudgetCategory(category).value: clamp_non_negative(amount)})

    def as_dict(self) -> dict[BudgetCategory, float]:
        """Costs keyed by category, in allocation order."""
        return {c: self.get(c) for c in ALLOCATION_ORDER}

    @property
    def total(self) -> float:
        return round_currency(sum(self.get(c) for c in ALLOCATION_ORDER))


class CostOverrides(BaseModel):
    """User-entered costs. ``None`` means no override; ``0`` is a real, free category."""
    model_config = ConfigDict(extra="forbid")

    flights: Optional[float] = Field(None, description="Flights cost override in dollars")
    accommodations: Optional[float] = Field(None, description="Accommodations cost override in dollars")
    transportation: Optional[float] = Field(None, description="Transportation cost override in dollars")
    activities: Optional[float] = Field(None, description="Activities cost override in dollars")
    food: Optional[float] = Field(None, description="Food cost override in dollars")
    preparation: Optional[float] = Field(None, description="Preparation cost override in dollars")

    def get(self, category: BudgetCategory) -> Optional[float]:
        return getattr(self, BudgetCategory(category).value)


class PointsRedemption(BaseModel):
    """Credit card points applied against the flights category."""
    model_config = ConfigDict(extra="forbid")

    use_points: bool = Field(default=False, description="Whether points are applied at all")
    points_to_use: int = Field(default=0, description="Points to redeem")
    connected_balance: Optional[int] = Field(
        None, description="Points balance of a connected card account, if known"
    )

    @field_validator("points_to_use", mode="before")
    @classmethod
    def _clamp_points(cls, value):
        if value is None:
            return 0
        if isinstance(value, (int, float)) and value < 0:
            return 0
        return value


# --- Trip Description ---

class TripEstimateInput(BaseModel):
    """What the user told us about the trip."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    destinations: list[str] = Field(
        ..., description="Destination names", min_length=1, max_length=10
    )
    travelers: int = Field(default=1, ge=1, le=50, description="Number of travelers")
    trip_duration_days: int = Field(default=7, ge=1, le=365, description="Trip length in days")
    travel_season: str = Field(
        default="shoulder", max_length=50, description="Travel season (e.g. 'summer', 'off-season')"
    )

    @field_validator("destinations")
    @classmethod
    def _check_destinations(cls, value: list[str]) -> list[str]:
        cleaned = [d.strip() for d in value if d and d.strip()]
        if not cleaned:
            raise ValueError("At least one destination is required")
        for d in cleaned:
            if len(d) > 100:
                raise ValueError(f"Destination name too long: '{d[:20]}...'")
        return cleaned


# --- Response Models ---

class CategoryAdvice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    category: BudgetCategory
    category_label: str = ""
    estimated_range: str = ""
    explanation: str = ""
    tips: list[str] = []


class BudgetAdvice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    total_estimated_range: str = ""
    categories: list[CategoryAdvice] = []
    general_tips: list[str] = []

    def for_category(self, category: BudgetCategory) -> Optional[CategoryAdvice]:
        for advice in self.categories:
            if advice.category == category:
                return advice
        return None


class SavedTrip(BaseModel):
    """Raw budget figures persisted for a trip. Everything else is recomputed."""
    model_config = ConfigDict(extra="ignore")

    name: str
    costs: CategoryCosts = CategoryCosts()
    current_savings: float = 0.0
    monthly_savings: float = 0.0
    points: PointsRedemption = PointsRedemption()
    updated_on: Optional[str] = None


# --- MCP Tool Input Models ---


class CategoryCostsInput(BaseModel):
    """Per-category costs in dollars as entered by the user."""
    model_config = ConfigDict(extra="forbid")

    flights: float = Field(default=0.0, description="Flights cost in dollars")
    accommodations: float = Field(default=0.0, description="Accommodations cost in dollars")
    transportation: float = Field(default=0.0, description="Ground transportation cost in dollars")
    activities: float = Field(default=0.0, description="Activities and tours cost in dollars")
    food: float = Field(default=0.0, description="Food and dining cost in dollars")
    preparation: float = Field(
        default=0.0, description="Preparation cost (insurance, visas, gear) in dollars"
    )

    def to_costs(self) -> CategoryCosts:
        return CategoryCosts(**self.model_dump())


class EstimateCostsInput(BaseModel):
    """Input for estimating trip costs per category."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    trip: TripEstimateInput
    overrides: Optional[CostOverrides] = Field(
        None, description="User-entered costs that replace the estimate for a category"
    )


class TripBudgetInput(BaseModel):
    """Input for a full trip budget calculation."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    costs: CategoryCostsInput
    current_savings: float = Field(default=0.0, description="Savings already set aside in dollars")
    monthly_savings: float = Field(
        default=0.0,
        description="Monthly savings in dollars. 0 uses the recommended amount.",
    )
    points: Optional[PointsRedemption] = Field(None, description="Optional points redemption")
    reference_date: Optional[str] = Field(
        None, description="Date to project from (YYYY-MM-DD). Defaults to today."
    )


class AllocateSavingsInput(BaseModel):
    """Input for allocating current savings across categories."""
    model_config = ConfigDict(extra="forbid")

    costs: CategoryCostsInput
    current_savings: float = Field(default=0.0, description="Savings already set aside in dollars")


class SavingsTimelineInput(BaseModel):
    """Input for projecting when each category can be booked."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    costs: CategoryCostsInput
    current_savings: float = Field(default=0.0, description="Savings already set aside in dollars")
    monthly_savings: float = Field(..., description="Monthly savings in dollars")
    reference_date: Optional[str] = Field(
        None, description="Date to project from (YYYY-MM-DD). Defaults to today."
    )


class RecommendSavingsInput(BaseModel):
    """Input for recommending a monthly savings amount."""
    model_config = ConfigDict(extra="forbid")

    total_trip_cost: float = Field(..., description="Total trip cost in dollars")
    current_savings: float = Field(default=0.0, description="Savings already set aside in dollars")


class ApplyPointsInput(BaseModel):
    """Input for valuing credit card points against the flights cost."""
    model_config = ConfigDict(extra="forbid")

    flights_cost: float = Field(..., description="Flights cost in dollars before points")
    points_to_use: int = Field(default=0, description="Points to redeem")
    use_points: bool = Field(default=True, description="Whether to apply points")
    connected_balance: Optional[int] = Field(
        None, description="Points balance of a connected card account, if known"
    )


class SaveTripInput(BaseModel):
    """Input for saving a trip's raw budget figures."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    name: str = Field(..., description="Trip name", min_length=1, max_length=100)
    costs: CategoryCostsInput
    current_savings: float = Field(default=0.0, description="Savings already set aside in dollars")
    monthly_savings: float = Field(default=0.0, description="Monthly savings in dollars")
    points: Optional[PointsRedemption] = None


class TripNameInput(BaseModel):
    """Input naming a saved trip."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    name: str = Field(..., description="Trip name (case-insensitive)", min_length=1)
    reference_date: Optional[str] = Field(
        None, description="Date to project from (YYYY-MM-DD). Defaults to today."
    )
