"""Trip Budget MCP Server.

Exposes trip cost estimates, sequential savings allocation, booking
timelines and budget advice as MCP tools. Helps plan a trip that can be
booked debt-free.
"""

import logging
import os
import sys
from contextlib import asynccontextmanager
from datetime import date
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from mcp.server.fastmcp import Context, FastMCP

# Ensure project root is on sys.path so `src` is importable when loaded
# directly by tools like `mcp dev` (which use importlib, not `python -m`).
_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

load_dotenv()

from src.core.advisor_client import DEFAULT_BASE_URL, DEFAULT_MODEL, AdvisorClient, AdvisorError
from src.core.calculations import allocate, project, recommend, value_points
from src.core.estimator import estimate_trip_costs
from src.core.planner import calculate_trip_budget
from src.core.trip_store import TripStore
from src.mcp.error_handling import handle_tool_errors
from src.mcp.formatters import (
    format_allocation,
    format_budget_advice,
    format_cost_estimates,
    format_points_valuation,
    format_recommendation,
    format_saved_trip,
    format_saved_trips,
    format_savings_timeline,
    format_trip_budget,
)
from src.models.schemas import (
    AllocateSavingsInput,
    ApplyPointsInput,
    EstimateCostsInput,
    PointsRedemption,
    RecommendSavingsInput,
    SavedTrip,
    SaveTripInput,
    SavingsTimelineInput,
    TripBudgetInput,
    TripEstimateInput,
    TripNameInput,
)

logger = logging.getLogger("trip_budget_mcp")


def _parse_reference_date(value: Optional[str]) -> date:
    """Parse a YYYY-MM-DD string, defaulting to today."""
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"'{value}' is not a valid date (expected YYYY-MM-DD)") from None


# --- Lifespan: initialize shared resources ---


@asynccontextmanager
async def app_lifespan(server: FastMCP):
    logging.basicConfig(
        stream=sys.stderr,
        level=os.environ.get("TRIP_BUDGET_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    api_key = os.environ.get("OPENAI_API_KEY", "")
    advisor: Optional[AdvisorClient] = None
    if api_key:
        advisor = AdvisorClient(
            api_key=api_key,
            model=os.environ.get("TRIP_ADVISOR_MODEL", DEFAULT_MODEL),
            base_url=os.environ.get("TRIP_ADVISOR_BASE_URL", DEFAULT_BASE_URL),
        )
    else:
        logger.warning("OPENAI_API_KEY is not set. Budget advice will not work.")

    store = TripStore(os.environ.get("TRIP_BUDGET_STORE") or None)

    yield {"advisor": advisor, "store": store}

    if advisor is not None:
        await advisor.close()


mcp = FastMCP("trip_budget_mcp", lifespan=app_lifespan)


# --- Helpers to get dependencies from context ---


def _get_store(ctx) -> TripStore:
    return ctx.request_context.lifespan_context["store"]


def _get_advisor(ctx) -> AdvisorClient:
    advisor = ctx.request_context.lifespan_context["advisor"]
    if advisor is None:
        raise AdvisorError(
            503,
            "not_configured",
            "OPENAI_API_KEY is not configured. Set it in your environment or .env file.",
        )
    return advisor


# --- Calculation Tools ---


@mcp.tool(
    name="trip_estimate_costs",
    annotations={
        "title": "Estimate Trip Costs",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
@handle_tool_errors
async def trip_estimate_costs(params: EstimateCostsInput) -> str:
    """Estimate the cost of each budget category. Entered costs replace estimates."""
    costs = estimate_trip_costs(params.trip, params.overrides)
    return format_cost_estimates(costs, params.trip.destinations)


@mcp.tool(
    name="trip_budget_summary",
    annotations={
        "title": "Trip Budget Summary",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
@handle_tool_errors
async def trip_budget_summary(params: TripBudgetInput) -> str:
    """Full trip budget: totals, savings progress, per-category funding and booking dates."""
    result = calculate_trip_budget(
        params.costs.to_costs(),
        current_savings=params.current_savings,
        monthly_savings=params.monthly_savings,
        points=params.points,
        reference_date=_parse_reference_date(params.reference_date),
    )
    return format_trip_budget(result)


@mcp.tool(
    name="trip_allocate_savings",
    annotations={
        "title": "Allocate Savings",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
@handle_tool_errors
async def trip_allocate_savings(params: AllocateSavingsInput) -> str:
    """Show how current savings cover each category, flights first."""
    state = allocate(params.costs.to_costs(), params.current_savings)
    return format_allocation(state)


@mcp.tool(
    name="trip_savings_timeline",
    annotations={
        "title": "Savings Timeline",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
@handle_tool_errors
async def trip_savings_timeline(params: SavingsTimelineInput) -> str:
    """Project when each category can be booked at a given monthly savings rate."""
    state = allocate(params.costs.to_costs(), params.current_savings)
    projection = project(
        state, params.monthly_savings, _parse_reference_date(params.reference_date)
    )
    return format_savings_timeline(projection)


@mcp.tool(
    name="trip_recommend_monthly_savings",
    annotations={
        "title": "Recommend Monthly Savings",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
@handle_tool_errors
async def trip_recommend_monthly_savings(params: RecommendSavingsInput) -> str:
    """Recommend how much to save each month based on the trip's total cost."""
    return format_recommendation(recommend(params.total_trip_cost, params.current_savings))


@mcp.tool(
    name="trip_apply_points",
    annotations={
        "title": "Apply Credit Card Points",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
@handle_tool_errors
async def trip_apply_points(params: ApplyPointsInput) -> str:
    """Value credit card points against the flights cost."""
    valuation = value_points(
        params.flights_cost,
        PointsRedemption(
            use_points=params.use_points,
            points_to_use=params.points_to_use,
            connected_balance=params.connected_balance,
        ),
    )
    return format_points_valuation(valuation)


# --- Advice Tools ---


@mcp.tool(
    name="trip_budget_advice",
    annotations={
        "title": "Budget Advice",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True,
    },
)
@handle_tool_errors
async def trip_budget_advice(params: TripEstimateInput, ctx: Context) -> str:
    """Get category budget ranges and money-saving tips for a trip."""
    advisor = _get_advisor(ctx)
    advice = await advisor.get_budget_advice(params)
    return format_budget_advice(advice)


# --- Saved Trip Tools ---


@mcp.tool(
    name="trip_save",
    annotations={
        "title": "Save Trip",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
@handle_tool_errors
async def trip_save(params: SaveTripInput, ctx: Context) -> str:
    """Save a trip's costs and savings so the budget can be revisited later."""
    store = _get_store(ctx)
    saved = store.save(SavedTrip(
        name=params.name,
        costs=params.costs.to_costs(),
        current_savings=params.current_savings,
        monthly_savings=params.monthly_savings,
        points=params.points or PointsRedemption(),
    ))
    return format_saved_trip(saved)


@mcp.tool(
    name="trip_list_saved",
    annotations={
        "title": "List Saved Trips",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
@handle_tool_errors
async def trip_list_saved(ctx: Context) -> str:
    """List saved trips."""
    return format_saved_trips(_get_store(ctx).list())


@mcp.tool(
    name="trip_load_summary",
    annotations={
        "title": "Saved Trip Budget",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
@handle_tool_errors
async def trip_load_summary(params: TripNameInput, ctx: Context) -> str:
    """Recompute the full budget for a saved trip."""
    trip = _get_store(ctx).get(params.name)
    result = calculate_trip_budget(
        trip.costs,
        current_savings=trip.current_savings,
        monthly_savings=trip.monthly_savings,
        points=trip.points,
        reference_date=_parse_reference_date(params.reference_date),
    )
    return format_trip_budget(result, title=trip.name)


@mcp.tool(
    name="trip_delete",
    annotations={
        "title": "Delete Saved Trip",
        "readOnlyHint": False,
        "destructiveHint": True,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
@handle_tool_errors
async def trip_delete(params: TripNameInput, ctx: Context) -> str:
    """Delete a saved trip."""
    if _get_store(ctx).delete(params.name):
        return f"Deleted **{params.name}**."
    return f"No saved trip named '{params.name}'."


# --- Entry point ---

if __name__ == "__main__":
    mcp.run()
