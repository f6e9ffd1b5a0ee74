"""Quick smoke test against the live budget advice API.

Run: python -m tests.smoke_test
Requires OPENAI_API_KEY in .env
"""

import asyncio
import os
import sys

from dotenv import load_dotenv

load_dotenv()

from src.core.advisor_client import DEFAULT_BASE_URL, DEFAULT_MODEL, AdvisorClient, AdvisorError
from src.core.estimator import estimate_trip_costs
from src.core.planner import calculate_trip_budget
from src.mcp.formatters import format_budget_advice, format_trip_budget
from src.models.schemas import PointsRedemption, TripEstimateInput


async def main():
    api_key = os.environ.get("OPENAI_API_KEY", "")
    if not api_key:
        print("OPENAI_API_KEY not set in .env")
        sys.exit(1)

    trip = TripEstimateInput(
        destinations=["Lisbon", "Porto"],
        travelers=2,
        trip_duration_days=10,
        travel_season="spring",
    )
    client = AdvisorClient(
        api_key=api_key,
        model=os.environ.get("TRIP_ADVISOR_MODEL", DEFAULT_MODEL),
        base_url=os.environ.get("TRIP_ADVISOR_BASE_URL", DEFAULT_BASE_URL),
    )

    try:
        # 1. Offline estimate and budget
        print("1. Estimating costs...")
        costs = estimate_trip_costs(trip)
        result = calculate_trip_budget(
            costs,
            current_savings=1500,
            points=PointsRedemption(use_points=True, points_to_use=20000),
        )
        print(format_trip_budget(result, title="Portugal"))

        # 2. Live advice
        print("\n2. Fetching budget advice...")
        advice = await client.get_budget_advice(trip)
        print(format_budget_advice(advice))

        print("\nAll checks passed.")
    except AdvisorError as e:
        print(f"\nAdvisor error: {e}")
        sys.exit(1)
    finally:
        await client.close()


if __name__ == "__main__":
    asyncio.run(main())
