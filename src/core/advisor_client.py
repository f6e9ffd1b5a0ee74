"""Budget advice client.

Async HTTP client for an OpenAI-compatible chat completions API. Asks for
per-category budget ranges and money-saving tips for a trip. Advice is text
for the user only; it never feeds the savings calculations.
"""

import json
import logging
import re
from typing import Any, Optional, Protocol

import httpx
from pydantic import ValidationError

from src.core.resolvers import ResolverError, category_label, resolve_category
from src.models.schemas import BudgetAdvice, CategoryAdvice, TripEstimateInput

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TIMEOUT = 60.0
MAX_INPUT_LENGTH = 500

logger = logging.getLogger("trip_budget_mcp.advisor")

SYSTEM_PROMPT = (
    "You are a helpful travel budget advisor. Provide realistic, practical budget "
    "estimates based on current travel costs. Always return valid JSON."
)


class AdvisorError(Exception):
    """Base exception for budget advice API errors."""

    def __init__(self, status_code: int, name: str, detail: str):
        self.status_code = status_code
        self.name = name
        self.detail = detail
        super().__init__(f"Advisor API Error [{status_code}] {name}: {detail}")


class RecommendationProvider(Protocol):
    """Anything that can produce budget advice for a trip."""

    async def get_budget_advice(self, trip: TripEstimateInput) -> BudgetAdvice: ...


def sanitize_input(text: str) -> str:
    """Strip characters and keywords that could steer the prompt."""
    cleaned = text.strip()[:MAX_INPUT_LENGTH]
    cleaned = re.sub(r"[<>{}]", "", cleaned)
    return re.sub(r"system|prompt|instruction", "", cleaned, flags=re.IGNORECASE)


def build_prompt(trip: TripEstimateInput) -> str:
    destinations = ", ".join(sanitize_input(d) for d in trip.destinations)
    season = sanitize_input(trip.travel_season)
    return f"""You are a travel budget advisor. Provide realistic budget estimates for a trip with these details:

Destinations: {destinations}
Number of travelers: {trip.travelers}
Trip duration: {trip.trip_duration_days} days
Travel season: {season}

Provide budget estimates in USD for these 6 categories:
1. Flights - Round-trip airfare for all travelers
2. Housing - Accommodation for the entire stay
3. Food - Meals and dining for all travelers
4. Transportation - Local transport (taxis, trains, car rentals, etc.)
5. Fun - Activities, tours, entertainment, attractions
6. Preparation - Visas, travel insurance, vaccinations, gear

For each category, provide:
- A realistic price range (e.g., "$800-$1,200")
- A brief explanation of what's included
- 2-3 practical tips for saving money or getting the best value

Also provide:
- Total estimated budget range for the entire trip
- 3-4 general money-saving tips for this trip

Return your response as a JSON object with this exact structure:
{{
  "totalEstimatedRange": "string with total range",
  "categories": [
    {{
      "category": "flights|housing|food|transportation|fun|preparation",
      "categoryLabel": "Flights|Housing|Food|Transportation|Fun|Preparation",
      "estimatedRange": "price range string",
      "explanation": "what's included",
      "tips": ["tip1", "tip2", "tip3"]
    }}
  ],
  "generalTips": ["tip1", "tip2", "tip3", "tip4"]
}}"""


def parse_advice(payload: dict[str, Any]) -> BudgetAdvice:
    """Convert the model's JSON into :class:`BudgetAdvice`.

    Category names like "housing" or "fun" are mapped onto budget
    categories. Entries that don't map to any category are dropped.
    """
    categories: list[CategoryAdvice] = []
    for item in payload.get("categories", []) or []:
        if not isinstance(item, dict):
            continue
        try:
            category = resolve_category(str(item.get("category", "")))
        except ResolverError:
            logger.warning("Dropping advice for unknown category %r", item.get("category"))
            continue
        categories.append(CategoryAdvice(
            category=category,
            category_label=category_label(category),
            estimated_range=str(item.get("estimatedRange", "")),
            explanation=str(item.get("explanation", "")),
            tips=[str(t) for t in item.get("tips", []) or []],
        ))

    return BudgetAdvice(
        total_estimated_range=str(payload.get("totalEstimatedRange", "")),
        categories=categories,
        general_tips=[str(t) for t in payload.get("generalTips", []) or []],
    )


class AdvisorClient:
    """Async client for budget advice over a chat completions API."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=DEFAULT_TIMEOUT,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def _request(self, json_data: dict[str, Any]) -> dict[str, Any]:
        """POST a chat completion and return the decoded response body."""
        try:
            response = await self.client.post("/chat/completions", json=json_data)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            try:
                body = e.response.json() if e.response.content else {}
            except ValueError:
                body = {}  # proxy error pages are HTML
            error = body.get("error", {}) if isinstance(body, dict) else {}
            raise AdvisorError(
                status_code=e.response.status_code,
                name=error.get("type") or "api_error",
                detail=error.get("message") or str(e),
            ) from e
        except httpx.TimeoutException as e:
            raise AdvisorError(
                status_code=408,
                name="request_timeout",
                detail="Request for budget advice timed out. Please try again.",
            ) from e

        return response.json()

    async def get_budget_advice(self, trip: TripEstimateInput) -> BudgetAdvice:
        """Ask for category budget ranges and tips for *trip*."""
        data = await self._request({
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_prompt(trip)},
            ],
            "response_format": {"type": "json_object"},
            "temperature": 0.7,
        })

        choices = data.get("choices") or []
        content = (choices[0].get("message") or {}).get("content") if choices else None
        if not content:
            raise AdvisorError(502, "empty_response", "No advice returned by the model.")

        try:
            payload = json.loads(content)
        except json.JSONDecodeError as e:
            logger.warning("Advisor returned invalid JSON: %s", e)
            raise AdvisorError(502, "invalid_response", "Advice was not valid JSON.") from e

        if not isinstance(payload, dict):
            raise AdvisorError(502, "invalid_response", "Advice was not a JSON object.")

        try:
            return parse_advice(payload)
        except ValidationError as e:
            raise AdvisorError(502, "invalid_response", f"Unexpected advice format: {e.error_count()} error(s).") from e
