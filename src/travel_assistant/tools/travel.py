"""Canned travel tools: flight schedule, hotel options and currency conversion.

Each handler is a pure function over a validated argument model and returns
a plain dict ready to be serialized as tool content.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from travel_assistant.tools.errors import UnsupportedCurrencyPairError

# Rates keyed by "{from}_{to}"; no reverse rates are derived
CURRENCY_RATES: dict[str, float] = {"USD_NGN": 925}


class FlightScheduleArgs(BaseModel):
    """Arguments for get_flight_schedule."""

    origin: str
    destination: str

    model_config = ConfigDict(extra="ignore")


class HotelScheduleArgs(BaseModel):
    """Arguments for get_hotel_schedule."""

    city: str

    model_config = ConfigDict(extra="ignore")


class ConvertCurrencyArgs(BaseModel):
    """Arguments for convert_currency."""

    amount: float
    from_currency: str
    to_currency: str

    model_config = ConfigDict(extra="ignore")


def get_flight_schedule(origin: str, destination: str) -> dict[str, Any]:
    """Return flight duration and USD price for a route."""
    return {
        "origin": origin,
        "destination": destination,
        "flight_time_hours": 5.5,
        "price_usd": 920,
    }


def get_hotel_schedule(city: str) -> dict[str, Any]:
    """Return hotel options for a city."""
    return {
        "city": city,
        "hotels": [
            {"name": "Nairobi Serena", "price_usd": 250},
            {"name": "Radisson Blu", "price_usd": 200},
        ],
    }


def convert_currency(
    amount: float, from_currency: str, to_currency: str
) -> dict[str, Any]:
    """Convert an amount using the fixed rate table.

    Raises:
        UnsupportedCurrencyPairError: If no rate exists for the pair
    """
    pair = f"{from_currency}_{to_currency}"
    rate = CURRENCY_RATES.get(pair)
    if rate is None:
        raise UnsupportedCurrencyPairError(
            f"No conversion rate for {from_currency} to {to_currency}",
            details={
                "from_currency": from_currency,
                "to_currency": to_currency,
                "supported_pairs": sorted(CURRENCY_RATES),
            },
        )

    converted = float(amount) * rate
    return {
        "amount_converted": int(converted) if converted.is_integer() else converted,
        "currency": to_currency,
    }


TOOL_DEFINITIONS: list[dict[str, Any]] = [
    {
        "type": "function",
        "function": {
            "name": "get_flight_schedule",
            "description": "Returns flight duration and USD price",
            "parameters": {
                "type": "object",
                "properties": {
                    "origin": {"type": "string"},
                    "destination": {"type": "string"},
                },
                "required": ["origin", "destination"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "get_hotel_schedule",
            "description": "Get hotel options for a city",
            "parameters": {
                "type": "object",
                "properties": {
                    "city": {"type": "string"},
                },
                "required": ["city"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "convert_currency",
            "description": "Convert currencies",
            "parameters": {
                "type": "object",
                "properties": {
                    "amount": {"type": "number"},
                    "from_currency": {"type": "string"},
                    "to_currency": {"type": "string"},
                },
                "required": ["amount", "from_currency", "to_currency"],
            },
        },
    },
]
