"""Unit tests for the travel tools and the tool registry."""

import json

import pytest

from travel_assistant.conversation.types import ToolCall
from travel_assistant.tools import (
    TOOL_DEFINITIONS,
    MalformedArgumentsError,
    ToolKind,
    ToolRegistry,
    ToolSpec,
    UnknownToolError,
    UnsupportedCurrencyPairError,
    convert_currency,
    decode_arguments,
    get_flight_schedule,
    get_hotel_schedule,
)
from travel_assistant.tools.travel import HotelScheduleArgs


class TestTravelTools:
    """Tests for the canned tool handlers."""

    def test_flight_schedule_shape(self):
        """Test the canned flight schedule for Lagos to Nairobi."""
        assert get_flight_schedule("Lagos", "Nairobi") == {
            "origin": "Lagos",
            "destination": "Nairobi",
            "flight_time_hours": 5.5,
            "price_usd": 920,
        }

    def test_hotel_schedule_keeps_order(self):
        """Test the hotel list is returned in a fixed order."""
        result = get_hotel_schedule("Nairobi")

        assert result["city"] == "Nairobi"
        assert [h["name"] for h in result["hotels"]] == ["Nairobi Serena", "Radisson Blu"]
        assert [h["price_usd"] for h in result["hotels"]] == [250, 200]

    def test_convert_usd_to_ngn(self):
        """Test the supported conversion."""
        assert convert_currency(100, "USD", "NGN") == {
            "amount_converted": 92500,
            "currency": "NGN",
        }

    def test_convert_fractional_amount(self):
        """Test that non-integral results keep their fraction."""
        result = convert_currency(0.5, "USD", "NGN")

        assert result["amount_converted"] == 462.5

    def test_convert_reverse_pair_unsupported(self):
        """Test that no reverse rate is derived."""
        with pytest.raises(UnsupportedCurrencyPairError) as exc_info:
            convert_currency(100, "NGN", "USD")

        assert exc_info.value.code == "unsupported_currency_pair"
        assert exc_info.value.details["supported_pairs"] == ["USD_NGN"]

    def test_definitions_match_handlers(self):
        """Test that every advertised tool has a registered handler."""
        names = [d["function"]["name"] for d in TOOL_DEFINITIONS]

        assert names == ["get_flight_schedule", "get_hotel_schedule", "convert_currency"]
        assert all(d["type"] == "function" for d in TOOL_DEFINITIONS)
        assert TOOL_DEFINITIONS[2]["function"]["parameters"]["required"] == [
            "amount",
            "from_currency",
            "to_currency",
        ]


class TestToolKind:
    """Tests for resolving tool names to the closed tool variant."""

    def test_known_names(self):
        assert ToolKind.from_name("get_flight_schedule") is ToolKind.FLIGHT_SCHEDULE
        assert ToolKind.from_name("get_hotel_schedule") is ToolKind.HOTEL_SCHEDULE
        assert ToolKind.from_name("convert_currency") is ToolKind.CONVERT_CURRENCY

    def test_unknown_names(self):
        assert ToolKind.from_name("nonexistent_tool") is ToolKind.UNKNOWN
        assert ToolKind.from_name("unknown") is ToolKind.UNKNOWN
        assert ToolKind.from_name("") is ToolKind.UNKNOWN


class TestDecodeArguments:
    """Tests for decoding serialized argument payloads."""

    def test_decode_object(self):
        assert decode_arguments('{"city": "Nairobi"}') == {"city": "Nairobi"}

    def test_decode_empty_payload(self):
        assert decode_arguments("") == {}
        assert decode_arguments(None) == {}

    def test_decode_invalid_json(self):
        with pytest.raises(MalformedArgumentsError, match="not valid JSON"):
            decode_arguments("{city: Nairobi")

    def test_decode_non_object(self):
        with pytest.raises(MalformedArgumentsError, match="JSON object"):
            decode_arguments('["Nairobi"]')


class TestRegistryExecute:
    """Tests for ToolRegistry.execute, which raises tool errors."""

    def test_execute_known_tool(self):
        registry = ToolRegistry()

        result = registry.execute(
            "convert_currency",
            '{"amount": 100, "from_currency": "USD", "to_currency": "NGN"}',
        )

        assert result == {"amount_converted": 92500, "currency": "NGN"}

    def test_execute_unknown_tool(self):
        registry = ToolRegistry()

        with pytest.raises(UnknownToolError) as exc_info:
            registry.execute("nonexistent_tool", "{}")

        assert exc_info.value.details["available_tools"] == [
            "get_flight_schedule",
            "get_hotel_schedule",
            "convert_currency",
        ]

    def test_execute_missing_argument(self):
        registry = ToolRegistry()

        with pytest.raises(MalformedArgumentsError) as exc_info:
            registry.execute("get_flight_schedule", '{"origin": "Lagos"}')

        fields = [err["field"] for err in exc_info.value.details["errors"]]
        assert fields == ["destination"]

    def test_execute_ill_typed_argument(self):
        registry = ToolRegistry()

        with pytest.raises(MalformedArgumentsError):
            registry.execute(
                "convert_currency",
                '{"amount": "lots", "from_currency": "USD", "to_currency": "NGN"}',
            )

    def test_execute_ignores_extra_arguments(self):
        registry = ToolRegistry()

        result = registry.execute("get_hotel_schedule", '{"city": "Nairobi", "nights": 3}')

        assert result["city"] == "Nairobi"

    def test_unknown_kind_cannot_be_registered(self):
        with pytest.raises(ValueError):
            ToolRegistry(
                tools={ToolKind.UNKNOWN: ToolSpec(HotelScheduleArgs, get_hotel_schedule)}
            )


class TestRegistryDispatch:
    """Tests for ToolRegistry.dispatch, which never raises tool errors."""

    def test_dispatch_success(self):
        registry = ToolRegistry()
        call = ToolCall(id="call_1", name="get_hotel_schedule", arguments='{"city": "Nairobi"}')

        result = registry.dispatch(call)

        assert result.success is True
        assert result.error_code is None
        assert result.tool_call_id == "call_1"
        assert json.loads(result.content)["city"] == "Nairobi"

    def test_dispatch_unknown_tool(self):
        registry = ToolRegistry()
        call = ToolCall(id="call_2", name="nonexistent_tool", arguments="{}")

        result = registry.dispatch(call)

        assert result.success is False
        assert result.error_code == "unknown_tool"
        payload = json.loads(result.content)
        assert payload["error"]["code"] == "unknown_tool"
        assert "nonexistent_tool" in payload["error"]["message"]

    def test_dispatch_malformed_arguments(self):
        registry = ToolRegistry()
        call = ToolCall(id="call_3", name="get_hotel_schedule", arguments="not json")

        result = registry.dispatch(call)

        assert result.success is False
        assert result.error_code == "malformed_arguments"

    def test_dispatch_unsupported_pair(self):
        registry = ToolRegistry()
        call = ToolCall(
            id="call_4",
            name="convert_currency",
            arguments='{"amount": 100, "from_currency": "NGN", "to_currency": "USD"}',
        )

        result = registry.dispatch(call)

        assert result.success is False
        assert result.error_code == "unsupported_currency_pair"

    def test_dispatch_handler_crash(self):
        """Test that an unexpected handler exception becomes a failed result."""

        def broken(city):
            raise RuntimeError("database offline")

        registry = ToolRegistry(
            tools={ToolKind.HOTEL_SCHEDULE: ToolSpec(HotelScheduleArgs, broken)}
        )
        call = ToolCall(id="call_5", name="get_hotel_schedule", arguments='{"city": "Nairobi"}')

        result = registry.dispatch(call)

        assert result.success is False
        assert result.error_code == "tool_execution_error"
        assert "database offline" in json.loads(result.content)["error"]["message"]

    def test_result_to_message(self):
        registry = ToolRegistry()
        call = ToolCall(id="call_6", name="get_hotel_schedule", arguments='{"city": "Nairobi"}')

        message = registry.dispatch(call).to_message()

        assert message.role == "tool"
        assert message.tool_call_id == "call_6"
        assert message.tool_name == "get_hotel_schedule"
