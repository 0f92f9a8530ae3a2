"""
Tests for the mock tool layer and the tool registry.
"""

from unittest.mock import patch

import pytest
from langchain_core.runnables import RunnableLambda

from agent_chat_workshop.core.errors import ToolValidationError
from agent_chat_workshop.core.tool import function_to_args_schema, make_tool
from agent_chat_workshop.core.tool_registry import ToolRegistry
from agent_chat_workshop.tools import (
    AssistantTools,
    AttractionDeskTools,
    BookingLedger,
    BookingTools,
    FlightBookingTools,
    FlightDeskTools,
    FlightStore,
    HotelDeskTools,
    MovieCatalog,
    MovieTools,
    TravelTools,
)
from agent_chat_workshop.tools.assistant import evaluate_arithmetic
from agent_chat_workshop.tools.booking import apply_resume, approval_prompt
from agent_chat_workshop.tools.progress import report_progress
from agent_chat_workshop.tools.validation import (
    is_valid_airport,
    is_valid_currency,
    is_valid_date,
    is_valid_month,
    is_valid_time,
)


# --- Validation ---

def test_date_validation():
    assert is_valid_date("2025-06-01")
    assert not is_valid_date("2025-02-30")
    assert not is_valid_date("06/01/2025")
    assert not is_valid_date("")


def test_code_validation():
    assert is_valid_airport("JFK")
    assert not is_valid_airport("jfk")
    assert not is_valid_airport("JFKX")
    assert is_valid_currency("USD")
    assert not is_valid_currency("US")


def test_month_and_time_validation():
    assert is_valid_month("March")
    assert not is_valid_month("Marchember")
    assert is_valid_time("09:30")
    assert is_valid_time("23:59")
    assert not is_valid_time("24:00")


# --- Registry ---

def test_mixin_registers_tools_in_definition_order():
    tools = AssistantTools()

    assert tools.tool_registry.list_tools() == ["getWeather", "calculator", "tellJoke"]


def test_tool_schemas_carry_field_descriptions():
    [schema] = [s for s in AssistantTools().tool_schemas if s["function"]["name"] == "getWeather"]

    assert schema["function"]["description"] == "Get weather for a given city."
    assert schema["function"]["parameters"]["properties"]["city"]["description"] == "The city to get the weather for"
    assert schema["function"]["parameters"]["required"] == ["city"]


def test_optional_parameters_are_not_required():
    schema = function_to_args_schema(FlightDeskTools().book_flight).model_json_schema()

    assert set(schema["required"]) == {"from_airport", "to_airport"}


def test_registry_add_tool_and_lookup():
    registry = ToolRegistry()

    @registry.add_tool("shout")
    def shout(text: str) -> str:
        """Upper-case the text."""
        return text.upper()

    assert registry.invoke("shout", {"text": "hi"}) == "HI"
    with pytest.raises(KeyError):
        registry.get_tool("whisper")


def test_make_tool_requires_docstring_and_annotations():
    def undocumented(x: int) -> int:
        return x

    def unannotated(x):
        """Has a docstring."""
        return x

    with pytest.raises(ValueError, match="docstring"):
        make_tool(undocumented)
    with pytest.raises(ValueError, match="annotation"):
        make_tool(unannotated)


# --- Progress ---

def test_report_progress_outside_a_run_is_a_no_op():
    assert report_progress("Searching...") is None


def test_report_progress_inside_a_plain_runnable():
    # A runnable config without the graph runtime, as when a tool is invoked directly
    step = RunnableLambda(lambda message: report_progress(message))

    assert step.invoke("Searching...") is None


# --- Assistant tools ---

def test_calculator():
    tools = AssistantTools()

    assert tools.invoke_tool("calculator", {"expression": "2 + 3 * 4"}) == "The result of 2 + 3 * 4 is 14"
    assert tools.invoke_tool("getWeather", {"city": "Paris"}) == "The weather in Paris is sunny and 72°F!"


def test_calculator_errors_become_tool_output():
    result = AssistantTools().invoke_tool("calculator", {"expression": "__import__('os')"})

    assert result.startswith("Error calculating __import__('os')")


@pytest.mark.parametrize("expression", ["1/0", "2 ** 1000", "x + 1", "'a' * 3"])
def test_evaluate_arithmetic_rejects(expression):
    with pytest.raises(ValueError):
        evaluate_arithmetic(expression)


def test_evaluate_arithmetic():
    assert evaluate_arithmetic("-(3 + 4) // 2") == -4
    assert evaluate_arithmetic("7 % 3 + 0.5") == 1.5


# --- Movie tools ---

def test_movie_info():
    tools = MovieTools()

    info = tools.invoke_tool("getMovieInfo", {"title": "Inception"})

    assert info.startswith("Movie: Inception\nGenre: Sci-Fi\nRating: 4.8/5\nYear: 2010")
    assert tools.invoke_tool("getMovieInfo", {"title": "Cats"}) == "Sorry, I don't have information about Cats"


def test_movie_recommendations_and_actors():
    tools = MovieTools()

    assert tools.invoke_tool("getMovieRecommendations", {"genre": "Drama"}) == (
        "Recommended Drama movies:\nThe Godfather\nShawshank Redemption\nForrest Gump"
    )
    assert tools.invoke_tool("getMovieRecommendations", {"genre": "Horror"}) == (
        "Recommended Horror movies:\nNo recommendations found"
    )
    assert "Awards: Academy Award, Golden Globe" in tools.invoke_tool("getActorInfo", {"name": "Leonardo DiCaprio"})


def test_movie_catalog_is_per_instance():
    empty = MovieTools(MovieCatalog(movies={}))

    assert empty.invoke_tool("getMovieInfo", {"title": "Inception"}).startswith("Sorry")
    assert MovieTools().invoke_tool("getMovieInfo", {"title": "Inception"}).startswith("Movie:")


# --- Travel tools ---

def test_travel_validation_errors():
    tools = TravelTools()

    assert tools.invoke_tool("weather-forecast", {"destination": "Rome", "month": "Smarch"}).startswith("Invalid month")
    assert "YYYY-MM-DD" in tools.invoke_tool("flight-locator", {"origin": "JFK", "destination": "LHR", "date": "tomorrow"})


def test_travel_weather_forecast():
    result = TravelTools().invoke_tool("weather-forecast", {"destination": "Rome", "month": "May"})

    assert result.startswith("Weather forecast for Rome in May")


# --- Booking tools ---

def test_approval_prompt():
    prompt = approval_prompt("book hotel", {"hotel_name": "Grand Hotel", "dates": "2025-06-01"})

    assert prompt.startswith("Trying to book hotel with args: {")
    assert "'hotel_name': Grand Hotel" in prompt
    assert prompt.endswith("}. Please approve or suggest edits.")


def test_apply_resume():
    fields = {"hotel_name": "Grand Hotel", "room_type": "double"}

    assert apply_resume({"type": "approve"}, fields) == fields
    assert apply_resume({"type": "edit", "args": {"room_type": "suite", "hotel_name": ""}}, fields) == {
        "hotel_name": "Grand Hotel",
        "room_type": "suite",
    }
    with pytest.raises(ToolValidationError, match="Unknown response type: cancel"):
        apply_resume({"type": "cancel"}, fields)


def test_booking_is_recorded_after_approval():
    ledger = BookingLedger()
    tools = BookingTools(ledger)

    with patch("agent_chat_workshop.tools.booking.interrupt", return_value={"type": "edit", "args": {"room_type": "suite"}}) as ask:
        result = tools.invoke_tool("bookHotel", {"hotel_name": "Grand Hotel", "dates": "2025-06-01", "room_type": "double"})

    assert result == "Successfully booked a suite room at Grand Hotel for 2025-06-01."
    assert ledger.records == [{"kind": "hotel", "hotel_name": "Grand Hotel", "dates": "2025-06-01", "room_type": "suite"}]
    assert ask.call_args.args[0].startswith("Trying to book hotel")


def test_invalid_booking_never_asks_for_approval():
    tools = BookingTools()

    with patch("agent_chat_workshop.tools.booking.interrupt") as ask:
        flight = tools.invoke_tool("bookFlight", {"origin": "NYC1", "destination": "LAX", "dates": "2025-06-01"})
        payment = tools.invoke_tool("processPayment", {"amount": -5, "currency": "USD", "payment_method": "card"})

    assert flight == "Invalid airport code. Use 3-letter IATA code"
    assert payment == "Amount must be greater than 0"
    ask.assert_not_called()
    assert tools.ledger.records == []


# --- Specialist desks ---

def test_specialist_desks_share_a_ledger():
    ledger = BookingLedger()

    FlightDeskTools(ledger).invoke_tool("book_flight", {"from_airport": "BOS", "to_airport": "JFK", "date": "2025-06-01"})
    HotelDeskTools(ledger).invoke_tool("book_hotel", {"hotel_name": "McKittrick Hotel"})
    AttractionDeskTools(ledger).invoke_tool(
        "book_attraction", {"attraction_name": "Louvre", "date": "2025-06-02", "time": "10:00"}
    )

    assert [r["kind"] for r in ledger.records] == ["flight", "hotel", "attraction"]


def test_flight_desk_date_requirement():
    with_date = FlightDeskTools().invoke_tool("book_flight", {"from_airport": "BOS", "to_airport": "JFK"})
    without_date = FlightDeskTools(require_date=False).invoke_tool("book_flight", {"from_airport": "BOS", "to_airport": "JFK"})

    assert with_date.startswith("Flight booking failed: Invalid date format")
    assert without_date.strip() == "Successfully booked a flight from BOS to JFK."


def test_hotel_checkout_must_follow_checkin():
    result = HotelDeskTools().invoke_tool(
        "book_hotel", {"hotel_name": "Ritz", "check_in": "2025-06-05", "check_out": "2025-06-01"}
    )

    assert result == "Hotel booking failed: Check-out must be after check-in"


# --- Flight booking flow ---

def test_flight_booking_flow():
    store = FlightStore()
    tools = FlightBookingTools(store)

    results = tools.invoke_tool("searchFlights", {"origin": "SFO", "destination": "JFK", "date": "2025-06-01"})
    details = tools.invoke_tool("lookupFlight", {"flight_number": "UA789"})
    booked = tools.invoke_tool("bookFlight", {"flight_number": "UA789", "passenger_name": "Ada Lovelace"})

    assert '"flight_number":"AA123"' in results
    assert '"available_seats":12' in details
    assert '"booking_ref":"JH234X"' in booked
    assert '"passenger_name":"Ada Lovelace"' in booked


def test_unknown_flight_number():
    tools = FlightBookingTools()

    result = tools.invoke_tool("selectedFlightConfirmation", {"flight_number": "ZZ999"})

    assert result == "Unknown flight number ZZ999. Search for flights first."
