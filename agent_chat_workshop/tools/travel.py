"""
Travel planning tools: weather forecast, flight search, hotels and attractions.

All results are canned. Validation failures raise ``ToolValidationError`` so
they reach the client as error tool results rather than as normal text.
"""

from typing import Annotated

from pydantic import Field

from ..core.errors import ToolValidationError
from ..core.tool_registry import ToolRegistryMixin
from .progress import report_progress, simulate_latency
from .validation import is_valid_airport, is_valid_date, is_valid_month


class TravelTools(ToolRegistryMixin):
    """Travel assistant tools with progress updates."""

    def __init__(self, latency: float = 0.0):
        """
        Args:
            latency: Seconds to sleep between progress steps, to mimic slow APIs
        """
        self.latency = latency
        ToolRegistryMixin.__init__(self)

    def _step(self, message: str, weight: float = 1.0):
        report_progress(message)
        simulate_latency(self.latency * weight)

    @ToolRegistryMixin.tool(name="weather-forecast")
    def weather_forecast(
        self,
        destination: Annotated[str, Field(description="Destination to get weather forecast for (e.g., London, UK)")],
        month: Annotated[str, Field(description="Month to get weather forecast for (e.g., January, February, etc.)")]
    ) -> str:
        """Get weather forecast for a destination in a specific month"""
        if not destination:
            raise ToolValidationError("Destination is required")
        if not is_valid_month(month):
            raise ToolValidationError("Invalid month. Please use a valid month name (e.g., January, February, etc.)")

        self._step("Fetching weather data...")
        self._step("Processing weather information...", 0.5)

        return (
            f"Weather forecast for {destination} in {month}: Sunny and warm with temperatures "
            f"around 72°F (22°C). Perfect for outdoor activities!"
        )

    @ToolRegistryMixin.tool(name="flight-locator")
    def flight_locator(
        self,
        origin: Annotated[str, Field(description="Origin airport code (e.g., JFK, LHR)")],
        destination: Annotated[str, Field(description="Destination airport code (e.g., JFK, LHR)")],
        date: Annotated[str, Field(description="Travel date in YYYY-MM-DD format")]
    ) -> str:
        """Find available flights between two airports on a specific date"""
        if not is_valid_airport(origin):
            raise ToolValidationError("Invalid origin airport code. Please use a valid IATA code (e.g., JFK, LHR)")
        if not is_valid_airport(destination):
            raise ToolValidationError("Invalid destination airport code. Please use a valid IATA code (e.g., JFK, LHR)")
        if not is_valid_date(date):
            raise ToolValidationError("Invalid date format. Please use YYYY-MM-DD format")

        self._step("Searching for available flights...", 1.5)
        self._step("Checking seat availability...")

        return (
            f"Found flights from {origin} to {destination} on {date}:\n"
            "  - Flight 1: ELAL #657, Departure 10:00 AM, Arrival 11:00 AM, Price: $500\n"
            "  - Flight 2: Delta #123, Departure 2:00 PM, Arrival 3:00 PM, Price: $600\n"
            "  - Flight 3: United #789, Departure 6:00 PM, Arrival 7:00 PM, Price: $450"
        )

    @ToolRegistryMixin.tool(name="hotel-booking")
    def hotel_search(
        self,
        arrival_date: Annotated[str, Field(description="Arrival date in YYYY-MM-DD format")]
    ) -> str:
        """Find available hotels for a specific arrival date"""
        if not is_valid_date(arrival_date):
            raise ToolValidationError("Invalid date format. Please use YYYY-MM-DD format")

        self._step("Searching for available hotels...", 1.2)
        self._step("Checking room availability...", 0.8)

        return (
            f"Available hotels for arrival on {arrival_date}:\n"
            "  - Hotel 1: Grand Hotel, $200/night, 4.5 stars, Pool & Spa\n"
            "  - Hotel 2: City Center Hotel, $150/night, 4.0 stars, Gym & Restaurant\n"
            "  - Hotel 3: Beach Resort, $300/night, 4.8 stars, Beach Access"
        )

    @ToolRegistryMixin.tool(name="attraction-recommendation")
    def attraction_recommendation(
        self,
        destination: Annotated[str, Field(description="Destination to get attraction recommendations for")]
    ) -> str:
        """Get recommendations for popular attractions in a destination"""
        if not destination:
            raise ToolValidationError("Destination is required")

        self._step("Searching for attractions...")
        self._step("Getting attraction details...", 0.5)

        return (
            f"Popular attractions in {destination}:\n"
            "  - Museum of Modern Art: World-class art collection, open 10 AM - 6 PM\n"
            "  - Central Park: Beautiful urban park, perfect for outdoor activities\n"
            "  - Empire State Building: Iconic skyscraper with observation deck\n"
            "  - Times Square: Famous entertainment and shopping district"
        )
