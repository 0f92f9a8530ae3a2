"""
Multi-step flight booking: search, look up, confirm, book.

``FlightStore`` holds the results of the last search for one conversation,
so each chat session gets its own store instead of sharing a module-level
list. Tool results are JSON documents of the models below, which the
frontends can render as cards.
"""

import logging
from typing import Annotated, List, Optional

from pydantic import BaseModel, Field

from ..core.errors import ToolValidationError
from ..core.tool_registry import ToolRegistryMixin
from .progress import report_progress, simulate_latency

logger = logging.getLogger(__name__)


class Flight(BaseModel):
    id: str
    flight_number: str
    origin: str
    destination: str
    date: str
    departure_time: str
    arrival_time: str
    price: float
    airline: str


class FlightInformation(Flight):
    available_seats: int
    booking_status: str


class BookedFlight(Flight):
    booking_ref: str
    passenger_name: str


class FlightSearchResults(BaseModel):
    flights: List[Flight]


_SCHEDULE = [
    ("AA123", "08:00 AM", "10:30 AM", 299.99, "American Airlines"),
    ("AA456", "11:00 AM", "13:30 PM", 349.99, "American Airlines"),
    ("UA789", "14:00 PM", "16:30 PM", 279.99, "United Airlines"),
    ("DL321", "17:00 PM", "19:30 PM", 399.99, "Delta Airlines"),
]


class FlightStore:
    """Mock airline backend scoped to one conversation."""

    def __init__(self, latency: float = 0.0, booking_ref: str = "JH234X"):
        self.latency = latency
        self.booking_ref = booking_ref
        self.flights: List[Flight] = []

    def search(self, origin: str, destination: str, date: str) -> List[Flight]:
        simulate_latency(self.latency * 2)
        self.flights = [
            Flight(
                id=str(index),
                flight_number=number,
                origin=origin,
                destination=destination,
                date=date,
                departure_time=departure,
                arrival_time=arrival,
                price=price,
                airline=airline,
            )
            for index, (number, departure, arrival, price, airline) in enumerate(_SCHEDULE, 1)
        ]
        logger.debug("Found %d flights from %s to %s", len(self.flights), origin, destination)
        return self.flights

    def find(self, flight_number: str) -> Optional[Flight]:
        return next((f for f in self.flights if f.flight_number == flight_number), None)

    def lookup(self, flight_number: str) -> FlightInformation:
        simulate_latency(self.latency)
        flight = self.require(flight_number)
        return FlightInformation(**flight.model_dump(), available_seats=12, booking_status="Available")

    def book(self, flight_number: str, passenger_name: str) -> BookedFlight:
        simulate_latency(self.latency)
        flight = self.require(flight_number)
        return BookedFlight(**flight.model_dump(), booking_ref=self.booking_ref, passenger_name=passenger_name)

    def confirmation(self, destination: str) -> str:
        simulate_latency(self.latency * 0.5)
        return f"Your flight to {destination} has been booked. an email has been sent to you."

    def require(self, flight_number: str) -> Flight:
        flight = self.find(flight_number)
        if flight is None:
            raise ToolValidationError(
                f"Unknown flight number {flight_number}. Search for flights first."
            )
        return flight


class FlightBookingTools(ToolRegistryMixin):
    """The four steps of the flight booking flow."""

    def __init__(self, store: Optional[FlightStore] = None):
        self.store = store or FlightStore()
        ToolRegistryMixin.__init__(self)

    @ToolRegistryMixin.tool(name="searchFlights")
    def search_flights(
        self,
        origin: Annotated[str, Field(description="The origin of the flight")],
        destination: Annotated[str, Field(description="The destination of the flight")],
        date: Annotated[str, Field(description="The date of the flight")]
    ) -> str:
        """search for flights"""
        report_progress(f"Searching for flights from {origin} to {destination} on {date}...")
        flights = self.store.search(origin, destination, date)
        return FlightSearchResults(flights=flights).model_dump_json()

    @ToolRegistryMixin.tool(name="lookupFlight")
    def lookup_flight(
        self,
        flight_number: Annotated[str, Field(description="The flight number")]
    ) -> str:
        """lookup details for a selected flight by flight number"""
        report_progress(f"Looking up flight details for {flight_number}...")
        details = self.store.lookup(flight_number)
        report_progress(f"Gathering flight details for {flight_number}...")
        return details.model_dump_json()

    @ToolRegistryMixin.tool(name="selectedFlightConfirmation")
    def selected_flight_confirmation(
        self,
        flight_number: Annotated[str, Field(description="The flight number")]
    ) -> str:
        """confirm selected flight and proceed to booking"""
        report_progress(f"Confirming booking for {flight_number} and proceed to booking...")
        self.store.require(flight_number)
        return (
            f"Flight {flight_number} selected. Ask the passenger for their full name "
            f"to complete the booking."
        )

    @ToolRegistryMixin.tool(name="bookFlight")
    def book_flight(
        self,
        flight_number: Annotated[str, Field(description="The flight number")],
        passenger_name: Annotated[str, Field(description="The passenger name")]
    ) -> str:
        """book the flight"""
        report_progress(f"Booking flight {flight_number} for {passenger_name}...")
        booked = self.store.book(flight_number, passenger_name)

        report_progress("Getting final confirmation from airline provider...")
        report_progress(self.store.confirmation(booked.destination))

        report_progress("Creating your flight ticket...")
        return booked.model_dump_json()
