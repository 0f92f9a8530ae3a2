"""
Booking tools used by the supervisor team and the swarm.

Each specialist agent gets one of these toolsets. Bookings are simulated and
recorded in the shared ``BookingLedger`` handed in by the caller.
"""

from typing import Annotated, Optional

from pydantic import Field

from ..core.errors import ToolValidationError
from ..core.tool_registry import ToolRegistryMixin
from .booking import BookingLedger
from .validation import is_valid_airport, is_valid_date, is_valid_time


class FlightDeskTools(ToolRegistryMixin):
    def __init__(self, ledger: Optional[BookingLedger] = None, require_date: bool = True):
        """
        Args:
            ledger: Where confirmed bookings are recorded
            require_date: Ask for a travel date (the supervisor flow) or only airports (the swarm)
        """
        self.ledger = ledger or BookingLedger()
        self.require_date = require_date
        ToolRegistryMixin.__init__(self)

    @ToolRegistryMixin.tool
    def book_flight(
        self,
        from_airport: Annotated[str, Field(description="The departure airport code (e.g., JFK)")],
        to_airport: Annotated[str, Field(description="The arrival airport code (e.g., LAX)")],
        date: Annotated[Optional[str], Field(description="The flight date in YYYY-MM-DD format")] = None
    ) -> str:
        """Book a flight between two airports on a specific date"""
        if not is_valid_airport(from_airport):
            raise ToolValidationError(f"Flight booking failed: Invalid departure airport code: {from_airport}")
        if not is_valid_airport(to_airport):
            raise ToolValidationError(f"Flight booking failed: Invalid arrival airport code: {to_airport}")
        if self.require_date and not is_valid_date(date or ""):
            raise ToolValidationError(f"Flight booking failed: Invalid date format: {date}")

        self.ledger.record("flight", {"from_airport": from_airport, "to_airport": to_airport, "date": date})
        when = f" on {date}" if date else ""
        return f"\nSuccessfully booked a flight from {from_airport} to {to_airport}{when}.\n"


class HotelDeskTools(ToolRegistryMixin):
    def __init__(self, ledger: Optional[BookingLedger] = None):
        self.ledger = ledger or BookingLedger()
        ToolRegistryMixin.__init__(self)

    @ToolRegistryMixin.tool
    def book_hotel(
        self,
        hotel_name: Annotated[str, Field(description="The name of the hotel to book")],
        check_in: Annotated[Optional[str], Field(description="Check-in date in YYYY-MM-DD format")] = None,
        check_out: Annotated[Optional[str], Field(description="Check-out date in YYYY-MM-DD format")] = None
    ) -> str:
        """Book a hotel stay"""
        if check_in is not None and not is_valid_date(check_in):
            raise ToolValidationError(f"Hotel booking failed: Invalid check-in date: {check_in}")
        if check_out is not None and not is_valid_date(check_out):
            raise ToolValidationError(f"Hotel booking failed: Invalid check-out date: {check_out}")
        if check_in and check_out and check_out <= check_in:
            raise ToolValidationError("Hotel booking failed: Check-out must be after check-in")

        self.ledger.record("hotel", {"hotel_name": hotel_name, "check_in": check_in, "check_out": check_out})
        if check_in and check_out:
            return f"\nSuccessfully booked a stay at {hotel_name} from {check_in} to {check_out}.\n"
        return f"\nSuccessfully booked a stay at {hotel_name}.\n"


class AttractionDeskTools(ToolRegistryMixin):
    def __init__(self, ledger: Optional[BookingLedger] = None):
        self.ledger = ledger or BookingLedger()
        ToolRegistryMixin.__init__(self)

    @ToolRegistryMixin.tool
    def book_attraction(
        self,
        attraction_name: Annotated[str, Field(description="The name of the attraction to book")],
        date: Annotated[str, Field(description="The date in YYYY-MM-DD format")],
        time: Annotated[str, Field(description="The time in HH:MM format")]
    ) -> str:
        """Book a tourist attraction"""
        if not is_valid_date(date):
            raise ToolValidationError(f"Attraction booking failed: Invalid date: {date}")
        if not is_valid_time(time):
            raise ToolValidationError(f"Attraction booking failed: Invalid time format: {time}")

        self.ledger.record("attraction", {"attraction_name": attraction_name, "date": date, "time": time})
        return f"\nSuccessfully booked {attraction_name} for {date} at {time}.\n"
