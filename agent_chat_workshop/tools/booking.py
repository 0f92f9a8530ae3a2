"""
Booking tools that pause for human approval before acting.

Each tool validates its input, then calls LangGraph's ``interrupt`` with a
description of the pending action. The run resumes with an approve or edit
command; edits replace individual arguments.
"""

import logging
from typing import Annotated, Any, Dict, List

from langgraph.types import interrupt
from pydantic import Field

from ..core.errors import ToolValidationError, UnknownResumeCommandError
from ..core.events import EditCommand, parse_resume_command
from ..core.tool_registry import ToolRegistryMixin
from .validation import is_valid_airport, is_valid_currency, is_valid_date

logger = logging.getLogger(__name__)


def approval_prompt(action: str, fields: Dict[str, Any]) -> str:
    """Describe a pending action the way the approver sees it."""
    args = ",\n".join(f"  '{key}': {value}" for key, value in fields.items())
    return f"Trying to {action} with args: {{\n{args}\n}}. Please approve or suggest edits."


def apply_resume(response: Any, fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge a resume payload into the proposed arguments.

    Approve keeps ``fields`` unchanged; edit overrides every key it provides
    with a non-empty value.

    Raises:
        ToolValidationError: If the payload is not a known command
    """
    try:
        command = parse_resume_command(response)
    except UnknownResumeCommandError as e:
        raise ToolValidationError(str(e)) from e

    if isinstance(command, EditCommand):
        return {key: command.args.get(key) or value for key, value in fields.items()}
    return dict(fields)


class BookingLedger:
    """Records the bookings and payments that were approved."""

    def __init__(self):
        self.records: List[Dict[str, Any]] = []

    def record(self, kind: str, details: Dict[str, Any]):
        entry = {"kind": kind, **details}
        self.records.append(entry)
        logger.info("Recorded %s: %s", kind, details)
        return entry


class BookingTools(ToolRegistryMixin):
    """Hotel, flight and payment tools gated by human approval."""

    def __init__(self, ledger: BookingLedger = None):
        self.ledger = ledger or BookingLedger()
        ToolRegistryMixin.__init__(self)

    def _approve(self, action: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        response = interrupt(approval_prompt(action, fields))
        return apply_resume(response, fields)

    @ToolRegistryMixin.tool(name="bookHotel")
    def book_hotel(
        self,
        hotel_name: Annotated[str, Field(description="Name of the hotel to book")],
        dates: Annotated[str, Field(description="Check-in date in YYYY-MM-DD format")],
        room_type: Annotated[str, Field(description="Type of room to book")]
    ) -> str:
        """Book a hotel room with human approval."""
        if not hotel_name or not dates or not room_type:
            raise ToolValidationError("Missing required fields")
        if not is_valid_date(dates):
            raise ToolValidationError("Invalid date format. Use YYYY-MM-DD")

        booking = self._approve("book hotel", {
            "hotel_name": hotel_name,
            "dates": dates,
            "room_type": room_type,
        })
        self.ledger.record("hotel", booking)
        return (
            f"Successfully booked a {booking['room_type']} room at "
            f"{booking['hotel_name']} for {booking['dates']}."
        )

    @ToolRegistryMixin.tool(name="bookFlight")
    def book_flight(
        self,
        origin: Annotated[str, Field(description="Origin airport code (IATA)")],
        destination: Annotated[str, Field(description="Destination airport code (IATA)")],
        dates: Annotated[str, Field(description="Flight date in YYYY-MM-DD format")]
    ) -> str:
        """Book a flight with human approval."""
        if not origin or not destination or not dates:
            raise ToolValidationError("Missing required fields")
        if not is_valid_airport(origin) or not is_valid_airport(destination):
            raise ToolValidationError("Invalid airport code. Use 3-letter IATA code")
        if not is_valid_date(dates):
            raise ToolValidationError("Invalid date format. Use YYYY-MM-DD")

        booking = self._approve("book flight", {
            "origin": origin,
            "destination": destination,
            "dates": dates,
        })
        self.ledger.record("flight", booking)
        return (
            f"Successfully booked flight from {booking['origin']} to "
            f"{booking['destination']} for {booking['dates']}."
        )

    @ToolRegistryMixin.tool(name="processPayment")
    def process_payment(
        self,
        amount: Annotated[float, Field(description="Payment amount")],
        currency: Annotated[str, Field(description="Currency code (ISO)")],
        payment_method: Annotated[str, Field(description="Payment method")]
    ) -> str:
        """Process a payment with human approval."""
        if not amount or not currency or not payment_method:
            raise ToolValidationError("Missing required fields")
        if amount <= 0:
            raise ToolValidationError("Amount must be greater than 0")
        if not is_valid_currency(currency):
            raise ToolValidationError("Invalid currency code. Use 3-letter ISO code")

        payment = self._approve("process payment", {
            "amount": amount,
            "currency": currency,
            "payment_method": payment_method,
        })
        self.ledger.record("payment", payment)
        return (
            f"Successfully processed payment of {payment['amount']} {payment['currency']} "
            f"using {payment['payment_method']}."
        )
