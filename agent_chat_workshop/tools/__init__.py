"""
Tool layer - mock-data tools exposed to the agents.

Every toolset is a ``ToolRegistryMixin`` subclass whose data lives in an
injected store, so each agent or session can own its own state.
"""

from .assistant import AssistantTools
from .booking import BookingLedger, BookingTools
from .flights import FlightBookingTools, FlightStore
from .movies import MovieCatalog, MovieTools
from .specialists import AttractionDeskTools, FlightDeskTools, HotelDeskTools
from .travel import TravelTools

__all__ = [
    'AssistantTools',
    'AttractionDeskTools',
    'BookingLedger',
    'BookingTools',
    'FlightBookingTools',
    'FlightDeskTools',
    'FlightStore',
    'HotelDeskTools',
    'MovieCatalog',
    'MovieTools',
    'TravelTools',
]
