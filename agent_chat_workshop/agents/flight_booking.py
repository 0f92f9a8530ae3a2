"""
Step-by-step flight booking: search, look up, confirm and book.
"""

from typing import Optional

from langgraph.checkpoint.memory import InMemorySaver
from langgraph.prebuilt import create_react_agent

from ..tools.flights import FlightBookingTools, FlightStore
from .base_agent import BaseAgent


class FlightBookingAgent(BaseAgent):
    """Guides the user from a flight search to a booked ticket."""

    welcome_message = "Hi! Tell me where and when you want to fly and I will find you a flight."

    def __init__(self, store: Optional[FlightStore] = None, latency: float = 0.0, checkpointer=None, **kwargs):
        """
        Args:
            store: Flight backend for this conversation; a fresh one when omitted
            latency: Simulated latency for a fresh store
            checkpointer: LangGraph checkpointer holding the conversation memory
        """
        super().__init__(**kwargs)
        self.store = store or FlightStore(latency=latency)
        self.flight_tools = FlightBookingTools(self.store)
        self.checkpointer = checkpointer or InMemorySaver()

    def build_graph(self):
        return create_react_agent(
            self.llm,
            self.flight_tools.tools,
            prompt=self.render_prompt("flight_booking"),
            checkpointer=self.checkpointer,
            name="flight_booking_assistant",
        )

    def session_options(self):
        return {
            "stream_mode": ["updates", "custom"],
            "include_progress": True,
            "separator": "\n",
        }
