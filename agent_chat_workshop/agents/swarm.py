"""
Swarm of flight and hotel assistants that hand the conversation to each other.

Unlike the supervisor team there is no coordinator: the active agent keeps
the conversation until it calls a handoff tool. The flight assistant starts.
"""

from typing import Optional

from langgraph.checkpoint.memory import InMemorySaver
from langgraph.prebuilt import create_react_agent
from langgraph_swarm import create_handoff_tool, create_swarm

from ..core.stream_classifier import ChunkClassifier
from ..tools.booking import BookingLedger
from ..tools.specialists import FlightDeskTools, HotelDeskTools
from .base_agent import BaseAgent

DEFAULT_ACTIVE_AGENT = "flight_assistant"
SWARM_AGENTS = ("flight_assistant", "hotel_assistant")


class TravelSwarm(BaseAgent):
    """Flight and hotel assistants with handoffs."""

    welcome_message = "Hi! I can book your flight, and hand you over to our hotel desk when you need a room."

    def __init__(self, ledger: Optional[BookingLedger] = None, checkpointer=None, **kwargs):
        super().__init__(**kwargs)
        self.ledger = ledger or BookingLedger()
        self.checkpointer = checkpointer or InMemorySaver()
        self.flight_tools = FlightDeskTools(self.ledger, require_date=False)
        self.hotel_tools = HotelDeskTools(self.ledger)

    def build_graph(self):
        to_hotel = create_handoff_tool(
            agent_name="hotel_assistant",
            description="Transfer user to the hotel booking assistant",
        )
        to_flight = create_handoff_tool(
            agent_name="flight_assistant",
            description="Transfer user to the flight booking assistant",
        )

        flight_assistant = create_react_agent(
            self.llm,
            self.flight_tools.tools + [to_hotel],
            prompt=self.render_prompt("flight_assistant", handoff=to_hotel.name),
            name="flight_assistant",
        )
        hotel_assistant = create_react_agent(
            self.llm,
            self.hotel_tools.tools + [to_flight],
            prompt=self.render_prompt("hotel_assistant", handoff=to_flight.name),
            name="hotel_assistant",
        )

        workflow = create_swarm(
            [flight_assistant, hotel_assistant],
            default_active_agent=DEFAULT_ACTIVE_AGENT,
        )
        return workflow.compile(checkpointer=self.checkpointer)

    def session_options(self):
        return {
            "classifier": ChunkClassifier(agent_channel=None, tools_channel=None, sub_agents=SWARM_AGENTS),
            "separator": "\n",
        }
