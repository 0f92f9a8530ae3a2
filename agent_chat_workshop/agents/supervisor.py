"""
Supervisor team: a coordinating agent routes requests to flight, hotel and
attraction specialists.

Every agent in the team appears as its own channel in the stream; the
session merges them in a fixed order and separates messages with newlines.
"""

from typing import Optional

from langgraph.checkpoint.memory import InMemorySaver
from langgraph.prebuilt import create_react_agent
from langgraph_supervisor import create_supervisor

from ..core.stream_classifier import ChunkClassifier
from ..tools.booking import BookingLedger
from ..tools.specialists import AttractionDeskTools, FlightDeskTools, HotelDeskTools
from .base_agent import BaseAgent

SUPERVISOR_NAME = "supervisor"
SPECIALISTS = ("flight_assistant", "hotel_assistant", "attraction_assistant")


class SupervisorTeam(BaseAgent):
    """Travel desk managed by a supervisor agent."""

    welcome_message = "Hi! Our travel desk can book flights, hotels and attractions for you."

    def __init__(self, ledger: Optional[BookingLedger] = None, checkpointer=None, **kwargs):
        super().__init__(**kwargs)
        self.ledger = ledger or BookingLedger()
        self.checkpointer = checkpointer or InMemorySaver()
        self.toolsets = {
            "flight_assistant": FlightDeskTools(self.ledger),
            "hotel_assistant": HotelDeskTools(self.ledger),
            "attraction_assistant": AttractionDeskTools(self.ledger),
        }

    def build_specialist(self, name: str):
        return create_react_agent(
            self.llm,
            self.toolsets[name].tools,
            prompt=self.render_prompt(name, handoff=None),
            name=name,
        )

    def build_graph(self):
        workflow = create_supervisor(
            [self.build_specialist(name) for name in SPECIALISTS],
            model=self.llm,
            prompt=self.render_prompt("supervisor", specialists=[name.split("_")[0] for name in SPECIALISTS]),
            supervisor_name=SUPERVISOR_NAME,
        )
        return workflow.compile(checkpointer=self.checkpointer)

    def session_options(self):
        return {
            "classifier": ChunkClassifier(
                agent_channel=None,
                sub_agents=(SUPERVISOR_NAME,) + SPECIALISTS,
            ),
            "separator": "\n",
        }
