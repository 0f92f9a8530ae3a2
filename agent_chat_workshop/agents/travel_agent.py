"""
Travel planning assistant with memory and streamed progress notes.
"""

from langgraph.checkpoint.memory import InMemorySaver
from langgraph.prebuilt import create_react_agent

from ..tools.travel import TravelTools
from .base_agent import BaseAgent


class TravelAgent(BaseAgent):
    """Weather, flights, hotels and attractions for a trip."""

    welcome_message = "Hi! Where would you like to travel? I can check the weather, find flights and hotels, and suggest attractions."

    def __init__(self, latency: float = 0.0, checkpointer=None, **kwargs):
        """
        Args:
            latency: Simulated backend latency in seconds for each tool step
            checkpointer: LangGraph checkpointer holding the conversation memory
        """
        super().__init__(**kwargs)
        self.travel_tools = TravelTools(latency=latency)
        self.checkpointer = checkpointer or InMemorySaver()

    def build_graph(self):
        return create_react_agent(
            self.llm,
            self.travel_tools.tools,
            prompt=self.render_prompt("travel_assistant"),
            checkpointer=self.checkpointer,
            name="travel_assistant",
        )

    def session_options(self):
        return {
            "stream_mode": ["updates", "custom"],
            "include_progress": True,
            "separator": "\n",
        }
