"""
Travel booking assistant with human approval for every booking and payment.

Each booking tool pauses the run with an interrupt. The console and web
front ends show the pending action and resume it with an approve or edit
command; ``auto_approve`` resumes with approve immediately.
"""

from typing import Any, Dict, Iterator, Optional, Union

from langgraph.checkpoint.memory import InMemorySaver
from langgraph.prebuilt import create_react_agent

from ..core.events import ApproveCommand, EditCommand
from ..tools.booking import BookingLedger, BookingTools
from .base_agent import BaseAgent


class BookingAgent(BaseAgent):
    """Hotel, flight and payment bookings gated by human approval."""

    welcome_message = "Hi! I can book hotels and flights and process payments. I will ask before doing anything."

    def __init__(
        self,
        assistant_name: str = "TravelBot",
        ledger: Optional[BookingLedger] = None,
        auto_approve: bool = False,
        checkpointer=None,
        **kwargs
    ):
        """
        Args:
            assistant_name: Name the assistant introduces itself with
            ledger: Where approved bookings are recorded
            auto_approve: Resume every interrupt with approve without asking
            checkpointer: LangGraph checkpointer; required to resume interrupted runs
        """
        super().__init__(**kwargs)
        self.assistant_name = assistant_name
        self.ledger = ledger or BookingLedger()
        self.auto_approve = auto_approve
        self.booking_tools = BookingTools(self.ledger)
        self.checkpointer = checkpointer or InMemorySaver()

    def build_graph(self):
        return create_react_agent(
            self.llm,
            self.booking_tools.tools,
            prompt=self.render_prompt("booking_assistant", assistant_name=self.assistant_name),
            checkpointer=self.checkpointer,
            name="booking_assistant",
        )

    def session_options(self):
        return {"auto_resume": ApproveCommand() if self.auto_approve else None}

    def resume_with_command(self, command: Union[ApproveCommand, EditCommand, Dict[str, Any]]) -> Iterator[str]:
        """Resume the paused booking on the current thread and stream the rest of the reply."""
        return self.current_session().resume(command)
