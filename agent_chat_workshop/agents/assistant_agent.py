"""
General assistant that streams typed events: agent text, tool results and
the progress notes tools write while they work.
"""

from typing import Iterator

from langgraph.checkpoint.memory import InMemorySaver
from langgraph.prebuilt import create_react_agent

from ..core.events import StreamEvent
from ..tools.assistant import AssistantTools
from .base_agent import BaseAgent


class AssistantAgent(BaseAgent):
    """Weather, calculator and joke assistant."""

    welcome_message = "Hi! I can check the weather, do some math or tell you a joke."

    def __init__(self, checkpointer=None, **kwargs):
        super().__init__(**kwargs)
        self.assistant_tools = AssistantTools()
        self.checkpointer = checkpointer or InMemorySaver()

    def build_graph(self):
        return create_react_agent(
            self.llm,
            self.assistant_tools.tools,
            prompt=self.render_prompt("assistant"),
            checkpointer=self.checkpointer,
            name="assistant",
        )

    def session_options(self):
        return {"stream_mode": ["updates", "custom"]}

    def events(self, prompt: str) -> Iterator[StreamEvent]:
        """Stream the reply to ``prompt`` as typed events on the current thread."""
        return self.current_session().stream_events(prompt)

    def start_reply(self, session, user_input):
        return session.stream_events(user_input)

    def resume_reply(self, session, command):
        return session.resume_events(command)

    def render_reply(self, reply):
        for event in reply:
            self.ui.display_stream_event(event)
