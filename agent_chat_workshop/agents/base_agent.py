#!/usr/bin/env python3
"""
BaseAgent - Common functionality for all demo agents.

Provides the shared initialization (chat model, UI, logger), prompt template
loading, session management and the console/web conversation loop.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Template

from ..core.errors import AgentChatError
from ..core.protocols import ChatUserInterface, ChatLogger
from ..core.python_logger import PythonLogger
from ..core.session import AgentSession
from .llm_client import DEFAULT_MODEL, DEFAULT_TEMPERATURE, build_chat_model

APOLOGY = "Sorry, there was an error processing your request."

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"


class BaseAgent:
    """
    Common functionality for all agents.

    Subclasses build their compiled graph in ``build_graph`` and describe how
    its stream should be read in ``session_options``. Everything else (the
    conversation loop, pausing for approval, graph diagrams) is shared.
    """

    welcome_message = "Hi! How can I help you today?"
    goodbye_message = "Goodbye!"

    def __init__(
        self,
        ui: Optional[ChatUserInterface] = None,
        logger: Optional[ChatLogger] = None,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        llm: Any = None
    ):
        """
        Initialize the base agent.

        Args:
            ui: ChatUserInterface used by the conversation loop
            logger: ChatLogger for protocol-based logging (stdlib logging when omitted)
            model: LiteLLM model string
            temperature: Temperature for LLM responses
            llm: Pre-built LangChain chat model; overrides ``model`` and ``temperature``
        """
        self.ui = ui
        self.logger = logger or PythonLogger()
        self.model = model
        self.temperature = temperature

        # Initialize chat model with shared configuration
        self.llm = llm if llm is not None else build_chat_model(model, temperature, self.logger)

        self.is_running = False
        self._graph = None
        self.session: Optional[AgentSession] = None

        self.logger.log_info(f"Initialized {self.__class__.__name__} with model: {model}")

    @staticmethod
    def load_template(name: str) -> Template:
        """Load a prompt Jinja template from the templates directory."""
        template_path = TEMPLATE_DIR / f"{name}.jinja"
        with open(template_path, 'r') as f:
            template_content = f.read()
        return Template(template_content)

    def render_prompt(self, name: str, **variables) -> str:
        return self.load_template(name).render(**variables)

    def build_graph(self):
        """Build and compile the agent graph."""
        raise NotImplementedError

    @property
    def graph(self):
        if self._graph is None:
            self._graph = self.build_graph()
        return self._graph

    def session_options(self) -> Dict[str, Any]:
        """Keyword arguments for ``AgentSession`` matching this agent's graph."""
        return {}

    def new_session(self, thread_id: Optional[str] = None, **overrides) -> AgentSession:
        """Start a new conversation thread; it becomes the agent's current session."""
        options = {**self.session_options(), **overrides}
        self.session = AgentSession(self.graph, thread_id=thread_id, logger=self.logger, **options)
        self.logger.log_info(f"Started thread {self.session.thread_id}")
        return self.session

    def current_session(self) -> AgentSession:
        return self.session or self.new_session()

    def stream(self, prompt: str):
        """Stream the reply to ``prompt`` as text segments on the current thread."""
        return self.current_session().stream(prompt)

    def mermaid(self) -> str:
        """Mermaid source of the compiled graph."""
        return self.graph.get_graph().draw_mermaid()

    def start_conversation(self):
        """Start the main conversation loop."""
        self.is_running = True
        self.logger.log_info("Starting chat conversation")

        self.ui.display_message(self.welcome_message)

        while self.is_running:
            user_input = self.ui.get_user_input()

            if user_input is None or user_input.strip().lower() in ['quit', 'exit', 'bye']:
                self.stop_conversation()
                break

            if not user_input.strip():
                continue

            self.process_user_message(user_input)

    def process_user_message(self, user_input: str):
        """Send one user message and render the reply, pausing for approval when asked."""
        self.logger.log_info(f"Processing user message: {user_input}")

        self.ui.begin_user_message()
        self.ui.display_message(user_input)
        self.ui.end_user_message()

        session = self.current_session()
        self.ui.begin_assistant_message()
        try:
            self.render_reply(self.start_reply(session, user_input))
            self.handle_pause(session)
        except AgentChatError as e:
            self.logger.log_error(f"Failed to process message: {e}")
            self.ui.display_error(APOLOGY)
        finally:
            self.ui.end_assistant_message()

    def start_reply(self, session: AgentSession, user_input: str):
        return session.stream(user_input)

    def resume_reply(self, session: AgentSession, command):
        return session.resume(command)

    def render_reply(self, reply):
        self.ui.display_streaming_message(reply)

    def handle_pause(self, session: AgentSession):
        """Ask the human for resume commands until the run stops pausing."""
        while session.is_paused:
            command = self.ui.request_resume_command(session.pending_prompt)
            if command is None:
                self.ui.display_info("The action is still waiting for your approval.")
                return
            self.render_reply(self.resume_reply(session, command))

    def continue_paused(self, command):
        """Resume the current paused run with ``command`` and render the rest of the reply."""
        session = self.current_session()
        self.ui.begin_assistant_message()
        try:
            self.render_reply(self.resume_reply(session, command))
            self.handle_pause(session)
        except AgentChatError as e:
            self.logger.log_error(f"Failed to resume: {e}")
            self.ui.display_error(APOLOGY)
        finally:
            self.ui.end_assistant_message()

    def stop_conversation(self):
        """Stop the conversation loop."""
        self.is_running = False
        self.logger.log_info("Stopping chat conversation")
        self.ui.display_message(self.goodbye_message)
