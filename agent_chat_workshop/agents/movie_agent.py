"""
Movie assistants answering with a full message list instead of a stream.

Three variants share the same catalog tools:

- ``MovieAgent``: fixed system prompt, movie info only.
- ``MovieExpertAgent``: the system prompt is rendered per call from the
  ``preference`` passed in the run configuration.
- ``MovieMemoryAgent``: keeps the conversation per user id in a checkpointer.
"""

from typing import Any, Dict, List, Optional

from langchain_core.runnables import RunnableConfig
from langgraph.checkpoint.memory import InMemorySaver
from langgraph.prebuilt import create_react_agent

from ..core.events import ChatMessage
from ..core.stream_classifier import read_field, text_blocks
from ..tools.movies import MovieCatalog, MovieTools
from .base_agent import APOLOGY, BaseAgent

DEFAULT_PREFERENCE = "general"

_ROLES = {"human": "user", "user": "user", "ai": "assistant", "assistant": "assistant"}


def to_chat_messages(messages: List[Any]) -> List[ChatMessage]:
    """Convert graph state messages to chat turns, skipping tool traffic and empty replies."""
    chat = []
    for message in messages:
        role = _ROLES.get(read_field(message, "type") or read_field(message, "role"))
        text = "".join(text_blocks(read_field(message, "content")))
        if role is None or not text:
            continue
        kwargs = {"id": read_field(message, "id")} if read_field(message, "id") else {}
        chat.append(ChatMessage(role=role, content=text, **kwargs))
    return chat


class MovieAgent(BaseAgent):
    """Movie information assistant answering one question at a time."""

    template_name = "movie_assistant"
    tool_names = ("getMovieInfo",)

    def __init__(self, catalog: Optional[MovieCatalog] = None, **kwargs):
        super().__init__(**kwargs)
        self.movie_tools = MovieTools(catalog)

    def selected_tools(self):
        return [tool for tool in self.movie_tools.tools if tool.name in self.tool_names]

    def build_graph(self):
        return create_react_agent(
            self.llm,
            self.selected_tools(),
            prompt=self.render_prompt(self.template_name),
            name="movie_assistant",
        )

    def run_config(self, **options) -> Optional[Dict[str, Any]]:
        return None

    def ask(self, prompt: str, **options) -> List[ChatMessage]:
        """
        Ask a question and return the resulting conversation.

        On any failure the reply is a single apology message, so callers can
        always render the result.
        """
        self.logger.log_info(f"{self.__class__.__name__} received: {prompt}")
        try:
            result = self.graph.invoke(
                {"messages": [{"role": "user", "content": prompt}]},
                self.run_config(**options),
            )
        except Exception as e:
            self.logger.log_error(f"Movie agent failed: {e}", exc_info=True)
            return [ChatMessage(role="assistant", content=APOLOGY)]
        return to_chat_messages(result.get("messages", []))

    def process_user_message(self, user_input: str):
        self.ui.begin_user_message()
        self.ui.display_message(user_input)
        self.ui.end_user_message()

        replies = [m for m in self.ask(user_input) if m.role == "assistant"]
        self.ui.begin_assistant_message()
        if replies:
            self.ui.display_message(replies[-1].content)
        self.ui.end_assistant_message()


class MovieExpertAgent(MovieAgent):
    """Movie expert whose focus follows the caller's stated preference."""

    template_name = "movie_expert"
    tool_names = ("getMovieInfo", "getMovieRecommendations")

    def __init__(self, preference: str = DEFAULT_PREFERENCE, **kwargs):
        super().__init__(**kwargs)
        self.preference = preference

    def system_prompt(self, state, config: RunnableConfig) -> List[Any]:
        preference = config.get("configurable", {}).get("preference", DEFAULT_PREFERENCE)
        system = {"role": "system", "content": self.render_prompt(self.template_name, preference=preference)}
        return [system] + list(state["messages"])

    def build_graph(self):
        return create_react_agent(
            self.llm,
            self.selected_tools(),
            prompt=self.system_prompt,
            name="movie_expert",
        )

    def run_config(self, preference: Optional[str] = None, **options) -> Dict[str, Any]:
        return {"configurable": {"preference": preference or self.preference}}


class MovieMemoryAgent(MovieAgent):
    """Movie assistant that remembers each user's conversation."""

    tool_names = ("getMovieInfo", "getMovieRecommendations", "getActorInfo")

    def __init__(self, user_id: str = "default", checkpointer=None, **kwargs):
        super().__init__(**kwargs)
        self.user_id = user_id
        self.checkpointer = checkpointer or InMemorySaver()

    def build_graph(self):
        return create_react_agent(
            self.llm,
            self.selected_tools(),
            prompt=self.render_prompt(self.template_name),
            checkpointer=self.checkpointer,
            name="movie_memory_assistant",
        )

    def run_config(self, user_id: Optional[str] = None, **options) -> Dict[str, Any]:
        return {"configurable": {"thread_id": user_id or self.user_id}}
