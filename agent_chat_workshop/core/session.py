"""
Interrupt/resume bridge around a compiled agent graph.

An ``AgentSession`` drives one conversation thread. Each call to ``stream``
or ``resume`` is a streaming session with its own aggregator; the thread's
memory lives in the graph's checkpointer.
"""

import uuid
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Set, Union

from langgraph.types import Command

from .aggregator import StreamAggregator
from .errors import AgentChatError, SessionBusyError, StreamError
from .events import ApproveCommand, EditCommand, InterruptEvent, StreamEvent, parse_resume_command
from .protocols import ChatLogger
from .python_logger import PythonLogger
from .stream_classifier import ChunkClassifier, read_field
from .tool_logging import ToolCallLogger


class SessionState(str, Enum):
    RUNNING = "running"
    PAUSED = "paused"


class AgentSession:
    """
    Stream a compiled graph as text segments or typed events.

    When the run emits an interrupt the session moves to ``PAUSED`` and stops
    producing output. With ``auto_resume`` set, it immediately re-invokes the
    graph with that command and keeps streaming; otherwise the caller resumes
    later through ``resume``.
    """

    def __init__(
        self,
        graph: Any,
        thread_id: Optional[str] = None,
        classifier: Optional[ChunkClassifier] = None,
        separator: str = "",
        auto_resume: Optional[Union[ApproveCommand, EditCommand, Dict[str, Any]]] = None,
        stream_mode: Union[str, List[str]] = "updates",
        include_progress: bool = False,
        configurable: Optional[Dict[str, Any]] = None,
        logger: Optional[ChatLogger] = None,
    ):
        """
        Args:
            graph: Compiled LangGraph graph (anything with ``stream``)
            thread_id: Conversation thread id; generated when omitted
            classifier: Chunk classifier matching the graph's node names
            separator: Text appended to every emitted segment
            auto_resume: Command sent automatically whenever the run pauses
            stream_mode: LangGraph stream mode(s); add ``"custom"`` for tool progress
            include_progress: Render progress updates in the text stream
            configurable: Extra ``configurable`` values sent with every run
            logger: ChatLogger for session events
        """
        self.graph = graph
        self.thread_id = thread_id or uuid.uuid4().hex
        self.classifier = classifier or ChunkClassifier()
        self.separator = separator
        self.auto_resume = parse_resume_command(auto_resume) if auto_resume is not None else None
        self.stream_mode = stream_mode
        self.include_progress = include_progress
        self.configurable = dict(configurable or {})
        self.logger = logger or PythonLogger()

        self.state = SessionState.RUNNING
        self.pending_interrupts: List[InterruptEvent] = []
        self._active = False

    @property
    def pending_interrupt(self) -> Optional[InterruptEvent]:
        return self.pending_interrupts[0] if self.pending_interrupts else None

    @property
    def pending_prompt(self) -> str:
        """Prompts of every pending interrupt, one per line."""
        return "\n".join(event.prompt for event in self.pending_interrupts if event.prompt)

    @property
    def config(self) -> Dict[str, Any]:
        return {"configurable": {"thread_id": self.thread_id, **self.configurable}}

    def run_config(self) -> Dict[str, Any]:
        """The config passed to each graph run: thread, configurable values and tool logging."""
        return {**self.config, "callbacks": [ToolCallLogger(self.logger)]}

    @property
    def is_paused(self) -> bool:
        return self.state == SessionState.PAUSED

    def stream(self, prompt: str, system_prompt: Optional[str] = None) -> Iterator[str]:
        """Send a user prompt and yield the response text segments."""
        return self._drive(self._build_input(prompt, system_prompt), typed=False)

    def stream_events(self, prompt: str, system_prompt: Optional[str] = None) -> Iterator[StreamEvent]:
        """Send a user prompt and yield typed events instead of text."""
        return self._drive(self._build_input(prompt, system_prompt), typed=True)

    def resume(self, command: Union[ApproveCommand, EditCommand, Dict[str, Any]]) -> Iterator[str]:
        """Continue a paused run with ``command`` and yield the text segments."""
        return self._drive(self._resume_input(command), typed=False)

    def resume_events(self, command: Union[ApproveCommand, EditCommand, Dict[str, Any]]) -> Iterator[StreamEvent]:
        return self._drive(self._resume_input(command), typed=True)

    def _build_input(self, prompt: str, system_prompt: Optional[str]) -> Dict[str, Any]:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        return {"messages": messages}

    def _resume_input(self, command) -> Command:
        command = parse_resume_command(command)
        if not self.is_paused:
            # The pause may have happened in another process; the checkpointer decides
            self.logger.log_warning(f"Resuming thread {self.thread_id} which is not paused locally")
        payload = command.model_dump()
        self.logger.log_resume(self.thread_id, payload)
        interrupt_ids = [event.interrupt_id for event in self.pending_interrupts]
        if len(interrupt_ids) > 1 and all(interrupt_ids):
            # LangGraph needs one value per interrupt id when several are pending
            return Command(resume={interrupt_id: payload for interrupt_id in interrupt_ids})
        return Command(resume=payload)

    def _history_ids(self) -> Set[str]:
        """Ids of messages already stored for this thread."""
        if getattr(self.graph, "checkpointer", None) is None:
            return set()
        snapshot = self.graph.get_state(self.config)
        values = snapshot.values if snapshot is not None else None
        messages = values.get("messages", []) if isinstance(values, dict) else []
        return {msg_id for msg_id in (read_field(m, "id") for m in messages) if msg_id}

    def _drive(self, graph_input: Any, typed: bool) -> Iterator[Any]:
        if self._active:
            raise SessionBusyError(f"Thread {self.thread_id} is already streaming")
        self._active = True
        try:
            aggregator = StreamAggregator(
                classifier=self.classifier,
                separator=self.separator,
                include_progress=self.include_progress,
                processed_ids=self._history_ids(),
            )
            while graph_input is not None:
                self.state = SessionState.RUNNING
                self.pending_interrupts = []
                chunks = self.graph.stream(graph_input, self.run_config(), stream_mode=self.stream_mode)
                graph_input = None

                for event in aggregator.events(chunks):
                    self.logger.log_stream_event(event)
                    if typed:
                        yield event
                    else:
                        for segment in aggregator.render(event):
                            yield segment

                if aggregator.pending_interrupts:
                    self._pause(aggregator.pending_interrupts)
                    if self.auto_resume is not None:
                        graph_input = self._resume_input(self.auto_resume)
        except AgentChatError:
            raise
        except Exception as e:
            self.logger.log_error(f"Streaming error on thread {self.thread_id}: {e}", exc_info=True)
            raise StreamError(f"Agent run failed: {e}", thread_id=self.thread_id) from e
        finally:
            self._active = False

    def _pause(self, events: List[InterruptEvent]):
        self.state = SessionState.PAUSED
        self.pending_interrupts = list(events)
        for event in events:
            self.logger.log_interrupt(self.thread_id, event.prompt)
