"""
Streamlit implementation of ChatUserInterface and ChatLogger protocols.

This module provides Streamlit-based implementations that can be used
for web-based interfaces.
"""

import logging
import time
from typing import Any, Dict, Generator, Optional, Union

import streamlit as st
from streamlit_mermaid import st_mermaid

from ..core.events import (
    AgentTextEvent,
    ApproveCommand,
    EditCommand,
    InterruptEvent,
    IntermediateStepEvent,
    ProgressEvent,
    StreamEvent,
    SubAgentEvent,
    ToolResultEvent,
)
from ..core.protocols import ChatUserInterface, ChatLogger

logger = logging.getLogger(__name__)

MAX_LOGS = 100


class StreamlitUserInterface(ChatUserInterface):
    """Streamlit implementation of ChatUserInterface."""

    def __init__(self):
        """Initialize Streamlit interface."""
        # Conversation history survives reruns in session state
        if "messages" not in st.session_state:
            st.session_state.messages = []
        if "history" not in st.session_state:
            st.session_state.history = []

        # Message block contexts opened by begin_*_message
        if "message_contexts" not in st.session_state:
            st.session_state.message_contexts = []
        if "message_roles" not in st.session_state:
            st.session_state.message_roles = [None]
        if "current_message_role" not in st.session_state:
            st.session_state.current_message_role = None

        # Approval requested by a paused run, answered with buttons on the next rerun
        if "pending_approval" not in st.session_state:
            st.session_state.pending_approval = None

        self.wrapped_display_funcs = {}
        self.status_container = None

        self._cleanup_orphaned_contexts()

    def _save_to_history(func):
        """Decorator to additionally cache the arguments and returns of each display element into a history"""
        def wrapper(self, *args, **kwargs):
            result = func(self, *args, **kwargs)
            st.session_state.history.append({
                "function": func.__name__,
                "args": args,
                "kwargs": kwargs,
                "returns": result
            })
            if func.__name__ not in self.wrapped_display_funcs:
                self.wrapped_display_funcs[func.__name__] = func
            return result
        return wrapper

    @_save_to_history
    def display_message(self, content: str):
        """Display a message in Streamlit chat format."""
        st.session_state.messages.append({"role": st.session_state.current_message_role, "content": content})
        st.markdown(content)

    @_save_to_history
    def display_streaming_message(self, content_generator: Generator[str, None, None]) -> str:
        """Display streaming message content with live updates."""
        complete_content = ""

        message_placeholder = st.empty()

        for chunk in content_generator:
            complete_content += chunk
            message_placeholder.markdown(complete_content + "▌")  # Add cursor

        message_placeholder.markdown(complete_content)

        st.session_state.messages.append({"role": "assistant", "content": complete_content})

        return complete_content

    @_save_to_history
    def display_stream_event(self, event: StreamEvent):
        """Render one typed event; tool activity is grouped in a status container."""
        if isinstance(event, AgentTextEvent):
            self._close_status()
            st.markdown(event.text)
        elif isinstance(event, SubAgentEvent):
            self._close_status()
            st.markdown(f"**{event.agent_name}:** {event.text}")
        elif isinstance(event, ProgressEvent):
            self.update_tool_status(event.text)
        elif isinstance(event, ToolResultEvent):
            status = self._open_status(f"🔧 {event.tool_name or 'tool'}")
            if event.is_error:
                status.error(event.text)
                status.update(label=f"❌ {event.tool_name or 'tool'} failed", state="error")
            else:
                status.code(event.text)
                status.update(label=f"✅ {event.tool_name or 'tool'}", state="complete")
            self._close_status()
        elif isinstance(event, IntermediateStepEvent):
            status = self._open_status(f"🔧 {event.tool}")
            status.write(f"**Input:** {event.tool_input}")
            if event.observation:
                status.write(event.observation)
            self._close_status()
        elif isinstance(event, InterruptEvent):
            self._close_status()
            st.warning(f"⏸️  {event.prompt}")

    def _open_status(self, label: str):
        if self.status_container is None:
            self.status_container = st.status(label, expanded=False)
        return self.status_container

    def _close_status(self):
        self.status_container = None

    @_save_to_history
    def begin_user_message(self):
        """Begin a user message block."""
        self._enter_message("user")

    @_save_to_history
    def end_user_message(self):
        """End the current user message block."""
        self._exit_message()

    @_save_to_history
    def begin_assistant_message(self):
        """Begin an assistant message block."""
        self._enter_message("assistant")

    @_save_to_history
    def end_assistant_message(self):
        """End the current assistant message block."""
        self._close_status()
        self._exit_message()

    def _enter_message(self, role: str):
        context = st.chat_message(role)
        context.__enter__()
        st.session_state.message_contexts.append(context)
        st.session_state.message_roles.append(role)
        st.session_state.current_message_role = role

    def _exit_message(self):
        if st.session_state.message_contexts:
            context = st.session_state.message_contexts.pop()
            context.__exit__(None, None, None)
        if len(st.session_state.message_roles) > 1:
            st.session_state.message_roles.pop()
        st.session_state.current_message_role = st.session_state.message_roles[-1]

    def get_user_input(self, prompt: str = "You: ") -> Optional[str]:
        """Get user input from Streamlit chat input."""
        # Input arrives through st.chat_input in the frontend
        return None

    def request_resume_command(self, prompt: str) -> Optional[Union[ApproveCommand, EditCommand]]:
        """
        Record the pending approval and leave the run paused.

        Streamlit cannot block for an answer; the frontend renders approve and
        edit controls on the next rerun and resumes the session itself.
        """
        st.session_state.pending_approval = prompt
        return None

    @_save_to_history
    def display_error(self, error_message: str):
        st.error(f"❌ Error: {error_message}")

    @_save_to_history
    def display_info(self, info: str):
        st.info(f"ℹ️  {info}")

    @_save_to_history
    def display_warning(self, warning: str):
        st.warning(f"⚠️  WARNING: {warning}")

    def update_tool_status(self, status: str):
        """Update the status of a tool execution."""
        self._open_status(f"🔧 {status}").update(label=f"🔧 {status}")

    def display_mermaid_diagram(self, mermaid_content: str, title: str = "Agent Graph"):
        """Display a Mermaid diagram."""
        st.subheader(f"📊 {title}")
        st_mermaid(mermaid_content)
        st.markdown("---")

    def initialize_session(self):
        """Initialize the user interface session."""
        # Streamlit session state is automatically managed
        pass

    def cleanup_session(self):
        """Clean up the user interface session."""
        st.session_state.messages = []
        st.session_state.history = []
        st.session_state.pending_approval = None

    def display_conversation_history(self):
        self._cleanup_orphaned_contexts()

        for history_entry in st.session_state.history:
            if history_entry["function"] == "display_streaming_message":
                st.markdown(history_entry["returns"])
            else:
                func = self.wrapped_display_funcs.get(history_entry["function"])
                if func is None:
                    continue
                func(self, *history_entry["args"], **history_entry["kwargs"])
        self._close_status()

    def _cleanup_orphaned_contexts(self):
        """Close message contexts left open by an interrupted rerun."""
        while st.session_state.message_contexts:
            context = st.session_state.message_contexts.pop()
            try:
                context.__exit__(None, None, None)
            except RuntimeError as e:
                logger.debug("Message context already closed: %s", e)
        st.session_state.message_roles = [None]
        st.session_state.current_message_role = None


class StreamlitLogger(ChatLogger):
    """Streamlit implementation of ChatLogger."""

    def __init__(self, show_debug: bool = False):
        """
        Initialize Streamlit logger.

        Args:
            show_debug: Whether to show debug messages in the UI
        """
        self.show_debug = show_debug

        if "logs" not in st.session_state:
            st.session_state.logs = []

    def _add_log(self, level: str, message: str):
        """Add log entry to session state."""
        log_entry = {
            "timestamp": time.time(),
            "level": level,
            "message": message
        }
        st.session_state.logs.append(log_entry)

        # Keep only the most recent entries
        if len(st.session_state.logs) > MAX_LOGS:
            st.session_state.logs = st.session_state.logs[-MAX_LOGS:]

    def log_debug(self, message: str):
        self._add_log("DEBUG", message)
        if self.show_debug:
            st.sidebar.text(f"🔍 DEBUG: {message}")

    def log_info(self, message: str):
        self._add_log("INFO", message)
        if self.show_debug:
            st.sidebar.info(f"ℹ️ {message}")

    def log_error(self, message: str, exc_info: bool = False):
        self._add_log("ERROR", message)
        st.sidebar.error(f"❌ {message}")
        if exc_info:
            logger.exception(message)

    def log_warning(self, message: str):
        self._add_log("WARNING", message)
        if self.show_debug:
            st.sidebar.warning(f"⚠️  {message}")

    def log_function_call(self, function_name: str, arguments: Dict[str, Any]):
        message = f"CALL: {function_name}({arguments})"
        self._add_log("FUNCTION_CALL", message)
        if self.show_debug:
            st.sidebar.text(f"📞 {message}")

    def log_function_result(self, function_name: str, success: bool, duration: float, result: Dict[str, Any] = None):
        status = "SUCCESS" if success else "FAILED"
        message = f"RESULT: {function_name} - {status} ({duration:.2f}s)"
        self._add_log("FUNCTION_RESULT", message)
        if self.show_debug:
            st.sidebar.text(f"📋 {message}")

    def log_stream_event(self, event: StreamEvent):
        self._add_log("STREAM", event.kind.value)

    def log_interrupt(self, thread_id: str, prompt: str):
        message = f"PAUSED: thread {thread_id}"
        self._add_log("INTERRUPT", message)
        if self.show_debug:
            st.sidebar.text(f"⏸️  {message}")

    def log_resume(self, thread_id: str, command: Dict[str, Any]):
        message = f"RESUME: thread {thread_id} with {command}"
        self._add_log("RESUME", message)
        if self.show_debug:
            st.sidebar.text(f"▶️  {message}")

    def log_llm_request(self, model: str, messages: Any, tools: Any = None):
        """Log LLM request."""
        num_messages = len(messages) if hasattr(messages, '__len__') else 'unknown'
        num_tools = len(tools) if tools and hasattr(tools, '__len__') else 0
        message = f"LLM REQUEST: {model} - {num_messages} messages, {num_tools} tools"
        self._add_log("LLM_REQUEST", message)
        if self.show_debug:
            st.sidebar.text(f"🧠 {message}")

    def log_llm_response(self, content: str, tool_calls: Any = None, duration: float = None):
        """Log LLM response."""
        content_preview = content[:50] + "..." if content and len(content) > 50 else content or ""
        message = f"LLM RESPONSE: '{content_preview}' - tools: {bool(tool_calls)} ({duration or 0.0:.2f}s)"
        self._add_log("LLM_RESPONSE", message)
        if self.show_debug:
            st.sidebar.text(f"🧠 {message}")

    def display_logs_sidebar(self):
        """Display logs in Streamlit sidebar."""
        if st.sidebar.button("Show Logs"):
            with st.sidebar.expander("System Logs", expanded=True):
                for log in reversed(st.session_state.logs[-20:]):
                    timestamp = time.strftime("%H:%M:%S", time.localtime(log["timestamp"]))
                    st.text(f"[{timestamp}] {log['level']}: {log['message']}")
