"""
ChatLogger implementation that forwards to the standard ``logging`` module.

Used whenever an agent or session is created without a frontend logger.
"""

import logging
from typing import Any, Dict

from .events import StreamEvent
from .protocols import ChatLogger


class PythonLogger(ChatLogger):
    """ChatLogger backed by a stdlib logger."""

    def __init__(self, name: str = "agent_chat_workshop"):
        self.logger = logging.getLogger(name)

    def log_debug(self, message: str):
        self.logger.debug(message)

    def log_info(self, message: str):
        self.logger.info(message)

    def log_warning(self, message: str):
        self.logger.warning(message)

    def log_error(self, message: str, exc_info: bool = False):
        self.logger.error(message, exc_info=exc_info)

    def log_function_call(self, function_name: str, arguments: Dict[str, Any]):
        self.logger.debug("CALL: %s(%s)", function_name, arguments)

    def log_function_result(self, function_name: str, success: bool, duration: float, result: Dict[str, Any] = None):
        status = "SUCCESS" if success else "FAILED"
        self.logger.debug("RESULT: %s - %s (%.2fs)", function_name, status, duration)

    def log_stream_event(self, event: StreamEvent):
        self.logger.debug("STREAM: %s", event.kind.value)

    def log_interrupt(self, thread_id: str, prompt: str):
        self.logger.info("Thread %s paused: %s", thread_id, prompt)

    def log_resume(self, thread_id: str, command: Dict[str, Any]):
        self.logger.info("Thread %s resumed with %s", thread_id, command)

    def log_llm_request(self, model: str, messages: Any, tools: Any = None):
        num_messages = len(messages) if hasattr(messages, '__len__') else 'unknown'
        num_tools = len(tools) if tools and hasattr(tools, '__len__') else 0
        self.logger.debug("LLM REQUEST: %s - %s messages, %d tools", model, num_messages, num_tools)

    def log_llm_response(self, content: str, tool_calls: Any = None, duration: float = None):
        content_preview = content[:50] + "..." if content and len(content) > 50 else content or ""
        self.logger.debug("LLM RESPONSE: '%s' - tools: %s (%.2fs)", content_preview, bool(tool_calls), duration or 0.0)
