"""
Callback that reports tool executions to a ChatLogger.

Attached to every run a session starts, so tool calls made anywhere in the
graph (including sub-agents) show up as function call/result log entries.
"""

import time
from typing import Any, Dict, Optional
from uuid import UUID

from langchain_core.callbacks import BaseCallbackHandler
from langgraph.errors import GraphBubbleUp

from .protocols import ChatLogger


class ToolCallLogger(BaseCallbackHandler):
    """Log the start, duration and outcome of each tool call."""

    def __init__(self, logger: ChatLogger):
        self.logger = logger
        self._running: Dict[UUID, tuple] = {}

    def on_tool_start(
        self,
        serialized: Dict[str, Any],
        input_str: str,
        *,
        run_id: UUID,
        inputs: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ) -> None:
        name = (serialized or {}).get("name") or kwargs.get("name") or "tool"
        self._running[run_id] = (name, time.time())
        self.logger.log_function_call(name, inputs if inputs is not None else {"input": input_str})

    def on_tool_end(self, output: Any, *, run_id: UUID, **kwargs: Any) -> None:
        name, started = self._running.pop(run_id, ("tool", time.time()))
        # Handled tool errors end normally with an error-status message
        success = getattr(output, "status", "success") != "error"
        self.logger.log_function_result(name, success, time.time() - started, {"output": str(getattr(output, "content", output))})

    def on_tool_error(self, error: BaseException, *, run_id: UUID, **kwargs: Any) -> None:
        name, started = self._running.pop(run_id, ("tool", time.time()))
        if isinstance(error, GraphBubbleUp):
            self.logger.log_debug(f"{name} paused the run")
            return
        self.logger.log_function_result(name, False, time.time() - started, {"error": str(error)})
