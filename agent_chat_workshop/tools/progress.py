"""
Progress reporting from inside tools.

Tools write short status lines to LangGraph's custom stream so a frontend
streaming with ``stream_mode=["updates", "custom"]`` can show them while the
tool is still running.
"""

import logging
import time

from langgraph.config import get_stream_writer

logger = logging.getLogger(__name__)


def report_progress(message: str) -> None:
    """Send ``message`` to the custom stream of the current run, if there is one."""
    try:
        writer = get_stream_writer()
    except (RuntimeError, KeyError):
        # Called outside a graph run, e.g. a tool invoked directly; a plain
        # runnable config without the pregel runtime raises KeyError
        logger.debug("No active run for progress update: %s", message)
        return
    writer(message)


def simulate_latency(seconds: float) -> None:
    """Sleep to mimic a slow upstream API; a zero delay returns immediately."""
    if seconds > 0:
        time.sleep(seconds)
