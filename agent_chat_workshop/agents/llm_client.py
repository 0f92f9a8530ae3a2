"""
Chat model construction for the agents.

Models are addressed with LiteLLM model strings (``openai/gpt-4o``,
``anthropic/claude-3-5-sonnet-latest``, ``bedrock/...``) and wrapped as
LangChain chat models so the agent runtime can bind tools to them. Request
and response logging goes through the ``ChatLogger`` protocol.
"""

import os
import time
from typing import Any, Dict, List, Optional
from uuid import UUID

from langchain_core.callbacks import BaseCallbackHandler
from langchain_core.messages import BaseMessage
from langchain_core.outputs import LLMResult
from langchain_litellm import ChatLiteLLM

from ..core.protocols import ChatLogger

DEFAULT_MODEL = os.environ.get("LITELLM_MODEL", "openai/gpt-4o-mini")
DEFAULT_TEMPERATURE = 0.0


class LLMLoggingCallback(BaseCallbackHandler):
    """Forward chat model requests and responses to a ChatLogger."""

    def __init__(self, logger: ChatLogger, model: str):
        """
        Initialize the callback.

        Args:
            logger: Logger for recording LLM interactions
            model: Model name reported with each request
        """
        self.logger = logger
        self.model = model
        self._started: Dict[UUID, float] = {}

    def on_chat_model_start(
        self,
        serialized: Dict[str, Any],
        messages: List[List[BaseMessage]],
        *,
        run_id: UUID,
        **kwargs: Any,
    ) -> None:
        self._started[run_id] = time.time()
        tools = (kwargs.get("invocation_params") or {}).get("tools")
        self.logger.log_llm_request(self.model, messages[0] if messages else [], tools)

    def on_llm_end(self, response: LLMResult, *, run_id: UUID, **kwargs: Any) -> None:
        duration = time.time() - self._started.pop(run_id, time.time())
        generations = response.generations[0] if response.generations else []
        message = getattr(generations[0], "message", None) if generations else None
        content = message.content if message is not None else ""
        tool_calls = getattr(message, "tool_calls", None)
        self.logger.log_llm_response(content if isinstance(content, str) else str(content), tool_calls, duration)

    def on_llm_error(self, error: BaseException, *, run_id: UUID, **kwargs: Any) -> None:
        self._started.pop(run_id, None)
        self.logger.log_error(f"LLM call to {self.model} failed: {error}")


def build_chat_model(
    model: str = DEFAULT_MODEL,
    temperature: float = DEFAULT_TEMPERATURE,
    logger: Optional[ChatLogger] = None,
) -> ChatLiteLLM:
    """
    Create the LangChain chat model used by the agents.

    Args:
        model: LiteLLM model string
        temperature: Sampling temperature
        logger: Optional ChatLogger that receives request/response logs

    Returns:
        A ChatLiteLLM instance; provider credentials are read from the environment
    """
    callbacks = [LLMLoggingCallback(logger, model)] if logger is not None else None
    return ChatLiteLLM(model=model, temperature=temperature, callbacks=callbacks)
