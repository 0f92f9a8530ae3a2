"""
Stream aggregator: ordered, de-duplicated re-emission of classified chunks.
"""

import logging
from typing import Any, Iterable, Iterator, List, Optional, Set

from .events import (
    InterruptEvent,
    IntermediateStepEvent,
    ProgressEvent,
    StreamEvent,
    TextEvent,
    ToolResultEvent,
)
from .stream_classifier import ChunkClassifier

logger = logging.getLogger(__name__)


class StreamAggregator:
    """
    Consume raw chunks lazily and re-emit them as events or text segments.

    One aggregator backs one streaming session. It owns the set of message
    ids already forwarded; an event whose id is in the set is skipped, which
    also covers the same message showing up in several agent channels.
    Every interrupt in the pausing chunk is emitted; after that the remaining
    chunks are drained without output.
    """

    def __init__(
        self,
        classifier: Optional[ChunkClassifier] = None,
        separator: str = "",
        include_progress: bool = False,
        error_prefix: str = "Error: ",
        processed_ids: Optional[Iterable[str]] = None,
    ):
        self.classifier = classifier or ChunkClassifier()
        self.separator = separator
        self.include_progress = include_progress
        self.error_prefix = error_prefix
        self.processed_ids: Set[str] = set(processed_ids or ())
        self.pending_interrupts: List[InterruptEvent] = []

    @property
    def pending_interrupt(self) -> Optional[InterruptEvent]:
        """The first interrupt the last stream paused on, if any."""
        return self.pending_interrupts[0] if self.pending_interrupts else None

    def accept(self, event: StreamEvent) -> bool:
        """Return True if ``event`` should be forwarded, recording its message id."""
        if not isinstance(event, TextEvent) or event.message_id is None:
            return True
        if event.message_id in self.processed_ids:
            logger.debug("Skipping already forwarded message %s", event.message_id)
            return False
        self.processed_ids.add(event.message_id)
        return True

    def events(self, chunks: Iterable[Any]) -> Iterator[StreamEvent]:
        """Yield de-duplicated events in arrival order, stopping output at an interrupt."""
        self.pending_interrupts = []
        for chunk in chunks:
            if self.pending_interrupts:
                logger.debug("Discarding chunk received while paused")
                continue
            events = self.classifier.classify(chunk)
            interrupts = [event for event in events if isinstance(event, InterruptEvent)]
            if interrupts:
                # Parallel tool calls can each pause the run in the same chunk
                self.pending_interrupts = interrupts
                for event in interrupts:
                    yield event
                continue
            for event in events:
                if self.accept(event):
                    yield event

    def segments(self, chunks: Iterable[Any]) -> Iterator[str]:
        """Yield the text segments a client should render, in arrival order."""
        for event in self.events(chunks):
            for text in self.render(event):
                yield text

    def render(self, event: StreamEvent) -> Iterator[str]:
        """Render one event as zero or more text segments."""
        if isinstance(event, InterruptEvent):
            if event.prompt:
                yield event.prompt + self.separator
        elif isinstance(event, ToolResultEvent) and event.is_error:
            for block in event.blocks:
                if not block.startswith(self.error_prefix):
                    block = self.error_prefix + block
                yield block + self.separator
        elif isinstance(event, TextEvent):
            for block in event.blocks:
                yield block + self.separator
        elif isinstance(event, IntermediateStepEvent):
            if event.observation:
                yield event.observation + self.separator
        elif isinstance(event, ProgressEvent):
            if self.include_progress:
                yield event.text + self.separator
