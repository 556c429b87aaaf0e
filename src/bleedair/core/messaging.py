"""Priority message queue connecting the pneumatic network to its host.

The host simulation publishes ambient conditions, engine readings, switch
positions and APU data; the pneumatic plugin publishes telemetry and valve
transitions. Messages are queued and dispatched in batches, highest
priority first and in publication order within a priority.

Typical usage example:
    from bleedair.core.messaging import Message, MessageQueue, MessageTopic

    queue = MessageQueue()
    queue.subscribe(MessageTopic.PNEUMATIC_STATE, on_pneumatic_state)
    queue.publish(Message(
        sender="host",
        recipients=["pneumatic_plugin"],
        topic=MessageTopic.ENGINE_STATE,
        data={"engine_number": 1, "state": "STARTING"},
    ))
    queue.process()
"""

import itertools
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from queue import Empty, PriorityQueue
from typing import Any

_sequence = itertools.count()


class MessagePriority(Enum):
    """Dispatch priority. Lower values are dispatched first."""

    CRITICAL = 0
    HIGH = 1
    NORMAL = 2
    LOW = 3


@dataclass(order=True)
class Message:
    """A message exchanged through the queue.

    Attributes:
        priority: Priority value (from MessagePriority).
        sequence: Publication order, breaks priority ties.
        timestamp: Unix time of creation.
        sender: Name of the publishing component.
        recipients: Intended recipients, or ["*"] for broadcast.
        topic: Topic name, usually one of MessageTopic.
        data: Payload.
    """

    priority: int = field(compare=True)
    sequence: int = field(compare=True)
    timestamp: float = field(compare=False)
    sender: str = field(default="", compare=False)
    recipients: list[str] = field(default_factory=list, compare=False)
    topic: str = field(default="", compare=False)
    data: dict[str, Any] = field(default_factory=dict, compare=False)

    def __init__(
        self,
        sender: str,
        recipients: list[str],
        topic: str,
        data: dict[str, Any],
        priority: MessagePriority = MessagePriority.NORMAL,
    ) -> None:
        self.priority = priority.value
        self.sequence = next(_sequence)
        self.timestamp = time.time()
        self.sender = sender
        self.recipients = recipients
        self.topic = topic
        self.data = data


class MessageTopic:
    """Well-known topic names."""

    # Environment: ambient_pressure (Pa), ambient_temperature (K), mach
    AMBIENT_CONDITIONS = "env.ambient_conditions"

    # Engines: engine_number plus corrected_n1/corrected_n2, or state
    ENGINE_SPEEDS = "system.engine.speeds"
    ENGINE_STATE = "system.engine.state"
    ENGINE_FIRE_PUSH_BUTTON = "system.engine.fire_push_button"

    # APU: bleed_air_pressure (Pa), bleed_valve_open
    APU_BLEED_STATE = "system.apu.bleed_state"

    # Overhead panel host variables (name -> numeric value)
    OVERHEAD_INPUT = "cockpit.overhead.input"

    # Pneumatic outputs
    PNEUMATIC_STATE = "system.pneumatic.state"
    PNEUMATIC_VALVE_CHANGED = "system.pneumatic.valve_changed"


class MessageQueue:
    """Topic-based message queue.

    Examples:
        >>> queue = MessageQueue()
        >>> queue.subscribe(MessageTopic.PNEUMATIC_STATE, print_state)
        >>> queue.publish(Message("pneumatic_plugin", ["*"], MessageTopic.PNEUMATIC_STATE, {}))
        >>> queue.process()
        1
    """

    def __init__(self) -> None:
        self._queue: PriorityQueue[Message] = PriorityQueue()
        self._subscriptions: dict[str, list[Callable[[Message], None]]] = {}

    def subscribe(self, topic: str, handler: Callable[[Message], None]) -> None:
        """Call handler for every message on topic dispatched by process()."""
        self._subscriptions.setdefault(topic, []).append(handler)

    def unsubscribe(self, topic: str, handler: Callable[[Message], None]) -> None:
        """Remove a handler. Unknown handlers are ignored."""
        if topic not in self._subscriptions:
            return

        self._subscriptions[topic] = [h for h in self._subscriptions[topic] if h != handler]
        if not self._subscriptions[topic]:
            del self._subscriptions[topic]

    def publish(self, message: Message) -> None:
        """Queue a message for the next process() call."""
        self._queue.put(message)

    def process(self, max_messages: int = 100) -> int:
        """Dispatch queued messages.

        Args:
            max_messages: Upper bound on messages dispatched in this call, so
                handlers that publish cannot starve the caller.

        Returns:
            Number of messages dispatched.
        """
        processed = 0
        while processed < max_messages:
            try:
                message = self._queue.get_nowait()
            except Empty:
                break
            for handler in list(self._subscriptions.get(message.topic, [])):
                handler(message)
            processed += 1

        return processed

    def clear(self) -> None:
        """Drop pending messages and all subscriptions."""
        while True:
            try:
                self._queue.get_nowait()
            except Empty:
                break
        self._subscriptions.clear()

    def pending_count(self) -> int:
        return self._queue.qsize()

    def get_subscriber_count(self, topic: str) -> int:
        return len(self._subscriptions.get(topic, []))
