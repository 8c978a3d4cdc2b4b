import asyncio
import logging
from typing import Callable, Dict, List, Any, Optional

logger = logging.getLogger(__name__)

# Topics
TICK_COMPLETED = "tick_completed"
SESSION_OPENED = "session_opened"
SESSION_CLOSED = "session_closed"


class EventHub:
    def __init__(self):
        self._subscribers: Dict[str, List[Callable]] = {}
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def init(self, loop: Optional[asyncio.AbstractEventLoop]):
        self._loop = loop

    def subscribe(self, topic: str, handler: Callable):
        if topic not in self._subscribers:
            self._subscribers[topic] = []
        if handler not in self._subscribers[topic]:
            self._subscribers[topic].append(handler)
        logger.debug(f"Subscribed to {topic}")

    def unsubscribe(self, topic: str, handler: Callable):
        if topic in self._subscribers:
            if handler in self._subscribers[topic]:
                self._subscribers[topic].remove(handler)
                logger.debug(f"Unsubscribed from {topic}")

    def send_all_on_topic(self, topic: str, message: Any):
        if topic not in self._subscribers:
            return
        # Copy so handlers may unsubscribe while being called
        handlers = self._subscribers[topic][:]
        for handler in handlers:
            try:
                self._dispatch(handler, topic, message)
            except Exception as e:
                logger.error(f"Error handling message on topic {topic}: {e}")

    def _dispatch(self, handler: Callable, topic: str, message: Any):
        if self._loop is None:
            if asyncio.iscoroutinefunction(handler):
                logger.warning(f"EventHub loop not initialized. Cannot dispatch async handler for {topic}")
            else:
                handler(topic, message)
            return

        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            current_loop = None

        if current_loop is self._loop:
            if asyncio.iscoroutinefunction(handler):
                self._loop.create_task(handler(topic, message))
            else:
                handler(topic, message)
        elif asyncio.iscoroutinefunction(handler):
            asyncio.run_coroutine_threadsafe(handler(topic, message), self._loop)
        else:
            self._loop.call_soon_threadsafe(handler, topic, message)


# Global instance
event_hub = EventHub()


def init_event_hub(loop):
    """Initialize the global event hub with the given loop."""
    event_hub.init(loop)
