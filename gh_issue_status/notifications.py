"""Publish/subscribe hub for user-facing warnings and errors."""

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

WARNING = "warning"
ERROR = "error"


@dataclass(frozen=True, eq=False)
class Subscription:
    """Handle returned by PubSubHub.sub, used to unsubscribe."""

    topic: str
    callback: Callable[..., Any]
    once: bool = False


class PubSubHub:
    """Fire-and-forget message bus keyed by topic."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Subscription]] = defaultdict(list)

    def sub(
        self, topic: str, callback: Callable[..., Any], once: bool = False
    ) -> Subscription:
        """Register callback for topic.

        Args:
            topic: Topic name, e.g. "warning" or "error"
            callback: Called with the published data
            once: Remove the subscription after its first delivery

        Returns:
            Subscription handle for unsub()
        """
        subscription = Subscription(topic=topic, callback=callback, once=once)
        self._subscribers[topic].append(subscription)
        return subscription

    def unsub(self, subscription: Subscription) -> bool:
        """Remove a subscription. Returns False if it was not registered."""
        subscribers = self._subscribers.get(subscription.topic, [])
        if subscription not in subscribers:
            return False
        subscribers.remove(subscription)
        return True

    def pub(self, topic: str, *data: Any) -> None:
        """Deliver data to every subscriber of topic, in subscription order."""
        logger.debug("pub %s: %s", topic, data)
        for subscription in list(self._subscribers.get(topic, [])):
            if subscription.once:
                self.unsub(subscription)
            try:
                subscription.callback(*data)
            except Exception:
                logger.exception("Subscriber for '%s' failed", topic)


hub = PubSubHub()


def pub(topic: str, *data: Any) -> None:
    """Publish on the process-wide hub."""
    hub.pub(topic, *data)


def sub(topic: str, callback: Callable[..., Any], once: bool = False) -> Subscription:
    """Subscribe on the process-wide hub."""
    return hub.sub(topic, callback, once=once)
