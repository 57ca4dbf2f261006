"""Change notifications for observers of inventory URIs."""
import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Tuple
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    """Rows reachable under ``uri`` may have changed."""

    uri: str


Observer = Callable[[ChangeEvent], None]


def _uri_key(uri: str) -> Tuple[str, ...]:
    parts = urlsplit(uri.strip())
    segments = tuple(s for s in parts.path.split("/") if s)
    return (parts.scheme, parts.netloc) + segments


class Subscription:
    def __init__(self, notifier: "ChangeNotifier", uri: str, observer: Observer, notify_for_descendants: bool):
        self.notifier = notifier
        self.uri = uri
        self.key = _uri_key(uri)
        self.observer = observer
        self.notify_for_descendants = notify_for_descendants

    def matches(self, changed: Tuple[str, ...]) -> bool:
        if changed == self.key:
            return True
        # Observer sits above the changed URI
        if self.notify_for_descendants and changed[: len(self.key)] == self.key:
            return True
        # Observer sits below the changed URI
        return self.key[: len(changed)] == changed

    def cancel(self) -> None:
        self.notifier.unsubscribe(self)

    def __repr__(self):
        return f"<Subscription {self.uri} descendants={self.notify_for_descendants}>"


class ChangeNotifier:
    """Registry of observers keyed by URI.

    ``notify_change`` is called by the writer after its transaction commits, so
    an observer never hears about a change before it is durable.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._subscriptions: List[Subscription] = []

    def subscribe(self, uri: str, observer: Observer, notify_for_descendants: bool = True) -> Subscription:
        if not callable(observer):
            raise TypeError("observer must be callable")
        subscription = Subscription(self, uri, observer, notify_for_descendants)
        with self._lock:
            self._subscriptions.append(subscription)
        logger.debug("observer registered for %s", uri)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

    def observers_for(self, uri: str) -> List[Subscription]:
        changed = _uri_key(uri)
        with self._lock:
            return [s for s in self._subscriptions if s.matches(changed)]

    def notify_change(self, uri: str) -> int:
        """Deliver one event for ``uri`` to every matching observer.

        Returns the number of observers that received it.
        """
        event = ChangeEvent(uri)
        delivered = 0
        for subscription in self.observers_for(uri):
            try:
                subscription.observer(event)
                delivered += 1
            except Exception:
                logger.exception("Observer for %s failed on change to %s", subscription.uri, uri)
        return delivered

    def __len__(self):
        with self._lock:
            return len(self._subscriptions)
