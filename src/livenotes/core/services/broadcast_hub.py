"""
Live fan-out of note snapshots.

The hub is a publish/subscribe registry. The note store calls ``publish``
after every mutation; each subscriber keeps only the newest snapshot it has
not sent yet and a per-connection task delivers it. Publishing therefore
never waits on a socket, and a slow or dead subscriber cannot hold up the
others.
"""

import asyncio
import threading
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ..logging import get_logger
from ..models.note import Snapshot
from ..repositories.note_store import NoteStore
from .access_controller import ConnectionIdentity

logger = get_logger("broadcast")

SendFn = Callable[[Dict[str, Any]], Awaitable[None]]

HEARTBEAT_EVENT = {"type": "heartbeat"}


class Subscriber:
    """One live connection entitled to receive snapshots.

    State lives on the event loop that accepted the connection; offers coming
    from other threads are handed over with ``call_soon_threadsafe``.
    """

    def __init__(
        self,
        connection_id: str,
        identity: ConnectionIdentity,
        send: SendFn,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.connection_id = connection_id
        self.identity = identity
        self._send = send
        self._loop = loop or asyncio.get_running_loop()
        self._wakeup = asyncio.Event()
        self._pending: Optional[Snapshot] = None
        self._offered_version = -1
        self.delivered_version = -1
        self.closed = False

    def offer(self, snapshot: Snapshot) -> None:
        """Queue ``snapshot`` for delivery unless a newer one is already queued."""
        if self.closed:
            return
        self._on_loop(self._accept, snapshot)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self._on_loop(self._wakeup.set)
        except RuntimeError:
            # owning loop already closed; no delivery task is left to wake
            logger.debug("Closed subscriber on a stopped loop", extra={"connection_id": self.connection_id})

    async def run(self, heartbeat_interval: Optional[float] = None) -> None:
        """Deliver pending snapshots until closed; send failures propagate."""
        while not self.closed:
            try:
                await asyncio.wait_for(self._wakeup.wait(), timeout=heartbeat_interval)
            except asyncio.TimeoutError:
                # idle: probe the connection so a silently dropped peer surfaces
                await self._send(HEARTBEAT_EVENT)
                continue

            self._wakeup.clear()
            snapshot, self._pending = self._pending, None
            if snapshot is not None and not self.closed:
                await self._send(snapshot.to_event())
                self.delivered_version = snapshot.version

    def _accept(self, snapshot: Snapshot) -> None:
        if self.closed or snapshot.version <= self._offered_version:
            return
        self._offered_version = snapshot.version
        self._pending = snapshot
        self._wakeup.set()

    def _on_loop(self, callback, *args) -> None:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is self._loop:
            callback(*args)
        else:
            self._loop.call_soon_threadsafe(callback, *args)


class BroadcastHub:
    """Registry of live subscribers fed from the note store."""

    def __init__(self, store: NoteStore, heartbeat_interval: Optional[float] = 30.0):
        self.store = store
        self.heartbeat_interval = heartbeat_interval
        self._lock = threading.Lock()
        self._subscribers: Dict[str, Subscriber] = {}
        store.add_listener(self.publish)

    def connect(
        self, connection_id: str, identity: ConnectionIdentity, send: SendFn
    ) -> Subscriber:
        """Register a subscriber and offer it the current snapshot."""
        subscriber = Subscriber(connection_id, identity, send)
        with self._lock:
            self._subscribers[connection_id] = subscriber

        subscriber.offer(self.store.snapshot())
        logger.info(
            "Subscriber connected",
            extra={"connection_id": connection_id, "identity": identity.label},
        )
        return subscriber

    def disconnect(self, connection_id: str) -> None:
        with self._lock:
            subscriber = self._subscribers.pop(connection_id, None)
        if subscriber is None:
            return
        subscriber.close()
        logger.info("Subscriber disconnected", extra={"connection_id": connection_id})

    def publish(self, snapshot: Snapshot) -> None:
        """Offer ``snapshot`` to every subscriber; failures only drop that subscriber."""
        for subscriber in self.subscribers():
            try:
                subscriber.offer(snapshot)
            except Exception as e:
                logger.warning(
                    "Dropping subscriber after failed offer",
                    extra={"connection_id": subscriber.connection_id, "error": str(e)},
                )
                self._discard(subscriber)

    async def serve(self, subscriber: Subscriber) -> None:
        """Run ``subscriber``'s delivery loop; remove it when delivery fails."""
        try:
            await subscriber.run(self.heartbeat_interval)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(
                "Delivery to subscriber failed",
                extra={"connection_id": subscriber.connection_id, "error": str(e)},
            )
        finally:
            self._discard(subscriber)

    def subscribers(self) -> List[Subscriber]:
        with self._lock:
            return list(self._subscribers.values())

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def _discard(self, subscriber: Subscriber) -> None:
        with self._lock:
            if self._subscribers.get(subscriber.connection_id) is subscriber:
                del self._subscribers[subscriber.connection_id]
        subscriber.close()
