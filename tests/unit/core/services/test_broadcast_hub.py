"""Unit tests for the broadcast hub."""

import asyncio
import threading

import pytest

from livenotes.core.repositories.note_store import NoteStore
from livenotes.core.services.access_controller import ConnectionIdentity
from livenotes.core.services.broadcast_hub import HEARTBEAT_EVENT, BroadcastHub


class RecordingSocket:
    """Collects sent events; can be told to fail or stall."""

    def __init__(self, fail: bool = False):
        self.events = []
        self.fail = fail
        self.received = asyncio.Event()
        self.gate = None

    async def send(self, event):
        if self.gate is not None:
            await self.gate.wait()
        if self.fail:
            raise ConnectionResetError("peer gone")
        self.events.append(event)
        self.received.set()

    async def next_event(self, timeout: float = 1.0):
        await asyncio.wait_for(self.received.wait(), timeout)
        self.received.clear()
        return self.events[-1]


async def settle():
    for _ in range(5):
        await asyncio.sleep(0)


def contents(event):
    return [n["content"] for n in event["notes"]]


@pytest.fixture
def store():
    return NoteStore()


@pytest.fixture
def hub(store):
    return BroadcastHub(store, heartbeat_interval=None)


@pytest.mark.asyncio
async def test_connect_pushes_current_snapshot_even_when_empty(hub):
    socket = RecordingSocket()
    subscriber = hub.connect("c1", ConnectionIdentity.anonymous(), socket.send)
    task = asyncio.create_task(hub.serve(subscriber))

    event = await socket.next_event()

    assert event == {"type": "notes_updated", "version": 0, "notes": []}
    hub.disconnect("c1")
    await task


@pytest.mark.asyncio
async def test_initial_snapshot_only_goes_to_new_subscriber(hub, store):
    store.create("alice", "hello")
    first = RecordingSocket()
    sub1 = hub.connect("c1", ConnectionIdentity.anonymous(), first.send)
    t1 = asyncio.create_task(hub.serve(sub1))
    await first.next_event()

    second = RecordingSocket()
    sub2 = hub.connect("c2", ConnectionIdentity.authenticated("bob"), second.send)
    t2 = asyncio.create_task(hub.serve(sub2))
    assert contents(await second.next_event()) == ["hello"]

    await settle()
    assert len(first.events) == 1

    hub.disconnect("c1")
    hub.disconnect("c2")
    await asyncio.gather(t1, t2)


@pytest.mark.asyncio
async def test_mutations_reach_every_subscriber(hub, store):
    sockets = [RecordingSocket() for _ in range(3)]
    tasks = []
    for i, socket in enumerate(sockets):
        sub = hub.connect(f"c{i}", ConnectionIdentity.anonymous(), socket.send)
        tasks.append(asyncio.create_task(hub.serve(sub)))
        await socket.next_event()

    note = store.create("alice", "hello")
    for socket in sockets:
        event = await socket.next_event()
        assert event["notes"] == [{"id": note.id, "content": "hello", "authorId": "alice"}]

    store.update(note.id, "alice", "hi")
    for socket in sockets:
        assert contents(await socket.next_event()) == ["hi"]

    store.delete(note.id, "alice")
    for socket in sockets:
        assert contents(await socket.next_event()) == []

    for i in range(3):
        hub.disconnect(f"c{i}")
    await asyncio.gather(*tasks)


@pytest.mark.asyncio
async def test_failed_subscriber_is_removed_without_affecting_others(hub, store):
    good = RecordingSocket()
    bad = RecordingSocket(fail=True)
    good_task = asyncio.create_task(hub.serve(hub.connect("good", ConnectionIdentity.anonymous(), good.send)))
    bad_task = asyncio.create_task(hub.serve(hub.connect("bad", ConnectionIdentity.anonymous(), bad.send)))

    await good.next_event()
    await bad_task  # first send fails, loop ends

    assert hub.subscriber_count() == 1
    store.create("alice", "hello")
    assert contents(await good.next_event()) == ["hello"]

    hub.disconnect("good")
    await good_task


@pytest.mark.asyncio
async def test_subscriber_on_closed_loop_is_dropped_and_others_still_served(hub, store):
    async def register_on_own_loop():
        return hub.connect("stale", ConnectionIdentity.anonymous(), RecordingSocket().send)

    # asyncio.run closes its loop on return, leaving the subscriber orphaned
    stale = await asyncio.to_thread(asyncio.run, register_on_own_loop())
    live = RecordingSocket()
    live_task = asyncio.create_task(hub.serve(hub.connect("live", ConnectionIdentity.anonymous(), live.send)))
    await live.next_event()

    store.create("alice", "hello")

    assert contents(await live.next_event()) == ["hello"]
    assert stale.closed
    assert [s.connection_id for s in hub.subscribers()] == ["live"]

    store.create("alice", "again")
    assert contents(await live.next_event()) == ["hello", "again"]

    hub.disconnect("live")
    await live_task


@pytest.mark.asyncio
async def test_slow_subscriber_does_not_block_publish_and_gets_latest(hub, store):
    slow = RecordingSocket()
    slow.gate = asyncio.Event()
    fast = RecordingSocket()
    slow_sub = hub.connect("slow", ConnectionIdentity.anonymous(), slow.send)
    slow_task = asyncio.create_task(hub.serve(slow_sub))
    fast_task = asyncio.create_task(hub.serve(hub.connect("fast", ConnectionIdentity.anonymous(), fast.send)))
    await fast.next_event()

    # the slow socket is stuck on its first send; mutations still complete
    for i in range(3):
        store.create("alice", f"n{i}")
        assert contents(await fast.next_event()) == [f"n{j}" for j in range(i + 1)]

    slow.gate.set()
    for _ in range(100):
        if len(slow.events) == 2:
            break
        await asyncio.sleep(0.01)

    # stale intermediate snapshots were superseded by the newest one
    assert [e["version"] for e in slow.events] == [0, 3]
    assert contents(slow.events[-1]) == ["n0", "n1", "n2"]
    assert slow_sub.delivered_version == 3

    hub.disconnect("slow")
    hub.disconnect("fast")
    await asyncio.gather(slow_task, fast_task)


@pytest.mark.asyncio
async def test_disconnected_subscriber_gets_nothing_more(hub, store):
    socket = RecordingSocket()
    task = asyncio.create_task(hub.serve(hub.connect("c1", ConnectionIdentity.anonymous(), socket.send)))
    await socket.next_event()

    hub.disconnect("c1")
    await task
    store.create("alice", "hello")
    await settle()

    assert len(socket.events) == 1
    assert hub.subscriber_count() == 0
    # disconnecting twice is harmless
    hub.disconnect("c1")


@pytest.mark.asyncio
async def test_heartbeat_sent_when_idle(store):
    hub = BroadcastHub(store, heartbeat_interval=0.01)
    socket = RecordingSocket()
    task = asyncio.create_task(hub.serve(hub.connect("c1", ConnectionIdentity.anonymous(), socket.send)))
    await socket.next_event()

    assert await socket.next_event() == HEARTBEAT_EVENT

    hub.disconnect("c1")
    await task


@pytest.mark.asyncio
async def test_dead_peer_found_by_heartbeat(store):
    hub = BroadcastHub(store, heartbeat_interval=0.01)
    socket = RecordingSocket()
    task = asyncio.create_task(hub.serve(hub.connect("c1", ConnectionIdentity.anonymous(), socket.send)))
    await socket.next_event()

    socket.fail = True
    await asyncio.wait_for(task, 1.0)
    assert hub.subscriber_count() == 0


@pytest.mark.asyncio
async def test_publish_from_another_thread(hub, store):
    socket = RecordingSocket()
    task = asyncio.create_task(hub.serve(hub.connect("c1", ConnectionIdentity.anonymous(), socket.send)))
    await socket.next_event()

    worker = threading.Thread(target=store.create, args=("alice", "from a thread"))
    worker.start()
    worker.join()

    assert contents(await socket.next_event()) == ["from a thread"]
    hub.disconnect("c1")
    await task
