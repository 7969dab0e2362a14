from __future__ import annotations

import asyncio
import logging
import threading

from anyio import to_thread

from app.infrastructure.realtime import RealtimeHub, RealtimePublisher, project_room, user_room


class FakeWebSocket:
    def __init__(self, *, fail: bool = False) -> None:
        self.accepted = False
        self.fail = fail
        self.sent: list[dict] = []

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, message: dict) -> None:
        if self.fail:
            raise RuntimeError("connection reset")
        self.sent.append(message)


def test_connect_tracks_every_socket_of_a_user():
    hub = RealtimeHub()
    laptop, phone = FakeWebSocket(), FakeWebSocket()

    asyncio.run(hub.connect(1, laptop, project_ids=[10]))
    asyncio.run(hub.connect(1, phone))

    assert laptop.accepted and phone.accepted
    assert hub.is_user_online(1)
    assert hub.online_user_count() == 1
    assert hub.rooms_for(laptop) == {user_room(1), project_room(10)}
    assert hub.rooms_for(phone) == {user_room(1)}

    hub.disconnect(laptop)
    assert hub.is_user_online(1)
    assert not hub.has_listeners(project_room(10))

    hub.disconnect(phone)
    assert not hub.is_user_online(1)
    assert hub.online_user_count() == 0
    assert not hub.has_listeners(user_room(1))


def test_disconnect_unknown_socket_is_harmless():
    hub = RealtimeHub()

    hub.disconnect(FakeWebSocket())

    assert hub.online_user_count() == 0


def test_project_room_membership_follows_join_and_leave():
    hub = RealtimeHub()
    laptop, phone = FakeWebSocket(), FakeWebSocket()
    hub.register(2, laptop)
    hub.register(2, phone)

    hub.join_project_room(2, 7)
    assert project_room(7) in hub.rooms_for(laptop)
    assert project_room(7) in hub.rooms_for(phone)

    hub.leave_project_room(2, 7)
    assert project_room(7) not in hub.rooms_for(laptop)
    assert not hub.has_listeners(project_room(7))


def test_join_for_offline_user_does_nothing():
    hub = RealtimeHub()

    hub.join_project_room(3, 7)

    assert not hub.has_listeners(project_room(7))


def test_room_sends_reach_only_room_members():
    hub = RealtimeHub()
    member, outsider = FakeWebSocket(), FakeWebSocket()
    hub.register(1, member, project_ids=[5])
    hub.register(2, outsider, project_ids=[6])

    asyncio.run(hub.send_to_room(project_room(5), {"type": "activity", "data": {"id": 1}}))
    asyncio.run(hub.send_to_user(2, {"type": "notification", "data": {"id": 9}}))
    asyncio.run(hub.send_to_all({"type": "announcement", "data": {}}))

    assert [m["type"] for m in member.sent] == ["activity", "announcement"]
    assert [m["type"] for m in outsider.sent] == ["notification", "announcement"]


def test_failing_socket_is_dropped():
    hub = RealtimeHub()
    healthy, broken = FakeWebSocket(), FakeWebSocket(fail=True)
    hub.register(1, healthy, project_ids=[5])
    hub.register(2, broken, project_ids=[5])

    asyncio.run(hub.send_to_room(project_room(5), {"type": "activity", "data": {}}))

    assert len(healthy.sent) == 1
    assert not hub.is_user_online(2)
    assert hub.rooms_for(broken) == set()


def test_publisher_delivers_inside_running_loop():
    hub = RealtimeHub()
    socket = FakeWebSocket()
    hub.register(4, socket, project_ids=[8])
    publisher = RealtimePublisher(hub)
    payload = {"id": 1, "metadata": {"vibeName": "Song X"}}

    async def _emit():
        publisher.emit_to_project(8, "activity", payload)
        publisher.emit_to_user(4, "notification", {"id": 2})
        await asyncio.sleep(0)
        await asyncio.sleep(0)

    asyncio.run(_emit())
    payload["metadata"]["vibeName"] = "changed"

    assert socket.sent == [
        {"type": "activity", "data": {"id": 1, "metadata": {"vibeName": "Song X"}}},
        {"type": "notification", "data": {"id": 2}},
    ]


def test_publisher_skips_rooms_without_listeners():
    hub = RealtimeHub()
    publisher = RealtimePublisher(hub)
    scheduled = []
    publisher._schedule = lambda send, *args: scheduled.append(args)

    publisher.emit_to_project(1, "activity", {})
    publisher.emit_to_user(1, "notification", {})
    publisher.emit_to_all("announcement", {})

    assert scheduled == []
    assert publisher.is_user_online(1) is False


def test_publisher_manages_rooms_through_the_hub():
    hub = RealtimeHub()
    socket = FakeWebSocket()
    hub.register(3, socket)
    publisher = RealtimePublisher(hub)

    publisher.join_project_room(3, 12)
    assert hub.has_listeners(project_room(12))
    assert publisher.is_user_online(3)

    publisher.leave_project_room(3, 12)
    assert not hub.has_listeners(project_room(12))


class GatedWebSocket(FakeWebSocket):
    """Socket whose sends wait until the test opens the gate."""

    def __init__(self) -> None:
        super().__init__()
        self.gate = asyncio.Event()

    async def send_json(self, message: dict) -> None:
        await self.gate.wait()
        self.sent.append(message)


def test_emit_from_worker_thread_returns_before_delivery():
    hub = RealtimeHub()
    publisher = RealtimePublisher(hub)

    async def _scenario():
        socket = GatedWebSocket()
        hub.register(4, socket, project_ids=[8])

        await to_thread.run_sync(publisher.emit_to_project, 8, "activity", {"id": 1})
        assert socket.sent == []
        assert len(publisher._pending) == 1

        socket.gate.set()
        for _ in range(3):
            await asyncio.sleep(0)
        return socket

    socket = asyncio.run(_scenario())

    assert socket.sent == [{"type": "activity", "data": {"id": 1}}]
    assert publisher._pending == set()


def test_pending_delivery_is_kept_until_done():
    hub = RealtimeHub()
    publisher = RealtimePublisher(hub)

    async def _scenario():
        socket = GatedWebSocket()
        hub.register(1, socket)
        publisher.emit_to_user(1, "notification", {"id": 3})
        (task,) = publisher._pending
        socket.gate.set()
        await task
        return socket

    socket = asyncio.run(_scenario())

    assert socket.sent == [{"type": "notification", "data": {"id": 3}}]
    assert publisher._pending == set()


def test_emit_outside_any_event_loop_is_logged(caplog):
    hub = RealtimeHub()
    hub.register(1, FakeWebSocket())
    publisher = RealtimePublisher(hub)

    with caplog.at_level(logging.WARNING):
        worker = threading.Thread(target=publisher.emit_to_user, args=(1, "notification", {}))
        worker.start()
        worker.join()

    assert "Unable to deliver realtime event" in caplog.text
