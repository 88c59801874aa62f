"""Tests for the session to host channel."""

import pytest

from app_runtime.channel import AppChannel, CloseApp, SpawnApp


@pytest.mark.unit
@pytest.mark.asyncio
async def test_messages_queue_until_read():
    channel = AppChannel("sess_1")

    assert channel.post(CloseApp(application_id="a"))
    assert channel.pending() == 1

    message = await channel.get()
    assert message == CloseApp(application_id="a")
    assert channel.get_nowait() is None


@pytest.mark.unit
def test_attach_drains_queue_then_delivers_directly():
    """Test an attached handler sees queued messages first, in order."""
    channel = AppChannel("sess_1")
    received = []
    channel.post(SpawnApp(application_id="one"))
    channel.post(SpawnApp(application_id="two"))

    channel.attach(received.append)
    channel.post(CloseApp())

    assert [m.type for m in received] == ["spawn_app", "spawn_app", "close_app"]
    assert received[0].application_id == "one"
    assert channel.pending() == 0


@pytest.mark.unit
def test_detach_resumes_queueing():
    channel = AppChannel("sess_1")
    channel.attach(lambda m: None)
    channel.detach()

    channel.post(CloseApp())

    assert channel.pending() == 1


@pytest.mark.unit
def test_closed_channel_drops_messages():
    channel = AppChannel("sess_1")
    channel.close()

    assert channel.closed
    assert channel.post(CloseApp()) is False
    assert channel.pending() == 0
