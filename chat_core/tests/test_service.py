"""测试挂载登记与服务入口。"""

import asyncio

import pytest

from chat_core.api.mount import MountRegistry, mount_widget, unmount_widget
from chat_core.api.service import create_session, mount, widget_view
from chat_core.domain.models import ChatReply, WidgetConfig
from chat_core.providers.http_client import HttpChatTransport
from chat_core.session.controller import SessionController


class FakeTransport:
    name = "fake"

    def __init__(self, config=None):
        self.config = config or WidgetConfig()

    async def fetch_config(self, config_code):
        return self.config

    async def send_message(self, req):
        return ChatReply(reply="**ok** <3", session_token="s", followups=("next",))


def test_mount_widget_only_once_per_host():
    registry = MountRegistry()
    created = []

    def factory():
        ctrl = SessionController(FakeTransport(), "C")
        created.append(ctrl)
        return ctrl

    first = mount_widget("velior-ai-chat", registry, factory)
    second = mount_widget("velior-ai-chat", registry, factory)

    assert first is created[0]
    assert second is None
    assert len(created) == 1
    assert "velior-ai-chat" in registry
    assert registry.get("velior-ai-chat") is first


def test_mount_widget_requires_host_id():
    registry = MountRegistry()
    assert mount_widget("", registry, lambda: SessionController(FakeTransport(), "C")) is None
    assert len(registry) == 0


def test_registries_are_independent():
    a, b = MountRegistry(), MountRegistry()
    mount_widget("host", a, lambda: SessionController(FakeTransport(), "C"))
    assert "host" in a
    assert "host" not in b


def test_unmount_closes_controller():
    registry = MountRegistry()
    ctrl = mount_widget("host", registry, lambda: SessionController(FakeTransport(), "C"))
    assert unmount_widget("host", registry) is True
    assert ctrl.closed is True
    assert "host" not in registry
    assert unmount_widget("host", registry) is False


def test_create_session_defaults(monkeypatch):
    class DummySettings:
        config_code = "CZ_ACCOUNTING"

    monkeypatch.setattr("chat_core.api.service.settings", DummySettings())
    ctrl = create_session()
    assert ctrl.config_code == "CZ_ACCOUNTING"
    assert isinstance(ctrl._transport, HttpChatTransport)


def test_mount_with_initial_message_installs_intro():
    registry = MountRegistry()
    ctrl = mount(
        "host",
        registry,
        "C",
        initial_message="Welcome",
        initial_followups=["Pricing"],
        transport=FakeTransport(),
    )
    assert ctrl is not None
    view = widget_view(ctrl)
    assert [t.html for t in view.turns] == ["<p>Welcome</p>"]
    assert view.followups == ("Pricing",)


def test_mount_fetches_remote_intro():
    async def scenario():
        registry = MountRegistry()
        ctrl = mount("host", registry, "C", transport=FakeTransport(WidgetConfig(initial_message="Remote hi")))
        await asyncio.sleep(0)
        return ctrl

    ctrl = asyncio.run(scenario())
    assert [t.text for t in ctrl.state.transcript] == ["Remote hi"]


def test_widget_view_after_reply():
    ctrl = create_session("C", transport=FakeTransport())
    asyncio.run(ctrl.send("a <b>"))
    view = widget_view(ctrl)
    assert [t.html for t in view.turns] == ["a &lt;b&gt;", "<p><strong>ok</strong> &lt;3</p>"]
    assert view.followups == ("next",)
    assert view.show_typing is False
    assert view.input_enabled is True
    assert view.error_text is None


def test_mount_without_running_loop_releases_host():
    registry = MountRegistry()

    with pytest.raises(RuntimeError):
        mount("host", registry, "C", transport=FakeTransport())

    assert "host" not in registry
    ctrl = mount("host", registry, "C", initial_message="Hi", transport=FakeTransport())
    assert ctrl is not None
    assert registry.get("host") is ctrl
