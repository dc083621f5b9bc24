"""对外 API 服务模块。

提供简化的函数接口供宿主应用调用。
"""

from typing import Optional, Sequence

from chat_core.api.mount import MountRegistry, mount_widget
from chat_core.config.settings import settings
from chat_core.providers import create_transport
from chat_core.providers.base import ChatTransport
from chat_core.session.controller import SessionController
from chat_core.session.view import WidgetView, build_view


def create_session(
    config_code: Optional[str] = None,
    *,
    api_url: Optional[str] = None,
    transport: Optional[ChatTransport] = None,
) -> SessionController:
    """创建一个会话控制器。

    Args:
        config_code: 组件配置编码（可选，缺省取配置）
        api_url: 聊天服务地址（可选，缺省取配置）
        transport: 自定义传输实现（可选，缺省使用 HTTP）
    """
    return SessionController(
        transport=transport or create_transport(api_url),
        config_code=config_code or settings.config_code,
    )


def mount(
    host_id: str,
    registry: MountRegistry,
    config_code: Optional[str] = None,
    *,
    api_url: Optional[str] = None,
    initial_message: Optional[str] = None,
    initial_followups: Optional[Sequence[str]] = None,
    transport: Optional[ChatTransport] = None,
) -> Optional[SessionController]:
    """在宿主上挂载组件并启动 bootstrap。

    必须在运行中的事件循环里调用（未提供 initial_message 时会调度远端配置获取）。

    Returns:
        新建的控制器；宿主已挂载时返回 None。
    """
    controller = mount_widget(
        host_id,
        registry,
        lambda: create_session(config_code, api_url=api_url, transport=transport),
    )
    if controller is None:
        return None
    try:
        controller.bootstrap(initial_message, initial_followups)
    except Exception:
        registry.release(host_id)
        controller.close()
        raise
    return controller


def widget_view(controller: SessionController) -> WidgetView:
    """返回当前状态对应的视图模型。"""
    return build_view(controller.state)
