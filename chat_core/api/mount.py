"""组件挂载登记。

同一个宿主元素只挂载一个组件实例。登记表由调用方创建并持有，
作为参数传给 mount_widget，而不是模块级全局变量。
"""

from typing import Callable, Dict, Iterator, Optional

from chat_core.infrastructure.logging.logger import logger
from chat_core.session.controller import SessionController


class MountRegistry:
    """已挂载的宿主 id -> 控制器。"""

    def __init__(self) -> None:
        self._mounted: Dict[str, SessionController] = {}

    def __contains__(self, host_id: object) -> bool:
        return host_id in self._mounted

    def __len__(self) -> int:
        return len(self._mounted)

    def __iter__(self) -> Iterator[str]:
        return iter(self._mounted)

    def get(self, host_id: str) -> Optional[SessionController]:
        return self._mounted.get(host_id)

    def claim(self, host_id: str, controller: SessionController) -> bool:
        """登记宿主；已经登记过时返回 False，不覆盖。"""

        if host_id in self._mounted:
            return False
        self._mounted[host_id] = controller
        return True

    def release(self, host_id: str) -> Optional[SessionController]:
        return self._mounted.pop(host_id, None)


def mount_widget(
    host_id: str,
    registry: MountRegistry,
    factory: Callable[[], SessionController],
) -> Optional[SessionController]:
    """在宿主上挂载组件。

    Args:
        host_id: 宿主元素标识。
        registry: 调用方持有的挂载登记表。
        factory: 创建控制器的工厂，只在确实需要挂载时调用。

    Returns:
        新建的控制器；宿主已挂载时返回 None。
    """

    if not host_id:
        logger.error("Mount failed: host id is required")
        return None
    if host_id in registry:
        return None
    controller = factory()
    registry.claim(host_id, controller)
    logger.info("Mounted chat widget", extra={"extra": {"host_id": host_id, "config_code": controller.config_code}})
    return controller


def unmount_widget(host_id: str, registry: MountRegistry) -> bool:
    """卸载组件：关闭控制器并释放宿主。"""

    controller = registry.release(host_id)
    if controller is None:
        return False
    controller.close()
    return True
