from __future__ import annotations

from typing import Optional

from .base import PermissionStatus, Position


class StaticPositionProvider:
    """
    PositionProvider for hosts without location hardware: the "device" sits
    at a configured coordinate, or has no fix at all.
    """

    def __init__(
        self,
        position: Optional[Position] = None,
        *,
        enabled: bool = True,
        permission: PermissionStatus = PermissionStatus.GRANTED,
    ):
        self.position = position
        self.enabled = enabled
        self.permission = permission

    async def is_location_service_enabled(self) -> bool:
        return self.enabled and self.position is not None

    async def check_permission(self) -> PermissionStatus:
        return self.permission

    async def request_permission(self) -> PermissionStatus:
        # Nobody to prompt.
        return self.permission

    async def get_current_position(self) -> Position:
        if self.position is None:
            raise RuntimeError("No configured device position")
        return self.position

    async def get_last_known_position(self) -> Optional[Position]:
        return self.position
