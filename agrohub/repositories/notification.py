"""Activity notifications."""

from __future__ import annotations

from agrohub.api import endpoints
from agrohub.api.client import AgroHubClient
from agrohub.api.models import NotificationDto, PagedResponseDto
from agrohub.models import Notification, PagedData
from agrohub.repositories.base import Repository
from agrohub.services.mappers import notification_to_domain, paged_to_domain
from agrohub.services.result import Result


def _notifications_page(dto: PagedResponseDto[NotificationDto]) -> PagedData[Notification]:
    return paged_to_domain(dto, notification_to_domain)


class NotificationRepository(Repository):
    messages = {
        403: "You don't have permission to perform this action",
        404: "Notification not found",
    }

    def __init__(self, client: AgroHubClient) -> None:
        self.client = client

    async def get_notifications(self, page: int = 0, size: int = 20) -> Result[PagedData[Notification]]:
        return await self._call(
            f"Notifications page {page}",
            lambda: endpoints.get_notifications(self.client, page, size),
            _notifications_page,
        )

    async def get_unread_notifications(
        self, page: int = 0, size: int = 20
    ) -> Result[PagedData[Notification]]:
        return await self._call(
            f"Unread notifications page {page}",
            lambda: endpoints.get_unread_notifications(self.client, page, size),
            _notifications_page,
        )

    async def mark_as_read(self, notification_id: int) -> Result[None]:
        return await self._command(
            f"Mark notification {notification_id} read",
            lambda: endpoints.mark_notification_read(self.client, notification_id),
        )

    async def mark_all_as_read(self) -> Result[None]:
        return await self._command(
            "Mark all notifications read",
            lambda: endpoints.mark_all_notifications_read(self.client),
        )
