"""
Audit trail service.

With ENABLE_STRUCTURED_LOGGING on, every recorded entry is also emitted as
an ``activity_recorded`` event on the ``hostel_laundry.audit`` structlog logger.
"""

from typing import Any, Dict, List, Optional

import structlog

from hostel_laundry.config.settings import Settings
from hostel_laundry.core.exceptions import BaseAppException
from hostel_laundry.models import ActivityLog
from hostel_laundry.models.base import ActivityType
from hostel_laundry.repositories.base import Sort
from hostel_laundry.services.base.base_service import BaseService, user_summary


class ActivityService(BaseService):
    """Appends and lists activity log entries."""

    def __init__(self, store, config: Optional[Settings] = None):
        super().__init__(store, config)
        self._audit = structlog.get_logger("hostel_laundry.audit") if self.settings.ENABLE_STRUCTURED_LOGGING else None

    def log_activity(
        self,
        user_id: str,
        activity_type: ActivityType,
        description: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Optional[ActivityLog]:
        """
        Append one entry. A failure to write the audit record is logged and
        never interrupts the operation being audited.
        """
        try:
            entry = self.store.activity_logs.create(
                {
                    "user_id": user_id,
                    "activity_type": activity_type,
                    "description": description,
                    "activity_metadata": metadata or {},
                }
            )
        except BaseAppException as e:
            self._logger.error(
                f"Failed to record {ActivityType(activity_type).value} activity: {e.message}",
                extra={"activity_user_id": user_id},
            )
            return None

        if self._audit is not None:
            self._audit.info(
                "activity_recorded",
                log_id=entry.id,
                actor_id=user_id,
                activity_type=ActivityType(activity_type).value,
                description=description,
            )
        return entry

    def list_recent(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Latest entries, newest first, each with the acting user's name and role."""
        logs = self.store.activity_logs.find(
            order_by=Sort.desc("created_at"),
            limit=limit or self.settings.ACTIVITY_LOG_LIMIT,
        )
        users = self.store.users.find_by_ids(log.user_id for log in logs)
        return [
            {
                "id": log.id,
                "user_id": log.user_id,
                "activity_type": log.activity_type,
                "description": log.description,
                "metadata": log.activity_metadata or {},
                "created_at": log.created_at,
                "user": user_summary(users.get(log.user_id)),
            }
            for log in logs
        ]
