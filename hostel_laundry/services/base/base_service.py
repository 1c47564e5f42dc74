"""
Base service class providing common functionality for all services.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, Optional

from hostel_laundry.config.settings import Settings, settings as default_settings
from hostel_laundry.core.exceptions import ValidationError
from hostel_laundry.core.logging import get_logger
from hostel_laundry.models import User
from hostel_laundry.repositories.data_store import DataStore


def user_summary(user: Optional[User]) -> Optional[Dict[str, Any]]:
    """Public subset of a user joined onto other records"""
    if user is None:
        return None
    return {
        "id": user.id,
        "full_name": user.full_name,
        "email": user.email,
        "role": user.role,
        "block": user.block,
        "floor_number": user.floor_number,
        "room_number": user.room_number,
    }


class BaseService:
    """
    Base service with common behaviors:
    - Shared logger and data store
    - Transaction management utilities
    - Validation helpers
    """

    def __init__(self, store: DataStore, config: Optional[Settings] = None):
        self.store = store
        self.settings = config or default_settings
        self._logger = get_logger(self.__class__.__name__)

    @contextmanager
    def transaction(self) -> Iterator[DataStore]:
        with self.store.transaction() as store:
            yield store

    @staticmethod
    def _require(data: Dict[str, Any], fields: Iterable[str], message: str = "Missing required fields") -> None:
        missing = [field for field in fields if data.get(field) in (None, "")]
        if missing:
            raise ValidationError(message, field_errors={field: ["This field is required"] for field in missing})

    @staticmethod
    def _clean_update(data: Dict[str, Any]) -> Dict[str, Any]:
        """Drop keys that were not supplied"""
        return {key: value for key, value in data.items() if value is not None}
