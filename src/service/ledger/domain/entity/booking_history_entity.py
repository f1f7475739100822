from datetime import datetime, timezone
from typing import Any, Dict, Optional

import attrs
import uuid_utils
from uuid_utils import UUID

from src.service.ledger.domain.enum.history_action import HistoryAction


@attrs.define(frozen=True)
class BookingHistory:
    """Audit entry: what an operation changed on one booking"""

    id: UUID
    booking_id: UUID
    action: HistoryAction
    description: str
    details: Dict[str, Any] = attrs.field(factory=dict)
    timestamp: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        booking_id: UUID,
        action: HistoryAction,
        description: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> 'BookingHistory':
        return cls(
            id=uuid_utils.uuid7(),
            booking_id=booking_id,
            action=action,
            description=description,
            details=details or {},
            timestamp=datetime.now(timezone.utc),
        )
