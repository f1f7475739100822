"""Reconciliation job output: counters plus one row per detected drift."""

from enum import StrEnum
from typing import Any, Dict, List

import attrs


class MaintenanceAction(StrEnum):
    FIXED = 'fixed'
    SYNC = 'sync'
    CONFLICT = 'conflict'
    DELETED = 'deleted'
    MISMATCH = 'mismatch'


@attrs.define(frozen=True)
class MaintenanceLog:
    route: str
    date: str
    seat: str
    action: MaintenanceAction
    details: str
    extra: Dict[str, Any] = attrs.field(factory=dict)


@attrs.define
class SeatReconciliationReport:
    fixed_count: int = 0
    sync_count: int = 0
    conflict_count: int = 0
    logs: List[MaintenanceLog] = attrs.field(factory=list)


@attrs.define
class PaymentCleanupReport:
    deleted_count: int = 0
    fixed_count: int = 0
    mismatch_count: int = 0
    logs: List[MaintenanceLog] = attrs.field(factory=list)
