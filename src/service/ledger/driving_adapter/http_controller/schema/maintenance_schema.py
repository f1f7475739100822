from typing import List

from pydantic import BaseModel

from src.service.ledger.app.dto.maintenance_dto import (
    MaintenanceAction,
    MaintenanceLog,
    PaymentCleanupReport,
    SeatReconciliationReport,
)


class MaintenanceLogResponse(BaseModel):
    route: str
    date: str
    seat: str
    action: MaintenanceAction
    details: str

    @classmethod
    def from_log(cls, log: MaintenanceLog) -> 'MaintenanceLogResponse':
        return cls(
            route=log.route, date=log.date, seat=log.seat, action=log.action, details=log.details
        )


class SeatReconciliationResponse(BaseModel):
    fixed_count: int
    sync_count: int
    conflict_count: int
    logs: List[MaintenanceLogResponse]

    class Config:
        json_schema_extra = {
            'example': {
                'fixed_count': 1,
                'sync_count': 0,
                'conflict_count': 1,
                'logs': [
                    {
                        'route': 'Sài Gòn - Đà Lạt',
                        'date': '2025-01-10 22:00',
                        'seat': 'B5',
                        'action': 'conflict',
                        'details': '2 tickets claimed the seat, kept booking 0193... (price 150000)',
                    }
                ],
            }
        }

    @classmethod
    def from_report(cls, report: SeatReconciliationReport) -> 'SeatReconciliationResponse':
        return cls(
            fixed_count=report.fixed_count,
            sync_count=report.sync_count,
            conflict_count=report.conflict_count,
            logs=[MaintenanceLogResponse.from_log(log) for log in report.logs],
        )


class PaymentCleanupResponse(BaseModel):
    deleted_count: int
    fixed_count: int
    mismatch_count: int
    logs: List[MaintenanceLogResponse]

    @classmethod
    def from_report(cls, report: PaymentCleanupReport) -> 'PaymentCleanupResponse':
        return cls(
            deleted_count=report.deleted_count,
            fixed_count=report.fixed_count,
            mismatch_count=report.mismatch_count,
            logs=[MaintenanceLogResponse.from_log(log) for log in report.logs],
        )
