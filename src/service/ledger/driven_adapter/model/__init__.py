"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.ledger.driven_adapter.model.booking_history_model import BookingHistoryModel
from src.service.ledger.driven_adapter.model.booking_model import BookingModel
from src.service.ledger.driven_adapter.model.payment_model import PaymentModel
from src.service.ledger.driven_adapter.model.trip_model import TripModel

__all__ = [
    'BookingHistoryModel',
    'BookingModel',
    'PaymentModel',
    'TripModel',
]
