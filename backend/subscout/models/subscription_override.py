"""
Subscription override database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Numeric, Enum
from subscout.database import Base
from subscout.detection.records import Frequency


class SubscriptionOverride(Base):
    """
    User correction for a detected subscription.

    Keyed by the normalized merchant key rather than a row id, so it keeps
    applying every time detection rediscovers the same merchant.
    """

    __tablename__ = "subscription_overrides"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    subscription_key = Column(String(255), unique=True, nullable=False, index=True)
    custom_name = Column(String(255), nullable=True)
    custom_amount = Column(Numeric(12, 2), nullable=True)
    custom_frequency = Column(Enum(Frequency, values_callable=lambda e: [f.value for f in e]), nullable=True)
    is_deleted = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
