import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship

from zaprelay.database import Base


class ActionType(str, Enum):
    SENT_MESSAGE = "SENT_MESSAGE"
    RECEIVED_MESSAGE = "RECEIVED_MESSAGE"
    BOT_MESSAGE = "BOT_MESSAGE"
    AUTO_REPLY = "AUTO_REPLY"


class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    contact_id = Column(Uuid(as_uuid=True), ForeignKey("contacts.id"), nullable=False, index=True)
    tenant_id = Column(Uuid(as_uuid=True), ForeignKey("tenant_users.id"), nullable=False, index=True)
    action_type = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    contact = relationship("Contact", back_populates="activity_logs")
