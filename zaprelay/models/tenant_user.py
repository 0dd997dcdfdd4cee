import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Text, Uuid
from sqlalchemy.orm import relationship

from zaprelay.database import Base


class TenantUser(Base):
    __tablename__ = "tenant_users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(Text, nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    bot_number = Column(Text, nullable=False, unique=True)  # digits only
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    contacts = relationship("Contact", back_populates="tenant")
