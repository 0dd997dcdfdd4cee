import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Text, Uuid
from sqlalchemy.orm import relationship

from zaprelay.database import Base


class Contact(Base):
    __tablename__ = "contacts"
    __table_args__ = (Index("ix_contacts_tenant_phone", "tenant_id", "phone_number"),)

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid(as_uuid=True), ForeignKey("tenant_users.id"), nullable=False)
    phone_number = Column(Text, nullable=False)
    name = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    tenant = relationship("TenantUser", back_populates="contacts")
    messages = relationship("Message", back_populates="contact", passive_deletes=True)
    activity_logs = relationship("ActivityLog", back_populates="contact", passive_deletes=True)
