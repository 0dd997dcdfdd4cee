import uuid

from sqlalchemy import Boolean, Column, ForeignKey, Text, Uuid

from zaprelay.database import Base

DEFAULT_BOT_SETTINGS = {
    "personality": "divertido",
    "language": "pt",
    "auto_jokes": True,
    "auto_time": True,
    "auto_greeting": True,
}


class BotSettings(Base):
    __tablename__ = "bot_settings"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid(as_uuid=True), ForeignKey("tenant_users.id"), nullable=False, unique=True)
    personality = Column(Text, nullable=False, default=DEFAULT_BOT_SETTINGS["personality"])
    language = Column(Text, nullable=False, default=DEFAULT_BOT_SETTINGS["language"])
    auto_jokes = Column(Boolean, nullable=False, default=True)
    auto_time = Column(Boolean, nullable=False, default=True)
    auto_greeting = Column(Boolean, nullable=False, default=True)
