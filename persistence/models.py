from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text
from .db import Base


def _utcnow():
    return datetime.now(timezone.utc)


class SecureValueModel(Base):
    __tablename__ = "secure_values"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(128), unique=True, index=True, nullable=False)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
