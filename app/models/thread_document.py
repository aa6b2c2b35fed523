"""
Thread document model
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, JSON

from app.core.db import Base

class ThreadDocument(Base):
    """One row per thread; `body` holds the whole thread document including its posts."""
    __tablename__ = "thread_documents"

    id = Column(String(255), primary_key=True, index=True)
    body = Column(JSON, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
