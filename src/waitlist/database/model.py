# waitlist/database/model.py
from sqlalchemy.orm import declarative_base
from sqlalchemy import (
    Column,
    Integer,
    Text,
)

Base = declarative_base()

class WaitlistEntry(Base):
    __tablename__ = "waitlist"
    __table_args__ = {"sqlite_autoincrement": True}

    id         = Column(Integer, primary_key=True, autoincrement=True)
    email      = Column(Text, nullable=False)
    email_hash = Column(Text, nullable=False, unique=True)  # de-duplication key
    created_at = Column(Text, nullable=False)               # ISO-8601 UTC, e.g. 2026-01-01T00:00:00.000Z
    source_ip  = Column(Text, nullable=True)
