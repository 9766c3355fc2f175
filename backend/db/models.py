import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, Integer, JSON, String, Text

from db.session import Base


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AnalysisRow(Base):
    __tablename__ = "analyses"

    # Insertion sequence; orders rows that share a created_at.
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(32), unique=True, index=True, nullable=False, default=new_id)
    owner_id = Column(String(128), nullable=True)

    claim = Column(Text, nullable=False)
    full_claim = Column(Text, nullable=False)
    verdict = Column(String(16), nullable=False)
    score = Column(Integer, nullable=False)
    explanation = Column(Text, nullable=False)
    sources = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    __table_args__ = (
        Index("ix_analyses_owner_created", "owner_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<AnalysisRow(id={self.id}, verdict='{self.verdict}', score={self.score})>"
