from datetime import timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config import logger
from exceptions import NotFound, PersistenceError
from models.provider import SourceData
from models.records import AnalysisRecord, Source, TrendingRow

from .models import AnalysisRow, utcnow
from .session import Database


class HistoryStore:
    """
    Persistence for analysis records.

    Every method runs in its own short transaction. `owner_id=None` means
    no owner filter (anonymous deployments); callers in owner-scoped mode
    always pass the caller's id.
    """

    def __init__(self, database: Database):
        self.database = database

    def create(
        self,
        claim: str,
        full_claim: str,
        verdict: str,
        score: int,
        explanation: str,
        sources: List[SourceData],
        owner_id: Optional[str] = None
    ) -> AnalysisRecord:
        row = AnalysisRow(
            owner_id=owner_id,
            claim=claim,
            full_claim=full_claim,
            verdict=verdict,
            score=score,
            explanation=explanation,
            sources=[dict(s) for s in sources],
            created_at=utcnow(),
        )
        try:
            with self.database.transaction() as session:
                session.add(row)
                session.flush()
                record = self._to_record(row)
        except SQLAlchemyError as e:
            raise PersistenceError("create", str(e))

        logger.info("Saved analysis %s (verdict=%s, score=%s).", record.id, record.verdict, record.score)
        return record

    def list_recent(self, owner_id: Optional[str] = None, limit: int = 50) -> List[AnalysisRecord]:
        stmt = select(AnalysisRow)
        if owner_id is not None:
            stmt = stmt.where(AnalysisRow.owner_id == owner_id)
        stmt = stmt.order_by(AnalysisRow.created_at.desc(), AnalysisRow.seq.desc()).limit(limit)
        try:
            with self.database.transaction() as session:
                return [self._to_record(row) for row in session.scalars(stmt)]
        except SQLAlchemyError as e:
            raise PersistenceError("list", str(e))

    def get(self, record_id: str, owner_id: Optional[str] = None) -> AnalysisRecord:
        try:
            with self.database.transaction() as session:
                row = self._find(session, record_id, owner_id)
                record = self._to_record(row) if row is not None else None
        except SQLAlchemyError as e:
            raise PersistenceError("get", str(e))

        if record is None:
            raise NotFound(record_id)
        return record

    def delete_by_id(self, record_id: str, owner_id: Optional[str] = None) -> str:
        try:
            with self.database.transaction() as session:
                row = self._find(session, record_id, owner_id)
                if row is not None:
                    session.delete(row)
        except SQLAlchemyError as e:
            raise PersistenceError("delete", str(e))

        if row is None:
            raise NotFound(record_id)
        logger.info("Deleted analysis %s.", record_id)
        return record_id

    def scan_for_trending(self, owner_id: Optional[str] = None) -> List[TrendingRow]:
        """(claim, verdict, score) for every record, oldest first."""
        stmt = select(AnalysisRow.claim, AnalysisRow.verdict, AnalysisRow.score)
        if owner_id is not None:
            stmt = stmt.where(AnalysisRow.owner_id == owner_id)
        stmt = stmt.order_by(AnalysisRow.created_at.asc(), AnalysisRow.seq.asc())
        try:
            with self.database.transaction() as session:
                return [(claim, verdict, score) for claim, verdict, score in session.execute(stmt)]
        except SQLAlchemyError as e:
            raise PersistenceError("trending", str(e))

    @staticmethod
    def _find(session: Session, record_id: str, owner_id: Optional[str]) -> Optional[AnalysisRow]:
        stmt = select(AnalysisRow).where(AnalysisRow.id == record_id)
        if owner_id is not None:
            stmt = stmt.where(AnalysisRow.owner_id == owner_id)
        return session.scalars(stmt).first()

    @staticmethod
    def _to_record(row: AnalysisRow) -> AnalysisRecord:
        created_at = row.created_at
        if created_at.tzinfo is None:
            # SQLite drops the offset; values are always written in UTC.
            created_at = created_at.replace(tzinfo=timezone.utc)
        return AnalysisRecord(
            id=row.id,
            owner_id=row.owner_id,
            claim=row.claim,
            full_claim=row.full_claim,
            verdict=row.verdict,
            score=row.score,
            explanation=row.explanation,
            sources=[Source(**s) for s in row.sources or []],
            created_at=created_at,
        )
