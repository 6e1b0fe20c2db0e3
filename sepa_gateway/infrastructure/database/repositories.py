"""Data access layer for SEPA export"""

from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Session
from sepa_gateway.infrastructure.database.models import Credit, Member, SepaExport
from sepa_gateway.domain.export import ExportResult
from sepa_gateway.domain.models import DebtRecord


class CreditRepository:
    """Repository for monthly member credits"""

    def __init__(self, db: Session):
        self.db = db

    def get_sepa_candidates(self, month: str) -> List[DebtRecord]:
        """Pending credits of a month joined with member name and IBAN, all pre-selected"""
        rows = (
            self.db.query(Credit, Member)
            .join(Member, Credit.member_id == Member.id)
            .filter(Credit.month == month, Credit.status == "pending")
            .order_by(Member.name, Credit.id)
            .all()
        )
        return [
            DebtRecord(
                id=credit.id,
                member_id=credit.member_id,
                member_name=member.name,
                iban=member.iban,
                amount=Decimal(str(credit.total_amount or 0)),
                selected=True,
                status=credit.status,
            )
            for credit, member in rows
        ]


class ExportRepository:
    """Repository for the SEPA export audit trail"""

    def __init__(self, db: Session):
        self.db = db

    def record_export(self, result: ExportResult) -> SepaExport:
        """Persist the figures of a produced SEPA file"""
        db_export = SepaExport(
            message_id=result.message_id,
            payment_id=result.payment_id,
            month=result.month,
            filename=result.file.filename,
            transaction_count=result.transaction_count,
            control_sum=result.control_sum,
        )
        self.db.add(db_export)
        self.db.flush()
        return db_export

    def get_exports(self, month: Optional[str] = None, limit: int = 20) -> List[SepaExport]:
        """Most recent exports, optionally for one month"""
        query = self.db.query(SepaExport)
        if month:
            query = query.filter(SepaExport.month == month)
        return query.order_by(SepaExport.created_at.desc()).limit(limit).all()
