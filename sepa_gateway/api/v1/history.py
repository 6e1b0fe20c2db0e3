"""GET /v1/sepa/exports - Audit history of produced SEPA files"""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from sepa_gateway.api.v1.schemas import ExportHistoryResponse, ExportHistoryItem
from sepa_gateway.domain.exceptions import InvalidExportMonth
from sepa_gateway.infrastructure.database.session import get_db
from sepa_gateway.infrastructure.database.repositories import ExportRepository
from sepa_gateway.utils.date_utils import validate_month
from sepa_gateway.utils.money import format_amount

router = APIRouter()


@router.get("/sepa/exports", response_model=ExportHistoryResponse)
def get_export_history(
    month: Optional[str] = Query(None, description="Restrict to one export month, YYYY-MM"),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """
    Retrieve recently produced SEPA files, newest first.

    Returns:
        Message/payment ids, counts and control sums per file
    """
    if month is not None:
        try:
            validate_month(month)
        except InvalidExportMonth as e:
            raise HTTPException(status_code=400, detail=str(e))

    exports = ExportRepository(db).get_exports(month=month, limit=limit)

    items = [
        ExportHistoryItem(
            export_id=str(e.id),
            message_id=e.message_id,
            payment_id=e.payment_id,
            month=e.month,
            filename=e.filename,
            transaction_count=e.transaction_count,
            control_sum=format_amount(e.control_sum),
            created_at=e.created_at.isoformat(),
        )
        for e in exports
    ]

    return ExportHistoryResponse(month=month, exports=items)
