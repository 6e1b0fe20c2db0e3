"""SEPA Direct Debit export endpoints - candidate listing and file downloads"""

import time
import logging
from datetime import date
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session
from starlette.responses import Response

from sepa_gateway.api.v1.schemas import CsvExportRequest, DebtSchema, SepaExportRequest
from sepa_gateway.api.dependencies import get_creditor_config, get_identifier_source, get_request_id
from sepa_gateway.config import settings
from sepa_gateway.domain.exceptions import (
    EmptySelectionError,
    InvalidDebtRecordError,
    InvalidExecutionDate,
    InvalidExportMonth,
)
from sepa_gateway.domain.export import ExportResult, export_csv, export_sepa_xml
from sepa_gateway.domain.identifiers import IdentifierGenerator, IdentifierSource
from sepa_gateway.domain.models import CreditorConfig
from sepa_gateway.infrastructure.database.session import get_db
from sepa_gateway.infrastructure.database.repositories import CreditRepository, ExportRepository
from sepa_gateway.infrastructure.observability.metrics import record_export, record_export_failure
from sepa_gateway.infrastructure.observability.logging import log_export
from sepa_gateway.utils.date_utils import add_days, validate_month

router = APIRouter()


def _download(result: ExportResult) -> Response:
    """Hand the produced bytes to the client as an attachment"""
    return Response(
        content=result.file.content,
        media_type=result.file.media_type,
        headers={"Content-Disposition": result.file.content_disposition},
    )


@router.get("/credits/sepa-export", response_model=List[DebtSchema], response_model_by_alias=True)
def list_sepa_candidates(
    request: Request,
    month: str = Query(..., description="Export month, YYYY-MM"),
    db: Session = Depends(get_db),
):
    """
    Pending credits of a month with member name and IBAN.

    Every row comes back pre-selected; rows without IBAN are listed so the
    treasurer can fix the member data, but they are never exported.
    """
    try:
        validate_month(month)
    except InvalidExportMonth as e:
        raise HTTPException(status_code=400, detail=str(e))

    candidates = CreditRepository(db).get_sepa_candidates(month)
    logging.info(
        "SEPA candidates loaded",
        extra={"request_id": get_request_id(request), "month": month, "candidates": len(candidates)},
    )
    return [DebtSchema.from_domain(debt) for debt in candidates]


@router.post("/credits/sepa-export/xml")
def create_sepa_export(
    request_body: SepaExportRequest,
    request: Request,
    db: Session = Depends(get_db),
    creditor: CreditorConfig = Depends(get_creditor_config),
    identifier_source: IdentifierSource = Depends(get_identifier_source),
):
    """
    Produce the pain.008.001.02 file for the selected debts.

    Flow:
    1. Default the collection date to today + configured offset
    2. Select, build and render (fails before any output on bad input)
    3. Record the export in the audit table
    4. Return the XML as a download
    """
    start_time = time.time()
    request_id = get_request_id(request)
    execution_date = request_body.execution_date or add_days(
        date.today(), settings.sepa_execution_offset_days
    )

    try:
        result = export_sepa_xml(
            [debt.to_domain() for debt in request_body.debts],
            creditor,
            month=request_body.month,
            execution_date=execution_date,
            identifiers=IdentifierGenerator(identifier_source),
            mandate_signature_date=settings.sepa_mandate_signature_date,
        )
        ExportRepository(db).record_export(result)
        db.commit()

    except EmptySelectionError as e:
        record_export_failure("sepa", "empty_selection")
        logging.warning(f"Empty selection: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except InvalidExecutionDate as e:
        record_export_failure("sepa", "invalid_input")
        logging.warning(f"Invalid execution date: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except InvalidDebtRecordError as e:
        record_export_failure("sepa", "invalid_input")
        logging.warning(f"Invalid debt record: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except InvalidExportMonth as e:
        record_export_failure("sepa", "invalid_input")
        raise HTTPException(status_code=400, detail=str(e))

    except Exception as e:
        db.rollback()
        record_export_failure("sepa", "error")
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_export("sepa", result.transaction_count, result.control_sum)
    log_export(request_id, result.month, "sepa", result.transaction_count, result.control_sum, duration_ms)

    return _download(result)


@router.post("/credits/sepa-export/csv")
def create_csv_export(request_body: CsvExportRequest, request: Request):
    """Produce credits-<month>.csv for the same selection rules"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        result = export_csv([debt.to_domain() for debt in request_body.debts], request_body.month)

    except EmptySelectionError as e:
        record_export_failure("csv", "empty_selection")
        logging.warning(f"Empty selection: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except InvalidDebtRecordError as e:
        record_export_failure("csv", "invalid_input")
        logging.warning(f"Invalid debt record: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except InvalidExportMonth as e:
        record_export_failure("csv", "invalid_input")
        raise HTTPException(status_code=400, detail=str(e))

    except Exception as e:
        record_export_failure("csv", "error")
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_export("csv", result.transaction_count, result.control_sum)
    log_export(request_id, result.month, "csv", result.transaction_count, result.control_sum, duration_ms)

    return _download(result)
