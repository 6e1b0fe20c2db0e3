"""Export pipeline: select debts, build the document, wrap it as a file"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Union

from sepa_gateway.domain.csv_export import generate_csv
from sepa_gateway.domain.files import (
    CSV_MEDIA_TYPE,
    SEPA_MEDIA_TYPE,
    ExportFile,
    csv_filename,
    sepa_filename,
)
from sepa_gateway.domain.identifiers import IdentifierGenerator
from sepa_gateway.domain.models import CreditorConfig, DebtRecord
from sepa_gateway.domain.selection import select_exportable_debts
from sepa_gateway.domain.sepa import (
    DEFAULT_MANDATE_SIGNATURE_DATE,
    build_sepa_document,
    render_sepa_xml,
)
from sepa_gateway.utils.date_utils import parse_execution_date, validate_month
from sepa_gateway.utils.money import control_sum


@dataclass(frozen=True)
class ExportResult:
    """Produced file plus the figures worth auditing"""

    file: ExportFile
    month: str
    transaction_count: int
    control_sum: Decimal
    message_id: str | None = None
    payment_id: str | None = None


def export_sepa_xml(
    candidates: Iterable[DebtRecord],
    creditor: CreditorConfig,
    month: str,
    execution_date: Union[str, date, datetime],
    identifiers: IdentifierGenerator | None = None,
    now: datetime | None = None,
    mandate_signature_date: date = DEFAULT_MANDATE_SIGNATURE_DATE,
) -> ExportResult:
    """
    Produce the SEPA Direct Debit file for a month.

    Flow:
    1. Validate month and execution date
    2. Select exportable debts (fails fast on an empty selection)
    3. Build and render the pain.008 document
    4. Wrap as sepa-direct-debit-<month>-<export date>.xml

    Raises:
        InvalidExportMonth, InvalidExecutionDate, EmptySelectionError:
            before any text is generated
    """
    validate_month(month)
    collection_date = parse_execution_date(execution_date)
    selection = select_exportable_debts(candidates)

    now = now or datetime.now()
    document = build_sepa_document(
        selection,
        creditor,
        collection_date,
        identifiers=identifiers,
        created_at=now,
        mandate_signature_date=mandate_signature_date,
    )
    xml = render_sepa_xml(document)

    header = document.group_header
    return ExportResult(
        file=ExportFile(
            filename=sepa_filename(month, now.date()),
            media_type=SEPA_MEDIA_TYPE,
            content=xml.encode("utf-8"),
        ),
        month=month,
        transaction_count=header.transaction_count,
        control_sum=header.control_sum,
        message_id=header.message_id,
        payment_id=document.payment_information.payment_id,
    )


def export_csv(candidates: Iterable[DebtRecord], month: str) -> ExportResult:
    """Produce credits-<month>.csv over the same selection rules as the SEPA file"""
    validate_month(month)
    selection = select_exportable_debts(candidates)

    return ExportResult(
        file=ExportFile(
            filename=csv_filename(month),
            media_type=CSV_MEDIA_TYPE,
            content=generate_csv(selection).encode("utf-8"),
        ),
        month=month,
        transaction_count=len(selection),
        control_sum=control_sum(debt.amount for debt in selection),
    )
