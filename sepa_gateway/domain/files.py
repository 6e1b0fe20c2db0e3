"""Export file naming and the payload handed to the download sink"""

from dataclasses import dataclass
from datetime import date

from sepa_gateway.utils.date_utils import format_date

SEPA_MEDIA_TYPE = "application/xml;charset=utf-8"
CSV_MEDIA_TYPE = "text/csv;charset=utf-8"


@dataclass(frozen=True)
class ExportFile:
    """Produced file: what the caller persists or streams as a download"""

    filename: str
    media_type: str
    content: bytes

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


def sepa_filename(month: str, export_date: date) -> str:
    return f"sepa-direct-debit-{month}-{format_date(export_date)}.xml"


def csv_filename(month: str) -> str:
    return f"credits-{month}.csv"
