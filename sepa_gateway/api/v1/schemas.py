"""Pydantic schemas for API request/response validation"""

from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional

from sepa_gateway.domain.models import DebtRecord


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DebtSchema(CamelModel):
    """One candidate debt as shown in (and returned from) the export wizard"""

    id: str = Field(..., min_length=1)
    member_id: str = Field(..., min_length=1)
    member_name: str
    iban: Optional[str] = None
    amount: Decimal = Field(..., ge=0)
    selected: bool
    status: str = "pending"

    def to_domain(self) -> DebtRecord:
        return DebtRecord(
            id=self.id,
            member_id=self.member_id,
            member_name=self.member_name,
            iban=self.iban,
            amount=self.amount,
            selected=self.selected,
            status=self.status,
        )

    @classmethod
    def from_domain(cls, debt: DebtRecord) -> "DebtSchema":
        return cls(
            id=debt.id,
            member_id=debt.member_id,
            member_name=debt.member_name,
            iban=debt.iban,
            amount=debt.amount,
            selected=debt.selected,
            status=debt.status,
        )


class SepaExportRequest(CamelModel):
    """Request body for POST /v1/credits/sepa-export/xml"""

    month: str = Field(..., description="Export month, YYYY-MM")
    execution_date: Optional[str] = Field(None, description="Requested collection date, YYYY-MM-DD")
    debts: List[DebtSchema]


class CsvExportRequest(CamelModel):
    """Request body for POST /v1/credits/sepa-export/csv"""

    month: str = Field(..., description="Export month, YYYY-MM")
    debts: List[DebtSchema]


class ExportHistoryItem(BaseModel):
    """Single produced SEPA file"""

    export_id: str
    message_id: str
    payment_id: str
    month: str
    filename: str
    transaction_count: int
    control_sum: str
    created_at: str


class ExportHistoryResponse(BaseModel):
    """Response for GET /v1/sepa/exports"""

    month: Optional[str] = None
    exports: List[ExportHistoryItem]
