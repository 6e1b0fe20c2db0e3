"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from sepa_gateway.domain.exceptions import InvalidDebtRecordError


@dataclass
class DebtRecord:
    """One member's outstanding amount for a month"""

    id: str
    member_id: str
    member_name: str
    iban: Optional[str]
    amount: Decimal
    selected: bool = False
    status: str = "pending"

    def __post_init__(self) -> None:
        for name in ("id", "member_id", "member_name", "iban"):
            value = getattr(self, name)
            if value is None:
                continue
            try:
                str(value).encode("utf-8")
            except UnicodeEncodeError as e:
                raise InvalidDebtRecordError(f"Debt {self.id!r} has text that is not valid UTF-8 in {name}") from e

        if not isinstance(self.amount, Decimal):
            try:
                self.amount = Decimal(str(self.amount))
            except InvalidOperation as e:
                raise InvalidDebtRecordError(f"Debt {self.id!r} has a non-numeric amount: {self.amount!r}") from e
        if not self.amount.is_finite():
            raise InvalidDebtRecordError(f"Debt {self.id!r} has a non-finite amount: {self.amount}")
        if self.amount < 0:
            raise InvalidDebtRecordError(f"Debt {self.id} has a negative amount: {self.amount}")

    @property
    def has_iban(self) -> bool:
        return bool(self.iban and self.iban.strip())


@dataclass(frozen=True)
class CreditorConfig:
    """The society's own identity as SEPA creditor"""

    name: str
    iban: str
    creditor_id: str
    bic: Optional[str] = None
    country: str = "ES"


@dataclass(frozen=True)
class DirectDebitTransaction:
    """Single DrctDbtTxInf block"""

    end_to_end_id: str
    amount: Decimal
    mandate_id: str
    mandate_signature_date: date
    debtor_bic: str
    debtor_name: str
    debtor_country: str
    debtor_iban: str
    remittance_info: str


@dataclass(frozen=True)
class PaymentInformation:
    """PmtInf block: one collection batch for the creditor"""

    payment_id: str
    transaction_count: int
    control_sum: Decimal
    requested_collection_date: date
    creditor: CreditorConfig
    transactions: List[DirectDebitTransaction] = field(default_factory=list)
    payment_method: str = "DD"
    service_level: str = "SEPA"
    local_instrument: str = "CORE"
    sequence_type: str = "RCUR"
    charge_bearer: str = "SHAR"


@dataclass(frozen=True)
class GroupHeader:
    """GrpHdr block"""

    message_id: str
    created_at: datetime
    transaction_count: int
    control_sum: Decimal
    initiating_party_name: str
    initiating_party_id: str


@dataclass(frozen=True)
class SepaDocument:
    """pain.008.001.02 Direct Debit Initiation, built and discarded per export"""

    group_header: GroupHeader
    payment_information: PaymentInformation
