"""SEPA Direct Debit document builder - ISO 20022 pain.008.001.02"""

from datetime import date, datetime
from typing import List, Sequence

from sepa_gateway.domain.bic import normalize_iban, resolve_bic
from sepa_gateway.domain.escaping import escape_xml_text
from sepa_gateway.domain.exceptions import EmptySelectionError
from sepa_gateway.domain.identifiers import IdentifierGenerator
from sepa_gateway.domain.models import (
    CreditorConfig,
    DebtRecord,
    DirectDebitTransaction,
    GroupHeader,
    PaymentInformation,
    SepaDocument,
)
from sepa_gateway.utils.date_utils import format_date, format_datetime
from sepa_gateway.utils.money import control_sum, format_amount, to_cents

PAIN_008_NAMESPACE = "urn:iso:std:iso:20022:tech:xsd:pain.008.001.02"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
CURRENCY = "EUR"

# ISO 20022 Max70Text / Max140Text
MAX_NAME_LENGTH = 70
MAX_REMITTANCE_LENGTH = 140

# Placeholder until mandates carry their real signature date
DEFAULT_MANDATE_SIGNATURE_DATE = date(2023, 1, 1)


def remittance_text(debtor_name: str, on: date) -> str:
    return f"SEPA cobro {debtor_name} - {format_date(on)}"


def debtor_country(iban: str, fallback: str) -> str:
    """Country of the debtor account, taken from the IBAN prefix"""
    prefix = iban[:2]
    return prefix if len(prefix) == 2 and prefix.isalpha() else fallback


def build_sepa_document(
    selection: Sequence[DebtRecord],
    creditor: CreditorConfig,
    execution_date: date,
    identifiers: IdentifierGenerator | None = None,
    created_at: datetime | None = None,
    mandate_signature_date: date = DEFAULT_MANDATE_SIGNATURE_DATE,
) -> SepaDocument:
    """
    Assemble the document model for an already validated selection.

    Requirements:
    - Control sum is the sum of the per-transaction amounts rounded to cents
    - Transaction count equals the number of transactions
    - One DrctDbtTxInf per debt, in selection order

    Raises:
        EmptySelectionError: If called with nothing to collect
    """
    if not selection:
        raise EmptySelectionError()

    identifiers = identifiers or IdentifierGenerator()
    created_at = created_at or datetime.now()

    transactions: List[DirectDebitTransaction] = []
    for sequence, debt in enumerate(selection, start=1):
        iban = normalize_iban(debt.iban)
        transactions.append(
            DirectDebitTransaction(
                end_to_end_id=identifiers.end_to_end_id(debt.id, sequence),
                amount=to_cents(debt.amount),
                mandate_id=identifiers.mandate_id(debt.member_id),
                mandate_signature_date=mandate_signature_date,
                debtor_bic=resolve_bic(iban),
                debtor_name=debt.member_name,
                debtor_country=debtor_country(iban, creditor.country),
                debtor_iban=iban,
                remittance_info=remittance_text(debt.member_name, created_at.date()),
            )
        )

    total = control_sum(t.amount for t in transactions)
    count = len(transactions)

    group_header = GroupHeader(
        message_id=identifiers.message_id(),
        created_at=created_at,
        transaction_count=count,
        control_sum=total,
        initiating_party_name=creditor.name,
        initiating_party_id=creditor.creditor_id,
    )
    payment_information = PaymentInformation(
        payment_id=identifiers.payment_id(),
        transaction_count=count,
        control_sum=total,
        requested_collection_date=execution_date,
        creditor=creditor,
        transactions=transactions,
    )
    return SepaDocument(group_header=group_header, payment_information=payment_information)


def _render_group_header(header: GroupHeader) -> List[str]:
    return [
        "    <GrpHdr>",
        f"      <MsgId>{header.message_id}</MsgId>",
        f"      <CreDtTm>{format_datetime(header.created_at)}</CreDtTm>",
        f"      <NbOfTxs>{header.transaction_count}</NbOfTxs>",
        f"      <CtrlSum>{format_amount(header.control_sum)}</CtrlSum>",
        "      <InitgPty>",
        f"        <Nm>{escape_xml_text(header.initiating_party_name, MAX_NAME_LENGTH)}</Nm>",
        "        <Id>",
        "          <OrgId>",
        "            <Othr>",
        f"              <Id>{escape_xml_text(header.initiating_party_id)}</Id>",
        "              <SchmeNm>",
        "                <Cd>CUST</Cd>",
        "              </SchmeNm>",
        "            </Othr>",
        "          </OrgId>",
        "        </Id>",
        "      </InitgPty>",
        "    </GrpHdr>",
    ]


def _render_transaction(tx: DirectDebitTransaction) -> List[str]:
    debtor_name = escape_xml_text(tx.debtor_name, MAX_NAME_LENGTH)
    return [
        "      <DrctDbtTxInf>",
        "        <PmtId>",
        f"          <EndToEndId>{tx.end_to_end_id}</EndToEndId>",
        "        </PmtId>",
        f'        <InstdAmt Ccy="{CURRENCY}">{format_amount(tx.amount)}</InstdAmt>',
        "        <DrctDbtTx>",
        "          <MndtRltdInf>",
        f"            <MndtId>{tx.mandate_id}</MndtId>",
        f"            <DtOfSgntr>{format_date(tx.mandate_signature_date)}</DtOfSgntr>",
        "            <AmdmntInd>false</AmdmntInd>",
        "          </MndtRltdInf>",
        "        </DrctDbtTx>",
        "        <DbtrAgt>",
        "          <FinInstnId>",
        f"            <BIC>{tx.debtor_bic}</BIC>",
        "          </FinInstnId>",
        "        </DbtrAgt>",
        "        <Dbtr>",
        f"          <Nm>{debtor_name}</Nm>",
        "          <PstlAdr>",
        f"            <Ctry>{tx.debtor_country}</Ctry>",
        f"            <AdrLine>{debtor_name}</AdrLine>",
        "          </PstlAdr>",
        "        </Dbtr>",
        "        <DbtrAcct>",
        "          <Id>",
        f"            <IBAN>{escape_xml_text(tx.debtor_iban)}</IBAN>",
        "          </Id>",
        f"          <Ccy>{CURRENCY}</Ccy>",
        "        </DbtrAcct>",
        "        <RmtInf>",
        f"          <Ustrd>{escape_xml_text(tx.remittance_info, MAX_REMITTANCE_LENGTH)}</Ustrd>",
        "        </RmtInf>",
        "      </DrctDbtTxInf>",
    ]


def _render_payment_information(info: PaymentInformation) -> List[str]:
    creditor = info.creditor
    creditor_name = escape_xml_text(creditor.name, MAX_NAME_LENGTH)
    lines = [
        "    <PmtInf>",
        f"      <PmtInfId>{info.payment_id}</PmtInfId>",
        f"      <PmtMtd>{info.payment_method}</PmtMtd>",
        f"      <NbOfTxs>{info.transaction_count}</NbOfTxs>",
        f"      <CtrlSum>{format_amount(info.control_sum)}</CtrlSum>",
        "      <PmtTpInf>",
        "        <SvcLvl>",
        f"          <Cd>{info.service_level}</Cd>",
        "        </SvcLvl>",
        "        <LclInstrm>",
        f"          <Cd>{info.local_instrument}</Cd>",
        "        </LclInstrm>",
        "        <SeqTp>",
        f"          <Cd>{info.sequence_type}</Cd>",
        "        </SeqTp>",
        "      </PmtTpInf>",
        f"      <ReqdColltnDt>{format_date(info.requested_collection_date)}</ReqdColltnDt>",
        "      <Cdtr>",
        f"        <Nm>{creditor_name}</Nm>",
        "        <PstlAdr>",
        f"          <Ctry>{escape_xml_text(creditor.country)}</Ctry>",
        f"          <AdrLine>{creditor_name}</AdrLine>",
        "        </PstlAdr>",
        "      </Cdtr>",
        "      <CdtrAcct>",
        "        <Id>",
        f"          <IBAN>{escape_xml_text(normalize_iban(creditor.iban))}</IBAN>",
        "        </Id>",
        f"        <Ccy>{CURRENCY}</Ccy>",
        "      </CdtrAcct>",
        "      <CdtrAgt>",
        "        <FinInstnId>",
    ]
    if creditor.bic:
        lines.append(f"          <BIC>{escape_xml_text(creditor.bic)}</BIC>")
    lines += [
        "        </FinInstnId>",
        "      </CdtrAgt>",
        f"      <ChrgBr>{info.charge_bearer}</ChrgBr>",
    ]
    for tx in info.transactions:
        lines += _render_transaction(tx)
    lines.append("    </PmtInf>")
    return lines


def render_sepa_xml(document: SepaDocument) -> str:
    """Serialize the document model; free text is escaped here and only here"""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<Document xmlns="{PAIN_008_NAMESPACE}" xmlns:xsi="{XSI_NAMESPACE}">',
        "  <CstmrDrctDbtInitn>",
    ]
    lines += _render_group_header(document.group_header)
    lines += _render_payment_information(document.payment_information)
    lines += [
        "  </CstmrDrctDbtInitn>",
        "</Document>",
    ]
    return "\n".join(lines) + "\n"


def generate_sepa_xml(
    selection: Sequence[DebtRecord],
    creditor: CreditorConfig,
    execution_date: date,
    identifiers: IdentifierGenerator | None = None,
    created_at: datetime | None = None,
    mandate_signature_date: date = DEFAULT_MANDATE_SIGNATURE_DATE,
) -> str:
    """Main entry point: validated selection + creditor + date → XML text"""
    document = build_sepa_document(
        selection,
        creditor,
        execution_date,
        identifiers=identifiers,
        created_at=created_at,
        mandate_signature_date=mandate_signature_date,
    )
    return render_sepa_xml(document)
