"""Unit tests for the export pipeline and download payloads"""

import pytest
import xml.etree.ElementTree as ET
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import patch
from sepa_gateway.domain.exceptions import EmptySelectionError, InvalidExecutionDate, InvalidExportMonth
from sepa_gateway.domain.export import export_csv, export_sepa_xml
from sepa_gateway.domain.files import csv_filename, sepa_filename
from sepa_gateway.domain.models import DebtRecord


def test_export_sepa_xml_file(sample_debts, creditor, identifiers):
    now = datetime(2024, 6, 3, 9, 0, 0)
    result = export_sepa_xml(sample_debts, creditor, "2024-05", "2024-06-05", identifiers=identifiers, now=now)

    assert result.file.filename == "sepa-direct-debit-2024-05-2024-06-03.xml"
    assert result.file.media_type == "application/xml;charset=utf-8"
    assert result.file.content_disposition == 'attachment; filename="sepa-direct-debit-2024-05-2024-06-03.xml"'
    assert result.transaction_count == 3
    assert result.control_sum == Decimal("44.85")
    assert result.message_id == "MSG-1700000000000-aaaaaa"
    assert result.payment_id == "PMT-1700000000000-bbbbbb"
    ET.fromstring(result.file.content)


def test_export_sepa_xml_content_is_utf8(creditor):
    debts = [
        DebtRecord(id="c1", member_id="m1", member_name="Iñaki Muñoz", iban="ES7921000418450200051521",
                   amount=Decimal("5"), selected=True),
    ]
    result = export_sepa_xml(debts, creditor, "2024-05", date(2024, 6, 5))

    assert "Iñaki Muñoz".encode("utf-8") in result.file.content


def test_export_sepa_xml_accepts_datetime_execution_date(sample_debts, creditor):
    result = export_sepa_xml(sample_debts, creditor, "2024-05", "2024-06-05T00:00:00")

    assert b"<ReqdColltnDt>2024-06-05</ReqdColltnDt>" in result.file.content


def test_export_sepa_xml_empty_selection_never_builds(creditor):
    debts = [DebtRecord(id="c1", member_id="m1", member_name="Ane Zelaia", iban=None, amount=Decimal("25.00"))]

    with patch("sepa_gateway.domain.export.build_sepa_document") as builder:
        with pytest.raises(EmptySelectionError):
            export_sepa_xml(debts, creditor, "2024-05", "2024-06-05")

    builder.assert_not_called()


@pytest.mark.parametrize("execution_date", ["", "05/06/2024", "2024-13-01", None, 20240605])
def test_export_sepa_xml_invalid_execution_date(sample_debts, creditor, execution_date):
    with patch("sepa_gateway.domain.export.build_sepa_document") as builder:
        with pytest.raises(InvalidExecutionDate):
            export_sepa_xml(sample_debts, creditor, "2024-05", execution_date)

    builder.assert_not_called()


def test_export_sepa_xml_invalid_month(sample_debts, creditor):
    with pytest.raises(InvalidExportMonth):
        export_sepa_xml(sample_debts, creditor, "May 2024", "2024-06-05")


def test_mandate_ids_identical_across_exports(sample_debts, creditor, make_identifiers):
    first = export_sepa_xml(
        sample_debts, creditor, "2024-05", "2024-06-05",
        identifiers=make_identifiers(1),
    )
    second = export_sepa_xml(
        sample_debts, creditor, "2024-06", "2024-07-05",
        identifiers=make_identifiers(2),
    )

    ns = {"p": "urn:iso:std:iso:20022:tech:xsd:pain.008.001.02"}
    first_mandates = [e.text for e in ET.fromstring(first.file.content).findall(".//p:MndtId", ns)]
    second_mandates = [e.text for e in ET.fromstring(second.file.content).findall(".//p:MndtId", ns)]

    assert first_mandates == second_mandates == ["MANDATE-m1", "MANDATE-m2", "MANDATE-m3"]


def test_export_csv_file(sample_debts):
    result = export_csv(sample_debts, "2024-05")

    assert result.file.filename == "credits-2024-05.csv"
    assert result.file.media_type == "text/csv;charset=utf-8"
    assert result.transaction_count == 3
    assert result.control_sum == Decimal("44.85")
    assert result.message_id is None
    assert result.file.content.decode("utf-8").startswith("ID,Bazkidea,IBAN,Kopurua\n")


def test_export_csv_empty_selection():
    debts = [DebtRecord(id="c1", member_id="m1", member_name="Ane", iban=None, amount=Decimal("1"))]

    with pytest.raises(EmptySelectionError):
        export_csv(debts, "2024-05")


def test_filenames():
    assert sepa_filename("2024-05", date(2024, 6, 3)) == "sepa-direct-debit-2024-05-2024-06-03.xml"
    assert csv_filename("2024-05") == "credits-2024-05.csv"
