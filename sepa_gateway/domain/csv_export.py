"""CSV fallback export of the selected debts"""

import csv
import io
from typing import Sequence

from sepa_gateway.domain.models import DebtRecord
from sepa_gateway.utils.money import format_amount

CSV_HEADER = ["ID", "Bazkidea", "IBAN", "Kopurua"]


def generate_csv(selection: Sequence[DebtRecord]) -> str:
    """
    Render the selection as ID,Bazkidea,IBAN,Kopurua rows.

    Amounts have two decimals and no currency symbol; a missing IBAN is an
    empty cell. Fields holding commas or quotes are quoted.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for debt in selection:
        writer.writerow([debt.id, debt.member_name, debt.iban or "", format_amount(debt.amount)])
    return buffer.getvalue()
