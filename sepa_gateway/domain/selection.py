"""Selection of the debts that can be exported"""

from typing import Iterable, List

from sepa_gateway.domain.exceptions import EmptySelectionError
from sepa_gateway.domain.models import DebtRecord


def is_exportable(debt: DebtRecord) -> bool:
    """Selected in the UI and holding an account to debit"""
    return bool(debt.selected) and debt.has_iban


def select_exportable_debts(candidates: Iterable[DebtRecord]) -> List[DebtRecord]:
    """
    Filter candidates down to the debts that go into the export.

    A debt without an IBAN is dropped whatever its selected flag says.
    Input order is preserved.

    Raises:
        EmptySelectionError: If nothing is left to export
    """
    selection = [debt for debt in candidates if is_exportable(debt)]
    if not selection:
        raise EmptySelectionError()
    return selection
