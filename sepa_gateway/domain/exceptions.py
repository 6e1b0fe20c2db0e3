"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class EmptySelectionError(DomainException):
    """No debt is both selected and holding an IBAN"""

    def __init__(self, message: str = "No valid debits selected for SEPA export"):
        super().__init__(message)


class InvalidExecutionDate(DomainException):
    """Requested collection date could not be parsed"""

    pass


class InvalidExportMonth(DomainException):
    """Export month is not in YYYY-MM form"""

    pass


class InvalidDebtRecordError(DomainException):
    """Debt record data is malformed (e.g. negative amount)"""

    pass
