"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from sepa_gateway.config import settings
from sepa_gateway.domain.identifiers import IdentifierSource, SystemIdentifierSource
from sepa_gateway.domain.models import CreditorConfig


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_creditor_config() -> CreditorConfig:
    """Society creditor identity from settings, fixed for one export"""
    return CreditorConfig(
        name=settings.sepa_creditor_name,
        iban=settings.sepa_creditor_iban,
        creditor_id=settings.sepa_creditor_id,
        bic=settings.sepa_creditor_bic or None,
        country=settings.sepa_creditor_country,
    )


def get_identifier_source() -> IdentifierSource:
    """Clock/randomness used for message, payment and end-to-end ids"""
    return SystemIdentifierSource()
