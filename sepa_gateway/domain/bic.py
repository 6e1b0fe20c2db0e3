"""BIC resolution from Spanish IBAN bank codes"""

import logging
from types import MappingProxyType
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_BIC = "BANKESMM"
SUPPORTED_COUNTRY = "ES"

# ES IBAN layout: ESkk BBBB SSSS ..., bank code at positions 4-8
BANK_CODE_START = 4
BANK_CODE_END = 8
MIN_IBAN_LENGTH = 10

# Static stand-in for a bank directory lookup
SPANISH_BANK_BICS: Mapping[str, str] = MappingProxyType(
    {
        "2100": "BSCHESMM",
        "0049": "BSCHESMM",
        "0182": "BBVAESMM",
        "0075": "POPUESMM",
        "0081": "SABDESMM",
        "0061": "BKEAESMM",
        "0128": "BANKESMM",
        "0169": "OPENESMM",
        "0239": "CAIXESBB",
        "1490": "CAIXESBB",
        "2038": "CAIXESBB",
        "2105": "CAIXESBB",
        "2052": "CAIXESBB",
        "0030": "CAIXESBB",
        "0065": "CAIXESBB",
    }
)


def normalize_iban(iban: Optional[str]) -> str:
    """Strip whitespace and upper-case an IBAN"""
    if not iban:
        return ""
    return "".join(iban.split()).upper()


def resolve_bic(iban: Optional[str], table: Mapping[str, str] = SPANISH_BANK_BICS) -> str:
    """
    Derive the debtor agent BIC from an IBAN.

    Requirements:
    - ES-prefixed IBANs of at least 10 characters: look up the 4-digit bank
      code in the static table
    - Unknown bank code, other countries or malformed input: DEFAULT_BIC
    - Never raises; same input always yields the same BIC
    """
    normalized = normalize_iban(iban)
    if normalized.startswith(SUPPORTED_COUNTRY) and len(normalized) >= MIN_IBAN_LENGTH:
        bank_code = normalized[BANK_CODE_START:BANK_CODE_END]
        bic = table.get(bank_code)
        if bic is not None:
            return bic
        logger.debug("Unknown bank code, using default BIC", extra={"bank_code": bank_code})
        return DEFAULT_BIC

    logger.debug("IBAN not resolvable to a Spanish bank code, using default BIC")
    return DEFAULT_BIC
