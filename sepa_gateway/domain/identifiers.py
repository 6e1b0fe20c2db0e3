"""Message, payment, end-to-end and mandate identifier generation"""

import hashlib
import re
import secrets
import string
import time
from typing import Protocol

# ISO 20022 Max35Text
MAX_ID_LENGTH = 35

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9-]")
_BASE36_ALPHABET = string.digits + string.ascii_lowercase


class IdentifierSource(Protocol):
    """Source of time and randomness, swappable for deterministic tests"""

    def timestamp_ms(self) -> int:
        ...

    def random_suffix(self) -> str:
        ...


class SystemIdentifierSource:
    """Wall clock + cryptographic randomness"""

    def __init__(self, suffix_length: int = 6):
        self.suffix_length = suffix_length

    def timestamp_ms(self) -> int:
        return time.time_ns() // 1_000_000

    def random_suffix(self) -> str:
        return "".join(secrets.choice(_BASE36_ALPHABET) for _ in range(self.suffix_length))


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("Only non-negative values can be encoded")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def safe_key(value: object) -> str:
    """Keep only characters that are valid in every generated identifier"""
    return _UNSAFE_CHARS.sub("", str(value))


class IdentifierGenerator:
    """
    Identifiers for one export run.

    Requirements:
    - Message id and payment-information id unique per run and distinct from each other
    - End-to-end id unique per transaction within the run
    - Mandate id a pure function of the member id (standing mandate)
    - Every id within [A-Za-z0-9-] and at most 35 characters
    """

    MESSAGE_PREFIX = "MSG"
    PAYMENT_PREFIX = "PMT"
    END_TO_END_PREFIX = "E2E"
    MANDATE_PREFIX = "MANDATE"

    def __init__(self, source: IdentifierSource | None = None):
        self.source = source or SystemIdentifierSource()
        self.run_stamp = self.source.timestamp_ms()

    def _run_level_id(self, prefix: str) -> str:
        suffix = safe_key(self.source.random_suffix())
        return f"{prefix}-{self.run_stamp}-{suffix}"[:MAX_ID_LENGTH]

    def message_id(self) -> str:
        return self._run_level_id(self.MESSAGE_PREFIX)

    def payment_id(self) -> str:
        return self._run_level_id(self.PAYMENT_PREFIX)

    def end_to_end_id(self, debt_id: str, sequence: int) -> str:
        """E2E-<debt key>-<run stamp>-<sequence>; the debt key is cut to fit"""
        token = f"{to_base36(self.run_stamp)}-{sequence}"
        room = MAX_ID_LENGTH - len(self.END_TO_END_PREFIX) - len(token) - 2
        key = safe_key(debt_id)[: max(room, 0)]
        if not key:
            return f"{self.END_TO_END_PREFIX}-{token}"[:MAX_ID_LENGTH]
        return f"{self.END_TO_END_PREFIX}-{key}-{token}"

    def mandate_id(self, member_id: str) -> str:
        return mandate_id_for(member_id)


def mandate_id_for(member_id: str) -> str:
    """
    Deterministic mandate reference for a member.

    Member ids that are too long or contain characters outside [A-Za-z0-9-]
    are replaced by a SHA-256 prefix, so the reference stays stable and within 35 characters.
    """
    prefix = f"{IdentifierGenerator.MANDATE_PREFIX}-"
    key = safe_key(member_id)
    if not key or key != str(member_id) or len(prefix) + len(key) > MAX_ID_LENGTH:
        digest = hashlib.sha256(str(member_id).encode("utf-8")).hexdigest().upper()
        key = digest[: MAX_ID_LENGTH - len(prefix)]
    return f"{prefix}{key}"
