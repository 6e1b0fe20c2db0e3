"""Unit tests for identifier generation"""

import re
from sepa_gateway.domain.identifiers import (
    MAX_ID_LENGTH,
    IdentifierGenerator,
    SystemIdentifierSource,
    mandate_id_for,
    to_base36,
)

SAFE_ID = re.compile(r"^[A-Za-z0-9-]{1,35}$")


def test_run_level_ids_exact_values(make_identifiers):
    generator = make_identifiers(1_700_000_000_000)

    assert generator.message_id() == "MSG-1700000000000-aaaaaa"
    assert generator.payment_id() == "PMT-1700000000000-bbbbbb"


def test_message_and_payment_ids_distinct():
    generator = IdentifierGenerator(SystemIdentifierSource())
    assert generator.message_id() != generator.payment_id()


def test_end_to_end_id_exact_value(make_identifiers):
    generator = make_identifiers(1_700_000_000_000)
    stamp = to_base36(1_700_000_000_000)

    assert generator.end_to_end_id("c1", 1) == f"E2E-c1-{stamp}-1"


def test_end_to_end_ids_unique_within_run(identifiers):
    generator = identifiers
    ids = [generator.end_to_end_id("same-debt", seq) for seq in range(1, 101)]

    assert len(set(ids)) == 100


def test_end_to_end_id_long_debt_id_fits():
    generator = IdentifierGenerator(SystemIdentifierSource())
    debt_id = "3f2b9c1e-8a4d-4e6f-9b2a-7c5d1e0f3a9b"

    e2e = generator.end_to_end_id(debt_id, 1234)

    assert len(e2e) <= MAX_ID_LENGTH
    assert SAFE_ID.match(e2e)
    assert e2e.endswith("-1234")


def test_end_to_end_id_strips_unsafe_characters(identifiers):
    generator = identifiers
    e2e = generator.end_to_end_id("a&b<c>'d\"", 2)

    assert SAFE_ID.match(e2e)
    assert e2e.startswith("E2E-abcd-")


def test_mandate_id_stable_across_runs(make_identifiers):
    first = make_identifiers(1)
    second = IdentifierGenerator(SystemIdentifierSource())

    assert first.mandate_id("m1") == second.mandate_id("m1") == "MANDATE-m1"


def test_mandate_id_long_member_id_hashed_deterministically():
    member_id = "3f2b9c1e-8a4d-4e6f-9b2a-7c5d1e0f3a9b"

    mandate = mandate_id_for(member_id)

    assert mandate == mandate_id_for(member_id)
    assert mandate.startswith("MANDATE-")
    assert len(mandate) == MAX_ID_LENGTH
    assert SAFE_ID.match(mandate)


def test_mandate_id_distinguishes_ids_that_differ_only_in_unsafe_characters():
    assert mandate_id_for("m.1") != mandate_id_for("m1")


def test_system_source_suffix_shape():
    suffix = SystemIdentifierSource().random_suffix()
    assert re.match(r"^[0-9a-z]{6}$", suffix)


def test_to_base36():
    assert to_base36(0) == "0"
    assert to_base36(35) == "z"
    assert to_base36(36) == "10"
