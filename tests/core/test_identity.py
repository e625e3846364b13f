"""Identity & ticket codes — normalization and ticket id shape."""

import pytest

from canteen.core.domain_types import TICKET_ID_ALPHABET, TICKET_ID_LENGTH
from canteen.core.identity import (
    generate_ticket_id, is_ticket_id, normalize_identity_key,
)


@pytest.mark.parametrize("raw", [
    "12.345.678-k", "12345678-K", " 12345678k ", "12 345 678 K",
])
def test_formatting_variants_share_one_key(raw):
    assert normalize_identity_key(raw) == "12345678K"


def test_normalization_is_idempotent():
    once = normalize_identity_key("9.876.543-2")
    assert normalize_identity_key(once) == once


def test_punctuation_only_normalizes_to_empty():
    assert normalize_identity_key(".-  ") == ""


def test_generated_ticket_id_shape():
    for _ in range(50):
        ticket = generate_ticket_id()
        assert len(ticket) == TICKET_ID_LENGTH
        assert all(ch in TICKET_ID_ALPHABET for ch in ticket)
        assert is_ticket_id(ticket)


def test_generated_ticket_id_uses_injected_choice():
    assert generate_ticket_id(choice=lambda alphabet: "Z") == "ZZZZZZZZ"


@pytest.mark.parametrize("value", ["abcdefgh", "ABC", "ABCDEFGHI", "ABCD-FGH"])
def test_is_ticket_id_rejects_bad_shapes(value):
    assert not is_ticket_id(value)
