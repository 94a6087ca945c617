from __future__ import annotations

from decimal import Decimal

from src.shared.accounts import (
    TEMP_PASSWORD_ALPHABET,
    build_referral_link,
    generate_temp_password,
    normalize_username,
    username_to_email,
)
from src.shared.formatting import NBSP, format_currency, format_month_label


def test_format_currency_groups_thousands_without_cents() -> None:
    assert format_currency(Decimal("50")) == f"€{NBSP}50"
    assert format_currency(1250) == f"€{NBSP}1.250"
    assert format_currency(Decimal("1234567.5")) == f"€{NBSP}1.234.568"
    assert format_currency(0) == f"€{NBSP}0"


def test_format_currency_other_codes() -> None:
    assert format_currency(5, "usd") == f"${NBSP}5"
    assert format_currency(5, "CHF") == f"CHF{NBSP}5"


def test_format_month_label() -> None:
    assert format_month_label("2024-03-01") == "mrt 24"
    assert format_month_label("2009-10-01") == "okt 09"


def test_normalize_username() -> None:
    assert normalize_username("  Jan Jansen ") == "jan-jansen"
    assert normalize_username("Über_Partner!!") == "ber_partner"
    assert normalize_username("a  \t b") == "a-b"
    assert normalize_username("!!!") == ""


def test_username_to_email() -> None:
    assert username_to_email("jan-jansen", "affiliate.getscora.app") == "jan-jansen@affiliate.getscora.app"


def test_generate_temp_password() -> None:
    password = generate_temp_password(16)
    assert len(password) == 16
    assert set(password) <= set(TEMP_PASSWORD_ALPHABET)


def test_build_referral_link_encodes_username() -> None:
    assert build_referral_link("https://app.scora.nl", "jan-jansen") == "https://app.scora.nl?ref=jan-jansen"
    assert build_referral_link("https://app.scora.nl", "a b&c") == "https://app.scora.nl?ref=a%20b%26c"
