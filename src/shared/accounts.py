from __future__ import annotations

import re
import secrets
from urllib.parse import quote

TEMP_PASSWORD_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz23456789!@#"

_WHITESPACE_RE = re.compile(r"\s+")
_DISALLOWED_RE = re.compile(r"[^a-z0-9_-]")


def normalize_username(value: str) -> str:
    """Lowercase slug used both as login name and as referral code.

    Whitespace runs become ``-`` and anything outside ``[a-z0-9_-]`` is
    dropped, so the result may be empty.
    """
    collapsed = _WHITESPACE_RE.sub("-", value.strip().lower())
    return _DISALLOWED_RE.sub("", collapsed)


def username_to_email(username: str, domain: str) -> str:
    return f"{username}@{domain}"


def generate_temp_password(length: int = 12) -> str:
    return "".join(secrets.choice(TEMP_PASSWORD_ALPHABET) for _ in range(length))


def build_referral_link(base_url: str, username: str) -> str:
    return f"{base_url}?ref={quote(username, safe='')}"
