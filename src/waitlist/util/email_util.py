"""
Email address helpers for waitlist signups.
"""
import hashlib
import re
from datetime import datetime, timezone

# ECMAScript whitespace and line terminators, the set browsers trim. Python's \s
# differs: it misses U+FEFF and adds U+001C-U+001F and U+0085.
WHITESPACE = r"\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"

_EDGE_WHITESPACE_RE = re.compile(rf"\A[{WHITESPACE}]+|[{WHITESPACE}]+\Z")

# single '@', at least one '.' after it, no whitespace anywhere
EMAIL_REGEX = re.compile(rf"[^@{WHITESPACE}]+@[^@{WHITESPACE}]+\.[^@{WHITESPACE}]+")


def normalize_email(raw: str) -> str:
    """Trim surrounding whitespace and lowercase."""
    return _EDGE_WHITESPACE_RE.sub("", raw or "").lower()


def is_valid_email(email: str) -> bool:
    """
    Check that an already normalized address is syntactically plausible.

    Args:
        email: Normalized email address

    Returns:
        True if the address matches EMAIL_REGEX, False otherwise
    """
    if not email or not isinstance(email, str):
        return False
    return bool(EMAIL_REGEX.fullmatch(email))


def hash_email(email: str) -> str:
    """
    SHA-256 digest of a normalized email, as lowercase hex.

    Args:
        email: Normalized email address

    Returns:
        64 character hex string
    """
    return hashlib.sha256(email.encode("utf-8")).hexdigest()


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a 'Z' suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
