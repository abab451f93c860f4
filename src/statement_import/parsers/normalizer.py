"""Merchant description cleanup.

Turns a raw statement description such as
"GOOGLE*YOUTUBEPREMIUM 650253000 HK" into a short readable label
("Google Youtubepremium Hk"). The transformation is lossy.
"""

import re

MAX_TOKENS = 4
FALLBACK_LENGTH = 30

_WHITESPACE = re.compile(r"\s+")
_LONG_DIGIT_RUN = re.compile(r"\d{5,}")
_CODE_SUFFIX = re.compile(r"\s*-\s*[A-Z]{3}-\d+")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def capitalize_token(token: str) -> str:
    lower = token.lower()
    return lower[:1].upper() + lower[1:]


def clean_description(raw: str) -> str:
    """Clean a raw merchant description into a display label.

    Steps, in order: collapse whitespace, drop digit runs of five or more,
    drop "-XXX-123" style suffixes, turn asterisks into spaces, then keep
    the first four tokens longer than one character, capitalised.

    Args:
        raw: Description as it appears on the statement line

    Returns:
        Cleaned label, or the first 30 characters of `raw` if nothing survives
    """
    name = _WHITESPACE.sub(" ", raw)
    name = _LONG_DIGIT_RUN.sub("", name)
    name = _CODE_SUFFIX.sub("", name)
    name = name.replace("*", " ").strip()

    tokens = [token for token in name.split() if len(token) > 1][:MAX_TOKENS]
    name = " ".join(capitalize_token(token) for token in tokens)

    return name if name else raw[:FALLBACK_LENGTH]
