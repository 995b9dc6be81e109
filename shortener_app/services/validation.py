"""
Syntactic checks for destination URLs and short codes.

These are deliberately shallow: is_valid_url only looks at the scheme prefix
and the length, it doesn't parse hosts or reject spaces.
"""

import string

CODE_CHARS = frozenset(string.ascii_letters + string.digits + "-_")

MIN_URL_LENGTH = 10
MIN_CODE_LENGTH = 3
MAX_CODE_LENGTH = 32


def is_valid_url(url: str) -> bool:
    """True if url is at least 10 chars and starts with http:// or https://"""
    if len(url) < MIN_URL_LENGTH:
        return False
    return url.startswith(("http://", "https://"))


def is_valid_code(code: str) -> bool:
    """True if every character is alphanumeric, '-' or '_'.

    The empty string passes; use is_valid_code_length to reject it.
    """
    return all(c in CODE_CHARS for c in code)


def is_valid_code_length(code: str) -> bool:
    return MIN_CODE_LENGTH <= len(code) <= MAX_CODE_LENGTH
