"""
Sanitization Utility Module
Cleans externally supplied identifiers and labels before they reach logs or
the terminal.
"""

import re
import unicodedata
from typing import Any

ANSI_ESCAPE_PATTERN = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')


def _strip_control(text: str) -> str:
    text = ANSI_ESCAPE_PATTERN.sub('', text)
    return "".join(ch for ch in text if ch == '\t' or (32 <= ord(ch) < 127) or ord(ch) > 159)


def sanitize_for_logging(value: Any, max_length: int = 64) -> str:
    """
    Render *value* safely for a log line.

    Assessment files are user supplied, so an unknown term or scenario id
    may carry CRLF sequences or terminal escapes. Newlines are escaped,
    control characters dropped and the result truncated.

    Args:
        value: Anything; non-strings are passed through ``str``
        max_length: Maximum length before truncation

    Returns:
        Sanitized string safe for logging
    """
    if value is None:
        return ""

    text = unicodedata.normalize('NFKC', str(value))
    text = text.replace('\n', '\\n').replace('\r', '\\r')
    text = _strip_control(text)

    if len(text) > max_length:
        text = text[:max_length] + "..."

    return text


def sanitize_for_display(text: str) -> str:
    """Collapse whitespace controls to spaces and drop the rest, for console output"""
    if not text:
        return ""
    text = text.replace('\n', ' ').replace('\r', ' ').replace('\t', ' ')
    return _strip_control(text)
