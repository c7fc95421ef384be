"""
Output normalizers for command stdout.

Tools report the same fact in different shapes: a bare value, or one line
of a verbose key=value listing. Both extractors degrade to an empty string.
"""

from __future__ import annotations

from typing import Callable

Extractor = Callable[[str], str]


def plain(stdout: str) -> str:
    """Return stdout trimmed of surrounding whitespace."""
    return (stdout or "").strip()


def keyed_line(key: str, separator: str = "=") -> Extractor:
    """
    Build an extractor for `key=value` style output.

    The returned callable finds the first line starting with ``key=`` and
    returns everything after the first separator, trimmed.

    Example:
        >>> keyed_line("SerialNumber")("\\r\\n\\r\\nSerialNumber=ABC123\\r\\n")
        'ABC123'
    """
    prefix = f"{key}{separator}"

    def extract(stdout: str) -> str:
        for line in (stdout or "").splitlines():
            line = line.strip()
            if line.startswith(prefix):
                _, _, value = line.partition(separator)
                return value.strip()
        return ""

    extract.__name__ = f"keyed_line_{key}"
    return extract
