"""
Common utility functions and helpers.
"""
from typing import Optional
from urllib.parse import quote
import re
import unicodedata


# Quotes, backslashes, path separators and control characters
_UNSAFE_FILENAME_CHARS = re.compile(r'["\\/\x00-\x1f\x7f]')


def sanitize_filename(filename: Optional[str], default: str) -> str:
    """
    Make a client-supplied filename safe for a Content-Disposition header.

    Args:
        filename: Requested filename (may be None or empty)
        default: Fallback when nothing usable remains

    Returns:
        Filename without quotes, backslashes, path separators or control characters
    """
    if not filename:
        return default
    cleaned = _UNSAFE_FILENAME_CHARS.sub("", filename).strip()
    return cleaned or default


def ascii_fallback(filename: str, default: str) -> str:
    """
    Transliterate a filename to ASCII (``čas.docx`` -> ``cas.docx``).

    Args:
        filename: Sanitized filename
        default: Fallback when no ASCII characters remain

    Returns:
        ASCII-only filename
    """
    normalized = unicodedata.normalize("NFKD", filename)
    ascii_name = normalized.encode("ascii", "ignore").decode("ascii").strip()
    return ascii_name or default


def content_disposition(filename: str, default: str) -> str:
    """
    Build an ``attachment`` Content-Disposition header value.

    ASCII names are sent as ``filename="..."``. Other names also get an
    RFC 5987 ``filename*`` parameter, since HTTP header values are latin-1.

    Args:
        filename: Sanitized filename
        default: Fallback for the ASCII form when nothing ASCII survives

    Returns:
        Header value
    """
    try:
        filename.encode("ascii")
    except UnicodeEncodeError:
        fallback = ascii_fallback(filename, default)
        return (
            f'attachment; filename="{fallback}"; '
            f"filename*=UTF-8''{quote(filename, safe='')}"
        )
    return f'attachment; filename="{filename}"'
