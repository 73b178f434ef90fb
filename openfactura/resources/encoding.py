"""Base64 helpers for binary payloads returned by the API."""

import base64
import re

# The API emits XML encoded as ISO-8859-1
XML_ENCODING = "latin-1"

_NON_BASE64 = re.compile(r"[^A-Za-z0-9+/]")


def decode_binary(content: str | None) -> bytes | None:
    """Decode a base64 payload (PDF, stamp, logo, cedible) to raw bytes.

    Decoding is lenient: line breaks, spaces and other characters outside
    the base64 alphabet are dropped, and missing padding is restored.

    Returns:
        Decoded bytes, or None when there is no content
    """
    if content is None:
        return None
    cleaned = _NON_BASE64.sub("", content)
    # A single trailing sextet cannot encode a byte
    if len(cleaned) % 4 == 1:
        cleaned = cleaned[:-1]
    cleaned += "=" * (-len(cleaned) % 4)
    return base64.b64decode(cleaned)


def decode_latin1_text(content: str | None) -> str | None:
    """Decode a base64 ISO-8859-1 payload (XML) into text.

    Returns:
        Decoded text, or None when there is no content
    """
    raw = decode_binary(content)
    if raw is None:
        return None
    return raw.decode(XML_ENCODING)
