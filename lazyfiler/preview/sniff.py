"""Content sniffing: decide whether bytes look like text."""

from __future__ import annotations

import codecs

SNIFF_BYTES = 1024

_WIDE_BOMS = (
    (codecs.BOM_UTF32_LE, "utf-32"),
    (codecs.BOM_UTF32_BE, "utf-32"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


def _wide_encoding(data: bytes) -> str | None:
    # UTF-32 LE starts with the UTF-16 LE mark, so it is checked first.
    for bom, encoding in _WIDE_BOMS:
        if data.startswith(bom):
            return encoding
    return None


def is_text(data: bytes) -> bool:
    """Return ``True`` unless the first ``SNIFF_BYTES`` hold a NUL byte.

    UTF-16/UTF-32 data legitimately contains NULs and is recognized by its
    byte order mark. Empty data counts as text.
    """
    head = data[:SNIFF_BYTES]
    if _wide_encoding(head) is not None:
        return True
    return b"\x00" not in head


def decode_text(data: bytes) -> str:
    """Decode sniffed-as-text bytes, honoring a UTF-16/UTF-32 byte order mark."""
    encoding = _wide_encoding(data)
    if encoding is not None:
        return data.decode(encoding, errors="replace")
    if data.startswith(codecs.BOM_UTF8):
        return data.decode("utf-8-sig", errors="replace")
    return data.decode("utf-8", errors="replace")


__all__ = ["SNIFF_BYTES", "is_text", "decode_text"]
