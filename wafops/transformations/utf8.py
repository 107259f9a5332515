"""Rewriting of multi-byte UTF-8 sequences as ``%uHHHH`` escapes."""

from __future__ import annotations

from typing import Optional

from .encoding import Text, _from_bytes, _to_bytes

_LEAD_MASKS = {2: 0x1F, 3: 0x0F, 4: 0x07}
_MIN_CODE = {2: 0x80, 3: 0x800, 4: 0x10000}
_RESTRICTED_LEAD = 0xF5


def _sequence_width(lead: int) -> Optional[int]:
    if lead & 0xE0 == 0xC0:
        return 2
    if lead & 0xF0 == 0xE0:
        return 3
    if lead & 0xF8 == 0xF0:
        return 4
    return None


def utf8_to_unicode(data: Text) -> str:
    """Replace each multi-byte UTF-8 sequence with a ``%uHHHH`` escape.

    The escape holds the low byte of the code point. When that byte is
    below the smallest code point the sequence length stands for, the lead
    byte is appended after the escape. Stray bytes that cannot start a
    sequence are copied, as are lead bytes 0xF5 to 0xF7 before their escape;
    a lead byte that opens a broken or truncated sequence is dropped. NUL
    bytes are dropped unless they end the input.
    """
    src = _to_bytes(data)
    size = len(src)
    out = bytearray()
    i = 0
    while i < size:
        lead = src[i]
        if lead & 0x80 == 0:
            if lead != 0 or i + 1 >= size:
                out.append(lead)
            i += 1
            continue

        width = _sequence_width(lead)
        if width is None:
            out.append(lead)
            i += 1
            continue
        if width == 4 and lead >= _RESTRICTED_LEAD:
            out.append(lead)

        tail = src[i + 1 : i + width]
        if len(tail) != width - 1 or any(b & 0xC0 != 0x80 for b in tail):
            i += 1
            continue

        code = lead & _LEAD_MASKS[width]
        for byte in tail:
            code = (code << 6) | (byte & 0x3F)
        code &= 0xFF
        out += b"%%u%04x" % code
        if code < _MIN_CODE[width]:
            out.append(lead)
        i += width
    return _from_bytes(bytes(out))