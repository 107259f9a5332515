"""Encoding, decoding and hashing transformations.

Values are handled as text whose code points stand for the UTF-8 bytes of
the original data; bytes that are not valid UTF-8 travel as lone surrogates
(the ``surrogateescape`` error handler), so every transformation is lossless
with respect to the underlying bytes.
"""

from __future__ import annotations

import hashlib
from typing import Union

Text = Union[str, bytes]

_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")
_SPACES = frozenset(b" \t\n\v\f\r")
_URL_SAFE = frozenset(
    b"*0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
)
_LOWER_HEX = b"0123456789abcdef"

_BASE64_ALPHABET = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_BASE64_INVALID = 127
_BASE64_PAD = 64


def _build_base64_table() -> bytes:
    table = bytearray([_BASE64_INVALID] * 128)
    for value, char in enumerate(_BASE64_ALPHABET):
        table[char] = value
    table[ord("=")] = _BASE64_PAD
    return bytes(table)


_BASE64_TABLE = _build_base64_table()


def _to_bytes(data: Text) -> bytes:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    return data.encode("utf-8", "surrogateescape")


def _from_bytes(data: bytes) -> str:
    return data.decode("utf-8", "surrogateescape")


def _byte_of(char: Union[int, str, bytes]) -> int:
    if isinstance(char, int):
        return char
    raw = _to_bytes(char)
    if len(raw) != 1:
        raise ValueError(f"expected a single byte, got {char!r}")
    return raw[0]


def _hex_value(byte: int) -> int:
    if byte >= ord("A"):
        return ((byte & 0xDF) - ord("A")) + 10
    return byte - ord("0")


def x2c(text: Text) -> int:
    """Return the byte value of the two hexadecimal digits at the start of *text*."""
    raw = _to_bytes(text)
    if len(raw) < 2:
        raise ValueError(f"need two hexadecimal digits, got {text!r}")
    return ((_hex_value(raw[0]) << 4) + _hex_value(raw[1])) & 0xFF


def is_hex_digit(char: Union[int, str, bytes]) -> bool:
    """Tell whether *char* is an ASCII hexadecimal digit."""
    return _byte_of(char) in _HEX_DIGITS


def is_space(char: Union[int, str, bytes]) -> bool:
    """Tell whether *char* is an ASCII whitespace character, as C ``isspace``."""
    return _byte_of(char) in _SPACES


def _base64_decode_bytes(src: bytes) -> bytes | None:
    """Decode *src*; return None when it is not valid base64."""
    size = len(src)
    pads = 0
    i = 0
    while i < size:
        spaces = 0
        while i < size and src[i] == 0x20:
            i += 1
            spaces += 1
        if i == size:
            break
        if size - i >= 2 and src[i] == 0x0D and src[i + 1] == 0x0A:
            i += 1
            continue
        if src[i] == 0x0A:
            i += 1
            continue
        if spaces:
            return None
        if src[i] == ord("="):
            pads += 1
            if pads > 2:
                return None
        if src[i] > 127 or _BASE64_TABLE[src[i]] == _BASE64_INVALID:
            return None
        if _BASE64_TABLE[src[i]] < _BASE64_PAD and pads:
            return None
        i += 1

    out = bytearray()
    remaining = 3
    count = 0
    acc = 0
    for byte in src:
        if byte in (0x0D, 0x0A, 0x20):
            continue
        value = _BASE64_TABLE[byte]
        if value == _BASE64_PAD:
            remaining -= 1
        acc = ((acc << 6) | (value & 0x3F)) & 0xFFFFFF
        count += 1
        if count == 4:
            count = 0
            if remaining > 0:
                out.append((acc >> 16) & 0xFF)
            if remaining > 1:
                out.append((acc >> 8) & 0xFF)
            if remaining > 2:
                out.append(acc & 0xFF)
    return bytes(out)


def base64_decode(data: Text) -> str:
    """Decode base64; invalid or empty results give the input back unchanged."""
    decoded = _base64_decode_bytes(_to_bytes(data))
    if not decoded:
        return _from_bytes(_to_bytes(data))
    return _from_bytes(decoded)


def hex_encode(data: Text) -> str:
    """Encode every byte as two lowercase hexadecimal digits."""
    return _to_bytes(data).hex()


def length(data: Text) -> str:
    """Return the number of characters, as decimal text."""
    return str(len(_from_bytes(_to_bytes(data))))


def lowercase(data: Text) -> str:
    """Return the value in lower case."""
    return _from_bytes(_to_bytes(data)).lower()


def md5(data: Text) -> str:
    """Return the raw MD5 digest."""
    return _from_bytes(hashlib.md5(_to_bytes(data)).digest())


def sha1(data: Text) -> str:
    """Return the raw SHA-1 digest."""
    return _from_bytes(hashlib.sha1(_to_bytes(data)).digest())


def none(data: Text) -> str:
    """Return the value untouched."""
    return _from_bytes(_to_bytes(data))


def url_decode(data: Text) -> str:
    """Decode ``%xx`` escapes and ``+``; malformed escapes are kept as they are."""
    src = _to_bytes(data)
    size = len(src)
    out = bytearray()
    i = 0
    while i < size:
        byte = src[i]
        if byte == ord("%"):
            if i + 2 < size and src[i + 1] in _HEX_DIGITS and src[i + 2] in _HEX_DIGITS:
                out.append(x2c(src[i + 1 : i + 3]))
                i += 3
            else:
                out.append(byte)
                i += 1
        else:
            out.append(0x20 if byte == ord("+") else byte)
            i += 1
    return _from_bytes(bytes(out))


def url_decode_uni(data: Text) -> str:
    """Decode ``%xx``, IIS-style ``%uHHHH`` escapes and ``+``.

    A ``%uHHHH`` escape keeps its lower byte; full-width ASCII
    (``%uff01`` to ``%uff5e``) is mapped to its plain ASCII form.
    """
    src = _to_bytes(data)
    size = len(src)
    out = bytearray()
    i = 0
    while i < size:
        byte = src[i]
        if byte != ord("%"):
            out.append(0x20 if byte == ord("+") else byte)
            i += 1
            continue
        if i + 1 < size and src[i + 1] in b"uU":
            if i + 5 < size and all(b in _HEX_DIGITS for b in src[i + 2 : i + 6]):
                value = x2c(src[i + 4 : i + 6])
                if 0 < value < 0x5F and src[i + 2] in b"fF" and src[i + 3] in b"fF":
                    value += 0x20
                out.append(value)
                i += 6
            else:
                out += src[i : i + 2]
                i += 2
        elif i + 2 < size and src[i + 1] in _HEX_DIGITS and src[i + 2] in _HEX_DIGITS:
            out.append(x2c(src[i + 1 : i + 3]))
            i += 3
        else:
            out.append(byte)
            i += 1
    return _from_bytes(bytes(out))


def url_encode(data: Text) -> str:
    """Percent-encode everything except letters, digits and ``*``; space becomes ``+``."""
    out = bytearray()
    for byte in _to_bytes(data):
        if byte == 0x20:
            out.append(ord("+"))
        elif byte in _URL_SAFE:
            out.append(byte)
        else:
            out += b"%" + bytes((_LOWER_HEX[byte >> 4], _LOWER_HEX[byte & 0x0F]))
    return _from_bytes(bytes(out))