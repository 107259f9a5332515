"""Transformations that strip or normalise noise: comments, nulls, whitespace.

Values follow the package convention: text whose code points stand for the
UTF-8 bytes of the data, with undecodable bytes carried as lone surrogates.
Byte-oriented transformations work on those bytes directly.
"""

from __future__ import annotations

from .encoding import Text, _from_bytes, _to_bytes, is_space

_CMD_DROPPED = frozenset("\"'\\^")
_CMD_SPACES = frozenset(" ,;\t\r\n")
_CMD_NO_SPACE_BEFORE = frozenset("/(")

_SURROGATE_LOW = 0xDC80
_SURROGATE_HIGH = 0xDCFF
_REPLACEMENT_CHAR = 0xFFFD

_NBSP = 0xA0
_SPACE = 0x20

_COMMENT_MARKERS = (b"/*", b"*/", b"<!--", b"-->", b"--", b"#")


def _lower_code(char: str) -> int:
    """Lower-case code point of *char*; escaped invalid bytes count as U+FFFD."""
    code = ord(char)
    if _SURROGATE_LOW <= code <= _SURROGATE_HIGH:
        return _REPLACEMENT_CHAR
    return ord(char.lower()[0])


def cmd_line(data: Text) -> str:
    """Normalise a command line the way shells tolerate obfuscation.

    Drops backslashes, quotes and carets; turns commas, semicolons and runs
    of whitespace into one space; removes a space before ``/`` or ``(``;
    lower-cases everything else, keeping the low byte of each character.
    """
    out = bytearray()
    space = False
    for char in _from_bytes(_to_bytes(data)):
        if char in _CMD_DROPPED:
            continue
        if char in _CMD_SPACES:
            if not space:
                out.append(_SPACE)
                space = True
        elif char in _CMD_NO_SPACE_BEFORE:
            if space:
                out.pop()
            space = False
            out.append(ord(char))
        else:
            out.append(_lower_code(char) & 0xFF)
            space = False
    return _from_bytes(bytes(out))


def compress_whitespace(data: Text) -> str:
    """Replace every run of whitespace with a single space."""
    out = bytearray()
    in_whitespace = False
    for byte in _to_bytes(data):
        if is_space(byte):
            if not in_whitespace:
                out.append(_SPACE)
                in_whitespace = True
        else:
            out.append(byte)
            in_whitespace = False
    return _from_bytes(bytes(out))


def remove_comments(data: Text) -> str:
    """Remove ``/* */`` and ``<!-- -->`` comments and cut at ``--`` or ``#``.

    The byte right after a closing marker is copied as is (a NUL when the
    marker ends the input); an unterminated comment becomes one space.
    """
    raw = _to_bytes(data)
    size = len(raw)
    src = raw + b"\x00"
    out = bytearray()
    in_comment = False
    i = 0
    while i < size:
        if not in_comment:
            if src.startswith(b"/*", i, size):
                in_comment = True
                i += 2
            elif src.startswith(b"<!--", i, size):
                in_comment = True
                i += 4
            elif src.startswith(b"--", i, size) or src[i] == ord("#"):
                break
            else:
                out.append(src[i])
                i += 1
        elif src.startswith(b"*/", i, size):
            in_comment = False
            i += 2
            out.append(src[i])
            i += 1
        elif src.startswith(b"-->", i, size):
            in_comment = False
            i += 3
            out.append(src[i])
            i += 1
        else:
            i += 1
    if in_comment:
        out.append(_SPACE)
    return _from_bytes(bytes(out))


def remove_comments_char(data: Text) -> str:
    """Delete comment markers (``/*``, ``*/``, ``<!--``, ``-->``, ``--``, ``#``)."""
    buf = bytearray(_to_bytes(data))
    i = 0
    while i < len(buf):
        for marker in _COMMENT_MARKERS:
            if buf.startswith(marker, i):
                del buf[i : i + len(marker)]
                break
        else:
            i += 1
    return _from_bytes(bytes(buf))


def remove_nulls(data: Text) -> str:
    """Delete every NUL byte."""
    return _from_bytes(_to_bytes(data).replace(b"\x00", b""))


def remove_whitespace(data: Text) -> str:
    """Delete whitespace bytes and non-breaking space bytes (0xA0)."""
    return _from_bytes(
        bytes(b for b in _to_bytes(data) if not is_space(b) and b != _NBSP)
    )


def replace_comments(data: Text) -> str:
    """Replace each ``/* */`` comment, terminated or not, with one space."""
    src = _to_bytes(data)
    size = len(src)
    out = bytearray()
    in_comment = False
    i = 0
    while i < size:
        if not in_comment:
            if src.startswith(b"/*", i):
                in_comment = True
                i += 2
            else:
                out.append(src[i])
                i += 1
        elif src.startswith(b"*/", i):
            in_comment = False
            i += 2
            out.append(_SPACE)
        else:
            i += 1
    if in_comment:
        out.append(_SPACE)
    return _from_bytes(bytes(out))


def replace_nulls(data: Text) -> str:
    """Replace every NUL byte with a space."""
    return _from_bytes(_to_bytes(data).replace(b"\x00", b" "))