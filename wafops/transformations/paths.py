"""Lexical path normalisation for Unix-style and Windows-style paths.

Values follow the package convention: text whose code points stand for the
UTF-8 bytes of the data, with undecodable bytes carried as lone surrogates.
"""

from __future__ import annotations

import string

from .encoding import Text, _from_bytes, _to_bytes

_SLASH = ord("/")
_BACKSLASH = ord("\\")
_DOT = ord(".")
_COLON = ord(":")
_DRIVE_LETTERS = frozenset(string.ascii_letters.encode("ascii"))


def _clean(path: bytes, sep: int) -> bytes:
    """Return the shortest equivalent of *path*, treating only *sep* as a separator.

    Repeated separators are collapsed, ``.`` elements dropped and ``..``
    elements resolved against the preceding element where there is one.
    An empty result becomes ``.``.
    """
    size = len(path)
    rooted = size > 0 and path[0] == sep
    out = bytearray()
    r = dotdot = 0
    if rooted:
        out.append(sep)
        r = dotdot = 1

    while r < size:
        if path[r] == sep:
            r += 1
        elif path[r] == _DOT and (r + 1 == size or path[r + 1] == sep):
            r += 1
        elif (
            path[r] == _DOT
            and path[r + 1] == _DOT
            and (r + 2 == size or path[r + 2] == sep)
        ):
            r += 2
            if len(out) > dotdot:
                w = len(out) - 1
                while w > dotdot and out[w] != sep:
                    w -= 1
                del out[w:]
            elif not rooted:
                if out:
                    out.append(sep)
                out += b".."
                dotdot = len(out)
        else:
            if (rooted and len(out) != 1) or (not rooted and out):
                out.append(sep)
            end = path.find(sep, r)
            if end < 0:
                end = size
            out += path[r:end]
            r = end
    return bytes(out) or b"."


def _is_slash(byte: int) -> bool:
    return byte in (_SLASH, _BACKSLASH)


def _volume_name_len(path: bytes) -> int:
    """Length of a leading drive letter (``C:``) or UNC ``\\\\server\\share`` prefix."""
    size = len(path)
    if size < 2:
        return 0
    if path[1] == _COLON and path[0] in _DRIVE_LETTERS:
        return 2
    if (
        size >= 5
        and _is_slash(path[0])
        and _is_slash(path[1])
        and not _is_slash(path[2])
        and path[2] != _DOT
    ):
        n = 3
        while n < size - 1:
            if _is_slash(path[n]):
                n += 1
                if _is_slash(path[n]) or path[n] == _DOT:
                    return 0
                while n < size and not _is_slash(path[n]):
                    n += 1
                return n
            n += 1
    return 0


def _clean_windows(path: bytes) -> bytes:
    volume_len = _volume_name_len(path)
    rest = path[volume_len:]
    if not rest:
        if volume_len > 1 and path[1] != _COLON:
            return path
        return path + b"."
    return path[:volume_len] + _clean(rest, _BACKSLASH)


def _finish(raw: bytes, cleaned: bytes, trailing: bytes) -> str:
    if cleaned == b".":
        return ""
    if cleaned.startswith(b"./"):
        cleaned = cleaned[2:]
    if raw.endswith(trailing):
        cleaned += b"/"
    return _from_bytes(cleaned)


def normalise_path(data: Text) -> str:
    """Resolve ``.``, ``..`` and repeated slashes; keep a trailing slash."""
    raw = _to_bytes(data)
    if not raw:
        return ""
    return _finish(raw, _clean(raw, _SLASH), b"/")


def normalise_path_win(data: Text) -> str:
    """Normalise a backslash-separated path and return it with forward slashes.

    Only backslashes separate elements; drive letters and UNC prefixes are
    kept as they are.
    """
    raw = _to_bytes(data)
    cleaned = _clean_windows(raw).replace(b"\\", b"/")
    return _finish(raw, cleaned, b"\\")