"""Pattern operators: phrase lists, regular expressions and IP ranges."""

from __future__ import annotations

import ipaddress
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

import regex

from ..transformations.encoding import _from_bytes
from .base import Operator, Transaction, capture_field, expand_macros

_MAX_CAPTURES = 10

IpNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]


def _reset_capture(tx: Optional[Transaction]) -> None:
    reset = getattr(tx, "reset_capture", None)
    if reset is not None:
        reset()


@dataclass(frozen=True)
class KeywordMatch:
    """One occurrence of a keyword: where it starts and which word it is."""

    start: int
    word: str


class KeywordTrie:
    """Aho-Corasick automaton that finds every occurrence of a set of words."""

    def __init__(self, words: Iterable[str]) -> None:
        self._goto: List[Dict[str, int]] = [{}]
        own: List[Tuple[str, ...]] = [()]
        for word in dict.fromkeys(w for w in words if w):
            node = 0
            for char in word:
                child = self._goto[node].get(char)
                if child is None:
                    child = len(self._goto)
                    self._goto.append({})
                    own.append(())
                    self._goto[node][char] = child
                node = child
            own[node] = (word,)

        self._fail = [0] * len(self._goto)
        self._out: List[Tuple[str, ...]] = list(own)
        queue = deque(self._goto[0].values())
        while queue:
            node = queue.popleft()
            for char, child in self._goto[node].items():
                link = self._fail[node]
                while link and char not in self._goto[link]:
                    link = self._fail[link]
                self._fail[child] = self._goto[link].get(char, 0)
                self._out[child] = own[child] + self._out[self._fail[child]]
                queue.append(child)

    def find_all(self, text: str) -> List[KeywordMatch]:
        """Return every occurrence, ordered by end position, longest first."""
        found: List[KeywordMatch] = []
        node = 0
        for position, char in enumerate(text):
            while node and char not in self._goto[node]:
                node = self._fail[node]
            node = self._goto[node].get(char, 0)
            found.extend(
                KeywordMatch(position + 1 - len(word), word) for word in self._out[node]
            )
        return found


def _report_matches(tx: Optional[Transaction], matches: List[KeywordMatch]) -> bool:
    if not matches:
        return False
    first = matches[0].word
    for index in range(min(len(matches), _MAX_CAPTURES)):
        capture_field(tx, index, first)
    return True


class Pm(Operator):
    """Case-insensitive match against a space-separated list of phrases.

    Macros in each phrase are expanded through the transaction; the first
    phrase found is captured.
    """

    def __init__(self, data: str = "") -> None:
        super().__init__(data)
        self.phrases = data.lower().split(" ")

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        trie = KeywordTrie(expand_macros(tx, phrase) for phrase in self.phrases)
        return _report_matches(tx, trie.find_all(value.lower()))


class PmFromFile(Operator):
    """Case-insensitive match against phrases read from a file, one per line.

    Empty lines and lines starting with ``#`` are ignored.
    """

    def __init__(self, data: str = "") -> None:
        super().__init__(data)
        content = _from_bytes(Path(data).read_bytes())
        self.phrases = [
            line.lower()
            for line in (raw.replace("\r", "") for raw in content.split("\n"))
            if line and not line.startswith("#")
        ]
        self._trie = KeywordTrie(self.phrases)

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        return _report_matches(tx, self._trie.find_all(value.lower()))


class Rx(Operator):
    """Regular expression match; the whole match and groups are captured.

    When the pattern has ten or more groups the operator reports a match
    once the first ten captures are stored.
    """

    def __init__(self, data: str = "") -> None:
        super().__init__(data)
        try:
            self._pattern = regex.compile(data)
        except regex.error as exc:
            raise ValueError(f"invalid regular expression {data!r}: {exc}") from None

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        match = self._pattern.search(value)
        _reset_capture(tx)
        for index in range(self._pattern.groups + 1):
            if index == _MAX_CAPTURES:
                return True
            group = match.group(index) if match else None
            capture_field(tx, index, group or "")
        return match is not None


def _parse_subnet(entry: str) -> Optional[IpNetwork]:
    entry = "".join(entry.split())
    if not entry:
        return None
    if "/" not in entry:
        if ":" in entry:
            entry += "/128"
        elif "." in entry:
            entry += "/32"
        else:
            return None
    prefix = entry.partition("/")[2]
    if not (prefix.isascii() and prefix.isdigit()):
        return None
    try:
        return ipaddress.ip_network(entry, strict=False)
    except ValueError:
        return None


class IpMatch(Operator):
    """Matches when the value is an IP address inside one of the listed networks.

    The argument is a comma-separated list of addresses and CIDR ranges;
    entries that cannot be parsed are skipped.
    """

    def __init__(self, data: str = "") -> None:
        super().__init__(data)
        self.networks: List[IpNetwork] = [
            net for net in map(_parse_subnet, data.split(",")) if net is not None
        ]

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        try:
            address = ipaddress.ip_address(value)
        except ValueError:
            return False
        candidates = [address]
        if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped:
            candidates.append(address.ipv4_mapped)
        return any(
            candidate in network
            for network in self.networks
            for candidate in candidates
            if candidate.version == network.version
        )


class IpMatchFromFile(Operator):
    """Like :class:`IpMatch`, with the networks read from a file, one per line."""

    def __init__(self, data: str = "") -> None:
        super().__init__(data)
        content = _from_bytes(Path(data).read_bytes())
        self._matcher = IpMatch(content.replace("\n", ","))

    def evaluate(self, tx: Optional[Transaction], value: str) -> bool:
        return self._matcher.evaluate(tx, value)