"""
Transition table for the firing squad automaton.

Rules map a (left, center, right) neighbourhood to the next center state.
The neighbourhood is packed into one integer,

    key = (left << 8) | (center << 4) | right

and the table is a dense array indexed by that key, so a generation is a
single gather over the line.

Specification text layout:

    state_number K
    name@fg,bg,role          (K lines)
    rule_number M
    left##center##right->next   (M lines, "##" and "->" are interchangeable)
"""

import re
from pathlib import Path
from typing import Optional, Union

import numpy as np

from .errors import (
    ConflictingRule,
    EncodingOverflow,
    MalformedRuleLine,
    MalformedStateLine,
    SpecificationError,
    TruncatedSpecification,
    UnknownStateReference,
)
from .state import MAX_STATES, NumberedLine, StateCatalog, parse_states


LEFT_SHIFT = 8
CENTER_SHIFT = 4
FIELD_MASK = 0xF

TABLE_SIZE = MAX_STATES << LEFT_SHIFT

UNDEFINED = -1

STATE_HEADER = "state_number"
RULE_HEADER = "rule_number"

_RULE_SPLIT = re.compile(r"##|->")


def encode_key(left: int, center: int, right: int) -> int:
    """Pack a neighbourhood into a table key."""
    return (left << LEFT_SHIFT) | (center << CENTER_SHIFT) | right


def decode_key(key: int) -> tuple[int, int, int]:
    """Inverse of encode_key."""
    return (key >> LEFT_SHIFT) & FIELD_MASK, (key >> CENTER_SHIFT) & FIELD_MASK, key & FIELD_MASK


class RuleTable:
    """
    Dense transition table indexed by packed neighbourhood keys.

    Attributes:
        entries: int16 array of TABLE_SIZE next-state indices, UNDEFINED where
            no rule was given
    """

    def __init__(self):
        self.entries = np.full(TABLE_SIZE, UNDEFINED, dtype=np.int16)
        self._defined: set[int] = set()

    def define(self, left: int, center: int, right: int, nxt: int) -> None:
        """
        Store a rule.

        Raises:
            EncodingOverflow: an index does not fit in 4 bits
            ConflictingRule: the neighbourhood already maps elsewhere
        """
        triple = (left, center, right)
        for index in (*triple, nxt):
            if not 0 <= index < MAX_STATES:
                raise EncodingOverflow(f"state index {index} does not fit the rule key")

        key = encode_key(*triple)
        if key in self._defined and self.entries[key] != nxt:
            raise ConflictingRule(
                f"{triple} maps to both {int(self.entries[key])} and {nxt}"
            )

        self._defined.add(key)
        self.entries[key] = nxt

    def lookup(self, left: int, center: int, right: int) -> Optional[int]:
        """Next center index, or None if the neighbourhood has no rule."""
        value = int(self.entries[encode_key(left, center, right)])
        return None if value == UNDEFINED else value

    def __contains__(self, triple: object) -> bool:
        return encode_key(*triple) in self._defined

    def __len__(self) -> int:
        return len(self._defined)


def parse_rule_line(text: str, line: Optional[int] = None) -> tuple[str, str, str, str]:
    """Split ``l##c##r->n`` (either delimiter anywhere) into four names."""
    fields = [f.strip() for f in _RULE_SPLIT.split(text.strip())]
    if len(fields) != 4 or not all(fields):
        raise MalformedRuleLine(
            f"expected 'left##center##right->next', got {text.strip()!r}", line
        )
    return fields[0], fields[1], fields[2], fields[3]


def parse_rules(lines: list[NumberedLine], catalog: StateCatalog) -> RuleTable:
    """
    Build a RuleTable from numbered rule lines.

    Every name is resolved against the catalog before anything is stored.
    """
    table = RuleTable()
    for lineno, text in lines:
        names = parse_rule_line(text, lineno)
        try:
            left, center, right, nxt = (catalog.index(n) for n in names)
        except KeyError as e:
            raise UnknownStateReference(f"undeclared state {e.args[0]!r}", lineno) from None

        try:
            table.define(left, center, right, nxt)
        except SpecificationError as e:
            raise type(e)(str(e), lineno) from None
    return table


def _header_name(text: str) -> Optional[str]:
    """Section header named by the first token of a line, if any."""
    parts = text.split(maxsplit=1)
    if parts and parts[0] in (STATE_HEADER, RULE_HEADER):
        return parts[0]
    return None


def _header_count(text: str, lineno: int, error: type) -> int:
    parts = text.split()
    if len(parts) != 2 or not parts[1].isdigit():
        raise error(f"bad section header {text!r}", lineno)
    return int(parts[1])


def _take_section(
    lines: list[str], start: int, count: int, header_line: int, what: str
) -> tuple[list[NumberedLine], int]:
    """Collect ``count`` non-blank lines from ``start``; returns them and the next index."""
    body: list[NumberedLine] = []
    i = start
    while len(body) < count and i < len(lines):
        stripped = lines[i].strip()
        if _header_name(stripped) is not None:
            break
        if stripped:
            body.append((i + 1, lines[i]))
        i += 1
    if len(body) < count:
        raise TruncatedSpecification(
            f"{what} section declares {count} lines, found {len(body)}", header_line
        )
    return body, i


def load(text: str) -> tuple[StateCatalog, RuleTable]:
    """
    Parse a rule specification.

    Args:
        text: Full specification text

    Returns:
        (catalog, table)

    Raises:
        SpecificationError: any load-time defect; nothing is returned partially
    """
    lines = text.splitlines()
    catalog = None
    table = None

    i = 0
    while i < len(lines):
        stripped = lines[i].strip()
        header = _header_name(stripped)

        if header == STATE_HEADER:
            count = _header_count(stripped, i + 1, MalformedStateLine)
            if catalog is not None:
                raise MalformedStateLine(f"repeated {STATE_HEADER} section", i + 1)
            body, i = _take_section(lines, i + 1, count, i + 1, "state")
            catalog = parse_states(body)
            continue

        if header == RULE_HEADER:
            count = _header_count(stripped, i + 1, MalformedRuleLine)
            if table is not None:
                raise MalformedRuleLine(f"repeated {RULE_HEADER} section", i + 1)
            if catalog is None:
                raise TruncatedSpecification(f"{RULE_HEADER} before {STATE_HEADER}", i + 1)
            body, i = _take_section(lines, i + 1, count, i + 1, "rule")
            table = parse_rules(body, catalog)
            continue

        i += 1

    if catalog is None:
        raise TruncatedSpecification(f"missing {STATE_HEADER} section")
    if table is None:
        raise TruncatedSpecification(f"missing {RULE_HEADER} section")

    return catalog, table


def load_file(path: Union[str, Path]) -> tuple[StateCatalog, RuleTable]:
    """Read and parse a rule specification file."""
    return load(Path(path).read_text(encoding="utf-8"))
