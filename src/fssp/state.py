"""
Cell state definitions and the catalog they are loaded into.

A state line has the form ``name@fg,bg,role``. The catalog keeps states in
declaration order and resolves the four roles the engine needs (soldier,
general, external, firing) to indices once, at load time.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence

from .errors import DuplicateState, EncodingOverflow, MalformedStateLine, MissingRole


# Role tags
SOLDIER = "soldier"
GENERAL = "general"
EXTERNAL = "external"
FIRING = "firing"
OTHER = "other"

ROLES = (SOLDIER, GENERAL, EXTERNAL, FIRING, OTHER)

# Center and right indices get 4 bits each in the packed rule key
MAX_STATES = 1 << 4

_STATE_SPLIT = re.compile(r"[@,]")

NumberedLine = tuple[int, str]


@dataclass(frozen=True)
class CellState:
    """
    One named automaton state.

    Attributes:
        name: Unique state name used by the rules
        fg_color: Foreground display color (not used by the engine)
        bg_color: Background display color (not used by the engine)
        role: One of ROLES
    """

    name: str
    fg_color: str
    bg_color: str
    role: str = OTHER


class StateCatalog:
    """
    Ordered, indexed set of cell states.

    Attributes:
        states: States in declaration order
        soldier: Index of the first soldier (quiescent) state
        general: Index of the general (initiator) state
        external: Index of the external (sentinel) state
        firing: Index of the firing (terminal) state
    """

    def __init__(self, states: Sequence[CellState]):
        self.states = tuple(states)

        if len(self.states) > MAX_STATES:
            raise EncodingOverflow(
                f"{len(self.states)} states declared, at most {MAX_STATES} fit the rule key"
            )

        self._by_name: dict[str, int] = {}
        for i, state in enumerate(self.states):
            if state.name in self._by_name:
                raise DuplicateState(f"state {state.name!r} declared twice")
            self._by_name[state.name] = i

        self.soldier = self._resolve_role(SOLDIER, unique=False)
        self.general = self._resolve_role(GENERAL)
        self.external = self._resolve_role(EXTERNAL)
        self.firing = self._resolve_role(FIRING)

    def _resolve_role(self, role: str, unique: bool = True) -> int:
        found = [i for i, s in enumerate(self.states) if s.role == role]
        if not found:
            raise MissingRole(f"no state has role {role!r}")
        if unique and len(found) > 1:
            names = ", ".join(self.states[i].name for i in found)
            raise MissingRole(f"role {role!r} must be unique, declared by {names}")
        return found[0]

    def __len__(self) -> int:
        return len(self.states)

    def __getitem__(self, index: int) -> CellState:
        return self.states[index]

    def __iter__(self) -> Iterator[CellState]:
        return iter(self.states)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def index(self, name: str) -> int:
        """Index of the state called ``name``; raises KeyError if undeclared."""
        return self._by_name[name]

    def names(self, indices: Iterable[int]) -> list[str]:
        """Map state indices to names."""
        return [self.states[i].name for i in indices]


def parse_state_line(text: str, line: Optional[int] = None) -> CellState:
    """
    Parse one ``name@fg,bg,role`` definition.

    Roles outside ROLES are kept as OTHER.
    """
    fields = [f.strip() for f in _STATE_SPLIT.split(text.strip())]
    if len(fields) != 4 or not fields[0]:
        raise MalformedStateLine(
            f"expected 'name@fg,bg,role', got {text.strip()!r}", line
        )
    name, fg, bg, role = fields
    return CellState(name=name, fg_color=fg, bg_color=bg, role=role if role in ROLES else OTHER)


def parse_states(lines: Iterable[NumberedLine]) -> StateCatalog:
    """
    Build a StateCatalog from numbered state definition lines.

    Args:
        lines: (line number, text) pairs, one per state

    Returns:
        Catalog with states in declaration order
    """
    states = []
    seen: set[str] = set()
    for lineno, text in lines:
        state = parse_state_line(text, lineno)
        if state.name in seen:
            raise DuplicateState(f"state {state.name!r} declared twice", lineno)
        seen.add(state.name)
        states.append(state)
    return StateCatalog(states)
