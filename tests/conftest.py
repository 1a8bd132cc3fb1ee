"""
Pytest configuration and fixtures for FSSP tests.
"""

import itertools

import pytest

from fssp.rules import RuleTable, load
from fssp.state import StateCatalog


STATE_LINES = [
    "W@black,gray,external",
    "Q@black,white,soldier",
    "G@white,red,general",
    "F@white,blue,firing",
]

NAMES = ["W", "Q", "G", "F"]


def make_spec(state_lines: list[str], rule_lines: list[str]) -> str:
    """Assemble specification text from its two sections."""
    return "\n".join(
        [f"state_number {len(state_lines)}", *state_lines,
         f"rule_number {len(rule_lines)}", *rule_lines]
    ) + "\n"


def collapse_rules() -> list[str]:
    """Every neighbourhood fires at once."""
    return [f"{l}##{c}##{r}->F" for l, c, r in itertools.product(NAMES, repeat=3)]


def wave_rules() -> list[str]:
    """Firing spreads one cell to the right per generation."""
    lines = []
    for l, c, r in itertools.product(NAMES, repeat=3):
        nxt = "F" if c in "GF" or l in "GF" else "Q"
        lines.append(f"{l}##{c}##{r}->{nxt}")
    return lines


@pytest.fixture
def collapse_spec() -> str:
    """Specification text for the instant-collapse table."""
    return make_spec(STATE_LINES, collapse_rules())


@pytest.fixture
def collapse(collapse_spec) -> tuple[StateCatalog, RuleTable]:
    """Loaded instant-collapse catalog and table."""
    return load(collapse_spec)


@pytest.fixture
def wave() -> tuple[StateCatalog, RuleTable]:
    """Loaded wave catalog and table."""
    return load(make_spec(STATE_LINES, wave_rules()))


@pytest.fixture
def no_start() -> tuple[StateCatalog, RuleTable]:
    """Collapse table without the rule for the general's first neighbourhood."""
    rules = [r for r in collapse_rules() if not r.startswith("W##G##Q")]
    return load(make_spec(STATE_LINES, rules))
