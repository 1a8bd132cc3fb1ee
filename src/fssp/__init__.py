"""
FSSP - Firing Squad Synchronization Problem simulator

Loads a symbolic transition table and runs a line of identical automata,
activated from one end, until every cell fires.
"""

__version__ = "0.1.0"

from .errors import SpecificationError, UndefinedTransition
from .rules import RuleTable, load, load_file
from .simulation import Simulation
from .state import CellState, StateCatalog

__all__ = [
    "CellState",
    "StateCatalog",
    "RuleTable",
    "Simulation",
    "SpecificationError",
    "UndefinedTransition",
    "load",
    "load_file",
    "__version__",
]
