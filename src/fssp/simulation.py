"""
Generation stepping for the firing squad line.

The line holds N interior cells between two external sentinels. Each step
gathers the next state of every interior cell from the rule table in one
pass, writes it into the spare buffer and swaps the buffers.
"""

from typing import Callable, Iterator, Optional

import numpy as np
from tqdm import tqdm

from .errors import UndefinedTransition
from .rules import CENTER_SHIFT, LEFT_SHIFT, UNDEFINED, RuleTable
from .state import StateCatalog


class Simulation:
    """
    Firing squad simulation over a fixed-length line.

    Attributes:
        catalog: State definitions with resolved role indices
        table: Transition table
        cells: Number of interior cells N
        step_count: Number of generations executed
    """

    def __init__(self, catalog: StateCatalog, table: RuleTable, cells: int):
        """
        Initialize the line as external, general, soldier..., external.

        Args:
            catalog: Loaded states
            table: Loaded rules
            cells: Interior size N (0 is a line of sentinels only)
        """
        if isinstance(cells, bool) or not isinstance(cells, (int, np.integer)) or cells < 0:
            raise ValueError(f"cells must be a non-negative integer, got {cells!r}")

        self.catalog = catalog
        self.table = table
        self.cells = int(cells)
        self._firing = catalog.firing

        self._current = self._initial_line()
        self._next = np.empty_like(self._current)
        self.step_count = 0

    def _initial_line(self) -> np.ndarray:
        line = np.full(self.cells + 2, self.catalog.soldier, dtype=np.intp)
        line[0] = line[-1] = self.catalog.external
        if self.cells:
            line[1] = self.catalog.general
        return line

    @property
    def line(self) -> np.ndarray:
        """Copy of the current line including both sentinels."""
        return self._current.copy()

    def step(self) -> bool:
        """
        Advance one generation.

        Returns:
            True if every interior cell is now in the firing state

        Raises:
            UndefinedTransition: a neighbourhood has no rule; the line and
                step_count are left as they were
        """
        cur = self._current
        keys = (cur[:-2] << LEFT_SHIFT) | (cur[1:-1] << CENTER_SHIFT) | cur[2:]
        values = self.table.entries[keys]

        missing = np.flatnonzero(values == UNDEFINED)
        if missing.size:
            j = int(missing[0]) + 1
            left, center, right = self.catalog.names(cur[j - 1:j + 2])
            raise UndefinedTransition(j, (left, center, right))

        nxt = self._next
        nxt[0] = nxt[-1] = self.catalog.external
        nxt[1:-1] = values

        self._current, self._next = nxt, cur
        self.step_count += 1

        return self.is_settled()

    def is_settled(self) -> bool:
        """True iff every interior cell equals the firing state."""
        return bool(np.all(self._current[1:-1] == self._firing))

    def dump(self) -> list[str]:
        """Names of the interior cells, left to right."""
        return self.catalog.names(self._current[1:-1])

    def history(self, max_steps: int) -> Iterator[list[str]]:
        """
        Yield the dump of the current line, then of each generation.

        Stops after the line settles or after max_steps generations.
        """
        yield self.dump()
        for _ in range(max_steps):
            settled = self.step()
            yield self.dump()
            if settled:
                break

    def run(
        self,
        max_steps: int,
        callback: Optional[Callable[["Simulation"], None]] = None,
        show_progress: bool = True,
    ) -> bool:
        """
        Step until the line settles or the budget runs out.

        Args:
            max_steps: Maximum number of generations to execute
            callback: Optional function called after every generation
            show_progress: Whether to show progress bar

        Returns:
            Whether the line settled within the budget
        """
        iterator = range(max_steps)
        if show_progress:
            iterator = tqdm(iterator, desc="Simulating", leave=False)

        for _ in iterator:
            settled = self.step()

            if callback is not None:
                callback(self)

            if settled:
                return True

        return False

    def reset(self) -> None:
        """Return to generation 0."""
        self._current = self._initial_line()
        self._next = np.empty_like(self._current)
        self.step_count = 0
