"""
Run configuration for the firing squad simulator.
"""

from dataclasses import dataclass, asdict
from typing import Any, Optional


@dataclass
class Config:
    """
    Parameters of one simulation run.

    Attributes:
        cells: Number of interior cells N
        rule_file: Path of the rule specification
        dump: Print every generation
        max_steps: Generation budget; None uses default_max_steps
        show_progress: Show a progress bar while running
        save_diagram: Optional PNG path for the space-time diagram
    """

    cells: int = 10
    rule_file: str = "waksman-slim.rul.txt"
    dump: bool = False
    max_steps: Optional[int] = None
    show_progress: bool = True
    save_diagram: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        self._validate()

    def _validate(self) -> None:
        """Check that all parameters are in valid ranges."""
        if self.cells < 0:
            raise ValueError(f"cells must be >= 0, got {self.cells}")

        if self.max_steps is not None and self.max_steps < 1:
            raise ValueError(f"max_steps must be >= 1, got {self.max_steps}")

        if not self.rule_file:
            raise ValueError("rule_file must not be empty")

    @property
    def step_budget(self) -> int:
        """max_steps, or a default well above the 2N-2 of minimal-time solutions."""
        if self.max_steps is not None:
            return self.max_steps
        return 4 * self.cells + 16

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "Config":
        """Create config from dictionary."""
        return cls(**d)

    @classmethod
    def from_args(cls, args: Any) -> "Config":
        """Create config from argparse namespace."""
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        config_dict = {k: v for k, v in vars(args).items() if k in known_fields and v is not None}
        return cls(**config_dict)
