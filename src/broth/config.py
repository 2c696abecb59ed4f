"""Run configuration for building and stepping a universe."""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Tuple

from .core.grid import _check_dimension
from .core.rules import Rule, parse_rule


@dataclass
class RunConfig:
    """Configuration for a simulation run.

    Attributes:
        width: Grid width
        height: Grid height (1 for elementary rules laid out on a single row)
        rule: Rule text understood by ``parse_rule`` ("30", "B3/S23", "life")
        generations: Number of generations to step
        population_rate: Chance each cell starts alive when seeding randomly
        seed: Random seed for reproducible random seeding
        pattern: Name of a library pattern to place instead of random cells
        pattern_x: Horizontal offset of the pattern
        pattern_y: Vertical offset of the pattern
        seed_cells: Explicit (x, y) cells to switch on
    """

    width: int = 64
    height: int = 1
    rule: str = "30"
    generations: int = 32
    population_rate: float = 0.0
    seed: Optional[int] = None
    pattern: Optional[str] = None
    pattern_x: int = 0
    pattern_y: int = 0
    seed_cells: List[Tuple[int, int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        self._validate()

    def _validate(self) -> None:
        """Check that all parameters are in valid ranges."""
        self.width = _check_dimension("width", self.width)
        self.height = _check_dimension("height", self.height)

        if self.generations < 0:
            raise ValueError(f"generations must be >= 0, got {self.generations}")

        if not 0.0 <= self.population_rate <= 1.0:
            raise ValueError(f"population_rate must be in [0, 1], got {self.population_rate}")

        # Raises ValueError for unknown rules
        parse_rule(self.rule)

        self.seed_cells = [(int(x), int(y)) for x, y in self.seed_cells]

    def build_rule(self) -> Rule:
        """Create the rule named by ``rule``."""
        return parse_rule(self.rule)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "RunConfig":
        """Create config from dictionary, ignoring unknown keys."""
        known_fields = {f for f in cls.__dataclass_fields__}
        values = {k: v for k, v in d.items() if k in known_fields}
        if "seed_cells" in values:
            values["seed_cells"] = [tuple(cell) for cell in values["seed_cells"]]
        return cls(**values)

    @classmethod
    def from_args(cls, args: Any) -> "RunConfig":
        """Create config from argparse namespace."""
        known_fields = {f for f in cls.__dataclass_fields__}
        config_dict = {k: v for k, v in vars(args).items() if k in known_fields and v is not None}
        return cls(**config_dict)
