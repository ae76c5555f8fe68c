from dataclasses import asdict, dataclass

# Per-line penalty. It is added for every line, which makes it expensive to output more lines than necessary.
NLINE_PENALTY = 1000.0

# Penalty for a line with the maximum possible gap, i.e. a line with a width of zero.
MAX_LINE_PENALTY = 10000.0

# Per-unit cost for lines that overflow the target width.
OVERFLOW_PENALTY = 2.0 * MAX_LINE_PENALTY

# The last line is short if it is less than 1/4 of the target width.
SHORT_LINE_FRACTION = 4

# Penalty for a short last line.
SHORT_LAST_LINE_PENALTY = 125.0

# Penalty for lines ending with a hyphen.
HYPHEN_PENALTY = 150.0


@dataclass(frozen=True)
class Penalties:
    """
    Cost policy of the optimal-fit algorithm.

    Attributes:
        nline_penalty: Added once for every line.
        max_line_penalty: Cost of a non-final line that is completely empty. Smaller gaps cost quadratically less.
        overflow_penalty: Cost per unit of width by which a line exceeds its target.
        short_line_fraction: A single-fragment last line narrower than target // short_line_fraction is short.
        short_last_line_penalty: Added for a short last line.
        hyphen_penalty: Added for a line that ends on a fragment with a penalty width, e.g. a hyphen.
    """
    nline_penalty: float = NLINE_PENALTY
    max_line_penalty: float = MAX_LINE_PENALTY
    overflow_penalty: float = OVERFLOW_PENALTY
    short_line_fraction: int = SHORT_LINE_FRACTION
    short_last_line_penalty: float = SHORT_LAST_LINE_PENALTY
    hyphen_penalty: float = HYPHEN_PENALTY

    def __post_init__(self):
        for name, value in asdict(self).items():
            if value < 0:
                raise ValueError(f"Penalty {name} cannot be negative, got {value}.")
        if self.short_line_fraction == 0:
            raise ValueError("short_line_fraction must be positive.")


DEFAULT_PENALTIES = Penalties()
