"""Optimal-fit line breaking.

The algorithm considers all possible break points and picks the breaks which minimize the total cost of the paragraph.
Every line costs a fixed amount, and every line except the last costs more the larger the gap it leaves behind. Take
"To be, or not to be: that is the question" in a column of width 10. Filling lines greedily gives

    "To be, or"   1² =  1
    "not to be:"  0² =  0
    "that is"     3² =  9
    "the"         7² = 49
    "question"    2² =  4

for a total of 63, while the best of all 512 ways to break the ten words is

    "To be,"     4² = 16
    "or not to"  1² =  1
    "be: that"   2² =  4
    "is the"     4² = 16
    "question"   2² =  4

for a total of 41. Trying every combination is exponential, but the costs form a totally monotone matrix whose column
minima are found in linear time with the online SMAWK search in `smawk`. The per-line cost model follows Knuth and
Plass, Breaking Paragraphs into Lines (1981), as simplified in Eppstein's Python wrap.
"""

import logging
from typing import Sequence

import numpy as np

from .fragment import Fragment, Fragments
from .penalties import DEFAULT_PENALTIES, Penalties
from .smawk import OnlineConcaveMinima, online_column_minima
from .types import LineWidths, Minimum, TargetWidths, Width

logger = logging.getLogger(__name__)


def as_line_widths(width: TargetWidths) -> LineWidths:
    """Turn a single width or a list of widths into a function of the line number.

    If a list is shorter than the number of lines, its last width is repeated.
    """
    if callable(width):
        return width

    targets = np.atleast_1d(width).tolist()
    if not targets:
        raise ValueError("At least one line width is required.")

    last = len(targets) - 1
    return lambda line_number: targets[min(line_number, last)]


def accumulate_widths(fragments: Sequence[Fragment]) -> list[Width]:
    """Prefix sums of fragment plus whitespace widths, so that widths[j] - widths[i] spans fragments[i:j]."""
    if isinstance(fragments, Fragments):
        steps = fragments.widths + fragments.whitespace_widths
    else:
        steps = np.array([f.width + f.whitespace_width for f in fragments])

    widths = np.zeros(len(steps) + 1, dtype=steps.dtype if len(steps) else int)
    widths[1:] = steps.cumsum()
    return widths.tolist()


class LineNumbers:
    """Cache for line numbers of fragment boundaries.

    The line number of boundary k is one more than that of its optimal predecessor. Resolving it by walking the
    predecessor chain each time would make the search quadratic, so every boundary is computed once, in order.
    """

    def __init__(self):
        self.line_numbers = [0]

    def get(self, i: int, minima: OnlineConcaveMinima) -> int:
        """Line number of boundary i. Only boundaries whose minimum is final may be asked for."""
        while (pos := len(self.line_numbers)) < i + 1:
            self.line_numbers.append(1 + self.line_numbers[minima.index(pos)])
        return self.line_numbers[i]


def line_penalty(
    i: int,
    j: int,
    fragments: Sequence[Fragment],
    line_width: Width,
    target_width: Width,
    minimum_cost: float,
    penalties: Penalties = DEFAULT_PENALTIES,
) -> float:
    """Cost of the line holding fragments[i:j] on top of minimum_cost, the best cost of the lines before it."""
    cost = minimum_cost + penalties.nline_penalty

    if line_width > target_width:
        overflow = line_width - target_width
        cost += overflow * penalties.overflow_penalty
    elif j < len(fragments):
        # Quadratic in the gap, from 0 for a full line up to max_line_penalty for an empty one
        gap = (target_width - line_width) / target_width
        cost += gap * gap * penalties.max_line_penalty
    elif i + 1 == j and line_width < target_width // penalties.short_line_fraction:
        # The last line may have any gap, except when it is a single short fragment
        cost += penalties.short_last_line_penalty

    if fragments[j - 1].penalty_width > 0:
        cost += penalties.hyphen_penalty

    return cost


class LineCost:
    """The implicit cost matrix handed to the column minima search.

    Cell (i, j) is the best total cost of a paragraph whose last line holds fragments[i:j]. The line number cache is
    the only state that changes while the search runs.
    """

    def __init__(self, fragments: Sequence[Fragment], line_widths: LineWidths, penalties: Penalties):
        self.fragments = fragments
        self.line_widths = line_widths
        self.penalties = penalties
        self.widths = accumulate_widths(fragments)
        self.line_numbers = LineNumbers()

        if isinstance(fragments, Fragments):
            self.whitespace_widths = fragments.whitespace_widths.tolist()
            self.penalty_widths = fragments.penalty_widths.tolist()
        else:
            self.whitespace_widths = [f.whitespace_width for f in fragments]
            self.penalty_widths = [f.penalty_width for f in fragments]

    def __call__(self, minima: OnlineConcaveMinima, i: int, j: int) -> float:
        line_number = self.line_numbers.get(i, minima)
        target_width = max(1, self.line_widths(line_number))

        # fragments[j-1] ends the line, so it drops its whitespace and shows its penalty
        line_width = self.widths[j] - self.widths[i] - self.whitespace_widths[j - 1] + self.penalty_widths[j - 1]

        return line_penalty(i, j, self.fragments, line_width, target_width, minima.value(i), self.penalties)


def backtrack(minima: list[Minimum], n: int) -> list[int]:
    """Follow the predecessors from boundary n back to 0. Returns the break positions in order, 0 and n included."""
    breaks = [n]
    pos = n
    while pos:
        pos = minima[pos][0]
        breaks.append(pos)
    breaks.reverse()
    return breaks


def optimal_fit_breaks(
    fragments: Sequence[Fragment],
    line_widths: TargetWidths,
    penalties: Penalties | None = None,
) -> list[int]:
    """Positions [0, b1, ..., n] where the optimal lines of fragments start and end."""
    n = len(fragments)
    if n == 0:
        return [0]

    cost = LineCost(fragments, as_line_widths(line_widths), penalties or DEFAULT_PENALTIES)
    minima = online_column_minima(0.0, n + 1, cost)
    breaks = backtrack(minima, n)

    logger.debug("Wrapped %d fragments into %d lines with cost %.1f", n, len(breaks) - 1, minima[n][1])
    return breaks


def wrap_optimal_fit(
    fragments: Sequence[Fragment],
    line_widths: TargetWidths,
    penalties: Penalties | None = None,
) -> list[Sequence[Fragment]]:
    """Wrap fragments into lines with the optimal-fit algorithm.

    line_widths maps a line number (from 0) to the target width of that line, which allows hanging indents. A plain
    number or a list of numbers is accepted too. Fragments are never split further; a fragment wider than its line
    overflows on a line of its own.

    Returns consecutive slices of fragments, one per line. An empty input gives no lines.
    """
    breaks = optimal_fit_breaks(fragments, line_widths, penalties)
    return [fragments[a:b] for a, b in zip(breaks[:-1], breaks[1:])]
