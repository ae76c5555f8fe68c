from typing import Sequence

from .fragment import Fragment
from .optimal_fit import as_line_widths
from .types import TargetWidths


def first_fit_breaks(fragments: Sequence[Fragment], line_widths: TargetWidths) -> list[int]:
    """Positions [0, b1, ..., n] of the lines made by filling each line as far as it goes."""
    line_widths = as_line_widths(line_widths)

    breaks = [0]
    width = 0
    for idx, fragment in enumerate(fragments):
        target_width = line_widths(len(breaks) - 1)
        if width + fragment.width + fragment.penalty_width > target_width and idx > breaks[-1]:
            breaks.append(idx)
            width = 0
        width += fragment.width + fragment.whitespace_width

    if len(fragments):
        breaks.append(len(fragments))
    return breaks


def wrap_first_fit(fragments: Sequence[Fragment], line_widths: TargetWidths) -> list[Sequence[Fragment]]:
    """Wrap fragments into lines with the greedy first-fit algorithm.

    Lines are filled left to right and a fragment moves to the next line as soon as it does not fit. This is fast and
    predictable but can leave very short lines behind, see `wrap_optimal_fit`. A fragment wider than the line is
    placed on a line by itself.
    """
    breaks = first_fit_breaks(fragments, line_widths)
    return [fragments[a:b] for a, b in zip(breaks[:-1], breaks[1:])]
