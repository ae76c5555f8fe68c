import re
from functools import cached_property
from typing import Callable, Literal

import numpy as np

from .first_fit import first_fit_breaks
from .fragment import Fragments
from .optimal_fit import optimal_fit_breaks
from .penalties import Penalties
from .types import BoolVector, IntVector, Span, TargetWidths, Vector

re_words = re.compile(r"\S+")

type Algorithm = Literal["optimal", "first"]

BREAKERS = {
    "optimal": optimal_fit_breaks,
    "first": lambda fragments, widths, penalties: first_fit_breaks(fragments, widths),
}


def word_splitter(s: str) -> list[Span]:
    return [m.span() for m in re_words.finditer(s)]


def monospace_measure(s: str) -> Vector:
    return np.ones(len(s), dtype=int)


class TextFragmenter:
    """Cuts a text into fragments at the spans given by the splitter.

    The measure returns the width of every character of a string. The splitter returns the (start, end) spans of the
    fragments; characters in between spans are whitespace. Two spans that touch, e.g. syllables returned by a
    hyphenating splitter, may be broken apart at the cost of a hyphen.
    """

    def __init__(
            self,
            measure: Callable[[str], Vector] | None = None,
            splitter: Callable[[str], list[Span]] | None = None,
            hyphen: str = "-",
    ):
        if measure is None:
            measure = monospace_measure

        if splitter is None:
            splitter = word_splitter

        self.measure = measure
        self.splitter = splitter
        self.hyphen = hyphen
        self.hyphen_width = np.asarray(self.measure(hyphen)).sum().item()

    def __call__(self, text: str) -> "TextFragments":
        n = len(text)

        if not text:
            raise ValueError("Text cannot be empty")
        elif text[0].isspace() or text[n - 1].isspace():
            raise ValueError("Input text cannot start or end with whitespace.")

        widths = np.asarray(self.measure(text))
        if len(widths) != n:
            raise ValueError(f"Measure returned {len(widths)} widths for {n} characters.")

        spans = np.array(self.splitter(text), dtype=int).reshape(-1, 2).T
        start = spans[0]
        end = spans[1]

        m = len(start)
        if m == 0 or start[0] != 0:
            raise ValueError("First span must start at the first character.")

        if end[m - 1] != n:
            raise ValueError("Last span must end at the last character.")

        if np.any(end <= start) or np.any(start[1:] < end[:-1]):
            raise ValueError("Spans must be non-empty, ordered and non-overlapping.")

        # Alternate fragment and whitespace widths: cwidths[e0] - cwidths[s0], cwidths[s1] - cwidths[e0], ...
        cwidths = np.zeros(n + 1, dtype=widths.dtype)
        cwidths[1:] = widths.cumsum()
        zipped = spans.ravel(order="F")
        pre_fragment_widths = cwidths[zipped[1:]] - cwidths[zipped[: 2 * m - 1]]

        fragment_widths = pre_fragment_widths[::2]
        whitespace_widths = np.pad(pre_fragment_widths[1::2], (0, 1))

        # A span that runs straight into the next one can only be broken with a hyphen
        touching = start[1:] == end[:-1]
        penalty_widths = np.pad(np.where(touching, self.hyphen_width, 0), (0, 1))

        return TextFragments(
            text=text,
            hyphen=self.hyphen,
            starts=start,
            ends=end,
            widths=fragment_widths,
            whitespace_widths=whitespace_widths,
            penalty_widths=penalty_widths,
        )


class TextFragments(Fragments):
    """Fragments that remember where in the text they come from."""

    text: str
    hyphen: str

    starts: IntVector  # Start indices of each fragment in the text
    ends: IntVector  # End indices of each fragment in the text

    def __init__(
        self,
        text: str,
        hyphen: str,
        starts: IntVector,
        ends: IntVector,
        widths: Vector,
        whitespace_widths: Vector,
        penalty_widths: Vector,
    ):
        self.text = text
        self.hyphen = hyphen
        self.starts = np.asarray(starts)
        self.ends = np.asarray(ends)

        super().__init__(widths, whitespace_widths, penalty_widths)

    def get_fragment_str(self, i: int) -> str:
        """Helper function to get the text representation of the i-th fragment."""
        return self.text[self.starts[i]: self.ends[i]]


class TextColumn:
    """Text fragments wrapped into a column.

    The column width can be one number or one per line; if there are more lines than widths, the last width repeats.
    A callable mapping the line number to a width works as well.
    """

    def __init__(
        self,
        fragments: TextFragments,
        column_width: TargetWidths,
        algorithm: Algorithm = "optimal",
        penalties: Penalties | None = None,
    ):
        if algorithm not in BREAKERS:
            raise ValueError(f"Unknown wrapping algorithm {algorithm!r}, expected one of {sorted(BREAKERS)}.")

        self.fragments = fragments
        self.column_width = column_width
        self.algorithm = algorithm
        self.penalties = penalties

    @cached_property
    def breaks(self) -> IntVector:
        """Fragment indices where lines start, followed by the number of fragments."""
        breaker = BREAKERS[self.algorithm]
        return np.array(breaker(self.fragments, self.column_width, self.penalties), dtype=int)

    @cached_property
    def wrap(self) -> tuple[IntVector, IntVector, BoolVector]:
        """Returns the start and end index of each line in the text, and whether the line ends with a hyphen."""
        fragment_breaks = self.breaks
        last = fragment_breaks[1:] - 1
        hyphen_mask = self.fragments.penalty_widths[last] > 0
        line_starts = self.fragments.starts[fragment_breaks[:-1]]
        line_ends = self.fragments.ends[last]
        return line_starts, line_ends, hyphen_mask

    def __len__(self) -> int:
        return len(self.breaks) - 1

    def to_list(self) -> list[str]:
        """Breaks the text into lines, with a hyphen added where a line ends inside a word."""
        line_starts, line_ends, hyphen_mask = self.wrap
        text = self.fragments.text
        hyphen = self.fragments.hyphen
        return [
            text[a:b] + (hyphen if h else '')
            for a, b, h in zip(line_starts.tolist(), line_ends.tolist(), hyphen_mask.tolist())
        ]


def wrap(
    text: str,
    width: TargetWidths,
    measure: Callable[[str], Vector] | None = None,
    splitter: Callable[[str], list[Span]] | None = None,
    algorithm: Algorithm = "optimal",
    penalties: Penalties | None = None,
) -> list[str]:
    """Wrap a paragraph into lines no wider than width where possible.

    Leading and trailing whitespace is ignored, whitespace between fragments on the same line is kept as it is.
    """
    text = text.strip()
    if not text:
        return []

    fragments = TextFragmenter(measure=measure, splitter=splitter)(text)
    return TextColumn(fragments, width, algorithm=algorithm, penalties=penalties).to_list()


def fill(text: str, width: TargetWidths, **kwargs) -> str:
    """Like `wrap`, but joins the lines with newlines."""
    return "\n".join(wrap(text, width, **kwargs))
