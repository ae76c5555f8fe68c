from typing import Callable, NamedTuple, Protocol, overload, runtime_checkable

import numpy as np

from .types import Vector, Width


@runtime_checkable
class Fragment(Protocol):
    """
    An unbreakable chunk of content with three widths. The whitespace width is the spacing between this and the next
    fragment and only counts when the fragment is not at the end of a line. The penalty width is a special spacing that
    is only used when the fragment appears at the end of a line, for example to reserve space for a hyphen.
    """

    @property
    def width(self) -> Width: ...

    @property
    def whitespace_width(self) -> Width: ...

    @property
    def penalty_width(self) -> Width: ...


class Box(NamedTuple):
    """A bare fragment, nothing but the three widths."""

    width: Width
    whitespace_width: Width = 0
    penalty_width: Width = 0


class Word:
    """A fragment backed by a piece of text, measured once on creation."""

    __slots__ = ("word", "whitespace", "penalty", "width", "whitespace_width", "penalty_width")

    def __init__(
        self,
        word: str,
        whitespace: str = "",
        penalty: str = "",
        measure: Callable[[str], Width] = len,
    ):
        self.word = word
        self.whitespace = whitespace
        self.penalty = penalty
        self.width = measure(word)
        self.whitespace_width = measure(whitespace)
        self.penalty_width = measure(penalty)

    def __repr__(self):
        return f"Word({self.word!r}, {self.whitespace!r}, {self.penalty!r})"

    def __eq__(self, other):
        if not isinstance(other, Word):
            return NotImplemented
        return (self.word, self.whitespace, self.penalty) == (other.word, other.whitespace, other.penalty)

    def __hash__(self):
        return hash((self.word, self.whitespace, self.penalty))


class Fragments:
    """
    A sequence of fragments stored as three parallel vectors.

    Indexing with an integer gives a `Box`, slicing gives another `Fragments` sharing the same memory. The wrapping
    functions read the vectors directly instead of visiting each fragment.
    """

    widths: Vector
    whitespace_widths: Vector
    penalty_widths: Vector

    def __init__(self, widths, whitespace_widths, penalty_widths):
        self.widths = np.asarray(widths)
        self.whitespace_widths = np.asarray(whitespace_widths)
        self.penalty_widths = np.asarray(penalty_widths)

        if not (len(self.widths) == len(self.whitespace_widths) == len(self.penalty_widths)):
            raise ValueError("Fragment width vectors must have the same length.")

    def __len__(self) -> int:
        return len(self.widths)

    @overload
    def __getitem__(self, item: int) -> Box: ...

    @overload
    def __getitem__(self, item: slice) -> "Fragments": ...

    def __getitem__(self, item):
        if isinstance(item, slice):
            return self._slice(item)
        return Box(self.widths[item].item(), self.whitespace_widths[item].item(), self.penalty_widths[item].item())

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]

    def _slice(self, item: slice) -> "Fragments":
        # Subclasses carry extra per-fragment vectors, so build through __new__ and copy every array attribute
        part = object.__new__(type(self))
        for name, value in vars(self).items():
            if isinstance(value, np.ndarray) and len(value) == len(self):
                value = value[item]
            setattr(part, name, value)
        return part

    def __repr__(self):
        return f"{type(self).__name__}(n={len(self)})"
