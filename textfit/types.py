from typing import Callable, Sequence, TypeVar
import numpy as np

T = TypeVar("T")
type Vector[T] = np.ndarray[tuple[int, ...], np.dtype[T]]  # type: ignore[type-var]
type IntVector = Vector[np.int64]
type BoolVector = Vector[np.bool_]

type Width = int | float
type Span = tuple[int, int]

type LineWidths = Callable[[int], Width]

type Minimum = tuple[int, float]  # (predecessor boundary, total cost)
type TargetWidths = Width | Sequence[Width] | LineWidths
