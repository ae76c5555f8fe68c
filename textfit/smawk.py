"""Totally monotone matrix searching.

`concave_minima` is the offline algorithm of Agarwal, Klawe, Moran, Shor, and Wilbur, Geometric applications of a
matrix searching algorithm, Algorithmica 2, pp. 195-208 (1987).

`OnlineConcaveMinima` is the online algorithm of Galil and Park, A linear time algorithm for concave one-dimensional
dynamic programming (1989), which simplifies earlier work on the same problem by Wilbur (J. Algorithms 1988) and
Eppstein (J. Algorithms 1990). Both follow the Python formulation by D. Eppstein (PADS, 2002/2005).

A matrix is passed implicitly as a function. It must be concave (totally monotone), that is
    matrix(i, j) > matrix(i', j)  =>  matrix(i, j') > matrix(i', j')
for every i < i' and j < j': in every submatrix the positions of the column minima are monotonically nondecreasing.
"""

from typing import Callable, Iterator, Sequence

from .types import Minimum


def concave_minima(
    rows: Sequence[int],
    cols: Sequence[int],
    matrix: Callable[[int, int], float],
) -> dict[int, tuple[float, int]]:
    """
    Search for the minimum value in each column of a matrix.

    Returns a dictionary mapping each column index to a pair (value, row). Ties are broken in favor of earlier rows.
    Rows and columns are labeled by the indices given in order by the first two arguments, usually integer ranges.
    """

    if not cols:
        return {}

    # Reduce: keep at most as many candidate rows as there are columns
    stack = []
    for r in rows:
        while stack and matrix(stack[-1], cols[len(stack) - 1]) > matrix(r, cols[len(stack) - 1]):
            stack.pop()
        if len(stack) != len(cols):
            stack.append(r)
    rows = stack

    # Recurse on the odd columns
    minima = concave_minima(rows, [cols[c] for c in range(1, len(cols), 2)], matrix)

    # Fill in the even columns between the known minima of their neighbours
    r = 0
    for c in range(0, len(cols), 2):
        col = cols[c]
        row = rows[r]
        if c == len(cols) - 1:
            last_row = rows[-1]
        else:
            last_row = minima[cols[c + 1]][1]
        pair = (matrix(row, col), row)
        while row != last_row:
            r += 1
            row = rows[r]
            pair = min(pair, (matrix(row, col), row))
        minima[col] = pair

    return minima


class OnlineConcaveMinima:
    """
    Online concave minimization algorithm of Galil and Park.

    Produces a sequence of pairs (value(j), index(j)) where
        value(0) = initial,
        value(j) = min { matrix(self, i, j) | i < j } for j > 0,
    and index(j) is the row i that provides the minimum. The matrix receives this object as its first argument.

    matrix(self, i, j) is never called before value(i) is final, so the matrix may look up value(i) and index(k) for
    any k <= i. Asking for a value that is not computed yet advances the search until it is.

    matrix must return a number for every j, also j beyond the range of interest. A value that keeps concavity intact
    there is -i; a flag such as None breaks it through ties.
    """

    def __init__(self, matrix: Callable[["OnlineConcaveMinima", int, int], float], initial: float):
        # Tentative values and their rows. Entries beyond _finished may still change.
        self._values = [initial]
        self._indices = [0]
        self._finished = 0

        # Invariants kept by _advance:
        # (1) self._values[i] == matrix(self._indices[i], i),
        # (2) if the final index(i) < base, then self._values[i] is present and correct,
        # (3) if i <= tentative and the final index(i) <= finished, then self._values[i] is correct.
        self._matrix = matrix
        self._base = 0
        self._tentative = 0

    def __iter__(self) -> Iterator[tuple[float, int]]:
        """Loop through (value, index) pairs."""
        i = 0
        while True:
            yield self.value(i), self.index(i)
            i += 1

    @property
    def finished(self) -> int:
        """Largest column whose minimum is final."""
        return self._finished

    def value(self, j: int) -> float:
        """Return min { matrix(i, j) | i < j }."""
        while self._finished < j:
            self._advance()
        return self._values[j]

    def index(self, j: int) -> int:
        """Return argmin { matrix(i, j) | i < j }."""
        while self._finished < j:
            self._advance()
        return self._indices[j]

    def _cell(self, i: int, j: int) -> float:
        return self._matrix(self, i, j)

    def _advance(self):
        """Finish another (value, index) pair."""
        # First case: past the previous tentative column. Apply concave_minima to the largest square submatrix that
        # fits under the base to make new tentative values.
        i = self._finished + 1
        if i > self._tentative:
            rows = range(self._base, self._finished + 1)
            self._tentative = self._finished + len(rows)
            cols = range(self._finished + 1, self._tentative + 1)
            minima = concave_minima(rows, cols, self._cell)
            for col in cols:
                if col >= len(self._values):
                    self._values.append(minima[col][0])
                    self._indices.append(minima[col][1])
                elif minima[col][0] < self._values[col]:
                    self._values[col], self._indices[col] = minima[col]
            self._finished = i
            return

        # Second case: the new column minimum is on the diagonal. All later ones are at least as low, so work done
        # for higher rows can be dropped. The lost tentative work is paid for by the increase of base.
        diag = self._cell(i - 1, i)
        if diag < self._values[i]:
            self._values[i] = diag
            self._indices[i] = self._base = i - 1
            self._tentative = self._finished = i
            return

        # Third case: row i-1 gives no column minimum up to tentative. Advance finished, invariants still hold.
        prev_row = self._cell(i - 1, self._tentative)
        tentative_value = self._values[self._tentative]
        if prev_row >= tentative_value:
            self._finished = i
            return

        # Fourth case: a new column minimum at tentative. Rows before finished cannot supply any later minimum, so
        # they move under the base.
        self._base = i - 1
        self._tentative = self._finished = i


def online_column_minima(
    initial: float,
    size: int,
    matrix: Callable[[OnlineConcaveMinima, int, int], float],
) -> list[Minimum]:
    """
    Compute the minima table of an online concave matrix with `size` columns.

    Entry 0 is (0, initial) and entry j > 0 is (argmin, min) of matrix(minima, i, j) over i < j. The matrix is only
    asked about columns below `size`; the search itself pads further columns with the -i flag.
    """

    def bounded(minima: OnlineConcaveMinima, i: int, j: int) -> float:
        if j >= size:
            return -i
        return matrix(minima, i, j)

    minima = OnlineConcaveMinima(bounded, initial)
    table = [(0, initial)]
    for j in range(1, size):
        table.append((minima.index(j), minima.value(j)))
    return table
