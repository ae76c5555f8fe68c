import numpy as np
import pytest

from textfit.smawk import OnlineConcaveMinima, concave_minima, online_column_minima


def monge_matrix(rng, n_rows, n_cols):
    """(x_j - y_i)^2 with sorted x and y satisfies the Monge condition, hence is totally monotone.

    x is even and y is 1 mod 4, so x is never the midpoint of two y and columns have no ties.
    """
    x = (2 * np.sort(rng.choice(200, n_cols, replace=False))).tolist()
    y = (4 * np.sort(rng.choice(200, n_rows, replace=False)) + 1).tolist()
    return [[(xj - yi) ** 2 for xj in x] for yi in y]


@pytest.mark.parametrize("seed", range(20))
def test_concave_minima_matches_brute_force(seed):
    rng = np.random.default_rng(seed)
    n_rows, n_cols = rng.integers(1, 15, 2)
    m = monge_matrix(rng, n_rows, n_cols)

    minima = concave_minima(range(n_rows), range(n_cols), lambda i, j: m[i][j])

    assert sorted(minima) == list(range(n_cols))
    for j in range(n_cols):
        value, row = minima[j]
        assert value == min(m[i][j] for i in range(n_rows))
        assert m[row][j] == value


def test_concave_minima_row_positions_are_nondecreasing():
    rng = np.random.default_rng(42)
    m = monge_matrix(rng, 30, 30)
    minima = concave_minima(range(30), range(30), lambda i, j: m[i][j])
    rows = [minima[j][1] for j in range(30)]
    assert rows == sorted(rows)


def test_concave_minima_ties_prefer_earlier_rows():
    minima = concave_minima(range(3), range(2), lambda i, j: 0)
    assert minima == {0: (0, 0), 1: (0, 0)}


def test_concave_minima_without_columns():
    assert concave_minima(range(4), [], lambda i, j: 0) == {}


def brute_force_online(weight, size):
    values = [0]
    indices = [0]
    for j in range(1, size):
        best = min((values[i] + weight(i, j), i) for i in range(j))
        values.append(best[0])
        indices.append(best[1])
    return values, indices


@pytest.mark.parametrize("seed", range(20))
def test_online_column_minima_matches_brute_force(seed):
    rng = np.random.default_rng(seed)
    size = int(rng.integers(1, 40))
    prefix = np.concatenate([[0], np.cumsum(rng.integers(1, 8, size))]).tolist()
    target = int(rng.integers(5, 30))

    # A convex function of the width of a range satisfies the quadrangle inequality
    def weight(i, j):
        return (prefix[j] - prefix[i] - target) ** 2

    def matrix(minima, i, j):
        assert i <= minima.finished, "Matrix asked about a row that is not final yet"
        assert j < size
        return minima.value(i) + weight(i, j)

    table = online_column_minima(0, size, matrix)
    values, indices = brute_force_online(weight, size)

    assert len(table) == size
    assert table[0] == (0, 0)
    assert [v for _, v in table] == values
    for j in range(1, size):
        i = table[j][0]
        assert i < j
        assert values[i] + weight(i, j) == values[j]


def test_online_column_minima_single_column():
    calls = []

    def matrix(minima, i, j):
        calls.append((i, j))
        return 0.0

    assert online_column_minima(0.0, 1, matrix) == [(0, 0.0)]
    assert calls == []


def test_online_concave_minima_is_lazy():
    calls = []

    def matrix(minima, i, j):
        calls.append((i, j))
        return minima.value(i) + (j - i - 2) ** 2

    minima = OnlineConcaveMinima(matrix, 0)
    assert calls == []
    assert minima.value(0) == 0
    assert calls == []

    assert minima.value(4) == 0
    assert minima.index(4) == 2
    assert minima.finished >= 4

    pairs = []
    for pair in minima:
        pairs.append(pair)
        if len(pairs) == 5:
            break
    assert pairs[0] == (0, 0)
    assert pairs[2] == (0, 0)
