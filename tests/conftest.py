import random

import matplotlib
import numpy as np
import pytest

from tsp_ea.data import graph_from_matrix

# Charts in tests are only written to disk.
matplotlib.use("Agg")


BURMA4 = [
    [0, 153, 510, 706],
    [153, 0, 422, 664],
    [510, 422, 0, 289],
    [706, 664, 289, 0],
]


@pytest.fixture
def burma4():
    return graph_from_matrix(BURMA4)


@pytest.fixture
def graph12():
    rs = np.random.RandomState(7)
    mat = rs.randint(10, 500, size=(12, 12)).astype(float)
    np.fill_diagonal(mat, 0)
    return graph_from_matrix(mat)


@pytest.fixture
def rng():
    return random.Random(1234)


def assert_permutation(route, n):
    assert sorted(route) == list(range(n))
