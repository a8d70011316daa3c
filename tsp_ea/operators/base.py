from enum import Enum
from typing import List, Sequence

import networkx as nx

from ..errors import DataConsistencyError


Route = List[int]


class CrossoverOperator(str, Enum):
    FIX = "fix"
    ORDERED = "ordered"


class MutationOperator(str, Enum):
    INVERSION = "inversion"
    SINGLE = "single"
    MULTIPLE = "multiple"


# Smallest route each operator can work on without a degenerate sample.
MIN_CITIES = {
    CrossoverOperator.FIX: 2,
    CrossoverOperator.ORDERED: 4,
    MutationOperator.INVERSION: 2,
    MutationOperator.SINGLE: 2,
    MutationOperator.MULTIPLE: 4,
}


def tour_cost(graph: nx.Graph, route: Sequence[int]) -> float:
    """Total cost of the closed cycle, starting with the edge last -> first."""
    cost = 0.0
    n = len(route)
    for i in range(n):
        prev = route[i - 1] if i > 0 else route[n - 1]
        cur = route[i]
        try:
            cost += graph[prev][cur]["weight"]
        except KeyError:
            raise DataConsistencyError(f"no edge cost from city {prev} to city {cur}") from None
    return float(cost)


def is_permutation(route: Sequence[int], n: int) -> bool:
    return len(route) == n and set(route) == set(range(n))
