import random
from dataclasses import dataclass
from typing import Tuple

import networkx as nx

from .base import CrossoverOperator, MutationOperator, Route, is_permutation, tour_cost
from .crossover import fix_crossover, ordered_crossover
from .mutation import invert, multiple_swap, single_swap


@dataclass(eq=False)
class Tour:
    """
    A candidate solution: a permutation of the cities and its cached cycle cost.

    Tours compare equal when their costs are equal. Ordering truncates the cost
    to an integer, which is exact for the integral cost data this engine runs on.
    """

    route: Route
    cost: float

    @staticmethod
    def generate(graph: nx.Graph, rng: random.Random) -> "Tour":
        route = list(range(graph.number_of_nodes()))
        rng.shuffle(route)
        return Tour(route=route, cost=tour_cost(graph, route))

    @staticmethod
    def from_route(route, graph: nx.Graph) -> "Tour":
        route = list(route)
        return Tour(route=route, cost=tour_cost(graph, route))

    def copy(self) -> "Tour":
        return Tour(route=self.route[:], cost=self.cost)

    def is_permutation(self) -> bool:
        return is_permutation(self.route, len(self.route))

    def mutate(self, operator: MutationOperator, graph: nx.Graph, rng: random.Random) -> "Tour":
        if operator == MutationOperator.INVERSION:
            self.route = invert(self.route, rng)
        elif operator == MutationOperator.SINGLE:
            single_swap(self.route, rng)
        elif operator == MutationOperator.MULTIPLE:
            multiple_swap(self.route, rng)
        else:
            raise ValueError(f"unknown mutation operator {operator!r}")
        self.cost = tour_cost(graph, self.route)
        return self

    def crossover(
        self, other: "Tour", operator: CrossoverOperator, graph: nx.Graph, rng: random.Random
    ) -> Tuple["Tour", "Tour"]:
        if operator == CrossoverOperator.FIX:
            first, second = fix_crossover(self.route, other.route, rng)
        elif operator == CrossoverOperator.ORDERED:
            first, second = ordered_crossover(self.route, other.route, rng)
        else:
            raise ValueError(f"unknown crossover operator {operator!r}")
        return Tour.from_route(first, graph), Tour.from_route(second, graph)

    def __eq__(self, other):
        if not isinstance(other, Tour):
            return NotImplemented
        return self.cost == other.cost

    __hash__ = None

    def __lt__(self, other: "Tour") -> bool:
        return int(self.cost) < int(other.cost)

    def __le__(self, other: "Tour") -> bool:
        return int(self.cost) <= int(other.cost)

    def __gt__(self, other: "Tour") -> bool:
        return int(self.cost) > int(other.cost)

    def __ge__(self, other: "Tour") -> bool:
        return int(self.cost) >= int(other.cost)
