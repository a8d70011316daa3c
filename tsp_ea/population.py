import random
from typing import List, Sequence

import networkx as nx

from .errors import EmptyPopulationError
from .operators import CrossoverOperator, MutationOperator, Tour


class Population:
    """
    Fixed-size pool of tours evolved with tournament selection and replace-weakest.

    ``best``, ``worst`` and ``average_cost`` are cached and refreshed after every
    selection/replacement cycle.
    """

    def __init__(self, individuals: Sequence[Tour], rng: random.Random = None):
        self.individuals: List[Tour] = list(individuals)
        self.population_size = len(self.individuals)
        self.rng = rng or random.Random()
        self.refresh_statistics()

    @classmethod
    def random(cls, population_size: int, graph: nx.Graph, rng: random.Random = None) -> "Population":
        rng = rng or random.Random()
        return cls([Tour.generate(graph, rng) for _ in range(population_size)], rng=rng)

    @staticmethod
    def find_average_cost(individuals: Sequence[Tour]) -> float:
        if not individuals:
            raise EmptyPopulationError("cannot average an empty population")
        return sum(t.cost for t in individuals) / len(individuals)

    @staticmethod
    def find_best(individuals: Sequence[Tour]) -> Tour:
        if not individuals:
            raise EmptyPopulationError("cannot find the best tour of an empty population")
        return min(individuals)

    @staticmethod
    def find_worst(individuals: Sequence[Tour]) -> Tour:
        if not individuals:
            raise EmptyPopulationError("cannot find the worst tour of an empty population")
        return individuals[Population.worst_index(individuals)]

    @staticmethod
    def worst_index(individuals: Sequence[Tour]) -> int:
        """Index of the costliest tour; among equal costs the last one wins."""
        worst = 0
        for i in range(1, len(individuals)):
            if individuals[i] >= individuals[worst]:
                worst = i
        return worst

    def refresh_statistics(self) -> None:
        self.best = Population.find_best(self.individuals)
        self.worst = Population.find_worst(self.individuals)
        self.average_cost = Population.find_average_cost(self.individuals)

    def run_tournament(self, tournament_size: int) -> Tour:
        contenders = self.rng.sample(self.individuals, tournament_size)
        return min(contenders)

    def replacement(self, child: Tour) -> bool:
        """Swap the child in for the costliest tour if it is no worse. Returns True when accepted."""
        if not self.individuals:
            raise EmptyPopulationError("cannot replace into an empty population")
        worst_idx = Population.worst_index(self.individuals)
        if self.individuals[worst_idx].cost >= child.cost:
            self.individuals[worst_idx] = child
            return True
        return False

    def selection_and_replacement(
        self,
        tournament_size: int,
        crossover: CrossoverOperator,
        mutation: MutationOperator,
        graph: nx.Graph,
    ) -> None:
        first_parent = self.run_tournament(tournament_size)
        second_parent = self.run_tournament(tournament_size)
        first_child, second_child = first_parent.crossover(second_parent, crossover, graph, self.rng)
        first_child.mutate(mutation, graph, self.rng)
        second_child.mutate(mutation, graph, self.rng)
        # Order matters: the first child may change which tour is worst.
        self.replacement(first_child)
        self.replacement(second_child)
        self.refresh_statistics()
