import random
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

import networkx as nx

from .data import validate_graph
from .errors import ConfigurationError
from .operators import MIN_CITIES, CrossoverOperator, MutationOperator, Tour
from .population import Population


DEFAULT_GENERATIONS = 10000
MIN_POPULATION_SIZE = 10
MIN_TOURNAMENT_SIZE = 2


@dataclass
class SimulationConfig:
    crossover: CrossoverOperator = CrossoverOperator.FIX
    mutation: MutationOperator = MutationOperator.SINGLE
    population_size: int = 50
    tournament_size: int = 5
    generations: int = DEFAULT_GENERATIONS
    random_seed: Optional[int] = None

    def __post_init__(self):
        self.crossover = CrossoverOperator(self.crossover)
        self.mutation = MutationOperator(self.mutation)

    def validate(self, num_cities: Optional[int] = None) -> None:
        if self.population_size < MIN_POPULATION_SIZE:
            raise ConfigurationError(
                f"population size must be at least {MIN_POPULATION_SIZE}, got {self.population_size}"
            )
        if self.tournament_size < MIN_TOURNAMENT_SIZE:
            raise ConfigurationError(
                f"tournament size must be at least {MIN_TOURNAMENT_SIZE}, got {self.tournament_size}"
            )
        if self.tournament_size > self.population_size:
            raise ConfigurationError(
                f"tournament size {self.tournament_size} exceeds population size {self.population_size}"
            )
        if self.generations < 1:
            raise ConfigurationError(f"generations must be at least 1, got {self.generations}")
        if num_cities is not None:
            for op in (self.crossover, self.mutation):
                if num_cities < MIN_CITIES[op]:
                    raise ConfigurationError(
                        f"{op.value} needs at least {MIN_CITIES[op]} cities, graph has {num_cities}"
                    )

    def to_dict(self) -> Dict:
        state = asdict(self)
        state["crossover"] = self.crossover.value
        state["mutation"] = self.mutation.value
        return state


class SimulationState(str, Enum):
    INITIALIZING = "initializing"
    EVOLVING = "evolving"
    FINISHED = "finished"


@dataclass
class GenerationStats:
    generation: int
    best: float
    worst: float
    average: float


@dataclass
class SimulationResult:
    name: str
    config: SimulationConfig
    best_history: List[float] = field(default_factory=list)
    worst_history: List[float] = field(default_factory=list)
    average_history: List[float] = field(default_factory=list)
    best_tour: Optional[Tour] = None

    @property
    def final_best(self) -> float:
        return self.best_history[-1]

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "config": self.config.to_dict(),
            "best": self.best_history,
            "worst": self.worst_history,
            "average": self.average_history,
            "best_route": self.best_tour.route if self.best_tour else None,
            "best_cost": self.best_tour.cost if self.best_tour else None,
        }


ProgressCallback = Callable[[GenerationStats], None]


class Simulation:
    """
    One steady-state run over a single cost graph.

    Building the simulation creates the random population and records the
    generation-0 statistics. ``run`` then performs one selection, crossover,
    mutation and replacement cycle per generation until ``generations``
    entries have been recorded.
    """

    def __init__(
        self,
        graph: nx.Graph,
        config: SimulationConfig,
        name: str = "",
        rng: random.Random = None,
    ):
        validate_graph(graph)
        config.validate(num_cities=graph.number_of_nodes())
        self.graph = graph
        self.cfg = config
        self.name = name
        self.rng = rng or random.Random(config.random_seed)
        self.state = SimulationState.INITIALIZING
        self.population = Population.random(config.population_size, graph, rng=self.rng)
        self.generation = 0
        self.best_history: List[float] = []
        self.worst_history: List[float] = []
        self.average_history: List[float] = []
        self._record()

    def _record(self) -> GenerationStats:
        pop = self.population
        self.best_history.append(pop.best.cost)
        self.worst_history.append(pop.worst.cost)
        self.average_history.append(pop.average_cost)
        return GenerationStats(
            generation=self.generation,
            best=pop.best.cost,
            worst=pop.worst.cost,
            average=pop.average_cost,
        )

    def step(self) -> GenerationStats:
        if self.generation >= self.cfg.generations - 1:
            raise RuntimeError(
                f"simulation {self.name!r} already recorded all {self.cfg.generations} generations"
            )
        self.state = SimulationState.EVOLVING
        self.population.selection_and_replacement(
            self.cfg.tournament_size,
            self.cfg.crossover,
            self.cfg.mutation,
            self.graph,
        )
        self.generation += 1
        return self._record()

    def run(self, progress: Optional[ProgressCallback] = None) -> SimulationResult:
        while self.generation < self.cfg.generations - 1:
            stats = self.step()
            if progress is not None:
                progress(stats)
        self.state = SimulationState.FINISHED
        return self.result()

    def result(self) -> SimulationResult:
        return SimulationResult(
            name=self.name,
            config=self.cfg,
            best_history=list(self.best_history),
            worst_history=list(self.worst_history),
            average_history=list(self.average_history),
            best_tour=self.population.best.copy(),
        )
