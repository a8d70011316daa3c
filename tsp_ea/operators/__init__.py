from .base import MIN_CITIES, CrossoverOperator, MutationOperator, Route, is_permutation, tour_cost
from .crossover import fix_crossover, ordered_child, ordered_crossover, repair
from .mutation import inversion, invert, multiple_swap, single_swap
from .tour import Tour

__all__ = [
    "MIN_CITIES",
    "CrossoverOperator",
    "MutationOperator",
    "Route",
    "Tour",
    "is_permutation",
    "tour_cost",
    "fix_crossover",
    "ordered_child",
    "ordered_crossover",
    "repair",
    "inversion",
    "invert",
    "multiple_swap",
    "single_swap",
]
