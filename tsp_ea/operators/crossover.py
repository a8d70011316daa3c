import random
from collections import Counter
from typing import List, Sequence, Tuple

from ..errors import DataConsistencyError
from .base import Route


_UNASSIGNED = -1


def repair(child: Route) -> Route:
    """
    Make a one-point crossover child a permutation again, in place.

    Every city that occurs twice is overwritten at its first occurrence.
    Duplicates are resolved left to right and receive the missing cities in
    ascending order.
    """
    counts = Counter(child)
    missing = [city for city in range(len(child)) if city not in counts]
    duplicate_idx: List[int] = []
    seen = set()
    for i, city in enumerate(child):
        if counts[city] > 1 and city not in seen:
            duplicate_idx.append(i)
            seen.add(city)
    if len(duplicate_idx) != len(missing):
        raise DataConsistencyError(
            f"cannot repair child {child}: {len(duplicate_idx)} duplicates for {len(missing)} missing cities"
        )
    for idx, city in zip(duplicate_idx, missing):
        child[idx] = city
    return child


def fix_crossover(first: Sequence[int], second: Sequence[int], rng: random.Random) -> Tuple[Route, Route]:
    point = rng.randrange(1, len(first))
    first_child = list(first[:point]) + list(second[point:])
    second_child = list(second[:point]) + list(first[point:])
    return repair(first_child), repair(second_child)


def ordered_child(first: Sequence[int], second: Sequence[int], points: Sequence[int]) -> Route:
    """
    Keep first[p0..p1] and first[p2..p3] (inclusive) in place and fill every
    other slot with the remaining cities in the order they appear in second.
    """
    p0, p1, p2, p3 = points
    child = [_UNASSIGNED] * len(first)
    child[p0 : p1 + 1] = first[p0 : p1 + 1]
    child[p2 : p3 + 1] = first[p2 : p3 + 1]
    kept = set(first[p0 : p1 + 1]) | set(first[p2 : p3 + 1])

    position = {}
    for idx, city in enumerate(second):
        position[city] = idx
    remainder = []
    for city in first:
        if city in kept:
            continue
        if city not in position:
            raise DataConsistencyError(f"city {city} not found in second parent {list(second)}")
        remainder.append((position[city], city))
    remainder.sort()

    slots = iter([i for i, city in enumerate(child) if city == _UNASSIGNED])
    for _, city in remainder:
        idx = next(slots, None)
        if idx is None:
            raise DataConsistencyError(f"no free slot left for city {city} in child {child}")
        child[idx] = city
    if _UNASSIGNED in child:
        raise DataConsistencyError(f"ordered crossover left unassigned slots in {child}")
    return child


def ordered_crossover(first: Sequence[int], second: Sequence[int], rng: random.Random) -> Tuple[Route, Route]:
    points = sorted(rng.sample(range(len(first)), 4))
    return ordered_child(first, second, points), ordered_child(second, first, points)
