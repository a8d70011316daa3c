import random
from typing import Sequence

from .base import Route


def inversion(route: Sequence[int], first: int, second: int) -> Route:
    """
    Reverse the outer parts of the route around the untouched centre.

    The route is split into route[:first], route[first:second] and route[second:].
    The two outer parts are joined and reversed, then placed back on either side
    of the centre, which treats the route as circular.
    """
    if not 0 <= first < second <= len(route):
        raise ValueError(f"invalid inversion cut points ({first}, {second}) for length {len(route)}")
    head = list(route[:first])
    centre = list(route[first:second])
    outer = (head + list(route[second:]))[::-1]
    return outer[: len(head)] + centre + outer[len(head) :]


def invert(route: Sequence[int], rng: random.Random) -> Route:
    n = len(route)
    first = rng.randint(1, n)
    second = rng.randint(1, n)
    while second == first:
        second = rng.randint(1, n)
    if first > second:
        first, second = second, first
    return inversion(route, first, second)


def single_swap(route: Route, rng: random.Random) -> Route:
    n = len(route)
    i = rng.randrange(n)
    j = rng.randrange(n)
    while j == i:
        j = rng.randrange(n)
    route[i], route[j] = route[j], route[i]
    return route


def multiple_swap(route: Route, rng: random.Random) -> Route:
    a, b, c, d = rng.sample(range(len(route)), 4)
    route[a], route[b] = route[b], route[a]
    route[c], route[d] = route[d], route[c]
    return route
