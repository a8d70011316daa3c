"""
Steady-state evolutionary search for low-cost TSP tours over a weighted cost graph.
"""

__all__ = [
    "data",
    "errors",
    "population",
    "simulation",
    "runs",
    "plotting",
]
