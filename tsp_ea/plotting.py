from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .runs import BatchResult


class PlotOperator(str, Enum):
    BEST = "best"
    WORST = "worst"
    AVERAGE = "average"
    RANGE = "range"
    ALL = "all"


class PlotStatistic(str, Enum):
    BEST = "best"
    WORST = "worst"
    AVERAGE = "average"


def select_series(batch: BatchResult, statistic: PlotStatistic) -> List[List[float]]:
    statistic = PlotStatistic(statistic)
    if statistic == PlotStatistic.BEST:
        return [r.best_history for r in batch.results]
    if statistic == PlotStatistic.WORST:
        return [r.worst_history for r in batch.results]
    return [r.average_history for r in batch.results]


def _best_run(series: List[List[float]]) -> List[float]:
    return min(series, key=lambda s: s[-1])


def _worst_run(series: List[List[float]]) -> List[float]:
    return max(series, key=lambda s: s[-1])


def _mean_run(series: List[List[float]]) -> np.ndarray:
    return np.asarray(series, dtype=float).mean(axis=0)


def plot_results(
    batch: BatchResult,
    operator: PlotOperator = PlotOperator.RANGE,
    statistic: PlotStatistic = PlotStatistic.BEST,
    out_dir: Path = Path("results"),
) -> Tuple[Path, Dict[str, float]]:
    """
    Draw the per-generation trajectories of a batch and save them as a PNG.

    Returns the chart path and the final value of every plotted line.
    """
    operator = PlotOperator(operator)
    series = select_series(batch, statistic)
    if not series:
        raise ValueError(f"batch {batch.name!r} has no completed runs to plot")
    out_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")
    path = out_dir / f"chart-{stamp}-({batch.name}).png"

    fig, ax = plt.subplots(figsize=(19.2, 10.8))
    finals: Dict[str, float] = {}
    if operator == PlotOperator.BEST:
        line = _best_run(series)
        ax.plot(line, color="red", linewidth=2)
        finals["best"] = float(line[-1])
    elif operator == PlotOperator.WORST:
        line = _worst_run(series)
        ax.plot(line, color="red", linewidth=2)
        finals["worst"] = float(line[-1])
    elif operator == PlotOperator.AVERAGE:
        line = _mean_run(series)
        ax.plot(line, color="red", linewidth=2)
        finals["average"] = float(line[-1])
    elif operator == PlotOperator.RANGE:
        worst = _worst_run(series)
        mean = _mean_run(series)
        best = _best_run(series)
        ax.plot(worst, color="red", linewidth=2, label="Worst Simulation")
        ax.plot(mean, color="blue", linewidth=2, label="Average Simulation")
        ax.plot(best, color="green", linewidth=2, label="Best Simulation")
        ax.legend()
        finals.update(worst=float(worst[-1]), average=float(mean[-1]), best=float(best[-1]))
    else:
        for idx, line in enumerate(series):
            ax.plot(line, linewidth=2, label=f"Simulation {idx + 1}")
            finals[f"simulation {idx + 1}"] = float(line[-1])
        ax.legend()

    cfg = batch.config
    ax.set_title(
        f"TSP of dataset {batch.name}, Ran {len(series)} times, "
        f"Population size: {cfg.population_size}, Tournament size: {cfg.tournament_size}, "
        f"Mutation: {cfg.mutation.value}, Crossover: {cfg.crossover.value}"
    )
    ax.set_xlabel("Generations Passed")
    ax.set_ylabel(f"{PlotStatistic(statistic).value.capitalize()} cost")
    ax.set_xlim(0, cfg.generations)
    ax.set_ylim(0, max(r.worst_history[0] for r in batch.results) * 1.1)
    fig.savefig(path)
    plt.close(fig)

    for label, value in finals.items():
        print(f"Last cost of {batch.name} {label}: {value:.2f}")
    return path, finals
