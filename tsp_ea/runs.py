import concurrent.futures
import json
import random
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

import networkx as nx
from tqdm import tqdm

from .errors import TSPError
from .simulation import GenerationStats, Simulation, SimulationConfig, SimulationResult


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def _run_id(name: str, run_index: int) -> str:
    return f"{name} run {run_index + 1}" if name else f"run {run_index + 1}"


@dataclass
class RunFailure:
    run_id: str
    error: str


@dataclass
class BatchResult:
    name: str
    config: SimulationConfig
    results: List[SimulationResult] = field(default_factory=list)
    failures: List[RunFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "config": self.config.to_dict(),
            "runs": [r.to_dict() for r in self.results],
            "failures": [{"run_id": f.run_id, "error": f.error} for f in self.failures],
        }


class _ProgressBar:
    """Per-run tqdm bar fed by the simulation's generation callback."""

    # Refresh the postfix text every this many generations.
    POSTFIX_EVERY = 100

    def __init__(self, run_id: str, total: int, position: int, lock: threading.Lock):
        self.lock = lock
        with lock:
            self.bar = tqdm(total=total, desc=run_id, position=position, leave=True, initial=1)

    def __call__(self, stats: GenerationStats) -> None:
        with self.lock:
            self.bar.update(1)
            if stats.generation % self.POSTFIX_EVERY == 0:
                self.bar.set_postfix(best=f"{stats.best:.0f}", avg=f"{stats.average:.0f}")

    def close(self, best: Optional[float] = None) -> None:
        with self.lock:
            if best is not None:
                self.bar.set_postfix(best=f"{best:.0f}", done=True)
            self.bar.close()


def _run_one(
    graph: nx.Graph,
    config: SimulationConfig,
    name: str,
    run_index: int,
    progress: Optional[Callable[[str, int], _ProgressBar]] = None,
) -> SimulationResult:
    run_id = _run_id(name, run_index)
    seed = None if config.random_seed is None else config.random_seed + run_index
    sim = Simulation(graph, config, name=run_id, rng=random.Random(seed))
    bar = progress(run_id, run_index) if progress is not None else None
    try:
        result = sim.run(progress=bar)
    finally:
        if bar is not None:
            bar.close(sim.population.best.cost)
    return result


def run_batch(
    graph: nx.Graph,
    config: SimulationConfig,
    number_runs: int = 1,
    name: str = "",
    workers: Optional[int] = None,
    progress: bool = True,
    processes: bool = False,
) -> BatchResult:
    """
    Run ``number_runs`` independent simulations over the same read-only graph.

    Each run owns its population and a ``random.Random`` seeded from
    ``config.random_seed + run_index`` (or from system entropy when no seed is
    set). A run that raises is recorded as a failure; the others carry on.

    Threads share the graph but run one generation at a time under the GIL.
    ``processes=True`` spreads runs over CPU cores with a copy of the graph
    per worker process; per-run progress bars are only drawn with threads.
    """
    config.validate(num_cities=graph.number_of_nodes())
    batch = BatchResult(name=name, config=config)
    lock = threading.Lock()

    def make_bar(run_id: str, run_index: int) -> _ProgressBar:
        return _ProgressBar(run_id, config.generations, run_index, lock)

    max_workers = workers or min(8, number_runs)
    if processes:
        executor = concurrent.futures.ProcessPoolExecutor(max_workers=max_workers)
        bar_factory = None
    else:
        executor = concurrent.futures.ThreadPoolExecutor(max_workers=max_workers)
        bar_factory = make_bar if progress else None
    with executor as ex:
        futures = {ex.submit(_run_one, graph, config, name, i, bar_factory): i for i in range(number_runs)}
        outcomes: Dict[int, SimulationResult] = {}
        failed: Dict[int, RunFailure] = {}
        for fut in concurrent.futures.as_completed(futures):
            idx = futures[fut]
            run_id = _run_id(name, idx)
            try:
                outcomes[idx] = fut.result()
            except TSPError as e:
                log(f"{run_id} failed: {e}")
                failed[idx] = RunFailure(run_id=run_id, error=str(e))
            except Exception as e:
                log(f"{run_id} crashed: {type(e).__name__}: {e}")
                failed[idx] = RunFailure(run_id=run_id, error=f"{type(e).__name__}: {e}")
    batch.results = [outcomes[i] for i in sorted(outcomes)]
    batch.failures = [failed[i] for i in sorted(failed)]
    return batch


def save_results(batch: BatchResult, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(batch.to_dict(), indent=2))
