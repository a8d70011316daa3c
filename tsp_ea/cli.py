import argparse
import sys
import time
from pathlib import Path

from tsp_ea.data import load_instances
from tsp_ea.errors import ConfigurationError, DataConsistencyError
from tsp_ea.operators import CrossoverOperator, MutationOperator
from tsp_ea.plotting import PlotOperator, PlotStatistic, plot_results
from tsp_ea.runs import log, run_batch, save_results
from tsp_ea.simulation import DEFAULT_GENERATIONS, SimulationConfig


def build_config(args) -> SimulationConfig:
    cfg = SimulationConfig(
        crossover=CrossoverOperator(args.crossover),
        mutation=MutationOperator(args.mutation),
        population_size=args.population_size,
        tournament_size=args.tournament_size,
        generations=args.generations,
        random_seed=args.seed,
    )
    cfg.validate()
    if args.number_runs < 1:
        raise ConfigurationError(f"number of runs must be at least 1, got {args.number_runs}")
    return cfg


def run(args) -> int:
    try:
        cfg = build_config(args)
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    t0 = time.perf_counter()
    instances = load_instances(args.paths)
    if not instances:
        raise RuntimeError(f"No TSP instances found in {', '.join(map(str, args.paths))}.")
    log(f"loaded {len(instances)} instances in {time.perf_counter() - t0:.2f}s")

    status = 0
    for inst in instances:
        try:
            cfg.validate(num_cities=inst.num_cities)
        except ConfigurationError as e:
            log(f"skipping {inst.name}: {e}")
            status = 2
            continue
        log(
            f"{inst.name}: {inst.num_cities} cities, {args.number_runs} run(s), "
            f"crossover={cfg.crossover.value} mutation={cfg.mutation.value} "
            f"population={cfg.population_size} tournament={cfg.tournament_size} generations={cfg.generations}"
        )
        t_run = time.perf_counter()
        batch = run_batch(
            inst.graph,
            cfg,
            number_runs=args.number_runs,
            name=inst.name,
            workers=args.workers,
            processes=args.processes,
            progress=not args.no_progress,
        )
        log(f"{inst.name}: finished in {time.perf_counter() - t_run:.2f}s")
        for failure in batch.failures:
            print(f"{failure.run_id}: FAILED ({failure.error})", file=sys.stderr)
            status = 1
        for result in batch.results:
            line = f"{result.name}: best={result.final_best:.2f}"
            if inst.optimum:
                gap = (result.final_best - inst.optimum) / inst.optimum
                line += f" optimum={inst.optimum:.2f} gap={gap:.2%}"
            print(line)
        if not batch.results:
            continue
        if args.output:
            out = Path(args.output)
            if len(instances) > 1:
                out = out.with_name(f"{out.stem}-{inst.name}{out.suffix}")
            save_results(batch, out)
            log(f"results written to {out}")
        if args.plot != "none":
            path, _ = plot_results(batch, PlotOperator(args.plot), PlotStatistic(args.statistic), Path(args.results_dir))
            log(f"chart written to {path}")
    return status


def info(args) -> int:
    for inst in load_instances(args.paths):
        line = f"There are {inst.num_cities} cities in {inst.name}"
        if inst.optimum is not None:
            line += f" (known optimum {inst.optimum:.2f})"
        print(line)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Steady-state evolutionary algorithm for the Travelling Salesman Problem"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Evolve tours for one or more TSPLIB instances")
    run_parser.add_argument("paths", nargs="+", help=".tsp/.xml files or directories holding them")
    run_parser.add_argument("-c", "--crossover", choices=[op.value for op in CrossoverOperator], default="fix")
    run_parser.add_argument("-m", "--mutation", choices=[op.value for op in MutationOperator], default="single")
    run_parser.add_argument("-p", "--population-size", type=int, default=50, help="Minimum 10")
    run_parser.add_argument("-t", "--tournament-size", type=int, default=5, help="Minimum 2, at most the population size")
    run_parser.add_argument("-n", "--number-runs", type=int, default=1)
    run_parser.add_argument("-g", "--generations", type=int, default=DEFAULT_GENERATIONS)
    run_parser.add_argument("--seed", type=int, default=None)
    run_parser.add_argument("--workers", type=int, default=None)
    run_parser.add_argument("--processes", action="store_true", help="Run simulations in worker processes (no progress bars)")
    run_parser.add_argument(
        "--plot", choices=[op.value for op in PlotOperator] + ["none"], default=PlotOperator.RANGE.value
    )
    run_parser.add_argument("--statistic", choices=[s.value for s in PlotStatistic], default=PlotStatistic.BEST.value)
    run_parser.add_argument("--results-dir", default="results")
    run_parser.add_argument("--output", default=None, help="Write per-generation histories as JSON")
    run_parser.add_argument("--no-progress", action="store_true")
    run_parser.set_defaults(func=run)

    info_parser = subparsers.add_parser("info", help="Show instance sizes")
    info_parser.add_argument("paths", nargs="+")
    info_parser.set_defaults(func=info)
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except DataConsistencyError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
