from pathlib import Path

from tsp_ea.data import load_instances
from tsp_ea.operators import CrossoverOperator, MutationOperator
from tsp_ea.simulation import Simulation, SimulationConfig


def main():
    data_root = Path("data/tsplib")
    if not data_root.exists():
        raise FileNotFoundError("Place TSPLIB files in data/tsplib")

    instances = load_instances([data_root], max_nodes=60, max_instances=3)
    cfg = SimulationConfig(
        crossover=CrossoverOperator.ORDERED,
        mutation=MutationOperator.INVERSION,
        population_size=20,
        tournament_size=4,
        generations=2000,
        random_seed=123,
    )
    for inst in instances:
        sim = Simulation(inst.graph, cfg, name=inst.name)

        def report(stats):
            if stats.generation % 500 == 0:
                print(f"{inst.name} gen {stats.generation}: best={stats.best:.0f} avg={stats.average:.1f}")

        result = sim.run(progress=report)
        print(f"{inst.name}: final best={result.final_best:.0f} route={result.best_tour.route}")


if __name__ == "__main__":
    main()
