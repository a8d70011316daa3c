import pytest

from tsp_ea.plotting import PlotOperator, PlotStatistic, plot_results, select_series
from tsp_ea.runs import BatchResult
from tsp_ea.simulation import SimulationConfig, SimulationResult


def _batch():
    cfg = SimulationConfig(population_size=10, tournament_size=2, generations=3)
    runs = [
        SimulationResult("r1", cfg, [30.0, 20.0, 10.0], [90.0, 80.0, 70.0], [50.0, 40.0, 30.0]),
        SimulationResult("r2", cfg, [40.0, 30.0, 20.0], [100.0, 90.0, 80.0], [60.0, 50.0, 40.0]),
    ]
    return BatchResult(name="toy", config=cfg, results=runs)


def test_select_series():
    batch = _batch()
    assert select_series(batch, PlotStatistic.WORST)[1] == [100.0, 90.0, 80.0]
    assert select_series(batch, "average")[0] == [50.0, 40.0, 30.0]


@pytest.mark.parametrize(
    "operator, expected",
    [
        (PlotOperator.BEST, {"best": 10.0}),
        (PlotOperator.WORST, {"worst": 20.0}),
        (PlotOperator.AVERAGE, {"average": 15.0}),
        (PlotOperator.RANGE, {"worst": 20.0, "average": 15.0, "best": 10.0}),
        (PlotOperator.ALL, {"simulation 1": 10.0, "simulation 2": 20.0}),
    ],
)
def test_plot_final_values(tmp_path, operator, expected):
    path, finals = plot_results(_batch(), operator, PlotStatistic.BEST, out_dir=tmp_path)
    assert finals == expected
    assert path.exists()
    assert path.name.endswith("(toy).png")


def test_plot_without_runs_raises(tmp_path):
    batch = _batch()
    batch.results = []
    with pytest.raises(ValueError):
        plot_results(batch, out_dir=tmp_path)


def test_import_keeps_selected_backend():
    import importlib

    import matplotlib

    import tsp_ea.plotting

    matplotlib.use("pdf")
    try:
        importlib.reload(tsp_ea.plotting)
        assert matplotlib.get_backend().lower() == "pdf"
    finally:
        matplotlib.use("Agg")
        importlib.reload(tsp_ea.plotting)
