import json

import pytest

from tsp_ea import cli

from test_data import BURMA4_XML


@pytest.fixture
def burma_file(tmp_path):
    path = tmp_path / "burma4.xml"
    path.write_text(BURMA4_XML)
    return path


def test_defaults_match_configuration_surface():
    args = cli.build_parser().parse_args(["run", "x.xml"])
    cfg = cli.build_config(args)
    assert cfg.crossover.value == "fix"
    assert cfg.mutation.value == "single"
    assert cfg.population_size == 50
    assert cfg.tournament_size == 5
    assert cfg.generations == 10000
    assert args.number_runs == 1


@pytest.mark.parametrize(
    "argv",
    [
        ["-p", "9"],
        ["-t", "1"],
        ["-p", "10", "-t", "11"],
        ["-n", "0"],
    ],
)
def test_invalid_options_stop_before_launch(burma_file, capsys, argv):
    status = cli.main(["run", str(burma_file), "--no-progress", "--plot", "none"] + argv)
    assert status == 2
    assert "error:" in capsys.readouterr().err


def test_unknown_operator_rejected_by_parser():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["run", "x.xml", "-c", "pmx"])


def test_run_end_to_end(burma_file, tmp_path, capsys):
    out = tmp_path / "results.json"
    status = cli.main(
        [
            "run",
            str(burma_file),
            "-p", "10",
            "-t", "3",
            "-g", "30",
            "-n", "2",
            "--seed", "4",
            "--no-progress",
            "--output", str(out),
            "--plot", "range",
            "--results-dir", str(tmp_path / "charts"),
        ]
    )
    assert status == 0
    printed = capsys.readouterr().out
    assert "burma4 run 1: best=" in printed
    state = json.loads(out.read_text())
    assert len(state["runs"]) == 2
    assert len(list((tmp_path / "charts").glob("chart-*.png"))) == 1


def test_ordered_crossover_needs_four_cities(tmp_path, capsys):
    path = tmp_path / "three.xml"
    path.write_text(
        "<travellingSalesmanProblemInstance><name>three</name><graph>"
        '<vertex><edge cost="1">1</edge><edge cost="2">2</edge></vertex>'
        '<vertex><edge cost="1">0</edge><edge cost="3">2</edge></vertex>'
        '<vertex><edge cost="2">0</edge><edge cost="3">1</edge></vertex>'
        "</graph></travellingSalesmanProblemInstance>"
    )
    status = cli.main(["run", str(path), "-c", "ordered", "-g", "5", "--no-progress", "--plot", "none"])
    assert status == 2
    assert "skipping three" in capsys.readouterr().out


def test_info(burma_file, capsys):
    assert cli.main(["info", str(burma_file)]) == 0
    assert "There are 4 cities in burma4" in capsys.readouterr().out
