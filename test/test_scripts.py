import json
import sys

import matplotlib
matplotlib.use("Agg")

import pytest

import plot_simulation
import run_simulation
import spin


def run_main(module, monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", [module.__name__, *argv])
    module.main()


def test_spin_prints_winner(monkeypatch, capsys):
    run_main(spin, monkeypatch, "--option", "Yes:1", "--option", "No:1", "--seed", "3")
    out = capsys.readouterr().out
    assert "Result:" in out
    assert ("Result: Yes" in out) or ("Result: No" in out)


def test_spin_with_default_options(monkeypatch, capsys):
    run_main(spin, monkeypatch, "--seed", "1")
    assert "Option" in capsys.readouterr().out


def test_spin_rejects_single_option(monkeypatch, capsys):
    with pytest.raises(SystemExit) as exc:
        run_main(spin, monkeypatch, "--option", "Solo")
    assert exc.value.code == 1
    assert "At least 2" in capsys.readouterr().out


def test_run_simulation_writes_results(monkeypatch, tmp_path):
    results_file = tmp_path / "results.json"
    run_main(
        run_simulation, monkeypatch,
        "--option", "A:1", "--option", "B:3",
        "--trials", "1000", "--num-runs", "2", "--seed", "11",
        "--results-file", str(results_file),
    )
    data = json.loads(results_file.read_text())
    assert data["metadata"]["trial_count"] == 1000
    assert data["metadata"]["options"] == [{"name": "A", "weight": 1}, {"name": "B", "weight": 3}]
    assert set(data["results"]) == {"0", "1"}
    for run in data["results"].values():
        assert run["options"]["A"]["count"] + run["options"]["B"]["count"] == 1000
        assert run["options"]["B"]["theoretical"] == 75.0


def test_run_simulation_is_reproducible_with_seed(monkeypatch, tmp_path):
    first, second = tmp_path / "first.json", tmp_path / "second.json"
    for path in (first, second):
        run_main(run_simulation, monkeypatch, "--option", "A:2", "--option", "B:5", "--seed", "4",
                 "--results-file", str(path))
    assert json.loads(first.read_text())["results"] == json.loads(second.read_text())["results"]


def test_run_simulation_reads_options_file(monkeypatch, tmp_path):
    options = tmp_path / "lunch.json"
    options.write_text(json.dumps({"options": ["Curry", "Ramen"], "trial_count": 50, "description": "Lunch"}))
    results_file = tmp_path / "results.json"
    run_main(run_simulation, monkeypatch, "--options", str(options), "--results-file", str(results_file))
    data = json.loads(results_file.read_text())
    assert data["metadata"]["description"] == "Lunch"
    assert data["results"]["0"]["trial_count"] == 50


def test_plot_simulation(monkeypatch, tmp_path):
    results_file = tmp_path / "results.json"
    run_main(run_simulation, monkeypatch, "--option", "A:1", "--option", "B:3", "--num-runs", "3",
             "--seed", "2", "--results-file", str(results_file))

    description, options, names, observed_mean, observed_std, theoretical = \
        plot_simulation.load_and_process_data(str(results_file))
    assert names == ["A", "B"]
    assert theoretical == [25.0, 75.0]
    assert sum(observed_mean) == pytest.approx(100.0)
    assert all(std >= 0 for std in observed_std)

    output = tmp_path / "plot.png"
    plot_simulation.plot_simulation([str(results_file)], str(output), wheel=True)
    assert output.exists()


def test_plot_simulation_needs_files(tmp_path):
    with pytest.raises(ValueError):
        plot_simulation.plot_simulation([], str(tmp_path / "plot.png"))


def test_spin_rejects_huge_weight(monkeypatch, capsys):
    with pytest.raises(SystemExit) as exc:
        run_main(spin, monkeypatch, "--option", "A:" + "9" * 400, "--option", "B:1")
    assert exc.value.code == 1
    assert "too large" in capsys.readouterr().out


@pytest.mark.parametrize("trials", ["0", "-5"])
def test_run_simulation_rejects_non_positive_trials(monkeypatch, tmp_path, capsys, trials):
    results_file = tmp_path / "results.json"
    with pytest.raises(SystemExit) as exc:
        run_main(run_simulation, monkeypatch, "--option", "A:1", "--option", "B:1",
                 "--trials", trials, "--results-file", str(results_file))
    assert exc.value.code == 1
    assert "Trial count" in capsys.readouterr().out
    assert not results_file.exists()


def test_plot_data_uses_combined_share_for_repeated_names(monkeypatch, tmp_path):
    results_file = tmp_path / "results.json"
    run_main(run_simulation, monkeypatch, "--option", "Pizza:1", "--option", "Sushi:1", "--option", "Pizza:1",
             "--num-runs", "2", "--seed", "5", "--results-file", str(results_file))
    _, _, names, observed_mean, observed_std, expected = plot_simulation.load_and_process_data(str(results_file))
    assert names == ["Pizza", "Sushi"]
    assert expected == pytest.approx([200 / 3, 100 / 3])
    assert sum(observed_mean) == pytest.approx(100.0)
    assert all(std >= 0 for std in observed_std)
