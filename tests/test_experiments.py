"""
Tests for the experiment scripts: instance generation, the CSV runner,
pandas summary, matplotlib output and the single-puzzle CLI.
"""

import csv
import os

os.environ.setdefault("MPLBACKEND", "Agg")

import pandas as pd
import pytest

from conftest import PUZZLES
from tilepuzzle.domains.board import Board, is_solvable
from tilepuzzle.experiments import analyze, plot, runner, solve, visualize_path


@pytest.fixture
def results_csv(tmp_path):
    insts = runner.generate_instances(3, [4, 8], per_depth=2, include_unsolvable=True)
    rows = [runner.run_instance(i, check_bfs=True) for i in insts]
    out = tmp_path / "results" / "run.csv"
    runner.write_rows(rows, out)
    return out


# ========== runner ==========

def test_generate_instances_pairs_twins():
    insts = runner.generate_instances(3, [4, 8], per_depth=3, start_seed=10, include_unsolvable=True)
    assert len(insts) == 12
    assert [i.solvable for i in insts[:2]] == [1, 0]
    assert insts[1].board == insts[0].board.twin()
    for i in insts:
        assert is_solvable(i.board) == bool(i.solvable)
    assert insts[0].seed == 10 and insts[-1].seed == 15


def test_run_instance_row():
    inst = runner.Instance(seed=0, depth=4, board=Board([[0, 1, 3], [4, 2, 5], [7, 8, 6]]), solvable=1)
    row = runner.run_instance(inst, check_bfs=True)
    assert set(row) == set(runner.HEADER)
    assert row["outcome"] == "solved"
    assert row["moves"] == 4
    assert row["bfs_moves"] == 4


def test_unsolvable_row_skips_bfs():
    inst = runner.Instance(seed=0, depth=0, board=Board.goal(3).twin(), solvable=0)
    row = runner.run_instance(inst, check_bfs=True)
    assert row["outcome"] == "unsolvable"
    assert row["moves"] == -1
    assert row["bfs_moves"] == ""


def test_runner_main_writes_csv(tmp_path, capsys):
    out = tmp_path / "r.csv"
    runner.main(["--n", "2", "--depths", "3", "--per_depth", "2", "--include_unsolvable",
                 "--out", str(out), "--log-level", "WARNING"])
    with out.open(newline="") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 4
    assert {r["outcome"] for r in rows} == {"solved", "unsolvable"}
    assert "Wrote" in capsys.readouterr().out


# ========== analyze / plot ==========

def test_summarize(results_csv):
    df = analyze.load_results([results_csv])
    summary = analyze.summarize(df)
    assert len(summary) == 4
    solvable = summary[summary["solvable"] == 1]
    assert (solvable["moves_mean"] >= 0).all()
    assert (summary[summary["solvable"] == 0]["moves_mean"] == -1).all()
    assert (summary["runs"] == 2).all()
    assert (summary["inconclusive"] == 0).all()


def test_load_results_rejects_foreign_csv(tmp_path):
    p = tmp_path / "other.csv"
    pd.DataFrame({"algorithm": ["A*"], "depth": [4]}).to_csv(p, index=False)
    with pytest.raises(ValueError):
        analyze.load_results([p])


def test_analyze_main(results_csv, tmp_path, capsys):
    out = tmp_path / "summary.csv"
    analyze.main([str(results_csv), "--out", str(out)])
    assert out.exists()
    assert "Twin A* effort by depth" in capsys.readouterr().out


def test_make_plots(results_csv, tmp_path):
    df = analyze.load_results([results_csv])
    saved = plot.make_plots(df, tmp_path / "plots", "run")
    assert len(saved) == 1 + len(plot.METRICS)
    assert all(p.exists() and p.stat().st_size > 0 for p in saved)


def test_sem():
    assert plot.sem([3.0]) == 0.0
    assert plot.sem([1.0, 3.0]) == pytest.approx(1.0)


def test_save_path_frames(tmp_path):
    path = [Board([[1, 2], [0, 3]]), Board.goal(2)]
    frames = visualize_path.save_path_frames(path, tmp_path)
    assert [f.name for f in frames] == ["step_000.png", "step_001.png"]
    assert all(f.exists() for f in frames)


def test_run_pipeline(tmp_path, capsys):
    import run_experiments

    plan = [("tiny", ["--n", "2", "--depths", "2", "4", "--per_depth", "2",
                      "--include_unsolvable", "--log-level", "WARNING"])]
    written = run_experiments.run_pipeline(tmp_path, plan)
    assert [p.name for p in written] == ["tiny.csv", "summary.csv"]
    assert all(p.exists() for p in written)
    assert (tmp_path / "plots" / "tiny_combined.png").exists()
    assert len(pd.read_csv(tmp_path / "tiny.csv")) == 8


# ========== CLI ==========

def test_solve_prints_path(capsys):
    assert solve.main([str(PUZZLES / "puzzle04.txt")]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Minimum number of moves = 4\n")
    # one "3" dimension header per board on the 5-board path
    assert out.count("\n3\n") == 5


def test_solve_default_file_from_any_directory(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert solve.main([]) == 0
    assert capsys.readouterr().out.startswith("Minimum number of moves = 4\n")


def test_solve_unsolvable(capsys):
    assert solve.main([str(PUZZLES / "puzzle3x3-unsolvable.txt")]) == 0
    assert capsys.readouterr().out.strip() == "No solution possible"


def test_solve_budget_exhausted(capsys):
    assert solve.main([str(PUZZLES / "puzzle04.txt"), "--max_expansions", "1"]) == 2
    assert "Search budget exhausted" in capsys.readouterr().out


def test_solve_bad_file(tmp_path, capsys):
    p = tmp_path / "bad.txt"
    p.write_text("3\n1 2\n", encoding="utf-8")
    assert solve.main([str(p)]) == 1
    assert "Cannot load" in capsys.readouterr().err
    assert solve.main([str(tmp_path / "missing.txt")]) == 1
