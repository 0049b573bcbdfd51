"""CLI tests for the estimate and info commands."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from mlekit.cli.main import main


def test_cli_estimate_prints_table_and_writes_csv(problems_dir, tmp_path: Path, capsys):
    output = tmp_path / "out" / "estimates.csv"
    rc = main(
        [
            "estimate",
            str(problems_dir / "location.yaml"),
            "-p", "0.05",
            "--output", str(output),
        ]
    )

    assert rc == 0
    out = capsys.readouterr().out
    assert "name" in out
    assert "5.0%" in out
    assert "95.0%" in out

    assert output.exists()
    df = pd.read_csv(output)
    assert list(df["parameter"]) == ["x", "y"]
    assert df["estimate"].tolist() == pytest.approx([1.0, 2.0], abs=1e-3)
    assert df["std_error"].tolist() == pytest.approx([3.0, 3.0], rel=1e-6)


def test_cli_estimate_overrides(problems_dir, capsys):
    rc = main(
        [
            "estimate",
            str(problems_dir / "location.py"),
            "--init", "3,3",
            "--names", "first,second",
            "--scale", "2.0",
            "--method", "L-BFGS-B",
        ]
    )
    assert rc == 0
    out = capsys.readouterr().out
    assert "first" in out
    assert "second" in out


def test_cli_estimate_nonconvergence_returns_one(problems_dir, capsys):
    rc = main(["estimate", str(problems_dir / "location.yaml"), "--max-iter", "0"])
    assert rc == 1
    assert "did not converge" in capsys.readouterr().err


def test_cli_estimate_rejects_invalid_scale(problems_dir, capsys):
    rc = main(["estimate", str(problems_dir / "location.yaml"), "--scale", "huge"])
    assert rc == 1
    assert "huge" in capsys.readouterr().err


def test_cli_estimate_rejects_name_count_mismatch(problems_dir, capsys):
    rc = main(["estimate", str(problems_dir / "location.yaml"), "--names", "only_one"])
    assert rc == 1
    assert "variable names" in capsys.readouterr().err


@pytest.mark.parametrize("tail", ["0.5", "0.7", "0"])
def test_cli_estimate_rejects_invalid_tail(problems_dir, tail):
    rc = main(["estimate", str(problems_dir / "location.yaml"), "-p", tail])
    assert rc == 1


def test_cli_estimate_rejects_bad_init(problems_dir, capsys):
    rc = main(["estimate", str(problems_dir / "location.yaml"), "--init", "0,abc"])
    assert rc == 1
    assert "--init" in capsys.readouterr().err


def test_cli_missing_problem_file(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["estimate", str(tmp_path / "missing.yaml")])
    assert exc.value.code == 1


def test_cli_info(problems_dir, capsys):
    rc = main(["info", str(problems_dir / "counts.yaml")])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Problem: counts" in out
    assert "poisson" in out
    assert "rate" in out


def test_cli_without_command_prints_help(capsys):
    assert main([]) == 0
    assert "estimate" in capsys.readouterr().out
