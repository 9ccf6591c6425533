#!filepath: tests/test_cli.py
from __future__ import annotations

import pandas as pd
from typer.testing import CliRunner

from censored.cli import app, flatten

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "v0.1.0" in result.stdout


def test_engines_table():
    result = runner.invoke(app, ["engines", "proportional_hazards"])

    assert result.exit_code == 0
    assert "coxnet" in result.stdout
    assert "survival_reg" not in result.stdout


def test_predict_writes_csv(surv_data, tmp_path):
    train = tmp_path / "train.csv"
    out = tmp_path / "pred.csv"
    surv_data.to_csv(train, index=False)

    result = runner.invoke(
        app,
        [
            "predict", str(train),
            "--formula", "Surv(time, status) ~ x1 + x2",
            "--family", "survival_reg",
            "--type", "survival",
            "--time", "1", "--time", "5",
            "--output", str(out),
        ],
    )

    assert result.exit_code == 0, result.output
    flat = pd.read_csv(out)
    assert list(flat.columns) == [".row", ".time", ".pred_survival"]
    assert len(flat) == 2 * len(surv_data)


def test_predict_multi_over_coxnet_path(surv_data, tmp_path):
    train = tmp_path / "train.csv"
    out = tmp_path / "path.csv"
    surv_data.to_csv(train, index=False)

    result = runner.invoke(
        app,
        [
            "predict", str(train),
            "--formula", "Surv(time, status) ~ x1 + x2",
            "--engine", "coxnet",
            "--alphas", "0.01", "--alphas", "0.1",
            "--multi",
            "--type", "linear_pred",
            "--output", str(out),
        ],
    )

    assert result.exit_code == 0, result.output
    flat = pd.read_csv(out)
    assert list(flat.columns) == [".row", "penalty", ".pred_linear_pred"]
    assert len(flat) == 2 * len(surv_data)
    assert sorted(flat["penalty"].unique()) == [0.01, 0.1]


def test_predict_single_penalty_on_coxnet_path(surv_data, tmp_path):
    train = tmp_path / "train.csv"
    out = tmp_path / "lp.csv"
    surv_data.to_csv(train, index=False)

    result = runner.invoke(
        app,
        [
            "predict", str(train),
            "--formula", "Surv(time, status) ~ x1 + x2",
            "--engine", "coxnet",
            "--alphas", "0.01", "--alphas", "0.1",
            "--penalty", "0.1",
            "--output", str(out),
        ],
    )

    assert result.exit_code == 0, result.output
    flat = pd.read_csv(out)
    assert list(flat.columns) == [".row", ".pred_linear_pred"]
    assert len(flat) == len(surv_data)


def test_flatten_scalar_predictions():
    result = pd.DataFrame({".pred_time": [1.0, 2.0]}, index=[5, 6])

    flat = flatten(result)

    assert flat[".row"].tolist() == [5, 6]
    assert flat[".pred_time"].tolist() == [1.0, 2.0]
