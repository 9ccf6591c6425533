#!filepath: censored/cli.py
from typing import List, Optional

import pandas as pd
import typer
from rich import print
from rich.console import Console
from rich.table import Table

from censored import __version__, init_logging, logs, show_engines
from censored.config import AppConfig
from censored.fitting import fit as fit_model
from censored.prediction import predict as predict_model
from censored.spec import proportional_hazards, survival_reg

app = typer.Typer(help="censored: survival model engines CLI")

_FAMILIES = {
    "proportional_hazards": proportional_hazards,
    "survival_reg": survival_reg,
}


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def engines(family: Optional[str] = typer.Argument(None, help="Only show this family")):
    """
    List registered engines and their prediction types
    """
    table = Table(title="censored regression engines")
    table.add_column("family")
    table.add_column("engine")
    table.add_column("kind")
    table.add_column("prediction types")

    for row in show_engines(family):
        table.add_row(row["family"], row["engine"], row["kind"], ", ".join(row["types"]))

    Console().print(table)


@app.command()
def predict(
    train: str = typer.Argument(..., help="Training CSV"),
    formula: str = typer.Option(..., "--formula", "-f", help="e.g. 'Surv(time, status) ~ x1 + x2'"),
    family: str = typer.Option("proportional_hazards", "--family"),
    engine: str = typer.Option("lifelines", "--engine"),
    type: str = typer.Option("linear_pred", "--type", "-t"),
    new_data: Optional[str] = typer.Option(None, "--new-data", help="CSV to predict (default: training CSV)"),
    time: Optional[List[float]] = typer.Option(None, "--time"),
    quantile: Optional[List[float]] = typer.Option(None, "--quantile"),
    penalty: Optional[List[float]] = typer.Option(None, "--penalty", help="Repeat with --multi for a strength path"),
    multi: bool = typer.Option(False, "--multi", help="One prediction per --penalty (or per fitted strength)"),
    alphas: Optional[List[float]] = typer.Option(None, "--alphas", help="coxnet regularization path"),
    dist: Optional[str] = typer.Option(None, "--dist"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write predictions to CSV"),
    config: Optional[str] = typer.Option(None, "--config", help="YAML config file"),
):
    """
    Fit a model on a CSV and print its predictions
    """
    cfg = AppConfig.load(config)
    init_logging(cfg.log)
    _run(
        train=train,
        formula=formula,
        family=family,
        engine=engine,
        type=type,
        new_data=new_data,
        time=time or None,
        quantile=quantile or None,
        penalty=penalty or None,
        multi=multi,
        alphas=alphas or None,
        dist=dist,
        output=output,
        cfg=cfg,
    )


@logs.catch(msg="prediction run failed", log_time=False)
def _run(
    *, train, formula, family, engine, type, new_data, time, quantile, penalty, multi, alphas, dist, output, cfg
):
    if family not in _FAMILIES:
        raise typer.BadParameter(f"unknown family '{family}'. Available: {sorted(_FAMILIES)}")

    # a single --penalty is the fitted strength, several only make sense at predict time
    fit_penalty = penalty[0] if penalty and len(penalty) == 1 else None

    if family == "survival_reg":
        spec = survival_reg(dist=dist, engine=engine)
    else:
        spec = proportional_hazards(penalty=fit_penalty, engine=engine)
    if alphas:
        spec = spec.set_engine(engine, alphas=alphas)

    data = pd.read_csv(train)
    fitted = fit_model(spec, formula, data, config=cfg, catch=False)

    target = pd.read_csv(new_data) if new_data else data
    result = predict_model(
        fitted,
        target,
        type,
        time=time,
        quantile=quantile,
        penalty=penalty if multi or (penalty and len(penalty) > 1) else fit_penalty,
        multi=multi,
        config=cfg,
    )

    flat = flatten(result)
    if output:
        flat.to_csv(output, index=False)
        print(f"[green]Wrote {len(flat)} rows to {output}[/green]")
    else:
        print(flat.to_string(index=False))


def flatten(result: pd.DataFrame) -> pd.DataFrame:
    """
    Nested `.pred` tables -> one long table with a `.row` column.
    """
    if ".pred" not in result.columns:
        return result.rename_axis(".row").reset_index()

    parts = []
    for row, cell in result[".pred"].items():
        part = cell.copy()
        part.insert(0, ".row", row)
        parts.append(part)
    return pd.concat(parts, ignore_index=True)


if __name__ == "__main__":
    app()

# python -m censored.cli predict data.csv -f "Surv(time, status) ~ x1 + x2" -t survival --time 5 --time 10
