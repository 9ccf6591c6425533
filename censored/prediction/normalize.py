# censored/prediction/normalize.py
"""
Raw engine output -> standardized prediction tables.

Post hooks turn whatever the engine returned into a float array
(rows, or rows x points); formatters turn that array into the nested
DataFrame result.
"""
from __future__ import annotations

from typing import Any, List, Sequence

import numpy as np
import pandas as pd

from censored.registry.recipes import PredictionType
from censored.utils.errors import ConfigurationError

PRED = ".pred"

SCALAR_COLUMNS = {
    PredictionType.TIME: ".pred_time",
    PredictionType.LINEAR_PRED: ".pred_linear_pred",
}

CURVE_COLUMNS = {
    PredictionType.SURVIVAL: ".pred_survival",
    PredictionType.HAZARD: ".pred_hazard",
}


# ============================================================
# pre hooks
# ============================================================
def to_survival_levels(ctx):
    """
    Event-time quantile q is where survival drops to 1 - q.
    """
    return ctx.replace(levels=1.0 - ctx.quantile)


# ============================================================
# post hooks
# ============================================================
def as_vector(raw: Any, ctx) -> np.ndarray:
    return np.asarray(raw, dtype=float).reshape(-1)


def as_matrix(raw: Any, ctx) -> np.ndarray:
    values = np.asarray(raw, dtype=float)
    return values.reshape(len(values), -1)


def negate_linear_pred(raw: Any, ctx) -> np.ndarray:
    # hazard-scale scores: larger must mean longer survival
    return -np.asarray(raw, dtype=float)


def curve_from_frame(raw: pd.DataFrame, ctx) -> np.ndarray:
    # lifelines returns times x rows
    return np.asarray(raw, dtype=float).T


# ============================================================
# formatters
# ============================================================
def nested(cells: Sequence[pd.DataFrame], index: pd.Index) -> pd.DataFrame:
    column = np.empty(len(cells), dtype=object)
    for i, cell in enumerate(cells):
        column[i] = cell
    return pd.DataFrame({PRED: pd.Series(column, index=index, dtype=object)})


def format_prediction(values: np.ndarray, ctx) -> pd.DataFrame:
    if ctx.type in SCALAR_COLUMNS:
        return format_scalar(values, ctx)
    if ctx.type in CURVE_COLUMNS:
        return format_curves(values, ctx)
    return format_quantiles(values, ctx)


def format_scalar(values: np.ndarray, ctx) -> pd.DataFrame:
    values = np.asarray(values, dtype=float).reshape(-1)
    _check_rows(values, ctx.n_rows, ctx.type)
    return pd.DataFrame({SCALAR_COLUMNS[ctx.type]: values}, index=ctx.index)


def format_curves(values: np.ndarray, ctx) -> pd.DataFrame:
    values = np.asarray(values, dtype=float)
    expected = (ctx.n_rows, len(ctx.eval_time))
    if values.shape != expected:
        raise ConfigurationError(
            f"{ctx.type.value} output has shape {values.shape}, expected {expected}"
        )

    # caller's order, duplicates included
    picked = values[:, np.searchsorted(ctx.eval_time, ctx.time)]
    value_col = CURVE_COLUMNS[ctx.type]
    cells = [
        pd.DataFrame({".time": ctx.time, value_col: row})
        for row in picked
    ]
    return nested(cells, ctx.index)


def format_quantiles(values: np.ndarray, ctx) -> pd.DataFrame:
    values = np.asarray(values, dtype=float)
    expected = (ctx.n_rows, len(ctx.quantile))
    if values.shape != expected:
        raise ConfigurationError(
            f"quantile output has shape {values.shape}, expected {expected}"
        )
    cells = [
        pd.DataFrame({".quantile": ctx.quantile, ".pred_quantile": row})
        for row in values
    ]
    return nested(cells, ctx.index)


def organize_path_pred(
    wide: np.ndarray,
    penalties: Sequence[float],
    value_col: str,
    index: pd.Index,
) -> pd.DataFrame:
    """
    rows x strengths -> one (penalty, value) table per row, penalty ascending.
    """
    wide = np.asarray(wide, dtype=float)
    penalties = np.asarray(penalties, dtype=float)
    if wide.shape != (len(index), len(penalties)):
        raise ConfigurationError(
            f"path output has shape {wide.shape}, expected {(len(index), len(penalties))}"
        )

    order = np.argsort(penalties, kind="stable")
    cells = [
        pd.DataFrame({"penalty": penalties[order], value_col: row[order]})
        for row in wide
    ]
    return nested(cells, index)


def stack_by_penalty(
    results: List[tuple[float, pd.DataFrame]],
    index: pd.Index,
) -> pd.DataFrame:
    """
    Per-strength standard results -> one table per row with `penalty` first.
    """
    results = sorted(results, key=lambda item: item[0])
    cells = []
    for pos in range(len(index)):
        parts = []
        for penalty, frame in results:
            if PRED in frame.columns:
                part = frame[PRED].iloc[pos].copy()
                part.insert(0, "penalty", penalty)
            else:
                col = frame.columns[0]
                part = pd.DataFrame({"penalty": [penalty], col: [frame[col].iloc[pos]]})
            parts.append(part)
        cells.append(pd.concat(parts, ignore_index=True))
    return nested(cells, index)


def _check_rows(values: np.ndarray, n_rows: int, type: PredictionType) -> None:
    if len(values) != n_rows:
        raise ConfigurationError(
            f"{type.value} output has {len(values)} values for {n_rows} rows"
        )
