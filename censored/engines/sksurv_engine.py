# censored/engines/sksurv_engine.py
"""
Native adapters around scikit-survival estimators.

CoxnetSurvivalAnalysis fits a whole regularization path in one call; its
fit adapter embeds the training copy (`training_data_`) needed to re-query
the path at strengths without a stored baseline model.
"""
from __future__ import annotations

from typing import Any, Optional, Sequence

import numpy as np
import pandas as pd
from sksurv.linear_model import CoxnetSurvivalAnalysis, CoxPHSurvivalAnalysis
from sksurv.linear_model.coxph import BreslowEstimator
from sksurv.util import Surv


def make_outcome(time: Sequence[float], event: Sequence[Any]) -> np.ndarray:
    return Surv.from_arrays(
        event=np.asarray(event).astype(bool),
        time=np.asarray(time, dtype=float),
    )


# ======================================================================
# Fit
# ======================================================================
def coxph_fit(x: pd.DataFrame, y: np.ndarray, alpha: float = 0.0, **kwargs: Any):
    return CoxPHSurvivalAnalysis(alpha=alpha, **kwargs).fit(x, y)


def coxnet_fit(
    x: pd.DataFrame,
    y: np.ndarray,
    l1_ratio: float = 0.5,
    alphas: Optional[Sequence[float]] = None,
    fit_baseline_model: bool = True,
    **kwargs: Any,
) -> CoxnetSurvivalAnalysis:
    if alphas is not None:
        # path is traversed from the strongest penalty down
        alphas = np.sort(np.atleast_1d(np.asarray(alphas, dtype=float)))[::-1]

    model = CoxnetSurvivalAnalysis(
        l1_ratio=l1_ratio,
        alphas=alphas,
        fit_baseline_model=fit_baseline_model,
        **kwargs,
    ).fit(x, y)

    model.training_data_ = (x.copy(), y.copy())
    return model


# ======================================================================
# Predict
# ======================================================================
def step_values(functions, eval_time: np.ndarray, before: float) -> np.ndarray:
    """
    Evaluate sksurv StepFunctions at `eval_time` (rows x times).
    Times before the first jump take `before`.
    """
    out = np.empty((len(functions), len(eval_time)), dtype=float)
    for i, fn in enumerate(functions):
        idx = np.searchsorted(fn.x, eval_time, side="right") - 1
        values = fn.a * fn.y[np.clip(idx, 0, None)] + fn.b
        out[i] = np.where(idx < 0, before, values)
    return out


def coxph_survival(model, x: pd.DataFrame, eval_time: np.ndarray) -> np.ndarray:
    return step_values(model.predict_survival_function(x), eval_time, before=1.0)


def coxnet_predict_path(model, x: pd.DataFrame, alphas) -> np.ndarray:
    """
    Risk scores along the path: one column per strength (rows x strengths).
    """
    alphas = np.atleast_1d(np.asarray(alphas, dtype=float))
    return np.column_stack([model.predict(x, alpha=float(a)) for a in alphas])


def coxnet_survival(
    model,
    x: pd.DataFrame,
    eval_time: np.ndarray,
    alpha: float,
    training,
) -> np.ndarray:
    alpha = float(alpha)
    trained = np.isclose(alpha, model.alphas_)
    if model.fit_baseline_model and trained.any():
        # baseline models are keyed by the exact trained value
        alpha = float(model.alphas_[np.argmax(trained)])
        functions = model.predict_survival_function(x, alpha=alpha)
    else:
        # no baseline stored for this strength: re-estimate it on the training copy
        x_train, y_train = training
        event_field, time_field = y_train.dtype.names
        breslow = BreslowEstimator().fit(
            model.predict(x_train, alpha=alpha),
            y_train[event_field],
            y_train[time_field],
        )
        functions = breslow.get_survival_function(model.predict(x, alpha=alpha))
    return step_values(functions, eval_time, before=1.0)
