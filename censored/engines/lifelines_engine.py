# censored/engines/lifelines_engine.py
"""
Native adapters around lifelines fitters.

Fit adapters build + fit a fitter from the encoded frame; prediction
adapters return lifelines' own shapes (Series / time x row frames) and
leave normalization to the prediction layer.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

import numpy as np
import pandas as pd
from lifelines import (
    CoxPHFitter,
    LogLogisticAFTFitter,
    LogNormalAFTFitter,
    WeibullAFTFitter,
)

AFT_FITTERS = {
    "weibull": WeibullAFTFitter,
    "lognormal": LogNormalAFTFitter,
    "loglogistic": LogLogisticAFTFitter,
}

# location parameter of each AFT family (carries the covariate effects)
_LOCATION_PARAM = {
    WeibullAFTFitter: "lambda_",
    LogNormalAFTFitter: "mu_",
    LogLogisticAFTFitter: "alpha_",
}


# ======================================================================
# Fit
# ======================================================================
def coxph_fit(
    data: pd.DataFrame,
    duration_col: str,
    event_col: str,
    penalizer: float = 0.0,
    l1_ratio: float = 0.0,
    fit_options: Optional[Mapping[str, Any]] = None,
    **init_kwargs: Any,
) -> CoxPHFitter:
    fitter = CoxPHFitter(penalizer=penalizer, l1_ratio=l1_ratio, **init_kwargs)
    return fitter.fit(
        data,
        duration_col=duration_col,
        event_col=event_col,
        **dict(fit_options or {}),
    )


def aft_fit(
    data: pd.DataFrame,
    duration_col: str,
    event_col: str,
    dist: str = "weibull",
    fit_options: Optional[Mapping[str, Any]] = None,
    **init_kwargs: Any,
):
    if dist not in AFT_FITTERS:
        raise ValueError(
            f"Unknown distribution '{dist}'. Available: {sorted(AFT_FITTERS)}"
        )
    fitter = AFT_FITTERS[dist](**init_kwargs)
    return fitter.fit(
        data,
        duration_col=duration_col,
        event_col=event_col,
        **dict(fit_options or {}),
    )


# ======================================================================
# Predict
# ======================================================================
def percentiles(model, new_data: pd.DataFrame, p: np.ndarray) -> np.ndarray:
    """
    Times at which survival drops to each level in `p` (rows x levels).
    """
    columns = [
        np.asarray(model.predict_percentile(new_data, p=float(level)), dtype=float).reshape(-1)
        for level in p
    ]
    return np.column_stack(columns)


def aft_linear_predictor(model, new_data: pd.DataFrame) -> np.ndarray:
    """
    Location-parameter linear predictor of an AFT fit (log time scale).
    """
    param = _LOCATION_PARAM[type(model)]
    coef = model.params_.loc[param]
    intercept = float(coef["Intercept"]) if "Intercept" in coef.index else 0.0
    slopes = coef.drop("Intercept", errors="ignore")
    x = new_data.reindex(columns=slopes.index).to_numpy(dtype=float)
    return x @ slopes.to_numpy(dtype=float) + intercept
