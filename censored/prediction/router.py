#!filepath: censored/prediction/router.py
from __future__ import annotations

from typing import Any, Optional

import pandas as pd

from censored import logs
from censored.config import AppConfig
from censored.fitting.fitted_model import FittedModel
from censored.prediction.context import build_context, coerce_type
from censored.prediction.multi import expand
from censored.prediction.single import predict_one
from censored.registry.recipes import EngineKind, PredictionType
from censored.registry.registry import EngineRegistry
from censored.utils.errors import InvalidArgumentError


def predict(
    fitted: FittedModel,
    new_data: pd.DataFrame,
    type: PredictionType | str = "time",
    *,
    time: Any = None,
    quantile: Any = None,
    penalty: Any = None,
    multi: bool = False,
    registry: Optional[EngineRegistry] = None,
    config: Optional[AppConfig] = None,
) -> pd.DataFrame:
    """
    Standardized predictions from a fitted model.

    type:
        time         -> `.pred_time`
        linear_pred  -> `.pred_linear_pred` (larger = longer survival)
        survival     -> `.pred` tables (.time, .pred_survival), needs `time`
        hazard       -> `.pred` tables (.time, .pred_hazard), needs `time`
        quantile     -> `.pred` tables (.quantile, .pred_quantile), needs `quantile`

    penalty selects the strength of a path fit; multi=True returns every
    requested strength (see multi_predict).

    One output row per input row, index preserved. The fitted model is
    never modified.
    """
    fitted.check()
    ptype = coerce_type(type)

    if registry is None:
        from censored.registry.defaults import default_registry

        registry = default_registry()
    recipe = registry.lookup_pred(fitted.family, fitted.engine, ptype)

    ctx = build_context(fitted, ptype, new_data, time=time, quantile=quantile)
    logs.debug(
        f"[Predict] {fitted.family}/{fitted.engine} type={ptype.value} "
        f"rows={ctx.n_rows} multi={multi}"
    )

    if multi:
        if fitted.kind is not EngineKind.PATH:
            raise InvalidArgumentError(
                "multi",
                f"engine '{fitted.engine}' has no regularization path",
            )
        return expand(recipe, ctx, penalty, config=config)

    return predict_one(recipe, ctx, penalty=penalty)
